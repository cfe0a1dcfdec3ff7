"""SQLAlchemy models for the showcase catalog.

Examples:
    >>> from showcase.models import WebsiteRecord
    >>> record = WebsiteRecord(id="...", name="Acme", url="https://acme.dev", ...)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from showcase.schemas import SocialLinks, WebsiteEntry


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


class WebsiteRecord(Base):
    """A stored website entry.

    Attributes:
        seq: Insertion sequence, breaks ties between equal timestamps
        id: Public identifier (UUID4), assigned on creation
        name: Website name
        url: Website URL
        categories: Parsed category list
        social_links: Profile URLs keyed by network, only supplied ones
        built_with: Free-text stack description
        other_technologies: Optional free text
        video_url: CDN URL of the demo video, if one was attached
        uploaded_at: Server-side creation time (UTC)
    """

    __tablename__ = "websites"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    categories: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    social_links: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    built_with: Mapped[str] = mapped_column(Text, nullable=False, default="")
    other_technologies: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<WebsiteRecord(id={self.id}, name={self.name!r})>"

    def to_entry(self) -> WebsiteEntry:
        """Convert to the public WebsiteEntry schema."""
        uploaded_at = self.uploaded_at
        # SQLite drops the offset; stored values are always UTC
        if uploaded_at.tzinfo is None:
            uploaded_at = uploaded_at.replace(tzinfo=timezone.utc)
        return WebsiteEntry(
            id=self.id,
            name=self.name,
            url=self.url,
            categories=list(self.categories or []),
            social_links=SocialLinks(**(self.social_links or {})),
            built_with=self.built_with or "",
            other_technologies=self.other_technologies,
            video_url=self.video_url,
            uploaded_at=uploaded_at,
        )
