"""Pydantic schemas for catalog entries, submissions, and usage reports.

Serialized field names are camelCase (``socialLinks``, ``builtWith``,
``videoUrl``, ``uploadedAt``); Python attributes stay snake_case. Optional
fields that are absent are ``None`` and are dropped with
``exclude_none=True`` so they never appear as empty strings.

Examples:
    >>> entry = NewWebsiteEntry(name="Acme", url="https://acme.dev", built_with="Next.js")
    >>> entry.model_dump(by_alias=True, exclude_none=True)["builtWith"]
    'Next.js'
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SocialLinks(CamelModel):
    """Full profile URLs; a network is present only if a handle was given."""

    twitter: str | None = None
    instagram: str | None = None


class NewWebsiteEntry(CamelModel):
    """A website entry before the catalog assigns its id and timestamp."""

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    categories: list[str] = Field(default_factory=list)
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    built_with: str = ""
    other_technologies: str | None = None
    video_url: str | None = None


class WebsiteEntry(NewWebsiteEntry):
    """A persisted website entry."""

    id: str
    uploaded_at: datetime


class WebsiteSubmission(CamelModel):
    """Raw operator input for a new entry.

    ``categories`` is the comma-separated string as typed; ``twitter`` and
    ``instagram`` are bare handles.
    """

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    categories: str = ""
    twitter: str = ""
    instagram: str = ""
    built_with: str = ""
    other_technologies: str = ""

    @field_validator("name", "url", mode="before")
    @classmethod
    def strip_required(cls, v: object) -> object:
        """Whitespace-only name or url counts as empty."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("twitter", "instagram", "other_technologies", mode="before")
    @classmethod
    def none_to_empty(cls, v: object) -> object:
        """Missing optional text is the same as an empty string."""
        if v is None:
            return ""
        return v


class VideoUpload(BaseModel):
    """A demo video attached to a submission."""

    filename: str = Field(..., min_length=1)
    content_type: str = "application/octet-stream"
    data: bytes = Field(..., repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


class FolderUsage(CamelModel):
    """Estimated usage of one storage folder."""

    count: int = Field(default=0, ge=0)
    size: int = Field(default=0, ge=0)


class StorageUsageReport(CamelModel):
    """Aggregate estimated storage usage.

    Attributes:
        file_count: Objects counted across all folders.
        total_size: Estimated bytes across all folders.
        folders: Per-folder breakdown, in the order the folders were requested.
        degraded_folders: Folders whose listing failed and count as zero.
        quota_bytes: Provider quota the usage is measured against.
    """

    file_count: int = Field(default=0, ge=0)
    total_size: int = Field(default=0, ge=0)
    folders: dict[str, FolderUsage] = Field(default_factory=dict)
    degraded_folders: list[str] = Field(default_factory=list)
    quota_bytes: int | None = None

    @computed_field(alias="usagePercent")
    @property
    def usage_percent(self) -> float | None:
        """Share of the quota used, in percent (2 decimals)."""
        if not self.quota_bytes:
            return None
        return round(self.total_size / self.quota_bytes * 100, 2)
