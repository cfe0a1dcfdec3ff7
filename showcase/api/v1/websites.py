"""Website entry endpoints.

Endpoints:
    POST /api/v1/websites - Submit an entry (multipart form, optional video)
    GET /api/v1/websites - List entries, most recent first
    GET /api/v1/websites/{id} - Get one entry
    DELETE /api/v1/websites/{id} - Delete an entry (idempotent)

Examples:
    >>> # Submit with a video
    >>> POST /api/v1/websites  (form: name, url, categories, twitter, ..., video)
    >>> {"id": "...", "videoUrl": "https://cdn.gridrr.com/videos/..._demo.mp4"}

Tests:
    - tests/integration/test_api_websites.py
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import Field, ValidationError

from showcase.api.dependencies import get_app_settings, get_catalog, get_orchestrator
from showcase.catalog import CatalogStore
from showcase.config import Settings
from showcase.errors import ValidationFailure
from showcase.ingestion import IngestionOrchestrator, check_video_size, validate_video
from showcase.schemas import CamelModel, VideoUpload, WebsiteEntry, WebsiteSubmission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/websites", tags=["websites"])


# Request/Response Models


class SubmitResponse(CamelModel):
    """Response after creating an entry."""

    id: str
    video_url: str | None = None


class WebsiteListResponse(CamelModel):
    """All entries, most recent first."""

    items: list[WebsiteEntry] = Field(default_factory=list)
    total: int = 0


class DeleteResponse(CamelModel):
    """Response after deleting an entry."""

    id: str
    deleted: bool
    message: str


# Endpoints


@router.post(
    "",
    response_model=SubmitResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def submit_website(
    name: str = Form(...),
    url: str = Form(...),
    categories: str = Form(""),
    twitter: str = Form(""),
    instagram: str = Form(""),
    built_with: str = Form("", alias="builtWith"),
    other_technologies: str = Form("", alias="otherTechnologies"),
    video: UploadFile | None = File(None),
    settings: Settings = Depends(get_app_settings),
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> SubmitResponse:
    """Submit a website entry, uploading its demo video first if attached.

    Raises:
        ValidationFailure: Empty name/url, non-video file, or oversize video.
        IngestionFailure: The video upload failed; nothing was saved.
        PersistenceFailure: The entry could not be saved.
    """
    try:
        form = WebsiteSubmission(
            name=name,
            url=url,
            categories=categories,
            twitter=twitter,
            instagram=instagram,
            built_with=built_with,
            other_technologies=other_technologies,
        )
    except ValidationError as e:
        raise ValidationFailure(f"Invalid submission: {e.errors()[0]['msg']}") from e

    upload: VideoUpload | None = None
    if video is not None and video.filename:
        # Oversize uploads are rejected before they are read into memory.
        if video.size is not None:
            check_video_size(video.size, settings.MAX_VIDEO_BYTES)
        upload = VideoUpload(
            filename=video.filename,
            content_type=video.content_type or "application/octet-stream",
            data=await video.read(),
        )
        validate_video(upload, settings.MAX_VIDEO_BYTES)

    submission = await orchestrator.submit(form, video=upload)
    return SubmitResponse(id=submission.entry_id, video_url=submission.video_url)


@router.get("", response_model=WebsiteListResponse, response_model_exclude_none=True)
async def list_websites(
    catalog: CatalogStore = Depends(get_catalog),
) -> WebsiteListResponse:
    """List all entries, most recent first."""
    entries = await catalog.list()
    return WebsiteListResponse(items=entries, total=len(entries))


@router.get("/{website_id}", response_model=WebsiteEntry, response_model_exclude_none=True)
async def get_website(
    website_id: str,
    catalog: CatalogStore = Depends(get_catalog),
) -> WebsiteEntry:
    """Get one entry by id.

    Raises:
        HTTPException: If the entry does not exist
    """
    entry = await catalog.get(website_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Website not found")
    return entry


@router.delete("/{website_id}", response_model=DeleteResponse)
async def delete_website(
    website_id: str,
    catalog: CatalogStore = Depends(get_catalog),
) -> DeleteResponse:
    """Delete an entry. Deleting an unknown id succeeds and changes nothing."""
    await catalog.delete(website_id)
    return DeleteResponse(
        id=website_id,
        deleted=True,
        message=f"Website {website_id} deleted",
    )
