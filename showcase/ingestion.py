"""Ingestion orchestrator: optionally upload a video, then persist the entry.

Each submission runs through a small state machine:

    idle -> video_uploading -> persisting -> done
    idle -> persisting -> done
    video_uploading | persisting -> failed

A failed upload never reaches the catalog, so no entry can reference a
missing video. A failed write after a successful upload leaves the video
blob orphaned; it is logged and the error is raised unchanged.

Examples:
    >>> orchestrator = IngestionOrchestrator(uploader, catalog)
    >>> submission = await orchestrator.submit(
    ...     WebsiteSubmission(name="Acme", url="https://acme.dev", categories="saas, ai"),
    ...     video=VideoUpload(filename="demo.mp4", content_type="video/mp4", data=data),
    ... )
    >>> submission.state
    <SubmissionState.DONE: 'done'>

Tests:
    - tests/unit/test_ingestion.py
"""

from __future__ import annotations

import logging
from enum import Enum

from showcase.catalog import CatalogStore
from showcase.errors import ValidationFailure
from showcase.schemas import NewWebsiteEntry, SocialLinks, VideoUpload, WebsiteSubmission
from showcase.storage.uploader import StoredVideo, VideoUploader

logger = logging.getLogger(__name__)

SOCIAL_PROFILE_URLS: dict[str, str] = {
    "twitter": "https://twitter.com/{handle}",
    "instagram": "https://instagram.com/{handle}",
}


class SubmissionState(str, Enum):
    """Lifecycle of a single submission.

    States:
        IDLE: Not started
        VIDEO_UPLOADING: Uploading the attached video
        PERSISTING: Writing the catalog entry
        DONE: Entry created
        FAILED: Upload or write failed
    """

    IDLE = "idle"
    VIDEO_UPLOADING = "video_uploading"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: dict[SubmissionState, frozenset[SubmissionState]] = {
    SubmissionState.IDLE: frozenset({SubmissionState.VIDEO_UPLOADING, SubmissionState.PERSISTING}),
    SubmissionState.VIDEO_UPLOADING: frozenset({SubmissionState.PERSISTING, SubmissionState.FAILED}),
    SubmissionState.PERSISTING: frozenset({SubmissionState.DONE, SubmissionState.FAILED}),
    SubmissionState.DONE: frozenset(),
    SubmissionState.FAILED: frozenset(),
}


def parse_categories(raw: str) -> list[str]:
    """Split comma-separated categories, trimming and dropping empties.

    Examples:
        >>> parse_categories("portfolio, , blog ,")
        ['portfolio', 'blog']
    """
    return [part.strip() for part in raw.split(",") if part.strip()]


def expand_social_handle(network: str, handle: str) -> str | None:
    """Expand a bare handle to its profile URL, or None when no handle was given.

    Examples:
        >>> expand_social_handle("twitter", "alice")
        'https://twitter.com/alice'
        >>> expand_social_handle("twitter", "") is None
        True
    """
    handle = handle.strip()
    if not handle:
        return None
    try:
        template = SOCIAL_PROFILE_URLS[network]
    except KeyError:
        raise ValueError(f"Unknown social network: {network}") from None
    return template.format(handle=handle)


def build_entry(submission: WebsiteSubmission, video_url: str | None = None) -> NewWebsiteEntry:
    """Assemble the catalog entry for a submission.

    Optional fields are set only when they carry a value.
    """
    other = submission.other_technologies.strip()
    return NewWebsiteEntry(
        name=submission.name,
        url=submission.url,
        categories=parse_categories(submission.categories),
        social_links=SocialLinks(
            twitter=expand_social_handle("twitter", submission.twitter),
            instagram=expand_social_handle("instagram", submission.instagram),
        ),
        built_with=submission.built_with,
        other_technologies=other or None,
        video_url=video_url,
    )


def validate_video(video: VideoUpload, max_bytes: int) -> None:
    """Check a video before it is handed to the orchestrator.

    Raises:
        ValidationFailure: If the file is not a video or is too large.
    """
    if not video.content_type.startswith("video/"):
        raise ValidationFailure(
            f"Please select a valid video file (got {video.content_type!r})"
        )
    check_video_size(video.size, max_bytes)


def check_video_size(size: int, max_bytes: int) -> None:
    """Reject a video larger than max_bytes.

    Raises:
        ValidationFailure: If the video is too large.
    """
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ValidationFailure(f"Video file must be smaller than {limit_mb}MB")


class Submission:
    """One run through the ingestion state machine.

    Attributes:
        form: Operator input.
        video: Attached video, at most one.
        state: Current state.
        history: Every state visited, in order.
        entry_id: Id of the created entry once DONE.
        stored_video: Where the video landed, once uploaded.
        error: The failure that ended the run, if any.
    """

    def __init__(self, form: WebsiteSubmission, video: VideoUpload | None = None) -> None:
        self.form = form
        self.video = video
        self.state = SubmissionState.IDLE
        self.history: list[SubmissionState] = [SubmissionState.IDLE]
        self.entry_id: str | None = None
        self.stored_video: StoredVideo | None = None
        self.error: Exception | None = None

    def transition(self, new_state: SubmissionState) -> None:
        """Move to a new state.

        Raises:
            ValueError: If the transition is not allowed.
        """
        if new_state not in _TRANSITIONS[self.state]:
            raise ValueError(f"Illegal submission transition: {self.state.value} -> {new_state.value}")
        logger.debug(f"Submission {self.form.name!r}: {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    @property
    def video_url(self) -> str | None:
        return self.stored_video.public_url if self.stored_video else None


class IngestionOrchestrator:
    """Sequences video upload and catalog write for submissions.

    Attributes:
        uploader: Video uploader.
        catalog: Catalog store.
    """

    def __init__(self, uploader: VideoUploader, catalog: CatalogStore) -> None:
        self.uploader = uploader
        self.catalog = catalog

    async def submit(
        self,
        form: WebsiteSubmission,
        video: VideoUpload | None = None,
    ) -> Submission:
        """Create and run a submission.

        Returns:
            The finished Submission (state DONE).

        Raises:
            IngestionFailure: If the video upload failed (nothing persisted).
            PersistenceFailure: If the catalog write failed.

        Any other error also ends the submission in FAILED and is re-raised.
        """
        submission = Submission(form, video)
        await self.run(submission)
        return submission

    async def run(self, submission: Submission) -> str:
        """Drive a submission to DONE or FAILED.

        Returns:
            The new entry id.
        """
        if submission.state != SubmissionState.IDLE:
            raise ValueError(f"Submission already ran (state={submission.state.value})")

        if submission.video is not None:
            submission.transition(SubmissionState.VIDEO_UPLOADING)
            try:
                submission.stored_video = await self.uploader.upload(
                    submission.video.filename,
                    submission.video.data,
                    content_type=submission.video.content_type,
                )
            except Exception as e:
                self._fail(submission, e)
                raise

        submission.transition(SubmissionState.PERSISTING)

        try:
            entry = build_entry(submission.form, video_url=submission.video_url)
            entry_id = await self.catalog.create(entry)
        except Exception as e:
            self._fail(submission, e)
            raise

        submission.entry_id = entry_id
        submission.transition(SubmissionState.DONE)
        logger.info(f"Submission {submission.form.name!r} stored as {entry_id}")
        return entry_id

    def _fail(self, submission: Submission, error: Exception) -> None:
        """Record the error and end the run in FAILED."""
        submission.error = error
        submission.transition(SubmissionState.FAILED)
        logger.error(f"Submission {submission.form.name!r} failed: {error}")
        if submission.stored_video is not None:
            logger.warning(
                f"Catalog write failed; video left orphaned at "
                f"{submission.stored_video.storage_key}"
            )
