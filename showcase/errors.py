"""Error taxonomy for the showcase core.

Examples:
    >>> from showcase.errors import IngestionFailure
    >>> raise IngestionFailure("Failed to upload video: connection reset")
"""

from __future__ import annotations


class ShowcaseError(Exception):
    """Base class for all showcase errors."""


class ValidationFailure(ShowcaseError):
    """Input has the wrong shape (empty name, non-video file, oversize video).

    Raised by the caller before the core runs.
    """


class IngestionFailure(ShowcaseError):
    """A blob upload failed. No catalog entry is written."""


class PersistenceFailure(ShowcaseError):
    """The document store rejected or could not serve a request."""
