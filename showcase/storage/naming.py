"""Blob key naming and public URL derivation for uploaded videos.

Keys are collision-free: each upload gets a fresh UUID4 token ahead of the
sanitized original file name.

Format: videos/{token}_{sanitized_name}

The public URL is built by putting the CDN host in front of the same path.
The provider's own download URL is never consulted.

Examples:
    >>> from showcase.storage.naming import sanitize_filename, build_cdn_url
    >>> sanitize_filename("My Video (1).mp4")
    'My_Video__1_.mp4'
    >>> build_cdn_url("0b8e", "clip.mp4", "cdn.gridrr.com")
    'https://cdn.gridrr.com/videos/0b8e_clip.mp4'
"""

from __future__ import annotations

import re
import uuid

from showcase.storage.config import VIDEO_PREFIX

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace every character outside [A-Za-z0-9._-] with an underscore.

    One character in, one character out, so length and extension survive.

    Args:
        filename: Original file name as supplied by the operator.

    Returns:
        Sanitized file name.
    """
    return _UNSAFE_CHARS.sub("_", filename)


def generate_token() -> str:
    """Generate a fresh random upload token (UUID4, canonical form)."""
    return str(uuid.uuid4())


def video_path(token: str, sanitized_name: str) -> str:
    """Path shared by the blob key and the CDN URL."""
    return f"{VIDEO_PREFIX}{token}_{sanitized_name}"


def build_cdn_url(token: str, sanitized_name: str, cdn_host: str) -> str:
    """Build the public URL for a stored video.

    Args:
        token: Upload token used in the blob key.
        sanitized_name: Sanitized file name used in the blob key.
        cdn_host: Bare CDN host name.

    Returns:
        https URL whose path mirrors the blob key exactly.
    """
    return f"https://{cdn_host}/{video_path(token, sanitized_name)}"


def generate_video_key(
    filename: str,
    token: str | None = None,
) -> tuple[str, str, str]:
    """Generate the blob key for an uploaded video.

    Args:
        filename: Original file name.
        token: Override token (defaults to a fresh UUID4).

    Returns:
        Tuple of (storage_key, token, sanitized_name).
    """
    if token is None:
        token = generate_token()
    sanitized = sanitize_filename(filename)
    return video_path(token, sanitized), token, sanitized
