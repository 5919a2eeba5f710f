"""MIME type resolution for uploaded images."""

from __future__ import annotations

from typing import Optional

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"
GENERIC_MIME_TYPE = "application/octet-stream"

_EXTENSION_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def resolve_mime_type(content_type: Optional[str], filename: Optional[str]) -> str:
    """Determine the MIME type to send alongside image bytes.

    The declared content type wins unless it is missing or the generic
    ``application/octet-stream``; then the filename extension is checked
    case-insensitively. Falls back to ``image/jpeg``.

    Args:
        content_type: Content type declared by the uploader
        filename: Original filename, if any

    Returns:
        MIME type string

    Example:
        >>> resolve_mime_type(None, "photo.PNG")
        'image/png'
        >>> resolve_mime_type("application/octet-stream", "x.jpeg")
        'image/jpeg'
        >>> resolve_mime_type(None, None)
        'image/jpeg'
    """
    declared = (content_type or "").strip()
    if declared and declared.lower() != GENERIC_MIME_TYPE:
        return declared

    if filename:
        lowered = filename.lower()
        for extension, mime_type in _EXTENSION_MIME_TYPES.items():
            if lowered.endswith(extension):
                return mime_type

    return DEFAULT_IMAGE_MIME_TYPE
