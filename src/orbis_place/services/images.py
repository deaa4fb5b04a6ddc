"""Image payload inspection for profile uploads."""

from __future__ import annotations

from dataclasses import dataclass

from orbis_place.core.errors import ProfileValidationError, UnsupportedMediaError
from orbis_place.core.settings import settings

# content type -> (file extension, leading magic bytes)
_SIGNATURES: dict[str, tuple[str, tuple[bytes, ...]]] = {
    "image/png": (".png", (b"\x89PNG\r\n\x1a\n",)),
    "image/jpeg": (".jpg", (b"\xff\xd8\xff",)),
    "image/gif": (".gif", (b"GIF87a", b"GIF89a")),
    "image/webp": (".webp", (b"RIFF",)),
}


@dataclass(frozen=True)
class ImageUpload:
    """A single uploaded file as received from the client."""

    filename: str | None
    content_type: str | None
    data: bytes


def sniff_content_type(data: bytes) -> str | None:
    """Return the image content type matching the payload's magic bytes."""
    for content_type, (_, signatures) in _SIGNATURES.items():
        if any(data.startswith(sig) for sig in signatures):
            if content_type == "image/webp" and data[8:12] != b"WEBP":
                continue
            return content_type
    return None


def validate_image(upload: ImageUpload) -> tuple[str, str]:
    """Check an upload and return ``(content_type, extension)``.

    Raises:
        ProfileValidationError: If the payload is empty or too large.
        UnsupportedMediaError: If the payload is not an accepted image.
    """
    if not upload.data:
        raise ProfileValidationError("Uploaded image is empty")
    if len(upload.data) > settings.max_image_bytes:
        raise ProfileValidationError(
            f"Image exceeds the {settings.max_image_bytes // (1024 * 1024)} MB limit"
        )

    declared = (upload.content_type or "").split(";", 1)[0].strip().lower()
    if declared not in settings.allowed_image_types:
        raise UnsupportedMediaError(
            f"Unsupported image type {declared or 'unknown'!r}; "
            f"expected one of {', '.join(settings.allowed_image_types)}"
        )

    sniffed = sniff_content_type(upload.data)
    if sniffed is None or sniffed not in settings.allowed_image_types:
        raise UnsupportedMediaError("Uploaded file is not a valid image")

    return sniffed, _SIGNATURES[sniffed][0]
