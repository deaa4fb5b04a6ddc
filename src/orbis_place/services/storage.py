"""Object storage for uploaded profile images.

Production deployments put a bucket/CDN behind the same interface; the
local backend below writes into ``settings.upload_dir`` and is served by the
app under ``settings.media_url_prefix``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from orbis_place.core.errors import UpstreamFailure
from orbis_place.core.settings import settings

logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """Minimal blob store used by the profile service."""

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key`` and return its public URL."""
        ...

    def delete(self, url: str) -> None:
        """Remove the object behind ``url``; missing objects are ignored."""
        ...

    def owns(self, url: str) -> bool:
        """Return True if ``url`` points at an object this store manages."""
        ...


class LocalObjectStorage:
    """Filesystem-backed storage rooted at a single directory."""

    def __init__(self, root: str | Path, url_prefix: str) -> None:
        self.root = Path(root).resolve()
        self.url_prefix = url_prefix.rstrip("/")

    def _path_for_key(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root):
            raise ValueError(f"Object key escapes storage root: {key!r}")
        return path

    def _key_for_url(self, url: str) -> str | None:
        prefix = f"{self.url_prefix}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix):]

    def put(self, key: str, data: bytes, content_type: str) -> str:
        path = self._path_for_key(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as err:
            raise UpstreamFailure(f"Failed to store object {key}") from err
        logger.debug("Stored %s (%s, %d bytes)", key, content_type, len(data))
        return f"{self.url_prefix}/{key}"

    def delete(self, url: str) -> None:
        key = self._key_for_url(url)
        if key is None:
            return
        path = self._path_for_key(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as err:
            raise UpstreamFailure(f"Failed to delete object {key}") from err
        logger.debug("Deleted %s", key)

    def owns(self, url: str) -> bool:
        key = self._key_for_url(url)
        if key is None:
            return False
        try:
            self._path_for_key(key)
        except ValueError:
            return False
        return True


def get_storage() -> ObjectStorage:
    """Return a storage backend for the configured upload directory."""
    return LocalObjectStorage(settings.upload_dir, settings.media_url_prefix)
