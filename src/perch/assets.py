"""Static asset cache for the bundled documentation viewer.

Assets are read lazily, on the first request that resolves to them, and
kept for the lifetime of the process: the viewer distribution is a
versioned, read-only directory, so entries are never invalidated.

Population is an insert-if-absent. Two requests for the same uncached
file may both read it (they interleave at the disk read), but the first
stored entry wins and both callers receive it.
"""

import logging
import mimetypes
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

import anyio

from perch._internal.hashing import hash_data
from perch.errors import ConfigurationError

logger = logging.getLogger("perch.server")

FALLBACK_MIME_TYPE = "application/octet-stream"

FileReader = Callable[[Path], Awaitable[bytes]]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """One previously served static file."""

    content: bytes
    hash: str
    mime_type: str


async def read_file(path: Path) -> bytes:
    """Read a whole file without blocking the event loop."""
    return await anyio.Path(path).read_bytes()


def guess_mime_type(path: Path) -> str:
    """MIME type from the file extension, or the generic binary type."""
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or FALLBACK_MIME_TYPE


def default_static_dir() -> Path:
    """Directory of the bundled Swagger UI distribution."""
    from swagger_ui_bundle import swagger_ui_path

    return Path(swagger_ui_path)


class StaticAssetCache:
    """Process-lifetime cache of files below one asset root.

    Usage::

        cache = StaticAssetCache(default_static_dir())
        entry = await cache.get(cache.resolve("/swagger-ui.css"))
        if entry is None:
            ...  # 404
    """

    __slots__ = ("_entries", "_read", "_root")

    def __init__(self, root: str | Path, *, reader: FileReader = read_file) -> None:
        resolved = Path(root).resolve()
        if not resolved.is_dir():
            msg = f"Static asset directory {resolved} does not exist or is not a directory."
            raise ConfigurationError(msg)
        self._root = resolved
        self._read = reader
        self._entries: dict[Path, CacheEntry] = {}

    @property
    def root(self) -> Path:
        return self._root

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def resolve(self, sub_path: str) -> Path | None:
        """Resolve a request sub-path (``/css/app.css``) against the root.

        The result may lie outside the root; ``get()`` rejects such paths.
        ``None`` means the sub-path is not a usable file name at all (an
        embedded NUL byte, a component longer than the file system allows).
        """
        try:
            return (self._root / sub_path.lstrip("/")).resolve()
        except (OSError, ValueError):
            logger.debug("Unresolvable static path: %r", sub_path)
            return None

    def is_inside(self, path: Path) -> bool:
        """True if *path* is a strict descendant of the asset root."""
        return path != self._root and path.is_relative_to(self._root)

    async def get(self, path: Path | None) -> CacheEntry | None:
        """Return the entry for a resolved path, populating it on first use.

        Returns ``None`` for an unresolvable path, one that escapes the asset
        root, and one that is missing or not a regular file. Misses are not
        cached.
        """
        if path is None:
            return None
        entry = self._entries.get(path)
        if entry is not None:
            return entry

        if not self.is_inside(path):
            logger.debug("Rejected static path outside %s: %s", self._root, path)
            return None
        try:
            if not await anyio.Path(path).is_file():
                return None
        except (OSError, ValueError):
            logger.debug("Unreadable static path: %r", path)
            return None

        content = await self._read(path)
        entry = CacheEntry(
            content=content,
            hash=hash_data(content),
            mime_type=guess_mime_type(path),
        )
        return self._entries.setdefault(path, entry)
