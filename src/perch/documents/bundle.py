"""Document bundles and the registry of mounted documents.

A bundle is built once at startup and never mutated afterwards. The
registry maps mount names to bundles; the empty name mounts a document
at the server root.
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from perch._internal.hashing import hash_data
from perch.config import ServerConfig
from perch.documents.formats import EXPORT_FORMATS, encode
from perch.errors import ConfigurationError

DEFAULT_FILE_NAME = "swagger"

_ILLEGAL_CHARS = re.compile(r'[/\\?<>:*|"]')
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x80-\x9f]")
_RESERVED_NAMES = re.compile(r"^\.+$")
_WINDOWS_RESERVED = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_WINDOWS_TRAILING = re.compile(r"[. ]+$")


def safe_filename(name: str, *, fallback: str = DEFAULT_FILE_NAME) -> str:
    """Make *name* usable as a download file name.

    Removes path separators and characters that are illegal on common
    file systems, control characters, ``.``/``..``, Windows device names
    and trailing dots or spaces, then truncates to 255 UTF-8 bytes.
    An empty result falls back to *fallback*.
    """
    cleaned = _ILLEGAL_CHARS.sub("", name.strip())
    cleaned = _CONTROL_CHARS.sub("", cleaned)
    cleaned = _RESERVED_NAMES.sub("", cleaned)
    cleaned = _WINDOWS_RESERVED.sub("", cleaned)
    cleaned = _WINDOWS_TRAILING.sub("", cleaned)
    cleaned = cleaned.encode("utf-8")[:255].decode("utf-8", errors="ignore")
    return cleaned or fallback


@dataclass(frozen=True, slots=True)
class DocumentBundle:
    """One loaded API description, ready to serve.

    ``json``, ``yaml`` and ``toml`` hold the pre-encoded download bodies;
    ``None`` means the download is not offered. ``hashes`` holds the
    content fingerprint of every present buffer, keyed by format.
    """

    name: str
    file_name: str
    document: Mapping[str, Any]
    json: bytes | None = None
    yaml: bytes | None = None
    toml: bytes | None = None
    hashes: Mapping[str, str] = field(default_factory=dict)

    def export(self, fmt: str) -> bytes | None:
        """The pre-encoded buffer for *fmt*, or ``None`` if disabled."""
        if fmt not in EXPORT_FORMATS:
            return None
        return getattr(self, fmt)

    @property
    def mount_path(self) -> str:
        """URL prefix of this bundle (``/`` for the root mount)."""
        return "/" + self.name


def build_bundle(
    document: Mapping[str, Any],
    config: ServerConfig | None = None,
    *,
    name: str = "",
    file_name: str = "",
    source: str = "<document>",
) -> DocumentBundle:
    """Pre-encode *document* into a bundle.

    Formats disabled in *config* (``export_json`` and friends) are left
    out. Encoder failures propagate as ``InvalidDocument``.
    """
    config = config or ServerConfig()
    enabled = {
        "json": config.export_json,
        "yaml": config.export_yaml,
        "toml": config.export_toml,
    }
    buffers: dict[str, bytes | None] = {}
    hashes: dict[str, str] = {}
    for fmt in EXPORT_FORMATS:
        if not enabled[fmt]:
            buffers[fmt] = None
            continue
        data = encode(document, fmt, source=source)
        buffers[fmt] = data
        hashes[fmt] = hash_data(data)

    return DocumentBundle(
        name=name,
        file_name=safe_filename(file_name),
        document=document,
        hashes=hashes,
        **buffers,
    )


class DocumentRegistry(Mapping[str, DocumentBundle]):
    """Read-only mapping of mount name to bundle, in registration order.

    An empty registry is valid: it simply never claims a request.
    """

    __slots__ = ("_bundles",)

    def __init__(self, bundles: Iterable[DocumentBundle] = ()) -> None:
        registered: dict[str, DocumentBundle] = {}
        for bundle in bundles:
            if bundle.name in registered:
                msg = f"Duplicate document mount {bundle.mount_path!r}."
                raise ConfigurationError(msg)
            registered[bundle.name] = bundle
        self._bundles = registered

    def __getitem__(self, name: str) -> DocumentBundle:
        return self._bundles[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bundles)

    def __len__(self) -> int:
        return len(self._bundles)

    def __repr__(self) -> str:
        return f"DocumentRegistry({list(self._bundles)!r})"
