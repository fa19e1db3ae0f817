"""Perch exception hierarchy.

Startup-time failures (bad configuration, unreadable or undecodable
documents) derive from ``PerchError`` so the CLI can turn any of them
into a single-line message. Per-request failures never surface as these
types: the request handler answers them with 404 or 500 itself.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when the server configuration is invalid.

    Typically raised while a ``DocsServer`` is being constructed.
    """


@dataclass(frozen=True, slots=True)
class DocumentError(PerchError):
    """A document could not be acquired, decoded or prepared.

    ``source`` names the file path or URL the document came from.
    """

    source: str
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.source}: {self.detail}"
        return self.source


class DocumentNotFound(DocumentError):  # noqa: N818
    """The local document path does not exist or is not a regular file."""

    def __init__(self, source: str, detail: str = "is no file") -> None:
        super().__init__(source=source, detail=detail)


class UnsupportedFormat(DocumentError):  # noqa: N818
    """No decoder matches the document's extension or content type."""

    def __init__(
        self,
        source: str,
        detail: str = "must be of one of the following types: json, toml, yaml, yml",
    ) -> None:
        super().__init__(source=source, detail=detail)


class InvalidDocument(DocumentError):  # noqa: N818
    """The decoded document is unusable (not a plain mapping, encoder failure)."""


class FetchError(DocumentError):
    """Downloading a remote document failed."""
