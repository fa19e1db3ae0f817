"""Immutable HTTP request.

The router only looks at the method, the path and a handful of headers,
so the request carries no body access.
"""

from dataclasses import dataclass, field
from typing import Any

from perch.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request built from an ASGI scope."""

    method: str
    path: str
    query_string: str = ""
    headers: Headers = field(default_factory=Headers)

    @property
    def url(self) -> str:
        """Request path plus query string, as sent by the client."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @property
    def if_none_match(self) -> frozenset[str]:
        """Entity tags listed in ``If-None-Match`` (weak prefixes dropped)."""
        tags: set[str] = set()
        for value in self.headers.get_list("if-none-match"):
            for tag in value.split(","):
                tag = tag.strip()
                if tag.startswith("W/"):
                    tag = tag[2:]
                if tag:
                    tags.add(tag)
        return frozenset(tags)

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> "Request":
        """Create a Request from an ASGI HTTP scope."""
        return cls(
            method=scope.get("method", "GET").upper(),
            path=scope.get("path", "") or "",
            query_string=scope.get("query_string", b"").decode("latin-1"),
            headers=Headers(tuple(scope.get("headers", ()))),
        )
