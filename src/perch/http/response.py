"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Bodies are always bytes:
every strategy of the router serves pre-encoded buffers.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``content_type`` of ``None`` sends no ``Content-Type`` header at all,
    which is what the empty 404 and 500 answers use.
    """

    body: bytes = b""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    # -- Accessors --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first header named *name* (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return default

    @property
    def etag(self) -> str | None:
        """The ``ETag`` header, if set."""
        return self.header("ETag")

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")


def empty_response(status: int) -> Response:
    """A bodiless response with no content type (404, 500)."""
    return Response(status=status)
