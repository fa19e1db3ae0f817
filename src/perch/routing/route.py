"""Route and MountMatch frozen dataclasses."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from perch.documents.bundle import DocumentBundle
from perch.http.request import Request
from perch.http.response import Response


@dataclass(frozen=True, slots=True)
class MountMatch:
    """A request claimed by one document mount.

    ``relative_path`` is the normalized remainder after the mount prefix
    (``/`` for the mount itself).
    """

    request: Request
    name: str
    bundle: DocumentBundle
    relative_path: str

    @property
    def base_path(self) -> str:
        return "/" + self.name


@dataclass(frozen=True, slots=True)
class Route:
    """A response strategy guarded by a match predicate.

    Routes are tried in order; the first whose ``matches`` returns True
    produces the response.
    """

    name: str
    matches: Callable[[MountMatch], bool]
    respond: Callable[[MountMatch], Awaitable[Response]]


def exact(*paths: str) -> Callable[[MountMatch], bool]:
    """Predicate: relative path equals one of *paths*."""
    wanted = frozenset(paths)
    return lambda match: match.relative_path in wanted


def prefix(path: str) -> Callable[[MountMatch], bool]:
    """Predicate: relative path starts with *path*."""
    return lambda match: match.relative_path.startswith(path)
