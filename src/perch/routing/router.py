"""Request router over the document registry.

For each mount, in registry order, the router checks whether the request
path starts with the mount prefix. The first mount that does claims the
request for good: its fixed routes are tried in priority order, then the
fallback (static assets). If nothing answers, the result is an empty 404;
later mounts are never consulted.
"""

import logging
import os
from collections.abc import Awaitable, Callable, Mapping, Sequence

from perch._internal.paths import normalize_path
from perch.documents.bundle import DocumentBundle
from perch.http.request import Request
from perch.http.response import Response, empty_response
from perch.routing.route import MountMatch, Route

logger = logging.getLogger("perch.server")

Fallback = Callable[[MountMatch], Awaitable[Response | None]]


async def _no_fallback(match: MountMatch) -> Response | None:
    return None


class Router:
    """Dispatches requests to the route table of the claiming mount."""

    __slots__ = ("_fallback", "_registry", "_routes", "_sep")

    def __init__(
        self,
        registry: Mapping[str, DocumentBundle],
        routes: Sequence[Route],
        *,
        fallback: Fallback = _no_fallback,
        sep: str = os.sep,
    ) -> None:
        self._registry = registry
        self._routes = tuple(routes)
        self._fallback = fallback
        self._sep = sep

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def claim(self, request: Request) -> MountMatch | None:
        """Find the first mount whose prefix the request path starts with."""
        url = request.path
        if self._sep != "/":
            url = url.replace(self._sep, "/")
        url = url.strip()

        for name, bundle in self._registry.items():
            base_path = "/" + name
            if not url.startswith(base_path):
                continue
            return MountMatch(
                request=request,
                name=name,
                bundle=bundle,
                relative_path=normalize_path(url[len(base_path) :], sep=self._sep),
            )
        return None

    async def dispatch(self, request: Request) -> Response:
        """Produce the response for *request* (404 when nothing answers)."""
        match = self.claim(request)
        if match is not None:
            for route in self._routes:
                if route.matches(match):
                    return await route.respond(match)

            response = await self._fallback(match)
            if response is not None:
                return response

        logger.debug("404 %s %s", request.method, request.url)
        return empty_response(404)
