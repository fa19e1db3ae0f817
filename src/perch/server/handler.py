"""ASGI handler — the outermost request boundary.

The only component that touches raw ASGI directly. Converts the scope to
a Request, dispatches through the router, and sends the Response back.
Any failure is contained here: an empty 500 if nothing was sent yet,
and the response is always terminated.
"""

import logging

from perch._internal.asgi import Message, Scope, Send
from perch.http.request import Request
from perch.http.response import Response, empty_response
from perch.routing.router import Router
from perch.server.sender import finish_response, send_response
from perch.server.terminal_errors import log_error

logger = logging.getLogger("perch.server")


def not_modified(request: Request, response: Response) -> Response:
    """Turn a 200 into a 304 when the client already holds its ETag."""
    etag = response.etag
    if response.status != 200 or etag is None:
        return response
    tags = request.if_none_match
    if etag not in tags and "*" not in tags:
        return response
    kept = tuple(
        (name, value) for name, value in response.headers if name in ("ETag", "Last-Modified")
    )
    return empty_response(304).with_headers(dict(kept))


async def handle_request(
    scope: Scope,
    send: Send,
    *,
    router: Router,
    conditional_requests: bool = True,
) -> None:
    """Process a single HTTP request through the router."""
    if scope["type"] != "http":
        return

    started = False

    async def tracked_send(message: Message) -> None:
        nonlocal started
        if message["type"] == "http.response.start":
            started = True
        await send(message)

    request: Request | None = None
    try:
        request = Request.from_asgi(scope)
        response = await router.dispatch(request)
        if conditional_requests:
            response = not_modified(request, response)
        await send_response(response, tracked_send, head=request.method == "HEAD")
    except Exception as exc:
        log_error(exc, request)
        try:
            if started:
                await finish_response(send)
            else:
                await send_response(empty_response(500), send)
        except Exception:
            logger.debug("Could not terminate the failed response", exc_info=True)
