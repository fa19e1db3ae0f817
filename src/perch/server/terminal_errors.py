"""Terminal reporting of request failures.

A failed request is answered with an empty 500 by the handler and
reported here; nothing is re-raised into the transport. How much of the
traceback is printed depends on ``PERCH_TRACEBACK``:

- ``compact`` (default): the error plus perch/application frames
- ``full``: the complete Python traceback
- ``minimal``: one line naming the failing location
"""

from __future__ import annotations

import logging
import os
import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.http.request import Request

logger = logging.getLogger("perch.server")

_STDLIB_DIR = os.path.dirname(os.__file__)
_MAX_FRAMES = 5


def _is_app_frame(filename: str) -> bool:
    """Frames outside the stdlib, site-packages and synthetic files."""
    if filename.startswith("<") or "site-packages" in filename:
        return False
    return not filename.startswith(_STDLIB_DIR)


def _frames(exc: BaseException) -> list[traceback.FrameSummary]:
    if exc.__traceback__ is None:
        return []
    return list(traceback.extract_tb(exc.__traceback__))


def _summary(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


def format_compact_traceback(exc: BaseException) -> str:
    """The error and its application frames, innermost last.

    When every frame belongs to a library, the innermost three are shown.
    """
    frames = _frames(exc)
    shown = [frame for frame in frames if _is_app_frame(frame.filename)] or frames[-3:]
    if not shown:
        return _summary(exc)

    lines = [_summary(exc), "  Trace (app frames):"]
    for frame in shown[-_MAX_FRAMES:]:
        lines.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
        if frame.line:
            lines.append(f"      {frame.line.strip()}")
    return "\n".join(lines)


def format_minimal_error(exc: BaseException) -> str:
    """``ValueError at path.py:12: message`` on a single line."""
    frames = _frames(exc)
    if not frames:
        return _summary(exc)
    innermost = frames[-1]
    return f"{type(exc).__name__} at {innermost.filename}:{innermost.lineno}: {exc}"


def log_error(exc: BaseException, request: Request | None = None) -> None:
    """Report a request failure on the ``perch.server`` logger.

    *request* is ``None`` when the scope could not even be turned into a
    request.
    """
    heading = f"500 {request.method} {request.url}" if request is not None else "Server error"

    style = os.environ.get("PERCH_TRACEBACK", "compact").lower()
    if style == "full":
        logger.error(heading, exc_info=exc)
    elif style == "minimal":
        logger.error("%s - %s", heading, format_minimal_error(exc))
    else:
        logger.error("%s\n%s", heading, format_compact_traceback(exc))
