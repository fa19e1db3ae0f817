"""Request path canonicalization."""

import os


def normalize_path(path: str | None, *, sep: str = os.sep) -> str:
    """Canonicalize a request path.

    ``None`` is treated as the empty string. Platform separators become
    ``/``, surrounding whitespace is trimmed, every trailing slash is
    stripped and exactly one leading slash is guaranteed::

        normalize_path("docs//")   # "/docs"
        normalize_path("")         # "/"
    """
    value = "" if path is None else str(path)
    if sep != "/":
        value = value.replace(sep, "/")
    value = value.strip()

    while value.endswith("/"):
        value = value[:-1].strip()

    return "/" + value.lstrip("/")
