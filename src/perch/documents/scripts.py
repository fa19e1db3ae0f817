"""Documents produced by running a Python script.

The script runs in a fresh namespace and must leave behind either a
top-level ``document`` value or a ``load()`` callable returning it.
``load`` may be a coroutine function::

    # api_doc.py
    async def load():
        return {"openapi": "3.0.3", "info": {"title": "Generated", "version": "1"}, "paths": {}}
"""

import inspect
from typing import Any

from perch.errors import InvalidDocument


async def execute_script(source: str, *, filename: str = "<document>") -> Any:
    """Run document-producing script code and return the document."""
    namespace: dict[str, Any] = {"__name__": "__perch_document__", "__file__": filename}
    try:
        code = compile(source, filename, "exec")
        exec(code, namespace)  # noqa: S102

        if "document" in namespace:
            result = namespace["document"]
        elif callable(namespace.get("load")):
            result = namespace["load"]()
        else:
            raise InvalidDocument(filename, "script defines neither 'document' nor 'load()'")

        if inspect.isawaitable(result):
            result = await result
    except InvalidDocument:
        raise
    except Exception as exc:
        raise InvalidDocument(filename, f"script failed: {type(exc).__name__}: {exc}") from exc
    return result
