"""Perch — preview an API description in Swagger UI on localhost.

Loads one JSON, YAML or TOML document (from a file, a URL, or a Python
script), and serves it with the bundled Swagger UI plus JSON/YAML/TOML
downloads over a small ASGI server.

Basic usage::

    perch petstore.yaml --port 8181

Programmatic::

    from perch import DocsServer, ServerConfig

    server = anyio.run(DocsServer.from_source, "petstore.yaml", ServerConfig())
    server.run()
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DocsServer",
    "DocumentBundle",
    "DocumentError",
    "DocumentRegistry",
    "PerchError",
    "ServerConfig",
    "build_bundle",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "DocsServer":
        from perch.app import DocsServer

        return DocsServer

    if name == "ServerConfig":
        from perch.config import ServerConfig

        return ServerConfig

    if name in ("DocumentBundle", "DocumentRegistry", "build_bundle"):
        from perch.documents import bundle as _bundle

        return getattr(_bundle, name)

    if name in ("ConfigurationError", "DocumentError", "PerchError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
