"""Local server.

Starts a pounce ASGI server with the live DocsServer object. One worker,
no reload: the document is loaded once and the asset cache lives in that
worker's event loop.
"""

from __future__ import annotations


def run_server(app: object, host: str, port: int) -> None:
    """Start a pounce server for the given ASGI app.

    Pounce's ``run()`` takes an import string, but perch has a live
    ``DocsServer`` object, so ``pounce.Server`` is used directly.

    Args:
        app: ASGI callable (DocsServer instance).
        host: Bind host address.
        port: Bind port number.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=False,
    )
    server = Server(config, app)
    server.run()
