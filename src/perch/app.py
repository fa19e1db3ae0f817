"""Perch server application.

A ``DocsServer`` owns everything a running instance needs: the document
registry, the static asset cache, the response strategies and the router.
Nothing is process-global, so several servers can coexist (tests do).
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from perch._internal.asgi import Receive, Scope, Send
from perch.assets import StaticAssetCache, default_static_dir
from perch.config import ServerConfig
from perch.documents.bundle import DocumentBundle, DocumentRegistry, build_bundle
from perch.documents.sources import create_reader, is_remote, load_document
from perch.routing.router import Router
from perch.server.endpoints import Endpoints
from perch.server.handler import handle_request

logger = logging.getLogger("perch.server")


class DocsServer:
    """ASGI application serving API documents in the bundled viewer.

    Usage::

        bundle = build_bundle({"openapi": "3.0.3", ...})
        server = DocsServer([bundle], ServerConfig(port=8181))
        server.run()

    Or load straight from a file or URL::

        server = await DocsServer.from_source("petstore.yaml")
    """

    __slots__ = ("config", "endpoints", "registry", "router", "static")

    def __init__(
        self,
        bundles: DocumentRegistry | Iterable[DocumentBundle] = (),
        config: ServerConfig | None = None,
        *,
        static: StaticAssetCache | None = None,
        started_at: datetime | None = None,
    ) -> None:
        self.config = config or ServerConfig()
        self.registry = (
            bundles if isinstance(bundles, DocumentRegistry) else DocumentRegistry(bundles)
        )
        if static is None:
            static_dir = self.config.static_dir
            static = StaticAssetCache(
                Path(static_dir) if static_dir is not None else default_static_dir()
            )
        self.static = static
        self.endpoints = Endpoints(self.config, self.static, started_at=started_at)
        self.router = Router(
            self.registry,
            self.endpoints.routes(),
            fallback=self.endpoints.static_asset,
        )

    @classmethod
    async def from_source(cls, source: str, config: ServerConfig | None = None) -> "DocsServer":
        """Load, validate and bundle one document mounted at the root.

        A remote source becomes the viewer's document URL unless
        ``config.swagger_url`` is already set.

        Raises:
            DocumentError: The source is missing, unreadable, in an
                unsupported format, or not a plain mapping.
        """
        config = config or ServerConfig()
        reader = create_reader(
            source,
            username=config.username,
            password=config.password,
            allow_remote_scripts=config.allow_remote_scripts,
            timeout=config.fetch_timeout,
        )
        document = await load_document(reader, source=source)
        bundle = build_bundle(document, config, source=source)
        logger.info("Loaded %s", source)
        if is_remote(source.strip()) and not config.swagger_url:
            config = replace(config, swagger_url=source.strip())
        return cls([bundle], config)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start serving (blocks until the server stops)."""
        from perch.server.dev import run_server

        host = host if host is not None else self.config.host
        port = port if port is not None else self.config.port
        run_server(self, host, port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            send,
            router=self.router,
            conditional_requests=self.config.conditional_requests,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Everything is prepared in ``__init__``, so startup only announces
        the mounts.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                for name in self.registry:
                    logger.info(
                        "Swagger UI running: http://%s:%d/%s",
                        self.config.host,
                        self.config.port,
                        name,
                    )
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
