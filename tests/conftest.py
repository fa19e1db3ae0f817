"""Shared fixtures: a fake viewer distribution and a small API document."""

from datetime import UTC, datetime

import pytest

from perch.app import DocsServer
from perch.assets import StaticAssetCache
from perch.config import ServerConfig
from perch.documents.bundle import build_bundle

STARTED_AT = datetime(2026, 3, 14, 9, 26, 53, tzinfo=UTC)


@pytest.fixture
def static_dir(tmp_path):
    """A stand-in for the bundled Swagger UI distribution."""
    static = tmp_path / "swagger-ui"
    static.mkdir()

    (static / "swagger-ui.css").write_text(".swagger-ui { color: #3b4151; }")
    (static / "swagger-ui-bundle.js").write_text("var SwaggerUIBundle = {};")
    (static / "favicon-32x32.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (static / "blob.perchunknown").write_bytes(b"\x00\x01\x02\x03")

    nested = static / "css"
    nested.mkdir()
    (nested / "theme.css").write_text("h1 { font-size: 2em; }")

    (tmp_path / "secret.txt").write_text("outside the asset root")
    return static


@pytest.fixture
def petstore():
    return {
        "openapi": "3.0.3",
        "info": {"title": "Petstore", "version": "1.0.0"},
        "paths": {
            "/pets": {
                "get": {
                    "summary": "List pets",
                    "responses": {"200": {"description": "A list of pets"}},
                },
            },
        },
    }


@pytest.fixture
def make_server(static_dir, petstore):
    """Factory for servers with one or more mounted bundles."""

    def factory(*bundles, config=None, started_at=STARTED_AT):
        config = config or ServerConfig()
        if not bundles:
            bundles = (build_bundle(petstore, config),)
        return DocsServer(
            bundles,
            config,
            static=StaticAssetCache(static_dir),
            started_at=started_at,
        )

    return factory
