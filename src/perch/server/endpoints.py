"""Response strategies for document mounts.

Every successful response carries ``Last-Modified`` (fixed at server
start) and a quoted ``ETag`` made of a per-instance prefix and the
SHA-256 of the body. The prefix combines a hash of the start time with
random bytes, so tags are stable while one server runs but never match
those of an earlier process on the same port.

Priority order of the fixed routes:

1. ``/`` and ``/index.html`` — UI shell (rendered and hashed once)
2. ``/swagger-ui-init.js`` — bootstrap script (rendered per request)
3. ``/json``, ``/yaml``, ``/toml`` — downloads, only when exported
4. anything else — static asset from the viewer distribution
"""

import secrets
from datetime import UTC, datetime
from email.utils import format_datetime
from urllib.parse import quote

from perch._internal.hashing import hash_data
from perch.assets import StaticAssetCache
from perch.config import ServerConfig
from perch.documents.bundle import DEFAULT_FILE_NAME
from perch.documents.formats import EXPORT_FORMATS, MIME_TYPES
from perch.http.response import Response
from perch.routing.route import MountMatch, Route, exact, prefix
from perch.templating.rendering import UITemplates

CHARSET = "utf-8"
CONTENT_TYPE_HTML = f"text/html; charset={CHARSET}"
CONTENT_TYPE_JAVASCRIPT = f"text/javascript; charset={CHARSET}"

INIT_SCRIPT_PATH = "/swagger-ui-init.js"


def download_content_type(fmt: str) -> str:
    return f"{MIME_TYPES[fmt]}; charset={CHARSET}"


def content_disposition(file_name: str) -> str:
    """Attachment header value for *file_name*.

    Header values travel as Latin-1, so a name with other characters gets
    an ASCII ``filename`` plus a UTF-8 ``filename*`` parameter (RFC 6266).
    """
    if file_name.isascii():
        return f'attachment; filename="{file_name}"'
    stem, dot, extension = file_name.rpartition(".")
    fallback = stem.encode("ascii", "ignore").decode("ascii").strip() or DEFAULT_FILE_NAME
    encoded = quote(file_name, safe="")
    return f"attachment; filename=\"{fallback}{dot}{extension}\"; filename*=UTF-8''{encoded}"


class Endpoints:
    """The response strategies of one server instance.

    Owns the instance's ETag prefix and ``Last-Modified`` value, the
    pre-rendered UI shell and the static asset cache.
    """

    __slots__ = (
        "_config",
        "_index_hash",
        "_index_html",
        "_static",
        "_templates",
        "etag_prefix",
        "last_modified",
    )

    def __init__(
        self,
        config: ServerConfig,
        static: StaticAssetCache,
        *,
        templates: UITemplates | None = None,
        started_at: datetime | None = None,
        salt: str | None = None,
    ) -> None:
        self._config = config
        self._static = static
        self._templates = templates or UITemplates()

        started_at = started_at or datetime.now(UTC)
        self.last_modified = format_datetime(started_at.astimezone(UTC), usegmt=True)
        salt = salt if salt is not None else secrets.token_hex(4)
        self.etag_prefix = f"{hash_data(self.last_modified.encode(CHARSET))}-{salt}-"

        self._index_html = self._templates.render_index(title=config.title)
        self._index_hash = hash_data(self._index_html)

    # -- Helpers --

    def etag(self, data: bytes, digest: str | None = None) -> str:
        """Quoted, instance-prefixed entity tag for *data*."""
        if digest is None:
            digest = hash_data(data)
        return f'"{self.etag_prefix}{digest}"'

    def _cacheable(self, body: bytes, content_type: str, digest: str | None = None) -> Response:
        return Response(body=body, content_type=content_type).with_headers(
            {"Last-Modified": self.last_modified, "ETag": self.etag(body, digest)}
        )

    def swagger_url(self, match: MountMatch) -> str:
        """Document URL the viewer falls back to (``<mount>/json``)."""
        if self._config.swagger_url:
            return self._config.swagger_url
        return match.base_path.rstrip("/") + "/json"

    # -- Strategies --

    async def index(self, match: MountMatch) -> Response:
        """UI shell page."""
        return self._cacheable(self._index_html, CONTENT_TYPE_HTML, self._index_hash)

    async def init_script(self, match: MountMatch) -> Response:
        """Bootstrap script with the decoded document embedded."""
        script = self._templates.render_init_script(
            match.bundle.document,
            swagger_url=self.swagger_url(match),
        )
        return self._cacheable(script, CONTENT_TYPE_JAVASCRIPT)

    def download(self, fmt: str) -> Route:
        """Route serving the *fmt* export as an attachment."""

        def matches(match: MountMatch) -> bool:
            if match.bundle.export(fmt) is None:
                return False
            return match.relative_path.startswith(f"/{fmt}")

        async def respond(match: MountMatch) -> Response:
            bundle = match.bundle
            data = bundle.export(fmt) or b""
            disposition = content_disposition(f"{bundle.file_name}.{fmt}")
            return self._cacheable(
                data, download_content_type(fmt), bundle.hashes.get(fmt)
            ).with_header("Content-Disposition", disposition)

        return Route(name=fmt, matches=matches, respond=respond)

    async def static_asset(self, match: MountMatch) -> Response | None:
        """Static file from the viewer distribution, or ``None`` on a miss."""
        pathname = match.relative_path.split("?", 1)[0]
        entry = await self._static.get(self._static.resolve(pathname))
        if entry is None:
            return None
        return self._cacheable(entry.content, entry.mime_type, entry.hash)

    def routes(self) -> tuple[Route, ...]:
        """Fixed routes in priority order (static assets are the fallback)."""
        return (
            Route(name="index", matches=exact("/", "/index.html"), respond=self.index),
            Route(name="init", matches=prefix(INIT_SCRIPT_PATH), respond=self.init_script),
            *(self.download(fmt) for fmt in EXPORT_FORMATS),
        )
