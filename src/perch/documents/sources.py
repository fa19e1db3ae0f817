"""Document sources: local files and HTTP(S) downloads.

A ``DocumentReader`` is a zero-argument coroutine function returning the
decoded document. Readers are created by ``create_reader()`` from the
source string given on the command line and awaited once at startup.
"""

import codecs
import logging
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any

import anyio
import httpx

from perch.documents.formats import decode, format_for_media_type, format_for_name
from perch.documents.scripts import execute_script
from perch.errors import (
    DocumentError,
    DocumentNotFound,
    FetchError,
    InvalidDocument,
    UnsupportedFormat,
)

logger = logging.getLogger("perch.documents")

DocumentReader = Callable[[], Awaitable[Any]]

DEFAULT_CHARSET = "utf-8"


async def _parse(text: str, kind: str, *, source: str) -> Any:
    if kind == "python":
        return await execute_script(text, filename=source)
    try:
        return decode(text, kind)
    except Exception as exc:
        raise InvalidDocument(source, f"is not valid {kind.upper()}: {exc}") from exc


def local_file_reader(path: str | Path) -> DocumentReader:
    """Reader for a local document file.

    Relative paths are resolved against the current working directory.
    The format is chosen by extension: ``.json``, ``.yaml``/``.yml``,
    ``.toml``, or ``.py`` for a document script.
    """
    file = Path(path)
    if not file.is_absolute():
        file = Path.cwd() / file

    async def read() -> Any:
        apath = anyio.Path(file)
        if not await apath.is_file():
            raise DocumentNotFound(str(file))

        kind = format_for_name(file.name)
        if kind is None:
            raise UnsupportedFormat(
                str(file),
                "must have one of the following file extensions: json, toml, yaml, yml, py",
            )

        logger.info("Reading %s", file)
        text = await apath.read_text(encoding=DEFAULT_CHARSET)
        return await _parse(text, kind, source=str(file))

    return read


def _split_content_type(header: str | None) -> tuple[str | None, str | None]:
    """Split ``Content-Type`` into (media type, charset)."""
    if not header:
        return None, None
    media_type, *params = header.split(";")
    charset = None
    for param in params:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset":
            charset = value.strip().strip('"').lower() or None
    return media_type.strip().lower() or None, charset


def _decode_body(content: bytes, charset: str | None) -> str:
    """Decode a response body, falling back to UTF-8 for unknown charsets."""
    encoding = DEFAULT_CHARSET
    if charset:
        try:
            encoding = codecs.lookup(charset).name
        except LookupError:
            logger.warning("Unknown charset %r, decoding as %s", charset, DEFAULT_CHARSET)
    return content.decode(encoding, errors="replace")


def http_reader(
    url: str,
    *,
    username: str | None = None,
    password: str | None = None,
    allow_scripts: bool = False,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DocumentReader:
    """Reader for a document served over HTTP(S).

    The format is sniffed from the response ``Content-Type`` first and
    the URL's file extension second. Credentials, when given, are sent
    as HTTP basic auth to the document host only.

    Args:
        url: Absolute ``http://`` or ``https://`` URL.
        username: Basic-auth user name.
        password: Basic-auth password (empty when omitted).
        allow_scripts: Whether a Python script download may be executed.
        timeout: Request timeout in seconds.
        transport: Custom httpx transport (tests use ``httpx.MockTransport``).
    """

    async def read() -> Any:
        auth = httpx.BasicAuth(username, password or "") if username else None
        logger.info("Downloading %s", url)
        try:
            async with httpx.AsyncClient(
                transport=transport,
                timeout=timeout,
                follow_redirects=True,
            ) as client:
                response = await client.get(url, auth=auth)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(url, f"server answered {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

        media_type, charset = _split_content_type(response.headers.get("content-type"))
        candidates = (
            (format_for_media_type(media_type), charset),
            (format_for_name(httpx.URL(url).path), None),
        )
        for kind, encoding in candidates:
            if kind is None:
                continue
            if kind == "python" and not allow_scripts:
                raise DocumentError(url, "remote script execution is disabled")
            return await _parse(_decode_body(response.content, encoding), kind, source=url)

        raise UnsupportedFormat(url)

    return read


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def create_reader(
    source: str,
    *,
    username: str | None = None,
    password: str | None = None,
    allow_remote_scripts: bool = False,
    timeout: float = 30.0,
) -> DocumentReader:
    """Pick the reader for a source string (URL or local path)."""
    source = source.strip()
    if not source:
        msg = "Please define at least one file with a Swagger documentation!"
        raise DocumentError("<none>", msg)
    if is_remote(source):
        return http_reader(
            source,
            username=username,
            password=password,
            allow_scripts=allow_remote_scripts,
            timeout=timeout,
        )
    return local_file_reader(source)


async def load_document(reader: DocumentReader, *, source: str = "<document>") -> dict[str, Any]:
    """Await *reader* and check the result is a plain mapping."""
    document = await reader()
    if not isinstance(document, Mapping):
        raise InvalidDocument(source, "Swagger document must be a plain object!")
    return dict(document)
