"""JSON / YAML / TOML codecs for API description documents.

``decode`` turns document text into its native Python structure and
``encode`` renders that structure back into the bytes served by the
download routes.
"""

import json
import tomllib
from typing import Any, Literal

import tomli_w
import yaml

from perch.errors import InvalidDocument

Format = Literal["json", "yaml", "toml"]

EXPORT_FORMATS: tuple[Format, ...] = ("json", "yaml", "toml")

# "python" marks an executable document script, not a data format.
_EXTENSIONS: dict[str, str] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".py": "python",
}

MIME_TYPES: dict[str, str] = {
    "json": "application/json",
    "yaml": "application/x-yaml",
    "toml": "application/toml",
}


def format_for_name(name: str) -> str | None:
    """Document kind from a file name or URL path extension."""
    lowered = name.lower()
    for extension, kind in _EXTENSIONS.items():
        if lowered.endswith(extension):
            return kind
    return None


def format_for_media_type(media_type: str | None) -> str | None:
    """Document kind from a ``Content-Type`` media type.

    Matches on the suffix, so ``application/vnd.oai.openapi+json``,
    ``text/yaml`` and ``text/x-python`` are all recognized.
    """
    if not media_type:
        return None
    lowered = media_type.strip().lower()
    for kind in ("json", "yaml", "toml", "python"):
        if lowered.endswith(kind):
            return kind
    return None


def decode(text: str, fmt: str) -> Any:
    """Parse document text of the given format."""
    if fmt == "json":
        return json.loads(text)
    if fmt == "yaml":
        return yaml.safe_load(text)
    if fmt == "toml":
        return tomllib.loads(text)
    msg = f"Cannot decode format {fmt!r}"
    raise ValueError(msg)


def encode_json(document: Any) -> str:
    """Compact JSON, as embedded in the viewer bootstrap script."""
    return json.dumps(document, ensure_ascii=False, separators=(",", ":"), default=str)


def encode(document: Any, fmt: str, *, source: str = "<document>") -> bytes:
    """Render *document* in one of the export formats.

    Raises:
        InvalidDocument: The structure cannot be represented in *fmt*
            (for example ``null`` values in TOML).
    """
    try:
        if fmt == "json":
            text = encode_json(document)
        elif fmt == "yaml":
            text = yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
        elif fmt == "toml":
            text = tomli_w.dumps(document)
        else:
            msg = f"Cannot encode format {fmt!r}"
            raise ValueError(msg)
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise InvalidDocument(source, f"cannot be encoded as {fmt.upper()}: {exc}") from exc
    return text.encode("utf-8")
