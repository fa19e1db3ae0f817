"""Document acquisition and preparation.

A document is read once at startup (local file, HTTP download or a
Python script), checked to be a plain mapping, and turned into an
immutable ``DocumentBundle`` with its JSON/YAML/TOML exports pre-encoded.
"""

from perch.documents.bundle import DocumentBundle, DocumentRegistry, build_bundle, safe_filename
from perch.documents.sources import (
    DocumentReader,
    create_reader,
    http_reader,
    load_document,
    local_file_reader,
)

__all__ = [
    "DocumentBundle",
    "DocumentReader",
    "DocumentRegistry",
    "build_bundle",
    "create_reader",
    "http_reader",
    "load_document",
    "local_file_reader",
    "safe_filename",
]
