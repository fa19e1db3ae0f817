"""Tests for the perch exception hierarchy."""

import pytest

from perch.errors import (
    ConfigurationError,
    DocumentError,
    DocumentNotFound,
    FetchError,
    InvalidDocument,
    PerchError,
    UnsupportedFormat,
)


class TestDocumentErrors:
    @pytest.mark.parametrize(
        "cls", [DocumentNotFound, UnsupportedFormat, InvalidDocument, FetchError]
    )
    def test_hierarchy(self, cls) -> None:
        assert issubclass(cls, DocumentError)
        assert issubclass(cls, PerchError)

    def test_configuration_error_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)

    def test_str_includes_source_and_detail(self) -> None:
        assert str(InvalidDocument("doc.json", "broken")) == "doc.json: broken"

    def test_str_without_detail(self) -> None:
        assert str(DocumentError("doc.json")) == "doc.json"

    def test_not_found_default_detail(self) -> None:
        exc = DocumentNotFound("/tmp/missing.yaml")
        assert exc.source == "/tmp/missing.yaml"
        assert str(exc) == "/tmp/missing.yaml: is no file"

    def test_unsupported_format_default_detail(self) -> None:
        assert "json, toml, yaml, yml" in str(UnsupportedFormat("doc.txt"))

    def test_catchable_as_base(self) -> None:
        with pytest.raises(PerchError):
            raise FetchError("https://example.com/openapi.json", "server answered 500")
