"""Tests for document bundles and the mount registry."""

import json

import pytest

from perch._internal.hashing import hash_data
from perch.config import ServerConfig
from perch.documents.bundle import DocumentRegistry, build_bundle, safe_filename
from perch.errors import ConfigurationError, InvalidDocument


class TestSafeFilename:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("petstore", "petstore"),
            ("pet/store", "petstore"),
            ('a<b>c:d"e|f?g*h\\i', "abcdefghi"),
            ("a\x00b\x1fc", "abc"),
            ("  spaced  ", "spaced"),
            ("api. ", "api"),
            ("api...", "api"),
        ],
    )
    def test_sanitizes(self, name, expected) -> None:
        assert safe_filename(name) == expected

    @pytest.mark.parametrize("name", ["", "   ", ".", "..", "con", "NUL.txt", "lpt1", "///"])
    def test_falls_back_when_nothing_usable_remains(self, name) -> None:
        assert safe_filename(name) == "swagger"

    def test_custom_fallback(self) -> None:
        assert safe_filename("", fallback="openapi") == "openapi"

    def test_truncates_to_255_utf8_bytes(self) -> None:
        result = safe_filename("é" * 200)
        assert len(result.encode("utf-8")) <= 255
        assert result == "é" * 127


class TestBuildBundle:
    def test_all_exports_by_default(self, petstore) -> None:
        bundle = build_bundle(petstore)

        assert bundle.name == ""
        assert bundle.mount_path == "/"
        assert bundle.file_name == "swagger"
        assert bundle.document == petstore
        assert json.loads(bundle.json) == petstore
        assert bundle.yaml.startswith(b"openapi:")
        assert b'openapi = "3.0.3"' in bundle.toml

    def test_hashes_cover_present_buffers(self, petstore) -> None:
        bundle = build_bundle(petstore)
        assert bundle.hashes == {
            "json": hash_data(bundle.json),
            "yaml": hash_data(bundle.yaml),
            "toml": hash_data(bundle.toml),
        }

    def test_disabled_formats_are_absent(self, petstore) -> None:
        config = ServerConfig(export_yaml=False, export_toml=False)
        bundle = build_bundle(petstore, config)

        assert bundle.json is not None
        assert bundle.yaml is None
        assert bundle.toml is None
        assert bundle.export("yaml") is None
        assert set(bundle.hashes) == {"json"}

    def test_export_lookup(self, petstore) -> None:
        bundle = build_bundle(petstore)
        assert bundle.export("json") is bundle.json
        assert bundle.export("document") is None
        assert bundle.export("hashes") is None

    def test_name_and_file_name(self, petstore) -> None:
        bundle = build_bundle(petstore, name="v1", file_name="pet/store")
        assert bundle.mount_path == "/v1"
        assert bundle.file_name == "petstore"

    def test_toml_failure_is_reported(self) -> None:
        with pytest.raises(InvalidDocument):
            build_bundle({"openapi": "3.0.3", "info": None}, source="doc.yaml")

    def test_toml_failure_skipped_when_toml_disabled(self) -> None:
        bundle = build_bundle({"openapi": "3.0.3", "info": None}, ServerConfig(export_toml=False))
        assert bundle.json == b'{"openapi":"3.0.3","info":null}'

    def test_bundle_is_immutable(self, petstore) -> None:
        bundle = build_bundle(petstore)
        with pytest.raises(AttributeError):
            bundle.json = b"{}"


class TestDocumentRegistry:
    def test_preserves_registration_order(self, petstore) -> None:
        registry = DocumentRegistry(
            [build_bundle(petstore, name="v2"), build_bundle(petstore, name="")]
        )
        assert list(registry) == ["v2", ""]
        assert registry["v2"].name == "v2"
        assert len(registry) == 2

    def test_empty_registry(self) -> None:
        registry = DocumentRegistry()
        assert len(registry) == 0
        assert "" not in registry

    def test_duplicate_mount_rejected(self, petstore) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate"):
            DocumentRegistry([build_bundle(petstore), build_bundle(petstore)])
