"""Tests for documents produced by Python scripts."""

import pytest

from perch.documents.scripts import execute_script
from perch.errors import InvalidDocument


class TestExecuteScript:
    async def test_document_variable(self) -> None:
        source = "document = {'openapi': '3.0.3', 'paths': {}}\n"
        assert await execute_script(source) == {"openapi": "3.0.3", "paths": {}}

    async def test_load_function(self) -> None:
        source = "def load():\n    return {'openapi': '3.1.0'}\n"
        assert await execute_script(source) == {"openapi": "3.1.0"}

    async def test_async_load_function(self) -> None:
        source = (
            "import asyncio\n"
            "async def load():\n"
            "    await asyncio.sleep(0)\n"
            "    return {'openapi': '3.1.0', 'info': {'title': 'Generated'}}\n"
        )
        assert await execute_script(source) == {
            "openapi": "3.1.0",
            "info": {"title": "Generated"},
        }

    async def test_document_takes_precedence_over_load(self) -> None:
        source = "document = {'from': 'variable'}\ndef load():\n    return {'from': 'load'}\n"
        assert await execute_script(source) == {"from": "variable"}

    async def test_script_sees_its_file_name(self) -> None:
        source = "document = {'file': __file__}\n"
        assert await execute_script(source, filename="/tmp/api_doc.py") == {
            "file": "/tmp/api_doc.py"
        }

    async def test_neither_document_nor_load(self) -> None:
        with pytest.raises(InvalidDocument, match="neither"):
            await execute_script("x = 1\n", filename="api_doc.py")

    async def test_syntax_error(self) -> None:
        with pytest.raises(InvalidDocument, match="SyntaxError"):
            await execute_script("document = {\n", filename="api_doc.py")

    async def test_runtime_error(self) -> None:
        with pytest.raises(InvalidDocument) as exc_info:
            await execute_script("def load():\n    raise RuntimeError('boom')\n", filename="api_doc.py")
        assert exc_info.value.source == "api_doc.py"
        assert "RuntimeError: boom" in exc_info.value.detail
        assert isinstance(exc_info.value.__cause__, RuntimeError)
