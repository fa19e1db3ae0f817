"""Tests for the request, response and header types."""

import pytest

from perch.http.headers import Headers
from perch.http.request import Request
from perch.http.response import Response, empty_response


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Content-Type", b"application/json"),))
        assert headers["content-type"] == "application/json"
        assert headers["CONTENT-TYPE"] == "application/json"
        assert "Content-Type" in headers
        assert 42 not in headers

    def test_repeated_header(self) -> None:
        headers = Headers(((b"if-none-match", b'"a"'), (b"If-None-Match", b'"b"')))
        assert headers["if-none-match"] == '"a"'
        assert headers.get_list("if-none-match") == ['"a"', '"b"']
        assert len(headers) == 1

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("etag") is None
        assert headers.get_list("etag") == []
        with pytest.raises(KeyError):
            headers["etag"]


class TestRequest:
    def test_from_asgi(self) -> None:
        request = Request.from_asgi(
            {
                "type": "http",
                "method": "get",
                "path": "/docs/json",
                "query_string": b"download=1",
                "headers": [(b"host", b"localhost:8080")],
            }
        )
        assert request.method == "GET"
        assert request.path == "/docs/json"
        assert request.url == "/docs/json?download=1"
        assert request.headers["host"] == "localhost:8080"

    def test_missing_path_is_empty(self) -> None:
        request = Request.from_asgi({"type": "http"})
        assert request.method == "GET"
        assert request.path == ""
        assert request.url == ""

    def test_if_none_match(self) -> None:
        headers = Headers(((b"if-none-match", b'"a", W/"b" ,  '), (b"if-none-match", b"*")))
        request = Request("GET", "/", headers=headers)
        assert request.if_none_match == frozenset({'"a"', '"b"', "*"})

    def test_if_none_match_absent(self) -> None:
        assert Request("GET", "/").if_none_match == frozenset()


class TestResponse:
    def test_chainable_transformations(self) -> None:
        original = Response(body=b"a")
        changed = original.with_header("X-One", "1").with_header("X-Two", "2")

        assert original.headers == ()
        assert changed.body == b"a"
        assert changed.headers == (("X-One", "1"), ("X-Two", "2"))
        assert changed.header("x-two") == "2"

    def test_with_headers(self) -> None:
        response = Response().with_headers({"ETag": '"x"', "Last-Modified": "now"})
        assert response.etag == '"x"'
        assert response.header("last-modified") == "now"
        assert response.header("missing", "default") == "default"

    def test_text(self) -> None:
        assert Response(body="Café".encode()).text == "Café"

    def test_empty_response(self) -> None:
        response = empty_response(404)
        assert response.status == 404
        assert response.body == b""
        assert response.content_type is None
        assert response.etag is None
