"""Tests for actiondoc.swagger.reader."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest

from actiondoc.exceptions import IOError_
from actiondoc.exit_codes import EXIT_IO_ERROR
from actiondoc.swagger.reader import read_swagger_json, read_swagger_text


class TestReadSwaggerJson:
    def test_absent_file_is_none(self, tmp_path: Path) -> None:
        assert read_swagger_json(tmp_path / "swagger.json") is None

    def test_reads_object(self, tmp_path: Path) -> None:
        path = tmp_path / "swagger.json"
        path.write_text('{"swagger": "2.0", "paths": {}}', encoding="utf-8")
        assert read_swagger_json(path) == {"swagger": "2.0", "paths": {}}

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "swagger.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(IOError_, match="Failed to parse"):
            read_swagger_json(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "swagger.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(IOError_, match="JSON object"):
            read_swagger_json(path)

    def test_exit_code(self, tmp_path: Path) -> None:
        path = tmp_path / "swagger.json"
        path.write_text("nope", encoding="utf-8")
        with pytest.raises(IOError_) as exc_info:
            read_swagger_json(path)
        assert exc_info.value.exit_code == EXIT_IO_ERROR


class TestReadSwaggerText:
    def test_file(self, tmp_path: Path) -> None:
        path = tmp_path / "swagger.json"
        path.write_text("{}", encoding="utf-8")
        assert read_swagger_text(str(path)) == "{}"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(IOError_, match="not found"):
            read_swagger_text(str(tmp_path / "missing.json"))

    def test_url(self) -> None:
        response = MagicMock()
        response.text = '{"swagger": "2.0"}'
        with patch("actiondoc.sources.httpx.get", return_value=response) as get:
            assert read_swagger_text("https://example.com/swagger.json") == '{"swagger": "2.0"}'
        get.assert_called_once_with(
            "https://example.com/swagger.json", timeout=30.0, follow_redirects=True
        )

    def test_url_http_error(self) -> None:
        request = httpx.Request("GET", "https://example.com/swagger.json")
        response = httpx.Response(404, request=request)
        with patch("actiondoc.sources.httpx.get", return_value=response):
            with pytest.raises(IOError_, match="HTTP 404"):
                read_swagger_text("https://example.com/swagger.json")

    def test_url_connection_error(self) -> None:
        error = httpx.ConnectError("refused")
        with patch("actiondoc.sources.httpx.get", side_effect=error):
            with pytest.raises(IOError_, match="Failed to fetch"):
                read_swagger_text("http://localhost:1/swagger.json")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "swagger.json"
        path.write_text("\n", encoding="utf-8")
        with pytest.raises(IOError_, match="empty") as exc_info:
            read_swagger_text(str(path))
        assert exc_info.value.exit_code == EXIT_IO_ERROR
