"""Tests for loading model documents."""

import io
import json

import pytest
import requests

from idl_codegen.codegen.core.model import ModelError
from idl_codegen.utils import (
    JSONLoaderError,
    load_json,
    load_json_from_file,
    load_json_from_stream,
    load_json_from_url,
    load_namespace,
)


class FakeResponse:
    def __init__(self, data=None, status_code=200, content_type="application/json"):
        self._data = data
        self.status_code = status_code
        self.headers = {"content-type": content_type}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        if isinstance(self._data, str):
            return json.loads(self._data)
        return self._data


class TestLoadJsonFromFile:
    def test_loads(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text('{"namespace": "ns"}', encoding="utf-8")
        source, data = load_json_from_file(path)
        assert source.endswith(str(path))
        assert data == {"namespace": "ns"}

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json_from_file(tmp_path / "missing.json")

    def test_invalid(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(JSONLoaderError, match="Invalid JSON"):
            load_json_from_file(path)

    def test_other_extension_is_accepted(self, tmp_path):
        path = tmp_path / "model.idl"
        path.write_text("[]", encoding="utf-8")
        assert load_json_from_file(path)[1] == []


class TestLoadJsonFromUrl:
    def test_loads(self, monkeypatch):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse({"namespace": "ns"})

        monkeypatch.setattr(requests, "get", fake_get)
        source, data = load_json_from_url("https://example.com/model.json", timeout=5)
        assert data == {"namespace": "ns"}
        assert "https://example.com/model.json" in source
        assert calls == [("https://example.com/model.json", 5)]

    def test_invalid_url(self):
        with pytest.raises(JSONLoaderError, match="Invalid URL"):
            load_json_from_url("not a url")

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(requests, "get", lambda url, timeout: FakeResponse(status_code=404))
        with pytest.raises(JSONLoaderError, match="HTTP error 404"):
            load_json_from_url("https://example.com/model.json")

    def test_timeout(self, monkeypatch):
        def fake_get(url, timeout):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(requests, "get", fake_get)
        with pytest.raises(JSONLoaderError, match="timeout"):
            load_json_from_url("https://example.com/model.json")

    def test_connection_error(self, monkeypatch):
        def fake_get(url, timeout):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(requests, "get", fake_get)
        with pytest.raises(JSONLoaderError, match="Connection error"):
            load_json_from_url("https://example.com/model.json")

    def test_invalid_response(self, monkeypatch):
        monkeypatch.setattr(
            requests, "get", lambda url, timeout: FakeResponse("{", content_type="text/plain")
        )
        with pytest.raises(JSONLoaderError, match="Invalid JSON response"):
            load_json_from_url("https://example.com/model")


class TestLoadJson:
    def test_requires_a_source(self):
        with pytest.raises(JSONLoaderError):
            load_json()

    def test_rejects_two_sources(self):
        with pytest.raises(JSONLoaderError):
            load_json("model.json", "https://example.com/model.json")

    def test_stream(self):
        source, data = load_json_from_stream(io.StringIO('{"a": 1}'), "pipe")
        assert source.endswith("pipe")
        assert data == {"a": 1}

    def test_invalid_stream(self):
        with pytest.raises(JSONLoaderError, match="Invalid JSON in <stdin>"):
            load_json_from_stream(io.StringIO("nope"))


class TestLoadNamespace:
    def test_from_file(self, tmp_path, sample_document):
        path = tmp_path / "model.json"
        path.write_text(json.dumps(sample_document), encoding="utf-8")
        source, namespace = load_namespace(path)
        assert str(path) in source
        assert namespace.name == "greeting.v1"
        assert "Greeter" in namespace.roles

    def test_invalid_model(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text('{"namespace": 1}', encoding="utf-8")
        with pytest.raises(ModelError):
            load_namespace(path)
