"""Tests for signalpost.cli: typer commands against a mocked server."""

import json

import httpx
import pytest
import respx
from typer.testing import CliRunner

from signalpost import config
from signalpost.cli import app

runner = CliRunner()

BASE = "https://ps.test"


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "get_config_dir", lambda: tmp_path)
    monkeypatch.setenv("SIGNALPOST_PUBLISH_KEY", "pub")
    monkeypatch.setenv("SIGNALPOST_SUBSCRIBE_KEY", "sub")
    monkeypatch.setenv("SIGNALPOST_ORIGIN", "ps.test")
    monkeypatch.setenv("SIGNALPOST_UUID", "cli-uuid")
    for name in ("SIGNALPOST_AUTH_KEY", "SIGNALPOST_CIPHER_KEY"):
        monkeypatch.delenv(name, raising=False)


@respx.mock
def test_publish_json_message():
    route = respx.get(url__startswith=f"{BASE}/publish/pub/sub/0/blah/0/").mock(
        return_value=httpx.Response(200, text='[1,"Sent","15000000000000001"]')
    )
    result = runner.invoke(app, ["publish", "blah", '{"hey": 31}'])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"timetoken": 15000000000000001}
    path = route.calls.last.request.url.raw_path.split(b"?")[0]
    assert path == b"/publish/pub/sub/0/blah/0/%7B%22hey%22%3A31%7D"


@respx.mock
def test_publish_plain_text_message():
    route = respx.get(url__startswith=f"{BASE}/publish/").mock(
        return_value=httpx.Response(200, text='[1,"Sent","1"]')
    )
    result = runner.invoke(app, ["publish", "blah", "hello there"])
    assert result.exit_code == 0, result.output
    path = route.calls.last.request.url.raw_path.split(b"?")[0]
    assert path.endswith(b"/%22hello%20there%22")


@respx.mock
def test_signal_post_with_options():
    route = respx.post(url__startswith=f"{BASE}/signal/pub/sub/0/blah/0").mock(
        return_value=httpx.Response(200, text='[1,"Sent","2"]')
    )
    result = runner.invoke(
        app,
        ["signal", "blah", "typing", "--post", "--ttl", "5", "--no-store", "--no-replicate",
         "--meta", '{"a": 1}', "--pretty"],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"timetoken": 2}
    request = route.calls.last.request
    assert request.content == b'"typing"'
    params = request.url.params
    assert params["ttl"] == "5"
    assert params["store"] == "0"
    assert params["norep"] == "true"
    assert params["meta"] == '{"a":1}'
    assert params["uuid"] == "cli-uuid"


@respx.mock
def test_raw_message_sent_verbatim():
    route = respx.post(url__startswith=f"{BASE}/publish/").mock(
        return_value=httpx.Response(200, text='[1,"Sent","3"]')
    )
    result = runner.invoke(app, ["publish", "blah", "[1,2]", "--raw", "--post"])
    assert result.exit_code == 0, result.output
    assert route.calls.last.request.content == b"[1,2]"


@respx.mock
def test_server_error_exits_nonzero():
    respx.get(url__startswith=BASE).mock(return_value=httpx.Response(400, text='[0,"Invalid Key"]'))
    result = runner.invoke(app, ["publish", "blah", "hey"])
    assert result.exit_code == 1
    assert "status code is 400" in result.output


def test_missing_keys_exit_nonzero(monkeypatch):
    monkeypatch.delenv("SIGNALPOST_PUBLISH_KEY")
    result = runner.invoke(app, ["signal", "blah", "hey"])
    assert result.exit_code == 1
    assert "Publish Key not configured" in result.output


def test_bad_meta_exit_nonzero():
    result = runner.invoke(app, ["publish", "blah", "hey", "--meta", "{nope"])
    assert result.exit_code == 1
    assert "--meta must be a JSON object" in result.output


def test_config_masks_secrets(monkeypatch):
    monkeypatch.setenv("SIGNALPOST_AUTH_KEY", "secret-auth")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["publish_key"] == "pub"
    assert data["auth_key"] == "***"
    assert data["cipher_key"] is None
    assert "secret-auth" not in result.output


@pytest.mark.parametrize("text", ["NaN", "Infinity"])
@respx.mock
def test_json_constants_sent_as_text(text):
    route = respx.get(url__startswith=f"{BASE}/publish/").mock(
        return_value=httpx.Response(200, text='[1,"Sent","4"]')
    )
    result = runner.invoke(app, ["publish", "blah", text])
    assert result.exit_code == 0, result.output
    path = route.calls.last.request.url.raw_path.split(b"?")[0]
    assert path.endswith(f"/%22{text}%22".encode())
