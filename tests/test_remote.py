import pytest

from streamcrush.core.errors import UploadTooLarge
from streamcrush.parsers import remote


class _Response:
    def __init__(self, content, status=200):
        self.content = content
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise RuntimeError(f"HTTP {self.status}")


def test_fetch_bytes_sends_user_agent(monkeypatch):
    calls = {}

    def fake_get(url, timeout, headers):
        calls.update(url=url, timeout=timeout, headers=headers)
        return _Response(b"\x00" * 16)

    monkeypatch.setattr(remote.requests, "get", fake_get)
    assert remote.fetch_bytes("http://example.invalid/rng.bin", timeout=3) == b"\x00" * 16
    assert calls["timeout"] == 3
    assert calls["headers"]["User-Agent"].startswith("streamcrush/")


def test_fetch_bytes_enforces_limit(monkeypatch):
    monkeypatch.setattr(remote.requests, "get", lambda url, timeout, headers: _Response(b"\x01" * 32))
    with pytest.raises(UploadTooLarge):
        remote.fetch_bytes("http://example.invalid/rng.bin", limit=16)


def test_fetch_bytes_propagates_http_errors(monkeypatch):
    monkeypatch.setattr(remote.requests, "get", lambda url, timeout, headers: _Response(b"", status=503))
    with pytest.raises(RuntimeError):
        remote.fetch_bytes("http://example.invalid/rng.bin")
