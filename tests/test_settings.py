from streamcrush.core.settings import load_settings


def test_defaults(monkeypatch):
    for name in ("CRUSH_WORKERS", "CRUSH_DISTRIBUTION_IDEAL", "MAX_UPLOAD_BYTES", "REMOTE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.crush_workers == 1
    assert settings.distribution_ideal is None
    assert settings.max_upload_bytes == 16 * 1024 * 1024
    assert settings.remote_timeout == 8


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CRUSH_WORKERS", "4")
    monkeypatch.setenv("CRUSH_DISTRIBUTION_IDEAL", "32")
    settings = load_settings()
    assert settings.crush_workers == 4
    assert settings.distribution_ideal == 32


def test_malformed_values_fall_back(monkeypatch):
    monkeypatch.setenv("CRUSH_WORKERS", "many")
    monkeypatch.setenv("CRUSH_DISTRIBUTION_IDEAL", "sixteen")
    settings = load_settings()
    assert settings.crush_workers == 1
    assert settings.distribution_ideal is None
