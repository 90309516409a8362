from app.core.config import Settings
from app.dependencies import build_classifier
from detection.classifier import NOTE_IPINFO_MISSING, NOTE_IPINFO_USED


def test_settings_read_bare_credential_names(monkeypatch):
    monkeypatch.setenv("IPINFO_TOKEN", "ipinfo-token")
    monkeypatch.setenv("PROXYCHECK_KEY", "proxy-key")
    monkeypatch.setenv("SPEED_TEST_LOOKUP_TIMEOUT_SECONDS", "1.5")

    config = Settings(_env_file=None)

    assert config.ipinfo_token == "ipinfo-token"
    assert config.proxycheck_key == "proxy-key"
    assert config.lookup_timeout_seconds == 1.5
    assert config.lookup_cache_ttl_seconds == 60.0


def test_without_token_ipinfo_is_skipped(monkeypatch):
    monkeypatch.delenv("IPINFO_TOKEN", raising=False)
    classifier = build_classifier(Settings(_env_file=None))
    assert classifier.note == NOTE_IPINFO_MISSING


def test_with_token_ipinfo_is_wired(monkeypatch):
    monkeypatch.setenv("IPINFO_TOKEN", "tok")
    classifier = build_classifier(Settings(_env_file=None))
    assert classifier.note == NOTE_IPINFO_USED
