import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_request_classifier
from app.main import app
from detection.classifier import RequestClassifier
from enrichment.providers import IpInfoProvider, ProxyCheckProvider
from helpers import ipinfo_body, json_transport, proxycheck_body

client = TestClient(app)

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


@pytest.fixture
def use_classifier():
    def _install(classifier):
        app.dependency_overrides[get_request_classifier] = lambda: classifier
        return classifier
    yield _install
    app.dependency_overrides.clear()


def _assert_cors(response):
    for name, value in CORS.items():
        assert response.headers[name] == value


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_options_returns_empty_200_with_cors():
    response = client.options("/api/speed-test")
    assert response.status_code == 200
    assert response.content == b""
    _assert_cors(response)


def test_get_response_shape(use_classifier):
    use_classifier(RequestClassifier())

    response = client.get(
        "/api/speed-test",
        headers={"User-Agent": "Mozilla/5.0", "X-Forwarded-For": "203.0.113.5"},
    )

    assert response.status_code == 200
    _assert_cors(response)
    data = response.json()

    assert data["success"] is True
    assert data["timestamp"].endswith("Z")
    assert set(data["connection"]) == {"speed", "score", "responseTime", "emoji", "recommendation"}
    assert data["connection"]["responseTime"].endswith("ms")
    assert 0 <= data["connection"]["score"] <= 100

    assert data["client"] == {
        "ip": "203.0.113.5",
        "userAgent": "Mozilla/5.0",
        "host": "testserver",
        "forwardedFor": "203.0.113.5",
        "remoteAddr": "testclient",
    }

    proxy = data["proxyCheck"]
    assert proxy["isProxy"] is False
    assert proxy["isVPN"] is False
    assert proxy["reasons"] == ["proxy-headers:x-forwarded-for"]
    assert proxy["ipinfo"] is None
    assert proxy["note"] == "set IPINFO_TOKEN to check ASN/org"


def test_get_with_enrichment(use_classifier, cache):
    ip = "198.51.100.40"
    use_classifier(RequestClassifier(
        proxycheck=ProxyCheckProvider(cache, transport=json_transport(proxycheck_body(ip, "yes", "VPN"))),
        ipinfo=IpInfoProvider(
            cache, token="t",
            transport=json_transport(ipinfo_body(ip, org="AS14061 DigitalOcean, LLC", country="NL")),
        ),
    ))

    response = client.get("/api/speed-test", headers={"X-Forwarded-For": ip})

    proxy = response.json()["proxyCheck"]
    assert response.status_code == 200
    assert proxy["isProxy"] is True
    assert proxy["isVPN"] is True
    assert "proxycheck:VPN" in proxy["reasons"]
    assert "hosting-provider:AS14061 DigitalOcean, LLC" in proxy["reasons"]
    assert proxy["note"] == "ipinfo used"


def test_get_without_forwarding_uses_peer(use_classifier):
    use_classifier(RequestClassifier())

    data = client.get("/api/speed-test").json()

    assert data["client"]["ip"] == "testclient"
    assert data["client"]["forwardedFor"] is None


def test_unhandled_error_returns_500(use_classifier):
    class BrokenClassifier(RequestClassifier):
        async def classify(self, client):
            raise RuntimeError("lookup table exploded")

    use_classifier(BrokenClassifier())

    response = client.get("/api/speed-test")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "lookup table exploded"}
    _assert_cors(response)


def test_repeated_forwarded_for_lines_are_joined(use_classifier):
    use_classifier(RequestClassifier())

    response = client.get(
        "/api/speed-test",
        headers=[("X-Forwarded-For", "10.0.0.5"), ("X-Forwarded-For", "203.0.113.5")],
    )

    data = response.json()
    assert data["client"]["ip"] == "10.0.0.5"
    assert data["client"]["forwardedFor"] == "10.0.0.5, 203.0.113.5"
    assert "xff-multiple" in data["proxyCheck"]["reasons"]
    assert "xff-private-to-public" in data["proxyCheck"]["reasons"]
    assert data["proxyCheck"]["isProxy"] is True


def test_dependency_failure_keeps_json_error_contract():
    def _broken_classifier():
        raise ValueError("max_entries must be at least 1")

    app.dependency_overrides[get_request_classifier] = _broken_classifier
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/api/speed-test")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "max_entries must be at least 1"}
    _assert_cors(response)
