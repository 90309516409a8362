"""Shared test doubles: a manual clock and a request-recording httpx transport."""

from typing import Any, Callable, Dict, List

import httpx


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def calls(self) -> int:
        return len(self.requests)


def json_transport(payload: Any, status_code: int = 200) -> RecordingTransport:
    """Transport answering every request with the same JSON body."""
    return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))


def raising_transport(exc: Exception) -> RecordingTransport:
    """Transport whose every request fails with exc."""
    def _raise(request: httpx.Request) -> httpx.Response:
        raise exc
    return RecordingTransport(_raise)


def proxycheck_body(ip: str, proxy: str = "no", type_: str = "Residential") -> Dict[str, Any]:
    return {"status": "ok", ip: {"proxy": proxy, "type": type_, "asn": "AS64500"}}


def ipinfo_body(ip: str, org: str = "AS64500 Example ISP", country: str = "US") -> Dict[str, Any]:
    return {"ip": ip, "org": org, "country": country, "city": "Somewhere"}
