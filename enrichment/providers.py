"""
Enrichment Providers

Best-effort outbound lookups against IP-intelligence services.

DESIGN RULES (NON-NEGOTIABLE):
- HTTP GET only
- Explicit timeout on every call
- Never raise exceptions (a failed lookup is simply no result)
- Log failures as warnings only
- Consult the injected cache before touching the network
- Only successful, well-formed responses are cached
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from enrichment.cache import LookupCache, cache_key


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 3.0
USER_AGENT = "speed-test"


def quote_ip(ip: str) -> str:
    """Percent-encode an address for use as a single URL path segment."""
    return quote(ip, safe=":.")


@dataclass(frozen=True)
class ProxyCheckResult:
    """Parsed proxy/VPN lookup answer."""
    is_proxy: bool
    type: Optional[str] = None


@dataclass(frozen=True)
class IpInfoResult:
    """Parsed organization/country lookup answer."""
    ip: str
    org: Optional[str] = None
    country: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"ip": self.ip, "org": self.org, "country": self.country}


class CachedLookupProvider(ABC):
    """
    Base for cached, fail-open lookups.

    Subclasses build the request and parse the body; this class owns
    caching, the HTTP client and failure handling.
    """

    kind: str = "lookup"

    def __init__(
        self,
        cache: LookupCache,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            cache: Shared lookup cache
            timeout_seconds: Per-call timeout (connect, read, write, pool)
            transport: Optional httpx transport (tests inject a mock)
        """
        self._cache = cache
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @abstractmethod
    def build_url(self, ip: str) -> str:
        pass

    def build_params(self, ip: str) -> Dict[str, str]:
        return {}

    @abstractmethod
    def parse(self, ip: str, payload: Any) -> Optional[Any]:
        """Turn a decoded JSON body into a result, or None if malformed."""
        pass

    async def lookup(self, ip: str) -> Optional[Any]:
        """
        Resolve a lookup for an address.

        Returns:
            The parsed result (possibly from cache), or None on any failure
        """
        key = cache_key(self.kind, ip)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("[%s] cache hit for %s", self.kind, ip)
            return cached

        result = await self._fetch(ip)
        if result is not None:
            self._cache.set(key, result)
        return result

    async def _fetch(self, ip: str) -> Optional[Any]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
                headers={"User-Agent": USER_AGENT},
            ) as client:
                response = await client.get(self.build_url(ip), params=self.build_params(ip))

            if not response.is_success:
                logger.warning("[%s] lookup for %s returned HTTP %s", self.kind, ip, response.status_code)
                return None

            result = self.parse(ip, response.json())
            if result is None:
                logger.warning("[%s] malformed response for %s", self.kind, ip)
            return result

        except httpx.TimeoutException:
            logger.warning("[%s] timeout looking up %s", self.kind, ip)
        except httpx.HTTPError as e:
            logger.warning("[%s] lookup for %s failed: %s", self.kind, ip, e)
        except ValueError as e:
            logger.warning("[%s] invalid JSON for %s: %s", self.kind, ip, e)
        except Exception as e:
            logger.warning("[%s] unexpected error looking up %s: %s", self.kind, ip, e)
        return None


class ProxyCheckProvider(CachedLookupProvider):
    """
    proxycheck.io v2 lookup.

    Works without a key (anonymous, rate limited) or with one.
    """

    kind = "proxycheck"

    def __init__(
        self,
        cache: LookupCache,
        api_key: Optional[str] = None,
        base_url: str = "https://proxycheck.io/v2",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(cache, timeout_seconds=timeout_seconds, transport=transport)
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    def build_url(self, ip: str) -> str:
        return f"{self._base_url}/{quote_ip(ip)}"

    def build_params(self, ip: str) -> Dict[str, str]:
        params = {"vpn": "1", "asn": "1"}
        if self._api_key:
            params["key"] = self._api_key
        return params

    def parse(self, ip: str, payload: Any) -> Optional[ProxyCheckResult]:
        # Body is keyed by the queried address: {"status": "ok", "<ip>": {...}}
        if not isinstance(payload, dict):
            return None
        info = payload.get(ip)
        if not isinstance(info, dict):
            return None
        proxy_type = info.get("type")
        return ProxyCheckResult(
            is_proxy=info.get("proxy") == "yes",
            type=str(proxy_type).upper() if proxy_type else None,
        )


class IpInfoProvider(CachedLookupProvider):
    """ipinfo.io organization/ASN lookup. Requires a token."""

    kind = "ipinfo"

    def __init__(
        self,
        cache: LookupCache,
        token: str,
        base_url: str = "https://ipinfo.io",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(cache, timeout_seconds=timeout_seconds, transport=transport)
        self._token = token
        self._base_url = base_url.rstrip("/")

    def build_url(self, ip: str) -> str:
        return f"{self._base_url}/{quote_ip(ip)}/json"

    def build_params(self, ip: str) -> Dict[str, str]:
        return {"token": self._token}

    def parse(self, ip: str, payload: Any) -> Optional[IpInfoResult]:
        if not isinstance(payload, dict):
            return None
        org = payload.get("org")
        country = payload.get("country")
        return IpInfoResult(
            ip=str(payload.get("ip") or ip),
            org=str(org) if org else None,
            country=str(country) if country else None,
        )
