"""
FastAPI Dependencies

All object creation happens here, not per request.
The lookup cache is built once per process and shared by both
providers, so a warm instance reuses lookups across requests.

RULE: the route calls exactly one entry point, RequestClassifier.classify()
"""

from functools import lru_cache
from typing import Optional

from app.core.config import Settings, settings
from detection.classifier import RequestClassifier
from enrichment.cache import InMemoryLookupCache, LookupCache
from enrichment.providers import IpInfoProvider, ProxyCheckProvider


def build_classifier(
    config: Settings,
    cache: Optional[LookupCache] = None,
) -> RequestClassifier:
    """
    Wire a RequestClassifier from settings.

    - ProxyCheckProvider: always built unless disabled (anonymous without a key)
    - IpInfoProvider: built only when a token is configured

    Args:
        config: Service settings
        cache: Lookup cache (a new in-memory cache if not provided)

    Returns:
        RequestClassifier: The detection entry point
    """
    cache = cache or InMemoryLookupCache(
        ttl_seconds=config.lookup_cache_ttl_seconds,
        max_entries=config.lookup_cache_max_entries,
    )

    proxycheck = None
    if config.proxycheck_enabled:
        proxycheck = ProxyCheckProvider(
            cache,
            api_key=config.proxycheck_key,
            base_url=config.proxycheck_base_url,
            timeout_seconds=config.lookup_timeout_seconds,
        )

    ipinfo = None
    if config.ipinfo_token:
        ipinfo = IpInfoProvider(
            cache,
            token=config.ipinfo_token,
            base_url=config.ipinfo_base_url,
            timeout_seconds=config.lookup_timeout_seconds,
        )

    return RequestClassifier(proxycheck=proxycheck, ipinfo=ipinfo)


@lru_cache(maxsize=1)
def get_request_classifier() -> RequestClassifier:
    """Create and cache the process-wide RequestClassifier singleton."""
    return build_classifier(settings)
