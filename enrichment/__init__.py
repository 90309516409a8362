# Enrichment Package
from enrichment.cache import LookupCache, InMemoryLookupCache
from enrichment.providers import ProxyCheckProvider, IpInfoProvider

__all__ = ["LookupCache", "InMemoryLookupCache", "ProxyCheckProvider", "IpInfoProvider"]
