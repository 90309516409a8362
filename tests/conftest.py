import pytest

from enrichment.cache import InMemoryLookupCache
from helpers import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryLookupCache(ttl_seconds=60.0, max_entries=16, clock=clock)
