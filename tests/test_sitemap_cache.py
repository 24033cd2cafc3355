# File: tests/test_sitemap_cache.py
import asyncio

import pytest

from conftest import BASE_URL, FIXED_NOW, InMemoryDocumentStore
from storefront.core.document_store import PRODUCTS_COLLECTION, DataSourceUnavailable
from storefront.services.sitemap_builder import CatalogSitemapBuilder
from storefront.services.sitemap_cache import SitemapCache

WINDOW = 43200


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


def _cache(store, clock):
    return SitemapCache(
        builder_factory=lambda: CatalogSitemapBuilder(store, BASE_URL, clock=lambda: FIXED_NOW),
        revalidate_seconds=WINDOW,
        clock=clock,
    )


@pytest.mark.asyncio()
async def test_fresh_copy_is_served_without_rebuilding(store, clock):
    cache = _cache(store, clock)

    first = await cache.get_xml()
    clock.now += WINDOW - 1
    second = await cache.get_xml()

    assert second is first
    assert store.calls.count(PRODUCTS_COLLECTION) == 1
    assert first.entry_count == 10
    assert first.generated_at == FIXED_NOW
    assert "/products/creme-hydratante" in first.xml


@pytest.mark.asyncio()
async def test_expired_copy_is_rebuilt(store, clock):
    cache = _cache(store, clock)

    await cache.get_xml()
    clock.now += WINDOW
    await cache.get_xml()

    assert store.calls.count(PRODUCTS_COLLECTION) == 2


@pytest.mark.asyncio()
async def test_stale_copy_served_when_rebuild_fails(store, clock):
    cache = _cache(store, clock)
    first = await cache.get_xml()

    store.failures[PRODUCTS_COLLECTION] = DataSourceUnavailable(PRODUCTS_COLLECTION, "down")
    clock.now += WINDOW + 1
    served = await cache.get_xml()

    assert served.stale is True
    assert served.xml == first.xml
    assert first.stale is False


@pytest.mark.asyncio()
async def test_failure_without_copy_propagates(clock):
    store = InMemoryDocumentStore(
        failures={PRODUCTS_COLLECTION: DataSourceUnavailable(PRODUCTS_COLLECTION, "down")}
    )
    cache = _cache(store, clock)

    with pytest.raises(DataSourceUnavailable):
        await cache.get_xml()


@pytest.mark.asyncio()
async def test_invalidate_forces_rebuild(store, clock):
    cache = _cache(store, clock)

    await cache.get_xml()
    cache.invalidate()
    await cache.get_xml()

    assert store.calls.count(PRODUCTS_COLLECTION) == 2


@pytest.mark.asyncio()
async def test_concurrent_callers_share_one_rebuild(store, clock):
    cache = _cache(store, clock)

    results = await asyncio.gather(*(cache.get_xml() for _ in range(5)))

    assert store.calls.count(PRODUCTS_COLLECTION) == 1
    assert all(r is results[0] for r in results)


@pytest.mark.asyncio()
async def test_concurrent_callers_share_one_failed_rebuild(store, clock):
    cache = _cache(store, clock)
    first = await cache.get_xml()

    store.failures[PRODUCTS_COLLECTION] = DataSourceUnavailable(PRODUCTS_COLLECTION, "down")
    clock.now += WINDOW
    results = await asyncio.gather(*(cache.get_xml() for _ in range(5)))

    assert store.calls.count(PRODUCTS_COLLECTION) == 2
    assert all(r.stale and r.xml == first.xml for r in results)


@pytest.mark.asyncio()
async def test_failed_rebuild_retried_after_retry_delay(store, clock):
    cache = SitemapCache(
        builder_factory=lambda: CatalogSitemapBuilder(store, BASE_URL, clock=lambda: FIXED_NOW),
        revalidate_seconds=WINDOW,
        retry_seconds=60,
        clock=clock,
    )
    await cache.get_xml()

    store.failures[PRODUCTS_COLLECTION] = DataSourceUnavailable(PRODUCTS_COLLECTION, "down")
    clock.now += WINDOW
    assert (await cache.get_xml()).stale is True

    clock.now += 59
    assert (await cache.get_xml()).stale is True
    assert store.calls.count(PRODUCTS_COLLECTION) == 2

    del store.failures[PRODUCTS_COLLECTION]
    clock.now += 1
    recovered = await cache.get_xml()

    assert recovered.stale is False
    assert store.calls.count(PRODUCTS_COLLECTION) == 3
