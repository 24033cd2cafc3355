# File: tests/conftest.py
import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from storefront.core.document_store import CATEGORIES_COLLECTION, PRODUCTS_COLLECTION
from storefront.services.sitemap_builder import CatalogSitemapBuilder

BASE_URL = "https://shop.test"
FIXED_NOW = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


class InMemoryDocumentStore:
    """
    Document store fake: serves fixed collections, or raises the
    configured exception for a collection.
    """

    def __init__(self, collections: Optional[Dict[str, List[Any]]] = None,
                 failures: Optional[Dict[str, Exception]] = None):
        self.collections = collections or {}
        self.failures = failures or {}
        self.calls: List[str] = []
        self.closed = False

    async def list_documents(self, collection_name: str) -> List[Any]:
        self.calls.append(collection_name)
        await asyncio.sleep(0)
        if collection_name in self.failures:
            raise self.failures[collection_name]
        return list(self.collections.get(collection_name, []))

    async def check_connection(self) -> bool:
        return not self.failures

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def catalog() -> Dict[str, List[Any]]:
    """
    Catalog from the storefront: one category, two products of which
    one has a null slug.
    """
    return {
        CATEGORIES_COLLECTION: [{"slug": "soins-visage", "name": "Soins visage"}],
        PRODUCTS_COLLECTION: [
            {"slug": "creme-hydratante", "status": "active"},
            {"slug": None, "status": "draft"},
        ],
    }


@pytest.fixture()
def store(catalog) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(catalog)


@pytest.fixture()
def builder(store) -> CatalogSitemapBuilder:
    return CatalogSitemapBuilder(store, BASE_URL, clock=lambda: FIXED_NOW)
