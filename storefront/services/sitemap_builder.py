"""
Catalog sitemap builder

Reads categories and products from the document store and merges them with
the static storefront pages into an ordered list of sitemap entries.
"""

import asyncio
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, List, NamedTuple, Optional

from pydantic import ValidationError

from storefront.core.document_store import (
    CATEGORIES_COLLECTION,
    PRODUCTS_COLLECTION,
    DataSourceUnavailable,
    DocumentStore,
)
from storefront.schemas.sitemap import ChangeFrequency, SlugRecord, UrlEntry

logger = logging.getLogger(__name__)


class StaticPage(NamedTuple):
    path: str
    change_frequency: ChangeFrequency
    priority: float


STATIC_PAGES = (
    StaticPage("/", ChangeFrequency.DAILY, 1.0),
    StaticPage("/categories", ChangeFrequency.DAILY, 0.9),
    StaticPage("/promotions", ChangeFrequency.DAILY, 0.9),
    StaticPage("/search", ChangeFrequency.MONTHLY, 0.5),
    StaticPage("/livraison", ChangeFrequency.MONTHLY, 0.6),
    StaticPage("/conditions", ChangeFrequency.MONTHLY, 0.6),
    StaticPage("/confidentialite", ChangeFrequency.MONTHLY, 0.6),
    StaticPage("/contact", ChangeFrequency.MONTHLY, 0.6),
)

CATEGORY_CHANGE_FREQUENCY = ChangeFrequency.DAILY
CATEGORY_PRIORITY = 0.9
PRODUCT_CHANGE_FREQUENCY = ChangeFrequency.WEEKLY
PRODUCT_PRIORITY = 0.8


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_slug_record(document: Any) -> Optional[SlugRecord]:
    """
    Narrow an opaque store document to a SlugRecord

    Args:
        document: Payload returned by the document store

    Returns:
        SlugRecord, or None when the document has no usable slug
        (absent, null, empty or not a string)
    """
    if not isinstance(document, Mapping):
        return None
    try:
        return SlugRecord.model_validate(dict(document))
    except ValidationError:
        logger.debug("Skipping document without a usable slug: %r", document.get("slug"))
        return None


class CatalogSitemapBuilder:
    """Builds the full sitemap listing for one generation cycle"""

    def __init__(self, store: DocumentStore, base_url: str,
                 clock: Callable[[], datetime] = _utcnow):
        """
        Args:
            store: Document store holding the catalog collections
            base_url: Public origin of the site, e.g. https://beautydiscount.ma
            clock: Source of the generation timestamp
        """
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.clock = clock

    async def build_sitemap(self) -> List[UrlEntry]:
        """
        Build the sitemap: static pages, then categories, then products

        Returns:
            Entries in sitemap order, all stamped with the same timestamp

        Raises:
            DataSourceUnavailable: either collection could not be read
        """
        now = self.clock()

        category_slugs, product_slugs = await self._fetch_catalog_slugs()

        entries = [
            self._entry(page.path, now, page.change_frequency, page.priority)
            for page in STATIC_PAGES
        ]
        entries.extend(
            self._entry(f"/categories/{slug}", now, CATEGORY_CHANGE_FREQUENCY, CATEGORY_PRIORITY)
            for slug in category_slugs
        )
        entries.extend(
            self._entry(f"/products/{slug}", now, PRODUCT_CHANGE_FREQUENCY, PRODUCT_PRIORITY)
            for slug in product_slugs
        )

        logger.info(
            f"Built sitemap with {len(entries)} entries "
            f"({len(category_slugs)} categories, {len(product_slugs)} products)"
        )
        return entries

    async def _fetch_catalog_slugs(self) -> List[List[str]]:
        """Fetch both collections concurrently; both must succeed"""
        categories_task = asyncio.ensure_future(self._fetch_slugs(CATEGORIES_COLLECTION))
        products_task = asyncio.ensure_future(self._fetch_slugs(PRODUCTS_COLLECTION))

        try:
            return await asyncio.gather(categories_task, products_task)
        except Exception:
            for task in (categories_task, products_task):
                task.cancel()
            raise

    async def _fetch_slugs(self, collection_name: str) -> List[str]:
        try:
            documents = await self.store.list_documents(collection_name)
        except DataSourceUnavailable:
            raise
        except Exception as e:
            logger.error(f"Unexpected error reading '{collection_name}': {e}")
            raise DataSourceUnavailable(collection_name, str(e)) from e

        slugs = []
        for document in documents:
            record = parse_slug_record(document)
            if record is not None:
                slugs.append(record.slug)

        skipped = len(documents) - len(slugs)
        if skipped:
            logger.info("Skipped %d '%s' documents without a slug", skipped, collection_name)
        return slugs

    def _entry(self, path: str, now: datetime, change_frequency: ChangeFrequency,
               priority: float) -> UrlEntry:
        return UrlEntry(
            url=f"{self.base_url}{path}",
            last_modified=now,
            change_frequency=change_frequency,
            priority=priority,
        )
