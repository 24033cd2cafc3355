"""
Revalidating cache for the rendered sitemap

The sitemap is rebuilt at most once per revalidation window. When a rebuild
fails because the catalog cannot be read, the previous document keeps being
served until the store comes back.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional

from storefront.core.document_store import DataSourceUnavailable
from storefront.services.sitemap_builder import CatalogSitemapBuilder
from storefront.services.sitemap_renderer import render_sitemap_xml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedSitemap:
    xml: str
    generated_at: datetime
    entry_count: int
    built_at: float
    stale: bool = False


class SitemapCache:
    """Holds the last rendered sitemap for a fixed revalidation window"""

    def __init__(self, builder_factory: Callable[[], CatalogSitemapBuilder],
                 revalidate_seconds: int = 43200,
                 retry_seconds: int = 60,
                 clock: Callable[[], float] = time.monotonic):
        self.builder_factory = builder_factory
        self.revalidate_seconds = revalidate_seconds
        self.retry_seconds = min(retry_seconds, revalidate_seconds)
        self.clock = clock
        self._cached: Optional[CachedSitemap] = None
        self._lock = asyncio.Lock()

    def _is_fresh(self, cached: Optional[CachedSitemap]) -> bool:
        return cached is not None and self.clock() - cached.built_at < self.revalidate_seconds

    async def get_xml(self) -> CachedSitemap:
        """
        Return the cached sitemap, rebuilding it if the window has expired

        Raises:
            DataSourceUnavailable: rebuild failed and nothing was cached yet
        """
        if self._is_fresh(self._cached):
            return self._cached

        async with self._lock:
            # Another caller may have rebuilt while we waited
            if self._is_fresh(self._cached):
                return self._cached

            try:
                entries = await self.builder_factory().build_sitemap()
            except DataSourceUnavailable as e:
                if self._cached is None:
                    raise
                logger.warning(f"Sitemap rebuild failed, serving stale copy: {e}")
                # Stale copy counts as fresh until the next retry is due
                self._cached = replace(
                    self._cached,
                    stale=True,
                    built_at=self.clock() - self.revalidate_seconds + self.retry_seconds,
                )
                return self._cached

            generated_at = entries[0].last_modified
            self._cached = CachedSitemap(
                xml=render_sitemap_xml(entries),
                generated_at=generated_at,
                entry_count=len(entries),
                built_at=self.clock(),
            )
            logger.info("Sitemap cached (%d entries)", len(entries))
            return self._cached

    def invalidate(self) -> None:
        """Force the next call to rebuild"""
        self._cached = None
        logger.info("Sitemap cache invalidated")
