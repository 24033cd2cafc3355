"""
Sitemap endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, Response, status
from datetime import timezone
from typing import Optional
import logging

from storefront.core.config import settings, SITE_URL
from storefront.core.document_store import DataSourceUnavailable, DocumentStore, get_document_store
from storefront.schemas.sitemap import SitemapResponse
from storefront.services.sitemap_builder import CatalogSitemapBuilder
from storefront.services.sitemap_cache import SitemapCache

logger = logging.getLogger(__name__)

router = APIRouter()

# Served at the site root, outside /api/v1
public_router = APIRouter()

_sitemap_cache: Optional[SitemapCache] = None


def get_sitemap_builder(store: DocumentStore = Depends(get_document_store)) -> CatalogSitemapBuilder:
    """
    Dependency to get a builder bound to the configured site origin
    """
    return CatalogSitemapBuilder(store, SITE_URL)


def get_sitemap_cache() -> SitemapCache:
    """
    Dependency to get the process-wide sitemap cache
    """
    global _sitemap_cache
    if _sitemap_cache is None:
        _sitemap_cache = SitemapCache(
            builder_factory=lambda: CatalogSitemapBuilder(get_document_store(), SITE_URL),
            revalidate_seconds=settings.SITEMAP_REVALIDATE_SECONDS,
            retry_seconds=settings.SITEMAP_RETRY_SECONDS,
        )
    return _sitemap_cache


@public_router.get("/sitemap.xml", include_in_schema=False)
async def sitemap_xml(cache: SitemapCache = Depends(get_sitemap_cache)):
    """
    Sitemap document for search engines
    """
    try:
        cached = await cache.get_xml()
    except DataSourceUnavailable as e:
        logger.error(f"Sitemap unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "Catalog unavailable", "collection": e.collection}
        )

    headers = {
        "Cache-Control": f"public, s-maxage={cache.revalidate_seconds}, stale-while-revalidate",
        "Last-Modified": cached.generated_at.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S GMT"),
    }
    if cached.stale:
        headers["X-Sitemap-Stale"] = "true"

    return Response(content=cached.xml, media_type="application/xml", headers=headers)


@router.get("/health")
async def sitemap_health():
    """Health check for sitemap endpoints"""
    return {"status": "healthy", "service": "sitemap"}


@router.get("/entries", response_model=SitemapResponse)
async def sitemap_entries(builder: CatalogSitemapBuilder = Depends(get_sitemap_builder)):
    """
    Build the sitemap now and return it as JSON (bypasses the cache)
    """
    try:
        entries = await builder.build_sitemap()
    except DataSourceUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "Catalog unavailable", "collection": e.collection}
        )

    return SitemapResponse(
        entries=entries,
        total=len(entries),
        generated_at=entries[0].last_modified,
    )


@router.post("/invalidate")
async def invalidate_sitemap(cache: SitemapCache = Depends(get_sitemap_cache)):
    """
    Drop the cached sitemap so the next request rebuilds it
    """
    cache.invalidate()
    return {"status": "invalidated"}
