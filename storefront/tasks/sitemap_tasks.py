"""
Background tasks for exporting the sitemap
"""

import logging
import asyncio
from typing import Dict, Any, Optional
from celery import shared_task

from storefront.core.config import settings, SITE_URL
from storefront.core.document_store import FirestoreDocumentStore
from storefront.services.sitemap_export import export_catalog_sitemap

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def export_sitemap(self, output_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Rebuild the sitemap and write it to the static output path

    Args:
        output_path: Destination file (defaults to SITEMAP_OUTPUT_PATH)

    Returns:
        Dict with export results
    """
    output_path = output_path or settings.SITEMAP_OUTPUT_PATH

    try:
        # One Firestore client per event loop
        store = FirestoreDocumentStore(
            project_id=settings.FIRESTORE_PROJECT_ID,
            database=settings.FIRESTORE_DATABASE,
        )

        # Run async export in sync context
        result = asyncio.run(export_catalog_sitemap(store, SITE_URL, output_path))

        logger.info(f"Sitemap export completed: {result['entries']} entries -> {output_path}")
        return result

    except Exception as e:
        logger.error(f"Error exporting sitemap to {output_path}: {e}")
        # Retry with exponential backoff
        raise self.retry(exc=e, countdown=60 * (2 ** self.request.retries))
