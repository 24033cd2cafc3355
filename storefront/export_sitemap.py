"""
Export Runner: builds the sitemap from the live catalog and writes it to disk.

Usage:
    python -m storefront.export_sitemap [output_path]
"""

import asyncio
import logging
import sys

from storefront.core.config import settings, SITE_URL
from storefront.core.document_store import DataSourceUnavailable, FirestoreDocumentStore
from storefront.services.sitemap_export import export_catalog_sitemap


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    output_path = argv[0] if argv else settings.SITEMAP_OUTPUT_PATH

    logging.basicConfig(level=settings.LOG_LEVEL)

    print("=" * 60)
    print("  Sitemap Export")
    print("=" * 60)
    print(f"\n  Site   : {SITE_URL}")
    print(f"  Output : {output_path}\n")

    store = FirestoreDocumentStore(
        project_id=settings.FIRESTORE_PROJECT_ID,
        database=settings.FIRESTORE_DATABASE,
    )
    try:
        result = asyncio.run(export_catalog_sitemap(store, SITE_URL, output_path))
    except DataSourceUnavailable as e:
        print(f"[FAIL] {e}")
        return 1

    print(f"[OK] {result['entries']} URLs written (generated {result['generated_at']})")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
