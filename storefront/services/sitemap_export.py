"""
Static sitemap export

Writes the rendered sitemap to disk so it can be served as a static file.
"""

import logging
import os
import tempfile
from typing import Any, Dict

from storefront.core.document_store import DocumentStore
from storefront.services.sitemap_builder import CatalogSitemapBuilder
from storefront.services.sitemap_renderer import render_sitemap_xml

logger = logging.getLogger(__name__)


async def export_sitemap_file(builder: CatalogSitemapBuilder, output_path: str) -> Dict[str, Any]:
    """
    Build the sitemap and write it to output_path

    The file is replaced atomically, so readers never see a partial sitemap.
    Nothing is written if the build fails.

    Args:
        builder: Sitemap builder to run
        output_path: Destination file

    Returns:
        Export summary dictionary
    """
    entries = await builder.build_sitemap()
    xml = render_sitemap_xml(entries)

    directory = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".sitemap_", suffix=".xml")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(xml)
        os.replace(tmp_path, output_path)
    except OSError:
        os.unlink(tmp_path)
        raise

    logger.info("Sitemap exported to %s (%d entries)", output_path, len(entries))
    return {
        "status": "completed",
        "output_path": output_path,
        "entries": len(entries),
        "generated_at": entries[0].last_modified.isoformat(),
    }


async def export_catalog_sitemap(store: DocumentStore, base_url: str, output_path: str) -> Dict[str, Any]:
    """
    One-off export against a store opened for this run; the store is
    closed afterwards whether or not the export succeeded.
    """
    try:
        return await export_sitemap_file(CatalogSitemapBuilder(store, base_url), output_path)
    finally:
        await store.close()
