"""
Storefront backend: sitemap generation for the catalog.

Submodules:
    - core: settings and the document store adapter
    - schemas: pydantic models for sitemap entries
    - services: sitemap builder, XML renderer and revalidation cache
    - api: FastAPI routers
    - tasks: Celery background export
"""

__version__ = "1.0.0"
