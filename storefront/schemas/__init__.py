"""
Pydantic schemas for API request/response validation
"""

from .sitemap import ChangeFrequency, SlugRecord, UrlEntry, SitemapResponse

__all__ = [
    "ChangeFrequency", "SlugRecord", "UrlEntry", "SitemapResponse",
]
