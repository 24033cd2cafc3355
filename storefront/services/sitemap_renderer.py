"""
XML sitemap renderer

Serializes sitemap entries into a sitemaps.org <urlset> document.
"""

from typing import Iterable
from xml.etree.ElementTree import Element, SubElement, tostring

from storefront.schemas.sitemap import UrlEntry

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _add_url(urlset: Element, entry: UrlEntry) -> None:
    """Add a <url> entry to the urlset."""
    url_el = SubElement(urlset, "url")
    SubElement(url_el, "loc").text = entry.url
    SubElement(url_el, "lastmod").text = entry.last_modified.isoformat()
    SubElement(url_el, "changefreq").text = entry.change_frequency.value
    SubElement(url_el, "priority").text = f"{entry.priority:.1f}"


def render_sitemap_xml(entries: Iterable[UrlEntry]) -> str:
    """Render entries, in order, as a full sitemap.xml string."""
    urlset = Element("urlset")
    urlset.set("xmlns", SITEMAP_NAMESPACE)

    for entry in entries:
        _add_url(urlset, entry)

    return XML_DECLARATION + tostring(urlset, encoding="unicode")
