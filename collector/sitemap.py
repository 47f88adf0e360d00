"""
Parses sitemap.xml text (URL sets and sitemap indexes) with lxml.
"""
from __future__ import annotations

from lxml import etree

from models import SitemapData

_SM = "{http://www.sitemaps.org/schemas/sitemap/0.9}"
_MAX_URLS = 50_000

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def parse_sitemap_text(raw: str) -> SitemapData:
    """Parse a sitemap document; XML problems are recorded, never raised."""
    data = SitemapData()
    if not raw.strip():
        data.parse_errors.append("Empty sitemap document")
        return data

    root = _parse_xml(raw, data)
    if root is None:
        return data

    tag = _local_tag(root.tag)

    if tag == "sitemapindex":
        data.is_index = True
        for loc in _locs(root, "sitemap"):
            data.child_sitemaps.append(loc)

    elif tag == "urlset":
        for loc in _locs(root, "url"):
            if len(data.urls) >= _MAX_URLS:
                data.parse_errors.append(f"Sitemap truncated at {_MAX_URLS} URLs")
                break
            data.urls.append(loc)

    else:
        data.parse_errors.append(f"Unexpected root element <{tag}> in sitemap")

    return data


def _locs(root, entry: str) -> list[str]:
    locs: list[str] = []
    # Namespaced documents first; fall back to bare tags for sloppy sitemaps
    elems = list(root.iter(f"{_SM}{entry}")) or list(root.iter(entry))
    for elem in elems:
        loc = elem.find(f"{_SM}loc")
        if loc is None:
            loc = elem.find("loc")
        if loc is not None and loc.text and loc.text.strip():
            locs.append(loc.text.strip())
    return locs


def _parse_xml(raw: str, data: SitemapData):
    """Parse XML string, recording any parse errors."""
    try:
        return etree.fromstring(raw.strip().encode("utf-8"), parser=_PARSER)
    except etree.XMLSyntaxError as exc:
        data.parse_errors.append(f"XML parse error: {exc}")
        return None


def _local_tag(tag) -> str:
    """Strip namespace from tag name."""
    if not isinstance(tag, str):
        return str(tag)
    if "}" in tag:
        return tag.split("}")[1]
    return tag
