"""
Meta tag extractors: <title>, standard <meta> tags, Open Graph and Twitter Cards.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from extractors.text import TAG_ATTRS, clean_value, is_text, parse_attributes
from models import MetaTagReport, OpenGraphReport, TagValue, TwitterCardReport

logger = logging.getLogger(__name__)

_TITLE_RE = re.compile(rf"<title\b{TAG_ATTRS}>(.*?)</title\s*>", re.IGNORECASE | re.DOTALL)
_META_RE = re.compile(rf"<meta\b{TAG_ATTRS}>", re.IGNORECASE)
_CHARSET_PARAM_RE = re.compile(r"charset\s*=\s*([^\s;\"']+)", re.IGNORECASE)

_OPEN_GRAPH_FIELDS = {
    "title":       "og:title",
    "description": "og:description",
    "image":       "og:image",
    "url":         "og:url",
    "type":        "og:type",
    "sitename":    "og:site_name",
    "locale":      "og:locale",
}

_TWITTER_FIELDS = {
    "card":        "twitter:card",
    "title":       "twitter:title",
    "description": "twitter:description",
    "image":       "twitter:image",
    "site":        "twitter:site",
}


def extract_meta_tags(html) -> MetaTagReport:
    """
    Extract title, description, charset, robots, viewport and the
    site-verification tags. Never raises; missing tags come back as
    TagValue(content=None, length=0).
    """
    if not is_text(html):
        logger.warning("extract_meta_tags: expected str, got %s", type(html).__name__)
        return MetaTagReport()

    metas = _meta_attributes(html)
    title_match = _TITLE_RE.search(html)

    report = MetaTagReport(
        title=TagValue.of(clean_value(title_match.group(1)) if title_match else None),
        description=TagValue.of(_find_content(metas, "description")),
        charset=TagValue.of(_find_charset(metas)),
        robots=TagValue.of(_find_content(metas, "robots")),
        viewport=TagValue.of(_find_content(metas, "viewport")),
        google_site_verification=TagValue.of(_find_content(metas, "google-site-verification")),
        facebook_domain_verification=TagValue.of(_find_content(metas, "facebook-domain-verification")),
    )
    logger.debug("Meta tags: title=%r description_length=%d", report.title.content, report.description.length)
    return report


def extract_open_graph(html) -> OpenGraphReport:
    if not is_text(html):
        logger.warning("extract_open_graph: expected str, got %s", type(html).__name__)
        return OpenGraphReport()

    metas = _meta_attributes(html)
    return OpenGraphReport(**{
        field: _find_content(metas, key, keys=("property", "name"))
        for field, key in _OPEN_GRAPH_FIELDS.items()
    })


def extract_twitter_card(html) -> TwitterCardReport:
    if not is_text(html):
        logger.warning("extract_twitter_card: expected str, got %s", type(html).__name__)
        return TwitterCardReport()

    metas = _meta_attributes(html)
    return TwitterCardReport(**{
        field: _find_content(metas, key, keys=("name", "property"))
        for field, key in _TWITTER_FIELDS.items()
    })


# ── Helpers ───────────────────────────────────────────────────────────────────

def _meta_attributes(html: str) -> list[dict[str, str]]:
    return [parse_attributes(m.group(0)) for m in _META_RE.finditer(html)]


def _find_content(
    metas: list[dict[str, str]],
    key: str,
    keys: tuple[str, ...] = ("name", "property"),
) -> Optional[str]:
    """Content of the first <meta> whose name/property equals `key`."""
    for attrs in metas:
        if "content" not in attrs:
            continue
        if any(attrs.get(k, "").strip().lower() == key for k in keys):
            return clean_value(attrs["content"])
    return None


def _find_charset(metas: list[dict[str, str]]) -> Optional[str]:
    for attrs in metas:
        if "charset" in attrs:
            return clean_value(attrs["charset"])

    # <meta http-equiv="Content-Type" content="text/html; charset=utf-8">
    for attrs in metas:
        if attrs.get("http-equiv", "").strip().lower() == "content-type":
            match = _CHARSET_PARAM_RE.search(attrs.get("content", ""))
            if match:
                return clean_value(match.group(1))
    return None
