"""
Anchor analysis: link classification, URL hygiene checks and social network
link detection.
"""
from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import SplitResult

from config import SOCIAL_PLATFORMS
from extractors.text import (
    decode_entities,
    hostname_of,
    is_text,
    iter_anchors,
    opening_tag,
    origin_of,
    parse_attributes,
    parse_page_url,
    strip_www,
    to_absolute,
)
from models import LinkRecord, LinkType, SocialLink, UrlHygieneRecord

logger = logging.getLogger(__name__)

_KNOWN_SCHEME_RE = re.compile(r"^(?:https?|mailto|tel|ftp):", re.IGNORECASE)
_SCHEME_PREFIX_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)
_HIDDEN_WORD_RE = re.compile(r"\bhidden\b", re.IGNORECASE)


# ── Link extraction & classification ──────────────────────────────────────────

def extract_links(html, page_url) -> list[LinkRecord]:
    """
    Enumerate every anchor in document order and classify it relative to
    `page_url`. Returns [] when the HTML is not text or the page URL is not
    an absolute http(s) URL.
    """
    if not is_text(html):
        logger.warning("extract_links: expected str, got %s", type(html).__name__)
        return []

    base = parse_page_url(page_url)
    if base is None:
        logger.warning("extract_links: cannot use %r as a base URL", page_url)
        return []

    page_host = strip_www(base.hostname)
    records: list[LinkRecord] = []

    for seq, (element, raw_href) in enumerate(iter_anchors(html), start=1):
        link, link_type = classify_href(decode_entities(raw_href).strip(), base, page_host)
        records.append(LinkRecord(
            sequence_no=seq,
            link=link,
            link_type=link_type,
            is_nofollow=_is_nofollow(element),
            is_hidden=_is_hidden(element),
            raw_element=element,
        ))

    logger.debug(
        "Links on %s: %d total, %d internal, %d external",
        page_url, len(records),
        sum(1 for r in records if r.link_type == LinkType.INTERNAL),
        sum(1 for r in records if r.link_type == LinkType.EXTERNAL),
    )
    return records


def classify_href(href: str, base: SplitResult, page_host: str) -> tuple[str, str]:
    """
    Resolve a decoded href against the page and return (link, LinkType).

    Precedence: fragment → root-relative → tel:/mailto: → scheme-less →
    absolute. Unparsable URLs keep their original text and are typed Invalid.
    """
    if href.startswith("#"):
        return href, LinkType.ANCHOR

    link = href
    if link.startswith("//"):
        link = f"{base.scheme}:{link}"
    elif link.startswith("/"):
        link = f"{origin_of(base)}{link}"

    lowered = link.lower()
    if lowered.startswith("tel:"):
        return link, LinkType.TELEPHONE
    if lowered.startswith("mailto:"):
        return link, LinkType.EMAIL

    if not _KNOWN_SCHEME_RE.match(link):
        link = f"{base.scheme}://{link}"

    host = hostname_of(link)
    if host is None:
        return href, LinkType.INVALID

    if strip_www(host) == page_host:
        return link, LinkType.INTERNAL
    return link, LinkType.EXTERNAL


def _is_nofollow(element: str) -> bool:
    rel = parse_attributes(opening_tag(element)).get("rel", "")
    return "nofollow" in rel.lower().split()


def _is_hidden(element: str) -> bool:
    if _HIDDEN_STYLE_RE.search(element):
        return True
    # The bare word only counts inside the tag itself, not in the link text
    return bool(_HIDDEN_WORD_RE.search(opening_tag(element)))


# ── Social platforms ──────────────────────────────────────────────────────────

def social_platform(href: str) -> Optional[str]:
    """Platform name when the href's host belongs to a known social network."""
    host = hostname_of(to_absolute(href))
    if host is None:
        return None
    host = strip_www(host)
    for domain, platform in SOCIAL_PLATFORMS.items():
        if host == domain or host.endswith("." + domain):
            return platform
    return None


def detect_social_links(html) -> list[SocialLink]:
    if not is_text(html):
        logger.warning("detect_social_links: expected str, got %s", type(html).__name__)
        return []

    found: list[SocialLink] = []
    for _, raw_href in iter_anchors(html):
        href = decode_entities(raw_href).strip()
        if not href:
            continue
        platform = social_platform(href)
        if platform:
            found.append(SocialLink(s_no=len(found) + 1, link=to_absolute(href), platform=platform))
    return found


# ── URL hygiene ───────────────────────────────────────────────────────────────

def check_url_vulnerability(html) -> list[UrlHygieneRecord]:
    """
    Lowercase / underscore / duplicate-slash checks for every anchor href,
    skipping links to social platforms.
    """
    if not is_text(html):
        logger.warning("check_url_vulnerability: expected str, got %s", type(html).__name__)
        return []

    records: list[UrlHygieneRecord] = []
    for _, raw_href in iter_anchors(html):
        href = decode_entities(raw_href).strip()
        if social_platform(href):
            continue

        is_lowercase = href == href.lower()
        has_no_underscores = "_" not in href
        has_no_duplicate_slashes = "//" not in _SCHEME_PREFIX_RE.sub("", href, count=1)

        records.append(UrlHygieneRecord(
            link=href,
            is_lowercase=is_lowercase,
            has_no_underscores=has_no_underscores,
            has_no_duplicate_slashes=has_no_duplicate_slashes,
            is_valid=is_lowercase and has_no_underscores and has_no_duplicate_slashes,
        ))
    return records
