"""
Custom 404 page detection from the body of a deliberately non-existent URL,
cross-checked against the main page source, robots.txt and sitemap.xml.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from config import DEFAULT_404_INDICATORS, PAGE_404_NOT_FOUND, ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND
from extractors.text import is_text, parse_page_url
from models import AdditionalConditions, Custom404Result, Status

logger = logging.getLogger(__name__)

_NOT_FOUND_RE = re.compile(r"404|not found", re.IGNORECASE)


def detect_custom_404(
    main_html,
    page_url,
    robots_text,
    sitemap_text,
    probe_404_text,
    indicators: Iterable[str] = DEFAULT_404_INDICATORS,
) -> Custom404Result:
    """
    custom404 is "YES" when the probe body contains any indicator phrase
    (case-insensitive), "NO" otherwise, and "UNKNOWN" when there is no probe
    body to inspect. The additional conditions are informational only.
    """
    if not is_text(probe_404_text) or probe_404_text == PAGE_404_NOT_FOUND:
        logger.warning("detect_custom_404: no 404 probe body available for %r", page_url)
        return Custom404Result()

    probe = probe_404_text.lower()
    matched = [phrase for phrase in indicators if phrase.lower() in probe]

    conditions = AdditionalConditions(
        is_404_in_main_source_code=bool(is_text(main_html) and _NOT_FOUND_RE.search(main_html)),
        is_robots_blocked=_is_robots_blocked(robots_text, page_url),
        is_in_sitemap=_is_in_sitemap(sitemap_text, page_url),
    )

    return Custom404Result(
        custom404=Status.YES if matched else Status.NO,
        additional_conditions=conditions,
        matched_indicators=matched,
    )


def _is_robots_blocked(robots_text, page_url) -> bool:
    if not is_text(robots_text) or robots_text == ROBOTS_NOT_FOUND:
        return False

    parts = parse_page_url(page_url)
    if parts is None:
        return False

    # Literal path match after the directive, not robots.txt glob semantics
    path = parts.path or "/"
    pattern = re.compile(r"disallow\s*:\s*" + re.escape(path), re.IGNORECASE)
    return bool(pattern.search(robots_text))


def _is_in_sitemap(sitemap_text, page_url) -> bool:
    if not is_text(sitemap_text) or sitemap_text == SITEMAP_NOT_FOUND:
        return False
    if not is_text(page_url) or not page_url:
        return False
    return page_url in sitemap_text
