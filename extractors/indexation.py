"""
Indexation check: robots.txt and sitemap.xml presence, their rules and
whether the audited page is crawlable / listed.
"""
from __future__ import annotations

import logging

from collector.robots import is_url_allowed, parse_robots_text
from collector.sitemap import parse_sitemap_text
from config import ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND
from extractors.text import is_text, parse_page_url
from models import IndexationReport

logger = logging.getLogger(__name__)


def check_indexation(robots_text, sitemap_text, page_url=None) -> IndexationReport:
    report = IndexationReport(
        robots_found=_is_present(robots_text, ROBOTS_NOT_FOUND),
        sitemap_found=_is_present(sitemap_text, SITEMAP_NOT_FOUND),
    )
    page_ok = parse_page_url(page_url) is not None

    if report.robots_found:
        robots = parse_robots_text(robots_text)
        report.robots_content = robots_text
        report.disallow_rules = robots.disallow_rules
        report.allow_rules = robots.allow_rules
        report.declared_sitemaps = robots.sitemap_urls
        report.crawl_delay = robots.crawl_delay
        report.parse_errors.extend(f"robots.txt: {e}" for e in robots.parse_errors)
        if page_ok:
            report.page_allowed = is_url_allowed(page_url, robots)

    if report.sitemap_found:
        sitemap = parse_sitemap_text(sitemap_text)
        report.sitemap_content = sitemap_text
        report.sitemap_urls = sitemap.urls + sitemap.child_sitemaps
        report.parse_errors.extend(f"sitemap.xml: {e}" for e in sitemap.parse_errors)
        if page_ok:
            report.page_in_sitemap = _url_listed(page_url, sitemap.urls)

    logger.debug(
        "Indexation: robots=%s sitemap=%s (%d URLs)",
        report.robots_found, report.sitemap_found, report.sitemap_url_count,
    )
    return report


def _is_present(text, sentinel: str) -> bool:
    return is_text(text) and text != sentinel


def _url_listed(page_url: str, urls: list[str]) -> bool:
    target = page_url.rstrip("/")
    return any(u.rstrip("/") == target for u in urls)
