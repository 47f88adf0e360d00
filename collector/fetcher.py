"""
HTTP fetcher. Retrieves the page HTML plus robots.txt, sitemap.xml and a
deliberately missing URL (to elicit the site's 404 page) into one RawPage.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests

from config import (
    ANCILLARY_FETCH_WORKERS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    PAGE_404_NOT_FOUND,
    PROBE_404_PATH,
    ROBOTS_NOT_FOUND,
    SITEMAP_NOT_FOUND,
)
from extractors.text import origin_of, parse_page_url
from models import RawPage

logger = logging.getLogger(__name__)


def fetch_page_bundle(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: int = DEFAULT_REQUEST_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> RawPage:
    """
    Fetch everything one audit needs. A failing ancillary resource degrades
    to its sentinel text; a failing main page leaves html empty and sets
    fetch_error. Nothing here raises for network problems.
    """
    page = RawPage(
        url=url,
        robots_text=ROBOTS_NOT_FOUND,
        sitemap_text=SITEMAP_NOT_FOUND,
        probe_404_text=PAGE_404_NOT_FOUND,
    )

    parts = parse_page_url(url)
    if parts is None:
        page.fetch_error = f"Invalid URL: {url!r}"
        logger.warning("fetch_page_bundle: %s", page.fetch_error)
        return page

    session = session or _make_session(user_agent)
    origin = origin_of(parts)

    try:
        resp = session.get(url, timeout=timeout, allow_redirects=True)
        resp.raise_for_status()
        page.html = resp.text
    except requests.RequestException as exc:
        page.fetch_error = f"Failed to fetch the source code: {exc}"
        logger.warning("fetch_page_bundle: %s", page.fetch_error)
        return page

    with ThreadPoolExecutor(max_workers=ANCILLARY_FETCH_WORKERS) as pool:
        robots = pool.submit(_fetch_text, session, f"{origin}/robots.txt", timeout)
        sitemap = pool.submit(_fetch_text, session, f"{origin}/sitemap.xml", timeout)
        probe = pool.submit(_fetch_probe, session, f"{origin}{PROBE_404_PATH}", timeout)

        page.robots_text = _or_sentinel(robots.result(), ROBOTS_NOT_FOUND)
        page.sitemap_text = _or_sentinel(sitemap.result(), SITEMAP_NOT_FOUND)
        page.probe_404_text = probe.result() or PAGE_404_NOT_FOUND

    logger.info(
        "Fetched %s (%d bytes HTML, robots=%s, sitemap=%s)",
        url, len(page.html),
        page.robots_text != ROBOTS_NOT_FOUND,
        page.sitemap_text != SITEMAP_NOT_FOUND,
    )
    return page


def _make_session(user_agent: str) -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    return session


def _fetch_text(session: requests.Session, url: str, timeout: int) -> Optional[str]:
    """Body of a 200 response, or None."""
    try:
        resp = session.get(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        logger.info("Could not fetch %s: %s", url, exc)
        return None

    if resp.status_code != 200:
        logger.info("%s returned HTTP %d", url, resp.status_code)
        return None
    return resp.text


def _fetch_probe(session: requests.Session, url: str, timeout: int) -> Optional[str]:
    """
    Body served for a missing URL. A 404 is the expected answer; a 2xx/3xx
    body is kept too (soft 404s). Any other error status yields None.
    """
    try:
        resp = session.get(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        logger.info("404 probe %s failed: %s", url, exc)
        return None

    if resp.status_code == 404 or resp.status_code < 400:
        return resp.text
    logger.info("404 probe %s returned HTTP %d", url, resp.status_code)
    return None


def _or_sentinel(text: Optional[str], sentinel: str) -> str:
    """A present but empty file is still present; only a failed fetch is not."""
    return sentinel if text is None else text
