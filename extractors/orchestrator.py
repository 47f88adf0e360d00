"""
Runs every check over one fetched page and collects the results, keyed by
check name, into an AuditResult.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from extractors.custom404 import detect_custom_404
from extractors.domain import analyze_domain
from extractors.headings import extract_headings
from extractors.images import extract_images
from extractors.indexation import check_indexation
from extractors.links import check_url_vulnerability, detect_social_links, extract_links
from extractors.meta import extract_meta_tags, extract_open_graph, extract_twitter_card
from extractors.search import extract_search_optimization
from extractors.security import audit_target_blank_security
from models import AuditResult, RawPage

logger = logging.getLogger(__name__)


# Check name → function of the page bundle, in dashboard order
CHECKS: list[tuple[str, Callable[[RawPage], Any]]] = [
    ("Meta Tags",           lambda p: extract_meta_tags(p.html)),
    ("Indexation",          lambda p: check_indexation(p.robots_text, p.sitemap_text, p.url)),
    ("Search Optimization", lambda p: extract_search_optimization(p.html)),
    ("Social Networks",     lambda p: detect_social_links(p.html)),
    ("Custom 404 Page",     lambda p: detect_custom_404(p.html, p.url, p.robots_text, p.sitemap_text, p.probe_404_text)),
    ("Domains",             lambda p: analyze_domain(p.url)),
    ("Heading Tags",        lambda p: extract_headings(p.html)),
    ("Security",            lambda p: audit_target_blank_security(p.html, p.url)),
    ("Links",               lambda p: extract_links(p.html, p.url)),
    ("Open Graph",          lambda p: extract_open_graph(p.html)),
    ("Twitter Cards",       lambda p: extract_twitter_card(p.html)),
    ("Image Tags",          lambda p: extract_images(p.html)),
    ("URL Vulnerability",   lambda p: check_url_vulnerability(p.html)),
]

CHECK_NAMES = [name for name, _ in CHECKS]


def run_all_checks(
    page: RawPage,
    progress_callback: Optional[Callable[[dict], None]] = None,
) -> AuditResult:
    """
    Run every check over `page`. A check that raises is logged and recorded
    in `errors`; the others still run.
    """
    result = AuditResult(page=page, started_at=datetime.now())
    total = len(CHECKS)

    for idx, (name, check) in enumerate(CHECKS):
        _emit(progress_callback, f"Analyzing {name}…", int(idx / total * 100))
        try:
            result.results[name] = check(page)
        except Exception as exc:
            # Never let one check crash the whole audit
            logger.exception("Check %r failed for %s", name, page.url)
            result.errors[name] = f"{type(exc).__name__}: {exc}"

    result.finished_at = datetime.now()
    _emit(progress_callback, "Analysis complete.", 100)

    logger.info(
        "Audited %s: %d checks, %d failed, %.2fs",
        page.url, total, len(result.errors), result.duration_seconds,
    )
    return result


def _emit(callback, message: str, pct: int) -> None:
    if callback:
        try:
            callback({"message": message, "pct": pct})
        except Exception:
            logger.debug("Progress callback failed", exc_info=True)
