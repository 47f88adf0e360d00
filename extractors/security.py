"""
target="_blank" security check: anchors opening a new browsing context
without rel="noopener noreferrer".
"""
from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urljoin, urlsplit

import tldextract

from config import SECURITY_LEVELS, TRUSTED_DOMAINS, URL_SHORTENER_DOMAINS
from extractors.links import social_platform
from extractors.text import (
    TAG_ATTRS,
    decode_entities,
    hostname_of,
    is_text,
    opening_tag,
    parse_attributes,
    parse_page_url,
)
from models import SecurityFinding, SecurityReport, Status

logger = logging.getLogger(__name__)

_ANCHOR_RE = re.compile(
    rf"""<a\s{TAG_ATTRS}>.*?</a\s*>""",
    re.IGNORECASE | re.DOTALL,
)
_NOOPENER_RE = re.compile(r"\bnoopener\b", re.IGNORECASE)
_NOREFERRER_RE = re.compile(r"\bnoreferrer\b", re.IGNORECASE)

# Bundled public suffix snapshot only: no network fetch, no disk cache
_extract = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())


def check_target_blank_security(html) -> list[SecurityFinding]:
    """Vulnerable target="_blank" anchors only; safe ones are filtered out."""
    return audit_target_blank_security(html).findings


def audit_target_blank_security(html, page_url=None) -> SecurityReport:
    """
    Scan every target="_blank" anchor. The report keeps the vulnerable
    findings plus the total scanned, so "nothing vulnerable" and "nothing
    found" can be told apart.

    `page_url`, when given, resolves relative hrefs and enables the
    same-registered-domain comparison.
    """
    if not is_text(html):
        logger.warning("audit_target_blank_security: expected str, got %s", type(html).__name__)
        return SecurityReport()

    base = page_url if parse_page_url(page_url) is not None else None
    scanned = [_finding(el, base) for el in _blank_anchors(html)]
    findings = [f for f in scanned if f.is_vulnerable]

    total = len(scanned)
    secure = total - len(findings)
    score = round(secure / total * 100) if total else 100

    logger.debug("target=_blank anchors: %d scanned, %d vulnerable", total, len(findings))
    return SecurityReport(
        findings=findings,
        total_scanned=total,
        secure_count=secure,
        score=score,
        level=security_level(score),
    )


def security_level(score: int) -> str:
    for minimum, label in SECURITY_LEVELS:
        if score >= minimum:
            return label
    return SECURITY_LEVELS[-1][1]


# ── Helpers ───────────────────────────────────────────────────────────────────

def _blank_anchors(html: str) -> list[str]:
    anchors = []
    for match in _ANCHOR_RE.finditer(html):
        target = parse_attributes(opening_tag(match.group(0))).get("target", "")
        if target.strip().lower() == "_blank":
            anchors.append(match.group(0))
    return anchors


def _finding(element: str, page_url: Optional[str]) -> SecurityFinding:
    attrs = parse_attributes(opening_tag(element))
    href = decode_entities(attrs["href"]).strip() if "href" in attrs else None
    rel = decode_entities(attrs.get("rel", ""))

    has_noopener = bool(_NOOPENER_RE.search(rel))
    has_noreferrer = bool(_NOREFERRER_RE.search(rel))

    target = urljoin(page_url, href) if (href and page_url) else href
    host = hostname_of(target) if target else None

    return SecurityFinding(
        element=element,
        href=href,
        rel=rel,
        has_noopener=has_noopener,
        has_noreferrer=has_noreferrer,
        is_vulnerable=not (has_noopener and has_noreferrer),
        domain=host,
        risk_level=_risk_level(target, host),
        is_social=bool(href and social_platform(href)),
        is_same_root_domain=_same_root_domain(host, page_url),
    )


def _risk_level(target: Optional[str], host: Optional[str]) -> str:
    if not target or host is None:
        return Status.UNKNOWN
    if any(trusted in host for trusted in TRUSTED_DOMAINS):
        return "Low"
    if any(shortener in host for shortener in URL_SHORTENER_DOMAINS) or "redirect" in urlsplit(target).path:
        return "High"
    return "Medium"


def _same_root_domain(host: Optional[str], page_url: Optional[str]) -> Optional[bool]:
    if host is None or page_url is None:
        return None
    page_host = hostname_of(page_url)
    if page_host is None:
        return None
    return _registered_domain(host) == _registered_domain(page_host)


def _registered_domain(host: str) -> str:
    ext = _extract(host)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}"
    return ext.domain or host
