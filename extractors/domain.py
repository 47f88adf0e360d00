"""
Domain analyzer: lexical checks on the page hostname (length, special
characters, subdomains). Needs no HTML.
"""
from __future__ import annotations

import logging
import re

from config import DOMAIN_MAX_LENGTH, DOMAIN_MIN_LENGTH, DOMAIN_TLD_ALLOW_LIST
from extractors.text import parse_page_url, strip_www
from models import DomainReport, Status

logger = logging.getLogger(__name__)

_TLD_RE = re.compile(
    r"\.(?:" + "|".join(re.escape(tld) for tld in DOMAIN_TLD_ALLOW_LIST) + r")$",
    re.IGNORECASE,
)
_SPECIAL_CHAR_RE = re.compile(r"[^a-zA-Z0-9-]")


def analyze_domain(page_url) -> DomainReport:
    parts = parse_page_url(page_url)
    if parts is None:
        logger.warning("analyze_domain: invalid URL %r", page_url)
        return DomainReport(
            message=f'Invalid URL. Please provide a valid URL -> "{page_url}"',
            report="The URL provided could not be processed. Ensure it is a valid URL format.",
        )

    host = parts.hostname
    domain = strip_www(host)
    core = _TLD_RE.sub("", domain, count=1)

    length = len(core)
    has_special = bool(_SPECIAL_CHAR_RE.search(core))
    has_subdomains = len(host.split(".")) > 2 and not host.startswith("www.")

    length_ok = DOMAIN_MIN_LENGTH <= length <= DOMAIN_MAX_LENGTH
    is_seo_friendly = length_ok and not has_special and not has_subdomains

    reasons: list[str] = []
    if length_ok:
        reasons.append(
            f"The domain length is within the SEO-friendly range "
            f"({DOMAIN_MIN_LENGTH}-{DOMAIN_MAX_LENGTH} characters)."
        )
    else:
        reasons.append(f"The domain length ({length} characters) is not within the SEO-friendly range.")

    if has_special:
        reasons.append("The domain contains special characters, which can negatively impact SEO.")
    else:
        reasons.append("The domain does not contain any special characters, which is good for SEO.")

    if has_subdomains:
        reasons.append("The domain contains subdomains, which can negatively impact SEO.")
    else:
        reasons.append("The domain does not have excessive subdomains, making it more SEO-friendly.")

    return DomainReport(
        domain=domain,
        core_label=core,
        domain_length=length,
        special_characters=Status.CONTAINS if has_special else Status.NONE,
        subdomains=Status.CONTAINS if has_subdomains else Status.NONE,
        status=Status.SUCCESS if is_seo_friendly else Status.FAILED,
        message="The domain is SEO-friendly." if is_seo_friendly else "The domain has issues affecting SEO.",
        report=" ".join(reasons),
    )
