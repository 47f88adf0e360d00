"""
Core data models for the SEO Page Audit tool.
All modules import from here; nothing else is cross-imported at this level.

NOTE: `from __future__ import annotations` is intentionally omitted here.
Python 3.13.0 has a regression (bpo-121814) where that import causes a crash
in the dataclasses decorator when the module is not yet fully registered in
sys.modules. Python 3.9+ supports generic aliases (list[str], dict[str, Any])
natively, so the future import is unnecessary.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from config import NOT_FOUND


# ── Enumerations ──────────────────────────────────────────────────────────────
class LinkType:
    INTERNAL  = "Internal"
    EXTERNAL  = "External"
    ANCHOR    = "Anchor"
    TELEPHONE = "Telephone"
    EMAIL     = "Email"
    INVALID   = "Invalid"

    ALL = [INTERNAL, EXTERNAL, ANCHOR, TELEPHONE, EMAIL, INVALID]


class Status:
    SUCCESS = "Success"
    FAILED  = "Failed"
    UNKNOWN = "Unknown"

    CONTAINS = "Contains"
    NONE     = "None"

    YES = "YES"
    NO  = "NO"
    UNDETERMINED = "UNKNOWN"


# ── Input bundle ──────────────────────────────────────────────────────────────
@dataclass
class RawPage:
    url: str
    html: str = ""
    robots_text: str = ""
    sitemap_text: str = ""
    probe_404_text: str = ""
    fetch_error: Optional[str] = None


# ── Meta / social ─────────────────────────────────────────────────────────────
@dataclass
class TagValue:
    content: Optional[str] = None
    length: int = 0

    @classmethod
    def of(cls, content: Optional[str]) -> "TagValue":
        return cls(content=content, length=len(content) if content else 0)


@dataclass
class MetaTagReport:
    title: TagValue = field(default_factory=TagValue)
    description: TagValue = field(default_factory=TagValue)
    charset: TagValue = field(default_factory=TagValue)
    robots: TagValue = field(default_factory=TagValue)
    viewport: TagValue = field(default_factory=TagValue)
    google_site_verification: TagValue = field(default_factory=TagValue)
    facebook_domain_verification: TagValue = field(default_factory=TagValue)


@dataclass
class OpenGraphReport:
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    sitename: Optional[str] = None
    locale: Optional[str] = None


@dataclass
class TwitterCardReport:
    card: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    site: Optional[str] = None


# ── Headings / images ─────────────────────────────────────────────────────────
HeadingLevel = Union[list[str], str]


@dataclass
class HeadingSet:
    h1: HeadingLevel = NOT_FOUND
    h2: HeadingLevel = NOT_FOUND
    h3: HeadingLevel = NOT_FOUND
    h4: HeadingLevel = NOT_FOUND
    h5: HeadingLevel = NOT_FOUND
    h6: HeadingLevel = NOT_FOUND

    def level(self, n: int) -> HeadingLevel:
        return getattr(self, f"h{n}")

    def count(self, n: int) -> int:
        value = self.level(n)
        return len(value) if isinstance(value, list) else 0


@dataclass
class ImageRecord:
    src: Optional[str]
    alt: str = ""
    raw_element: str = ""


@dataclass
class FaviconRecord:
    rel: str
    href: Optional[str] = None


@dataclass
class ImageReport:
    images: list[ImageRecord] = field(default_factory=list)
    favicons: list[FaviconRecord] = field(default_factory=list)


# ── Links ─────────────────────────────────────────────────────────────────────
@dataclass
class LinkRecord:
    sequence_no: int
    link: str
    link_type: str          # LinkType.*
    is_nofollow: bool = False
    is_hidden: bool = False
    raw_element: str = ""


@dataclass
class UrlHygieneRecord:
    link: str
    is_lowercase: bool
    has_no_underscores: bool
    has_no_duplicate_slashes: bool
    is_valid: bool


@dataclass
class SocialLink:
    s_no: int
    link: str
    platform: str


# ── Search optimization ───────────────────────────────────────────────────────
@dataclass
class SchemaReport:
    head_schema: list[str] = field(default_factory=list)
    body_schema: list[str] = field(default_factory=list)
    canonical_links: list[str] = field(default_factory=list)
    alternate_links: list[str] = field(default_factory=list)
    schema_types: list[str] = field(default_factory=list)
    schema_errors: list[str] = field(default_factory=list)


# ── Custom 404 ────────────────────────────────────────────────────────────────
@dataclass
class AdditionalConditions:
    is_404_in_main_source_code: Optional[bool] = None
    is_robots_blocked: Optional[bool] = None
    is_in_sitemap: Optional[bool] = None


@dataclass
class Custom404Result:
    custom404: str = Status.UNDETERMINED
    additional_conditions: AdditionalConditions = field(default_factory=AdditionalConditions)
    matched_indicators: list[str] = field(default_factory=list)


# ── Domain ────────────────────────────────────────────────────────────────────
@dataclass
class DomainReport:
    domain: str = Status.UNKNOWN
    core_label: str = ""
    domain_length: int = 0
    special_characters: str = Status.UNKNOWN
    subdomains: str = Status.UNKNOWN
    status: str = Status.FAILED
    message: str = ""
    report: str = ""


# ── Security ──────────────────────────────────────────────────────────────────
@dataclass
class SecurityFinding:
    element: str
    href: Optional[str]
    rel: str
    has_noopener: bool
    has_noreferrer: bool
    is_vulnerable: bool
    domain: Optional[str] = None
    risk_level: str = Status.UNKNOWN
    is_social: bool = False
    is_same_root_domain: Optional[bool] = None


@dataclass
class SecurityReport:
    findings: list[SecurityFinding] = field(default_factory=list)
    total_scanned: int = 0
    secure_count: int = 0
    score: int = 100
    level: str = "Excellent"

    @property
    def vulnerable_count(self) -> int:
        return len(self.findings)

    @property
    def status(self) -> str:
        return Status.SUCCESS if not self.findings else Status.FAILED


# ── Indexation ────────────────────────────────────────────────────────────────
@dataclass
class RobotsData:
    raw_text: str = ""
    sitemap_urls: list[str] = field(default_factory=list)
    disallow_rules: list[dict] = field(default_factory=list)  # [{agent, path}]
    allow_rules: list[dict] = field(default_factory=list)
    crawl_delay: Optional[float] = None
    parse_errors: list[str] = field(default_factory=list)


@dataclass
class SitemapData:
    is_index: bool = False
    child_sitemaps: list[str] = field(default_factory=list)
    urls: list[str] = field(default_factory=list)
    parse_errors: list[str] = field(default_factory=list)


@dataclass
class IndexationReport:
    robots_found: bool = False
    sitemap_found: bool = False
    robots_content: Optional[str] = None
    sitemap_content: Optional[str] = None
    disallow_rules: list[dict] = field(default_factory=list)  # [{agent, path}]
    allow_rules: list[dict] = field(default_factory=list)
    declared_sitemaps: list[str] = field(default_factory=list)
    sitemap_urls: list[str] = field(default_factory=list)
    crawl_delay: Optional[float] = None
    page_allowed: Optional[bool] = None
    page_in_sitemap: Optional[bool] = None
    parse_errors: list[str] = field(default_factory=list)

    @property
    def sitemap_url_count(self) -> int:
        return len(self.sitemap_urls)


# ── Top-level audit result ────────────────────────────────────────────────────
@dataclass
class AuditResult:
    page: RawPage
    results: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        if self.started_at and self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return 0.0

    def get(self, check_name: str, default: Any = None) -> Any:
        return self.results.get(check_name, default)
