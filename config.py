"""
Global configuration constants for the SEO Page Audit tool.
All tunable thresholds and lookup tables live here.
"""

# ── Fetch sentinels ───────────────────────────────────────────────────────────
ROBOTS_NOT_FOUND = "No /robots.txt found"
SITEMAP_NOT_FOUND = "No /sitemap.xml found"
PAGE_404_NOT_FOUND = "No 404 page found"

# ── HTTP defaults ─────────────────────────────────────────────────────────────
DEFAULT_REQUEST_TIMEOUT = 15            # seconds
DEFAULT_USER_AGENT = (
    "SEOPageAudit/1.0 (+https://github.com/seo-page-audit)"
)
PROBE_404_PATH = "/non-existent-page"
ANCILLARY_FETCH_WORKERS = 3

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ── Custom 404 detection ──────────────────────────────────────────────────────
DEFAULT_404_INDICATORS = [
    "oops",
    "page not found",
    "we couldn't find",
    "404 error",
    "back to homepage",
    "sorry",
    "lost in space",
    "something went wrong",
    "we're sorry",
    "oops! page not found",
    "this page is lost",
    "we can't find the page",
    "unable to locate",
    "broken link",
    "we could not locate",
    "the requested url was not found on this server",
    "not found on this server",
]

# ── Domain analysis ───────────────────────────────────────────────────────────
# Longest suffixes first so "com.pk" wins over "pk".
DOMAIN_TLD_ALLOW_LIST = [
    "com.pk", "com", "org", "net", "io", "co", "in", "gov",
    "edu", "info", "biz", "dev", "app", "ai", "pk",
]
DOMAIN_MIN_LENGTH = 2
DOMAIN_MAX_LENGTH = 63

# ── Social platforms (declaration order = match priority) ─────────────────────
SOCIAL_PLATFORMS: dict[str, str] = {
    "facebook.com":  "Facebook",
    "fb.com":        "Facebook",
    "twitter.com":   "Twitter",
    "x.com":         "X",
    "instagram.com": "Instagram",
    "linkedin.com":  "LinkedIn",
    "pinterest.com": "Pinterest",
    "youtube.com":   "YouTube",
    "youtu.be":      "YouTube",
    "tiktok.com":    "TikTok",
    "reddit.com":    "Reddit",
    "snapchat.com":  "Snapchat",
}

# ── Favicons ──────────────────────────────────────────────────────────────────
FAVICON_REL_VALUES = {"icon", "shortcut icon", "apple-touch-icon", "mask-icon"}

# ── target=_blank risk levels ─────────────────────────────────────────────────
TRUSTED_DOMAINS = ["google.com", "microsoft.com", "apple.com", "github.com", "stackoverflow.com"]
URL_SHORTENER_DOMAINS = ["bit.ly", "tinyurl"]

SECURITY_LEVELS = [   # (minimum score, label), checked top-down
    (100, "Excellent"),
    (80,  "Good"),
    (60,  "Fair"),
    (0,   "Poor"),
]

# ── Presentation ──────────────────────────────────────────────────────────────
CHECK_MARK = "✓"
CROSS_MARK = "✗"
NOT_FOUND = "Not Found"

# Dashboard link-count advice thresholds
MAX_EXTERNAL_LINKS_ADVICE = 5
MAX_INTERNAL_LINKS_ADVICE = 10
