"""
Shared helpers for the regex extractors: entity decoding, attribute parsing,
anchor iteration and URL/hostname normalisation.

All extractors work on the raw markup text rather than a DOM tree, so the
patterns here are deliberately tolerant: either quote style, any attribute
order, tags spanning several lines.
"""
from __future__ import annotations

import re
from html import unescape
from typing import Iterator, Optional
from urllib.parse import SplitResult, urlsplit

# name = "value" | 'value' | value
_ATTR_RE = re.compile(
    r"""([^\s"'<>/=]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))""",
    re.DOTALL,
)

# Attribute run of an opening tag; ">" may appear inside quoted values
TAG_ATTRS = r"""(?:"[^"]*"|'[^']*'|[^'">])*"""

# <a ... href="..." ...>body</a>; the href must be its own attribute (not data-href)
_ANCHOR_RE = re.compile(
    rf"""<a\s(?:{TAG_ATTRS}?\s)?href\s*=\s*(?:"([^"]*)"|'([^']*)'){TAG_ATTRS}>(.*?)</a\s*>""",
    re.IGNORECASE | re.DOTALL,
)

_OPENING_TAG_RE = re.compile(rf"<[a-zA-Z]{TAG_ATTRS}>")
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
_BAD_HOST_CHARS_RE = re.compile(r"""[\s<>"'{}|\\^`]""")


# ── Entity decoding ───────────────────────────────────────────────────────────

def decode_entities(text) -> str:
    """
    Convert numeric and named character references to literal characters.
    Malformed references are left as-is; non-string input yields "".
    """
    if not isinstance(text, str):
        return ""
    return unescape(text)


def is_text(value) -> bool:
    return isinstance(value, str)


def clean_value(value: Optional[str]) -> Optional[str]:
    """Decode and trim an attribute/body value; empty after trim → None."""
    if value is None:
        return None
    text = decode_entities(value).strip()
    return text or None


# ── Tags & attributes ─────────────────────────────────────────────────────────

def opening_tag(element: str) -> str:
    """Return the first opening tag of a raw element string."""
    match = _OPENING_TAG_RE.search(element)
    return match.group(0) if match else element


def parse_attributes(tag: str) -> dict[str, str]:
    """
    Parse the attributes of a single opening tag into a dict.
    Names are lower-cased; values are returned raw (not entity-decoded).
    The first occurrence of a repeated attribute wins, as in browsers.
    """
    attrs: dict[str, str] = {}
    for match in _ATTR_RE.finditer(tag):
        name = match.group(1).lower()
        if name in attrs:
            continue
        value = next((g for g in match.group(2, 3, 4) if g is not None), "")
        attrs[name] = value
    return attrs


def iter_anchors(html: str) -> Iterator[tuple[str, str]]:
    """Yield (raw_element, raw_href) for every <a href=...>...</a> in document order."""
    for match in _ANCHOR_RE.finditer(html):
        href = match.group(1) if match.group(1) is not None else match.group(2)
        yield match.group(0), href


# ── URLs & hostnames ──────────────────────────────────────────────────────────

def parse_page_url(url) -> Optional[SplitResult]:
    """Parse an absolute http(s) page URL; None when it cannot serve as a base."""
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        return None
    if _BAD_HOST_CHARS_RE.search(parts.hostname):
        return None
    return parts


def hostname_of(url: str) -> Optional[str]:
    """Lower-cased hostname of an absolute URL, or None if it does not parse."""
    try:
        parts = urlsplit(url)
        parts.port
    except ValueError:
        return None
    host = parts.hostname
    if not host or _BAD_HOST_CHARS_RE.search(host):
        return None
    return host


def origin_of(parts: SplitResult) -> str:
    netloc = parts.netloc.rsplit("@", 1)[-1]
    return f"{parts.scheme}://{netloc}"


def strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host


def has_scheme(href: str) -> bool:
    return bool(_SCHEME_RE.match(href))


def to_absolute(href: str, scheme: str = "https") -> str:
    """Give a scheme-less href (protocol-relative or bare host) an explicit scheme."""
    if has_scheme(href):
        return href
    if href.startswith("//"):
        return f"{scheme}:{href}"
    return f"{scheme}://{href.lstrip('/')}"
