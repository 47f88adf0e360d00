"""
Heading extractor: H1–H6 text content, tags stripped and entities decoded.
"""
from __future__ import annotations

import logging
import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

from config import NOT_FOUND
from extractors.text import TAG_ATTRS, is_text
from models import HeadingSet

logger = logging.getLogger(__name__)

# Heading bodies are often short strings that look like file names or URLs.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_HEADING_RES = {
    level: re.compile(rf"<h{level}(?:\s{TAG_ATTRS})?>(.*?)</h{level}\s*>", re.IGNORECASE | re.DOTALL)
    for level in range(1, 7)
}


def extract_headings(html) -> HeadingSet:
    """
    Collect the text of every heading per level, in document order.
    A level with no non-empty heading reports NOT_FOUND instead of a list.
    """
    if not is_text(html):
        logger.warning("extract_headings: expected str, got %s", type(html).__name__)
        return HeadingSet()

    levels: dict[str, object] = {}
    for level, pattern in _HEADING_RES.items():
        texts = [t for t in (_heading_text(m.group(1)) for m in pattern.finditer(html)) if t]
        levels[f"h{level}"] = texts if texts else NOT_FOUND

    headings = HeadingSet(**levels)
    logger.debug("Headings: %s", {f"h{n}": headings.count(n) for n in range(1, 7)})
    return headings


def _heading_text(fragment: str) -> str:
    if "<" not in fragment and "&" not in fragment:
        return re.sub(r"\s+", " ", fragment).strip()

    soup = BeautifulSoup(fragment, "lxml")
    for tag in soup(["script", "style"]):
        tag.decompose()

    # Normalize whitespace
    return re.sub(r"\s+", " ", soup.get_text()).strip()
