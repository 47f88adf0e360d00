"""
Image and favicon inventory.
"""
from __future__ import annotations

import logging
import re

from config import FAVICON_REL_VALUES
from extractors.text import TAG_ATTRS, clean_value, decode_entities, is_text, parse_attributes
from models import FaviconRecord, ImageRecord, ImageReport

logger = logging.getLogger(__name__)

_IMG_RE = re.compile(rf"<img\b{TAG_ATTRS}>", re.IGNORECASE)
_LINK_RE = re.compile(rf"<link\b{TAG_ATTRS}>", re.IGNORECASE)


def extract_images(html) -> ImageReport:
    if not is_text(html):
        logger.warning("extract_images: expected str, got %s", type(html).__name__)
        return ImageReport()

    report = ImageReport(
        images=[_image_record(m.group(0)) for m in _IMG_RE.finditer(html)],
        favicons=_favicons(html),
    )
    logger.debug("Images: %d <img>, %d favicons", len(report.images), len(report.favicons))
    return report


def _image_record(tag: str) -> ImageRecord:
    attrs = parse_attributes(tag)
    # Lazy-loading markup keeps the real source in data-src
    src = clean_value(attrs.get("data-src")) or clean_value(attrs.get("src"))
    return ImageRecord(
        src=src,
        alt=decode_entities(attrs.get("alt", "")).strip(),
        raw_element=tag,
    )


def _favicons(html: str) -> list[FaviconRecord]:
    favicons: list[FaviconRecord] = []
    for match in _LINK_RE.finditer(html):
        attrs = parse_attributes(match.group(0))
        rel = attrs.get("rel")
        if rel is None or " ".join(rel.lower().split()) not in FAVICON_REL_VALUES:
            continue
        href = attrs.get("href")
        favicons.append(FaviconRecord(
            rel=decode_entities(rel),
            href=decode_entities(href) if href is not None else None,
        ))
    return favicons
