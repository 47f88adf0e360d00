"""
Search optimization extractor: canonical and alternate <link> elements and
JSON-LD structured data located in <head> vs <body>.
"""
from __future__ import annotations

import json
import logging
import re

from extractors.text import TAG_ATTRS, decode_entities, is_text, opening_tag, parse_attributes
from models import SchemaReport

logger = logging.getLogger(__name__)

_LINK_RE = re.compile(rf"<link\b{TAG_ATTRS}>", re.IGNORECASE)
_HEAD_RE = re.compile(rf"<head\b{TAG_ATTRS}>(.*?)</head\s*>", re.IGNORECASE | re.DOTALL)
_BODY_RE = re.compile(rf"<body\b{TAG_ATTRS}>(.*?)</body\s*>", re.IGNORECASE | re.DOTALL)
_SCRIPT_RE = re.compile(rf"<script\b{TAG_ATTRS}>(.*?)</script\s*>", re.IGNORECASE | re.DOTALL)
_LD_JSON_TYPE = "application/ld+json"


def extract_search_optimization(html) -> SchemaReport:
    if not is_text(html):
        logger.warning("extract_search_optimization: expected str, got %s", type(html).__name__)
        return SchemaReport()

    report = SchemaReport()

    for match in _LINK_RE.finditer(html):
        element = match.group(0)
        rel_tokens = parse_attributes(element).get("rel", "").lower().split()
        if "canonical" in rel_tokens:
            report.canonical_links.append(decode_entities(element))
        elif "alternate" in rel_tokens:
            report.alternate_links.append(element)

    # A single non-greedy region match each; nested <head>/<body> is unsupported
    head = _HEAD_RE.search(html)
    if head:
        report.head_schema = _ld_json_blocks(head.group(1))

    body = _BODY_RE.search(html)
    if body:
        report.body_schema = _ld_json_blocks(body.group(1))

    _collect_schema_types(report)

    logger.debug(
        "Search optimization: %d canonical, %d alternate, %d head schema, %d body schema",
        len(report.canonical_links), len(report.alternate_links),
        len(report.head_schema), len(report.body_schema),
    )
    return report


def _ld_json_blocks(region: str) -> list[str]:
    blocks = []
    for match in _SCRIPT_RE.finditer(region):
        script_type = parse_attributes(opening_tag(match.group(0))).get("type", "")
        if script_type.strip().lower() == _LD_JSON_TYPE:
            blocks.append(match.group(0))
    return blocks


# ── Schema types ──────────────────────────────────────────────────────────────

def _collect_schema_types(report: SchemaReport) -> None:
    for block in report.head_schema + report.body_schema:
        inner = _SCRIPT_RE.match(block).group(1).strip()
        try:
            data = json.loads(inner)
        except json.JSONDecodeError as exc:
            report.schema_errors.append(f"Invalid JSON-LD: {exc}")
            continue

        for schema_type in _types_in(data):
            if schema_type not in report.schema_types:
                report.schema_types.append(schema_type)


def _types_in(data) -> list[str]:
    if isinstance(data, list):
        return [t for item in data for t in _types_in(item)]
    if not isinstance(data, dict):
        return []

    types: list[str] = []
    declared = data.get("@type")
    if isinstance(declared, str):
        types.append(declared)
    elif isinstance(declared, list):
        types.extend(t for t in declared if isinstance(t, str))

    types.extend(_types_in(data.get("@graph", [])))
    return types
