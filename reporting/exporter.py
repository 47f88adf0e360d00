"""
Converts check results to Pandas DataFrames and CSV bytes for export.
"""
from __future__ import annotations

import io

import pandas as pd

from config import CHECK_MARK, CROSS_MARK, NOT_FOUND
from models import (
    AuditResult,
    HeadingSet,
    ImageReport,
    IndexationReport,
    LinkRecord,
    SchemaReport,
    SecurityReport,
    SocialLink,
    UrlHygieneRecord,
)


# ── Links ──────────────────────────────────────────────────────────────────────

_LINK_COLUMNS = ["#", "Link", "Type", "Nofollow", "Hidden"]


def links_to_df(links: list[LinkRecord]) -> pd.DataFrame:
    if not links:
        return pd.DataFrame(columns=_LINK_COLUMNS)

    rows = []
    for link in links:
        rows.append({
            "#":        link.sequence_no,
            "Link":     link.link,
            "Type":     link.link_type,
            "Nofollow": link.is_nofollow,
            "Hidden":   link.is_hidden,
        })
    return pd.DataFrame(rows, columns=_LINK_COLUMNS)


def url_hygiene_to_df(records: list[UrlHygieneRecord]) -> pd.DataFrame:
    """One row per link; each rule rendered as a check or cross mark."""
    columns = ["Link", "Lowercase", "No Underscores", "No Double Slashes", "Valid"]
    if not records:
        return pd.DataFrame(columns=columns)

    rows = []
    for rec in records:
        rows.append({
            "Link":              rec.link,
            "Lowercase":         _mark(rec.is_lowercase),
            "No Underscores":    _mark(rec.has_no_underscores),
            "No Double Slashes": _mark(rec.has_no_duplicate_slashes),
            "Valid":             _mark(rec.is_valid),
        })
    return pd.DataFrame(rows, columns=columns)


def social_links_to_df(links: list[SocialLink]) -> pd.DataFrame:
    columns = ["S.No", "Platform", "Link"]
    if not links:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        [{"S.No": s.s_no, "Platform": s.platform, "Link": s.link} for s in links],
        columns=columns,
    )


# ── Content ────────────────────────────────────────────────────────────────────

def images_to_df(report: ImageReport) -> pd.DataFrame:
    columns = ["Src", "Alt", "Missing Alt"]
    if not report.images:
        return pd.DataFrame(columns=columns)

    rows = []
    for img in report.images:
        rows.append({
            "Src":         img.src or "",
            "Alt":         img.alt,
            "Missing Alt": not img.alt,
        })
    return pd.DataFrame(rows, columns=columns)


def headings_to_df(headings: HeadingSet) -> pd.DataFrame:
    """Flatten all six levels into (Level, Text) rows in level order."""
    rows = []
    for n in range(1, 7):
        value = headings.level(n)
        if value == NOT_FOUND:
            continue
        for text in value:
            rows.append({"Level": f"H{n}", "Text": text})
    return pd.DataFrame(rows, columns=["Level", "Text"])


# ── Security ───────────────────────────────────────────────────────────────────

def security_findings_to_df(report: SecurityReport) -> pd.DataFrame:
    columns = ["Href", "Domain", "Rel", "Noopener", "Noreferrer", "Risk", "Social", "Same Site"]
    if not report.findings:
        return pd.DataFrame(columns=columns)

    rows = []
    for f in report.findings:
        rows.append({
            "Href":       f.href or "",
            "Domain":     f.domain or "",
            "Rel":        f.rel,
            "Noopener":   _mark(f.has_noopener),
            "Noreferrer": _mark(f.has_noreferrer),
            "Risk":       f.risk_level,
            "Social":     f.is_social,
            "Same Site":  "" if f.is_same_root_domain is None else f.is_same_root_domain,
        })

    df = pd.DataFrame(rows, columns=columns)

    # Riskiest first
    risk_order = {"High": 0, "Medium": 1, "Low": 2}
    df["_order"] = df["Risk"].map(risk_order).fillna(3)
    df = df.sort_values(["_order", "Href"], kind="stable").drop(columns=["_order"])
    return df.reset_index(drop=True)


# ── Summary table ──────────────────────────────────────────────────────────────

def summary_df(result: AuditResult) -> pd.DataFrame:
    """One row per check: whether it ran and a short headline."""
    rows = []
    for name, value in result.results.items():
        rows.append({"Check": name, "Status": "OK", "Summary": _headline(value)})
    for name, error in result.errors.items():
        rows.append({"Check": name, "Status": "Error", "Summary": error})
    return pd.DataFrame(rows, columns=["Check", "Status", "Summary"])


# ── CSV export ─────────────────────────────────────────────────────────────────

def to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


# ── Helpers ────────────────────────────────────────────────────────────────────

def _mark(flag: bool) -> str:
    return CHECK_MARK if flag else CROSS_MARK


def _headline(value) -> str:
    if isinstance(value, list):
        return f"{len(value)} item(s)"
    if isinstance(value, HeadingSet):
        return ", ".join(f"H{n}: {value.count(n)}" for n in range(1, 7))
    if isinstance(value, ImageReport):
        return f"{len(value.images)} image(s), {len(value.favicons)} favicon(s)"
    if isinstance(value, SecurityReport):
        return f"{value.vulnerable_count}/{value.total_scanned} vulnerable, score {value.score} ({value.level})"
    if isinstance(value, IndexationReport):
        return (
            f"robots.txt: {'found' if value.robots_found else 'missing'}, "
            f"sitemap.xml: {'found' if value.sitemap_found else 'missing'} "
            f"({value.sitemap_url_count} URLs)"
        )
    if isinstance(value, SchemaReport):
        return f"{len(value.head_schema) + len(value.body_schema)} JSON-LD block(s), {len(value.canonical_links)} canonical"
    for attr in ("status", "custom404"):
        if hasattr(value, attr):
            return str(getattr(value, attr))
    return ""
