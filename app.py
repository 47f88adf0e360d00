"""
SEO Page Audit — Streamlit Application
Fetches one page and runs the on-page SEO checks over its raw HTML.
"""
from __future__ import annotations

import logging
from datetime import datetime

import pandas as pd
import streamlit as st

from models import AuditResult, Custom404Result, DomainReport, LinkType, Status, TagValue
from collector.fetcher import fetch_page_bundle
from extractors.orchestrator import run_all_checks
from extractors.text import hostname_of, parse_page_url
from reporting.exporter import (
    headings_to_df,
    images_to_df,
    links_to_df,
    security_findings_to_df,
    social_links_to_df,
    summary_df,
    to_csv_bytes,
    url_hygiene_to_df,
)
from ui.charts import heading_levels_bar, link_type_donut, score_color, security_score_gauge
from config import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_EXTERNAL_LINKS_ADVICE,
    MAX_INTERNAL_LINKS_ADVICE,
    NOT_FOUND,
)

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# ── Page config ────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="SEO Page Audit",
    page_icon="🔍",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Custom CSS ─────────────────────────────────────────────────────────────────
st.markdown("""
<style>
.block-container { padding-top: 1rem; }

/* Metric cards */
.metric-card {
    background: #1A1D27;
    border-radius: 10px;
    padding: 1rem 1.2rem;
    margin-bottom: 0.5rem;
    border-left: 4px solid;
}
.metric-card.critical { border-color: #FF4B4B; }
.metric-card.warning  { border-color: #FFA500; }
.metric-card.success  { border-color: #00C851; }
.metric-card.neutral  { border-color: #6C63FF; }

.metric-val  { font-size: 2rem; font-weight: 700; margin: 0; }
.metric-lbl  { font-size: 0.8rem; color: #888; text-transform: uppercase; letter-spacing: 0.05em; }

.modebar { display: none !important; }

.sidebar-logo { font-size: 1.5rem; font-weight: 800; color: #6C63FF; margin-bottom: 0.5rem; }
</style>
""", unsafe_allow_html=True)


# ── State helpers ──────────────────────────────────────────────────────────────

def _clear_results():
    st.session_state.pop("audit_result", None)


def _has_result() -> bool:
    return st.session_state.get("audit_result") is not None


# ── Sidebar ────────────────────────────────────────────────────────────────────

def render_sidebar() -> dict | None:
    with st.sidebar:
        st.markdown('<div class="sidebar-logo">🔍 SEO Page Audit</div>', unsafe_allow_html=True)
        st.caption("On-page SEO checks for a single URL")
        st.divider()

        st.subheader("Target")
        url = st.text_input(
            "Page URL",
            placeholder="https://example.com",
            help="Full URL including https://",
        )

        st.subheader("Fetch Settings")
        timeout = st.slider("Request timeout (s)", 5, 60, DEFAULT_REQUEST_TIMEOUT, 5)
        user_agent = st.text_input("User-Agent", value=DEFAULT_USER_AGENT)

        st.divider()

        if _has_result():
            if st.button("🔄 New Audit", type="primary", use_container_width=True):
                _clear_results()
                st.rerun()
            st.divider()

        start = st.button("Start Audit", type="primary", use_container_width=True)

    if start and url:
        url = url.strip()
        if not url.startswith("http"):
            url = "https://" + url
        if parse_page_url(url) is None:
            st.sidebar.error("Please enter a valid http(s) URL.")
            return None
        return {"url": url, "timeout": timeout, "user_agent": user_agent or DEFAULT_USER_AGENT}

    return None


# ── Run audit ──────────────────────────────────────────────────────────────────

def run_audit(settings: dict) -> None:
    progress_bar = st.progress(0)
    status_text = st.empty()

    def on_progress(update: dict):
        progress_bar.progress(min(update.get("pct", 0), 100))
        status_text.markdown(f"**{update.get('message', '')}**")

    logger.info("Starting audit of %s", settings["url"])

    with st.status("Running audit…", expanded=True) as status_widget:
        st.write(f"Fetching **{settings['url']}**…")
        page = fetch_page_bundle(settings["url"], timeout=settings["timeout"], user_agent=settings["user_agent"])

        if page.fetch_error:
            status_widget.update(label="Audit failed", state="error")
            st.error(page.fetch_error)
            return

        st.write("Running on-page SEO checks…")
        result = run_all_checks(page, progress_callback=on_progress)
        if result.errors:
            st.write(f"{len(result.errors)} check(s) failed; see the Export tab summary.")

        status_widget.update(label="Audit complete!", state="complete")

    progress_bar.empty()
    status_text.empty()

    st.session_state.audit_result = result
    st.rerun()


# ── Dashboard: Overview ────────────────────────────────────────────────────────

def render_overview(result: AuditResult) -> None:
    links = result.get("Links", [])
    security = result.get("Security")
    headings = result.get("Heading Tags")

    n_internal = sum(1 for l in links if l.link_type == LinkType.INTERNAL)
    n_external = sum(1 for l in links if l.link_type == LinkType.EXTERNAL)
    custom404: Custom404Result | None = result.get("Custom 404 Page")
    domain: DomainReport | None = result.get("Domains")

    c1, c2, c3, c4 = st.columns(4)
    _metric_card(c1, "Links", len(links), "neutral")
    _metric_card(c2, "Internal", n_internal, "warning" if n_internal > MAX_INTERNAL_LINKS_ADVICE else "success")
    _metric_card(c3, "External", n_external, "warning" if n_external > MAX_EXTERNAL_LINKS_ADVICE else "success")
    _metric_card(c4, "Audit Time", f"{result.duration_seconds:.1f}s", "neutral")

    c5, c6, c7, c8 = st.columns(4)
    _metric_card(c5, "Vulnerable _blank Links", security.vulnerable_count if security else "—",
                 "critical" if security and security.findings else "success")
    _metric_card(c6, "Custom 404", custom404.custom404 if custom404 else "—",
                 "success" if custom404 and custom404.custom404 == Status.YES else "warning")
    _metric_card(c7, "Domain", domain.status if domain else "—",
                 "success" if domain and domain.status == Status.SUCCESS else "warning")
    _metric_card(c8, "Failed Checks", len(result.errors), "critical" if result.errors else "success")

    st.divider()
    c_left, c_mid, c_right = st.columns(3)
    with c_left:
        st.plotly_chart(link_type_donut(links), use_container_width=True)
    with c_mid:
        if headings is not None:
            st.plotly_chart(heading_levels_bar(headings), use_container_width=True)
    with c_right:
        if security is not None:
            st.plotly_chart(security_score_gauge(security.score, security.level), use_container_width=True)

    if n_external > MAX_EXTERNAL_LINKS_ADVICE:
        st.info(f"This page links out to {n_external} external pages; consider keeping it under {MAX_EXTERNAL_LINKS_ADVICE}.")
    if n_internal > MAX_INTERNAL_LINKS_ADVICE:
        st.info(f"This page has {n_internal} internal links; consider keeping it under {MAX_INTERNAL_LINKS_ADVICE}.")

    for name, error in result.errors.items():
        st.error(f"**{name}** failed: {error}")


# ── Dashboard: Content ────────────────────────────────────────────────────────

def render_content(result: AuditResult) -> None:
    meta = result.get("Meta Tags")
    if meta is not None:
        st.subheader("Meta Tags")
        rows = [
            {"Tag": _humanize(name), "Content": tag.content or NOT_FOUND, "Length": tag.length}
            for name, tag in vars(meta).items() if isinstance(tag, TagValue)
        ]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Open Graph")
        _render_optional_fields(result.get("Open Graph"))
    with col2:
        st.subheader("Twitter Card")
        _render_optional_fields(result.get("Twitter Cards"))

    headings = result.get("Heading Tags")
    if headings is not None:
        st.divider()
        st.subheader("Headings")
        for n in range(1, 7):
            value = headings.level(n)
            if value == NOT_FOUND:
                st.markdown(f"**H{n}:** {NOT_FOUND}")
        df = headings_to_df(headings)
        if not df.empty:
            st.dataframe(df, use_container_width=True, hide_index=True)

    images = result.get("Image Tags")
    if images is not None:
        st.divider()
        st.subheader(f"Images ({len(images.images)})")
        df = images_to_df(images)
        missing = int(df["Missing Alt"].sum()) if not df.empty else 0
        if missing:
            st.warning(f"{missing} image(s) have no alt text.")
        st.dataframe(df, use_container_width=True, hide_index=True)

        st.markdown("**Favicons**")
        if images.favicons:
            for fav in images.favicons:
                st.markdown(f"- `{fav.rel}`: {fav.href or NOT_FOUND}")
        else:
            st.caption(NOT_FOUND)


# ── Dashboard: Links ──────────────────────────────────────────────────────────

def render_links(result: AuditResult) -> None:
    links = result.get("Links", [])
    df = links_to_df(links)

    type_filter = st.multiselect("Link type", LinkType.ALL, default=LinkType.ALL)
    if not df.empty:
        df = df[df["Type"].isin(type_filter)]
    st.caption(f"Showing {len(df)} of {len(links)} links")
    st.dataframe(
        df,
        use_container_width=True,
        height=400,
        hide_index=True,
        column_config={"Link": st.column_config.TextColumn("Link", width="large")},
    )

    st.divider()
    st.subheader("URL Hygiene")
    st.dataframe(url_hygiene_to_df(result.get("URL Vulnerability", [])), use_container_width=True, hide_index=True)

    st.divider()
    st.subheader("Social Networks")
    social = result.get("Social Networks", [])
    if social:
        st.dataframe(social_links_to_df(social), use_container_width=True, hide_index=True)
    else:
        st.caption("No social profile links found.")

    security = result.get("Security")
    if security is not None:
        st.divider()
        st.subheader("target=\"_blank\" Security")
        color = score_color(security.score)
        st.markdown(
            f'<span style="color:{color};font-weight:700">{security.level}</span> · '
            f"{security.secure_count}/{security.total_scanned} links secure",
            unsafe_allow_html=True,
        )
        if security.findings:
            st.dataframe(security_findings_to_df(security), use_container_width=True, hide_index=True)
        else:
            st.success("Every target=\"_blank\" link sets rel=\"noopener noreferrer\".")


# ── Dashboard: Technical ──────────────────────────────────────────────────────

def render_technical(result: AuditResult) -> None:
    col1, col2 = st.columns(2)

    indexation = result.get("Indexation")
    with col1:
        st.subheader("robots.txt")
        if indexation is None:
            st.warning("robots.txt was not checked.")
        elif not indexation.robots_found:
            st.warning(NOT_FOUND)
        else:
            if indexation.page_allowed is not None:
                st.markdown(f"**Page crawlable:** {'Yes' if indexation.page_allowed else 'No'}")
            if indexation.declared_sitemaps:
                st.markdown(f"**Sitemap declared:** {', '.join(indexation.declared_sitemaps)}")
            if indexation.crawl_delay:
                st.markdown(f"**Crawl-delay:** {indexation.crawl_delay}s")
            with st.expander("View robots.txt content"):
                st.code(indexation.robots_content, language="text")
            if indexation.disallow_rules:
                with st.expander(f"Disallow rules ({len(indexation.disallow_rules)})"):
                    st.dataframe(pd.DataFrame(indexation.disallow_rules), use_container_width=True)

    with col2:
        st.subheader("Sitemap")
        if indexation is None:
            st.warning("No sitemap data available.")
        elif not indexation.sitemap_found:
            st.warning(NOT_FOUND)
        else:
            st.markdown(f"**URLs found:** {indexation.sitemap_url_count:,}")
            if indexation.page_in_sitemap is not None:
                st.markdown(f"**Page listed:** {'Yes' if indexation.page_in_sitemap else 'No'}")
        if indexation is not None:
            for err in indexation.parse_errors:
                st.error(err)

    schema = result.get("Search Optimization")
    if schema is not None:
        st.divider()
        st.subheader("Search Optimization")
        st.markdown(f"**Canonical:** {', '.join(f'`{c}`' for c in schema.canonical_links) or NOT_FOUND}")
        st.markdown(f"**Schema types:** {', '.join(schema.schema_types) or NOT_FOUND}")
        for err in schema.schema_errors:
            st.error(err)
        if schema.alternate_links:
            with st.expander(f"Alternate links ({len(schema.alternate_links)})"):
                for alt in schema.alternate_links:
                    st.code(alt, language="html")
        for label, blocks in (("Head", schema.head_schema), ("Body", schema.body_schema)):
            if blocks:
                with st.expander(f"{label} JSON-LD ({len(blocks)})"):
                    for block in blocks:
                        st.code(block, language="json")

    custom404 = result.get("Custom 404 Page")
    if custom404 is not None:
        st.divider()
        st.subheader("Custom 404 Page")
        st.markdown(f"**Custom 404:** {custom404.custom404}")
        if custom404.matched_indicators:
            st.markdown(f"**Matched phrases:** {', '.join(custom404.matched_indicators)}")
        cond = custom404.additional_conditions
        st.markdown(
            f"- 404 text in page source: {_yes_no(cond.is_404_in_main_source_code)}\n"
            f"- Blocked by robots.txt: {_yes_no(cond.is_robots_blocked)}\n"
            f"- Listed in sitemap.xml: {_yes_no(cond.is_in_sitemap)}"
        )

    domain = result.get("Domains")
    if domain is not None:
        st.divider()
        st.subheader("Domain")
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Domain", domain.domain)
        c2.metric("Length", domain.domain_length)
        c3.metric("Special Characters", domain.special_characters)
        c4.metric("Subdomains", domain.subdomains)
        if domain.status == Status.SUCCESS:
            st.success(domain.message)
        else:
            st.warning(f"{domain.message} {domain.report}".strip())


# ── Dashboard: Export ─────────────────────────────────────────────────────────

def render_export(result: AuditResult) -> None:
    st.subheader("Export Data")
    host = hostname_of(result.page.url) or "page"
    stamp = datetime.now().strftime("%Y%m%d_%H%M")

    exports = [
        ("Links", links_to_df(result.get("Links", []))),
        ("URL Hygiene", url_hygiene_to_df(result.get("URL Vulnerability", []))),
    ]
    if result.get("Security") is not None:
        exports.append(("Security", security_findings_to_df(result.get("Security"))))
    exports.append(("Summary", summary_df(result)))

    cols = st.columns(len(exports))
    for col, (label, df) in zip(cols, exports):
        with col:
            st.download_button(
                f"Download {label} (CSV)",
                data=to_csv_bytes(df),
                file_name=f"{label.lower().replace(' ', '_')}_{host}_{stamp}.csv",
                mime="text/csv",
                use_container_width=True,
            )
            st.caption(f"{len(df)} rows")

    st.divider()
    st.subheader("Check Summary")
    st.dataframe(summary_df(result), use_container_width=True, hide_index=True)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _metric_card(col, label: str, value, card_class: str = "neutral") -> None:
    with col:
        st.markdown(
            f'<div class="metric-card {card_class}">'
            f'<div class="metric-lbl">{label}</div>'
            f'<div class="metric-val">{value}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


def _render_optional_fields(report) -> None:
    if report is None:
        st.caption("Not checked.")
        return
    rows = [{"Field": _humanize(k), "Value": v or NOT_FOUND} for k, v in vars(report).items()]
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


def _yes_no(flag) -> str:
    if flag is None:
        return Status.UNKNOWN
    return "Yes" if flag else "No"


def _humanize(snake: str) -> str:
    return snake.replace("_", " ").title()


# ── Landing / empty state ──────────────────────────────────────────────────────

def render_landing() -> None:
    st.markdown("""
    <div style="text-align:center; padding: 4rem 2rem;">
        <div style="font-size:4rem">🔍</div>
        <h1 style="font-size:2.5rem; font-weight:800; color:#6C63FF; margin:0.5rem 0">SEO Page Audit</h1>
        <p style="font-size:1.1rem; color:#888; max-width:600px; margin:0 auto 2rem">
            Fetches a single page with its robots.txt, sitemap.xml and 404 page, then reports
            on meta tags, headings, links, images, structured data and link security.
        </p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3, col4 = st.columns(4)
    _feature_card(col1, "🏷️", "Meta & Social", "Title, description, Open Graph and Twitter Card tags")
    _feature_card(col2, "🔗", "Links", "Internal, external, nofollow, hidden and social links")
    _feature_card(col3, "🗺️", "Indexation", "robots.txt, sitemap.xml, canonical and JSON-LD schema")
    _feature_card(col4, "🔐", "Security", "target=\"_blank\" links without noopener/noreferrer")


def _feature_card(col, icon: str, title: str, desc: str) -> None:
    with col:
        st.markdown(
            f'<div class="metric-card neutral" style="text-align:center">'
            f'<div style="font-size:2rem">{icon}</div>'
            f'<div style="font-weight:700;margin:0.5rem 0">{title}</div>'
            f'<div style="font-size:0.85rem;color:#888">{desc}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


# ── Main ───────────────────────────────────────────────────────────────────────

def main():
    settings = render_sidebar()

    if settings is not None:
        _clear_results()
        run_audit(settings)
        return

    if not _has_result():
        render_landing()
        return

    result: AuditResult = st.session_state.audit_result

    st.title(f"Audit: {result.page.url}")
    st.caption(
        f"{len(result.results)} checks in {result.duration_seconds:.1f}s · "
        f"{len(result.errors)} failed"
    )

    tabs = st.tabs(["Overview", "Content", "Links", "Technical", "Export"])

    with tabs[0]:
        render_overview(result)

    with tabs[1]:
        render_content(result)

    with tabs[2]:
        render_links(result)

    with tabs[3]:
        render_technical(result)

    with tabs[4]:
        render_export(result)


if __name__ == "__main__":
    main()
