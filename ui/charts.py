"""
Plotly chart builders for the SEO Page Audit dashboard.
All functions return plotly Figure objects.
"""
from __future__ import annotations

import plotly.graph_objects as go

from models import HeadingSet, LinkRecord, LinkType

# Consistent colour palette
_LINK_COLORS = {
    LinkType.INTERNAL:  "#00C851",
    LinkType.EXTERNAL:  "#4B9EFF",
    LinkType.ANCHOR:    "#6C63FF",
    LinkType.TELEPHONE: "#00C9A7",
    LinkType.EMAIL:     "#FFA500",
    LinkType.INVALID:   "#FF4B4B",
}

_BG = "#1A1D27"
_PAPER = "#0E1117"
_GRID = "#2A2D3A"
_TEXT = "#FAFAFA"


def _base_layout(**kwargs) -> dict:
    return {
        "paper_bgcolor": _PAPER,
        "plot_bgcolor":  _BG,
        "font": {"color": _TEXT, "family": "sans-serif"},
        "margin": {"l": 20, "r": 20, "t": 40, "b": 20},
        **kwargs,
    }


def _title(text: str) -> dict:
    return {"text": text, "x": 0.5, "xanchor": "center", "font": {"size": 14, "color": _TEXT}}


def score_color(score: float) -> str:
    if score >= 90:
        return "#00C851"
    elif score >= 75:
        return "#FFD700"
    elif score >= 50:
        return "#FF8800"
    else:
        return "#FF4444"


# ── target=_blank security score gauge ─────────────────────────────────────────

def security_score_gauge(score: float, level: str = "") -> go.Figure:
    color = score_color(score)
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        domain={"x": [0, 1], "y": [0, 1]},
        number={"font": {"size": 48, "color": color}, "suffix": "%"},
        gauge={
            "axis": {"range": [0, 100], "tickcolor": _TEXT, "tickfont": {"color": _TEXT}},
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": _BG,
            "borderwidth": 2,
            "bordercolor": _GRID,
            "steps": [
                {"range": [0, 60],   "color": "#3A1A1A"},
                {"range": [60, 80],  "color": "#3A2E1A"},
                {"range": [80, 100], "color": "#1A3A1A"},
            ],
            "threshold": {
                "line": {"color": color, "width": 4},
                "thickness": 0.8,
                "value": score,
            },
        },
    ))
    title = "Link Security Score" + (f" ({level})" if level else "")
    fig.update_layout(**_base_layout(height=260), title=_title(title))
    return fig


# ── Link types donut ───────────────────────────────────────────────────────────

def link_type_donut(links: list[LinkRecord]) -> go.Figure:
    counts = {t: 0 for t in LinkType.ALL}
    for link in links:
        counts[link.link_type] = counts.get(link.link_type, 0) + 1

    present = [t for t in LinkType.ALL if counts[t]]
    if not present:
        return _empty_chart("No links found")

    values = [counts[t] for t in present]
    fig = go.Figure(go.Pie(
        labels=present,
        values=values,
        hole=0.6,
        marker={"colors": [_LINK_COLORS[t] for t in present], "line": {"color": _BG, "width": 2}},
        hovertemplate="<b>%{label}</b>: %{value} links<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=260),
        title=_title("Links by Type"),
        annotations=[{
            "text": f"<b>{sum(values)}</b><br>Total",
            "x": 0.5, "y": 0.5,
            "font_size": 18,
            "font_color": _TEXT,
            "showarrow": False,
        }],
        legend={"font": {"color": _TEXT}},
        showlegend=True,
    )
    return fig


# ── Heading counts per level ───────────────────────────────────────────────────

def heading_levels_bar(headings: HeadingSet) -> go.Figure:
    labels = [f"H{n}" for n in range(1, 7)]
    values = [headings.count(n) for n in range(1, 7)]
    if not any(values):
        return _empty_chart("No headings found")

    # A page should carry exactly one H1
    colors = ["#6C63FF"] * 6
    colors[0] = "#00C851" if values[0] == 1 else "#FFA500"

    fig = go.Figure(go.Bar(
        x=labels,
        y=values,
        marker_color=colors,
        hovertemplate="<b>%{x}</b><br>Headings: %{y}<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=260),
        title=_title("Headings per Level"),
        xaxis={"title": "Level", "gridcolor": _GRID, "color": _TEXT},
        yaxis={"title": "Count", "gridcolor": _GRID, "color": _TEXT},
        showlegend=False,
    )
    return fig


# ── Helper ─────────────────────────────────────────────────────────────────────

def _empty_chart(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, showarrow=False, font={"color": _TEXT, "size": 14})
    fig.update_layout(**_base_layout(height=260))
    return fig
