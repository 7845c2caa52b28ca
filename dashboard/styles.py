"""Shared styles for the dashboard."""

import streamlit as st

SHARED_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800&display=swap');

* {
    font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif !important;
}

.stApp {
    background: #f8fafc;
}

#MainMenu, footer {visibility: hidden;}

.main .block-container {
    padding: 1.5rem 2.5rem;
    max-width: 960px;
}

/* ===== PAGE HEADERS ===== */
.page-title {
    font-size: 2rem;
    font-weight: 800;
    color: #1e293b;
    letter-spacing: -0.5px;
    margin-bottom: 0.25rem;
}

.page-subtitle {
    font-size: 1rem;
    font-weight: 500;
    color: #64748b;
    margin-bottom: 1.5rem;
}

.section-title {
    font-size: 1.2rem;
    font-weight: 700;
    color: #1e293b;
    margin: 1.5rem 0 1rem 0;
    padding-bottom: 0.4rem;
    border-bottom: 3px solid #4f46e5;
    display: inline-block;
}

.chart-title {
    font-size: 1.05rem;
    font-weight: 700;
    color: #334155;
    margin-bottom: 0.75rem;
    padding-bottom: 0.4rem;
    border-bottom: 2px solid rgba(79, 70, 229, 0.3);
}

/* ===== KPI CARDS ===== */
.kpi-card {
    background: #ffffff;
    border: 1px solid #f1f5f9;
    border-radius: 16px;
    padding: 1.5rem;
    box-shadow: 0 1px 2px rgba(0, 0, 0, 0.05);
}

.kpi-card.primary {
    background: #4f46e5;
    border-color: #4f46e5;
}

.kpi-label {
    font-size: 0.8rem;
    font-weight: 600;
    color: #64748b;
    text-transform: uppercase;
    letter-spacing: 0.75px;
}

.kpi-card.primary .kpi-label {
    color: #c7d2fe;
}

.kpi-value {
    font-size: 2.2rem;
    font-weight: 800;
    color: #0f172a;
    line-height: 1.2;
    margin: 0.4rem 0;
}

.kpi-card.primary .kpi-value {
    color: #ffffff;
}

.kpi-caption {
    font-size: 0.85rem;
    color: #64748b;
}

.kpi-card.primary .kpi-caption {
    color: #c7d2fe;
}

/* ===== COST ROWS ===== */
.cost-converted {
    font-size: 0.95rem;
    font-weight: 600;
    color: #334155;
    text-align: right;
}

.cost-share {
    font-size: 0.75rem;
    color: #94a3b8;
    text-align: right;
}

/* ===== BUTTONS ===== */
.stButton > button, .stDownloadButton > button {
    border-radius: 10px;
    font-weight: 600;
    transition: all 0.2s ease;
}

.stDownloadButton > button {
    background: #059669;
    color: #ffffff;
    border: none;
}

.stDownloadButton > button:hover {
    background: #047857;
    color: #ffffff;
}
</style>
"""


def inject_styles():
    """Inject shared CSS styles into the page."""
    st.markdown(SHARED_CSS, unsafe_allow_html=True)


def page_header(title, subtitle=None):
    """Render a consistent page header."""
    st.markdown(f'<div class="page-title">{title}</div>', unsafe_allow_html=True)
    if subtitle:
        st.markdown(f'<div class="page-subtitle">{subtitle}</div>', unsafe_allow_html=True)


def section_header(title):
    """Render a section header."""
    st.markdown(f'<div class="section-title">{title}</div>', unsafe_allow_html=True)


def chart_header(title):
    """Render a chart header."""
    st.markdown(f'<div class="chart-title">{title}</div>', unsafe_allow_html=True)


def kpi_card(label, value, caption="", primary=False):
    """Render a KPI card.

    Args:
        label: Small uppercase label
        value: Main figure, already formatted
        caption: Optional line under the figure
        primary: Use the highlighted (indigo) variant
    """
    css_class = "kpi-card primary" if primary else "kpi-card"
    return f"""
    <div class="{css_class}">
        <div class="kpi-label">{label}</div>
        <div class="kpi-value">{value}</div>
        <div class="kpi-caption">{caption}</div>
    </div>
    """


def cost_figure(converted, share):
    """Render the converted amount and share shown beside a cost row."""
    return (
        f'<div class="cost-converted">{converted}</div>'
        f'<div class="cost-share">{share} of total</div>'
    )
