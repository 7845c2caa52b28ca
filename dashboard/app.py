"""Streamlit dashboard for the Infrastructure Cost Allocator."""

import sys
from pathlib import Path

import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cost_allocator.clients.exchange_rate_client import ExchangeRateClient
from cost_allocator.cost.models import AllocationMode, Currency
from cost_allocator.output.excel_generator import ExcelGenerator
from cost_allocator.output.report_data import ReportDataBuilder
from cost_allocator.session import CostSession
from cost_allocator.utils.helpers import format_currency, format_percentage, load_config, setup_logging

from components.charts import create_currency_bar, create_share_pie
from styles import chart_header, cost_figure, inject_styles, kpi_card, page_header, section_header

st.set_page_config(
    page_title="Cost Allocator",
    page_icon="🧮",
    layout="centered",
    initial_sidebar_state="collapsed"
)
inject_styles()

MODE_LABELS = {
    AllocationMode.PERCENTAGE.value: "% of Cost",
    AllocationMode.USERS.value: "User Count",
}
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@st.cache_resource
def get_config():
    """Load configuration and set up logging once per server process."""
    config = load_config()
    log_config = config.get("logging", {})
    setup_logging(log_config.get("level", "INFO"), log_file=log_config.get("file"))
    return config


@st.cache_resource
def get_rate_client():
    """Create the quote service client."""
    rate_config = get_config().get("exchange_rate", {})
    return ExchangeRateClient(
        base_url=rate_config.get("api_url", ExchangeRateClient.DEFAULT_URL),
        pair=rate_config.get("pair", ExchangeRateClient.DEFAULT_PAIR),
        timeout=rate_config.get("timeout", 10),
        max_retries=rate_config.get("max_retries", 3),
    )


def init_session_state():
    """Create the calculator session on first load."""
    if "cost_session" in st.session_state:
        return

    config = get_config()
    session = CostSession.from_config(config)
    if config.get("exchange_rate", {}).get("fetch_on_start", True):
        session.refresh_rate(get_rate_client())

    st.session_state["cost_session"] = session
    st.session_state["rate_input"] = session.exchange_rate
    st.session_state["mode_input"] = session.settings.mode.value
    st.session_state["users_input"] = session.settings.target_users
    st.session_state["percentage_input"] = float(session.settings.target_percentage)


def get_session() -> CostSession:
    return st.session_state["cost_session"]


# --- Callbacks: every widget change is applied to the session here ---

def on_rate_change():
    get_session().set_exchange_rate(st.session_state["rate_input"])


def on_refresh_rate():
    session = get_session()
    if session.refresh_rate(get_rate_client()):
        st.session_state["rate_input"] = session.exchange_rate
    else:
        st.session_state["rate_warning"] = "Could not fetch the current quote; keeping the previous rate."


def on_mode_change():
    get_session().set_mode(st.session_state["mode_input"])


def on_users_change():
    get_session().set_target_users(st.session_state["users_input"])


def on_percentage_change():
    get_session().set_target_percentage(st.session_state["percentage_input"])


def on_add_cost():
    get_session().ledger.add()


def on_update_cost(entry_id, field):
    get_session().ledger.update(entry_id, field, st.session_state[f"{field}_{entry_id}"])


def on_remove_cost(entry_id):
    get_session().ledger.remove(entry_id)


def render_header(report_bytes: bytes, filename: str):
    """Render the title, rate controls and export button."""
    title_col, rate_col, refresh_col = st.columns([5, 2, 1], vertical_alignment="bottom")

    with title_col:
        page_header("🧮 Cost Survey", "Analyze your infrastructure costs and the cost per user.")

    with rate_col:
        st.number_input(
            "USD/BRL rate (R$)",
            step=0.01,
            format="%.2f",
            key="rate_input",
            on_change=on_rate_change,
        )

    with refresh_col:
        st.button("🔄", help="Fetch the current quote", on_click=on_refresh_rate, use_container_width=True)

    warning = st.session_state.pop("rate_warning", None)
    if warning:
        st.warning(warning)

    st.download_button(
        "⬇️ Export Spreadsheet",
        data=report_bytes,
        file_name=filename,
        mime=XLSX_MIME,
    )


def render_kpis(session: CostSession, result):
    """Render the total and per-user cards with the allocation controls."""
    total_col, user_col = st.columns(2)

    with total_col:
        st.markdown(kpi_card(
            "Monthly Total Cost",
            format_currency(result.total),
            f"Based on a rate of R$ {result.exchange_rate:.2f}",
        ), unsafe_allow_html=True)

    with user_col:
        st.markdown(kpi_card(
            "Cost per User",
            format_currency(result.per_user_cost),
            "/ user",
            primary=True,
        ), unsafe_allow_html=True)

        mode_col, target_col = st.columns(2)
        with mode_col:
            st.selectbox(
                "Allocation mode",
                options=list(MODE_LABELS),
                format_func=MODE_LABELS.get,
                key="mode_input",
                on_change=on_mode_change,
            )
        # Streamlit drops the state of widgets that were not rendered last run
        st.session_state.setdefault("users_input", session.settings.target_users)
        st.session_state.setdefault("percentage_input", float(session.settings.target_percentage))

        with target_col:
            if session.settings.mode is AllocationMode.USERS:
                st.number_input(
                    "Target users",
                    min_value=0,
                    step=1,
                    key="users_input",
                    on_change=on_users_change,
                )
            else:
                st.number_input(
                    "Percentage charged (%)",
                    step=0.1,
                    format="%.1f",
                    key="percentage_input",
                    on_change=on_percentage_change,
                )


def render_costs(result):
    """Render the editable cost list."""
    header_col, add_col = st.columns([4, 1], vertical_alignment="bottom")
    with header_col:
        section_header("⚙️ Cost Breakdown")
    with add_col:
        st.button("➕ Add Cost", on_click=on_add_cost, use_container_width=True)

    if not result.breakdown:
        st.info("No costs yet. Use “Add Cost” to start the list.")
        return

    currencies = [currency.value for currency in Currency]

    for item in result.breakdown:
        entry = item.entry
        name_col, currency_col, amount_col, figure_col, remove_col = st.columns(
            [4, 1.3, 1.6, 1.8, 0.6], vertical_alignment="center"
        )

        with name_col:
            st.text_input(
                "Cost name",
                value=entry.name,
                key=f"name_{entry.id}",
                on_change=on_update_cost,
                args=(entry.id, "name"),
                label_visibility="collapsed",
                placeholder="Cost name",
            )
        with currency_col:
            st.selectbox(
                "Currency",
                options=currencies,
                index=currencies.index(entry.currency.value),
                key=f"currency_{entry.id}",
                on_change=on_update_cost,
                args=(entry.id, "currency"),
                label_visibility="collapsed",
            )
        with amount_col:
            st.number_input(
                "Amount",
                value=float(entry.amount),
                step=0.01,
                format="%.2f",
                key=f"amount_{entry.id}",
                on_change=on_update_cost,
                args=(entry.id, "amount"),
                label_visibility="collapsed",
            )
        with figure_col:
            st.markdown(
                cost_figure(format_currency(item.converted_amount), format_percentage(item.share)),
                unsafe_allow_html=True,
            )
        with remove_col:
            st.button(
                "🗑️",
                key=f"remove_{entry.id}",
                help="Remove cost",
                on_click=on_remove_cost,
                args=(entry.id,),
            )


def render_charts(report):
    """Render the distribution charts."""
    df = report.to_dataframe()
    if df.empty or report.total <= 0:
        return

    pie_col, bar_col = st.columns(2)
    with pie_col:
        chart_header("Share of Total")
        st.plotly_chart(create_share_pie(df), use_container_width=True)
    with bar_col:
        chart_header("By Original Currency")
        st.plotly_chart(create_currency_bar(df), use_container_width=True)


def main():
    """Main dashboard entry point."""
    init_session_state()
    session = get_session()
    config = get_config()

    result = session.calculate()
    report = ReportDataBuilder().build(result)
    filename = config.get("export", {}).get("filename", "cost-report.xlsx")

    render_header(ExcelGenerator().to_bytes(report), filename)
    render_kpis(session, result)
    st.divider()
    render_costs(result)
    render_charts(report)


main()
