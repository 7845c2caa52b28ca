"""Reusable chart components for the dashboard."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd

SHARE_COLORS = ["#4f46e5", "#059669", "#f59e0b", "#ef4444", "#0ea5e9", "#8b5cf6", "#64748b"]


def create_share_pie(
    df: pd.DataFrame,
    name_col: str = "name",
    value_col: str = "converted_amount"
) -> go.Figure:
    """Create a donut chart of each cost's share of the total.

    Args:
        df: Breakdown DataFrame (see CostReport.to_dataframe)
        name_col: Column for cost names
        value_col: Column for converted amounts

    Returns:
        Plotly figure
    """
    if name_col not in df.columns or value_col not in df.columns:
        return go.Figure()

    # Negative amounts cannot be drawn as slices
    plot_df = df[df[value_col] > 0]
    if len(plot_df) == 0:
        return go.Figure()

    fig = go.Figure(data=[go.Pie(
        labels=plot_df[name_col],
        values=plot_df[value_col],
        hole=0.45,
        marker_colors=SHARE_COLORS,
        textinfo="percent",
        hovertemplate="%{label}<br>R$ %{value:,.2f}<extra></extra>"
    )])

    fig.update_layout(
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=-0.25),
        margin=dict(t=20, b=20, l=20, r=20)
    )

    return fig


def create_currency_bar(
    df: pd.DataFrame,
    currency_col: str = "currency",
    value_col: str = "converted_amount"
) -> go.Figure:
    """Create a bar chart of the total per original currency, in BRL.

    Args:
        df: Breakdown DataFrame
        currency_col: Column for the original currency
        value_col: Column for converted amounts

    Returns:
        Plotly figure
    """
    if currency_col not in df.columns or value_col not in df.columns or len(df) == 0:
        return go.Figure()

    by_currency = df.groupby(currency_col, as_index=False)[value_col].sum()

    fig = px.bar(
        by_currency,
        x=currency_col,
        y=value_col,
        color=currency_col,
        color_discrete_map={"BRL": "#4f46e5", "USD": "#059669"}
    )

    fig.update_layout(
        xaxis_title="Original Currency",
        yaxis_title="Monthly Cost (R$)",
        showlegend=False,
        margin=dict(t=20, b=20, l=20, r=20)
    )

    return fig
