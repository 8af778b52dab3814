"""Profit & Loss page — period toggle, revenue/profit chart, ledger table + totals."""
from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from khakhra_dashboard.theme import *
from khakhra_dashboard.components.kpi import kpi_card
from khakhra_dashboard.components.cards import section, row_item, make_chart, empty_note
from khakhra_dashboard.components.tables import simple_table
from khakhra_dashboard.calculations import build_profit_loss
from khakhra_dashboard.formatting import format_currency
from khakhra_dashboard import data_state as ds

DEFAULT_MODE = "weekly"
MODE_OPTIONS = [
    {"label": "Daily", "value": "daily"},
    {"label": "Weekly", "value": "weekly"},
    {"label": "Monthly", "value": "monthly"},
]


def net_margin(row):
    """Net margin % of a P&L row; 0 when there is no revenue."""
    return 0.0 if row.revenue == 0 else row.net_profit / row.revenue * 100


def pl_figure(rows):
    fig = go.Figure()
    labels = [r.label for r in rows]
    fig.add_trace(go.Bar(name="Revenue", x=labels, y=[r.revenue for r in rows], marker_color=ORANGE))
    fig.add_trace(go.Bar(name="COGS", x=labels, y=[r.cost_of_goods_sold for r in rows], marker_color=RED))
    fig.add_trace(go.Bar(name="Expenses", x=labels, y=[r.expenses for r in rows], marker_color=PURPLE))
    fig.add_trace(go.Scatter(name="Net Profit", x=labels, y=[r.net_profit for r in rows],
                             mode="lines+markers", line=dict(color=GREEN, width=3)))
    make_chart(fig, 340)
    fig.update_layout(barmode="group", yaxis_tickprefix="₹")
    return fig


def pl_table(rows):
    if not rows:
        return empty_note("No orders or expenses recorded yet.")
    body = [
        [r.label, format_currency(r.revenue), format_currency(r.cost_of_goods_sold),
         format_currency(r.gross_profit), format_currency(r.expenses),
         html.Span(format_currency(r.net_profit), style={"color": GREEN if r.net_profit >= 0 else RED}),
         f"{net_margin(r):.1f}%"]
        for r in rows
    ]
    return simple_table(
        ["Period", "Revenue", "COGS", "Gross Profit", "Expenses", "Net Profit", "Margin"],
        body, right_align=(1, 2, 3, 4, 5, 6),
    )


def pl_totals(rows):
    revenue = sum(r.revenue for r in rows)
    cogs = sum(r.cost_of_goods_sold for r in rows)
    expenses = sum(r.expenses for r in rows)
    return html.Div([
        row_item("Revenue (pre-tax)", revenue),
        row_item("Cost of goods sold", -cogs, indent=1),
        row_item("Gross profit", revenue - cogs, bold=True),
        row_item("Operating expenses", -expenses, indent=1),
        row_item("Net profit", revenue - cogs - expenses, bold=True, color=GREEN),
    ])


def layout(role):
    state = ds.get_store().state
    rows = build_profit_loss(state.orders, state.expenses, DEFAULT_MODE)
    total_net = sum(r.net_profit for r in rows)

    toggle = dbc.RadioItems(
        id="pl-mode", options=MODE_OPTIONS, value=DEFAULT_MODE, inline=True,
        className="btn-group", inputClassName="btn-check",
        labelClassName="btn btn-outline-warning btn-sm", labelCheckedClassName="active",
    )

    return html.Div([
        html.Div([
            kpi_card("Periods", str(len(rows)), BLUE),
            kpi_card("Net Profit", format_currency(total_net), GREEN if total_net >= 0 else RED,
                     "Across every period"),
        ], style={"display": "flex", "gap": "12px", "marginBottom": "12px"}),

        section("Profit & Loss Ledger", [
            dcc.Graph(id="pl-chart", figure=pl_figure(rows), config={"displayModeBar": False}),
            html.Div(pl_table(rows), id="pl-table"),
        ], GREEN,
            description="Automated COGS and expense reconciliation to surface real profitability across timelines.",
            action=toggle),

        section("Totals", [pl_totals(rows)], ORANGE),
    ])
