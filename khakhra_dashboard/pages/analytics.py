"""Analytics page — revenue trend, top products, seasonal demand, repeat rate."""
from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from khakhra_dashboard.theme import *
from khakhra_dashboard.components.kpi import kpi_card
from khakhra_dashboard.components.cards import section, make_chart, empty_note
from khakhra_dashboard.components.tables import simple_table
from khakhra_dashboard.calculations import (
    build_revenue_series,
    build_top_products,
    calculate_repeat_rate,
    calculate_seasonal_demand,
)
from khakhra_dashboard.formatting import format_currency, format_number, format_percentage
from khakhra_dashboard import data_state as ds


def revenue_figure(series):
    fig = go.Figure()
    labels = [p["label"] for p in series]
    fig.add_trace(go.Scatter(name="Revenue", x=labels, y=[p["revenue"] for p in series],
                             mode="lines+markers", line=dict(color=ORANGE, width=3)))
    fig.add_trace(go.Scatter(name="Orders", x=labels, y=[p["orders"] for p in series],
                             mode="lines+markers", line=dict(color=BLUE, width=1), yaxis="y2"))
    make_chart(fig, 320)
    fig.update_layout(
        yaxis=dict(title="Revenue", tickprefix="₹"),
        yaxis2=dict(title="Orders", overlaying="y", side="right", showgrid=False),
    )
    return fig


def bar_figure(rows, x_key, color, height=300):
    fig = go.Figure(go.Bar(
        x=[r[x_key] for r in rows], y=[r["revenue"] for r in rows], marker_color=color,
        text=[format_currency(r["revenue"]) for r in rows], textposition="outside",
    ))
    make_chart(fig, height, legend_h=False)
    fig.update_layout(yaxis_tickprefix="₹", showlegend=False)
    return fig


def layout(role):
    state = ds.get_store().state
    series = build_revenue_series(state.orders)
    top = build_top_products(state.orders, state.products)
    seasonal = calculate_seasonal_demand(state.orders)
    repeat_rate = calculate_repeat_rate(state.orders)

    if not series:
        return section("Sales Intelligence", [empty_note("No orders yet. Analytics appear once sales come in.")],
                       PURPLE)

    top_table = simple_table(
        ["Product", "Packets", "Revenue", "Profit"],
        [[p["name"], format_number(p["quantity"]), format_currency(p["revenue"]),
          format_currency(p["profit"])] for p in top],
        right_align=(1, 2, 3),
    )

    return html.Div([
        html.Div([
            kpi_card("Repeat Rate", format_percentage(repeat_rate), PURPLE, "Customers with 2+ orders"),
            kpi_card("Selling Days", str(len(series)), BLUE),
            kpi_card("Best Seller", top[0]["name"] if top else "—", ORANGE),
        ], style={"display": "flex", "gap": "12px", "marginBottom": "12px"}),

        section("Revenue Trend", [
            dcc.Graph(figure=revenue_figure(series), config={"displayModeBar": False}),
        ], ORANGE, description="Daily pre-tax revenue and order count."),

        dbc.Row([
            dbc.Col(section("Top Products", [
                dcc.Graph(figure=bar_figure(top, "name", ORANGE), config={"displayModeBar": False}),
                top_table,
            ], GREEN), md=6),
            dbc.Col(section("Seasonal Demand", [
                dcc.Graph(figure=bar_figure(seasonal, "name", TEAL), config={"displayModeBar": False}),
            ], TEAL, description="Highest revenue calendar months."), md=6),
        ]),
    ])
