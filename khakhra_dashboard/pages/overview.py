"""Overview page — Business Pulse KPI strip + low stock watchlist."""
from dash import html

from khakhra_dashboard.theme import *
from khakhra_dashboard.components.kpi import kpi_pill
from khakhra_dashboard.components.cards import section, empty_note
from khakhra_dashboard.components.tables import stock_level_bar, simple_table
from khakhra_dashboard.calculations import (
    calculate_repeat_rate,
    expense_total,
    low_stock_batches,
    low_stock_materials,
    summarize_orders,
)
from khakhra_dashboard.formatting import format_currency, format_number, format_percentage, format_date
from khakhra_dashboard import data_state as ds


def pulse_metrics(state):
    """Formatted Business Pulse values, recomputed from the current state."""
    summary = summarize_orders(state.orders)
    return {
        "revenue": format_currency(summary["revenue"]),
        "gross_profit": format_currency(summary["gross_profit"]),
        "expenses": format_currency(expense_total(state.expenses)),
        "gst": format_currency(summary["gst"]),
        "delivered": format_number(summary["delivered"]),
        "repeat_rate": format_percentage(calculate_repeat_rate(state.orders)),
        "low_stock": len(low_stock_batches(state.inventory.finished_goods)),
    }


def _low_stock_table(state):
    names = {p.id: p.name for p in state.products}
    batches = low_stock_batches(state.inventory.finished_goods)
    materials = low_stock_materials(state.inventory.raw_materials)
    if not batches and not materials:
        return empty_note("All batches and raw materials are above their reorder levels.")
    rows = [
        [fg.batch_code, names.get(fg.product_id, fg.product_id),
         html.Span([stock_level_bar(fg.quantity, fg.reorder_level),
                    f"  {format_number(fg.quantity)} pkts"]),
         f"{format_number(fg.reorder_level)} pkts", format_date(fg.expiry_date)]
        for fg in batches
    ]
    rows += [
        [rm.id, rm.name,
         html.Span([stock_level_bar(rm.quantity, rm.reorder_level),
                    f"  {format_number(rm.quantity)} {rm.unit}"]),
         f"{format_number(rm.reorder_level)} {rm.unit}", format_date(rm.last_updated)]
        for rm in materials
    ]
    return simple_table(["Code", "Item", "On Hand", "Reorder Level", "Expiry / Updated"], rows)


def layout(role):
    state = ds.get_store().state
    m = pulse_metrics(state)
    low_color = RED if m["low_stock"] else GREEN

    return html.Div([
        section("Business Pulse", [
            html.Div([
                kpi_pill("₹", "Revenue", m["revenue"], ORANGE, "Before GST, all orders"),
                kpi_pill("GP", "Gross Profit", m["gross_profit"], GREEN, "Revenue less COGS"),
                kpi_pill("EX", "Expenses", m["expenses"], RED, "Operational spend"),
                kpi_pill("GST", "GST Collected", m["gst"], BLUE),
            ], style={"display": "flex", "gap": "12px", "flexWrap": "wrap", "marginBottom": "12px"}),
            html.Div([
                kpi_pill("✓", "Delivered", m["delivered"], TEAL, "Orders completed"),
                kpi_pill("↻", "Repeat Rate", m["repeat_rate"], PURPLE, "Customers with 2+ orders"),
                kpi_pill("!", "Low Stock", str(m["low_stock"]), low_color, "Batches at reorder level"),
            ], style={"display": "flex", "gap": "12px", "flexWrap": "wrap"}),
        ], ORANGE, description="Snapshot of collective operations across orders, finance, and inventory."),

        section("Low Stock Watchlist", [_low_stock_table(state)], RED,
                description="Finished goods batches and raw materials at or below reorder level."),
    ])
