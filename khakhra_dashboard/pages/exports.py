"""Exports page — XLSX downloads per scope + executive summary (on screen and PDF)."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from khakhra_dashboard.theme import *
from khakhra_dashboard.components.cards import section, empty_note
from khakhra_dashboard.components.tables import simple_table
from khakhra_dashboard.export import summary_records
from khakhra_dashboard import data_state as ds

EXPORT_BUTTONS = [
    ("orders", "Orders", "Order numbers, status, revenue, GST and totals."),
    ("inventory", "Inventory", "Raw materials and finished goods batches."),
    ("finance", "Finance", "Invoices and expenses."),
    ("all", "Everything", "All five sheets in one workbook."),
]


def _export_card(scope, label, description):
    return dbc.Col(dbc.Card(dbc.CardBody([
        html.B(label),
        html.P(description, style={"color": GRAY, "fontSize": "12px", "margin": "6px 0 10px"}),
        dbc.Button("Download XLSX", id={"type": "export-btn", "scope": scope},
                   size="sm", color="warning", outline=True),
    ])), md=3, className="mb-3")


def layout(role):
    state = ds.get_store().state
    overview, low_stock = summary_records(state)

    return html.Div([
        section("Data Exports", [
            dbc.Row([_export_card(*b) for b in EXPORT_BUTTONS]),
            dcc.Download(id="export-download"),
        ], BLUE, description="Download spreadsheets for accounting, audits and stock reviews."),

        dbc.Row([
            dbc.Col(section("Executive Summary", [
                simple_table(["Metric", "Value"], [list(r) for r in overview], right_align=(1,)),
                dcc.Download(id="summary-download"),
            ], ORANGE, action=dbc.Button("Download PDF", id="summary-pdf-btn", size="sm",
                                         color="warning", outline=True)), md=6),
            dbc.Col(section("Low Stock Batches", [
                simple_table(["Batch", "Product", "Quantity", "Reorder Level"],
                             [list(r) for r in low_stock], right_align=(2, 3))
                if low_stock else empty_note("No batches at reorder level."),
            ], RED), md=6),
        ]),
    ])
