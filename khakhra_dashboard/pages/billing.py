"""Billing page — orders awaiting an invoice + invoice library with PDF downloads."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from khakhra_dashboard.theme import *
from khakhra_dashboard import config
from khakhra_dashboard.components.cards import section, status_badge, empty_note
from khakhra_dashboard.components.tables import simple_table
from khakhra_dashboard.calculations import (
    calculate_order_cost,
    calculate_order_revenue,
    orders_without_invoice,
)
from khakhra_dashboard.formatting import format_currency, format_date, format_percentage
from khakhra_dashboard.roles import can_manage
from khakhra_dashboard import data_state as ds


def gross_margin(order):
    """Gross margin % on pre-tax revenue; 0 for an empty order."""
    revenue = calculate_order_revenue(order)
    if revenue == 0:
        return 0.0
    return (revenue - calculate_order_cost(order)) / revenue * 100


def _pending_card(state, order):
    customer = state.find_customer(order.customer_id)
    return dbc.Col(dbc.Card(dbc.CardBody([
        html.Div([
            html.Div([
                html.B(order.order_number),
                html.Div(customer.name if customer else order.customer_id,
                         style={"color": GRAY, "fontSize": "12px"}),
            ]),
            html.Span(format_currency(order.total_amount),
                      style={"color": ORANGE, "fontWeight": "bold", "fontFamily": "monospace"}),
        ], style={"display": "flex", "justifyContent": "space-between"}),
        html.Div(f"Gross profit margin {format_percentage(gross_margin(order))}",
                 style={"color": GREEN, "fontSize": "12px", "margin": "8px 0"}),
        dbc.Button("Generate invoice", id={"type": "invoice-create-btn", "order": order.id},
                   size="sm", color="warning", outline=True, className="w-100"),
    ])), md=4, className="mb-3")


def _invoice_library(state):
    if not state.invoices:
        return empty_note("No invoices issued yet.")
    rows = []
    for inv in state.invoices:
        order = state.find_order(inv.order_id)
        customer = state.find_customer(order.customer_id) if order else None
        rows.append([
            html.B(inv.invoice_number),
            order.order_number if order else inv.order_id,
            customer.name if customer else "—",
            format_date(inv.issued_on),
            format_date(inv.due_date),
            format_currency(inv.gst_amount),
            format_currency(inv.amount),
            status_badge(inv.payment_status, INVOICE_STATUS_COLORS),
            dbc.Button("PDF", id={"type": "invoice-pdf-btn", "invoice": inv.id},
                       size="sm", color="info", outline=True),
        ])
    return simple_table(
        ["Invoice #", "Order", "Customer", "Issued", "Due", "GST", "Amount", "Status", ""],
        rows, right_align=(5, 6),
    )


def layout(role):
    state = ds.get_store().state
    children = []

    if can_manage(role, "billing"):
        pending = orders_without_invoice(state.orders, state.invoices)
        body = (dbc.Row([_pending_card(state, o) for o in pending])
                if pending else empty_note("Every order has an invoice."))
        children.append(section(
            "Generate GST Invoices", [body], ORANGE,
            description=f"Create statutory invoices from orders with a single click. GSTIN: {config.BUSINESS_GSTIN}",
        ))

    children.append(section(
        "Invoice Library", [_invoice_library(state), dcc.Download(id="invoice-download")], BLUE,
        description="All GST compliant invoices with payment tracking for finance and compliance.",
    ))
    return html.Div(children)
