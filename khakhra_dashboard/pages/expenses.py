"""Expenses page — expense entry form + ledger with delete."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from khakhra_dashboard.theme import *
from khakhra_dashboard.components.cards import section, empty_note
from khakhra_dashboard.components.tables import simple_table
from khakhra_dashboard.calculations import expense_total
from khakhra_dashboard.formatting import format_currency, format_date
from khakhra_dashboard.roles import can_manage
from khakhra_dashboard import data_state as ds

_LABEL = {"color": GRAY, "fontSize": "11px", "fontWeight": "600",
          "textTransform": "uppercase", "letterSpacing": "1px"}


def _field(label, control, md=4):
    return dbc.Col([html.Div(label, style=_LABEL), control], md=md)


def _expense_form():
    return html.Div([
        dbc.Row([
            _field("Category", dcc.Dropdown(
                id="expense-category",
                options=[{"label": v, "value": k} for k, v in EXPENSE_CATEGORY_LABELS.items()],
                value="raw_materials", clearable=False, className="dash-dark-dropdown")),
            _field("Description", dbc.Input(id="expense-description",
                                            placeholder="Eg. Courier charges for south zone")),
            _field("Paid To", dbc.Input(id="expense-paid-to", placeholder="Supplier / Vendor")),
        ], className="g-3 mb-3"),
        dbc.Row([
            _field("Amount (₹)", dbc.Input(id="expense-amount", type="number", min=0, value=0), md=3),
            _field("Date", dcc.DatePickerSingle(id="expense-date", date=ds.today_iso(),
                                                display_format="DD MMM YYYY"), md=3),
            _field("Payment Mode", dcc.Dropdown(id="expense-mode", options=PAYMENT_OPTIONS, value="upi",
                                                clearable=False, className="dash-dark-dropdown"), md=3),
            dbc.Col([
                dbc.Checkbox(id="expense-recurring", label="Recurring", value=False, className="mt-4"),
            ], md=1),
            dbc.Col(dbc.Button("Record expense", id="expense-submit-btn", color="warning",
                               className="mt-4 w-100"), md=2),
        ], className="g-3 mb-3"),
    ])


def _expense_table(state, editable):
    if not state.expenses:
        return empty_note("No expenses recorded yet.")
    rows = []
    for e in state.expenses:
        row = [
            format_date(e.date),
            EXPENSE_CATEGORY_LABELS.get(e.category, e.category),
            html.Div([e.description] + ([html.Small(" (recurring)", style={"color": GRAY})]
                                        if e.recurring else [])),
            e.paid_to,
            e.payment_mode.replace("_", " ").upper(),
            format_currency(e.amount),
        ]
        if editable:
            row.append(dbc.Button("Delete", id={"type": "expense-delete-btn", "expense": e.id},
                                  size="sm", color="danger", outline=True))
        rows.append(row)
    headers = ["Date", "Category", "Description", "Paid To", "Mode", "Amount"]
    if editable:
        headers.append("")
    return simple_table(headers, rows, right_align=(5,))


def layout(role):
    state = ds.get_store().state
    editable = can_manage(role, "expenses")

    children = []
    if editable:
        children.append(_expense_form())
    children.append(html.Div([
        html.Span("Total spend: ", style={"color": GRAY}),
        html.B(format_currency(expense_total(state.expenses)), style={"color": RED}),
    ], style={"marginBottom": "10px"}))
    children.append(_expense_table(state, editable))

    return html.Div([
        section("Expense Control", children, RED,
                description="Log packaging, delivery, labor and other operational spends for cashflow accuracy."),
    ])
