"""Inventory page — raw material stores + finished goods batches and production."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from khakhra_dashboard.theme import *
from khakhra_dashboard.components.cards import section, empty_note
from khakhra_dashboard.components.tables import stock_level_bar, simple_table
from khakhra_dashboard.formatting import format_date, format_number
from khakhra_dashboard.roles import can_manage
from khakhra_dashboard import data_state as ds

DEFAULT_BATCH_QTY = 180
MIN_BATCH_QTY = 10


def balance_color(quantity, reorder_level):
    """Red at/below reorder level, orange within 1.5x, green above."""
    if quantity <= reorder_level:
        return RED
    if quantity <= reorder_level * 1.5:
        return ORANGE
    return GREEN


def _raw_materials(state, editable):
    materials = state.inventory.raw_materials
    if not materials:
        return empty_note("No raw materials tracked yet.")
    rows = []
    for rm in materials:
        row = [
            html.Div([html.B(rm.name), html.Div(f"#{rm.id}", style={"color": GRAY, "fontSize": "11px"})]),
            html.Span([
                stock_level_bar(rm.quantity, rm.reorder_level),
                html.Span(f"  {format_number(rm.quantity)} {rm.unit}",
                          style={"color": balance_color(rm.quantity, rm.reorder_level),
                                 "fontWeight": "600"}),
            ]),
            f"{format_number(rm.reorder_level)} {rm.unit}",
            format_date(rm.last_updated),
        ]
        if editable:
            row.append(html.Div([
                dbc.Input(id={"type": "rm-qty", "material": rm.id}, type="number", min=0, step="any",
                          placeholder="Qty", size="sm", style={"width": "90px"}),
                dbc.Button("Add", id={"type": "rm-add", "material": rm.id}, size="sm",
                           color="success", outline=True, className="ms-2"),
                dbc.Button("Consume", id={"type": "rm-consume", "material": rm.id}, size="sm",
                           color="danger", outline=True, className="ms-2"),
            ], style={"display": "flex", "alignItems": "center"}))
        rows.append(row)
    headers = ["Item", "On Hand", "Reorder Level", "Last Updated"]
    if editable:
        headers.append("Adjust")
    return simple_table(headers, rows)


def _finished_goods(state, editable):
    batches = state.inventory.finished_goods
    if not batches:
        return empty_note("No finished goods batches yet.")
    names = {p.id: p.name for p in state.products}
    rows = []
    for fg in batches:
        low = fg.quantity <= fg.reorder_level
        row = [
            html.Div([html.B(fg.batch_code),
                      html.Div(names.get(fg.product_id, fg.product_id),
                               style={"color": GRAY, "fontSize": "11px"})]),
            html.Span([
                stock_level_bar(fg.quantity, fg.reorder_level),
                html.Span(f"  {format_number(fg.quantity)} pkts",
                          style={"color": RED if low else WHITE, "fontWeight": "600"}),
            ]),
            f"{format_number(fg.reorder_level)} pkts",
            f"{format_date(fg.mfg_date)} → {format_date(fg.expiry_date)}",
        ]
        if editable:
            row.append(html.Div([
                dbc.Input(id={"type": "fg-qty", "batch": fg.id}, type="number", min=0,
                          placeholder="Qty", size="sm", style={"width": "90px"}),
                dbc.Button("Reserve for orders", size="sm", color="warning", outline=True,
                           id={"type": "fg-consume", "batch": fg.id, "product": fg.product_id},
                           className="ms-2"),
            ], style={"display": "flex", "alignItems": "center"}))
        rows.append(row)
    headers = ["Batch", "On Hand", "Reorder Level", "Mfg → Expiry"]
    if editable:
        headers.append("Consume")
    return simple_table(headers, rows)


def _production_form(state):
    products = state.products
    return html.Div([
        dcc.Dropdown(
            id="batch-product",
            options=[{"label": p.name, "value": p.id} for p in products],
            value=products[0].id if products else None,
            clearable=False, style={"width": "200px"}, className="dash-dark-dropdown",
        ),
        dbc.Input(id="batch-qty", type="number", min=MIN_BATCH_QTY, value=DEFAULT_BATCH_QTY,
                  size="sm", style={"width": "90px"}, className="ms-2"),
        dbc.Button("Create Batch", id="batch-create-btn", size="sm", color="warning", className="ms-2"),
    ], style={"display": "flex", "alignItems": "center"})


def layout(role):
    state = ds.get_store().state
    editable = can_manage(role, "inventory")

    return html.Div([
        section("Raw Material Stores", [_raw_materials(state, editable)], TEAL,
                description="Track wheat, oil, spices and packaging inventory with replenishment controls."),
        section("Finished Goods Batches", [_finished_goods(state, editable)], ORANGE,
                description="Current khakhra batches. Reserving takes stock from the first batch of that product.",
                action=_production_form(state) if editable else None),
    ])
