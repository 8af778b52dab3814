"""Orders page — order creation form with live summary + order tracker."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from khakhra_dashboard.theme import *
from khakhra_dashboard.components.cards import section, status_badge, empty_note
from khakhra_dashboard.components.tables import simple_table
from khakhra_dashboard.calculations import calculate_order_revenue, preview_order_totals
from khakhra_dashboard.formatting import format_currency, format_date
from khakhra_dashboard.roles import can_manage
from khakhra_dashboard import data_state as ds

DEFAULT_LINE_QTY = 10
DEFAULT_SHIPPING = 80

_LABEL = {"color": GRAY, "fontSize": "11px", "fontWeight": "600",
          "textTransform": "uppercase", "letterSpacing": "1px"}


def next_line_product(products, line_count):
    """Default product for a new line: the next product in the catalogue, capped at the last."""
    if not products:
        return None
    return products[min(line_count, len(products) - 1)].id


def line_row(index, products, product_id=None, quantity=DEFAULT_LINE_QTY):
    return html.Div(dbc.Row([
        dbc.Col(dcc.Dropdown(
            id={"type": "order-line-product", "index": index},
            options=[{"label": p.name, "value": p.id} for p in products],
            value=product_id,
            placeholder="Add product…", className="dash-dark-dropdown",
        ), md=7),
        dbc.Col(dbc.Input(
            id={"type": "order-line-qty", "index": index}, type="number", min=1,
            value=quantity, placeholder="Qty",
        ), md=3),
        dbc.Col(dbc.Button("Remove", id={"type": "order-line-remove", "index": index},
                           size="sm", color="danger", outline=True, className="w-100"), md=2),
    ], className="g-2 mb-2 align-items-center"), id={"type": "order-line", "index": index})


def order_summary(preview, line_count):
    """Right-hand summary card from preview_order_totals()."""
    lines = [
        html.Div([
            html.Span([item["name"], html.Em(f" × {item['quantity']}", style={"color": GRAY})]),
            html.Span(format_currency(item["total"])),
        ], style={"display": "flex", "justifyContent": "space-between", "fontSize": "13px"})
        for item in preview["items"]
    ]

    def _row(label, value, bold=False):
        return html.Div([html.Span(label), html.Span(format_currency(value))], style={
            "display": "flex", "justifyContent": "space-between", "fontSize": "13px",
            "fontWeight": "bold" if bold else "normal", "padding": "2px 0",
        })

    return html.Div([
        html.Div([
            html.Span("Order Summary", style={"color": ORANGE, "fontWeight": "600"}),
            html.Span(f"{line_count} Products", className="badge bg-warning text-dark"),
        ], style={"display": "flex", "justifyContent": "space-between", "marginBottom": "10px"}),
        *lines,
        html.Hr(style={"borderColor": f"{ORANGE}44"}),
        _row("Sub total", preview["sub_total"]),
        _row("GST (auto)", preview["gst"]),
        _row("Grand total", preview["grand_total"], bold=True),
    ])


def _order_form(state):
    products = state.products
    preview = preview_order_totals(
        products, [(products[0].id, DEFAULT_LINE_QTY)] if products else [],
        shipping_cost=DEFAULT_SHIPPING,
    )
    return dbc.Row([
        dbc.Col([
            dbc.Row([
                dbc.Col([
                    html.Div("Customer", style=_LABEL),
                    dcc.Dropdown(
                        id="order-customer",
                        options=[{"label": c.name, "value": c.id} for c in state.customers],
                        value=state.customers[0].id if state.customers else None,
                        clearable=False, className="dash-dark-dropdown",
                    ),
                ], md=6),
                dbc.Col([
                    html.Div("Payment Method", style=_LABEL),
                    dcc.Dropdown(id="order-payment", options=PAYMENT_OPTIONS, value="upi",
                                 clearable=False, className="dash-dark-dropdown"),
                ], md=6),
            ], className="g-3 mb-3"),

            html.Div("Order Lines", style=_LABEL),
            html.Div([line_row(0, products, next_line_product(products, 0))], id="order-lines"),
            dbc.Button("+ Add line", id="order-add-line-btn", size="sm", color="secondary",
                       outline=True, className="mb-3"),

            dbc.Row([
                dbc.Col([
                    html.Div("Shipping (₹)", style=_LABEL),
                    dbc.Input(id="order-shipping", type="number", min=0, value=DEFAULT_SHIPPING),
                ], md=4),
                dbc.Col([
                    html.Div("Discount (₹)", style=_LABEL),
                    dbc.Input(id="order-discount", type="number", min=0, value=0),
                ], md=4),
                dbc.Col([
                    html.Div("Dispatch ETA", style=_LABEL),
                    dcc.DatePickerSingle(id="order-ship-date", display_format="DD MMM YYYY"),
                ], md=4),
            ], className="g-3 mb-3"),

            html.Div("Internal note / packing instructions", style=_LABEL),
            dbc.Textarea(id="order-note", placeholder="E.g. Use double vacuum for masala khakhra, "
                                                     "add tasting pack", style={"minHeight": "80px"}),
        ], md=7),

        dbc.Col([
            html.Div(order_summary(preview, 1), id="order-preview",
                     style={"border": f"1px solid {ORANGE}66", "borderRadius": "14px",
                            "padding": "16px", "backgroundColor": f"{ORANGE}10"}),
            dbc.Button("Create & reserve inventory", id="order-submit-btn", color="warning",
                       className="w-100 mt-3"),
            html.P("Finished goods are reduced from the first matching batch of each product. "
                   "Update status as production progresses to keep finance and shipping aligned.",
                   style={"color": DARKGRAY, "fontSize": "12px", "marginTop": "10px"}),
        ], md=5),
    ])


def order_tracker(state, status_filter="all", editable=False):
    """Tracker table, optionally filtered by status, with per-order status buttons."""
    orders = state.orders
    if status_filter and status_filter != "all":
        orders = [o for o in orders if o.status == status_filter]
    if not orders:
        return empty_note("No orders match this status.")

    names = {p.id: p.name for p in state.products}
    rows = []
    for o in orders:
        customer = state.find_customer(o.customer_id)
        dates = [html.Div(f"Created: {format_date(o.created_at)}")]
        if o.delivered_at:
            dates.append(html.Div(f"Delivered: {format_date(o.delivered_at)}"))
        if o.expected_ship_date:
            dates.append(html.Div(f"Dispatch ETA: {format_date(o.expected_ship_date)}"))
        row = [
            html.B(o.order_number),
            html.Div([
                html.Div(customer.name if customer else o.customer_id),
                html.Small(customer.phone if customer else "", style={"color": GRAY}),
            ]),
            html.Ul([html.Li(f"{names.get(i.product_id, i.product_id)} × {i.quantity}")
                     for i in o.items], style={"paddingLeft": "16px", "marginBottom": 0,
                                                "fontSize": "12px"}),
            status_badge(o.status),
            html.Div(dates, style={"fontSize": "11px", "color": GRAY}),
            format_currency(calculate_order_revenue(o)),
        ]
        if editable:
            row.append(html.Div([
                dbc.Button(opt["label"], size="sm",
                           id={"type": "order-status-btn", "order": o.id, "status": opt["value"]},
                           color="warning" if o.status == opt["value"] else "secondary",
                           outline=o.status != opt["value"],
                           disabled=o.status == opt["value"], className="me-1 mb-1")
                for opt in STATUS_OPTIONS
            ]))
        rows.append(row)

    headers = ["Order #", "Customer", "Products", "Status", "Created", "Value"]
    if editable:
        headers.append("Actions")
    return simple_table(headers, rows, right_align=(5,))


def layout(role):
    state = ds.get_store().state
    editable = can_manage(role, "orders")

    status_filter = dcc.Dropdown(
        id="order-status-filter",
        options=[{"label": "All statuses", "value": "all"}]
                + [{"label": f"View {o['label']}", "value": o["value"]} for o in STATUS_OPTIONS],
        value="all", clearable=False, style={"width": "200px"}, className="dash-dark-dropdown",
    )

    children = []
    if editable:
        children.append(section(
            "Customer Order Creation", [_order_form(state)], ORANGE,
            description="Capture new online orders and auto compute GST inclusive totals.",
        ))
    children.append(section(
        "Order Tracker",
        [html.Div(order_tracker(state, "all", editable), id="order-tracker")],
        BLUE,
        description="Monitor every customer order from creation to delivery with live status controls.",
        action=status_filter,
    ))
    return html.Div(children)
