"""Orders page callbacks — live summary, order creation, status filter and status changes."""
from dash import Input, Output, State, Patch, callback_context, no_update, ALL

from khakhra_dashboard import data_state as ds
from khakhra_dashboard.calculations import preview_order_totals
from khakhra_dashboard.components.cards import toast
from khakhra_dashboard.models import UnknownProductError
from khakhra_dashboard.roles import can_manage


def parse_order_lines(product_ids, quantities):
    """[(product_id, quantity)] from the form lines; None if a chosen line is invalid.

    Lines without a product are skipped. A chosen product needs a positive
    whole quantity.
    """
    lines = []
    for product_id, qty in zip(product_ids, quantities):
        if not product_id:
            continue
        if qty is None or qty <= 0 or int(qty) != qty:
            return None
        lines.append((product_id, int(qty)))
    return lines


def next_line_index(line_ids):
    """Fresh pattern index for a new order line."""
    return max((i["index"] for i in line_ids), default=-1) + 1


def removal_position(line_ids, index):
    """Position of the line to drop, or None when it is the last line left."""
    if len(line_ids) <= 1:
        return None
    return next((pos for pos, i in enumerate(line_ids) if i["index"] == index), None)


def _amount(value):
    return float(value) if value not in (None, "") else 0.0


def register_callbacks(app):
    # ── Live order summary ─────────────────────────────────────────────────
    @app.callback(
        Output("order-preview", "children"),
        Input({"type": "order-line-product", "index": ALL}, "value"),
        Input({"type": "order-line-qty", "index": ALL}, "value"),
        Input("order-shipping", "value"),
        Input("order-discount", "value"),
        prevent_initial_call=True,
    )
    def update_preview(product_ids, quantities, shipping, discount):
        from khakhra_dashboard.pages.orders import order_summary
        lines = [(p, q) for p, q in zip(product_ids, quantities) if p and q and q > 0]
        preview = preview_order_totals(ds.get_store().state.products, lines,
                                       discount_amount=_amount(discount),
                                       shipping_cost=_amount(shipping))
        return order_summary(preview, len(lines))

    # ── Add / remove order lines ───────────────────────────────────────────
    @app.callback(
        Output("order-lines", "children"),
        Input("order-add-line-btn", "n_clicks"),
        Input({"type": "order-line-remove", "index": ALL}, "n_clicks"),
        State({"type": "order-line", "index": ALL}, "id"),
        prevent_initial_call=True,
    )
    def edit_lines(_add, _removes, line_ids):
        from khakhra_dashboard.pages.orders import line_row, next_line_product
        trigger = callback_context.triggered[0] if callback_context.triggered else None
        if not trigger or not trigger.get("value"):
            return no_update

        lines = Patch()
        target = callback_context.triggered_id
        if target == "order-add-line-btn":
            products = ds.get_store().state.products
            lines.append(line_row(next_line_index(line_ids), products,
                                  next_line_product(products, len(line_ids))))
            return lines

        position = removal_position(line_ids, target["index"])
        if position is None:
            return no_update
        del lines[position]
        return lines

    # ── Create order ───────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("store-version", "data", allow_duplicate=True),
        Input("order-submit-btn", "n_clicks"),
        State("order-customer", "value"),
        State("order-payment", "value"),
        State({"type": "order-line-product", "index": ALL}, "value"),
        State({"type": "order-line-qty", "index": ALL}, "value"),
        State("order-shipping", "value"),
        State("order-discount", "value"),
        State("order-note", "value"),
        State("order-ship-date", "date"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def create_order(n_clicks, customer_id, payment_method, product_ids, quantities,
                     shipping, discount, note, ship_date, version):
        if not n_clicks or not customer_id:
            return no_update, no_update
        lines = parse_order_lines(product_ids, quantities)
        if not lines:
            return no_update, no_update

        store = ds.get_store()
        try:
            order = store.create_order(
                customer_id, lines, payment_method or "upi",
                discount_amount=_amount(discount),
                shipping_cost=_amount(shipping),
                note=note or None,
                expected_ship_date=ship_date or None,
            )
        except UnknownProductError as e:
            return toast(f"Unknown product: {e.product_id}", "Order not created", icon="danger"), no_update

        customer = store.state.find_customer(order.customer_id)
        return (
            toast(f"Order {order.order_number} created for {customer.name if customer else 'customer'}",
                  "Order Created"),
            (version or 0) + 1,
        )

    # ── Status filter ──────────────────────────────────────────────────────
    @app.callback(
        Output("order-tracker", "children"),
        Input("order-status-filter", "value"),
        State("session-role", "data"),
        prevent_initial_call=True,
    )
    def filter_tracker(status_filter, role):
        from khakhra_dashboard.pages.orders import order_tracker
        return order_tracker(ds.get_store().state, status_filter, can_manage(role, "orders"))

    # ── Status buttons ─────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("store-version", "data", allow_duplicate=True),
        Input({"type": "order-status-btn", "order": ALL, "status": ALL}, "n_clicks"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def change_status(_clicks, version):
        trigger = callback_context.triggered[0] if callback_context.triggered else None
        if not trigger or not trigger.get("value"):
            return no_update, no_update
        target = callback_context.triggered_id
        store = ds.get_store()
        order = store.state.find_order(target["order"])
        if order is None:
            return no_update, no_update
        store.update_order_status(order.id, target["status"])
        return (
            toast(f"{order.order_number} marked {target['status']}", "Status Updated", icon="info"),
            (version or 0) + 1,
        )
