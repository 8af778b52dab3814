"""Inventory page callbacks — raw material movements, batch consumption, production."""
from dash import Input, Output, State, callback_context, no_update, ALL

from khakhra_dashboard import data_state as ds
from khakhra_dashboard.components.cards import toast


def positive_quantity(value):
    """Whole, positive quantity from a numeric input, or None. Used for packets."""
    if value is None or value <= 0 or int(value) != value:
        return None
    return int(value)


def positive_amount(value):
    """Positive kg / litre / g amount, fractions allowed, or None."""
    if value is None or value <= 0:
        return None
    return int(value) if int(value) == value else float(value)


def _quantity_for(key, field, ids, values, parse=positive_quantity):
    for component_id, value in zip(ids, values):
        if component_id.get(field) == key:
            return parse(value)
    return None


def _clicked():
    trigger = callback_context.triggered[0] if callback_context.triggered else None
    return bool(trigger and trigger.get("value"))


def register_callbacks(app):
    # ── Raw material add / consume ─────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("store-version", "data", allow_duplicate=True),
        Input({"type": "rm-add", "material": ALL}, "n_clicks"),
        Input({"type": "rm-consume", "material": ALL}, "n_clicks"),
        State({"type": "rm-qty", "material": ALL}, "value"),
        State({"type": "rm-qty", "material": ALL}, "id"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def adjust_raw_material(_adds, _consumes, values, ids, version):
        if not _clicked():
            return no_update, no_update
        target = callback_context.triggered_id
        material_id = target["material"]
        qty = _quantity_for(material_id, "material", ids, values, parse=positive_amount)
        if qty is None:
            return no_update, no_update

        store = ds.get_store()
        if target["type"] == "rm-add":
            store.replenish_raw_material(material_id, qty)
            message = f"Added {qty} to {material_id}"
        else:
            store.consume_raw_material(material_id, qty)
            message = f"Consumed {qty} from {material_id}"
        return toast(message, "Inventory Updated"), (version or 0) + 1

    # ── Finished goods consumption ─────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("store-version", "data", allow_duplicate=True),
        Input({"type": "fg-consume", "batch": ALL, "product": ALL}, "n_clicks"),
        State({"type": "fg-qty", "batch": ALL}, "value"),
        State({"type": "fg-qty", "batch": ALL}, "id"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def consume_finished(_clicks, values, ids, version):
        if not _clicked():
            return no_update, no_update
        target = callback_context.triggered_id
        qty = _quantity_for(target["batch"], "batch", ids, values)
        if qty is None:
            return no_update, no_update
        ds.get_store().consume_finished_goods(target["product"], qty)
        return toast(f"Reserved {qty} pkts of {target['product']}", "Inventory Updated"), (version or 0) + 1

    # ── Production batch ───────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("store-version", "data", allow_duplicate=True),
        Input("batch-create-btn", "n_clicks"),
        State("batch-product", "value"),
        State("batch-qty", "value"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def create_batch(n_clicks, product_id, qty, version):
        if not n_clicks:
            return no_update, no_update
        store = ds.get_store()
        product = store.state.find_product(product_id)
        qty = positive_quantity(qty)
        if product is None or qty is None:
            return no_update, no_update
        batch = store.produce_finished_batch(**ds.plan_batch(product, qty))
        return toast(f"Batch {batch.batch_code} ({qty} pkts) added", "Batch Created"), (version or 0) + 1
