"""Billing page callbacks — issue an invoice for an order, download its PDF."""
import logging

from dash import Input, Output, State, callback_context, dcc, no_update, ALL

from khakhra_dashboard import data_state as ds
from khakhra_dashboard.components.cards import toast
from khakhra_dashboard.pdf_reports import invoice_filename, invoice_pdf_bytes

logger = logging.getLogger(__name__)


def _clicked():
    trigger = callback_context.triggered[0] if callback_context.triggered else None
    return bool(trigger and trigger.get("value"))


def register_callbacks(app):
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("store-version", "data", allow_duplicate=True),
        Input({"type": "invoice-create-btn", "order": ALL}, "n_clicks"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def create_invoice(_clicks, version):
        if not _clicked():
            return no_update, no_update
        invoice = ds.get_store().create_invoice_for_order(callback_context.triggered_id["order"])
        if invoice is None:
            return no_update, no_update
        return toast(f"{invoice.invoice_number} issued", "Invoice Created"), (version or 0) + 1

    @app.callback(
        Output("invoice-download", "data"),
        Input({"type": "invoice-pdf-btn", "invoice": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def download_invoice(_clicks):
        if not _clicked():
            return no_update
        state = ds.get_store().state
        invoice = state.find_invoice(callback_context.triggered_id["invoice"])
        content = invoice_pdf_bytes(state, invoice.id) if invoice else None
        if content is None:
            return no_update
        logger.info("Rendered %s PDF (%d bytes)", invoice.invoice_number, len(content))
        return dcc.send_bytes(content, invoice_filename(invoice))
