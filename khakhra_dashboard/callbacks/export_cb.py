"""Exports page callbacks — XLSX for a scope, executive summary PDF."""
import logging

from dash import Input, Output, callback_context, dcc, no_update, ALL

from khakhra_dashboard import data_state as ds
from khakhra_dashboard.export import EXPORT_SCOPES, export_filename, export_records, workbook_bytes
from khakhra_dashboard.pdf_reports import SUMMARY_FILENAME, summary_pdf_bytes

logger = logging.getLogger(__name__)


def register_callbacks(app):
    @app.callback(
        Output("export-download", "data"),
        Input({"type": "export-btn", "scope": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def download(_clicks):
        trigger = callback_context.triggered[0] if callback_context.triggered else None
        if not trigger or not trigger.get("value"):
            return no_update
        scope = callback_context.triggered_id["scope"]
        if scope not in EXPORT_SCOPES:
            return no_update
        content = workbook_bytes(export_records(ds.get_store().state, scope))
        logger.info("Exported %s workbook (%d bytes)", scope, len(content))
        return dcc.send_bytes(content, export_filename(scope))

    @app.callback(
        Output("summary-download", "data"),
        Input("summary-pdf-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def download_summary(n_clicks):
        if not n_clicks:
            return no_update
        content = summary_pdf_bytes(ds.get_store().state)
        logger.info("Rendered executive summary PDF (%d bytes)", len(content))
        return dcc.send_bytes(content, SUMMARY_FILENAME)
