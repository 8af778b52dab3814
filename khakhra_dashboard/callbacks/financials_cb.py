"""Profit & Loss callbacks — regroup the ledger when the period toggle changes."""
from dash import Input, Output

from khakhra_dashboard import data_state as ds
from khakhra_dashboard.calculations import PERIOD_MODES, build_profit_loss


def register_callbacks(app):
    @app.callback(
        Output("pl-chart", "figure"),
        Output("pl-table", "children"),
        Input("pl-mode", "value"),
        prevent_initial_call=True,
    )
    def change_mode(mode):
        from khakhra_dashboard.pages.financials import DEFAULT_MODE, pl_figure, pl_table
        if mode not in PERIOD_MODES:
            mode = DEFAULT_MODE
        state = ds.get_store().state
        rows = build_profit_loss(state.orders, state.expenses, mode)
        return pl_figure(rows), pl_table(rows)
