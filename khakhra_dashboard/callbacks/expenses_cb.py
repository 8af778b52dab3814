"""Expenses page callbacks — record and delete expenses."""
from datetime import datetime

from dash import Input, Output, State, callback_context, no_update, ALL

from khakhra_dashboard import data_state as ds
from khakhra_dashboard.components.cards import toast
from khakhra_dashboard.models import now_iso


def expense_timestamp(picked_date):
    """Local-offset ISO timestamp for a date picker value (YYYY-MM-DD)."""
    if not picked_date:
        return now_iso()
    return datetime.fromisoformat(picked_date).astimezone().isoformat(timespec="seconds")


def register_callbacks(app):
    # ── Record expense ─────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("store-version", "data", allow_duplicate=True),
        Input("expense-submit-btn", "n_clicks"),
        State("expense-category", "value"),
        State("expense-description", "value"),
        State("expense-paid-to", "value"),
        State("expense-amount", "value"),
        State("expense-date", "date"),
        State("expense-mode", "value"),
        State("expense-recurring", "value"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def record_expense(n_clicks, category, description, paid_to, amount, picked_date,
                       payment_mode, recurring, version):
        if not n_clicks or not description or amount is None or amount <= 0:
            return no_update, no_update
        expense = ds.get_store().record_expense(
            category=category or "other",
            description=description.strip(),
            amount=float(amount),
            paid_to=(paid_to or "").strip(),
            date=expense_timestamp(picked_date),
            payment_mode=payment_mode or "upi",
            recurring=bool(recurring),
        )
        return toast(f"{expense.description} recorded", "Expense Saved"), (version or 0) + 1

    # ── Delete expense ─────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("store-version", "data", allow_duplicate=True),
        Input({"type": "expense-delete-btn", "expense": ALL}, "n_clicks"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def delete_expense(_clicks, version):
        trigger = callback_context.triggered[0] if callback_context.triggered else None
        if not trigger or not trigger.get("value"):
            return no_update, no_update
        ds.get_store().remove_expense(callback_context.triggered_id["expense"])
        return toast("Expense removed", "Expense Deleted", icon="warning"), (version or 0) + 1
