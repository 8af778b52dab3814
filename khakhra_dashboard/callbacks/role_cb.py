"""Session role callbacks — pick a role, or clear it to get the selector back."""
from dash import Input, Output, callback_context, no_update, ALL

from khakhra_dashboard.roles import normalize_role


def register_callbacks(app):
    @app.callback(
        Output("session-role", "data"),
        Input({"type": "role-pick", "role": ALL}, "n_clicks"),
        Input("role-switch-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def set_role(_picks, _switch):
        trigger = callback_context.triggered[0] if callback_context.triggered else None
        if not trigger or not trigger.get("value"):
            return no_update
        if callback_context.triggered_id == "role-switch-btn":
            return None
        return normalize_role(callback_context.triggered_id.get("role")) or no_update
