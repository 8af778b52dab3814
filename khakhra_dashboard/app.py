"""
Khakhra Command Center — orders, inventory, billing and analytics dashboard
Run:  python -m khakhra_dashboard.app
Open: http://127.0.0.1:8070
"""

import logging
import os

import dash
from dash import html, dcc
import dash_bootstrap_components as dbc

from khakhra_dashboard import config
from khakhra_dashboard.logging_config import setup_logging

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ── Create the Dash app ──────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    suppress_callback_exceptions=True,
    external_stylesheets=[
        dbc.themes.DARKLY,
        "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap",
    ],
    assets_folder=os.path.join(os.path.dirname(__file__), "assets"),
    title=config.BUSINESS_NAME,
)
server = app.server  # For deployment (Gunicorn)

# ── Sidebar navigation ──────────────────────────────────────────────────────
NAV_ITEMS = [
    {"label": "Business Pulse", "icon": "\U0001f4ca", "value": "/"},
    {"label": "Orders",         "icon": "\U0001f6d2", "value": "/orders"},
    {"label": "Inventory",      "icon": "\U0001f4e6", "value": "/inventory"},
    "---",
    {"label": "Billing",        "icon": "\U0001f9fe", "value": "/billing"},
    {"label": "Profit & Loss",  "icon": "\U0001f4b0", "value": "/profit-loss"},
    {"label": "Expenses",       "icon": "\U0001f4b8", "value": "/expenses"},
    "---",
    {"label": "Analytics",      "icon": "\U0001f4c8", "value": "/analytics"},
    {"label": "Exports",        "icon": "\u2b07\ufe0f",  "value": "/exports"},
]


def _build_sidebar():
    nav_links = []
    for item in NAV_ITEMS:
        if item == "---":
            nav_links.append(html.Hr(className="sidebar-divider"))
        else:
            nav_links.append(
                dbc.NavLink(
                    [html.Span(item["icon"], className="nav-icon"), item["label"]],
                    href=item["value"],
                    active="exact",
                )
            )

    return html.Div([
        # Brand
        html.Div([
            html.H4("KHAKHRA"),
            html.Small("Command Center"),
        ], className="sidebar-brand"),

        # Nav
        dbc.Nav(nav_links, vertical=True, pills=True),
    ], className="sidebar")


# ── App layout ───────────────────────────────────────────────────────────────
def serve_layout():
    return html.Div([
        dcc.Location(id="url", refresh=False),

        # Sidebar
        _build_sidebar(),

        # Main content area
        html.Div([
            # Header
            html.Div([
                html.Div([
                    html.H3(config.BUSINESS_NAME.upper()),
                    html.Div("Unified control on customer orders, manufacturing inventory, "
                             "billing, and intelligent analytics.", className="header-subtitle"),
                ]),
                html.Div([
                    html.Span(id="role-badge", className="role-badge"),
                    dbc.Button("Switch role", id="role-switch-btn", size="sm",
                               color="secondary", outline=True, className="ms-2"),
                ], className="header-actions"),
            ], className="app-header"),

            # Page content (rendered by routing callback)
            html.Div(id="page-content"),

            # Toast notification container
            html.Div(id="toast-container"),

            # Hidden stores
            dcc.Store(id="session-role", storage_type="session"),
            dcc.Store(id="store-version", data=0),
        ], className="main-content"),
    ])


app.layout = serve_layout


# ── Register callbacks ───────────────────────────────────────────────────────
# Import callback modules AFTER app is created so they can reference `app`
from khakhra_dashboard.callbacks.navigation_cb import register_callbacks as _reg_nav
_reg_nav(app)

from khakhra_dashboard.callbacks import (
    role_cb, orders_cb, inventory_cb, billing_cb, expenses_cb, financials_cb, export_cb,
)
role_cb.register_callbacks(app)
orders_cb.register_callbacks(app)
inventory_cb.register_callbacks(app)
billing_cb.register_callbacks(app)
expenses_cb.register_callbacks(app)
financials_cb.register_callbacks(app)
export_cb.register_callbacks(app)

# ── Run ──────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    logger.info("%s on http://127.0.0.1:%d", config.BUSINESS_NAME, config.PORT)
    app.run(debug=config.DEBUG, host="0.0.0.0", port=config.PORT)
