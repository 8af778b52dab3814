"""Page routing callback — renders the correct page based on URL and session role."""
from dash import html, Input, Output

from khakhra_dashboard.roles import normalize_role


def render_page(pathname, role):
    """Page children for a path; the role selector while no role is chosen."""
    role = normalize_role(role)
    if role is None:
        from khakhra_dashboard.pages.role_select import layout
        return layout()
    if pathname == "/" or pathname is None:
        from khakhra_dashboard.pages.overview import layout
        return layout(role)
    elif pathname == "/orders":
        from khakhra_dashboard.pages.orders import layout
        return layout(role)
    elif pathname == "/inventory":
        from khakhra_dashboard.pages.inventory import layout
        return layout(role)
    elif pathname == "/billing":
        from khakhra_dashboard.pages.billing import layout
        return layout(role)
    elif pathname == "/profit-loss":
        from khakhra_dashboard.pages.financials import layout
        return layout(role)
    elif pathname == "/expenses":
        from khakhra_dashboard.pages.expenses import layout
        return layout(role)
    elif pathname == "/analytics":
        from khakhra_dashboard.pages.analytics import layout
        return layout(role)
    elif pathname == "/exports":
        from khakhra_dashboard.pages.exports import layout
        return layout(role)
    else:
        return html.Div([
            html.H3("404 — Page Not Found", style={"color": "#e74c3c"}),
            html.P(f"No page at '{pathname}'"),
        ], style={"padding": "40px"})


def register_callbacks(app):
    @app.callback(
        Output("page-content", "children"),
        Output("role-badge", "children"),
        Input("url", "pathname"),
        Input("session-role", "data"),
        Input("store-version", "data"),
    )
    def route_page(pathname, role, _version):
        role = normalize_role(role)
        badge = f"Active role: {role}" if role else "No role selected"
        return render_page(pathname, role), badge
