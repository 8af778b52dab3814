"""Reusable card/section builders."""
from dash import html
import dash_bootstrap_components as dbc
from khakhra_dashboard.theme import *
from khakhra_dashboard.formatting import format_currency


def section(title, children, color=ORANGE, description=None, action=None):
    """Titled section card with colored top border."""
    header = [html.Span(title)]
    if action is not None:
        header.append(html.Div(action, className="ms-auto"))
    body = []
    if description:
        body.append(html.P(description, style={"color": GRAY, "fontSize": "12px", "marginBottom": "12px"}))
    body.extend(children if isinstance(children, list) else [children])
    return dbc.Card([
        dbc.CardHeader(header, style={"color": color, "fontWeight": "bold", "fontSize": "16px",
                                      "borderBottom": f"2px solid {color}",
                                      "backgroundColor": "transparent", "padding": "12px 16px",
                                      "display": "flex", "alignItems": "center"}),
        dbc.CardBody(body, style={"padding": "16px"}),
    ], className="mb-3")


def row_item(label, amount, indent=0, bold=False, color=WHITE, neg_color=RED):
    """Single P&L / ledger row."""
    display_color = neg_color if amount < 0 else color
    style = {
        "display": "flex", "justifyContent": "space-between",
        "padding": "4px 0", "borderBottom": "1px solid #ffffff10",
        "marginLeft": f"{indent * 24}px",
    }
    if bold:
        style["fontWeight"] = "bold"
        style["borderBottom"] = "2px solid #ffffff30"
        style["padding"] = "8px 0"
    return html.Div([
        html.Span(label, style={"color": color if not bold else display_color, "fontSize": "13px"}),
        html.Span(format_currency(amount), style={"color": display_color, "fontFamily": "monospace",
                                                  "fontSize": "13px"}),
    ], style=style)


def make_chart(fig, height=360, legend_h=True):
    """Apply consistent styling to a Plotly figure."""
    layout = {**CHART_LAYOUT, "height": height}
    if legend_h:
        layout["legend"] = dict(orientation="h", y=1.12, x=0.5, xanchor="center")
    fig.update_layout(**layout)
    return fig


def status_badge(status, colors=STATUS_COLORS):
    color = colors.get(status, GRAY)
    return html.Span(status.replace("_", " ").title(), style={
        "color": color, "border": f"1px solid {color}66", "borderRadius": "10px",
        "padding": "1px 8px", "fontSize": "11px", "fontWeight": "600",
    })


def empty_note(text):
    return html.P(text, style={"color": GRAY, "textAlign": "center", "padding": "24px"})


def toast(message, header, icon="success"):
    return dbc.Toast(message, header=header, icon=icon, duration=3000, style=TOAST_STYLE)
