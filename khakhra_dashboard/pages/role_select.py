"""Role selector — shown instead of the dashboard until a session role is picked."""
from dash import html
import dash_bootstrap_components as dbc

from khakhra_dashboard.theme import *
from khakhra_dashboard.roles import ROLE_OPTIONS

ROLE_COLORS = {"admin": ORANGE, "staff": TEAL, "accountant": PURPLE}


def _role_card(option):
    color = ROLE_COLORS.get(option["value"], BLUE)
    return dbc.Col(dbc.Card(dbc.CardBody([
        html.H5(option["label"], style={"color": color, "fontWeight": "bold"}),
        html.P(option["description"], style={"color": GRAY, "fontSize": "13px"}),
        dbc.Button(f"Continue as {option['label'].split(' ')[0]}",
                   id={"type": "role-pick", "role": option["value"]},
                   color="warning", outline=True, size="sm"),
    ]), style={"borderTop": f"3px solid {color}"}, className="role-card"), md=4)


def layout():
    return html.Div([
        html.H3("Choose how you are working today", style={"color": WHITE}),
        html.P("The role only decides which controls are shown in this browser session.",
               style={"color": GRAY}),
        dbc.Row([_role_card(option) for option in ROLE_OPTIONS], className="g-3 mt-2"),
    ], style={"maxWidth": "960px", "padding": "40px 0"})
