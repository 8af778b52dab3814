"""Reusable table builders."""
from dash import html
import dash_bootstrap_components as dbc
from khakhra_dashboard.theme import *


def stock_level_bar(quantity, reorder_level):
    """Stock gauge against twice the reorder level — 8px height, gradient fill."""
    scale = reorder_level * 2
    if scale <= 0:
        return html.Div(style={"width": "80px", "display": "inline-block"})
    pct = max(0, min(100, (quantity / scale) * 100))
    color = GREEN if quantity > reorder_level else (ORANGE if quantity > 0 else RED)
    return html.Div([
        html.Div(style={"width": f"{max(pct, 4)}%", "height": "8px",
                         "background": f"linear-gradient(90deg, {color}88, {color})",
                         "borderRadius": "4px",
                         "transition": "width 0.3s ease"}),
    ], style={"width": "80px", "height": "8px", "backgroundColor": "#0d0d1a",
              "borderRadius": "4px", "display": "inline-block", "verticalAlign": "middle",
              "overflow": "hidden"})


def simple_table(headers, rows, right_align=()):
    """Striped table from header labels and rows of cell children."""
    head = html.Thead(html.Tr([
        html.Th(h, style={"textAlign": "right"} if i in right_align else None)
        for i, h in enumerate(headers)
    ]))
    body = html.Tbody([
        html.Tr([
            html.Td(cell, style={"textAlign": "right", "fontFamily": "monospace"} if i in right_align else None)
            for i, cell in enumerate(row)
        ])
        for row in rows
    ])
    return dbc.Table([head, body], striped=True, hover=True, size="sm", className="mb-0")
