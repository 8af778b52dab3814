"""
export.py — Flat records for spreadsheet export, plus the XLSX sink.

The record builders are plain data; workbook_bytes() just dumps them, one
sheet per list, with pandas/openpyxl and no styling.
"""

import io

import pandas as pd

from khakhra_dashboard.calculations import (
    calculate_order_cost,
    calculate_order_revenue,
    expense_total,
    low_stock_batches,
)
from khakhra_dashboard.formatting import format_currency

EXPORT_SCOPES = ("orders", "inventory", "finance", "all")


def order_records(state):
    return [{
        "orderNumber": o.order_number,
        "customerId": o.customer_id,
        "status": o.status,
        "createdAt": o.created_at,
        "revenue": calculate_order_revenue(o),
        "gst": o.gst_amount or 0,
        "total": o.total_amount,
    } for o in state.orders]


def raw_material_records(state):
    return [{
        "id": rm.id,
        "name": rm.name,
        "quantity": rm.quantity,
        "reorderLevel": rm.reorder_level,
        "lastUpdated": rm.last_updated,
    } for rm in state.inventory.raw_materials]


def finished_good_records(state):
    return [{
        "id": fg.id,
        "productId": fg.product_id,
        "batchCode": fg.batch_code,
        "quantity": fg.quantity,
        "reorderLevel": fg.reorder_level,
        "mfgDate": fg.mfg_date,
        "expiryDate": fg.expiry_date,
    } for fg in state.inventory.finished_goods]


def invoice_records(state):
    return [{
        "invoiceNumber": inv.invoice_number,
        "orderId": inv.order_id,
        "issuedOn": inv.issued_on,
        "amount": inv.amount,
        "gst": inv.gst_amount,
        "paymentStatus": inv.payment_status,
    } for inv in state.invoices]


def expense_records(state):
    return [{
        "date": e.date,
        "category": e.category,
        "description": e.description,
        "amount": e.amount,
        "paidTo": e.paid_to,
    } for e in state.expenses]


def export_records(state, scope="all"):
    """Sheet name -> rows for the requested scope."""
    if scope not in EXPORT_SCOPES:
        raise ValueError(f"Unknown export scope: {scope}")
    sheets = {}
    if scope in ("orders", "all"):
        sheets["Orders"] = order_records(state)
    if scope in ("inventory", "all"):
        sheets["RawMaterials"] = raw_material_records(state)
        sheets["FinishedGoods"] = finished_good_records(state)
    if scope in ("finance", "all"):
        sheets["Invoices"] = invoice_records(state)
        sheets["Expenses"] = expense_records(state)
    return sheets


def summary_records(state):
    """Executive summary: (metric rows, low-stock batch rows)."""
    revenue = sum(calculate_order_revenue(o) for o in state.orders)
    cogs = sum(calculate_order_cost(o) for o in state.orders)
    gst = sum(o.gst_amount or 0 for o in state.orders)
    overview = [
        ("Total Orders", str(len(state.orders))),
        ("Revenue", format_currency(revenue)),
        ("COGS", format_currency(cogs)),
        ("Gross Profit", format_currency(revenue - cogs)),
        ("Expenses", format_currency(expense_total(state.expenses))),
        ("GST Collected", format_currency(gst)),
    ]
    names = {p.id: p.name for p in state.products}
    low_stock = [
        (fg.batch_code, names.get(fg.product_id, fg.product_id), str(fg.quantity), str(fg.reorder_level))
        for fg in low_stock_batches(state.inventory.finished_goods)
    ]
    return overview, low_stock


def workbook_bytes(sheets) -> bytes:
    """Write each sheet's rows to an in-memory XLSX workbook."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, index=False)
    return buffer.getvalue()


def export_filename(scope):
    return f"khakhra-{scope}.xlsx"
