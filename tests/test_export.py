import io

import pandas as pd
import pytest

from khakhra_dashboard.export import (
    export_filename,
    export_records,
    summary_records,
    workbook_bytes,
)
from khakhra_dashboard.sample_data import build_sample_state


@pytest.fixture
def state():
    return build_sample_state()


@pytest.mark.parametrize("scope,sheets", [
    ("orders", ["Orders"]),
    ("inventory", ["RawMaterials", "FinishedGoods"]),
    ("finance", ["Invoices", "Expenses"]),
    ("all", ["Orders", "RawMaterials", "FinishedGoods", "Invoices", "Expenses"]),
])
def test_export_scopes(state, scope, sheets):
    assert list(export_records(state, scope)) == sheets


def test_unknown_scope(state):
    with pytest.raises(ValueError):
        export_records(state, "payroll")


def test_order_records_columns(state):
    rows = export_records(state, "orders")["Orders"]
    assert len(rows) == len(state.orders)
    first = rows[0]
    assert list(first) == ["orderNumber", "customerId", "status", "createdAt", "revenue", "gst", "total"]
    assert first["orderNumber"] == "KH-24001"
    assert first["revenue"] == 12 * 40 + 8 * 35


def test_summary_records(state):
    overview, low_stock = summary_records(state)
    metrics = dict(overview)
    assert metrics["Total Orders"] == "5"
    assert metrics["Expenses"] == "₹61,900.00"
    assert low_stock == []


def test_workbook_round_trips_through_pandas(state):
    content = workbook_bytes(export_records(state, "finance"))
    sheets = pd.read_excel(io.BytesIO(content), sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["Invoices", "Expenses"]
    assert list(sheets["Invoices"]["invoiceNumber"]) == ["INV-24001", "INV-24002"]
    assert len(sheets["Expenses"]) == 4


def test_export_filename():
    assert export_filename("all") == "khakhra-all.xlsx"
