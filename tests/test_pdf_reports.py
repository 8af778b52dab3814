from dataclasses import replace

import pytest

from khakhra_dashboard.pdf_reports import (
    SUMMARY_FILENAME,
    invoice_filename,
    invoice_lines,
    invoice_pdf_bytes,
    summary_pdf_bytes,
)
from khakhra_dashboard.sample_data import build_sample_state


@pytest.fixture
def state():
    return build_sample_state()


def test_invoice_lines_include_gst(state):
    order = state.find_order("ord-001")
    rows = invoice_lines(state, order)
    assert rows[0] == ["Masala Khakhra", "12", "Rs. 40.00", "5%", "Rs. 504.00"]
    assert len(rows) == len(order.items)


def test_invoice_pdf(state):
    invoice = state.invoices[0]
    content = invoice_pdf_bytes(state, invoice.id)
    assert content.startswith(b"%PDF")
    assert invoice_filename(invoice) == f"{invoice.invoice_number}.pdf"


def test_invoice_pdf_for_unknown_invoice(state):
    assert invoice_pdf_bytes(state, "inv-ghost") is None


def test_invoice_pdf_spans_pages_for_long_orders(state):
    invoice = state.invoices[0]
    order = state.find_order(invoice.order_id)
    long_order = replace(order, items=order.items * 40)
    orders = tuple(long_order if o.id == order.id else o for o in state.orders)
    content = invoice_pdf_bytes(replace(state, orders=orders), invoice.id)
    assert content.startswith(b"%PDF")
    pages = content.count(b"/Type /Page") - content.count(b"/Type /Pages")
    assert pages > 1


def test_summary_pdf_with_low_stock(state):
    batches = tuple(replace(fg, quantity=0) for fg in state.inventory.finished_goods)
    low = replace(state, inventory=replace(state.inventory, finished_goods=batches))
    assert summary_pdf_bytes(low).startswith(b"%PDF")
    assert summary_pdf_bytes(state).startswith(b"%PDF")
    assert SUMMARY_FILENAME == "khakhra-summary.pdf"
