from datetime import datetime

import pytest

from khakhra_dashboard.callbacks.inventory_cb import positive_amount, positive_quantity
from khakhra_dashboard.callbacks.expenses_cb import expense_timestamp
from khakhra_dashboard.callbacks.navigation_cb import render_page
from khakhra_dashboard.callbacks.orders_cb import next_line_index, parse_order_lines, removal_position
from khakhra_dashboard.calculations import build_profit_loss
from khakhra_dashboard.models import Expense
from khakhra_dashboard.pages import billing, financials, orders, overview
from khakhra_dashboard.pages.inventory import balance_color
from khakhra_dashboard.theme import GREEN, ORANGE, RED

PATHS = ["/", "/orders", "/inventory", "/billing", "/profit-loss", "/expenses", "/analytics", "/exports"]


def component_ids(node):
    """Every component id in a layout tree."""
    found = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, (list, tuple)):
            stack.extend(current)
            continue
        if current is None or isinstance(current, (str, int, float)):
            continue
        cid = getattr(current, "id", None)
        if cid is not None:
            found.append(cid)
        children = getattr(current, "children", None)
        if children is not None:
            stack.append(children)
    return found


def _typed(ids, kind):
    return [i for i in ids if isinstance(i, dict) and i.get("type") == kind]


# ── Routing ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("role", ["admin", "staff", "accountant"])
@pytest.mark.parametrize("path", PATHS)
def test_every_page_renders_for_every_role(sample_store, path, role):
    assert render_page(path, role) is not None


def test_no_role_shows_selector(sample_store):
    ids = component_ids(render_page("/orders", None))
    assert sorted(i["role"] for i in _typed(ids, "role-pick")) == ["accountant", "admin", "staff"]


def test_unknown_path_is_404(sample_store):
    page = render_page("/nowhere", "admin")
    assert "404" in page.children[0].children


# ── Role gating ──────────────────────────────────────────────────────────────

def test_order_form_only_for_order_managers(sample_store):
    assert "order-submit-btn" in component_ids(render_page("/orders", "staff"))
    accountant = component_ids(render_page("/orders", "accountant"))
    assert "order-submit-btn" not in accountant
    assert not _typed(accountant, "order-status-btn")
    assert "order-tracker" in accountant


def test_invoice_buttons_only_for_billing_managers(sample_store):
    pending = _typed(component_ids(render_page("/billing", "accountant")), "invoice-create-btn")
    # sample data invoices ord-001 and ord-002 only
    assert sorted(i["order"] for i in pending) == ["ord-003", "ord-004", "ord-005"]
    assert not _typed(component_ids(render_page("/billing", "staff")), "invoice-create-btn")


def test_inventory_controls_for_staff(sample_store):
    ids = component_ids(render_page("/inventory", "staff"))
    assert len(_typed(ids, "rm-add")) == 4
    assert len(_typed(ids, "fg-consume")) == 4
    assert "batch-create-btn" in ids
    assert "batch-create-btn" not in component_ids(render_page("/inventory", "accountant"))


def test_expense_delete_only_for_expense_managers(sample_store):
    assert len(_typed(component_ids(render_page("/expenses", "admin")), "expense-delete-btn")) == 4
    assert not _typed(component_ids(render_page("/expenses", "staff")), "expense-delete-btn")


# ── Order tracker ────────────────────────────────────────────────────────────

def test_status_buttons_disable_current_status(sample_store):
    tracker = orders.order_tracker(sample_store.state, "delivered", editable=True)
    buttons = []
    stack = [tracker]
    while stack:
        node = stack.pop()
        if isinstance(node, (list, tuple)):
            stack.extend(node)
            continue
        cid = getattr(node, "id", None)
        if isinstance(cid, dict) and cid.get("type") == "order-status-btn":
            buttons.append(node)
        children = getattr(node, "children", None)
        if children is not None and not isinstance(children, str):
            stack.append(children)
    assert {b.id["order"] for b in buttons} == {"ord-001", "ord-005"}
    disabled = [b.id["status"] for b in buttons if b.disabled]
    assert disabled == ["delivered", "delivered"]


def test_order_summary_reflects_preview():
    preview = {"items": [{"name": "Masala Khakhra", "quantity": 2, "total": 80}],
               "sub_total": 80, "gst": 4, "grand_total": 144}
    assert orders.order_summary(preview, 1) is not None


# ── Page helpers ─────────────────────────────────────────────────────────────

def test_pulse_metrics_from_sample(sample_store):
    m = overview.pulse_metrics(sample_store.state)
    assert m["expenses"] == "₹61,900.00"
    assert m["repeat_rate"] == "25.0%"
    assert m["delivered"] == "2"
    assert m["low_stock"] == 0


def test_gross_margin(sample_store):
    order = sample_store.state.find_order("ord-005")
    assert billing.gross_margin(order) == pytest.approx((45 - 24) / 45 * 100)


def test_net_margin_without_revenue():
    power = Expense("e1", "utilities", "Power", 500, "Torrent Power", "2024-05-03T10:00:00+05:30", "upi")
    rows = build_profit_loss([], [power], "daily")
    assert rows[0].revenue == 0
    assert financials.net_margin(rows[0]) == 0.0
    assert financials.pl_table(rows) is not None


def test_balance_color():
    assert balance_color(50, 50) == RED
    assert balance_color(70, 50) == ORANGE
    assert balance_color(80, 50) == GREEN


# ── Form parsing ─────────────────────────────────────────────────────────────

def test_parse_order_lines():
    assert parse_order_lines(["masala", None, "plain"], [2, None, 3]) == [("masala", 2), ("plain", 3)]
    assert parse_order_lines(["masala", None, None], [2.0, 5, None]) == [("masala", 2)]
    assert parse_order_lines(["masala"], [0]) is None
    assert parse_order_lines(["masala"], [None]) is None
    assert parse_order_lines(["masala"], [1.5]) is None
    assert parse_order_lines([None, None], [1, 2]) == []


def test_positive_quantity():
    assert positive_quantity(5) == 5
    assert positive_quantity(5.0) == 5
    assert positive_quantity(0) is None
    assert positive_quantity(-3) is None
    assert positive_quantity(2.5) is None
    assert positive_quantity(None) is None


def test_positive_amount_allows_fractional_raw_material():
    assert positive_amount(2.5) == 2.5
    assert positive_amount(0.5) == 0.5
    assert positive_amount(4.0) == 4
    assert isinstance(positive_amount(4.0), int)
    assert positive_amount(0) is None
    assert positive_amount(-1) is None
    assert positive_amount(None) is None


def test_expense_timestamp_carries_offset():
    stamp = expense_timestamp("2024-05-03")
    parsed = datetime.fromisoformat(stamp)
    assert parsed.date().isoformat() == "2024-05-03"
    assert parsed.tzinfo is not None
    assert datetime.fromisoformat(expense_timestamp(None)).tzinfo is not None


# ── Order lines ──────────────────────────────────────────────────────────────

def test_order_form_starts_with_one_line(sample_store):
    ids = component_ids(render_page("/orders", "admin"))
    assert "order-add-line-btn" in ids
    assert [i["index"] for i in _typed(ids, "order-line")] == [0]


def test_new_line_defaults_walk_the_catalogue(sample_store):
    products = sample_store.state.products
    assert orders.next_line_product(products, 0) == products[0].id
    assert orders.next_line_product(products, 2) == products[2].id
    assert orders.next_line_product(products, 50) == products[-1].id
    assert orders.next_line_product((), 0) is None


def test_line_indexes_grow_past_removed_lines():
    assert next_line_index([]) == 0
    assert next_line_index([{"type": "order-line", "index": 0},
                            {"type": "order-line", "index": 4}]) == 5


def test_removal_keeps_the_last_line():
    lines = [{"type": "order-line", "index": 0}, {"type": "order-line", "index": 3},
             {"type": "order-line", "index": 7}]
    assert removal_position(lines, 3) == 1
    assert removal_position(lines, 9) is None
    assert removal_position(lines[:1], 0) is None


def test_more_than_three_lines_parse():
    product_ids = ["masala", "plain", "jeera", "methi", None]
    quantities = [1, 2, 3, 4, None]
    assert parse_order_lines(product_ids, quantities) == [
        ("masala", 1), ("plain", 2), ("jeera", 3), ("methi", 4)]


# ── PDF downloads ────────────────────────────────────────────────────────────

def test_pdf_download_controls(sample_store):
    billing_ids = component_ids(render_page("/billing", "staff"))
    assert sorted(i["invoice"] for i in _typed(billing_ids, "invoice-pdf-btn")) == ["inv-001", "inv-002"]
    assert "invoice-download" in billing_ids
    export_ids = component_ids(render_page("/exports", "accountant"))
    assert "summary-pdf-btn" in export_ids
    assert "summary-download" in export_ids
