from datetime import date

import pytest

from khakhra_dashboard.calculations import (
    build_profit_loss,
    build_revenue_series,
    build_top_products,
    calculate_order_gross_profit,
    calculate_order_net_profit,
    calculate_repeat_rate,
    calculate_seasonal_demand,
    filter_orders_by_date,
    low_stock_batches,
    order_totals,
    orders_without_invoice,
    period_key,
    period_label,
    preview_order_totals,
    round2,
    summarize_orders,
)
from khakhra_dashboard.models import Expense, FinishedGood, Invoice, Order, OrderItem, parse_timestamp
from khakhra_dashboard.sample_data import PRODUCTS


def make_order(order_id, customer_id, created_at, items, status="pending"):
    return Order(
        id=order_id, order_number=f"KH-{order_id}", customer_id=customer_id,
        items=tuple(OrderItem(*i) for i in items), status=status, payment_method="upi",
        created_at=created_at, total_amount=0.0,
    )


def make_expense(expense_id, amount, when):
    return Expense(expense_id, "other", "misc", amount, "Vendor", when, "cash")


# ── Totals ───────────────────────────────────────────────────────────────────

def test_order_totals_follow_grand_total_formula():
    items = [OrderItem("masala", 3, 40, 20), OrderItem("garlic", 7, 44, 23)]
    gst, total = order_totals(items, PRODUCTS, shipping_cost=55.5, discount_amount=12)
    expected_gst = 3 * 40 * 0.05 + 7 * 44 * 0.12
    assert gst == round2(expected_gst)
    assert total == round2(3 * 40 + 7 * 44 + 55.5 - 12 + expected_gst)


def test_order_totals_two_packets_of_masala():
    items = [OrderItem("masala", 2, 40, 20)]
    assert order_totals(items, PRODUCTS) == (4.0, 84.0)
    assert order_totals(items, PRODUCTS, shipping_cost=60) == (4.0, 144.0)


def test_order_totals_unknown_product_adds_no_gst():
    gst, total = order_totals([OrderItem("mystery", 2, 50, 10)], PRODUCTS)
    assert gst == 0
    assert total == 100


def test_preview_skips_unknown_products():
    preview = preview_order_totals(PRODUCTS, [("masala", 2), ("nope", 5)], shipping_cost=60)
    assert [i["product_id"] for i in preview["items"]] == ["masala"]
    assert preview["sub_total"] == 80
    assert preview["gst"] == 4
    assert preview["grand_total"] == 144


def test_order_profit_helpers():
    order = make_order("1", "c1", "2024-05-01T10:00:00+05:30", [("masala", 10, 40, 20)])
    assert calculate_order_gross_profit(order) == 200
    assert calculate_order_net_profit(order, allocated_expenses=50) == 150


def test_summarize_orders_counts_statuses():
    orders = [
        make_order("1", "c1", "2024-05-01T10:00:00+05:30", [("masala", 1, 40, 20)], "delivered"),
        make_order("2", "c2", "2024-05-02T10:00:00+05:30", [("plain", 2, 35, 18)], "cancelled"),
    ]
    summary = summarize_orders(orders)
    assert summary["revenue"] == 110
    assert summary["gross_profit"] == 110 - 56
    assert summary["delivered"] == 1
    assert summary["cancelled"] == 1


# ── Profit & loss ────────────────────────────────────────────────────────────

@pytest.mark.parametrize("mode", ["daily", "weekly", "monthly"])
def test_profit_loss_rows_are_internally_consistent(mode):
    orders = [
        make_order("1", "c1", "2024-05-01T10:00:00+05:30", [("masala", 3, 40.333, 19.111)]),
        make_order("2", "c2", "2024-05-09T10:00:00+05:30", [("plain", 7, 35.07, 18.019)]),
        make_order("3", "c1", "2024-06-02T10:00:00+05:30", [("diet", 5, 45.005, 24.4)]),
    ]
    expenses = [make_expense("e1", 100.456, "2024-05-03T10:00:00+05:30"),
                make_expense("e2", 20.1, "2024-07-01T10:00:00+05:30")]
    rows = build_profit_loss(orders, expenses, mode)
    assert rows
    for row in rows:
        assert row.gross_profit == pytest.approx(round2(row.revenue - row.cost_of_goods_sold), abs=0.011)
        assert row.net_profit == pytest.approx(
            round2(row.revenue - row.cost_of_goods_sold - row.expenses), abs=0.021)
    assert [r.period_key for r in rows] == sorted(r.period_key for r in rows)


def test_profit_loss_monthly_merges_expense_only_periods():
    orders = [make_order("1", "c1", "2024-05-01T10:00:00+05:30", [("masala", 10, 40, 20)])]
    expenses = [make_expense("e1", 150, "2024-05-20T10:00:00+05:30"),
                make_expense("e2", 30, "2024-06-05T10:00:00+05:30")]
    rows = build_profit_loss(orders, expenses, "monthly")
    assert [(r.period_key, r.label) for r in rows] == [("2024-05", "May 2024"), ("2024-06", "Jun 2024")]
    may, june = rows
    assert (may.revenue, may.cost_of_goods_sold, may.gross_profit) == (400, 200, 200)
    assert may.expenses == 150
    assert may.net_profit == 50
    assert june.revenue == 0
    assert june.net_profit == -30


def test_profit_loss_weekly_uses_iso_weeks():
    # 2024-12-30 belongs to ISO week 1 of 2025
    orders = [make_order("1", "c1", "2024-12-30T10:00:00+05:30", [("plain", 1, 35, 18)])]
    rows = build_profit_loss(orders, [], "weekly")
    assert rows[0].period_key == "2025-W01"
    assert rows[0].label == "Week 1, 2025"


def test_profit_loss_empty_and_bad_mode():
    assert build_profit_loss([], [], "daily") == []
    with pytest.raises(ValueError):
        build_profit_loss([], [], "yearly")


def test_period_key_and_label_daily():
    dt = parse_timestamp("2024-05-03T10:15:00+05:30")
    assert period_key(dt, "daily") == "2024-05-03"
    assert period_label("2024-05-03", "daily") == "03 May"


# ── Analytics ────────────────────────────────────────────────────────────────

def test_repeat_rate_half_of_customers_repeat():
    counts = {"a": 3, "b": 1, "c": 2, "d": 1}
    orders = [
        make_order(f"{cid}-{n}", cid, "2024-05-01T10:00:00+05:30", [("plain", 1, 35, 18)])
        for cid, count in counts.items() for n in range(count)
    ]
    assert calculate_repeat_rate(orders) == 50.0


def test_repeat_rate_without_orders():
    assert calculate_repeat_rate([]) == 0.0


def test_top_products_ranked_by_revenue():
    orders = [
        make_order("1", "c1", "2024-05-01T10:00:00+05:30", [("masala", 10, 40, 20), ("plain", 1, 35, 18)]),
        make_order("2", "c2", "2024-05-02T10:00:00+05:30", [("diet", 5, 45, 24), ("masala", 2, 40, 20)]),
    ]
    top = build_top_products(orders, PRODUCTS, limit=2)
    assert [p["name"] for p in top] == ["Masala Khakhra", "Diet Khakhra"]
    assert top[0] == {"name": "Masala Khakhra", "quantity": 12, "revenue": 480, "profit": 240}


def test_revenue_series_is_daily_and_ascending():
    orders = [
        make_order("2", "c1", "2024-05-02T18:00:00+05:30", [("plain", 2, 35, 18)]),
        make_order("1", "c1", "2024-05-01T10:00:00+05:30", [("plain", 1, 35, 18)]),
        make_order("3", "c2", "2024-05-02T09:00:00+05:30", [("masala", 1, 40, 20)]),
    ]
    series = build_revenue_series(orders)
    assert [(p["date"], p["revenue"], p["orders"]) for p in series] == [
        ("2024-05-01", 35, 1),
        ("2024-05-02", 110, 2),
    ]
    assert series[0]["label"] == "01 May"


def test_seasonal_demand_orders_months_by_revenue():
    orders = [
        make_order("1", "c1", "2024-04-10T10:00:00+05:30", [("plain", 1, 35, 18)]),
        make_order("2", "c1", "2024-05-10T10:00:00+05:30", [("masala", 10, 40, 20)]),
        make_order("3", "c1", "2024-05-11T10:00:00+05:30", [("masala", 1, 40, 20)]),
    ]
    assert calculate_seasonal_demand(orders) == [
        {"name": "May 2024", "revenue": 440},
        {"name": "Apr 2024", "revenue": 35},
    ]
    assert len(calculate_seasonal_demand(orders, limit=1)) == 1


def test_filter_orders_by_date_is_inclusive():
    orders = [
        make_order("1", "c1", "2024-05-01T00:30:00+05:30", [("plain", 1, 35, 18)]),
        make_order("2", "c1", "2024-05-03T23:30:00+05:30", [("plain", 1, 35, 18)]),
        make_order("3", "c1", "2024-05-04T08:00:00+05:30", [("plain", 1, 35, 18)]),
    ]
    picked = filter_orders_by_date(orders, date(2024, 5, 1), "2024-05-03")
    assert [o.id for o in picked] == ["1", "2"]


# ── Stock / billing ──────────────────────────────────────────────────────────

def test_low_stock_includes_reorder_level():
    batches = [
        FinishedGood("a", "plain", "A", 10, 10, "", ""),
        FinishedGood("b", "plain", "B", 11, 10, "", ""),
    ]
    assert [fg.id for fg in low_stock_batches(batches)] == ["a"]


def test_orders_without_invoice():
    orders = [make_order("1", "c1", "2024-05-01T10:00:00+05:30", []),
              make_order("2", "c1", "2024-05-01T10:00:00+05:30", [])]
    invoices = [Invoice("inv", "1", "INV-1", "2024-05-01", "2024-05-08", 0, 0)]
    assert [o.id for o in orders_without_invoice(orders, invoices)] == ["2"]
