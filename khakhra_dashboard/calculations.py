"""
calculations.py — Pure aggregations over orders, expenses and products.

Nothing is cached; pages call these on every render.
"""

from datetime import date, datetime, time

import pandas as pd

from khakhra_dashboard.models import ProfitLossRow, parse_timestamp

TOP_PRODUCTS_LIMIT = 5
SEASONAL_DEMAND_LIMIT = 6
PERIOD_MODES = ("daily", "weekly", "monthly")


def round2(value):
    return round(float(value), 2)


# ══════════════════════════════════════════════════════════════════════════════
#  PER-ORDER FIGURES
# ══════════════════════════════════════════════════════════════════════════════

def calculate_order_revenue(order):
    return sum(item.unit_price * item.quantity for item in order.items)


def calculate_order_cost(order):
    return sum(item.cost_price * item.quantity for item in order.items)


def calculate_order_gross_profit(order):
    return calculate_order_revenue(order) - calculate_order_cost(order)


def calculate_order_net_profit(order, allocated_expenses=0):
    return calculate_order_gross_profit(order) - allocated_expenses


def order_totals(items, products, shipping_cost=0, discount_amount=0):
    """Return (gst_amount, total_amount) for a set of order items.

    GST per item is unit_price × quantity × the product's gst_rate; items
    whose product is unknown contribute no GST. The total is rounded to
    2 decimals, GST is rounded separately for storage.
    """
    rates = {p.id: p.gst_rate for p in products}
    gross = sum(item.unit_price * item.quantity for item in items)
    gst = sum(
        item.unit_price * item.quantity * rates[item.product_id]
        for item in items
        if item.product_id in rates
    )
    total = gross + (shipping_cost or 0) - (discount_amount or 0) + gst
    return round2(gst), round2(total)


def preview_order_totals(products, lines, discount_amount=0, shipping_cost=0):
    """Live totals for the order form. lines = [(product_id, quantity), ...]."""
    by_id = {p.id: p for p in products}
    rows = []
    for product_id, quantity in lines:
        product = by_id.get(product_id)
        if product is None:
            continue
        rows.append({
            "product_id": product.id,
            "name": product.name,
            "quantity": quantity,
            "sale_price": product.sale_price,
            "total": product.sale_price * quantity,
            "gst": product.sale_price * quantity * product.gst_rate,
        })
    sub_total = sum(r["total"] for r in rows)
    gst = sum(r["gst"] for r in rows)
    return {
        "items": rows,
        "sub_total": round2(sub_total),
        "gst": round2(gst),
        "grand_total": round2(sub_total + gst + (shipping_cost or 0) - (discount_amount or 0)),
    }


def summarize_orders(orders):
    revenue = sum(calculate_order_revenue(o) for o in orders)
    cost = sum(calculate_order_cost(o) for o in orders)
    return {
        "revenue": revenue,
        "cost": cost,
        "gst": sum(o.gst_amount or 0 for o in orders),
        "gross_profit": revenue - cost,
        "delivered": sum(1 for o in orders if o.status == "delivered"),
        "cancelled": sum(1 for o in orders if o.status == "cancelled"),
    }


# ══════════════════════════════════════════════════════════════════════════════
#  PERIOD BUCKETING
# ══════════════════════════════════════════════════════════════════════════════

def period_key(dt, mode):
    """Sortable key: YYYY-MM-DD, ISO YYYY-Www, or YYYY-MM."""
    if mode == "daily":
        return dt.strftime("%Y-%m-%d")
    if mode == "weekly":
        iso_year, iso_week, _ = dt.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    return dt.strftime("%Y-%m")


def period_label(key, mode):
    """Human label for a period key."""
    if mode == "daily":
        return datetime.strptime(key, "%Y-%m-%d").strftime("%d %b")
    if mode == "weekly":
        year, week = key.split("-W")
        return f"Week {int(week)}, {year}"
    return datetime.strptime(key, "%Y-%m").strftime("%b %Y")


def build_profit_loss(orders, expenses, mode="monthly"):
    """One ProfitLossRow per period that has an order or an expense.

    Figures are rounded per row, so summing rows may drift from a global
    total by a few paise.
    """
    if mode not in PERIOD_MODES:
        raise ValueError(f"Unknown period mode: {mode}")

    sales = pd.DataFrame(
        [{
            "period": period_key(parse_timestamp(o.created_at), mode),
            "revenue": calculate_order_revenue(o),
            "cost_of_goods_sold": calculate_order_cost(o),
        } for o in orders],
        columns=["period", "revenue", "cost_of_goods_sold"],
    )
    spend = pd.DataFrame(
        [{"period": period_key(parse_timestamp(e.date), mode), "expenses": e.amount} for e in expenses],
        columns=["period", "expenses"],
    )
    if sales.empty and spend.empty:
        return []

    by_period = (
        sales.groupby("period")[["revenue", "cost_of_goods_sold"]].sum()
        .join(spend.groupby("period")[["expenses"]].sum(), how="outer")
        .fillna(0.0)
        .sort_index()
    )

    rows = []
    for key, r in by_period.iterrows():
        revenue = float(r["revenue"])
        cogs = float(r["cost_of_goods_sold"])
        spent = float(r["expenses"])
        rows.append(ProfitLossRow(
            period_key=key,
            label=period_label(key, mode),
            revenue=round2(revenue),
            cost_of_goods_sold=round2(cogs),
            gross_profit=round2(revenue - cogs),
            expenses=round2(spent),
            net_profit=round2(revenue - cogs - spent),
        ))
    return rows


# ══════════════════════════════════════════════════════════════════════════════
#  ANALYTICS
# ══════════════════════════════════════════════════════════════════════════════

def build_top_products(orders, products, limit=TOP_PRODUCTS_LIMIT):
    """Products ranked by revenue: name, quantity, revenue, profit."""
    names = {p.id: p.name for p in products}
    lines = pd.DataFrame(
        [{
            "name": names[item.product_id],
            "quantity": item.quantity,
            "revenue": item.unit_price * item.quantity,
            "cost": item.cost_price * item.quantity,
        } for o in orders for item in o.items if item.product_id in names],
        columns=["name", "quantity", "revenue", "cost"],
    )
    if lines.empty:
        return []

    grouped = lines.groupby("name", sort=False)[["quantity", "revenue", "cost"]].sum()
    grouped = grouped.sort_values("revenue", ascending=False, kind="stable").head(limit)
    return [
        {
            "name": name,
            "quantity": int(r["quantity"]),
            "revenue": round2(r["revenue"]),
            "profit": round2(r["revenue"] - r["cost"]),
        }
        for name, r in grouped.iterrows()
    ]


def build_revenue_series(orders):
    """Daily revenue and order count, ascending by date."""
    df = pd.DataFrame(
        [{
            "date": period_key(parse_timestamp(o.created_at), "daily"),
            "revenue": calculate_order_revenue(o),
        } for o in orders],
        columns=["date", "revenue"],
    )
    if df.empty:
        return []
    daily = df.groupby("date").agg(revenue=("revenue", "sum"), orders=("revenue", "count")).sort_index()
    return [
        {
            "date": day,
            "label": period_label(day, "daily"),
            "revenue": round2(r["revenue"]),
            "orders": int(r["orders"]),
        }
        for day, r in daily.iterrows()
    ]


def calculate_seasonal_demand(orders, limit=SEASONAL_DEMAND_LIMIT):
    """Top calendar months by revenue, e.g. [{"name": "May 2024", "revenue": 1234.0}]."""
    df = pd.DataFrame(
        [{
            "name": parse_timestamp(o.created_at).strftime("%b %Y"),
            "revenue": calculate_order_revenue(o),
        } for o in orders],
        columns=["name", "revenue"],
    )
    if df.empty:
        return []
    monthly = df.groupby("name", sort=False)["revenue"].sum()
    monthly = monthly.sort_values(ascending=False, kind="stable").head(limit)
    return [{"name": name, "revenue": round2(value)} for name, value in monthly.items()]


def calculate_repeat_rate(orders):
    """Share of ordering customers with more than one order, as a percentage."""
    counts = pd.Series([o.customer_id for o in orders], dtype=object).value_counts()
    if len(counts) == 0:
        return 0.0
    return float((counts > 1).sum()) / len(counts) * 100


def filter_orders_by_date(orders, start, end):
    """Orders created between start and end, inclusive by calendar day."""
    start_dt = datetime.combine(_as_date(start), time.min)
    end_dt = datetime.combine(_as_date(end), time.max)
    return [
        o for o in orders
        if start_dt <= parse_timestamp(o.created_at).replace(tzinfo=None) <= end_dt
    ]


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_timestamp(value).date()


# ══════════════════════════════════════════════════════════════════════════════
#  STOCK / BILLING
# ══════════════════════════════════════════════════════════════════════════════

def low_stock_batches(finished_goods):
    return [fg for fg in finished_goods if fg.quantity <= fg.reorder_level]


def low_stock_materials(raw_materials):
    return [rm for rm in raw_materials if rm.quantity <= rm.reorder_level]


def orders_without_invoice(orders, invoices):
    invoiced = {inv.order_id for inv in invoices}
    return [o for o in orders if o.id not in invoiced]


def expense_total(expenses):
    return sum(e.amount for e in expenses)
