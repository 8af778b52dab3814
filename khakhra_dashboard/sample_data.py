"""
sample_data.py — Seed state used on first run (no state file yet).

Dates are relative to the moment the seed is built.
"""

from datetime import datetime, timedelta

from khakhra_dashboard.calculations import order_totals
from khakhra_dashboard.models import (
    AppState,
    Customer,
    Expense,
    FinishedGood,
    InventoryState,
    Invoice,
    Order,
    OrderItem,
    Product,
    RawMaterial,
)


def _stamp(now, days=0):
    return (now + timedelta(days=days)).isoformat(timespec="seconds")


PRODUCTS = (
    Product("plain", "Plain Khakhra", 35, 18, 0.05, "packet", "Classic",
            "Traditional plain khakhra perfect for tea time.", 200),
    Product("masala", "Masala Khakhra", 40, 20, 0.05, "packet", "Spicy",
            "Signature blend of spices with authentic crunch.", 250),
    Product("jeera", "Jeera Khakhra", 38, 19, 0.05, "packet", "Savory",
            "Roasted cumin infused khakhra loved by all.", 200),
    Product("methi", "Methi Khakhra", 42, 21, 0.05, "packet", "Herbal",
            "Fenugreek enriched healthy khakhra.", 180),
    Product("garlic", "Garlic Khakhra", 44, 23, 0.12, "packet", "Premium",
            "Garlic flavoured khakhra with premium spices.", 160),
    Product("diet", "Diet Khakhra", 45, 24, 0.05, "packet", "Health",
            "Low-oil khakhra for health-conscious customers.", 220),
)

CUSTOMERS = (
    Customer("cust-001", "Kavya Patel", "kavya.patel@example.com", "+91-98981-22334",
             "Ahmedabad, Gujarat", gst_number="24ABCDE1234F1Z5", repeat_count=6),
    Customer("cust-002", "Delight Stores", "orders@delightstores.in", "+91-97238-11223",
             "Vadodara, Gujarat", gst_number="24ASDFG4587H1Z2", is_wholesale=True, repeat_count=10),
    Customer("cust-003", "Healthy Bite Mart", "buyer@healthybite.in", "+91-98765-10101",
             "Surat, Gujarat", gst_number="24GHJKL9988T1Z1", is_wholesale=True, repeat_count=3),
    Customer("cust-004", "Priya Shah", "priya.shah@example.com", "+91-90909-55665",
             "Mumbai, Maharashtra", repeat_count=4),
)


def _order(products, now, order_id, number, customer_id, lines, status, payment_method,
           created_days, discount=0, shipping=0, **extra):
    items = tuple(OrderItem(pid, qty, price, cost) for pid, qty, price, cost in lines)
    gst, total = order_totals(items, products, shipping, discount)
    return Order(
        id=order_id,
        order_number=number,
        customer_id=customer_id,
        items=items,
        status=status,
        payment_method=payment_method,
        created_at=_stamp(now, created_days),
        discount_amount=discount,
        shipping_cost=shipping,
        gst_amount=gst,
        total_amount=total,
        **extra,
    )


def build_sample_state(now=None) -> AppState:
    """Return the demo business: six products, four customers, five orders."""
    now = now or datetime.now().astimezone()

    raw_materials = (
        RawMaterial("rm-wheat", "Whole Wheat Flour", "kg", 280, 150, _stamp(now, -2)),
        RawMaterial("rm-oil", "Cold Pressed Oil", "litre", 95, 60, _stamp(now, -1)),
        RawMaterial("rm-spice", "Masala Mix", "kg", 70, 40, _stamp(now, -3)),
        RawMaterial("rm-pack", "Vacuum Packaging Sleeves", "pack", 450, 180, _stamp(now)),
    )
    finished_goods = (
        FinishedGood("fg-101", "masala", "MS2410-A", 220, 120, _stamp(now, -4), _stamp(now, 120)),
        FinishedGood("fg-102", "plain", "PL2410-B", 180, 100, _stamp(now, -6), _stamp(now, 150)),
        FinishedGood("fg-103", "jeera", "JR2410-C", 140, 90, _stamp(now, -3), _stamp(now, 130)),
        FinishedGood("fg-104", "diet", "DT2410-A", 110, 80, _stamp(now, -2), _stamp(now, 90)),
    )

    orders = (
        _order(PRODUCTS, now, "ord-001", "KH-24001", "cust-001",
               [("masala", 12, 40, 20), ("plain", 8, 35, 18)],
               "delivered", "upi", -6, discount=50, shipping=60,
               delivered_at=_stamp(now, -4), expected_ship_date=_stamp(now, -5),
               invoice_number="INV-24001"),
        _order(PRODUCTS, now, "ord-002", "KH-24002", "cust-002",
               [("masala", 80, 38, 20), ("jeera", 60, 36, 19)],
               "processing", "bank_transfer", -2, discount=200, shipping=350,
               expected_ship_date=_stamp(now, 1)),
        _order(PRODUCTS, now, "ord-003", "KH-24003", "cust-003",
               [("diet", 45, 45, 24), ("garlic", 30, 44, 23)],
               "shipped", "bank_transfer", -1, shipping=280,
               expected_ship_date=_stamp(now, 1)),
        _order(PRODUCTS, now, "ord-004", "KH-24004", "cust-004",
               [("methi", 15, 42, 21), ("plain", 10, 35, 18)],
               "pending", "card", 0, shipping=80),
        _order(PRODUCTS, now, "ord-005", "KH-24005", "cust-001",
               [("diet", 12, 45, 24)],
               "delivered", "upi", -12, discount=20,
               delivered_at=_stamp(now, -10)),
    )

    expenses = (
        Expense("exp-001", "raw_materials", "Bulk purchase of wheat flour", 32000,
                "Shree Traders", _stamp(now, -5), "bank_transfer"),
        Expense("exp-002", "delivery", "Courier charges for western region", 4200,
                "BlueDart Logistics", _stamp(now, -2), "upi"),
        Expense("exp-003", "labor", "Weekly wages for packaging staff", 18500,
                "Staff Payroll", _stamp(now, -3), "bank_transfer", recurring=True),
        Expense("exp-004", "utilities", "Electricity bill for unit", 7200,
                "Torrent Power", _stamp(now, -7), "bank_transfer"),
    )

    invoices = (
        Invoice("inv-001", "ord-001", "INV-24001", _stamp(now, -6), _stamp(now, -1),
                orders[0].total_amount, orders[0].gst_amount, "paid"),
        Invoice("inv-002", "ord-002", "INV-24002", _stamp(now, -2), _stamp(now, 5),
                orders[1].total_amount, orders[1].gst_amount, "unpaid"),
    )

    return AppState(
        customers=CUSTOMERS,
        products=PRODUCTS,
        inventory=InventoryState(raw_materials, finished_goods),
        orders=orders,
        expenses=expenses,
        invoices=invoices,
    )
