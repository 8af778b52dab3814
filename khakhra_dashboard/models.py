"""
models.py — Plain records for the business state.

Every record is frozen; collections are tuples. The store replaces records
wholesale instead of mutating them, so any snapshot a page holds stays valid.

Order.gst_amount / Order.total_amount are computed once when the order is
created and never recomputed, even if product prices change later.
Invoice.due_date is derived from issued_on when the invoice is created.
"""

from dataclasses import dataclass, field, asdict, fields
from datetime import datetime
from typing import Optional

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")
PAYMENT_METHODS = ("upi", "cash", "card", "bank_transfer")
EXPENSE_CATEGORIES = (
    "raw_materials", "packaging", "delivery", "utilities",
    "labor", "marketing", "maintenance", "other",
)
INVOICE_STATUSES = ("unpaid", "partial", "paid")


class UnknownProductError(LookupError):
    """An order line references a product id that does not exist."""

    def __init__(self, product_id):
        super().__init__(f"Product not found for {product_id}")
        self.product_id = product_id


# ── Timestamps ───────────────────────────────────────────────────────────────

def now_iso() -> str:
    """Current local time as ISO-8601 with UTC offset, second precision."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp or plain date string."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _pick(cls, data):
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


# ── Reference data ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    gst_number: Optional[str] = None
    is_wholesale: bool = False
    last_order_date: Optional[str] = None
    repeat_count: int = 0

    @classmethod
    def from_dict(cls, data):
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    sale_price: float
    cost_price: float
    gst_rate: float
    unit: str = "packet"
    variety: str = ""
    description: str = ""
    default_batch_size: int = 0

    @classmethod
    def from_dict(cls, data):
        return cls(**_pick(cls, data))


# ── Inventory ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RawMaterial:
    id: str
    name: str
    unit: str
    quantity: float
    reorder_level: float
    last_updated: str

    @classmethod
    def from_dict(cls, data):
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class FinishedGood:
    id: str
    product_id: str
    batch_code: str
    quantity: int
    reorder_level: int
    mfg_date: str
    expiry_date: str

    @classmethod
    def from_dict(cls, data):
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class InventoryState:
    raw_materials: tuple = ()
    finished_goods: tuple = ()

    @classmethod
    def from_dict(cls, data):
        return cls(
            raw_materials=tuple(RawMaterial.from_dict(r) for r in data.get("raw_materials", [])),
            finished_goods=tuple(FinishedGood.from_dict(f) for f in data.get("finished_goods", [])),
        )


# ── Orders / finance ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OrderItem:
    product_id: str
    quantity: int
    unit_price: float
    cost_price: float

    @classmethod
    def from_dict(cls, data):
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class Order:
    id: str
    order_number: str
    customer_id: str
    items: tuple
    status: str
    payment_method: str
    created_at: str
    total_amount: float
    gst_amount: float = 0.0
    discount_amount: float = 0.0
    shipping_cost: float = 0.0
    note: Optional[str] = None
    expected_ship_date: Optional[str] = None
    delivered_at: Optional[str] = None
    cancelled_at: Optional[str] = None
    invoice_number: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        values = _pick(cls, data)
        values["items"] = tuple(OrderItem.from_dict(i) for i in data.get("items", []))
        return cls(**values)


@dataclass(frozen=True)
class Expense:
    id: str
    category: str
    description: str
    amount: float
    paid_to: str
    date: str
    payment_mode: str
    recurring: bool = False

    @classmethod
    def from_dict(cls, data):
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class Invoice:
    id: str
    order_id: str
    invoice_number: str
    issued_on: str
    due_date: str
    amount: float
    gst_amount: float
    payment_status: str = "unpaid"
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        return cls(**_pick(cls, data))


@dataclass(frozen=True)
class ProfitLossRow:
    period_key: str
    label: str
    revenue: float
    cost_of_goods_sold: float
    gross_profit: float
    expenses: float
    net_profit: float


# ── Whole state ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AppState:
    customers: tuple = ()
    products: tuple = ()
    inventory: InventoryState = field(default_factory=InventoryState)
    orders: tuple = ()
    expenses: tuple = ()
    invoices: tuple = ()

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "AppState":
        return cls(
            customers=tuple(Customer.from_dict(c) for c in data.get("customers", [])),
            products=tuple(Product.from_dict(p) for p in data.get("products", [])),
            inventory=InventoryState.from_dict(data.get("inventory", {})),
            orders=tuple(Order.from_dict(o) for o in data.get("orders", [])),
            expenses=tuple(Expense.from_dict(e) for e in data.get("expenses", [])),
            invoices=tuple(Invoice.from_dict(i) for i in data.get("invoices", [])),
        )

    # Lookups return None when the id is unknown.
    def find_product(self, product_id):
        return next((p for p in self.products if p.id == product_id), None)

    def find_customer(self, customer_id):
        return next((c for c in self.customers if c.id == customer_id), None)

    def find_order(self, order_id):
        return next((o for o in self.orders if o.id == order_id), None)

    def find_invoice(self, invoice_id):
        return next((i for i in self.invoices if i.id == invoice_id), None)
