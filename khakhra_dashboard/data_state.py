"""
data_state.py — The store: owns the AppState and its named commands.

This is the single source of truth for dashboard data. Pages read
`get_store().state` (a frozen snapshot); callbacks change it only through
the DataStore methods below. Every command computes the next state with the
pure functions in state.py, swaps it in one step under a lock, then writes
the whole state to disk.
"""

import logging
import random
import re
import threading
import uuid
from datetime import date, datetime, timedelta
from typing import Optional

from khakhra_dashboard import config
from khakhra_dashboard.calculations import order_totals
from khakhra_dashboard.models import (
    AppState,
    Expense,
    FinishedGood,
    Invoice,
    Order,
    OrderItem,
    UnknownProductError,
    now_iso,
    parse_timestamp,
)
from khakhra_dashboard.sample_data import build_sample_state
from khakhra_dashboard.state import (
    AddExpense,
    AddInvoice,
    AdjustFinishedGood,
    AdjustRawMaterial,
    CreateFinishedGoodBatch,
    DeleteExpense,
    SetAppState,
    UpdateOrderStatus,
    apply,
    apply_order,
    first_batch_for_product,
)
from khakhra_dashboard.storage import load_state, save_state

logger = logging.getLogger(__name__)

ORDER_PREFIX = "KH-"
INVOICE_PREFIX = "INV-"
NUMBER_BASE = 24000
INVOICE_DUE_DAYS = 7
BATCH_SHELF_LIFE_DAYS = 120
BATCH_REORDER_FRACTION = 0.4


def random_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"


def numeric_suffix(number: str) -> Optional[int]:
    """All digits of a document number as an int, e.g. 'KH-24007' -> 24007."""
    digits = re.sub(r"[^0-9]", "", number or "")
    return int(digits) if digits else None


class NumberSequence:
    """Monotonic document numbers, seeded from the highest existing suffix."""

    def __init__(self, prefix: str, base: int = NUMBER_BASE):
        self.prefix = prefix
        self.base = base
        self.last = base

    def seed(self, numbers):
        suffixes = [n for n in (numeric_suffix(x) for x in numbers) if n is not None]
        self.last = max(suffixes) if suffixes else self.base

    def peek(self) -> str:
        return f"{self.prefix}{self.last + 1}"

    def advance(self):
        self.last += 1


def plan_batch(product, quantity, today=None):
    """Batch record the production form proposes for a product."""
    today = today or datetime.now().astimezone()
    return {
        "product_id": product.id,
        "batch_code": f"{product.id.upper()}-{today.month}{today.day}-{random.randint(10, 99)}",
        "quantity": quantity,
        "reorder_level": round(quantity * BATCH_REORDER_FRACTION),
        "mfg_date": today.isoformat(timespec="seconds"),
        "expiry_date": (today + timedelta(days=BATCH_SHELF_LIFE_DAYS)).isoformat(timespec="seconds"),
    }


def _due_date(issued_on: str) -> str:
    due = parse_timestamp(issued_on) + timedelta(days=INVOICE_DUE_DAYS)
    return due.isoformat(timespec="seconds")


class DataStore:
    """Owns the live AppState; exposes only named commands."""

    def __init__(self, path: str, seed_sample: bool = True):
        self.path = path
        self._lock = threading.RLock()
        self._orders_seq = NumberSequence(ORDER_PREFIX)
        self._invoices_seq = NumberSequence(INVOICE_PREFIX)

        loaded = load_state(path)
        if loaded is not None:
            logger.info("Loaded state from %s (%d orders)", path, len(loaded.orders))
            self._state = loaded
        else:
            self._state = build_sample_state() if seed_sample else AppState()
            logger.info("Starting with %s state", "sample" if seed_sample else "empty")
        self._reseed()
        self._save()

    # ── Internal ─────────────────────────────────────────────────────────

    @property
    def state(self) -> AppState:
        return self._state

    def _reseed(self):
        self._orders_seq.seed(o.order_number for o in self._state.orders)
        self._invoices_seq.seed(i.invoice_number for i in self._state.invoices)

    def _save(self):
        try:
            save_state(self.path, self._state)
        except OSError:
            logger.exception("Failed to persist state to %s", self.path)

    def _commit(self, new_state: AppState):
        self._state = new_state
        self._save()

    def _dispatch(self, action) -> AppState:
        """Apply a single action and persist."""
        with self._lock:
            self._commit(apply(self._state, action))
            return self._state

    def replace_state(self, new_state: AppState):
        with self._lock:
            self._commit(apply(self._state, SetAppState(new_state)))
            self._reseed()

    # ── Orders ───────────────────────────────────────────────────────────

    def create_order(self, customer_id, items, payment_method, status="pending",
                     discount_amount=0, shipping_cost=0, note=None,
                     expected_ship_date=None) -> Order:
        """Create an order and take its quantities out of finished goods.

        items: iterable of (product_id, quantity). Raises UnknownProductError
        before anything changes if a product id does not exist.
        """
        with self._lock:
            state = self._state
            order_items = []
            for product_id, quantity in items:
                product = state.find_product(product_id)
                if product is None:
                    raise UnknownProductError(product_id)
                order_items.append(OrderItem(
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=product.sale_price,
                    cost_price=product.cost_price,
                ))

            gst, total = order_totals(order_items, state.products, shipping_cost, discount_amount)
            order = Order(
                id=random_id("ord"),
                order_number=self._orders_seq.peek(),
                customer_id=customer_id,
                items=tuple(order_items),
                status=status,
                payment_method=payment_method,
                created_at=now_iso(),
                discount_amount=discount_amount,
                shipping_cost=shipping_cost,
                gst_amount=gst,
                total_amount=total,
                note=note,
                expected_ship_date=expected_ship_date,
            )
            self._commit(apply_order(state, order))
            self._orders_seq.advance()

        logger.info("Created order %s for %s (total %.2f)", order.order_number, customer_id, total)
        return order

    def update_order_status(self, order_id, status):
        self._dispatch(UpdateOrderStatus(order_id, status))
        logger.info("Order %s -> %s", order_id, status)

    # ── Billing ──────────────────────────────────────────────────────────

    def create_invoice_for_order(self, order_id, issued_on=None) -> Optional[Invoice]:
        """Invoice an order; returns None if the order does not exist.

        Does not check for an existing invoice on the same order.
        """
        with self._lock:
            order = self._state.find_order(order_id)
            if order is None:
                return None
            issued_on = issued_on or now_iso()
            invoice = Invoice(
                id=random_id("inv"),
                order_id=order_id,
                invoice_number=self._invoices_seq.peek(),
                issued_on=issued_on,
                due_date=_due_date(issued_on),
                amount=order.total_amount,
                gst_amount=order.gst_amount or 0,
                payment_status="unpaid",
            )
            self._commit(apply(self._state, AddInvoice(invoice)))
            self._invoices_seq.advance()

        logger.info("Issued %s for order %s", invoice.invoice_number, order.order_number)
        return invoice

    # ── Expenses ─────────────────────────────────────────────────────────

    def record_expense(self, category, description, amount, paid_to, date,
                       payment_mode, recurring=False) -> Expense:
        expense = Expense(
            id=random_id("exp"),
            category=category,
            description=description,
            amount=amount,
            paid_to=paid_to,
            date=date,
            payment_mode=payment_mode,
            recurring=recurring,
        )
        self._dispatch(AddExpense(expense))
        logger.info("Recorded expense %s (%.2f)", description, amount)
        return expense

    def remove_expense(self, expense_id):
        self._dispatch(DeleteExpense(expense_id))

    # ── Inventory ────────────────────────────────────────────────────────

    def replenish_raw_material(self, material_id, quantity, last_updated=None):
        self._dispatch(AdjustRawMaterial(material_id, quantity, last_updated))

    def consume_raw_material(self, material_id, quantity, last_updated=None):
        self._dispatch(AdjustRawMaterial(material_id, -quantity, last_updated))

    def adjust_finished_good(self, batch_id, delta):
        self._dispatch(AdjustFinishedGood(batch_id, delta))

    def produce_finished_batch(self, **data) -> FinishedGood:
        batch = FinishedGood(id=random_id("fg"), **data)
        self._dispatch(CreateFinishedGoodBatch(batch))
        logger.info("Produced batch %s (%d units of %s)", batch.batch_code, batch.quantity, batch.product_id)
        return batch

    def consume_finished_goods(self, product_id, quantity):
        """Take quantity from the first batch of the product; no batch, no-op."""
        with self._lock:
            batch = first_batch_for_product(self._state.inventory.finished_goods, product_id)
            if batch is None:
                return
            self._commit(apply(self._state, AdjustFinishedGood(batch.id, -quantity)))


# ══════════════════════════════════════════════════════════════════════════════
#  PROCESS-WIDE STORE
# ══════════════════════════════════════════════════════════════════════════════

_STORE: Optional[DataStore] = None
_STORE_LOCK = threading.Lock()


def get_store() -> DataStore:
    """Return the process store, loading it from config.DATA_FILE on first use."""
    global _STORE
    with _STORE_LOCK:
        if _STORE is None:
            _STORE = DataStore(config.DATA_FILE, seed_sample=config.SEED_SAMPLE_DATA)
        return _STORE


def set_store(store: Optional[DataStore]):
    global _STORE
    with _STORE_LOCK:
        _STORE = store


def today_iso() -> str:
    return date.today().isoformat()
