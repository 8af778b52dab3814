"""
state.py — Pure state transitions.

apply(state, action) -> new state. Nothing here touches disk, clocks or
counters except through values carried on the action; the controller in
data_state.py is the only caller that swaps the live state.
"""

from dataclasses import dataclass, replace
from typing import Optional

from khakhra_dashboard.models import (
    AppState,
    Expense,
    FinishedGood,
    Invoice,
    Order,
    now_iso,
)


# ── Actions ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SetAppState:
    state: AppState


@dataclass(frozen=True)
class AddOrder:
    order: Order


@dataclass(frozen=True)
class UpdateOrder:
    order: Order


@dataclass(frozen=True)
class UpdateOrderStatus:
    order_id: str
    status: str
    at: Optional[str] = None


@dataclass(frozen=True)
class AddExpense:
    expense: Expense


@dataclass(frozen=True)
class DeleteExpense:
    expense_id: str


@dataclass(frozen=True)
class AddInvoice:
    invoice: Invoice


@dataclass(frozen=True)
class AdjustRawMaterial:
    material_id: str
    delta: float
    last_updated: Optional[str] = None


@dataclass(frozen=True)
class AdjustFinishedGood:
    batch_id: str
    delta: int


@dataclass(frozen=True)
class CreateFinishedGoodBatch:
    batch: FinishedGood


# ── Helpers ──────────────────────────────────────────────────────────────────

def clamp_quantity(quantity, delta):
    """Apply a signed delta with a floor of zero."""
    return max(quantity + delta, 0)


def first_batch_for_product(finished_goods, product_id) -> Optional[FinishedGood]:
    """First batch in collection order for the product (not the oldest)."""
    return next((fg for fg in finished_goods if fg.product_id == product_id), None)


def _with_status(order, status, at):
    changes = {"status": status}
    if status == "delivered":
        changes["delivered_at"] = at
    elif status == "cancelled":
        changes["cancelled_at"] = at
    return replace(order, **changes)


# ── Transition function ──────────────────────────────────────────────────────

def apply(state: AppState, action) -> AppState:
    """Return the state that results from applying one action."""
    if isinstance(action, SetAppState):
        return action.state

    if isinstance(action, AddOrder):
        return replace(state, orders=(action.order,) + state.orders)

    if isinstance(action, UpdateOrder):
        return replace(state, orders=tuple(
            action.order if o.id == action.order.id else o for o in state.orders
        ))

    if isinstance(action, UpdateOrderStatus):
        at = action.at or now_iso()
        return replace(state, orders=tuple(
            _with_status(o, action.status, at) if o.id == action.order_id else o
            for o in state.orders
        ))

    if isinstance(action, AddExpense):
        return replace(state, expenses=(action.expense,) + state.expenses)

    if isinstance(action, DeleteExpense):
        return replace(state, expenses=tuple(
            e for e in state.expenses if e.id != action.expense_id
        ))

    if isinstance(action, AddInvoice):
        return replace(state, invoices=(action.invoice,) + state.invoices)

    if isinstance(action, AdjustRawMaterial):
        stamp = action.last_updated or now_iso()
        materials = tuple(
            replace(rm, quantity=clamp_quantity(rm.quantity, action.delta), last_updated=stamp)
            if rm.id == action.material_id else rm
            for rm in state.inventory.raw_materials
        )
        return replace(state, inventory=replace(state.inventory, raw_materials=materials))

    if isinstance(action, AdjustFinishedGood):
        batches = tuple(
            replace(fg, quantity=clamp_quantity(fg.quantity, action.delta))
            if fg.id == action.batch_id else fg
            for fg in state.inventory.finished_goods
        )
        return replace(state, inventory=replace(state.inventory, finished_goods=batches))

    if isinstance(action, CreateFinishedGoodBatch):
        batches = (action.batch,) + state.inventory.finished_goods
        return replace(state, inventory=replace(state.inventory, finished_goods=batches))

    raise TypeError(f"Unknown action: {type(action).__name__}")


def apply_order(state: AppState, order: Order) -> AppState:
    """Insert an order and decrement stock for each of its items.

    Each item reduces the first batch found for its product, floored at zero.
    Products without any batch are skipped.
    """
    state = apply(state, AddOrder(order))
    for item in order.items:
        batch = first_batch_for_product(state.inventory.finished_goods, item.product_id)
        if batch is not None:
            state = apply(state, AdjustFinishedGood(batch.id, -item.quantity))
    return state
