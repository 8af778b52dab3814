import pytest

from khakhra_dashboard.models import Expense, FinishedGood, Order, OrderItem
from khakhra_dashboard.state import (
    AddExpense,
    AdjustFinishedGood,
    AdjustRawMaterial,
    CreateFinishedGoodBatch,
    DeleteExpense,
    UpdateOrder,
    UpdateOrderStatus,
    apply,
    apply_order,
    clamp_quantity,
    first_batch_for_product,
)

AT = "2024-05-05T12:00:00+05:30"


def _order(order_id="ord-1", items=(("masala", 3),)):
    return Order(
        id=order_id, order_number="KH-24001", customer_id="cust-001",
        items=tuple(OrderItem(pid, qty, 40, 20) for pid, qty in items),
        status="pending", payment_method="upi", created_at=AT, total_amount=0.0,
    )


@pytest.mark.parametrize("on_hand,consume,expected", [(10, 2, 8), (10, 10, 0), (3, 7, 0), (0, 5, 0)])
def test_clamp_quantity_never_negative(on_hand, consume, expected):
    assert clamp_quantity(on_hand, -consume) == expected


def test_apply_order_takes_stock_from_first_matching_batch(base_state):
    state = apply_order(base_state, _order(items=(("masala", 3),)))
    batches = {fg.id: fg.quantity for fg in state.inventory.finished_goods}
    assert batches == {"fg-1": 7, "fg-2": 50}
    assert state.orders[0].id == "ord-1"


def test_apply_order_floors_first_batch_without_spilling_over(base_state):
    state = apply_order(base_state, _order(items=(("masala", 25),)))
    batches = {fg.id: fg.quantity for fg in state.inventory.finished_goods}
    assert batches == {"fg-1": 0, "fg-2": 50}


def test_apply_order_skips_products_without_batches(base_state):
    state = apply_order(base_state, _order(items=(("garlic", 5),)))
    assert state.inventory == base_state.inventory
    assert len(state.orders) == 1


def test_apply_does_not_mutate_input(base_state):
    apply(base_state, AdjustFinishedGood("fg-1", -4))
    assert base_state.inventory.finished_goods[0].quantity == 10


def test_status_update_stamps_delivery_and_cancellation(base_state):
    state = apply_order(base_state, _order())
    delivered = apply(state, UpdateOrderStatus("ord-1", "delivered", at=AT))
    assert delivered.orders[0].status == "delivered"
    assert delivered.orders[0].delivered_at == AT
    assert delivered.orders[0].cancelled_at is None

    cancelled = apply(state, UpdateOrderStatus("ord-1", "cancelled", at=AT))
    assert cancelled.orders[0].cancelled_at == AT
    assert cancelled.orders[0].delivered_at is None

    shipped = apply(state, UpdateOrderStatus("ord-1", "shipped"))
    assert shipped.orders[0].status == "shipped"
    assert shipped.orders[0].delivered_at is None


def test_status_update_for_unknown_order_changes_nothing(base_state):
    state = apply_order(base_state, _order())
    assert apply(state, UpdateOrderStatus("missing", "delivered")) == state


def test_update_order_replaces_by_id(base_state):
    state = apply_order(base_state, _order())
    edited = apply(state, UpdateOrder(_order(items=(("plain", 1),))))
    assert edited.orders[0].items[0].product_id == "plain"


def test_expenses_prepend_and_delete(base_state):
    e1 = Expense("e1", "labor", "wages", 100, "Staff", AT, "cash")
    e2 = Expense("e2", "delivery", "courier", 50, "Courier", AT, "upi")
    state = apply(apply(base_state, AddExpense(e1)), AddExpense(e2))
    assert [e.id for e in state.expenses] == ["e2", "e1"]
    assert [e.id for e in apply(state, DeleteExpense("e2")).expenses] == ["e1"]
    assert apply(state, DeleteExpense("nope")).expenses == state.expenses


def test_raw_material_adjustment_clamps_and_stamps(base_state):
    state = apply(base_state, AdjustRawMaterial("rm-wheat", -150, last_updated=AT))
    material = state.inventory.raw_materials[0]
    assert material.quantity == 0
    assert material.last_updated == AT


def test_new_batch_goes_first(base_state):
    batch = FinishedGood("fg-new", "masala", "MS-NEW", 5, 2, AT, AT)
    state = apply(base_state, CreateFinishedGoodBatch(batch))
    assert first_batch_for_product(state.inventory.finished_goods, "masala").id == "fg-new"


def test_unknown_action_is_rejected(base_state):
    with pytest.raises(TypeError):
        apply(base_state, object())
