import logging

import pytest

from order_engine.core.exceptions import (
    AddressOwnershipMismatch,
    ChoiceCardinalityError,
    ChoiceNotFound,
    ClientNotFound,
    GarnishNotFound,
    ItemNotFound,
    OrderNotEditable,
    OrderOwnershipMismatch,
    OrderValidationError,
    RequiredChoiceMissing,
)
from order_engine.models.enums import OrderStatus
from order_engine.models.menu_item import MenuItem
from order_engine.models.choice import Choice
from order_engine.models.order import Order
from order_engine.models.order_choice import OrderChoice
from order_engine.models.order_garnish_item import OrderGarnishItem
from order_engine.models.order_item import OrderItem
from order_engine.services import event_handlers  # noqa: F401
from order_engine.services.event_bus import event_bus
from order_engine.services.orders import ChoiceSelection, add_order_item, create_order


def _new_order(db, seed, flow_id="flow-1"):
    return create_order(
        db,
        client_id=seed.client_id,
        whatsapp_flows_id=flow_id,
        environment_id=seed.environment_id,
        client_address_id=seed.address_id,
    )


def _row_counts(db):
    return (
        db.query(OrderItem).count(),
        db.query(OrderChoice).count(),
        db.query(OrderGarnishItem).count(),
    )


def test_create_order_starts_in_cart_with_zero_amounts(db, seed):
    order = _new_order(db, seed)

    assert order.status == OrderStatus.CART
    assert order.client_address_id == seed.address_id
    assert order.client_sender == "5511999990000"
    assert (order.subtotal_amount, order.discount_amount, order.delivery_fee_amount, order.total_amount) == (
        0,
        0,
        0,
        0,
    )


def test_create_order_rejects_address_of_another_client(db, seed):
    with pytest.raises(AddressOwnershipMismatch):
        create_order(
            db,
            client_id=seed.client_id,
            whatsapp_flows_id="flow-1",
            environment_id=seed.environment_id,
            client_address_id=seed.other_address_id,
        )
    assert db.query(Order).count() == 0


def test_add_item_without_choices_updates_line_and_subtotal(db, seed):
    order = _new_order(db, seed)

    order_item = add_order_item(
        db,
        order_id=order.id,
        client_id=seed.client_id,
        item_id=seed.item_x,
        quantity=2,
        notes="sem cebola",
    )

    db.refresh(order)
    assert order_item.single_price_for_item_line == 1500
    assert order_item.total_price_for_item_line == 3000
    assert order_item.notes == "sem cebola"
    assert order_item.environment_id == seed.environment_id
    assert order_item.display_order == 0
    assert order.subtotal_amount == 3000
    assert order.total_amount == 3000


def test_garnish_price_stays_out_of_subtotal(db, seed):
    order = _new_order(db, seed)

    order_item = add_order_item(
        db,
        order_id=order.id,
        client_id=seed.client_id,
        item_id=seed.item_x,
        quantity=1,
        choices=[ChoiceSelection(choice_id=seed.choice_sauce, option_id=seed.garnish_bbq)],
    )

    db.refresh(order)
    assert len(order_item.order_choices) == 1
    order_choice = order_item.order_choices[0]
    assert order_choice.name_at_purchase == "Escolha o molho"
    assert (order_choice.min_at_purchase, order_choice.max_at_purchase) == (1, 1)
    assert len(order_choice.order_garnish_items) == 1
    garnish_line = order_choice.order_garnish_items[0]
    assert garnish_line.unit_price_at_purchase == 200
    assert garnish_line.total_price_for_garnish_item_line == 200
    assert garnish_line.environment_id == seed.environment_id
    assert order_item.total_price_for_item_line == 1500
    assert order.subtotal_amount == 1500


def test_selection_quantity_multiplies_garnish_line(db, seed):
    order = _new_order(db, seed)

    order_item = add_order_item(
        db,
        order_id=order.id,
        client_id=seed.client_id,
        item_id=seed.item_y,
        quantity=1,
        choices=[
            {"choiceId": seed.choice_drink, "optionId": seed.garnish_guarana, "quantity": 3},
        ],
    )

    garnish_line = order_item.order_choices[0].order_garnish_items[0]
    assert garnish_line.quantity == 3
    assert garnish_line.total_price_for_garnish_item_line == 1500


def test_display_order_follows_existing_lines_and_request_order(db, seed):
    order = _new_order(db, seed)
    add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_x, quantity=1)

    second = add_order_item(
        db,
        order_id=order.id,
        client_id=seed.client_id,
        item_id=seed.item_y,
        quantity=1,
        choices=[
            ChoiceSelection(choice_id=seed.choice_drink, option_id=seed.garnish_guarana),
            ChoiceSelection(choice_id=seed.choice_drink, option_id=seed.garnish_cola),
        ],
    )

    assert second.display_order == 1
    garnishes = second.order_choices[0].order_garnish_items
    assert [g.description_at_purchase for g in garnishes] == ["Guaraná 2L", "Cola 2L"]
    assert [g.display_order for g in garnishes] == [0, 1]
    db.refresh(order)
    assert order.subtotal_amount == 1500 + 5990


@pytest.mark.parametrize(
    "overrides, expected_error",
    [
        ({"item_id": "missing-item"}, ItemNotFound),
        ({"choices": [ChoiceSelection(choice_id="missing-choice", option_id="garnish-bbq")]}, ChoiceNotFound),
        ({"choices": [ChoiceSelection(choice_id="choice-sauce", option_id="missing-option")]}, GarnishNotFound),
        # complemento de outro grupo
        ({"choices": [ChoiceSelection(choice_id="choice-sauce", option_id="garnish-cola")]}, GarnishNotFound),
        # grupo de outro item
        ({"choices": [ChoiceSelection(choice_id="choice-drink", option_id="garnish-cola")]}, ChoiceNotFound),
    ],
)
def test_unknown_catalog_reference_leaves_order_unchanged(db, seed, overrides, expected_error):
    order = _new_order(db, seed)
    add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_x, quantity=1)
    before_counts = _row_counts(db)
    db.refresh(order)
    before_subtotal = order.subtotal_amount

    kwargs = {
        "order_id": order.id,
        "client_id": seed.client_id,
        "item_id": seed.item_x,
        "quantity": 2,
    }
    kwargs.update(overrides)
    with pytest.raises(expected_error):
        add_order_item(db, **kwargs)

    db.expire_all()
    reloaded = db.query(Order).filter(Order.id == order.id).one()
    assert reloaded.subtotal_amount == before_subtotal
    assert _row_counts(db) == before_counts


def test_cardinality_above_max_is_rejected(db, seed):
    order = _new_order(db, seed)

    with pytest.raises(ChoiceCardinalityError):
        add_order_item(
            db,
            order_id=order.id,
            client_id=seed.client_id,
            item_id=seed.item_x,
            quantity=1,
            choices=[
                ChoiceSelection(choice_id=seed.choice_sauce, option_id=seed.garnish_bbq),
                ChoiceSelection(choice_id=seed.choice_sauce, option_id=seed.garnish_mustard),
            ],
        )
    assert _row_counts(db) == (0, 0, 0)


def test_cardinality_below_min_is_rejected(db, seed):
    order = _new_order(db, seed)

    with pytest.raises(ChoiceCardinalityError):
        add_order_item(
            db,
            order_id=order.id,
            client_id=seed.client_id,
            item_id=seed.item_x,
            quantity=1,
            choices=[ChoiceSelection(choice_id=seed.choice_toppings, option_id=seed.garnish_cheddar)],
        )
    assert _row_counts(db) == (0, 0, 0)


def test_cardinality_within_range_is_accepted(db, seed):
    order = _new_order(db, seed)

    order_item = add_order_item(
        db,
        order_id=order.id,
        client_id=seed.client_id,
        item_id=seed.item_x,
        quantity=1,
        choices=[
            ChoiceSelection(choice_id=seed.choice_toppings, option_id=seed.garnish_cheddar),
            ChoiceSelection(choice_id=seed.choice_toppings, option_id=seed.garnish_bacon),
        ],
    )

    assert _row_counts(db) == (1, 1, 2)
    assert order_item.total_price_for_item_line == 1500


def test_item_without_need_choices_skips_required_groups(db, seed):
    order = _new_order(db, seed)

    add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_x, quantity=1)

    assert _row_counts(db) == (1, 0, 0)


def test_item_that_needs_choices_requires_its_groups(db, seed):
    order = _new_order(db, seed)

    with pytest.raises(RequiredChoiceMissing):
        add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_y, quantity=1)
    assert _row_counts(db) == (0, 0, 0)


def test_inactive_item_is_not_found(db, seed):
    db.query(MenuItem).filter(MenuItem.id == seed.item_x).update({MenuItem.is_active: False})
    db.commit()
    order = _new_order(db, seed)

    with pytest.raises(ItemNotFound):
        add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_x, quantity=1)


def test_ownership_and_client_checks(db, seed):
    order = _new_order(db, seed)

    with pytest.raises(OrderOwnershipMismatch):
        add_order_item(db, order_id=order.id, client_id=seed.other_client_id, item_id=seed.item_x, quantity=1)
    with pytest.raises(ClientNotFound):
        add_order_item(db, order_id=order.id, client_id="ghost", item_id=seed.item_x, quantity=1)
    with pytest.raises(OrderValidationError):
        add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_x, quantity=0)
    assert _row_counts(db) == (0, 0, 0)


def test_order_outside_cart_cannot_receive_items(db, seed):
    order = _new_order(db, seed)
    db.query(Order).filter(Order.id == order.id).update({Order.status: OrderStatus.COMPLETED})
    db.commit()

    with pytest.raises(OrderNotEditable):
        add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_x, quantity=1)


def test_snapshot_survives_catalog_edits_and_deletes(db, seed):
    order = _new_order(db, seed)
    order_item = add_order_item(
        db,
        order_id=order.id,
        client_id=seed.client_id,
        item_id=seed.item_x,
        quantity=2,
        choices=[ChoiceSelection(choice_id=seed.choice_sauce, option_id=seed.garnish_bbq)],
    )
    order_item_id = order_item.id

    item = db.query(MenuItem).filter(MenuItem.id == seed.item_x).one()
    item.unit_price = 9999
    item.description = "X-Burger Novo"
    choice = db.query(Choice).filter(Choice.id == seed.choice_sauce).one()
    choice.min = 0
    choice.max = 5
    db.commit()

    db.expire_all()
    stored = db.query(OrderItem).filter(OrderItem.id == order_item_id).one()
    assert stored.unit_price_at_purchase == 1500
    assert stored.description_at_purchase == "X-Burger"
    assert stored.total_price_for_item_line == 3000
    assert stored.total_price_for_item_line == stored.quantity * stored.single_price_for_item_line
    assert (stored.order_choices[0].min_at_purchase, stored.order_choices[0].max_at_purchase) == (1, 1)

    db.delete(db.query(MenuItem).filter(MenuItem.id == seed.item_x).one())
    db.commit()
    db.expire_all()

    stored = db.query(OrderItem).filter(OrderItem.id == order_item_id).one()
    assert stored.item_id is None
    assert stored.description_at_purchase == "X-Burger"
    assert stored.order_choices[0].choice_id is None
    assert stored.order_choices[0].name_at_purchase == "Escolha o molho"
    assert stored.order_choices[0].order_garnish_items[0].garnish_item_id is None
    assert stored.order_choices[0].order_garnish_items[0].unit_price_at_purchase == 200


def test_item_added_event_is_emitted(db, seed):
    received = []

    def _capture(payload):
        received.append(payload)

    event_bus.subscribe("order.item.added", _capture)
    try:
        order = _new_order(db, seed)
        add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_x, quantity=2)
    finally:
        event_bus.unsubscribe("order.item.added", _capture)

    assert len(received) == 1
    assert received[0]["order_id"] == order.id
    assert received[0]["subtotal_amount"] == 3000
    assert received[0]["quantity"] == 2


def test_create_and_add_each_log_a_single_line(db, seed, caplog):
    caplog.set_level(logging.INFO, logger="order_engine")

    order = _new_order(db, seed)
    add_order_item(db, order_id=order.id, client_id=seed.client_id, item_id=seed.item_x, quantity=1)

    messages = [m.lower() for m in caplog.messages]
    assert sum(m.startswith("order created") for m in messages) == 1
    assert sum(m.startswith("order item added") for m in messages) == 1
