from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from order_engine.core.exceptions import (
    AddressOwnershipMismatch,
    ChoiceCardinalityError,
    ClientAddressNotFound,
    ClientNotFound,
    EnvironmentNotFound,
    OrderNotEditable,
    OrderNotFound,
    OrderOwnershipMismatch,
    OrderValidationError,
    RequiredChoiceMissing,
)
from order_engine.models.choice import Choice
from order_engine.models.enums import OrderStatus
from order_engine.models.garnish_item import GarnishItem
from order_engine.models.order import Order
from order_engine.models.order_choice import OrderChoice
from order_engine.models.order_garnish_item import OrderGarnishItem
from order_engine.models.order_item import OrderItem
from order_engine.services import catalog, order_repository
from order_engine.services.order_events import emit_order_created, emit_order_item_added
from order_engine.services.order_snapshot import snapshot_choice, snapshot_garnish_item, snapshot_item

ITEM_ADDED_MESSAGE = "Item added to order successfully"


@dataclass(frozen=True)
class ChoiceSelection:
    choice_id: str
    option_id: str
    quantity: int = 1


@dataclass
class _ResolvedChoice:
    choice: Choice
    garnishes: list[tuple[GarnishItem, int]]


def _selection_field(selection, name: str, default=None):
    if isinstance(selection, dict):
        return selection.get(name, default)
    return getattr(selection, name, default)


def _normalize_selections(choices) -> list[ChoiceSelection]:
    normalized: list[ChoiceSelection] = []
    for selection in choices or []:
        if isinstance(selection, ChoiceSelection):
            normalized.append(selection)
            continue
        choice_id = _selection_field(selection, "choice_id") or _selection_field(selection, "choiceId")
        option_id = _selection_field(selection, "option_id") or _selection_field(selection, "optionId")
        quantity = _selection_field(selection, "quantity", 1)
        normalized.append(
            ChoiceSelection(
                choice_id=choice_id,
                option_id=option_id,
                quantity=1 if quantity is None else int(quantity),
            )
        )
    return normalized


def load_owned_order(db: Session, order_id: str, client_id: str) -> Order:
    if not order_repository.find_client(db, client_id):
        raise ClientNotFound(client_id)
    order = order_repository.find_order(db, order_id)
    if not order:
        raise OrderNotFound(order_id)
    if order.client_id != client_id:
        raise OrderOwnershipMismatch(order_id, client_id)
    return order


def _resolve_choices(db: Session, item_id: str, selections: list[ChoiceSelection]) -> list[_ResolvedChoice]:
    resolved: dict[str, _ResolvedChoice] = {}
    for selection in selections:
        if selection.quantity < 1:
            raise OrderValidationError("Option quantity must be a positive integer")
        group = resolved.get(selection.choice_id)
        if group is None:
            choice = catalog.get_choice_for_item(db, selection.choice_id, item_id)
            group = _ResolvedChoice(choice=choice, garnishes=[])
            resolved[selection.choice_id] = group
        garnish = catalog.get_garnish_for_choice(db, selection.option_id, group.choice.id)
        group.garnishes.append((garnish, selection.quantity))

    for group in resolved.values():
        selected = len(group.garnishes)
        minimum = int(group.choice.min or 0)
        maximum = int(group.choice.max or 0)
        if selected < minimum or selected > maximum:
            raise ChoiceCardinalityError(group.choice.name, selected, minimum, maximum)

    return list(resolved.values())


def _check_required_choices(db: Session, item, resolved: list[_ResolvedChoice]) -> None:
    if not item.need_choices:
        return
    selected_ids = {group.choice.id for group in resolved}
    for choice in catalog.list_required_choices(db, item.id):
        if choice.id not in selected_ids:
            raise RequiredChoiceMissing(choice.name)


def create_order(
    db: Session,
    *,
    client_id: str,
    whatsapp_flows_id: str,
    environment_id: str,
    client_address_id: str,
) -> Order:
    client = order_repository.find_client(db, client_id)
    if not client:
        raise ClientNotFound(client_id)

    address = order_repository.find_client_address(db, client_address_id)
    if not address:
        raise ClientAddressNotFound(client_address_id)
    if address.client_id != client_id:
        raise AddressOwnershipMismatch(client_address_id, client_id)

    if not order_repository.find_environment(db, environment_id):
        raise EnvironmentNotFound(environment_id)

    with order_repository.transaction(db):
        order = order_repository.insert_order(
            db,
            {
                "environment_id": environment_id,
                "client_id": client_id,
                "whatsapp_flows_id": whatsapp_flows_id,
                "client_address_id": client_address_id,
                "client_name": client.name,
                "client_sender": client.phone,
                "status": OrderStatus.CART,
                "subtotal_amount": 0,
                "discount_amount": 0,
                "delivery_fee_amount": 0,
                "total_amount": 0,
            },
        )

    db.refresh(order)
    emit_order_created(order)
    return order


def add_order_item(
    db: Session,
    *,
    order_id: str,
    client_id: str,
    item_id: str,
    quantity: int,
    notes: str | None = None,
    choices=None,
) -> OrderItem:
    if quantity is None or int(quantity) < 1:
        raise OrderValidationError("Quantity must be a positive integer")
    quantity = int(quantity)

    order = load_owned_order(db, order_id, client_id)
    if order.status != OrderStatus.CART:
        raise OrderNotEditable(order_id, order.status.value)

    item = catalog.get_item(db, item_id)
    resolved = _resolve_choices(db, item.id, _normalize_selections(choices))
    _check_required_choices(db, item, resolved)

    with order_repository.transaction(db):
        locked = order_repository.find_order_for_update(db, order_id)
        if locked is None:
            raise OrderNotFound(order_id)
        if locked.status != OrderStatus.CART:
            raise OrderNotEditable(order_id, locked.status.value)

        environment_id = locked.environment_id
        order_item = OrderItem(
            order_id=order_id,
            environment_id=environment_id,
            notes=notes,
            display_order=order_repository.count_order_items(db, order_id),
            **snapshot_item(item, quantity),
        )
        db.add(order_item)
        db.flush()

        # complementos ficam fora do subtotal
        order_repository.increment_order_subtotal(
            db, order_id, quantity * order_item.single_price_for_item_line
        )

        for choice_position, group in enumerate(resolved):
            order_choice = OrderChoice(
                order_item_id=order_item.id,
                environment_id=environment_id,
                display_order=choice_position,
                **snapshot_choice(group.choice),
            )
            db.add(order_choice)
            db.flush()
            for garnish_position, (garnish, garnish_quantity) in enumerate(group.garnishes):
                db.add(
                    OrderGarnishItem(
                        order_choice_id=order_choice.id,
                        environment_id=environment_id,
                        display_order=garnish_position,
                        **snapshot_garnish_item(garnish, garnish_quantity),
                    )
                )
        db.flush()

    db.refresh(order_item)
    db.refresh(locked)
    emit_order_item_added(locked, order_item)
    return order_item
