"""Order lifecycle state machine."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from order_engine.core import config
from order_engine.core.exceptions import InvalidStatusTransition, OrderNotFound, OrderValidationError
from order_engine.models.enums import OrderStatus
from order_engine.models.order import Order
from order_engine.services import order_repository
from order_engine.services.order_events import emit_order_status_changed
from order_engine.services.orders import load_owned_order

STATUS_UPDATED_MESSAGE = "Order status updated successfully"

TERMINAL_STATUSES = frozenset(
    {
        OrderStatus.COMPLETED,
        OrderStatus.CANCELED_BY_MERCHANT,
        OrderStatus.CANCELED_BY_USER,
        OrderStatus.REJECTED_BY_MERCHANT,
        OrderStatus.PAYMENT_FAILED,
        OrderStatus.EXPIRED,
    }
)

CANCELLATION_STATUSES = frozenset(
    {
        OrderStatus.CANCELED_BY_MERCHANT,
        OrderStatus.CANCELED_BY_USER,
        OrderStatus.REJECTED_BY_MERCHANT,
    }
)

STATUS_TIMESTAMP_FIELDS = {
    OrderStatus.PENDING_PAYMENT: "sent_to_pending_payment_at",
    OrderStatus.WAITING_MERCHANT_ACCEPTANCE: "sent_to_waiting_merchant_acceptance_at",
    OrderStatus.IN_PREPARATION: "sent_to_in_preparation_at",
    OrderStatus.READY_FOR_DELIVERY: "sent_to_ready_for_delivery_at",
    OrderStatus.IN_DELIVERY: "sent_to_in_delivery_at",
    OrderStatus.DRIVER_ON_CLIENT: "sent_to_driver_on_client_at",
    OrderStatus.COMPLETED: "sent_to_completed_at",
    OrderStatus.CANCELED_BY_MERCHANT: "sent_to_canceled_by_merchant_at",
    OrderStatus.CANCELED_BY_USER: "sent_to_canceled_by_user_at",
    OrderStatus.REJECTED_BY_MERCHANT: "sent_to_rejected_by_merchant_at",
    OrderStatus.PAYMENT_FAILED: "sent_to_payment_failed_at",
    OrderStatus.EXPIRED: "sent_to_expired_at",
}

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.CART: frozenset(
        {
            OrderStatus.PENDING_PAYMENT,
            OrderStatus.WAITING_MERCHANT_ACCEPTANCE,
            OrderStatus.CANCELED_BY_USER,
            OrderStatus.EXPIRED,
        }
    ),
    OrderStatus.PENDING_PAYMENT: frozenset(
        {
            OrderStatus.WAITING_MERCHANT_ACCEPTANCE,
            OrderStatus.PAYMENT_FAILED,
            OrderStatus.CANCELED_BY_USER,
            OrderStatus.EXPIRED,
        }
    ),
    OrderStatus.WAITING_MERCHANT_ACCEPTANCE: frozenset(
        {
            OrderStatus.IN_PREPARATION,
            OrderStatus.REJECTED_BY_MERCHANT,
            OrderStatus.CANCELED_BY_MERCHANT,
            OrderStatus.CANCELED_BY_USER,
        }
    ),
    OrderStatus.IN_PREPARATION: frozenset(
        {OrderStatus.READY_FOR_DELIVERY, OrderStatus.CANCELED_BY_MERCHANT}
    ),
    OrderStatus.READY_FOR_DELIVERY: frozenset(
        {OrderStatus.IN_DELIVERY, OrderStatus.COMPLETED, OrderStatus.CANCELED_BY_MERCHANT}
    ),
    OrderStatus.IN_DELIVERY: frozenset(
        {OrderStatus.DRIVER_ON_CLIENT, OrderStatus.COMPLETED, OrderStatus.CANCELED_BY_MERCHANT}
    ),
    OrderStatus.DRIVER_ON_CLIENT: frozenset(
        {OrderStatus.COMPLETED, OrderStatus.CANCELED_BY_MERCHANT}
    ),
}


def parse_status(value) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError as exc:
        raise OrderValidationError(f"Invalid order status: {value}") from exc


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    if current in TERMINAL_STATUSES:
        return False
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def build_status_update(
    target: OrderStatus,
    cancellation_reason: str | None = None,
    now: datetime | None = None,
) -> dict:
    values: dict = {"status": target}
    field = STATUS_TIMESTAMP_FIELDS.get(target)
    if field:
        values[field] = now or datetime.now(timezone.utc)
    if target in CANCELLATION_STATUSES and cancellation_reason:
        values["cancellation_reason"] = cancellation_reason
    return values


def update_order_status(
    db: Session,
    *,
    order_id: str,
    client_id: str,
    status,
    cancellation_reason: str | None = None,
    strict: bool | None = None,
) -> Order:
    target = parse_status(status)
    if strict is None:
        strict = config.ORDER_STRICT_STATUS_TRANSITIONS

    load_owned_order(db, order_id, client_id)

    with order_repository.transaction(db):
        order = order_repository.find_order_for_update(db, order_id)
        if order is None:
            raise OrderNotFound(order_id)
        previous = order.status
        if previous == target:
            return order
        if strict and not can_transition(previous, target):
            raise InvalidStatusTransition(previous.value, target.value)
        order_repository.update_order(db, order_id, build_status_update(target, cancellation_reason))

    db.refresh(order)
    emit_order_status_changed(order, previous)
    return order
