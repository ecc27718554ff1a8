from __future__ import annotations

from order_engine.models.enums import OrderStatus
from order_engine.models.order import Order
from order_engine.models.order_item import OrderItem
from order_engine.services.event_bus import event_bus

CANCELED_STATUSES = {
    OrderStatus.CANCELED_BY_MERCHANT,
    OrderStatus.CANCELED_BY_USER,
    OrderStatus.REJECTED_BY_MERCHANT,
}


def _status_value(status) -> str | None:
    if status is None:
        return None
    return status.value if isinstance(status, OrderStatus) else str(status)


def build_order_payload(order: Order, previous_status: OrderStatus | None = None) -> dict:
    return {
        "order_id": order.id,
        "environment_id": order.environment_id,
        "client_id": order.client_id,
        "whatsapp_flows_id": order.whatsapp_flows_id,
        "status": _status_value(order.status),
        "previous_status": _status_value(previous_status),
        "subtotal_amount": int(order.subtotal_amount or 0),
        "total_amount": int(order.total_amount or 0),
        "cancellation_reason": order.cancellation_reason,
    }


def emit_order_created(order: Order) -> None:
    event_bus.emit("order.created", build_order_payload(order))


def emit_order_item_added(order: Order, order_item: OrderItem) -> None:
    payload = build_order_payload(order)
    payload.update(
        {
            "order_item_id": order_item.id,
            "item_id": order_item.item_id,
            "quantity": order_item.quantity,
            "total_price_for_item_line": order_item.total_price_for_item_line,
        }
    )
    event_bus.emit("order.item.added", payload)


def emit_order_status_changed(order: Order, previous_status: OrderStatus | None) -> None:
    if previous_status is not None and previous_status == order.status:
        return
    payload = build_order_payload(order, previous_status=previous_status)
    event_bus.emit("order.status.changed", payload)
    if order.status == OrderStatus.COMPLETED:
        event_bus.emit("order.completed", payload)
    if order.status in CANCELED_STATUSES:
        event_bus.emit("order.canceled", payload)
