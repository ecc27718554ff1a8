from __future__ import annotations

import logging

from order_engine.services.event_bus import event_bus

logger = logging.getLogger(__name__)


def handle_order_created(payload: dict) -> None:
    logger.info(
        "order created order_id=%s environment_id=%s flow=%s",
        payload["order_id"],
        payload.get("environment_id"),
        payload.get("whatsapp_flows_id"),
        extra={"order_id": payload["order_id"], "event": "order.created"},
    )


def handle_order_item_added(payload: dict) -> None:
    logger.info(
        "order item added order_id=%s item_id=%s qty=%s subtotal=%s",
        payload["order_id"],
        payload.get("item_id"),
        payload.get("quantity"),
        payload.get("subtotal_amount"),
        extra={"order_id": payload["order_id"], "event": "order.item.added"},
    )


def handle_order_status_changed(payload: dict) -> None:
    logger.info(
        "order status changed order_id=%s %s -> %s",
        payload["order_id"],
        payload.get("previous_status"),
        payload.get("status"),
        extra={"order_id": payload["order_id"], "event": "order.status.changed"},
    )


def handle_order_completed(payload: dict) -> None:
    logger.info(
        "order completed order_id=%s total=%s",
        payload["order_id"],
        payload.get("total_amount"),
        extra={"order_id": payload["order_id"], "event": "order.completed"},
    )


def handle_order_canceled(payload: dict) -> None:
    logger.warning(
        "order canceled order_id=%s status=%s reason=%s",
        payload["order_id"],
        payload.get("status"),
        payload.get("cancellation_reason"),
        extra={"order_id": payload["order_id"], "event": "order.canceled"},
    )


event_bus.subscribe("order.created", handle_order_created)
event_bus.subscribe("order.item.added", handle_order_item_added)
event_bus.subscribe("order.status.changed", handle_order_status_changed)
event_bus.subscribe("order.completed", handle_order_completed)
event_bus.subscribe("order.canceled", handle_order_canceled)
