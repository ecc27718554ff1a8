from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from order_engine.core.database import get_db
from order_engine.core.exceptions import OrderEngineError
from order_engine.deps import require_client_id, require_environment_id
from order_engine.schemas.orders import AddOrderItemRequest, CreateOrderRequest, UpdateOrderStatusRequest
from order_engine.services import order_reader
from order_engine.services.order_status import STATUS_UPDATED_MESSAGE, update_order_status
from order_engine.services.orders import ITEM_ADDED_MESSAGE, ChoiceSelection, add_order_item, create_order

router = APIRouter(prefix="/orders", tags=["orders"])


def _http_error(exc: OrderEngineError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.detail)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order_route(
    payload: CreateOrderRequest,
    client_id: str = Depends(require_client_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    try:
        order = create_order(
            db,
            client_id=client_id,
            whatsapp_flows_id=payload.whatsapp_flows_id,
            environment_id=payload.environment_id,
            client_address_id=payload.client_address_id,
        )
    except OrderEngineError as exc:
        raise _http_error(exc) from exc
    return order_reader.order_to_dict(order)


@router.get("")
def list_client_orders_route(
    client_id: str = Depends(require_client_id),
    db: Session = Depends(get_db),
):
    try:
        orders = order_reader.list_client_orders(db, client_id)
    except OrderEngineError as exc:
        raise _http_error(exc) from exc
    return [order_reader.order_to_dict(o, include_items=True) for o in orders]


@router.get("/by-status")
def list_orders_by_status_route(
    environment_id: str = Depends(require_environment_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    try:
        grouped = order_reader.list_orders_by_status(db, environment_id)
    except OrderEngineError as exc:
        raise _http_error(exc) from exc
    return {
        status_name: [order_reader.order_to_dict(o, include_items=True) for o in orders]
        for status_name, orders in grouped.items()
    }


@router.get("/flows/{flow_id}")
def get_order_by_flow_route(
    flow_id: str,
    client_id: str = Depends(require_client_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    try:
        order = order_reader.get_order_by_flow_and_client(db, flow_id, client_id)
    except OrderEngineError as exc:
        raise _http_error(exc) from exc
    return order_reader.order_to_dict(order, include_items=True)


@router.post("/{order_id}/items")
def add_order_item_route(
    order_id: str,
    payload: AddOrderItemRequest,
    client_id: str = Depends(require_client_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    selections = [
        ChoiceSelection(choice_id=c.choice_id, option_id=c.option_id, quantity=c.quantity)
        for c in payload.choices
    ]
    try:
        order_item = add_order_item(
            db,
            order_id=order_id,
            client_id=client_id,
            item_id=payload.item_id,
            quantity=payload.quantity,
            notes=payload.notes,
            choices=selections,
        )
    except OrderEngineError as exc:
        raise _http_error(exc) from exc
    return {
        "orderItem": order_reader.order_item_to_dict(order_item),
        "message": ITEM_ADDED_MESSAGE,
    }


@router.put("/{order_id}/status")
def update_order_status_route(
    order_id: str,
    payload: UpdateOrderStatusRequest,
    client_id: str = Depends(require_client_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    try:
        order = update_order_status(
            db,
            order_id=order_id,
            client_id=client_id,
            status=payload.status,
            cancellation_reason=payload.cancellation_reason,
        )
    except OrderEngineError as exc:
        raise _http_error(exc) from exc
    return {"order": order_reader.order_to_dict(order), "message": STATUS_UPDATED_MESSAGE}


@router.get("/{order_id}/merchant")
def get_order_merchant_route(order_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        order = order_reader.get_order_with_details(db, order_id)
    except OrderEngineError as exc:
        raise _http_error(exc) from exc
    return order_reader.order_to_dict(order, include_items=True, include_client=True)


@router.get("/{order_id}")
def get_order_route(
    order_id: str,
    client_id: str = Depends(require_client_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    try:
        order = order_reader.get_order_for_client(db, order_id, client_id)
    except OrderEngineError as exc:
        raise _http_error(exc) from exc
    return order_reader.order_to_dict(order, include_items=True)
