from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from sqlalchemy.orm import Session

from order_engine.core.exceptions import ClientNotFound, EnvironmentNotFound, OrderNotFound
from order_engine.models.enums import OrderStatus
from order_engine.models.order import Order
from order_engine.models.order_choice import OrderChoice
from order_engine.models.order_garnish_item import OrderGarnishItem
from order_engine.models.order_item import OrderItem
from order_engine.services import order_repository
from order_engine.services.order_status import STATUS_TIMESTAMP_FIELDS


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _enum_value(value):
    return getattr(value, "value", value)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def order_garnish_item_to_dict(garnish: OrderGarnishItem) -> Dict[str, Any]:
    return {
        "id": garnish.id,
        "garnishItemId": garnish.garnish_item_id,
        "orderChoiceId": garnish.order_choice_id,
        "environmentId": garnish.environment_id,
        "descriptionAtPurchase": garnish.description_at_purchase,
        "detailsAtPurchase": garnish.details_at_purchase,
        "unitPriceAtPurchase": garnish.unit_price_at_purchase,
        "logoUrlAtPurchase": garnish.logo_url_at_purchase,
        "logoBase64AtPurchase": garnish.logo_base64_at_purchase,
        "quantity": garnish.quantity,
        "totalPriceForGarnishItemLine": garnish.total_price_for_garnish_item_line,
        "displayOrder": garnish.display_order,
    }


def order_choice_to_dict(choice: OrderChoice) -> Dict[str, Any]:
    return {
        "id": choice.id,
        "choiceId": choice.choice_id,
        "orderItemId": choice.order_item_id,
        "environmentId": choice.environment_id,
        "nameAtPurchase": choice.name_at_purchase,
        "minAtPurchase": choice.min_at_purchase,
        "maxAtPurchase": choice.max_at_purchase,
        "displayOrder": choice.display_order,
        "orderGarnishItems": [order_garnish_item_to_dict(g) for g in choice.order_garnish_items],
    }


def order_item_to_dict(order_item: OrderItem, include_choices: bool = True) -> Dict[str, Any]:
    data = {
        "id": order_item.id,
        "orderId": order_item.order_id,
        "itemId": order_item.item_id,
        "environmentId": order_item.environment_id,
        "descriptionAtPurchase": order_item.description_at_purchase,
        "detailsAtPurchase": order_item.details_at_purchase,
        "logoUrlAtPurchase": order_item.logo_url_at_purchase,
        "logoBase64AtPurchase": order_item.logo_base64_at_purchase,
        "needChoicesAtPurchase": order_item.need_choices_at_purchase,
        "unitPriceAtPurchase": order_item.unit_price_at_purchase,
        "unitMinPriceAtPurchase": order_item.unit_min_price_at_purchase,
        "unitOriginalPriceAtPurchase": order_item.unit_original_price_at_purchase,
        "promotionTagsAtPurchase": order_item.promotion_tags_at_purchase or [],
        "portionSizeTagAtPurchase": _enum_value(order_item.portion_size_tag_at_purchase),
        "dietaryRestrictionsAtPurchase": order_item.dietary_restrictions_at_purchase or [],
        "dishClassificationAtPurchase": order_item.dish_classification_at_purchase or [],
        "quantity": order_item.quantity,
        "singlePriceForItemLine": order_item.single_price_for_item_line,
        "totalPriceForItemLine": order_item.total_price_for_item_line,
        "notes": order_item.notes,
        "displayOrder": order_item.display_order,
        "createdAt": _iso(order_item.created_at),
    }
    if include_choices:
        data["orderChoices"] = [order_choice_to_dict(c) for c in order_item.order_choices]
    return data


def order_to_dict(order: Order, include_items: bool = False, include_client: bool = False) -> Dict[str, Any]:
    data = {
        "id": order.id,
        "environmentId": order.environment_id,
        "clientId": order.client_id,
        "whatsappFlowsId": order.whatsapp_flows_id,
        "status": _enum_value(order.status),
        "subtotalAmount": order.subtotal_amount,
        "discountAmount": order.discount_amount,
        "deliveryFeeAmount": order.delivery_fee_amount,
        "totalAmount": order.total_amount,
        "clientName": order.client_name,
        "clientSender": order.client_sender,
        "clientAddressId": order.client_address_id,
        "paymentMethod": _enum_value(order.payment_method),
        "notes": order.notes,
        "cancellationReason": order.cancellation_reason,
        "createdAt": _iso(order.created_at),
        "updatedAt": _iso(order.updated_at),
    }
    for field in STATUS_TIMESTAMP_FIELDS.values():
        data[_camel(field)] = _iso(getattr(order, field))
    if include_items:
        data["orderItems"] = [order_item_to_dict(i) for i in order.order_items]
    if include_client and order.client is not None:
        data["client"] = {
            "id": order.client.id,
            "name": order.client.name,
            "phone": order.client.phone,
        }
    return data


def get_order_for_client(db: Session, order_id: str, client_id: str) -> Order:
    if not order_repository.find_client(db, client_id):
        raise ClientNotFound(client_id)
    order = order_repository.find_order_tree(db, order_id)
    # pedido de outro cliente responde como inexistente
    if not order or order.client_id != client_id:
        raise OrderNotFound(order_id)
    return order


def get_order_by_flow_and_client(db: Session, flow_id: str, client_id: str) -> Order:
    if not order_repository.find_client(db, client_id):
        raise ClientNotFound(client_id)
    order = order_repository.find_order_tree_by_flow(db, flow_id, client_id)
    if not order:
        raise OrderNotFound(f"flow {flow_id}")
    return order


def get_order_with_details(db: Session, order_id: str) -> Order:
    order = order_repository.find_order_tree_with_client(db, order_id)
    if not order:
        raise OrderNotFound(order_id)
    return order


def list_client_orders(db: Session, client_id: str) -> list[Order]:
    if not order_repository.find_client(db, client_id):
        raise ClientNotFound(client_id)
    return order_repository.list_orders_by_client(db, client_id)


def list_orders_by_status(db: Session, environment_id: str) -> Dict[str, list[Order]]:
    if not order_repository.find_environment(db, environment_id):
        raise EnvironmentNotFound(environment_id)
    grouped: Dict[str, list[Order]] = {status.value: [] for status in OrderStatus}
    for order in order_repository.list_orders_by_environment(db, environment_id):
        grouped[_enum_value(order.status)].append(order)
    return grouped
