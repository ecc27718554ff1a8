from __future__ import annotations

from sqlalchemy.orm import Session, selectinload

from order_engine.core.exceptions import ChoiceNotFound, GarnishNotFound, ItemNotFound
from order_engine.models.choice import Choice
from order_engine.models.garnish_item import GarnishItem
from order_engine.models.menu import Menu
from order_engine.models.menu_category import MenuCategory
from order_engine.models.menu_item import MenuItem


def _enum_value(value):
    return getattr(value, "value", value)


def get_item(db: Session, item_id: str) -> MenuItem:
    item = (
        db.query(MenuItem)
        .filter(MenuItem.id == item_id, MenuItem.is_active.is_(True))
        .first()
    )
    if not item:
        raise ItemNotFound(item_id)
    return item


def get_choice_for_item(db: Session, choice_id: str, item_id: str) -> Choice:
    choice = (
        db.query(Choice)
        .filter(
            Choice.id == choice_id,
            Choice.item_id == item_id,
            Choice.is_active.is_(True),
        )
        .first()
    )
    if not choice:
        raise ChoiceNotFound(choice_id)
    return choice


def get_garnish_for_choice(db: Session, garnish_id: str, choice_id: str) -> GarnishItem:
    garnish = (
        db.query(GarnishItem)
        .filter(
            GarnishItem.id == garnish_id,
            GarnishItem.choice_id == choice_id,
            GarnishItem.is_active.is_(True),
        )
        .first()
    )
    if not garnish:
        raise GarnishNotFound(garnish_id)
    return garnish


def list_required_choices(db: Session, item_id: str) -> list[Choice]:
    return (
        db.query(Choice)
        .filter(Choice.item_id == item_id, Choice.is_active.is_(True), Choice.min > 0)
        .order_by(Choice.display_order.asc())
        .all()
    )


def get_active_menu(db: Session, environment_id: str) -> Menu | None:
    return (
        db.query(Menu)
        .options(
            selectinload(Menu.categories)
            .selectinload(MenuCategory.items)
            .selectinload(MenuItem.choices)
            .selectinload(Choice.garnish_items),
            selectinload(Menu.categories)
            .selectinload(MenuCategory.items)
            .selectinload(MenuItem.product_info),
            selectinload(Menu.categories)
            .selectinload(MenuCategory.items)
            .selectinload(MenuItem.selling_option),
        )
        .filter(Menu.environment_id == environment_id, Menu.is_active.is_(True))
        .order_by(Menu.created_at.desc())
        .first()
    )


def garnish_item_to_dict(garnish: GarnishItem) -> dict:
    return {
        "id": garnish.id,
        "description": garnish.description,
        "details": garnish.details,
        "logoUrl": garnish.logo_url,
        "logoBase64": garnish.logo_base64,
        "unitPrice": garnish.unit_price,
        "displayOrder": garnish.display_order,
    }


def choice_to_dict(choice: Choice) -> dict:
    return {
        "id": choice.id,
        "name": choice.name,
        "min": choice.min,
        "max": choice.max,
        "displayOrder": choice.display_order,
        "garnishItems": [
            garnish_item_to_dict(garnish) for garnish in choice.garnish_items if garnish.is_active
        ],
    }


def item_to_dict(item: MenuItem) -> dict:
    product_info = item.product_info
    selling_option = item.selling_option
    return {
        "id": item.id,
        "description": item.description,
        "details": item.details,
        "logoUrl": item.logo_url,
        "logoBase64": item.logo_base64,
        "needChoices": item.need_choices,
        "unitPrice": item.unit_price,
        "unitMinPrice": item.unit_min_price,
        "unitOriginalPrice": item.unit_original_price,
        "productInfo": (
            {
                "id": product_info.external_product_info_id,
                "packaging": product_info.packaging,
                "sequence": product_info.sequence,
                "quantity": product_info.quantity,
                "unit": product_info.unit,
                "ean": product_info.ean,
            }
            if product_info
            else None
        ),
        "sellingOption": (
            {
                "minimum": selling_option.minimum,
                "incremental": selling_option.incremental,
                "averageUnit": selling_option.average_unit,
                "availableUnits": selling_option.available_units or [],
            }
            if selling_option
            else None
        ),
        "choices": [choice_to_dict(choice) for choice in item.choices if choice.is_active],
        "tags": item.promotion_tags or [],
        "displayOrder": item.display_order,
        "portionSizeTag": _enum_value(item.portion_size_tag),
        "dietaryRestrictions": item.dietary_restrictions or [],
        "dishClassifications": item.dish_classifications or [],
    }


def menu_to_dict(menu: Menu) -> dict:
    return {
        "id": menu.id,
        "environmentId": menu.environment_id,
        "name": menu.name or "",
        "isActive": menu.is_active,
        "menuStatus": _enum_value(menu.menu_status),
        "categories": [
            {
                "id": category.id,
                "name": category.name,
                "displayOrder": category.display_order,
                "categoryType": _enum_value(category.category_type),
                "items": [item_to_dict(item) for item in category.items if item.is_active],
            }
            for category in menu.categories
            if category.is_active
        ],
    }
