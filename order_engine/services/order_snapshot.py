from __future__ import annotations

from order_engine.models.choice import Choice
from order_engine.models.enums import PortionSize
from order_engine.models.garnish_item import GarnishItem
from order_engine.models.menu_item import MenuItem


def snapshot_item(item: MenuItem, quantity: int) -> dict:
    unit_price = int(item.unit_price or 0)
    return {
        "item_id": item.id,
        "description_at_purchase": item.description,
        "details_at_purchase": item.details,
        "logo_url_at_purchase": item.logo_url,
        "logo_base64_at_purchase": item.logo_base64,
        "need_choices_at_purchase": bool(item.need_choices),
        "unit_price_at_purchase": unit_price,
        "unit_min_price_at_purchase": item.unit_min_price,
        "unit_original_price_at_purchase": item.unit_original_price,
        "promotion_tags_at_purchase": list(item.promotion_tags or []),
        "portion_size_tag_at_purchase": item.portion_size_tag or PortionSize.NOT_APPLICABLE,
        "dietary_restrictions_at_purchase": list(item.dietary_restrictions or []),
        "dish_classification_at_purchase": list(item.dish_classifications or []),
        "quantity": quantity,
        "single_price_for_item_line": unit_price,
        "total_price_for_item_line": unit_price * quantity,
    }


def snapshot_choice(choice: Choice) -> dict:
    return {
        "choice_id": choice.id,
        "name_at_purchase": choice.name,
        "min_at_purchase": choice.min,
        "max_at_purchase": choice.max,
    }


def snapshot_garnish_item(garnish: GarnishItem, quantity: int = 1) -> dict:
    unit_price = int(garnish.unit_price or 0)
    return {
        "garnish_item_id": garnish.id,
        "description_at_purchase": garnish.description,
        "details_at_purchase": garnish.details,
        "unit_price_at_purchase": unit_price,
        "logo_url_at_purchase": garnish.logo_url,
        "logo_base64_at_purchase": garnish.logo_base64,
        "quantity": quantity,
        "total_price_for_garnish_item_line": unit_price * quantity,
    }
