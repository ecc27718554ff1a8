from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError
from sqlalchemy.orm import Session

from order_engine.core import config
from order_engine.core.exceptions import EnvironmentNotFound, MenuImportError, TransactionFailure
from order_engine.models.choice import Choice
from order_engine.models.enums import (
    DietaryRestriction,
    DishClassification,
    MenuImportStatus,
    PortionSize,
)
from order_engine.models.garnish_item import GarnishItem
from order_engine.models.menu import Menu
from order_engine.models.menu_category import MenuCategory
from order_engine.models.menu_item import MenuItem
from order_engine.models.product_info import ProductInfo
from order_engine.models.selling_option import SellingOption
from order_engine.schemas.menu import ExternalCatalog, ExternalProductTagGroup
from order_engine.services import order_repository
from order_engine.utils.money import price_to_cents

logger = logging.getLogger(__name__)

_DIETARY_TAGS = {tag.value: tag for tag in DietaryRestriction}
_DISH_TAGS = {tag.value: tag for tag in DishClassification}
_PORTION_TAGS = {
    "SERVES_1": PortionSize.SERVES_1,
    "SERVES_2": PortionSize.SERVES_2,
    "SERVES_3": PortionSize.SERVES_3,
    "SERVES_4": PortionSize.SERVES_4,
}


def map_product_tags(product_tags: list[ExternalProductTagGroup] | None) -> dict:
    dietary: list[str] = []
    dishes: list[str] = []
    portion = PortionSize.NOT_APPLICABLE

    for group in product_tags or []:
        if group.group == "DIETARY_RESTRICTIONS":
            dietary.extend(_DIETARY_TAGS[t].value for t in group.tags if t in _DIETARY_TAGS)
        elif group.group == "DISH_CLASSIFICATION":
            dishes.extend(_DISH_TAGS[t].value for t in group.tags if t in _DISH_TAGS)
        elif group.group == "PORTION_SIZE":
            for tag in group.tags:
                if tag in _PORTION_TAGS:
                    portion = _PORTION_TAGS[tag]

    return {
        "dietary_restrictions": dietary,
        "dish_classifications": dishes,
        "portion_size_tag": portion,
    }


def _image_url(logo_url: str) -> str:
    if logo_url.startswith("http"):
        return logo_url
    return f"{config.CATALOG_IMAGE_BASE_URL}{logo_url}"


async def fetch_image_as_base64(client: httpx.AsyncClient, logo_url: str | None) -> str | None:
    if not logo_url:
        return None
    url = _image_url(logo_url)
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("image fetch failed url=%r error=%s", url, exc)
        return None
    if response.status_code >= 400:
        logger.warning("image fetch failed url=%s status=%s", url, response.status_code)
        return None
    return base64.b64encode(response.content).decode("ascii")


async def fetch_catalog(client: httpx.AsyncClient, merchant_id: str) -> dict:
    url = f"{config.CATALOG_API_BASE_URL}/{merchant_id}/catalog"
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error("catalog fetch failed merchant=%s error=%s", merchant_id, exc)
        raise MenuImportError("Failed to fetch external catalog.") from exc

    if response.status_code >= 400:
        logger.error(
            "catalog fetch failed merchant=%s status=%s body=%s",
            merchant_id,
            response.status_code,
            response.text[:500],
        )
        if response.status_code == 404:
            raise MenuImportError("Merchant not found or catalog unavailable.", status_code=404)
        raise MenuImportError("Failed to fetch external catalog.")

    try:
        data = response.json()
    except ValueError as exc:
        raise MenuImportError("Received invalid or empty catalog data.", status_code=422) from exc
    if not isinstance(data, dict) or not (data.get("data") or {}).get("menu"):
        raise MenuImportError("Received invalid or empty catalog data.", status_code=422)
    return data


def _collect_logo_urls(catalog: ExternalCatalog) -> set[str]:
    urls: set[str] = set()
    for category in catalog.data.menu:
        for item in category.items:
            if item.logo_url:
                urls.add(item.logo_url)
            for choice in item.choices:
                for garnish in choice.garnish_items:
                    if garnish.logo_url:
                        urls.add(garnish.logo_url)
    return urls


def _set_status(db: Session, menu: Menu, status: MenuImportStatus) -> None:
    menu.menu_status = status
    db.add(menu)
    db.commit()
    db.refresh(menu)


def _mark_failed(db: Session, menu_id: str) -> None:
    db.rollback()
    menu = db.query(Menu).filter(Menu.id == menu_id).first()
    if menu is None:
        return
    _set_status(db, menu, MenuImportStatus.FAILED)


def persist_catalog(
    db: Session,
    menu: Menu,
    catalog: ExternalCatalog,
    images: dict[str, str | None],
) -> None:
    environment_id = menu.environment_id

    for category_order, external_category in enumerate(catalog.data.menu):
        category = MenuCategory(
            environment_id=environment_id,
            menu_id=menu.id,
            external_code=external_category.code,
            name=external_category.name,
            display_order=category_order,
        )
        db.add(category)
        db.flush()

        for item_order, external_item in enumerate(external_category.items):
            unit_price = price_to_cents(external_item.unit_price)
            item = MenuItem(
                environment_id=environment_id,
                menu_category_id=category.id,
                external_item_id=external_item.id,
                external_item_code=external_item.code,
                description=external_item.description,
                details=external_item.details or None,
                logo_url=external_item.logo_url or None,
                logo_base64=images.get(external_item.logo_url) if external_item.logo_url else None,
                need_choices=external_item.need_choices,
                unit_price=unit_price,
                unit_min_price=(
                    price_to_cents(external_item.unit_min_price)
                    if external_item.unit_min_price
                    else None
                ),
                unit_original_price=(
                    price_to_cents(external_item.unit_original_price)
                    if external_item.unit_original_price
                    else unit_price
                ),
                promotion_tags=list(external_item.tags or []),
                display_order=item_order,
                **map_product_tags(external_item.product_tags),
            )
            db.add(item)
            db.flush()

            if external_item.product_info:
                info = external_item.product_info
                db.add(
                    ProductInfo(
                        environment_id=environment_id,
                        item_id=item.id,
                        external_product_info_id=info.id,
                        packaging=info.packaging or None,
                        sequence=info.sequence or None,
                        quantity=info.quantity,
                        unit=info.unit or None,
                        ean=info.ean or None,
                    )
                )

            if external_item.selling_option:
                option = external_item.selling_option
                db.add(
                    SellingOption(
                        environment_id=environment_id,
                        item_id=item.id,
                        minimum=option.minimum or None,
                        incremental=option.incremental or None,
                        average_unit=option.average_unit or None,
                        available_units=list(option.available_units or []),
                    )
                )

            for choice_order, external_choice in enumerate(external_item.choices):
                choice = Choice(
                    environment_id=environment_id,
                    item_id=item.id,
                    external_code=external_choice.code,
                    name=external_choice.name,
                    min=external_choice.min,
                    max=external_choice.max,
                    display_order=choice_order,
                )
                db.add(choice)
                db.flush()

                for garnish_order, external_garnish in enumerate(external_choice.garnish_items):
                    db.add(
                        GarnishItem(
                            environment_id=environment_id,
                            choice_id=choice.id,
                            external_garnish_item_id=external_garnish.id,
                            external_garnish_item_code=external_garnish.code or external_garnish.id,
                            description=external_garnish.description,
                            details=external_garnish.details or None,
                            logo_url=external_garnish.logo_url or None,
                            logo_base64=(
                                images.get(external_garnish.logo_url)
                                if external_garnish.logo_url
                                else None
                            ),
                            unit_price=price_to_cents(external_garnish.unit_price),
                            display_order=garnish_order,
                        )
                    )
    db.flush()


def _activate(db: Session, menu: Menu) -> None:
    db.query(Menu).filter(
        Menu.environment_id == menu.environment_id,
        Menu.id != menu.id,
    ).update({Menu.is_active: False}, synchronize_session=False)
    menu.is_active = True
    menu.menu_status = MenuImportStatus.COMPLETED
    db.add(menu)


async def _run_import(
    db: Session,
    menu: Menu,
    external_merchant_id: str,
    client: httpx.AsyncClient,
) -> Menu:
    menu_id = menu.id
    try:
        raw = await fetch_catalog(client, external_merchant_id)
        catalog = ExternalCatalog.model_validate(raw)
    except MenuImportError:
        _mark_failed(db, menu_id)
        raise
    except ValidationError as exc:
        _mark_failed(db, menu_id)
        raise MenuImportError("Received invalid or empty catalog data.", status_code=422) from exc
    except Exception as exc:
        logger.exception("menu import aborted menu_id=%s", menu_id)
        _mark_failed(db, menu_id)
        raise MenuImportError("Menu import failed.") from exc

    try:
        menu.raw_catalog_data = raw
        db.add(menu)
        db.commit()

        images: dict[str, str | None] = {}
        if config.CATALOG_FETCH_IMAGES:
            for logo_url in sorted(_collect_logo_urls(catalog)):
                images[logo_url] = await fetch_image_as_base64(client, logo_url)

        with order_repository.transaction(db):
            persist_catalog(db, menu, catalog, images)
            _activate(db, menu)
    except (TransactionFailure, ValueError) as exc:
        _mark_failed(db, menu_id)
        raise MenuImportError(f"Failed to persist catalog: {exc}") from exc
    except Exception as exc:
        logger.exception("menu import aborted menu_id=%s", menu_id)
        _mark_failed(db, menu_id)
        raise MenuImportError("Menu import failed.") from exc

    db.refresh(menu)
    return menu


async def import_menu(
    db: Session,
    environment_id: str,
    external_merchant_id: str,
    client: httpx.AsyncClient | None = None,
) -> Menu:
    if not order_repository.find_environment(db, environment_id):
        raise EnvironmentNotFound(environment_id)

    menu = Menu(
        environment_id=environment_id,
        external_merchant_id=external_merchant_id,
        name=f"Importado - {datetime.now(timezone.utc).strftime('%d/%m/%Y %H:%M')}",
        imported_at=datetime.now(timezone.utc),
        menu_status=MenuImportStatus.SCHEDULED,
        is_active=False,
    )
    db.add(menu)
    db.commit()
    db.refresh(menu)
    _set_status(db, menu, MenuImportStatus.PROCESSING)
    logger.info(
        "menu import started menu_id=%s environment_id=%s merchant=%s",
        menu.id,
        environment_id,
        external_merchant_id,
    )

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(
            timeout=config.CATALOG_HTTP_TIMEOUT_SECONDS,
            follow_redirects=True,
        )
    try:
        menu = await _run_import(db, menu, external_merchant_id, client)
    finally:
        if owns_client:
            await client.aclose()

    logger.info(
        "menu import completed menu_id=%s categories=%s",
        menu.id,
        len(menu.categories),
    )
    return menu
