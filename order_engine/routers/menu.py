from __future__ import annotations

from typing import Any, Dict

import httpx
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from order_engine.core import config
from order_engine.core.database import get_db
from order_engine.core.exceptions import ItemNotFound, MenuNotFound, OrderEngineError
from order_engine.schemas.menu import MenuImportRequest
from order_engine.services import catalog
from order_engine.services.menu_import import import_menu

router = APIRouter(prefix="/menus", tags=["menus"])


async def get_catalog_client():
    async with httpx.AsyncClient(
        timeout=config.CATALOG_HTTP_TIMEOUT_SECONDS,
        follow_redirects=True,
    ) as client:
        yield client


@router.get("/environment/{environment_id}")
def get_menu_by_environment(environment_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    menu = catalog.get_active_menu(db, environment_id)
    if not menu:
        exc = MenuNotFound(f"No active menu for environment {environment_id}")
        raise HTTPException(status_code=exc.status_code, detail=exc.detail)
    return catalog.menu_to_dict(menu)


@router.get("/items/{item_id}")
def get_item_by_id(item_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        item = catalog.get_item(db, item_id)
    except ItemNotFound as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return catalog.item_to_dict(item)


@router.post("/import", status_code=status.HTTP_201_CREATED)
async def import_menu_route(
    payload: MenuImportRequest,
    db: Session = Depends(get_db),
    client: httpx.AsyncClient = Depends(get_catalog_client),
) -> Dict[str, Any]:
    try:
        menu = await import_menu(db, payload.environment_id, payload.external_merchant_id, client=client)
    except OrderEngineError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return {
        "id": menu.id,
        "environmentId": menu.environment_id,
        "menuStatus": menu.menu_status.value,
        "isActive": menu.is_active,
        "categories": len(menu.categories),
    }
