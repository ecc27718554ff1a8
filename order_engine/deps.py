# order_engine/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException, status

from order_engine.core.request_context import set_request_context


def require_client_id(client_id: Optional[str] = Header(default=None, alias="clientId")) -> str:
    """Lê o header ``clientId``; sem ele a requisição não identifica o comprador."""
    value = (client_id or "").strip()
    if not value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Header clientId is required",
        )
    set_request_context(client_id=value)
    return value


def require_environment_id(
    environment_id: Optional[str] = Header(default=None, alias="environmentId"),
) -> str:
    value = (environment_id or "").strip()
    if not value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Header environmentId is required",
        )
    set_request_context(environment_id=value)
    return value
