from __future__ import annotations

from contextvars import ContextVar


_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_ENVIRONMENT_ID_CTX: ContextVar[str | None] = ContextVar("environment_id", default=None)
_CLIENT_ID_CTX: ContextVar[str | None] = ContextVar("client_id", default=None)


def set_request_context(
    *,
    request_id: str | None = None,
    environment_id: str | None = None,
    client_id: str | None = None,
) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if environment_id is not None:
        _ENVIRONMENT_ID_CTX.set(environment_id)
    if client_id is not None:
        _CLIENT_ID_CTX.set(client_id)


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


def get_environment_id() -> str | None:
    return _ENVIRONMENT_ID_CTX.get()


def get_client_id() -> str | None:
    return _CLIENT_ID_CTX.get()


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _ENVIRONMENT_ID_CTX.set(None)
    _CLIENT_ID_CTX.set(None)
