from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from order_engine.core.exceptions import OrderEngineError, TransactionFailure
from order_engine.models.client import Client
from order_engine.models.client_address import ClientAddress
from order_engine.models.environment import Environment
from order_engine.models.order import Order
from order_engine.models.order_choice import OrderChoice
from order_engine.models.order_item import OrderItem

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    try:
        yield db
        db.commit()
    except OrderEngineError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("transaction failed")
        raise TransactionFailure(f"Transaction failed: {exc.__class__.__name__}") from exc
    except Exception:
        db.rollback()
        raise


def find_client(db: Session, client_id: str) -> Client | None:
    return db.query(Client).filter(Client.id == client_id).first()


def find_environment(db: Session, environment_id: str) -> Environment | None:
    return db.query(Environment).filter(Environment.id == environment_id).first()


def find_client_address(db: Session, address_id: str) -> ClientAddress | None:
    return db.query(ClientAddress).filter(ClientAddress.id == address_id).first()


def find_order(db: Session, order_id: str) -> Order | None:
    return db.query(Order).filter(Order.id == order_id).first()


def find_order_for_update(db: Session, order_id: str) -> Order | None:
    # Postgres trava a linha; no SQLite o with_for_update é ignorado
    return (
        db.query(Order)
        .filter(Order.id == order_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def _with_tree(query):
    return query.options(
        selectinload(Order.order_items)
        .selectinload(OrderItem.order_choices)
        .selectinload(OrderChoice.order_garnish_items)
    )


def find_order_tree(db: Session, order_id: str) -> Order | None:
    return _with_tree(db.query(Order)).filter(Order.id == order_id).first()


def find_order_tree_with_client(db: Session, order_id: str) -> Order | None:
    return (
        _with_tree(db.query(Order))
        .options(selectinload(Order.client))
        .filter(Order.id == order_id)
        .first()
    )


def find_order_tree_by_flow(db: Session, flow_id: str, client_id: str) -> Order | None:
    return (
        _with_tree(db.query(Order))
        .filter(Order.whatsapp_flows_id == flow_id, Order.client_id == client_id)
        .order_by(Order.created_at.desc())
        .first()
    )


def list_orders_by_client(db: Session, client_id: str) -> list[Order]:
    return (
        _with_tree(db.query(Order))
        .filter(Order.client_id == client_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def list_orders_by_environment(db: Session, environment_id: str) -> list[Order]:
    return (
        _with_tree(db.query(Order))
        .filter(Order.environment_id == environment_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def count_order_items(db: Session, order_id: str) -> int:
    return int(
        db.query(func.count(OrderItem.id)).filter(OrderItem.order_id == order_id).scalar() or 0
    )


def insert_order(db: Session, values: dict) -> Order:
    order = Order(**values)
    db.add(order)
    db.flush()
    return order


def increment_order_subtotal(db: Session, order_id: str, delta: int) -> None:
    """Soma ``delta`` centavos ao subtotal e recalcula o total na mesma instrução."""
    db.query(Order).filter(Order.id == order_id).update(
        {
            Order.subtotal_amount: Order.subtotal_amount + delta,
            Order.total_amount: Order.subtotal_amount
            + delta
            + Order.delivery_fee_amount
            - Order.discount_amount,
            Order.updated_at: func.now(),
        },
        synchronize_session=False,
    )


def update_order(db: Session, order_id: str, values: dict) -> int:
    values = dict(values)
    values.setdefault("updated_at", func.now())
    return (
        db.query(Order)
        .filter(Order.id == order_id)
        .update(values, synchronize_session=False)
    )
