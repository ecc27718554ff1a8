import threading

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from order_engine.core.database import Base
from order_engine.models.order import Order
from order_engine.models.order_item import OrderItem
from order_engine.services.orders import add_order_item, create_order
from tests.fixtures_data import seed_catalog


def test_concurrent_item_additions_do_not_lose_subtotal_updates(tmp_path):
    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'orders.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    setup = SessionLocal()
    seed = seed_catalog(setup)
    order = create_order(
        setup,
        client_id=seed.client_id,
        whatsapp_flows_id="flow-race",
        environment_id=seed.environment_id,
        client_address_id=seed.address_id,
    )
    order_id = order.id
    setup.close()

    barrier = threading.Barrier(2)
    errors = []

    def _add(quantity):
        session = SessionLocal()
        try:
            barrier.wait()
            add_order_item(
                session,
                order_id=order_id,
                client_id=seed.client_id,
                item_id=seed.item_x,
                quantity=quantity,
            )
        except Exception as exc:  # pragma: no cover - reported below
            errors.append(exc)
        finally:
            session.close()

    threads = [threading.Thread(target=_add, args=(q,)) for q in (2, 3)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    check = SessionLocal()
    try:
        stored = check.query(Order).filter(Order.id == order_id).one()
        assert stored.subtotal_amount == 2 * 1500 + 3 * 1500
        assert stored.total_amount == stored.subtotal_amount
        assert check.query(OrderItem).filter(OrderItem.order_id == order_id).count() == 2
    finally:
        check.close()
        engine.dispose()
