from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, generate_uuid
from order_engine.models.enums import OrderStatus, PaymentMethod


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="SET NULL"), index=True, nullable=True
    )
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="RESTRICT"), index=True, nullable=False)
    whatsapp_flows_id = Column(String(36), index=True, nullable=False)

    status = Column(
        Enum(OrderStatus, name="order_status", native_enum=False, length=40),
        default=OrderStatus.CART,
        nullable=False,
    )

    # Valores em centavos, calculados pelo backend
    subtotal_amount = Column(Integer, default=0, nullable=False)
    discount_amount = Column(Integer, default=0, nullable=False)
    delivery_fee_amount = Column(Integer, default=0, nullable=False)
    total_amount = Column(Integer, default=0, nullable=False)  # subtotal + frete - desconto

    client_name = Column(String(255), nullable=True)
    client_sender = Column(String(20), nullable=True)

    # Se o endereço for removido, o pedido fica e o vínculo é anulado
    client_address_id = Column(
        String(36), ForeignKey("client_addresses.id", ondelete="SET NULL"), nullable=True
    )

    payment_method = Column(
        Enum(PaymentMethod, name="payment_method", native_enum=False, length=30),
        nullable=True,
    )
    notes = Column(Text, nullable=True)

    sent_to_pending_payment_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_waiting_merchant_acceptance_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_in_preparation_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_ready_for_delivery_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_in_delivery_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_driver_on_client_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_completed_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_canceled_by_merchant_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_canceled_by_user_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_rejected_by_merchant_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_payment_failed_at = Column(DateTime(timezone=True), nullable=True)
    sent_to_expired_at = Column(DateTime(timezone=True), nullable=True)

    cancellation_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    client = relationship("Client", back_populates="orders")
    order_items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.display_order",
    )
