from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, JSONType, generate_uuid
from order_engine.models.enums import PortionSize


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="SET NULL"), index=True, nullable=True
    )
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)

    # Referência ao item do catálogo; o pedido sobrevive à remoção do item
    item_id = Column(String(36), ForeignKey("items.id", ondelete="SET NULL"), nullable=True)

    # Snapshot do catálogo no momento da compra
    description_at_purchase = Column(Text, nullable=True)
    details_at_purchase = Column(Text, nullable=True)
    logo_url_at_purchase = Column(Text, nullable=True)
    logo_base64_at_purchase = Column(Text, nullable=True)
    need_choices_at_purchase = Column(Boolean, nullable=True)
    unit_price_at_purchase = Column(Integer, nullable=True)
    unit_min_price_at_purchase = Column(Integer, nullable=True)
    unit_original_price_at_purchase = Column(Integer, nullable=True)
    promotion_tags_at_purchase = Column(JSONType, default=list, nullable=True)
    portion_size_tag_at_purchase = Column(
        Enum(PortionSize, name="portion_size", native_enum=False, length=20),
        default=PortionSize.NOT_APPLICABLE,
        nullable=False,
    )
    dietary_restrictions_at_purchase = Column(JSONType, default=list, nullable=True)
    dish_classification_at_purchase = Column(JSONType, default=list, nullable=True)

    quantity = Column(Integer, default=1, nullable=False)
    single_price_for_item_line = Column(Integer, default=0, nullable=False)  # preço base, sem adicionais
    total_price_for_item_line = Column(Integer, default=0, nullable=False)

    notes = Column(Text, nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    order = relationship("Order", back_populates="order_items")
    order_choices = relationship(
        "OrderChoice",
        back_populates="order_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderChoice.display_order",
    )
