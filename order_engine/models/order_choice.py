from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, generate_uuid


class OrderChoice(Base):
    __tablename__ = "order_choices"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="SET NULL"), index=True, nullable=True
    )
    order_item_id = Column(
        String(36), ForeignKey("order_items.id", ondelete="CASCADE"), index=True, nullable=False
    )
    choice_id = Column(String(36), ForeignKey("choices.id", ondelete="SET NULL"), nullable=True)

    name_at_purchase = Column(String(255), nullable=True)
    min_at_purchase = Column(Integer, nullable=True)
    max_at_purchase = Column(Integer, nullable=True)

    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    order_item = relationship("OrderItem", back_populates="order_choices")
    order_garnish_items = relationship(
        "OrderGarnishItem",
        back_populates="order_choice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderGarnishItem.display_order",
    )
