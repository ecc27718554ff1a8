from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, generate_uuid


class OrderGarnishItem(Base):
    __tablename__ = "order_garnish_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="SET NULL"), index=True, nullable=True
    )
    garnish_item_id = Column(String(36), ForeignKey("garnish_items.id", ondelete="SET NULL"), nullable=True)
    order_choice_id = Column(
        String(36), ForeignKey("order_choices.id", ondelete="CASCADE"), index=True, nullable=False
    )

    description_at_purchase = Column(Text, nullable=True)
    details_at_purchase = Column(Text, nullable=True)
    unit_price_at_purchase = Column(Integer, nullable=True)
    logo_url_at_purchase = Column(Text, nullable=True)
    logo_base64_at_purchase = Column(Text, nullable=True)

    quantity = Column(Integer, default=1, nullable=False)
    total_price_for_garnish_item_line = Column(Integer, default=0, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    order_choice = relationship("OrderChoice", back_populates="order_garnish_items")
