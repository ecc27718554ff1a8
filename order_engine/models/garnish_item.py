from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, generate_uuid


class GarnishItem(Base):
    __tablename__ = "garnish_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    choice_id = Column(String(36), ForeignKey("choices.id", ondelete="CASCADE"), index=True, nullable=False)
    external_garnish_item_id = Column(Text, nullable=True)
    external_garnish_item_code = Column(Text, nullable=True)
    description = Column(Text, nullable=False)
    details = Column(Text, nullable=True)
    logo_url = Column(Text, nullable=True)
    logo_base64 = Column(Text, nullable=True)
    unit_price = Column(Integer, nullable=False)  # centavos
    display_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    choice = relationship("Choice", back_populates="garnish_items")
