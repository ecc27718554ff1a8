from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, generate_uuid


class Choice(Base):
    """Grupo de complementos de um item (ex: "Escolha o refrigerante")."""

    __tablename__ = "choices"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    item_id = Column(String(36), ForeignKey("items.id", ondelete="CASCADE"), index=True, nullable=False)
    external_code = Column(Text, nullable=True)
    name = Column(String(255), nullable=False)
    min = Column(Integer, default=0, nullable=False)
    max = Column(Integer, default=1, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    item = relationship("MenuItem", back_populates="choices")
    garnish_items = relationship(
        "GarnishItem",
        back_populates="choice",
        cascade="all, delete-orphan",
        order_by="GarnishItem.display_order",
    )
