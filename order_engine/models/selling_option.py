from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, JSONType, generate_uuid


class SellingOption(Base):
    __tablename__ = "selling_options"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    item_id = Column(String(36), ForeignKey("items.id", ondelete="CASCADE"), unique=True, nullable=False)
    minimum = Column(Integer, nullable=True)
    incremental = Column(Integer, nullable=True)
    average_unit = Column(Text, nullable=True)
    available_units = Column(JSONType, default=list, nullable=True)  # ex: ["UNIT"]
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    item = relationship("MenuItem", back_populates="selling_option")
