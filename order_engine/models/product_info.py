from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, generate_uuid


class ProductInfo(Base):
    __tablename__ = "product_info"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    item_id = Column(String(36), ForeignKey("items.id", ondelete="CASCADE"), unique=True, nullable=False)
    external_product_info_id = Column(Text, nullable=False)
    packaging = Column(Text, nullable=True)
    sequence = Column(Integer, nullable=True)
    quantity = Column(Integer, default=0, nullable=False)
    unit = Column(String(50), nullable=True)  # g / ml / kg / l
    ean = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    item = relationship("MenuItem", back_populates="product_info")
