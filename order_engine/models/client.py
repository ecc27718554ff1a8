from sqlalchemy import Boolean, Column, DateTime, String, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, generate_uuid


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    phone = Column(String(50), unique=True, nullable=False)
    name = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    addresses = relationship("ClientAddress", back_populates="client", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="client")
