from sqlalchemy import Boolean, Column, DateTime, String, func

from order_engine.core.database import Base, generate_uuid


class Environment(Base):
    """Loja/vendedor dono do cardápio e dos pedidos."""

    __tablename__ = "environments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
