from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, JSONType, generate_uuid
from order_engine.models.enums import MenuImportStatus


class Menu(Base):
    __tablename__ = "menus"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    external_merchant_id = Column(Text, nullable=True)
    raw_catalog_data = Column(JSONType, nullable=True)
    is_active = Column(Boolean, default=False, nullable=False)
    name = Column(String(255), nullable=True)
    imported_at = Column(DateTime(timezone=True), nullable=True)
    menu_status = Column(
        Enum(MenuImportStatus, name="menu_import_status", native_enum=False, length=20),
        default=MenuImportStatus.NOT_IMPORTED,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    categories = relationship(
        "MenuCategory",
        back_populates="menu",
        cascade="all, delete-orphan",
        order_by="MenuCategory.display_order",
    )
