from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, generate_uuid
from order_engine.models.enums import MenuCategoryType


class MenuCategory(Base):
    __tablename__ = "menu_categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    menu_id = Column(String(36), ForeignKey("menus.id", ondelete="CASCADE"), index=True, nullable=False)
    external_code = Column(Text, nullable=True)
    name = Column(String(255), nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    category_type = Column(
        Enum(MenuCategoryType, name="menu_category_type", native_enum=False, length=20),
        default=MenuCategoryType.MAIN_ITEMS,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    menu = relationship("Menu", back_populates="categories")
    items = relationship(
        "MenuItem",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="MenuItem.display_order",
    )
