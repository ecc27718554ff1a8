from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from order_engine.core.database import Base, JSONType, generate_uuid
from order_engine.models.enums import PortionSize


class MenuItem(Base):
    __tablename__ = "items"
    __table_args__ = (Index("ix_items_environment_category", "environment_id", "menu_category_id"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    environment_id = Column(
        String(36), ForeignKey("environments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    menu_category_id = Column(
        String(36), ForeignKey("menu_categories.id", ondelete="CASCADE"), nullable=False
    )
    external_item_id = Column(Text, nullable=True)
    external_item_code = Column(Text, nullable=True)
    description = Column(Text, nullable=False)
    details = Column(Text, nullable=True)
    logo_url = Column(Text, nullable=True)
    logo_base64 = Column(Text, nullable=True)
    need_choices = Column(Boolean, default=False, nullable=False)

    # Preços em centavos
    unit_price = Column(Integer, nullable=False)
    unit_min_price = Column(Integer, nullable=True)
    unit_original_price = Column(Integer, nullable=True)

    promotion_tags = Column(JSONType, default=list, nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    portion_size_tag = Column(
        Enum(PortionSize, name="portion_size", native_enum=False, length=20),
        default=PortionSize.NOT_APPLICABLE,
        nullable=False,
    )
    dietary_restrictions = Column(JSONType, default=list, nullable=True)
    dish_classifications = Column(JSONType, default=list, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    category = relationship("MenuCategory", back_populates="items")
    product_info = relationship(
        "ProductInfo", back_populates="item", uselist=False, cascade="all, delete-orphan"
    )
    selling_option = relationship(
        "SellingOption", back_populates="item", uselist=False, cascade="all, delete-orphan"
    )
    choices = relationship(
        "Choice",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="Choice.display_order",
    )
