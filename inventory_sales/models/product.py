from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from inventory_sales.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    cost = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    sku = Column(String(50), nullable=False)
    minutes_to_make = Column(Integer, nullable=True)
    type = Column(String(50), nullable=True)
    quantity = Column(Integer, default=0, server_default="0", nullable=False)
    product_created_at = Column(DateTime(timezone=True), server_default=func.now())
    product_updated_at = Column(DateTime(timezone=True), server_default=func.now())
    quantity_updated_at = Column(DateTime(timezone=True), server_default=func.now())

    # Name and SKU are unique per owner, not globally
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_products_user_name"),
        UniqueConstraint("user_id", "sku", name="uq_products_user_sku"),
    )
