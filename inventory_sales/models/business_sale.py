from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from inventory_sales.database import Base


class BusinessSale(Base):
    __tablename__ = "business_sales"

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity_sold = Column(Integer, nullable=False)
    sale_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    business_percentage = Column(Numeric(5, 2, asdecimal=False), nullable=False)
    sale_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
