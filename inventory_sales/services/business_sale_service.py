from datetime import datetime, timezone
from typing import Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from inventory_sales.errors import NotFound
from inventory_sales.models.business_sale import BusinessSale
from inventory_sales.models.product import Product
from inventory_sales.schemas.business_sale import BusinessSaleCreate, BusinessSaleUpdate
from inventory_sales.utils.sql import bind_positional, is_changed, prepare_update_query

BUSINESS_SALE_COLUMNS = {
    "businessId": "business_id",
    "productId": "product_id",
    "quantitySold": "quantity_sold",
    "salePrice": "sale_price",
    "businessPercentage": "business_percentage",
    "saleDate": "sale_date",
    "updatedAt": "updated_at",
    "createdAt": "created_at",
}

TRACKED_FIELDS = {
    "quantitySold": "quantity_sold",
    "salePrice": "sale_price",
    "businessPercentage": "business_percentage",
    "saleDate": "sale_date",
}


def _business_sales_query():
    return (
        select(
            BusinessSale.id,
            BusinessSale.product_id,
            BusinessSale.quantity_sold,
            BusinessSale.sale_price,
            BusinessSale.business_percentage,
            BusinessSale.sale_date,
            Product.name,
            Product.price,
            Product.cost,
            Product.sku,
        )
        .join(Product, BusinessSale.product_id == Product.id)
    )


class BusinessSaleService:
    """Service for sales made through a business.

    Unlike direct sales there is no inventory check here, and the product
    only has to exist, whoever owns it.
    """

    @staticmethod
    async def create_business_sale(
        session: AsyncSession,
        business_id: int,
        sale_data: BusinessSaleCreate
    ) -> BusinessSale:
        await BusinessSaleService.product_check(session, sale_data.product_id)

        business_sale = BusinessSale(business_id=business_id, **sale_data.model_dump())
        session.add(business_sale)
        await session.commit()
        await session.refresh(business_sale)
        return business_sale

    @staticmethod
    async def list_business_sales(session: AsyncSession, business_id: int) -> List[Dict]:
        result = await session.execute(
            _business_sales_query()
            .where(BusinessSale.business_id == business_id)
            .order_by(BusinessSale.id)
        )
        rows = [dict(row) for row in result.mappings().all()]
        if not rows:
            raise NotFound(f"No business sales for business with ID of {business_id}")
        return rows

    @staticmethod
    async def get_business_sale(
        session: AsyncSession,
        business_id: int,
        business_sale_id: int
    ) -> Dict:
        result = await session.execute(
            _business_sales_query().where(
                BusinessSale.id == business_sale_id,
                BusinessSale.business_id == business_id,
            )
        )
        row = result.mappings().first()
        if row is None:
            raise NotFound(f"Business Sale not found with ID of: {business_sale_id}")
        return dict(row)

    @staticmethod
    async def update_business_sale(
        session: AsyncSession,
        business_id: int,
        business_sale_id: int,
        sale_data: BusinessSaleUpdate
    ) -> BusinessSale:
        current = await BusinessSaleService.get_business_sale(session, business_id, business_sale_id)
        changes = sale_data.changes()

        if "productId" in changes and changes["productId"] != current["product_id"]:
            await BusinessSaleService.product_check(session, changes["productId"])

        if any(
            field in changes and is_changed(changes[field], current[key])
            for field, key in TRACKED_FIELDS.items()
        ):
            changes["updatedAt"] = datetime.now(timezone.utc)

        set_columns, values = prepare_update_query(changes, BUSINESS_SALE_COLUMNS)
        business_sale_id_idx = len(values) + 1
        await session.execute(
            bind_positional(
                f"UPDATE business_sales SET {set_columns} WHERE id = ${business_sale_id_idx}",
                [*values, business_sale_id]
            )
        )
        await session.commit()
        return await session.get(BusinessSale, business_sale_id, populate_existing=True)

    @staticmethod
    async def delete_business_sale(
        session: AsyncSession,
        business_id: int,
        business_sale_id: int
    ) -> None:
        result = await session.execute(
            delete(BusinessSale)
            .where(BusinessSale.business_id == business_id, BusinessSale.id == business_sale_id)
            .returning(BusinessSale.id)
        )
        if result.first() is None:
            await session.rollback()
            raise NotFound(f"Business sale not found with ID of: {business_sale_id}")
        await session.commit()

    @staticmethod
    async def product_check(session: AsyncSession, product_id: int) -> None:
        """Raise NotFound if no product has this id. Ownership is not checked."""
        result = await session.execute(select(Product.id).where(Product.id == product_id))
        if result.first() is None:
            raise NotFound(f"Product not found with ID of: {product_id}")
