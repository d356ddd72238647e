from datetime import datetime, timezone
from typing import Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from inventory_sales.errors import Conflict, NotFound
from inventory_sales.models.product import Product
from inventory_sales.models.sale import Sale
from inventory_sales.schemas.sale import SaleCreate, SaleUpdate
from inventory_sales.services.product_service import ProductService
from inventory_sales.utils.sql import bind_positional, is_changed, prepare_update_query

SALE_COLUMNS = {
    "userId": "user_id",
    "productId": "product_id",
    "quantitySold": "quantity_sold",
    "salePrice": "sale_price",
    "saleDate": "sale_date",
    "updatedAt": "updated_at",
    "createdAt": "created_at",
}

# API field -> key in a joined sale row
TRACKED_FIELDS = {
    "quantitySold": "quantity_sold",
    "salePrice": "sale_price",
    "saleDate": "sale_date",
}


def _product_sales_query():
    return (
        select(
            Sale.id,
            Sale.quantity_sold,
            Sale.sale_price,
            Sale.sale_date,
            Product.name,
            Product.price,
            Product.cost,
            Product.sku,
            Product.quantity,
        )
        .join(Product, Sale.product_id == Product.id)
    )


class SaleService:
    """Service for direct sales of a product.

    Callers have already proven ownership of the product, so reads here are
    scoped by product id only.
    """

    @staticmethod
    async def create_sale(
        session: AsyncSession,
        user_id: int,
        product_id: int,
        sale_data: SaleCreate
    ) -> Sale:
        """Record a sale. The product quantity itself is left untouched."""
        # Read-then-insert without a lock: concurrent sales can both pass.
        await SaleService.inventory_check(session, user_id, product_id, sale_data.quantity_sold)

        sale = Sale(user_id=user_id, product_id=product_id, **sale_data.model_dump())
        session.add(sale)
        await session.commit()
        await session.refresh(sale)
        return sale

    @staticmethod
    async def list_product_sales(session: AsyncSession, product_id: int) -> List[Dict]:
        result = await session.execute(
            _product_sales_query().where(Product.id == product_id).order_by(Sale.id)
        )
        rows = [dict(row) for row in result.mappings().all()]
        if not rows:
            raise NotFound(f"No sales for product with ID of {product_id}")
        return rows

    @staticmethod
    async def get_product_sale(session: AsyncSession, product_id: int, sale_id: int) -> Dict:
        result = await session.execute(
            _product_sales_query().where(Product.id == product_id, Sale.id == sale_id)
        )
        row = result.mappings().first()
        if row is None:
            raise NotFound(f"Sale not found with ID of: {sale_id}")
        return dict(row)

    @staticmethod
    async def update_sale(
        session: AsyncSession,
        user_id: int,
        product_id: int,
        sale_id: int,
        sale_data: SaleUpdate
    ) -> Sale:
        """Partially update a sale, re-running the inventory check on a new quantity."""
        current = await SaleService.get_product_sale(session, product_id, sale_id)
        changes = sale_data.changes()

        if "quantitySold" in changes and is_changed(changes["quantitySold"], current["quantity_sold"]):
            await SaleService.inventory_check(session, user_id, product_id, changes["quantitySold"])

        if any(
            field in changes and is_changed(changes[field], current[key])
            for field, key in TRACKED_FIELDS.items()
        ):
            changes["updatedAt"] = datetime.now(timezone.utc)

        set_columns, values = prepare_update_query(changes, SALE_COLUMNS)
        sale_id_idx = len(values) + 1
        await session.execute(
            bind_positional(
                f"UPDATE sales SET {set_columns} WHERE id = ${sale_id_idx}",
                [*values, sale_id]
            )
        )
        await session.commit()
        return await session.get(Sale, sale_id, populate_existing=True)

    @staticmethod
    async def delete_sale(session: AsyncSession, product_id: int, sale_id: int) -> None:
        result = await session.execute(
            delete(Sale)
            .where(Sale.product_id == product_id, Sale.id == sale_id)
            .returning(Sale.id)
        )
        if result.first() is None:
            await session.rollback()
            raise NotFound(f"Sale not found with ID of: {sale_id}")
        await session.commit()

    @staticmethod
    async def inventory_check(
        session: AsyncSession,
        user_id: int,
        product_id: int,
        quantity_sold: int
    ) -> None:
        """Raise Conflict if more units are sold than the product currently holds."""
        product = await ProductService.get_product(session, user_id, product_id)
        if quantity_sold > product.quantity:
            raise Conflict(
                f"Sale quantity of {quantity_sold} exceeds product inventory of {product.quantity}"
            )
