from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from inventory_sales.errors import Conflict, NotFound
from inventory_sales.models.product import Product
from inventory_sales.schemas.product import ProductCreate, ProductUpdate
from inventory_sales.utils.sql import bind_positional, prepare_update_query

PRODUCT_COLUMNS = {
    "userId": "user_id",
    "minutesToMake": "minutes_to_make",
    "productCreatedAt": "product_created_at",
    "productUpdatedAt": "product_updated_at",
    "quantityUpdatedAt": "quantity_updated_at",
}

UNIQUE_FIELDS = ("name", "sku")


class ProductService:
    """Service for product CRUD operations.

    Every lookup is scoped by the owning user id, so a product owned by
    somebody else is reported exactly like a missing one.
    """

    @staticmethod
    async def create_product(
        session: AsyncSession,
        user_id: int,
        product_data: ProductCreate
    ) -> Product:
        """Create a new product for ``user_id``."""
        await ProductService.unique_check(session, "name", product_data.name, user_id)
        await ProductService.unique_check(session, "sku", product_data.sku, user_id)

        product = Product(user_id=user_id, **product_data.model_dump())
        session.add(product)
        await session.commit()
        await session.refresh(product)
        return product

    @staticmethod
    async def list_user_products(session: AsyncSession, user_id: int) -> List[Product]:
        """Get all products owned by a user."""
        result = await session.execute(
            select(Product).where(Product.user_id == user_id).order_by(Product.id)
        )
        products = list(result.scalars().all())
        if not products:
            raise NotFound(f"No products for user with ID of: {user_id}")
        return products

    @staticmethod
    async def get_product(
        session: AsyncSession,
        user_id: Optional[int],
        product_id: Optional[int]
    ) -> Product:
        """Get a product by id, only if ``user_id`` owns it."""
        result = await session.execute(
            select(Product).where(Product.user_id == user_id, Product.id == product_id)
        )
        product = result.scalar_one_or_none()
        if product is None:
            raise NotFound(f"Product not found with ID of: {product_id}")
        return product

    @staticmethod
    async def update_product(
        session: AsyncSession,
        user_id: int,
        product_id: int,
        product_data: ProductUpdate
    ) -> Product:
        """Partially update a product.

        Uniqueness is re-checked only for a name or sku that actually changes.
        ``productUpdatedAt`` is always stamped; ``quantityUpdatedAt`` only when
        the quantity differs from the stored one.
        """
        product = await ProductService.get_product(session, user_id, product_id)
        changes = product_data.changes()

        for field in UNIQUE_FIELDS:
            if field in changes and changes[field] != getattr(product, field):
                await ProductService.unique_check(session, field, changes[field], product.user_id)

        now = datetime.now(timezone.utc)
        if "quantity" in changes and changes["quantity"] != product.quantity:
            changes["quantityUpdatedAt"] = now
        changes["productUpdatedAt"] = now

        set_columns, values = prepare_update_query(changes, PRODUCT_COLUMNS)
        product_id_idx = len(values) + 1
        await session.execute(
            bind_positional(
                f"UPDATE products SET {set_columns} WHERE id = ${product_id_idx}",
                [*values, product_id]
            )
        )
        await session.commit()
        await session.refresh(product)
        return product

    @staticmethod
    async def delete_product(session: AsyncSession, user_id: int, product_id: int) -> str:
        """Delete a product and return its name."""
        result = await session.execute(
            delete(Product)
            .where(Product.user_id == user_id, Product.id == product_id)
            .returning(Product.id, Product.name)
        )
        deleted = result.first()
        if deleted is None:
            await session.rollback()
            raise NotFound(f"Product not found with ID of: {product_id}")
        await session.commit()
        return deleted.name

    @staticmethod
    async def unique_check(session: AsyncSession, field: str, value, user_id: int) -> None:
        """Raise Conflict if ``user_id`` already has a product with this name/sku."""
        column = getattr(Product, field)
        result = await session.execute(
            select(Product.id).where(column == value, Product.user_id == user_id)
        )
        if result.first() is not None:
            raise Conflict(f"{field} taken: {value}")
