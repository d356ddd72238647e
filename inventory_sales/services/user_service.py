from typing import Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Integer, Numeric, String, cast, delete, null, select, union
from inventory_sales.errors import Conflict, NotFound, Unauthorized
from inventory_sales.models.business import Business
from inventory_sales.models.business_sale import BusinessSale
from inventory_sales.models.product import Product
from inventory_sales.models.sale import Sale
from inventory_sales.models.user import User
from inventory_sales.schemas.user import UserRegister, UserUpdate
from inventory_sales.services.auth_service import check_password, hash_password
from inventory_sales.utils.sql import bind_positional, prepare_update_query

USER_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
}

UNIQUE_FIELDS = ("username", "email")


class UserService:
    """Service for user accounts and the sales reports built on them."""

    @staticmethod
    async def register(session: AsyncSession, user_data: UserRegister) -> User:
        """Create a user after checking username and email are free."""
        await UserService.unique_check(session, "username", user_data.username)
        await UserService.unique_check(session, "email", user_data.email)

        values = user_data.model_dump()
        values["password"] = hash_password(user_data.password)
        user = User(**values)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    @staticmethod
    async def authenticate(session: AsyncSession, username: str, password: str) -> User:
        result = await session.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFound(f"Username not found: {username}")
        if not check_password(password, user.password):
            raise Unauthorized("Incorrect username/password")
        return user

    @staticmethod
    async def get_all(session: AsyncSession) -> List[User]:
        result = await session.execute(select(User).order_by(User.last_name))
        users = list(result.scalars().all())
        if not users:
            raise NotFound("No users in database.")
        return users

    @staticmethod
    async def get_user(session: AsyncSession, user_id: int) -> User:
        user = await session.get(User, user_id)
        if user is None:
            raise NotFound(f"User not found with id: {user_id}")
        return user

    @staticmethod
    async def update_user(session: AsyncSession, user_id: int, user_data: UserUpdate) -> User:
        """Partially update a user; a new password is hashed before storing."""
        user = await UserService.get_user(session, user_id)
        changes = user_data.changes()

        for field in UNIQUE_FIELDS:
            if field in changes and changes[field] != getattr(user, field):
                await UserService.unique_check(session, field, changes[field])

        if "password" in changes:
            changes["password"] = hash_password(changes["password"])

        set_columns, values = prepare_update_query(changes, USER_COLUMNS)
        user_id_idx = len(values) + 1
        await session.execute(
            bind_positional(
                f"UPDATE users SET {set_columns} WHERE id = ${user_id_idx}",
                [*values, user_id]
            )
        )
        await session.commit()
        await session.refresh(user)
        return user

    @staticmethod
    async def delete_user(session: AsyncSession, user_id: int) -> str:
        """Delete a user and return the username."""
        result = await session.execute(
            delete(User).where(User.id == user_id).returning(User.username)
        )
        deleted = result.first()
        if deleted is None:
            await session.rollback()
            raise NotFound(f"User not found with id: {user_id}")
        await session.commit()
        return deleted.username

    @staticmethod
    async def unique_check(session: AsyncSession, field: str, value: str) -> None:
        column = getattr(User, field)
        result = await session.execute(select(User.id).where(column == value))
        if result.first() is not None:
            raise Conflict(f"{field} taken: {value}")

    @staticmethod
    async def get_sales(session: AsyncSession, user_id: int) -> List[Dict]:
        """Every product of the user with its direct sales, oldest sale first.

        Products without sales appear once with empty sale fields.
        """
        result = await session.execute(
            select(
                Product.name,
                Product.price,
                Product.cost,
                Product.sku,
                Product.type,
                Sale.quantity_sold,
                Sale.sale_price,
                Sale.sale_date,
            )
            .select_from(Product)
            .outerjoin(Sale, Product.id == Sale.product_id)
            .where(Product.user_id == user_id)
            .order_by(Sale.sale_date.asc())
        )
        rows = [dict(row) for row in result.mappings().all()]
        if not rows:
            raise NotFound("No sales for user")
        return rows

    @staticmethod
    async def get_business_sales(session: AsyncSession, user_id: int) -> List[Dict]:
        result = await session.execute(
            select(
                Business.name.label("business_name"),
                Business.contact_info,
                Product.name.label("product_name"),
                Product.price.label("product_price"),
                Product.cost.label("product_cost"),
                Product.sku.label("product_sku"),
                Product.type.label("product_type"),
                BusinessSale.quantity_sold,
                BusinessSale.sale_price,
                BusinessSale.business_percentage,
                BusinessSale.sale_date,
            )
            .select_from(BusinessSale)
            .join(Business, BusinessSale.business_id == Business.id)
            .join(Product, BusinessSale.product_id == Product.id)
            .where(Business.user_id == user_id)
            .order_by(BusinessSale.sale_date.asc())
        )
        rows = [dict(row) for row in result.mappings().all()]
        if not rows:
            raise NotFound("No business sales for user")
        return rows

    @staticmethod
    async def get_all_sales_info(session: AsyncSession, user_id: int) -> List[Dict]:
        """Direct and business sales of a user in one list ordered by sale date."""
        direct = (
            select(
                Sale.id.label("sale_id"),
                cast(null(), Integer).label("business_sale_id"),
                Sale.product_id.label("product_id"),
                cast(null(), Integer).label("business_id"),
                Product.name.label("name"),
                Product.price.label("price"),
                Product.cost.label("cost"),
                Product.sku.label("sku"),
                Product.type.label("type"),
                Sale.quantity_sold.label("quantity_sold"),
                Sale.sale_price.label("sale_price"),
                Sale.sale_date.label("sale_date"),
                cast(null(), String).label("business_name"),
                cast(null(), String).label("contact_info"),
                cast(null(), Numeric(5, 2, asdecimal=False)).label("business_percentage"),
            )
            .join(Product, Sale.product_id == Product.id)
            .where(Sale.user_id == user_id)
        )
        via_business = (
            select(
                cast(null(), Integer).label("sale_id"),
                BusinessSale.id.label("business_sale_id"),
                BusinessSale.product_id.label("product_id"),
                BusinessSale.business_id.label("business_id"),
                Product.name.label("name"),
                Product.price.label("price"),
                Product.cost.label("cost"),
                Product.sku.label("sku"),
                Product.type.label("type"),
                BusinessSale.quantity_sold.label("quantity_sold"),
                BusinessSale.sale_price.label("sale_price"),
                BusinessSale.sale_date.label("sale_date"),
                Business.name.label("business_name"),
                Business.contact_info.label("contact_info"),
                BusinessSale.business_percentage.label("business_percentage"),
            )
            .select_from(BusinessSale)
            .join(Business, BusinessSale.business_id == Business.id)
            .join(Product, BusinessSale.product_id == Product.id)
            .where(Business.user_id == user_id)
        )
        combined = union(direct, via_business).subquery()
        result = await session.execute(select(combined).order_by(combined.c.sale_date))
        rows = [dict(row) for row in result.mappings().all()]
        if not rows:
            raise NotFound("No sales for user")
        return rows
