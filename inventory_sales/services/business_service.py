from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from inventory_sales.errors import Conflict, NotFound
from inventory_sales.models.business import Business
from inventory_sales.schemas.business import BusinessCreate, BusinessUpdate
from inventory_sales.utils.sql import bind_positional, prepare_update_query

BUSINESS_COLUMNS = {
    "userId": "user_id",
    "contactInfo": "contact_info",
    "createdAt": "created_at",
}


class BusinessService:
    """Service for the businesses (resale channels) a user works with."""

    @staticmethod
    async def create_business(
        session: AsyncSession,
        user_id: int,
        business_data: BusinessCreate
    ) -> Business:
        await BusinessService.unique_check(session, user_id, business_data.name)

        business = Business(user_id=user_id, **business_data.model_dump())
        session.add(business)
        await session.commit()
        await session.refresh(business)
        return business

    @staticmethod
    async def list_businesses(session: AsyncSession, user_id: int) -> List[Business]:
        """Get all businesses of a user, ordered by name."""
        result = await session.execute(
            select(Business).where(Business.user_id == user_id).order_by(Business.name)
        )
        businesses = list(result.scalars().all())
        if not businesses:
            raise NotFound("No businesses for user")
        return businesses

    @staticmethod
    async def get_business(
        session: AsyncSession,
        user_id: Optional[int],
        business_id: Optional[int]
    ) -> Business:
        """Get a business by id, only if ``user_id`` owns it."""
        result = await session.execute(
            select(Business).where(Business.user_id == user_id, Business.id == business_id)
        )
        business = result.scalar_one_or_none()
        if business is None:
            raise NotFound(f"Business not found with ID of: {business_id}")
        return business

    @staticmethod
    async def update_business(
        session: AsyncSession,
        user_id: int,
        business_id: int,
        business_data: BusinessUpdate
    ) -> Business:
        business = await BusinessService.get_business(session, user_id, business_id)
        changes = business_data.changes()

        if "name" in changes and changes["name"] != business.name:
            await BusinessService.unique_check(session, user_id, changes["name"])

        set_columns, values = prepare_update_query(changes, BUSINESS_COLUMNS)
        business_id_idx = len(values) + 1
        await session.execute(
            bind_positional(
                f"UPDATE businesses SET {set_columns} WHERE id = ${business_id_idx}",
                [*values, business_id]
            )
        )
        await session.commit()
        await session.refresh(business)
        return business

    @staticmethod
    async def delete_business(session: AsyncSession, user_id: int, business_id: int) -> str:
        """Delete a business and return its name."""
        result = await session.execute(
            delete(Business)
            .where(Business.user_id == user_id, Business.id == business_id)
            .returning(Business.id, Business.name)
        )
        deleted = result.first()
        if deleted is None:
            await session.rollback()
            raise NotFound(f"Business not found with ID of: {business_id}")
        await session.commit()
        return deleted.name

    @staticmethod
    async def unique_check(session: AsyncSession, user_id: int, name: str) -> None:
        result = await session.execute(
            select(Business.id).where(Business.user_id == user_id, Business.name == name)
        )
        if result.first() is not None:
            raise Conflict(f"Business with name of {name} already exists.")
