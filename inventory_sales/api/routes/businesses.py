from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from inventory_sales.api.dependencies import ensure_correct_user_or_admin, ensure_logged_in
from inventory_sales.database import get_db
from inventory_sales.schemas.business import (
    BusinessCreate,
    BusinessEnvelope,
    BusinessListResponse,
    BusinessResponse,
    BusinessUpdate,
)
from inventory_sales.schemas.common import MessageResponse
from inventory_sales.services.business_service import BusinessService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/businesses", tags=["businesses"])


@router.post("", response_model=BusinessEnvelope, status_code=201,
             dependencies=[Depends(ensure_logged_in)])
async def create_business(
    user_id: int,
    business_data: BusinessCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a business for the user in the path. Any logged-in user may call this."""
    business = await BusinessService.create_business(db, user_id, business_data)
    logger.info("Created business id=%s for user_id=%s", business.id, user_id)
    return BusinessEnvelope(business=BusinessResponse.model_validate(business))


@router.get("", response_model=BusinessListResponse,
            dependencies=[Depends(ensure_correct_user_or_admin)])
async def list_businesses(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    businesses = await BusinessService.list_businesses(db, user_id)
    return BusinessListResponse(businesses=[BusinessResponse.model_validate(b) for b in businesses])


@router.get("/{business_id}", response_model=BusinessEnvelope,
            dependencies=[Depends(ensure_correct_user_or_admin)])
async def get_business(
    user_id: int,
    business_id: int,
    db: AsyncSession = Depends(get_db)
):
    business = await BusinessService.get_business(db, user_id, business_id)
    return BusinessEnvelope(business=BusinessResponse.model_validate(business))


@router.patch("/{business_id}", response_model=BusinessEnvelope,
              dependencies=[Depends(ensure_correct_user_or_admin)])
async def update_business(
    user_id: int,
    business_id: int,
    business_data: BusinessUpdate,
    db: AsyncSession = Depends(get_db)
):
    business = await BusinessService.update_business(db, user_id, business_id, business_data)
    logger.info("Updated business id=%s fields=%s", business_id, sorted(business_data.model_fields_set))
    return BusinessEnvelope(business=BusinessResponse.model_validate(business))


@router.delete("/{business_id}", response_model=MessageResponse,
               dependencies=[Depends(ensure_correct_user_or_admin)])
async def delete_business(
    user_id: int,
    business_id: int,
    db: AsyncSession = Depends(get_db)
):
    name = await BusinessService.delete_business(db, user_id, business_id)
    logger.info("Deleted business id=%s of user_id=%s", business_id, user_id)
    return MessageResponse(message=f"{name} deleted.")
