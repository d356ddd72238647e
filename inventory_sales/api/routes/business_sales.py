from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from inventory_sales.api.dependencies import ensure_business_user_or_admin
from inventory_sales.database import get_db
from inventory_sales.schemas.business_sale import (
    BusinessSaleCreate,
    BusinessSaleDetailEnvelope,
    BusinessSaleEnvelope,
    BusinessSaleListResponse,
    BusinessSaleResponse,
    BusinessSaleUpdate,
)
from inventory_sales.schemas.common import MessageResponse
from inventory_sales.services.business_sale_service import BusinessSaleService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/businesses/{business_id}/businessSales",
    tags=["business sales"],
    dependencies=[Depends(ensure_business_user_or_admin)],
)


@router.post("", response_model=BusinessSaleEnvelope, status_code=201)
async def create_business_sale(
    business_id: int,
    sale_data: BusinessSaleCreate,
    db: AsyncSession = Depends(get_db)
):
    business_sale = await BusinessSaleService.create_business_sale(db, business_id, sale_data)
    logger.info("Created business sale id=%s for business_id=%s", business_sale.id, business_id)
    return BusinessSaleEnvelope(business_sale=BusinessSaleResponse.model_validate(business_sale))


@router.get("", response_model=BusinessSaleListResponse)
async def list_business_sales(
    business_id: int,
    db: AsyncSession = Depends(get_db)
):
    rows = await BusinessSaleService.list_business_sales(db, business_id)
    return BusinessSaleListResponse(business_sales=rows)


@router.get("/{business_sale_id}", response_model=BusinessSaleDetailEnvelope)
async def get_business_sale(
    business_id: int,
    business_sale_id: int,
    db: AsyncSession = Depends(get_db)
):
    row = await BusinessSaleService.get_business_sale(db, business_id, business_sale_id)
    return BusinessSaleDetailEnvelope(business_sale=row)


@router.patch("/{business_sale_id}", response_model=BusinessSaleEnvelope)
async def update_business_sale(
    business_id: int,
    business_sale_id: int,
    sale_data: BusinessSaleUpdate,
    db: AsyncSession = Depends(get_db)
):
    business_sale = await BusinessSaleService.update_business_sale(
        db, business_id, business_sale_id, sale_data
    )
    logger.info("Updated business sale id=%s fields=%s", business_sale_id, sorted(sale_data.model_fields_set))
    return BusinessSaleEnvelope(business_sale=BusinessSaleResponse.model_validate(business_sale))


@router.delete("/{business_sale_id}", response_model=MessageResponse)
async def delete_business_sale(
    business_id: int,
    business_sale_id: int,
    db: AsyncSession = Depends(get_db)
):
    await BusinessSaleService.delete_business_sale(db, business_id, business_sale_id)
    logger.info("Deleted business sale id=%s of business_id=%s", business_sale_id, business_id)
    return MessageResponse(message=f"Business sale with ID of: {business_sale_id} deleted.")
