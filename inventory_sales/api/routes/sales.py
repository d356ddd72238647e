from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from inventory_sales.api.dependencies import ensure_product_owner_or_admin
from inventory_sales.database import get_db
from inventory_sales.schemas.auth import Identity
from inventory_sales.schemas.common import MessageResponse
from inventory_sales.schemas.sale import (
    ProductSaleEnvelope,
    SaleCreate,
    SaleEnvelope,
    SaleListResponse,
    SaleResponse,
    SaleUpdate,
)
from inventory_sales.services.sale_service import SaleService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products/{product_id}/sales", tags=["sales"])


@router.post("", response_model=SaleEnvelope, status_code=201)
async def create_sale(
    product_id: int,
    sale_data: SaleCreate,
    identity: Identity = Depends(ensure_product_owner_or_admin),
    db: AsyncSession = Depends(get_db)
):
    """Record a direct sale of a product.

    Fails with 409 when more units are sold than the product has in stock.
    """
    sale = await SaleService.create_sale(db, identity.id, product_id, sale_data)
    logger.info("Created sale id=%s for product_id=%s", sale.id, product_id)
    return SaleEnvelope(sale=SaleResponse.model_validate(sale))


@router.get("", response_model=SaleListResponse, dependencies=[Depends(ensure_product_owner_or_admin)])
async def list_sales(
    product_id: int,
    db: AsyncSession = Depends(get_db)
):
    rows = await SaleService.list_product_sales(db, product_id)
    return SaleListResponse(sales=rows)


@router.get("/{sale_id}", response_model=ProductSaleEnvelope,
            dependencies=[Depends(ensure_product_owner_or_admin)])
async def get_sale(
    product_id: int,
    sale_id: int,
    db: AsyncSession = Depends(get_db)
):
    row = await SaleService.get_product_sale(db, product_id, sale_id)
    return ProductSaleEnvelope(sale=row)


@router.patch("/{sale_id}", response_model=SaleEnvelope)
async def update_sale(
    product_id: int,
    sale_id: int,
    sale_data: SaleUpdate,
    identity: Identity = Depends(ensure_product_owner_or_admin),
    db: AsyncSession = Depends(get_db)
):
    sale = await SaleService.update_sale(db, identity.id, product_id, sale_id, sale_data)
    logger.info("Updated sale id=%s fields=%s", sale_id, sorted(sale_data.model_fields_set))
    return SaleEnvelope(sale=SaleResponse.model_validate(sale))


@router.delete("/{sale_id}", response_model=MessageResponse,
               dependencies=[Depends(ensure_product_owner_or_admin)])
async def delete_sale(
    product_id: int,
    sale_id: int,
    db: AsyncSession = Depends(get_db)
):
    await SaleService.delete_sale(db, product_id, sale_id)
    logger.info("Deleted sale id=%s of product_id=%s", sale_id, product_id)
    return MessageResponse(message=f"Sale with ID of: {sale_id} deleted.")
