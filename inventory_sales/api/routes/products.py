from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from inventory_sales.api.dependencies import ensure_correct_user_or_admin
from inventory_sales.database import get_db
from inventory_sales.schemas.common import MessageResponse
from inventory_sales.schemas.product import (
    ProductCreate,
    ProductEnvelope,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from inventory_sales.services.product_service import ProductService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users/{user_id}/products",
    tags=["products"],
    dependencies=[Depends(ensure_correct_user_or_admin)],
)


@router.post("", response_model=ProductEnvelope, status_code=201)
async def create_product(
    user_id: int,
    product_data: ProductCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a product owned by the user in the path."""
    product = await ProductService.create_product(db, user_id, product_data)
    logger.info("Created product id=%s for user_id=%s", product.id, user_id)
    return ProductEnvelope(product=ProductResponse.model_validate(product))


@router.get("", response_model=ProductListResponse)
async def list_products(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    products = await ProductService.list_user_products(db, user_id)
    return ProductListResponse(products=[ProductResponse.model_validate(p) for p in products])


@router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(
    user_id: int,
    product_id: int,
    db: AsyncSession = Depends(get_db)
):
    product = await ProductService.get_product(db, user_id, product_id)
    return ProductEnvelope(product=ProductResponse.model_validate(product))


@router.patch("/{product_id}", response_model=ProductEnvelope)
async def update_product(
    user_id: int,
    product_id: int,
    product_data: ProductUpdate,
    db: AsyncSession = Depends(get_db)
):
    product = await ProductService.update_product(db, user_id, product_id, product_data)
    logger.info("Updated product id=%s fields=%s", product_id, sorted(product_data.model_fields_set))
    return ProductEnvelope(product=ProductResponse.model_validate(product))


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    user_id: int,
    product_id: int,
    db: AsyncSession = Depends(get_db)
):
    name = await ProductService.delete_product(db, user_id, product_id)
    logger.info("Deleted product id=%s of user_id=%s", product_id, user_id)
    return MessageResponse(message=f"{name} deleted.")
