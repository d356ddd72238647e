from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from inventory_sales.api.dependencies import ensure_admin, ensure_correct_user_or_admin
from inventory_sales.database import get_db
from inventory_sales.schemas.auth import Identity
from inventory_sales.schemas.common import MessageResponse
from inventory_sales.schemas.user import (
    SalesInfoResponse,
    UserBusinessSalesResponse,
    UserEnvelope,
    UserListResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    UserSalesResponse,
    UserUpdate,
)
from inventory_sales.services.auth_service import create_token
from inventory_sales.services.user_service import UserService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserEnvelope, response_model_exclude_none=True, status_code=201)
async def register(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user and return it with a token."""
    user = await UserService.register(db, user_data)
    logger.info("Registered user id=%s username=%s", user.id, user.username)
    return UserEnvelope(user=UserResponse.model_validate(user), token=create_token(user))


@router.post("/login", response_model=UserEnvelope, response_model_exclude_none=True)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    user = await UserService.authenticate(db, credentials.username, credentials.password)
    logger.info("User id=%s logged in", user.id)
    return UserEnvelope(user=UserResponse.model_validate(user), token=create_token(user))


@router.get("", response_model=UserListResponse, dependencies=[Depends(ensure_admin)])
async def list_users(db: AsyncSession = Depends(get_db)):
    """List all users. Admin only."""
    users = await UserService.get_all(db)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=UserEnvelope, response_model_exclude_none=True,
            dependencies=[Depends(ensure_correct_user_or_admin)])
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    user = await UserService.get_user(db, user_id)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.patch("/{user_id}", response_model=UserEnvelope, response_model_exclude_none=True)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    identity: Identity = Depends(ensure_correct_user_or_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update a user.

    A user renaming themselves gets a fresh token alongside the user, since the
    old one still carries the previous username. Admin edits never reissue.
    """
    user = await UserService.update_user(db, user_id, user_data)
    logger.info("Updated user id=%s fields=%s", user_id, sorted(user_data.model_fields_set))

    if (
        user_data.username
        and user_data.username != identity.username
        and identity.id == user_id
    ):
        return UserEnvelope(user=UserResponse.model_validate(user), token=create_token(user))
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse,
               dependencies=[Depends(ensure_correct_user_or_admin)])
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    username = await UserService.delete_user(db, user_id)
    logger.info("Deleted user id=%s", user_id)
    return MessageResponse(message=f"{username} deleted.")


@router.get("/{user_id}/sales", response_model=UserSalesResponse,
            dependencies=[Depends(ensure_correct_user_or_admin)])
async def get_user_sales(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    """All products of a user with their direct sales."""
    rows = await UserService.get_sales(db, user_id)
    return UserSalesResponse(user_sales=rows)


@router.get("/{user_id}/businessSales", response_model=UserBusinessSalesResponse,
            dependencies=[Depends(ensure_correct_user_or_admin)])
async def get_user_business_sales(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    rows = await UserService.get_business_sales(db, user_id)
    return UserBusinessSalesResponse(business_sales=rows)


@router.get("/{user_id}/allSalesInfo", response_model=SalesInfoResponse,
            dependencies=[Depends(ensure_correct_user_or_admin)])
async def get_all_sales_info(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Direct and business sales of a user, ordered by sale date."""
    rows = await UserService.get_all_sales_info(db, user_id)
    return SalesInfoResponse(sales=rows)
