"""Authentication and authorization dependencies.

``get_identity`` decodes the bearer token once per request and never fails:
a missing or bad token just means an anonymous request. The ``ensure_*``
dependencies are the per-route gates built on top of it.
"""
import logging
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from inventory_sales.database import get_db
from inventory_sales.errors import InvalidToken, Unauthorized
from inventory_sales.schemas.auth import Identity
from inventory_sales.services.auth_service import token_from_header, verify_token
from inventory_sales.services.business_service import BusinessService
from inventory_sales.services.product_service import ProductService

logger = logging.getLogger(__name__)


def route_id(request: Request, name: str) -> Optional[int]:
    """Path parameter as an int, or None when it is missing or not numeric."""
    value = request.path_params.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def get_identity(request: Request) -> Optional[Identity]:
    token = token_from_header(request.headers.get("Authorization"))
    if token is None:
        return None
    try:
        return verify_token(token)
    except InvalidToken as e:
        logger.info("Ignoring bearer token on %s %s: %s", request.method, request.url.path, e.message)
        return None


def _deny(request: Request, identity: Optional[Identity]):
    logger.warning(
        "Unauthorized %s %s (user_id=%s)",
        request.method,
        request.url.path,
        identity.id if identity else None,
    )
    return Unauthorized()


async def ensure_logged_in(
    request: Request,
    identity: Optional[Identity] = Depends(get_identity)
) -> Identity:
    if identity is None:
        raise _deny(request, identity)
    return identity


async def ensure_admin(
    request: Request,
    identity: Optional[Identity] = Depends(get_identity)
) -> Identity:
    if identity is None or not identity.is_admin:
        raise _deny(request, identity)
    return identity


async def ensure_correct_user_or_admin(
    request: Request,
    identity: Optional[Identity] = Depends(get_identity)
) -> Identity:
    """Caller is the user named by ``{user_id}`` in the path, or an admin."""
    user_id = route_id(request, "user_id")
    if identity is None or (identity.id != user_id and not identity.is_admin):
        raise _deny(request, identity)
    return identity


async def ensure_product_owner_or_admin(
    request: Request,
    identity: Optional[Identity] = Depends(get_identity),
    db: AsyncSession = Depends(get_db)
) -> Identity:
    """Caller owns the product named by ``{product_id}``, or is an admin.

    The product is looked up with the caller as owner, so someone else's
    product raises NotFound (404) instead of Unauthorized. That keeps other
    users' product ids indistinguishable from ids that do not exist.
    """
    if identity is None:
        raise _deny(request, identity)

    product = await ProductService.get_product(db, identity.id, route_id(request, "product_id"))
    if product.user_id != identity.id and not identity.is_admin:
        raise _deny(request, identity)
    return identity


async def ensure_business_user_or_admin(
    request: Request,
    identity: Optional[Identity] = Depends(get_identity),
    db: AsyncSession = Depends(get_db)
) -> Identity:
    """Caller owns the business named by ``{business_id}``, or is an admin.

    Same owner-scoped lookup (and 404 for other people's businesses) as
    ``ensure_product_owner_or_admin``.
    """
    if identity is None:
        raise _deny(request, identity)

    business = await BusinessService.get_business(db, identity.id, route_id(request, "business_id"))
    if business.user_id != identity.id and not identity.is_admin:
        raise _deny(request, identity)
    return identity
