import os

# Must be set before inventory_sales.config is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from inventory_sales.database import Database
from inventory_sales.main import app
from inventory_sales.models import User
from inventory_sales.schemas.auth import Identity
from inventory_sales.schemas.business import BusinessCreate
from inventory_sales.schemas.business_sale import BusinessSaleCreate
from inventory_sales.schemas.product import ProductCreate
from inventory_sales.schemas.sale import SaleCreate
from inventory_sales.schemas.user import UserRegister
from inventory_sales.services.auth_service import create_token
from inventory_sales.services.business_sale_service import BusinessSaleService
from inventory_sales.services.business_service import BusinessService
from inventory_sales.services.product_service import ProductService
from inventory_sales.services.sale_service import SaleService
from inventory_sales.services.user_service import UserService

SALE_DATE = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _enable_sqlite_fk(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def database():
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.connect()
    event.listen(db.engine.sync_engine, "connect", _enable_sqlite_fk)
    await db.create_all()
    yield db
    await db.disconnect()


@pytest.fixture
async def session(database):
    async with database.session_factory() as s:
        yield s


@pytest.fixture
async def seed(database):
    """Three users, a product/sale/business/business sale each for user1 and user2."""
    async with database.session_factory() as s:
        user1 = await UserService.register(s, UserRegister(
            username="user1", password="password1", email="user1@user.com",
            first_name="U1F", last_name="U1L",
        ))
        user2 = await UserService.register(s, UserRegister(
            username="user2", password="password2", email="user2@user.com",
            first_name="U2F", last_name="U2L",
        ))
        user3 = await UserService.register(s, UserRegister(
            username="user3", password="password3", email="user3@user.com",
            first_name="U3F", last_name="U3L",
        ))

        product1 = await ProductService.create_product(s, user1.id, ProductCreate(
            name="Product1", description="Description1", price=100, cost=50,
            sku="SKU1", minutes_to_make=60, type="Type1", quantity=10,
        ))
        product2 = await ProductService.create_product(s, user2.id, ProductCreate(
            name="Product2", description="Description2", price=200, cost=100,
            sku="SKU2", minutes_to_make=120, type="Type2", quantity=20,
        ))

        sale1 = await SaleService.create_sale(s, user1.id, product1.id, SaleCreate(
            quantity_sold=2, sale_price=100, sale_date=SALE_DATE,
        ))
        sale2 = await SaleService.create_sale(s, user2.id, product2.id, SaleCreate(
            quantity_sold=3, sale_price=200, sale_date=SALE_DATE,
        ))

        business1 = await BusinessService.create_business(s, user1.id, BusinessCreate(
            name="Business1", contact_info="b1@business.com",
        ))
        business2 = await BusinessService.create_business(s, user2.id, BusinessCreate(
            name="Business2", contact_info="b2@business.com",
        ))

        business_sale1 = await BusinessSaleService.create_business_sale(s, business1.id, BusinessSaleCreate(
            product_id=product1.id, quantity_sold=1, sale_price=90,
            business_percentage=30, sale_date=SALE_DATE,
        ))
        business_sale2 = await BusinessSaleService.create_business_sale(s, business2.id, BusinessSaleCreate(
            product_id=product2.id, quantity_sold=2, sale_price=180,
            business_percentage=25, sale_date=SALE_DATE,
        ))

        ids = {
            "user1": user1.id,
            "user2": user2.id,
            "user3": user3.id,
            "product1": product1.id,
            "product2": product2.id,
            "sale1": sale1.id,
            "sale2": sale2.id,
            "business1": business1.id,
            "business2": business2.id,
            "business_sale1": business_sale1.id,
            "business_sale2": business_sale2.id,
        }
    return ids


@pytest.fixture
def tokens(seed):
    return {
        "user1": create_token(Identity(id=seed["user1"], username="user1")),
        "user2": create_token(Identity(id=seed["user2"], username="user2")),
        # admin identity that owns nothing
        "admin": create_token(Identity(id=seed["user3"], username="admin", is_admin=True)),
    }


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(database):
    app.state.db = database
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.state.db = None


async def make_admin(database, user_id: int) -> None:
    async with database.session_factory() as s:
        user = await s.get(User, user_id)
        user.is_admin = True
        await s.commit()
