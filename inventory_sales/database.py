from typing import AsyncIterator, Optional
from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the async engine and session factory for one process.

    Opened on application startup and disposed on shutdown. Tests build their
    own instance against an in-memory database and attach it to the app.
    """

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    def connect(self) -> None:
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, **self.engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created for %s", self.engine.url.render_as_string(hide_password=True))

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None

    async def create_all(self) -> None:
        """Create every table known to the declarative base."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def session(self) -> AsyncIterator[AsyncSession]:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        async with self.session_factory() as session:
            yield session


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the application's database context."""
    database: Database = request.app.state.db
    async for session in database.session():
        yield session
