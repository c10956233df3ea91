from typing import Optional
from uuid import UUID

from fastapi import Header, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.use_cases.batch import BatchRunner
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_batch_runner() -> BatchRunner:
    return BatchRunner(
        max_size=ApplicationConfig.BATCH_MAX_SIZE,
        chunk_size=ApplicationConfig.BATCH_CHUNK_SIZE,
    )


async def get_current_actor(
    x_user_id: Optional[str] = Header(default=None),
) -> Optional[UUID]:
    """
    Dependency reading the acting user from the X-User-Id header.

    Returns:
        UUID of the acting user, or None when the header is absent

    Raises:
        ClientError: 400 if the header is not a UUID
    """
    if x_user_id is None:
        return None
    try:
        return UUID(x_user_id)
    except ValueError:
        raise ClientError(
            Error("INVALID_USER_ID", "Invalid X-User-Id header"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
