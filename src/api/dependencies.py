"""
FastAPI dependency injection wiring.

One session per request; the repositories and use cases built on it share
that session.
"""
from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.owner_repository import OwnerRepository
from src.application.interfaces.property_repository import PropertyRepository
from src.application.use_cases.hydrate_property import HydrateProperty
from src.application.use_cases.manage_owners import OwnerUseCases
from src.application.use_cases.query_properties import QueryProperties
from src.infrastructure.database.connection import get_db_session
from src.infrastructure.database.repositories.owner_repository import SqlAlchemyOwnerRepository
from src.infrastructure.database.repositories.property_repository import (
    SqlAlchemyPropertyRepository,
)


# ---- Low-level dependencies ------------------------------------------------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_db_session():
        yield session


def get_property_repo(session: AsyncSession = Depends(get_session)) -> PropertyRepository:
    return SqlAlchemyPropertyRepository(session)


def get_owner_repo(session: AsyncSession = Depends(get_session)) -> OwnerRepository:
    return SqlAlchemyOwnerRepository(session)


# ---- Use-case dependencies -------------------------------------------------

def get_hydrate_property_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
    owner_repo: OwnerRepository = Depends(get_owner_repo),
) -> HydrateProperty:
    return HydrateProperty(property_repo, owner_repo)


def get_query_properties_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
    hydrator: HydrateProperty = Depends(get_hydrate_property_use_case),
) -> QueryProperties:
    return QueryProperties(property_repo, hydrator)


def get_owner_use_cases(
    owner_repo: OwnerRepository = Depends(get_owner_repo),
) -> OwnerUseCases:
    return OwnerUseCases(owner_repo)
