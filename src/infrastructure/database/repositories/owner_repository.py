import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.owner_repository import OwnerRepository
from src.domain.entities.property import Owner
from src.infrastructure.database.models import OwnerModel
from src.infrastructure.database.repositories.property_repository import as_utc
from src.infrastructure.database.store_errors import translate_store_errors


def _to_domain(model: OwnerModel) -> Owner:
    return Owner(
        id_owner=model.id,
        name=model.name,
        address=model.address,
        photo=model.photo,
        birthday=model.birthday,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


class SqlAlchemyOwnerRepository(OwnerRepository):
    """SQLAlchemy-backed implementation of OwnerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_store_errors
    async def get_by_id(self, owner_id: str) -> Owner | None:
        model = await self._session.get(OwnerModel, owner_id)
        return _to_domain(model) if model is not None else None

    @translate_store_errors
    async def list_all(self) -> list[Owner]:
        result = await self._session.execute(
            select(OwnerModel).order_by(OwnerModel.name.asc(), OwnerModel.id.asc())
        )
        return [_to_domain(m) for m in result.scalars().all()]

    @translate_store_errors
    async def create(self, owner: Owner) -> Owner:
        owner.id_owner = str(uuid.uuid4())
        self._session.add(
            OwnerModel(
                id=owner.id_owner,
                name=owner.name,
                address=owner.address,
                photo=owner.photo,
                birthday=owner.birthday,
                created_at=owner.created_at,
                updated_at=owner.updated_at,
            )
        )
        await self._session.flush()
        return owner

    @translate_store_errors
    async def replace(self, owner: Owner) -> Owner | None:
        owner.updated_at = datetime.now(timezone.utc)
        result = await self._session.execute(
            update(OwnerModel)
            .where(OwnerModel.id == owner.id_owner)
            .values(
                name=owner.name,
                address=owner.address,
                photo=owner.photo,
                birthday=owner.birthday,
                updated_at=owner.updated_at,
            )
        )
        return owner if result.rowcount > 0 else None

    @translate_store_errors
    async def delete(self, owner_id: str) -> bool:
        result = await self._session.execute(delete(OwnerModel).where(OwnerModel.id == owner_id))
        return result.rowcount > 0
