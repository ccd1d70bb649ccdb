from dataclasses import asdict, dataclass
from datetime import date

import structlog

from src.application.interfaces.owner_repository import OwnerRepository
from src.domain.entities.property import Owner, apply_patch
from src.domain.exceptions import OwnerNotFoundError

logger = structlog.get_logger(__name__)


@dataclass
class OwnerInput:
    name: str
    address: str
    birthday: date
    photo: str = ""


@dataclass
class UpdateOwnerInput:
    owner_id: str
    name: str | None = None
    address: str | None = None
    photo: str | None = None
    birthday: date | None = None


class OwnerUseCases:
    """
    Owner CRUD. Owners have their own lifecycle: deleting one leaves the
    properties that reference it in place.
    """

    def __init__(self, owner_repo: OwnerRepository) -> None:
        self._owner_repo = owner_repo

    async def list_all(self) -> list[Owner]:
        return await self._owner_repo.list_all()

    async def get(self, owner_id: str) -> Owner:
        owner = await self._owner_repo.get_by_id(owner_id)
        if owner is None:
            raise OwnerNotFoundError(owner_id)
        return owner

    async def create(self, input_data: OwnerInput) -> Owner:
        owner = await self._owner_repo.create(
            Owner(
                name=input_data.name,
                address=input_data.address,
                photo=input_data.photo,
                birthday=input_data.birthday,
            )
        )
        logger.info("owner_created", owner_id=owner.id_owner)
        return owner

    async def replace(self, owner_id: str, input_data: OwnerInput) -> Owner:
        owner = await self.get(owner_id)
        owner.name = input_data.name
        owner.address = input_data.address
        owner.photo = input_data.photo
        owner.birthday = input_data.birthday
        return await self._save(owner, fields=["name", "address", "photo", "birthday"])

    async def update(self, input_data: UpdateOwnerInput) -> Owner:
        owner = await self.get(input_data.owner_id)
        changes = asdict(input_data)
        changes.pop("owner_id")
        applied = apply_patch(owner, changes)
        return await self._save(owner, fields=applied)

    async def delete(self, owner_id: str) -> bool:
        deleted = await self._owner_repo.delete(owner_id)
        if deleted:
            logger.info("owner_deleted", owner_id=owner_id)
        return deleted

    async def _save(self, owner: Owner, *, fields: list[str]) -> Owner:
        saved = await self._owner_repo.replace(owner)
        if saved is None:
            raise OwnerNotFoundError(owner.id_owner)
        logger.info("owner_updated", owner_id=owner.id_owner, fields=fields)
        return saved
