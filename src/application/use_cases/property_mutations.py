from dataclasses import asdict, dataclass
from decimal import Decimal

import structlog

from src.application.interfaces.property_repository import PropertyRepository
from src.domain.entities.property import Property, apply_patch
from src.domain.exceptions import PropertyNotFoundError

logger = structlog.get_logger(__name__)


@dataclass
class CreatePropertyInput:
    name: str
    address: str
    price: Decimal
    year: int
    id_owner: str
    code_internal: str = ""
    enabled: bool = True


@dataclass
class UpdatePropertyInput:
    """Partial update: fields left as None keep their stored value."""

    property_id: str
    name: str | None = None
    address: str | None = None
    price: Decimal | None = None
    code_internal: str | None = None
    year: int | None = None
    id_owner: str | None = None
    enabled: bool | None = None


class CreateProperty:
    """Use case: Insert a new property. The owner reference is not checked."""

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, input_data: CreatePropertyInput) -> Property:
        prop = Property(
            name=input_data.name,
            address=input_data.address,
            price=input_data.price,
            code_internal=input_data.code_internal,
            year=input_data.year,
            id_owner=input_data.id_owner,
            enabled=input_data.enabled,
        )
        created = await self._property_repo.create(prop)
        logger.info("property_created", property_id=created.id_property, owner_id=created.id_owner)
        return created


class UpdateProperty:
    """
    Use case: Merge the supplied fields onto a stored property.

    Always writes, so ``updated_at`` moves forward even when no visible field
    changed.
    """

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, input_data: UpdatePropertyInput) -> Property:
        existing = await self._property_repo.get_by_id(input_data.property_id)
        if existing is None:
            raise PropertyNotFoundError(input_data.property_id)

        changes = asdict(input_data)
        changes.pop("property_id")
        applied = apply_patch(existing, changes)

        updated = await self._property_repo.replace(existing)
        if updated is None:
            # Deleted between the read and the write
            raise PropertyNotFoundError(input_data.property_id)

        logger.info("property_updated", property_id=updated.id_property, fields=applied)
        return updated


class SetPropertyStatus:
    """Use case: Enable or disable a property."""

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._update = UpdateProperty(property_repo)

    async def execute(self, property_id: str, enabled: bool) -> Property:
        return await self._update.execute(UpdatePropertyInput(property_id=property_id, enabled=enabled))


class DeleteProperty:
    """
    Use case: Hard-delete a property.

    Images, traces and the owner are left untouched. Returns False when no
    property had the given id.
    """

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, property_id: str) -> bool:
        deleted = await self._property_repo.delete(property_id)
        if deleted:
            logger.info("property_deleted", property_id=property_id)
        return deleted
