from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

import structlog

from src.application.interfaces.property_repository import PropertyRepository
from src.domain.entities.property import PropertyImage, PropertyTrace
from src.domain.exceptions import PropertyImageNotFoundError, PropertyNotFoundError

logger = structlog.get_logger(__name__)


@dataclass
class AddPropertyImageInput:
    property_id: str
    file: str
    enabled: bool = True


@dataclass
class ReplacePropertyImageInput:
    property_id: str
    image_id: str
    file: str
    enabled: bool = True


@dataclass
class AddPropertyTraceInput:
    property_id: str
    date_sale: datetime
    name: str
    value: Decimal
    tax: Decimal


class _PropertyScoped:
    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def _require_property(self, property_id: str) -> None:
        if await self._property_repo.get_by_id(property_id) is None:
            raise PropertyNotFoundError(property_id)

    async def _require_image(self, property_id: str, image_id: str) -> PropertyImage:
        image = await self._property_repo.get_image(image_id)
        if image is None or image.id_property != property_id:
            raise PropertyImageNotFoundError(image_id)
        return image


class AddPropertyImage(_PropertyScoped):
    """Use case: Attach a new image to an existing property's gallery."""

    async def execute(self, input_data: AddPropertyImageInput) -> PropertyImage:
        await self._require_property(input_data.property_id)
        image = await self._property_repo.add_image(
            PropertyImage(
                id_property=input_data.property_id,
                file=input_data.file,
                enabled=input_data.enabled,
            )
        )
        logger.info(
            "property_image_added",
            property_id=input_data.property_id,
            image_id=image.id_property_image,
        )
        return image


class ReplacePropertyImage(_PropertyScoped):
    async def execute(self, input_data: ReplacePropertyImageInput) -> PropertyImage:
        image = await self._require_image(input_data.property_id, input_data.image_id)
        image.file = input_data.file
        image.enabled = input_data.enabled

        replaced = await self._property_repo.replace_image(image)
        if replaced is None:
            raise PropertyImageNotFoundError(input_data.image_id)
        logger.info("property_image_replaced", image_id=input_data.image_id, enabled=image.enabled)
        return replaced


class DeletePropertyImage(_PropertyScoped):
    async def execute(self, property_id: str, image_id: str) -> bool:
        image = await self._property_repo.get_image(image_id)
        if image is None or image.id_property != property_id:
            return False
        deleted = await self._property_repo.delete_image(image_id)
        if deleted:
            logger.info("property_image_deleted", property_id=property_id, image_id=image_id)
        return deleted


class GetPropertyImages(_PropertyScoped):
    """Use case: List the enabled images of a property in insertion order."""

    async def execute(self, property_id: str) -> list[PropertyImage]:
        await self._require_property(property_id)
        return await self._property_repo.get_images(property_id, enabled_only=True)


class AddPropertyTrace(_PropertyScoped):
    """Use case: Append an entry to a property's sale ledger."""

    async def execute(self, input_data: AddPropertyTraceInput) -> PropertyTrace:
        await self._require_property(input_data.property_id)
        trace = await self._property_repo.add_trace(
            PropertyTrace(
                id_property=input_data.property_id,
                date_sale=input_data.date_sale,
                name=input_data.name,
                value=input_data.value,
                tax=input_data.tax,
            )
        )
        logger.info(
            "property_trace_added",
            property_id=input_data.property_id,
            trace_id=trace.id_property_trace,
            trace_name=trace.name,
        )
        return trace


class GetPropertyTraces(_PropertyScoped):
    """Use case: Return the full sale ledger in insertion order (not sorted by sale date)."""

    async def execute(self, property_id: str) -> list[PropertyTrace]:
        await self._require_property(property_id)
        return await self._property_repo.get_traces(property_id)
