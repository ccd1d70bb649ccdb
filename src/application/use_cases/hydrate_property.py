from dataclasses import dataclass

import structlog

from src.application.interfaces.owner_repository import OwnerRepository
from src.application.interfaces.property_repository import PropertyRepository
from src.domain.entities.property import Property
from src.domain.exceptions import PropertyNotFoundError

logger = structlog.get_logger(__name__)


@dataclass
class HydratePropertyInput:
    property_id: str
    include_owner: bool = True
    include_images: bool = True
    include_traces: bool = True


class HydrateProperty:
    """
    Use case: Load a property and attach its owner, gallery and sale ledger.

    The related collections are read with independent lookups and no shared
    snapshot. Only a missing base property is an error; a failed related
    lookup is logged and leaves that part empty.

    Limitation: the repositories share one request session. On PostgreSQL a
    failed statement aborts that transaction, so the lookups after it fail
    too (and are degraded the same way) and the request's final commit is
    rolled back. Degradation is per lookup only for failures that leave the
    transaction usable, such as a dropped connection being replaced by the pool.
    """

    def __init__(
        self,
        property_repo: PropertyRepository,
        owner_repo: OwnerRepository,
    ) -> None:
        self._property_repo = property_repo
        self._owner_repo = owner_repo

    async def execute(self, input_data: HydratePropertyInput) -> Property:
        prop = await self._property_repo.get_by_id(input_data.property_id)
        if prop is None:
            raise PropertyNotFoundError(input_data.property_id)

        await self.attach(
            prop,
            include_owner=input_data.include_owner,
            include_images=input_data.include_images,
            include_traces=input_data.include_traces,
        )
        return prop

    async def hydrate_many(
        self,
        properties: list[Property],
        *,
        include_owner: bool = False,
        include_images: bool = False,
        include_traces: bool = False,
    ) -> list[Property]:
        # Sequential: the repositories share one session per request.
        for prop in properties:
            await self.attach(
                prop,
                include_owner=include_owner,
                include_images=include_images,
                include_traces=include_traces,
            )
        return properties

    async def attach(
        self,
        prop: Property,
        *,
        include_owner: bool,
        include_images: bool,
        include_traces: bool,
    ) -> None:
        if include_owner:
            prop.owner = None
            if prop.id_owner:
                try:
                    prop.owner = await self._owner_repo.get_by_id(prop.id_owner)
                except Exception:
                    logger.exception(
                        "owner_lookup_failed",
                        property_id=prop.id_property,
                        owner_id=prop.id_owner,
                    )

        if include_images:
            try:
                prop.images = await self._property_repo.get_images(prop.id_property, enabled_only=True)
            except Exception:
                logger.exception("image_lookup_failed", property_id=prop.id_property)
                prop.images = []

        if include_traces:
            try:
                prop.traces = await self._property_repo.get_traces(prop.id_property)
            except Exception:
                logger.exception("trace_lookup_failed", property_id=prop.id_property)
                prop.traces = []
