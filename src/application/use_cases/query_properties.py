import structlog

from src.application.interfaces.property_repository import PropertyRepository
from src.application.use_cases.hydrate_property import HydrateProperty
from src.domain.entities.paged_list import PagedList
from src.domain.entities.property import Property
from src.domain.query.property_query import PropertyQueryParameters

logger = structlog.get_logger(__name__)


class QueryProperties:
    """
    Use case: Return one page of properties matching the given filters.

    The total count and the page are read in two separate statements without a
    snapshot, so a concurrent write between them can leave ``total_count``
    slightly stale relative to the items.
    """

    def __init__(self, property_repo: PropertyRepository, hydrator: HydrateProperty) -> None:
        self._property_repo = property_repo
        self._hydrator = hydrator

    async def execute(self, params: PropertyQueryParameters) -> PagedList[Property]:
        page = await self._property_repo.query(params)

        if params.include_owner or params.include_images or params.include_traces:
            await self._hydrator.hydrate_many(
                page.items,
                include_owner=params.include_owner,
                include_images=params.include_images,
                include_traces=params.include_traces,
            )

        logger.debug(
            "properties_queried",
            page=page.current_page,
            page_size=page.page_size,
            returned=len(page.items),
            total_count=page.total_count,
        )
        return page
