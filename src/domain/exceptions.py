"""
Error taxonomy for the catalog.

Not-found errors are surfaced to callers and never retried. Store errors mark
transient infrastructure failures; retry policy belongs to the caller.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class NotFoundError(CatalogError):
    entity: str = "Resource"

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"{self.entity} {entity_id} not found.")


class PropertyNotFoundError(NotFoundError):
    entity = "Property"


class OwnerNotFoundError(NotFoundError):
    entity = "Owner"


class PropertyImageNotFoundError(NotFoundError):
    entity = "Property image"


class InvalidArgumentError(CatalogError):
    """Raised when a filter or payload is malformed before reaching the store."""


class StoreError(CatalogError):
    """Base class for infrastructure failures of the entity store."""


class StoreUnavailableError(StoreError):
    pass


class StoreTimeoutError(StoreError):
    pass
