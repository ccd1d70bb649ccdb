from abc import ABC, abstractmethod

from src.domain.entities.paged_list import PagedList
from src.domain.entities.property import Property, PropertyImage, PropertyTrace
from src.domain.query.property_query import PropertyQueryParameters


class PropertyRepository(ABC):
    """Port for the property, image and trace collections."""

    # ---- Properties ---------------------------------------------------------

    @abstractmethod
    async def query(self, params: PropertyQueryParameters) -> PagedList[Property]:
        """Filter, count, sort and page properties. Related data is not attached."""
        ...

    @abstractmethod
    async def get_by_id(self, property_id: str) -> Property | None:
        ...

    @abstractmethod
    async def create(self, prop: Property) -> Property:
        """Insert and return the property with its store-assigned id."""
        ...

    @abstractmethod
    async def replace(self, prop: Property) -> Property | None:
        """Overwrite the stored property and refresh ``updated_at``. None if missing."""
        ...

    @abstractmethod
    async def delete(self, property_id: str) -> bool:
        ...

    # ---- Images -------------------------------------------------------------

    @abstractmethod
    async def add_image(self, image: PropertyImage) -> PropertyImage:
        ...

    @abstractmethod
    async def get_image(self, image_id: str) -> PropertyImage | None:
        ...

    @abstractmethod
    async def replace_image(self, image: PropertyImage) -> PropertyImage | None:
        ...

    @abstractmethod
    async def delete_image(self, image_id: str) -> bool:
        ...

    @abstractmethod
    async def get_images(self, property_id: str, *, enabled_only: bool = True) -> list[PropertyImage]:
        """Images of a property in insertion order."""
        ...

    # ---- Traces -------------------------------------------------------------

    @abstractmethod
    async def add_trace(self, trace: PropertyTrace) -> PropertyTrace:
        ...

    @abstractmethod
    async def get_traces(self, property_id: str) -> list[PropertyTrace]:
        """The full sale ledger of a property in insertion order."""
        ...
