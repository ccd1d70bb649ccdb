from abc import ABC, abstractmethod

from src.domain.entities.property import Owner


class OwnerRepository(ABC):
    """Port for persisting and querying owners."""

    @abstractmethod
    async def get_by_id(self, owner_id: str) -> Owner | None:
        ...

    @abstractmethod
    async def list_all(self) -> list[Owner]:
        """Return every owner ordered by name."""
        ...

    @abstractmethod
    async def create(self, owner: Owner) -> Owner:
        ...

    @abstractmethod
    async def replace(self, owner: Owner) -> Owner | None:
        ...

    @abstractmethod
    async def delete(self, owner_id: str) -> bool:
        ...
