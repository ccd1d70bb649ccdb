from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from src.domain.exceptions import InvalidArgumentError
from src.domain.query.predicates import Equals, Predicate, RangeMatch, SubstringMatch


class PropertySortField(str, Enum):
    """Fields a property query may be ordered by."""

    NAME = "name"
    ADDRESS = "address"
    PRICE = "price"
    YEAR = "year"
    CODE_INTERNAL = "code_internal"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    @classmethod
    def parse(cls, raw: str | None) -> "PropertySortField | None":
        """Resolve ``price``, ``createdAt``, ``created_at`` etc. Unknown keys give None."""
        if raw is None:
            return None
        key = raw.strip().replace("_", "").replace("-", "").lower()
        if not key:
            return None
        for member in cls:
            if member.value.replace("_", "") == key:
                return member
        return None


DEFAULT_SORT_FIELD = PropertySortField.CREATED_AT
DEFAULT_SORT_DESCENDING = True


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class PropertyQueryParameters:
    """
    Optional filters plus the pagination cursor for a property query.

    Blank strings count as absent. ``enabled=None`` means "any visibility".
    The engine does not check ``min_price <= max_price``; an inverted range
    matches nothing.
    """

    name: str | None = None
    address: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    enabled: bool | None = None
    id_owner: str | None = None
    code_internal: str | None = None
    year: int | None = None

    sort_by: str | None = None
    sort_descending: bool = False

    page_number: int = 1
    page_size: int = 10

    # Related data to attach to each row of the page
    include_owner: bool = False
    include_images: bool = False
    include_traces: bool = False

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise InvalidArgumentError(f"page_number must be >= 1, got {self.page_number}")
        if self.page_size < 1:
            raise InvalidArgumentError(f"page_size must be >= 1, got {self.page_size}")

    @property
    def skip(self) -> int:
        return (self.page_number - 1) * self.page_size

    def predicates(self) -> list[Predicate]:
        """Return one predicate per filter that is actually present."""
        result: list[Predicate] = []

        name = _clean(self.name)
        if name is not None:
            result.append(SubstringMatch("name", name))

        address = _clean(self.address)
        if address is not None:
            result.append(SubstringMatch("address", address))

        if self.min_price is not None or self.max_price is not None:
            result.append(RangeMatch("price", lower=self.min_price, upper=self.max_price))

        if self.enabled is not None:
            result.append(Equals("enabled", self.enabled))

        id_owner = _clean(self.id_owner)
        if id_owner is not None:
            result.append(Equals("id_owner", id_owner))

        code_internal = _clean(self.code_internal)
        if code_internal is not None:
            result.append(Equals("code_internal", code_internal))

        if self.year is not None:
            result.append(Equals("year", self.year))

        return result

    def sort(self) -> tuple[PropertySortField, bool]:
        """Resolve (field, descending); unknown or missing keys use newest-first."""
        sort_field = PropertySortField.parse(self.sort_by)
        if sort_field is None:
            return DEFAULT_SORT_FIELD, DEFAULT_SORT_DESCENDING
        return sort_field, self.sort_descending
