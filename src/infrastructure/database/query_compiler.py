"""
Compiles domain predicates into SQLAlchemy clauses for the properties table.
"""
from collections.abc import Sequence

from sqlalchemy import ColumnElement, and_
from sqlalchemy.orm import InstrumentedAttribute

from src.domain.query.predicates import Equals, Predicate, RangeMatch, SubstringMatch
from src.domain.query.property_query import PropertySortField
from src.infrastructure.database.models import PropertyModel

_FILTER_COLUMNS: dict[str, InstrumentedAttribute] = {  # type: ignore[type-arg]
    "name": PropertyModel.name,
    "address": PropertyModel.address,
    "price": PropertyModel.price,
    "enabled": PropertyModel.enabled,
    "id_owner": PropertyModel.id_owner,
    "code_internal": PropertyModel.code_internal,
    "year": PropertyModel.year,
}

_SORT_COLUMNS: dict[PropertySortField, InstrumentedAttribute] = {  # type: ignore[type-arg]
    PropertySortField.NAME: PropertyModel.name,
    PropertySortField.ADDRESS: PropertyModel.address,
    PropertySortField.PRICE: PropertyModel.price,
    PropertySortField.YEAR: PropertyModel.year,
    PropertySortField.CODE_INTERNAL: PropertyModel.code_internal,
    PropertySortField.CREATED_AT: PropertyModel.created_at,
    PropertySortField.UPDATED_AT: PropertyModel.updated_at,
}


class UnknownFilterFieldError(ValueError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Cannot filter properties by unknown field {field!r}.")


def _column(field: str) -> InstrumentedAttribute:  # type: ignore[type-arg]
    try:
        return _FILTER_COLUMNS[field]
    except KeyError:
        raise UnknownFilterFieldError(field) from None


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    column = _column(predicate.field)

    if isinstance(predicate, SubstringMatch):
        # Literal match: % and _ in user input are escaped
        return column.icontains(predicate.value, autoescape=True)

    if isinstance(predicate, RangeMatch):
        bounds = []
        if predicate.lower is not None:
            bounds.append(column >= predicate.lower)
        if predicate.upper is not None:
            bounds.append(column <= predicate.upper)
        if not bounds:
            raise ValueError(f"Range on {predicate.field!r} has no bounds.")
        return and_(*bounds)

    if isinstance(predicate, Equals):
        return column == predicate.value

    raise TypeError(f"Unsupported predicate type: {type(predicate).__name__}")


def compile_predicates(predicates: Sequence[Predicate]) -> ColumnElement[bool] | None:
    """AND all predicates together. Returns None when there is nothing to filter on."""
    if not predicates:
        return None
    return and_(*(compile_predicate(p) for p in predicates))


def order_by(sort_field: PropertySortField, descending: bool) -> list[ColumnElement]:  # type: ignore[type-arg]
    column = _SORT_COLUMNS[sort_field]
    primary = column.desc() if descending else column.asc()
    # Primary key tie-breaker keeps pages disjoint when sort values repeat
    tie_breaker = PropertyModel.id.desc() if descending else PropertyModel.id.asc()
    return [primary, tie_breaker]
