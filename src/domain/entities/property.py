from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Owner:
    """The person or entity a listing belongs to. Lives independently of its listings."""

    id_owner: str = ""
    name: str = ""
    address: str = ""
    photo: str = ""
    birthday: date | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass
class PropertyImage:
    id_property_image: str = ""
    id_property: str = ""
    file: str = ""
    enabled: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class PropertyTrace:
    """One entry of a listing's append-only sale ledger."""

    id_property_trace: str = ""
    id_property: str = ""
    date_sale: datetime = field(default_factory=_utcnow)
    name: str = ""
    value: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class Property:
    """
    A real-estate listing.

    ``owner``, ``images`` and ``traces`` live in other collections and are never
    persisted with the listing. They stay ``None`` until HydrateProperty fills
    them in.
    """

    # Identity (assigned by the store on insert)
    id_property: str = ""

    name: str = ""
    address: str = ""
    price: Decimal = Decimal("0")
    code_internal: str = ""
    year: int = 0
    id_owner: str = ""
    enabled: bool = True

    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # Navigation fields
    owner: Owner | None = field(default=None, compare=False)
    images: list[PropertyImage] | None = field(default=None, compare=False)
    traces: list[PropertyTrace] | None = field(default=None, compare=False)

    @property
    def main_image(self) -> str | None:
        """File of the first enabled image, the listing's thumbnail."""
        if not self.images:
            return None
        for image in self.images:
            if image.enabled:
                return image.file
        return None


def apply_patch(entity: Any, changes: dict[str, Any]) -> list[str]:
    """
    Merge explicitly supplied fields onto ``entity``.

    Keys whose value is ``None`` are skipped; zero values such as ``False`` or
    ``0`` are applied. Returns the names of the fields that were written.
    """
    allowed = {f.name for f in fields(entity)}
    applied: list[str] = []
    for name, value in changes.items():
        if value is None:
            continue
        if name not in allowed:
            raise AttributeError(f"{type(entity).__name__} has no field {name!r}")
        setattr(entity, name, value)
        applied.append(name)
    return applied
