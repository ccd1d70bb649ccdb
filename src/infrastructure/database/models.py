"""
SQLAlchemy ORM models.

Each model is an independent collection: there are no foreign keys and no
relationships between them. Images and traces point at their property through
a plain string column, and nothing cascades on delete.
"""
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.connection import Base

# Exact decimal storage for money; never Float
_money = Numeric(18, 2, asdecimal=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PropertyModel(Base):
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str] = mapped_column(String(300), nullable=False)
    price: Mapped[Decimal] = mapped_column(_money, nullable=False)
    code_internal: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    id_owner: Mapped[str] = mapped_column(String(36), nullable=False, default="")
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_name", "name"),
        Index("idx_address", "address"),
        Index("idx_price", "price"),
        Index("idx_enabled", "enabled"),
        Index("idx_idowner", "id_owner"),
        Index("idx_name_address_price", "name", "address", "price"),
    )


class OwnerModel(Base):
    __tablename__ = "owners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str] = mapped_column(String(300), nullable=False)
    photo: Mapped[str] = mapped_column(String(2048), nullable=False, default="")
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_owner_name", "name"),
        Index("idx_owner_address", "address"),
    )


class PropertyImageModel(Base):
    __tablename__ = "propertyImages"

    # seq only records insertion order; id is the public identifier
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    id_property: Mapped[str] = mapped_column(String(36), nullable=False)
    file: Mapped[str] = mapped_column(String(2048), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_image_idproperty_enabled", "id_property", "enabled"),
    )


class PropertyTraceModel(Base):
    __tablename__ = "propertyTraces"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    id_property: Mapped[str] = mapped_column(String(36), nullable=False)
    date_sale: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    value: Mapped[Decimal] = mapped_column(_money, nullable=False)
    tax: Mapped[Decimal] = mapped_column(_money, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_trace_idproperty", "id_property"),
    )
