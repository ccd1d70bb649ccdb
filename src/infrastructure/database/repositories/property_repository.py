import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.property_repository import PropertyRepository
from src.domain.entities.paged_list import PagedList
from src.domain.entities.property import Property, PropertyImage, PropertyTrace
from src.domain.query.property_query import PropertyQueryParameters
from src.infrastructure.database.models import (
    PropertyImageModel,
    PropertyModel,
    PropertyTraceModel,
)
from src.infrastructure.database.query_compiler import compile_predicates, order_by
from src.infrastructure.database.store_errors import translate_store_errors


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # Some backends (SQLite) hand back naive datetimes for timezone-aware columns
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def _to_domain(model: PropertyModel) -> Property:
    return Property(
        id_property=model.id,
        name=model.name,
        address=model.address,
        price=model.price,
        code_internal=model.code_internal,
        year=model.year,
        id_owner=model.id_owner,
        enabled=model.enabled,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def _image_to_domain(model: PropertyImageModel) -> PropertyImage:
    return PropertyImage(
        id_property_image=model.id,
        id_property=model.id_property,
        file=model.file,
        enabled=model.enabled,
        created_at=as_utc(model.created_at),
    )


def _trace_to_domain(model: PropertyTraceModel) -> PropertyTrace:
    return PropertyTrace(
        id_property_trace=model.id,
        id_property=model.id_property,
        date_sale=as_utc(model.date_sale),
        name=model.name,
        value=model.value,
        tax=model.tax,
        created_at=as_utc(model.created_at),
    )


class SqlAlchemyPropertyRepository(PropertyRepository):
    """SQLAlchemy implementation for the properties, propertyImages and propertyTraces tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # ---- Properties ---------------------------------------------------------

    @translate_store_errors
    async def query(self, params: PropertyQueryParameters) -> PagedList[Property]:
        clause = compile_predicates(params.predicates())

        count_query = select(func.count()).select_from(PropertyModel)
        query = select(PropertyModel)
        if clause is not None:
            count_query = count_query.where(clause)
            query = query.where(clause)

        sort_field, descending = params.sort()
        query = (
            query.order_by(*order_by(sort_field, descending))
            .offset(params.skip)
            .limit(params.page_size)
        )

        # Count and page are separate reads; no snapshot is held between them.
        count_result = await self._session.execute(count_query)
        total = count_result.scalar_one()

        # Past the last page: no fetch, so an unbounded offset never reaches the driver
        if params.skip >= total:
            return PagedList(
                items=[],
                total_count=total,
                current_page=params.page_number,
                page_size=params.page_size,
            )

        result = await self._session.execute(query)
        models = result.scalars().all()

        return PagedList(
            items=[_to_domain(m) for m in models],
            total_count=total,
            current_page=params.page_number,
            page_size=params.page_size,
        )

    @translate_store_errors
    async def get_by_id(self, property_id: str) -> Property | None:
        model = await self._session.get(PropertyModel, property_id)
        return _to_domain(model) if model is not None else None

    @translate_store_errors
    async def create(self, prop: Property) -> Property:
        prop.id_property = _new_id()
        self._session.add(
            PropertyModel(
                id=prop.id_property,
                name=prop.name,
                address=prop.address,
                price=prop.price,
                code_internal=prop.code_internal,
                year=prop.year,
                id_owner=prop.id_owner,
                enabled=prop.enabled,
                created_at=prop.created_at,
                updated_at=prop.updated_at,
            )
        )
        await self._session.flush()
        return prop

    @translate_store_errors
    async def replace(self, prop: Property) -> Property | None:
        prop.updated_at = _utcnow()
        result = await self._session.execute(
            update(PropertyModel)
            .where(PropertyModel.id == prop.id_property)
            .values(
                name=prop.name,
                address=prop.address,
                price=prop.price,
                code_internal=prop.code_internal,
                year=prop.year,
                id_owner=prop.id_owner,
                enabled=prop.enabled,
                updated_at=prop.updated_at,
            )
        )
        return prop if result.rowcount > 0 else None

    @translate_store_errors
    async def delete(self, property_id: str) -> bool:
        result = await self._session.execute(
            delete(PropertyModel).where(PropertyModel.id == property_id)
        )
        return result.rowcount > 0

    # ---- Images -------------------------------------------------------------

    @translate_store_errors
    async def add_image(self, image: PropertyImage) -> PropertyImage:
        image.id_property_image = _new_id()
        self._session.add(
            PropertyImageModel(
                id=image.id_property_image,
                id_property=image.id_property,
                file=image.file,
                enabled=image.enabled,
                created_at=image.created_at,
            )
        )
        await self._session.flush()
        return image

    @translate_store_errors
    async def get_image(self, image_id: str) -> PropertyImage | None:
        result = await self._session.execute(
            select(PropertyImageModel).where(PropertyImageModel.id == image_id)
        )
        model = result.scalar_one_or_none()
        return _image_to_domain(model) if model is not None else None

    @translate_store_errors
    async def replace_image(self, image: PropertyImage) -> PropertyImage | None:
        result = await self._session.execute(
            update(PropertyImageModel)
            .where(PropertyImageModel.id == image.id_property_image)
            .values(id_property=image.id_property, file=image.file, enabled=image.enabled)
        )
        return image if result.rowcount > 0 else None

    @translate_store_errors
    async def delete_image(self, image_id: str) -> bool:
        result = await self._session.execute(
            delete(PropertyImageModel).where(PropertyImageModel.id == image_id)
        )
        return result.rowcount > 0

    @translate_store_errors
    async def get_images(self, property_id: str, *, enabled_only: bool = True) -> list[PropertyImage]:
        query = select(PropertyImageModel).where(PropertyImageModel.id_property == property_id)
        if enabled_only:
            query = query.where(PropertyImageModel.enabled.is_(True))
        result = await self._session.execute(query.order_by(PropertyImageModel.seq.asc()))
        return [_image_to_domain(m) for m in result.scalars().all()]

    # ---- Traces -------------------------------------------------------------

    @translate_store_errors
    async def add_trace(self, trace: PropertyTrace) -> PropertyTrace:
        trace.id_property_trace = _new_id()
        self._session.add(
            PropertyTraceModel(
                id=trace.id_property_trace,
                id_property=trace.id_property,
                date_sale=trace.date_sale,
                name=trace.name,
                value=trace.value,
                tax=trace.tax,
                created_at=trace.created_at,
            )
        )
        await self._session.flush()
        return trace

    @translate_store_errors
    async def get_traces(self, property_id: str) -> list[PropertyTrace]:
        result = await self._session.execute(
            select(PropertyTraceModel)
            .where(PropertyTraceModel.id_property == property_id)
            .order_by(PropertyTraceModel.seq.asc())
        )
        return [_trace_to_domain(m) for m in result.scalars().all()]
