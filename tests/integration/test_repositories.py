"""
Integration tests for the SQLAlchemy repositories.

Runs against an in-memory SQLite database through aiosqlite so the real
query compilation, ordering and paging are exercised.
"""
from collections.abc import AsyncGenerator
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.domain.entities.property import Owner, Property, PropertyImage, PropertyTrace
from src.domain.query.property_query import PropertyQueryParameters
from src.infrastructure.database.connection import init_schema
from src.infrastructure.database.repositories.owner_repository import SqlAlchemyOwnerRepository
from src.infrastructure.database.repositories.property_repository import (
    SqlAlchemyPropertyRepository,
)

_EPOCH = datetime(2020, 1, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture()
async def session() -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_schema(engine)
    factory = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    async with factory() as db_session:
        yield db_session
    await engine.dispose()


def _property(index: int, **overrides) -> Property:  # type: ignore[no-untyped-def]
    stamp = _EPOCH + timedelta(days=index)
    defaults = dict(
        name=f"Property {index:02d}",
        address=f"{index} Main Street",
        price=Decimal("100000.00") + index,
        code_internal=f"C-{index:02d}",
        year=2000 + index,
        id_owner="owner-1",
        created_at=stamp,
        updated_at=stamp,
    )
    defaults.update(overrides)
    return Property(**defaults)


async def _seed(repo: SqlAlchemyPropertyRepository, count: int) -> list[Property]:
    return [await repo.create(_property(i)) for i in range(count)]


class TestQuery:
    @pytest.mark.asyncio
    async def test_pages_cover_every_row_exactly_once(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        created = await _seed(repo, 23)

        seen: list[str] = []
        page_number = 1
        while True:
            page = await repo.query(PropertyQueryParameters(page_number=page_number, page_size=5))
            assert page.total_count == 23
            assert page.total_pages == 5
            seen.extend(p.id_property for p in page.items)
            if not page.has_next:
                break
            page_number += 1

        newest_first = sorted(created, key=lambda p: (p.created_at, p.id_property), reverse=True)
        assert seen == [p.id_property for p in newest_first]

    @pytest.mark.asyncio
    async def test_default_order_is_newest_first(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        await _seed(repo, 3)

        page = await repo.query(PropertyQueryParameters())

        assert [p.name for p in page.items] == ["Property 02", "Property 01", "Property 00"]

    @pytest.mark.asyncio
    async def test_ties_on_sort_key_do_not_repeat_across_pages(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        for i in range(6):
            await repo.create(_property(i, price=Decimal("500000.00")))

        first = await repo.query(PropertyQueryParameters(sort_by="price", page_number=1, page_size=3))
        second = await repo.query(PropertyQueryParameters(sort_by="price", page_number=2, page_size=3))

        first_ids = {p.id_property for p in first.items}
        second_ids = {p.id_property for p in second.items}
        assert len(first_ids | second_ids) == 6
        assert first_ids.isdisjoint(second_ids)

    @pytest.mark.asyncio
    async def test_min_price_filter(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        await repo.create(_property(1, name="Luxury Villa Miami", price=Decimal("2500000.00")))
        await repo.create(_property(2, name="Beach House", price=Decimal("850000.00")))

        page = await repo.query(PropertyQueryParameters(min_price=Decimal("1000000")))

        assert page.total_count == 1
        assert [p.name for p in page.items] == ["Luxury Villa Miami"]
        assert page.items[0].price == Decimal("2500000.00")

    @pytest.mark.asyncio
    async def test_name_substring_is_case_insensitive(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        await repo.create(_property(1, name="Luxury Villa Miami"))
        await repo.create(_property(2, name="Downtown Loft"))

        page = await repo.query(PropertyQueryParameters(name="villa"))

        assert [p.name for p in page.items] == ["Luxury Villa Miami"]

    @pytest.mark.asyncio
    async def test_substring_wildcards_are_literal(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        await repo.create(_property(1, name="100% Ocean View"))
        await repo.create(_property(2, name="Garden Flat"))

        assert (await repo.query(PropertyQueryParameters(name="%"))).total_count == 1
        assert (await repo.query(PropertyQueryParameters(name="_"))).total_count == 0

    @pytest.mark.asyncio
    async def test_inverted_price_range_matches_nothing(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        await _seed(repo, 3)

        page = await repo.query(
            PropertyQueryParameters(min_price=Decimal("900000"), max_price=Decimal("100"))
        )

        assert page.items == []
        assert page.total_count == 0
        assert page.total_pages == 0

    @pytest.mark.asyncio
    async def test_enabled_filter(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        await repo.create(_property(1, enabled=True))
        await repo.create(_property(2, enabled=False))

        enabled = await repo.query(PropertyQueryParameters(enabled=True))
        disabled = await repo.query(PropertyQueryParameters(enabled=False))
        everything = await repo.query(PropertyQueryParameters())

        assert [p.name for p in enabled.items] == ["Property 01"]
        assert [p.name for p in disabled.items] == ["Property 02"]
        assert everything.total_count == 2

    @pytest.mark.asyncio
    async def test_page_past_the_end_keeps_the_count(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        await _seed(repo, 4)

        page = await repo.query(PropertyQueryParameters(page_number=10, page_size=3))

        assert page.items == []
        assert page.total_count == 4
        assert page.current_page == 10

    @pytest.mark.asyncio
    async def test_huge_page_number_is_an_empty_page(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        await _seed(repo, 1)

        page = await repo.query(PropertyQueryParameters(page_number=10**18, page_size=100))

        assert page.items == []
        assert page.total_count == 1
        assert page.has_next is False


class TestPropertyWrites:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_round_trips_decimal(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        created = await repo.create(_property(1, price=Decimal("1234567.89")))
        assert created.id_property

        session.expunge_all()
        loaded = await repo.get_by_id(created.id_property)

        assert loaded is not None
        assert loaded.price == Decimal("1234567.89")
        assert loaded.created_at == _EPOCH + timedelta(days=1)
        assert loaded.owner is None
        assert loaded.images is None

    @pytest.mark.asyncio
    async def test_replace_moves_updated_at_forward(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        created = await repo.create(_property(1))
        before = created.updated_at

        created.name = "Renamed"
        replaced = await repo.replace(created)
        assert replaced is not None

        session.expunge_all()
        loaded = await repo.get_by_id(created.id_property)
        assert loaded is not None
        assert loaded.name == "Renamed"
        assert loaded.updated_at > before
        assert loaded.created_at == before

    @pytest.mark.asyncio
    async def test_replace_of_missing_property_returns_none(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        assert await repo.replace(_property(1, id_property="missing")) is None

    @pytest.mark.asyncio
    async def test_delete(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        created = await repo.create(_property(1))

        assert await repo.delete(created.id_property) is True
        assert await repo.delete(created.id_property) is False
        assert await repo.delete("never-existed") is False
        session.expunge_all()
        assert await repo.get_by_id(created.id_property) is None


class TestImagesAndTraces:
    @pytest.mark.asyncio
    async def test_only_enabled_images_in_insertion_order(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        prop = await repo.create(_property(1))
        for file, enabled in [("https://img/a.jpg", True), ("https://img/b.jpg", False), ("https://img/c.jpg", True)]:
            await repo.add_image(PropertyImage(id_property=prop.id_property, file=file, enabled=enabled))

        visible = await repo.get_images(prop.id_property)
        every = await repo.get_images(prop.id_property, enabled_only=False)

        assert [i.file for i in visible] == ["https://img/a.jpg", "https://img/c.jpg"]
        assert len(every) == 3

    @pytest.mark.asyncio
    async def test_image_replace_and_delete(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        prop = await repo.create(_property(1))
        image = await repo.add_image(PropertyImage(id_property=prop.id_property, file="https://img/a.jpg"))

        image.enabled = False
        assert await repo.replace_image(image) is not None
        stored = await repo.get_image(image.id_property_image)
        assert stored is not None
        assert stored.enabled is False

        assert await repo.delete_image(image.id_property_image) is True
        session.expunge_all()
        assert await repo.get_image(image.id_property_image) is None
        assert await repo.delete_image(image.id_property_image) is False

    @pytest.mark.asyncio
    async def test_traces_keep_insertion_order_not_sale_date(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        prop = await repo.create(_property(1))
        for name, sold in [("Resale", 2021), ("Initial Sale", 2015), ("Latest", 2023)]:
            await repo.add_trace(
                PropertyTrace(
                    id_property=prop.id_property,
                    date_sale=datetime(sold, 6, 1, tzinfo=timezone.utc),
                    name=name,
                    value=Decimal("2000000.50"),
                    tax=Decimal("60000.15"),
                )
            )

        session.expunge_all()
        traces = await repo.get_traces(prop.id_property)

        assert [t.name for t in traces] == ["Resale", "Initial Sale", "Latest"]
        assert traces[0].value == Decimal("2000000.50")
        assert traces[0].tax == Decimal("60000.15")

    @pytest.mark.asyncio
    async def test_deleting_property_leaves_related_rows(self, session: AsyncSession) -> None:
        repo = SqlAlchemyPropertyRepository(session)
        prop = await repo.create(_property(1))
        await repo.add_image(PropertyImage(id_property=prop.id_property, file="https://img/a.jpg"))

        await repo.delete(prop.id_property)

        assert len(await repo.get_images(prop.id_property)) == 1


class TestOwnerRepository:
    @pytest.mark.asyncio
    async def test_list_is_ordered_by_name(self, session: AsyncSession) -> None:
        repo = SqlAlchemyOwnerRepository(session)
        for name in ["Maria", "Carlos", "Zoe"]:
            await repo.create(Owner(name=name, address="Somewhere", birthday=date(1980, 1, 1)))

        owners = await repo.list_all()

        assert [o.name for o in owners] == ["Carlos", "Maria", "Zoe"]

    @pytest.mark.asyncio
    async def test_replace_and_delete(self, session: AsyncSession) -> None:
        repo = SqlAlchemyOwnerRepository(session)
        owner = await repo.create(Owner(name="Jane", address="1 Elm St", birthday=date(1975, 3, 4)))

        owner.address = "2 Oak St"
        assert await repo.replace(owner) is not None
        session.expunge_all()
        loaded = await repo.get_by_id(owner.id_owner)
        assert loaded is not None
        assert loaded.address == "2 Oak St"
        assert loaded.birthday == date(1975, 3, 4)

        assert await repo.delete(owner.id_owner) is True
        session.expunge_all()
        assert await repo.get_by_id(owner.id_owner) is None
        assert await repo.replace(owner) is None
