"""Tests for the cart stores"""
import pytest
import pytest_asyncio

from storefront.database import create_tables, make_engine, make_session_maker
from storefront.store import InMemoryCartStore, SqlCartStore


class TestInMemoryCartStore:

    @pytest.mark.asyncio
    async def test_unknown_user_has_empty_cart(self):
        store = InMemoryCartStore()
        assert await store.get_items("nobody") == {}

    @pytest.mark.asyncio
    async def test_repeated_adds_accumulate(self):
        store = InMemoryCartStore()
        for _ in range(5):
            await store.add_item("alice", "widget")

        assert await store.get_items("alice") == {"widget": 5}

    @pytest.mark.asyncio
    async def test_users_are_isolated(self):
        store = InMemoryCartStore()
        await store.add_item("alice", "widget")
        await store.add_item("bob", "gadget")
        await store.add_item("bob", "gadget")

        assert await store.get_items("alice") == {"widget": 1}
        assert await store.get_items("bob") == {"gadget": 2}

    @pytest.mark.asyncio
    async def test_get_items_returns_a_copy(self):
        store = InMemoryCartStore()
        await store.add_item("alice", "widget")
        items = await store.get_items("alice")
        items["widget"] = 100
        items["other"] = 1

        assert await store.get_items("alice") == {"widget": 1}


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'carts.db'}")
    await create_tables(engine)
    yield make_session_maker(engine)
    await engine.dispose()


class RacingSession:
    """Wraps a session and runs `on_first_execute` right after its first query."""

    def __init__(self, session, on_first_execute):
        self._session = session
        self._hook = on_first_execute

    async def __aenter__(self):
        await self._session.__aenter__()
        return self

    async def __aexit__(self, *exc_info):
        return await self._session.__aexit__(*exc_info)

    async def execute(self, *args, **kwargs):
        result = await self._session.execute(*args, **kwargs)
        if self._hook is not None:
            hook, self._hook = self._hook, None
            await hook()
        return result

    def __getattr__(self, name):
        return getattr(self._session, name)


class TestSqlCartStore:

    @pytest.mark.asyncio
    async def test_adds_accumulate_per_user_and_item(self, session_maker):
        store = SqlCartStore(session_maker)
        for _ in range(3):
            await store.add_item("alice", "widget")
        await store.add_item("alice", "gadget")
        await store.add_item("bob", "widget")

        assert await store.get_items("alice") == {"widget": 3, "gadget": 1}
        assert await store.get_items("bob") == {"widget": 1}
        assert await store.get_items("carol") == {}

    @pytest.mark.asyncio
    async def test_carts_survive_a_new_store_instance(self, session_maker):
        await SqlCartStore(session_maker).add_item("alice", "widget")
        assert await SqlCartStore(session_maker).get_items("alice") == {"widget": 1}

    @pytest.mark.asyncio
    async def test_concurrent_first_insert_is_not_lost(self, session_maker):
        other = SqlCartStore(session_maker)

        async def insert_from_other_request():
            await other.add_item("alice", "widget")

        # the other request inserts the row after our lookup found nothing
        store = SqlCartStore(lambda: RacingSession(session_maker(), insert_from_other_request))
        await store.add_item("alice", "widget")

        assert await other.get_items("alice") == {"widget": 2}
