"""
Page Store Tests

The SQLAlchemy session is mocked; statements are compiled against the
PostgreSQL dialect to check the generated SQL.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from mw_sitemap_server.core.exceptions import StoreUnavailableError
from mw_sitemap_server.db import PageStore


# Helper to create mock DB rows
class MockRow:
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)


def compiled_sql(stmt) -> str:
    sql = stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True})
    return " ".join(str(sql).split())


@pytest.fixture
def mock_db_session():
    return AsyncMock()


def scalar_result(value):
    result = MagicMock()
    result.scalar.return_value = value
    return result


async def test_count_pages_excludes_redirects(mock_db_session):
    mock_db_session.execute.return_value = scalar_result(42)
    store = PageStore(mock_db_session)

    assert await store.count_pages(14) == 42

    sql = compiled_sql(mock_db_session.execute.call_args.args[0])
    assert "count(*)" in sql
    assert "page.page_namespace = 14" in sql
    assert "page.page_is_redirect = 0" in sql


async def test_count_pages_none_is_zero(mock_db_session):
    mock_db_session.execute.return_value = scalar_result(None)
    store = PageStore(mock_db_session)

    assert await store.count_pages(0) == 0


async def test_max_touched_over_namespace(mock_db_session):
    touched = datetime(2024, 1, 1, tzinfo=timezone.utc)
    mock_db_session.execute.return_value = scalar_result(touched)
    store = PageStore(mock_db_session)

    assert await store.max_touched(0) == touched

    sql = compiled_sql(mock_db_session.execute.call_args.args[0])
    assert sql.startswith("SELECT max(page.page_touched)")
    assert "LIMIT" not in sql


async def test_max_touched_in_slice_aggregates_over_subquery(mock_db_session):
    mock_db_session.execute.return_value = scalar_result(None)
    store = PageStore(mock_db_session)

    assert await store.max_touched_in_slice(1, 100000, 50000) is None

    sql = compiled_sql(mock_db_session.execute.call_args.args[0])
    assert sql.startswith("SELECT max(t.page_touched)")
    assert "FROM (SELECT page.page_touched" in sql
    assert "WHERE page.page_namespace = 1 AND page.page_is_redirect = 0" in sql
    assert "ORDER BY page.page_id LIMIT 50000 OFFSET 100000) AS t" in sql


async def test_select_slice_maps_rows(mock_db_session):
    touched = datetime(2024, 1, 1, tzinfo=timezone.utc)
    result = MagicMock()
    result.all.return_value = [
        MockRow(page_id=7, page_namespace=0, page_title="Foo", page_touched=touched),
        MockRow(page_id=9, page_namespace=0, page_title="Bar", page_touched=None),
    ]
    mock_db_session.execute.return_value = result
    store = PageStore(mock_db_session)

    records = await store.select_slice(0, 50000, 50000)

    assert [(r.page_id, r.title, r.touched) for r in records] == [
        (7, "Foo", touched),
        (9, "Bar", None),
    ]

    sql = compiled_sql(mock_db_session.execute.call_args.args[0])
    assert "ORDER BY page.page_id LIMIT 50000 OFFSET 50000" in sql


@pytest.mark.parametrize("method, args", [
    ("count_pages", (0,)),
    ("max_touched", (0,)),
    ("max_touched_in_slice", (0, 0, 10)),
    ("select_slice", (0, 0, 10)),
])
async def test_database_errors_become_store_unavailable(mock_db_session, method, args):
    mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
    store = PageStore(mock_db_session)

    with pytest.raises(StoreUnavailableError):
        await getattr(store, method)(*args)
