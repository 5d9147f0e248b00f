"""
Tests for database client.
"""

import pytest
from unittest.mock import Mock, patch

from shared.database import DatabaseClient
from shared.errors import RetryableError, ConfigError


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    client = Mock()
    client.table = Mock(return_value=Mock())
    return client


@pytest.fixture
def db_client(mock_supabase_client):
    """Create a database client with mocked Supabase."""
    with patch("shared.database.create_client", return_value=mock_supabase_client):
        return DatabaseClient()


@pytest.fixture
def no_backoff():
    """Skip the real backoff sleeps between attempts."""
    async def _no_sleep(delay):
        return None

    with patch("shared.database.asyncio.sleep", side_effect=_no_sleep) as mock_sleep:
        yield mock_sleep


def test_database_client_initialization():
    """Test that database client initializes correctly."""
    with patch("shared.database.create_client") as mock_create:
        mock_client = Mock()
        mock_create.return_value = mock_client

        client = DatabaseClient()
        assert client.client == mock_client
        mock_create.assert_called_once()


def test_database_client_initialization_failure():
    """Test that ConfigError is raised on initialization failure."""
    with patch("shared.database.create_client", side_effect=Exception("Connection failed")):
        with pytest.raises(ConfigError, match="Failed to initialize database client"):
            DatabaseClient()


@pytest.mark.asyncio
async def test_table_query_builder(db_client):
    """Test that table query builder works correctly."""
    mock_query_result = Mock()
    mock_query_result.data = [{"id": "123"}]

    mock_query = Mock()
    mock_query.execute = Mock(return_value=mock_query_result)
    mock_query.eq = Mock(return_value=mock_query)
    mock_query.order = Mock(return_value=mock_query)

    mock_table = Mock()
    mock_table.select = Mock(return_value=mock_query)

    db_client.client.table = Mock(return_value=mock_table)

    result = await db_client.table("video_clips").select("*").eq("video_project_id", "p1").order("sequence_order").execute()

    assert result.data == [{"id": "123"}]
    db_client.client.table.assert_called_once_with("video_clips")
    mock_table.select.assert_called_once_with("*")
    mock_query.eq.assert_called_once_with("video_project_id", "p1")
    mock_query.order.assert_called_once_with("sequence_order")


@pytest.mark.asyncio
async def test_execute_retries_then_succeeds(db_client, no_backoff):
    func = Mock(side_effect=[Exception("connection reset"), "ok"])

    result = await db_client._execute_sync(func)

    assert result == "ok"
    assert func.call_count == 2
    no_backoff.assert_called_once_with(2)


@pytest.mark.asyncio
async def test_execute_raises_retryable_after_max_attempts(db_client, no_backoff):
    func = Mock(side_effect=Exception("connection reset"))

    with pytest.raises(RetryableError, match="failed after 3 attempts"):
        await db_client._execute_sync(func)

    assert func.call_count == 3


@pytest.mark.asyncio
async def test_database_health_check_success(db_client):
    """Test that health check returns True on success."""
    mock_table = Mock()
    mock_query = Mock()
    mock_table.select = Mock(return_value=mock_query)
    mock_query.limit = Mock(return_value=mock_query)
    mock_query.execute = Mock(return_value=Mock(data=[{"id": "123"}]))

    db_client.client.table = Mock(return_value=mock_table)

    assert await db_client.health_check() is True


@pytest.mark.asyncio
async def test_database_health_check_failure(db_client):
    """Test that health check returns False on failure."""
    mock_table = Mock()
    mock_query = Mock()
    mock_table.select = Mock(return_value=mock_query)
    mock_query.limit = Mock(return_value=mock_query)
    mock_query.execute = Mock(side_effect=Exception("Connection failed"))

    db_client.client.table = Mock(return_value=mock_table)

    assert await db_client.health_check() is False


@pytest.mark.asyncio
async def test_table_query_builder_negated_in_filter(db_client):
    """Test that not_ negates the following in_ filter."""
    negated = Mock()
    filtered = Mock()
    filtered.execute = Mock(return_value=Mock(data=[{"id": "p1"}]))
    negated.in_ = Mock(return_value=filtered)

    mock_query = Mock()
    mock_query.eq = Mock(return_value=mock_query)
    mock_query.not_ = negated

    mock_table = Mock()
    mock_table.update = Mock(return_value=mock_query)
    db_client.client.table = Mock(return_value=mock_table)

    result = await (
        db_client.table("video_projects")
        .update({"status": "generating"})
        .eq("id", "p1")
        .not_.in_("status", ["generating", "compiling"])
        .execute()
    )

    assert result.data == [{"id": "p1"}]
    negated.in_.assert_called_once_with("status", ["generating", "compiling"])
