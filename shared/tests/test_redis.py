"""
Tests for Redis client.
"""

import pytest
from unittest.mock import AsyncMock, patch

from shared.redis_client import RedisClient
from shared.errors import ConfigError


def test_redis_client_initialization():
    """Test that Redis client initializes correctly."""
    mock_client = AsyncMock()

    with patch("shared.redis_client.redis.from_url", return_value=mock_client) as mock_from_url:
        with patch("shared.redis_client.settings") as mock_settings:
            mock_settings.redis_url = "redis://cache.internal:6379"
            client = RedisClient()

    assert client.client == mock_client
    mock_from_url.assert_called_once_with("redis://cache.internal:6379", decode_responses=False)


def test_redis_client_initialization_failure():
    """Test that ConfigError is raised on initialization failure."""
    with patch("shared.redis_client.redis.from_url", side_effect=Exception("Connection failed")):
        with pytest.raises(ConfigError, match="Failed to initialize Redis client"):
            RedisClient()
