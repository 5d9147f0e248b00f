"""
Database client.

Supabase PostgreSQL client with retry and async query utilities.
"""

import asyncio
from functools import lru_cache
from typing import Any, Callable
from supabase import create_client, Client
from shared.config import settings
from shared.errors import RetryableError, ConfigError


class DatabaseClient:
    """Supabase database client wrapper with retry logic."""

    def __init__(self):
        """Initialize database client."""
        try:
            self.client: Client = create_client(
                settings.supabase_url,
                settings.supabase_service_key
            )
        except Exception as e:
            raise ConfigError(f"Failed to initialize database client: {str(e)}") from e

    async def _execute_sync(self, func: Callable[[], Any], max_attempts: int = 3) -> Any:
        """
        Execute a synchronous Supabase operation in an async context.

        Args:
            func: Synchronous function to execute
            max_attempts: Maximum number of attempts

        Returns:
            Function result

        Raises:
            RetryableError: If operation fails after all attempts
        """
        for attempt in range(max_attempts):
            try:
                loop = asyncio.get_running_loop()
                return await loop.run_in_executor(None, func)
            except Exception as e:
                if attempt < max_attempts - 1:
                    # Exponential backoff: 2s, 4s
                    delay = 2 ** (attempt + 1)
                    await asyncio.sleep(delay)
                else:
                    raise RetryableError(
                        f"Database operation failed after {max_attempts} attempts: {str(e)}"
                    ) from e
        raise RetryableError(f"Database operation failed after {max_attempts} attempts")

    def table(self, table_name: str) -> "AsyncTableQueryBuilder":
        """
        Get a table query builder with async execution support.

        Args:
            table_name: Name of the table

        Returns:
            AsyncTableQueryBuilder wrapper
        """
        return AsyncTableQueryBuilder(self, table_name)

    async def health_check(self) -> bool:
        """
        Check database connection health.

        Returns:
            True if connection is healthy, False otherwise
        """
        try:
            await self._execute_sync(
                lambda: self.client.table("video_projects").select("id").limit(1).execute(),
                max_attempts=1
            )
            return True
        except RetryableError:
            return False


class AsyncTableQueryBuilder:
    """Async wrapper for Supabase table query builder."""

    def __init__(self, db_client: DatabaseClient, table_name: str):
        """Initialize async table query builder."""
        self.db_client = db_client
        self.table_name = table_name
        self._query_builder = db_client.client.table(table_name)

    def select(self, *args, **kwargs):
        """Chain select operation."""
        self._query_builder = self._query_builder.select(*args, **kwargs)
        return self

    def update(self, *args, **kwargs):
        """Chain update operation."""
        self._query_builder = self._query_builder.update(*args, **kwargs)
        return self

    def eq(self, *args, **kwargs):
        """Chain eq filter."""
        self._query_builder = self._query_builder.eq(*args, **kwargs)
        return self

    def in_(self, *args, **kwargs):
        """Chain in_ filter."""
        self._query_builder = self._query_builder.in_(*args, **kwargs)
        return self

    @property
    def not_(self):
        """Negate the next filter."""
        self._query_builder = self._query_builder.not_
        return self

    def limit(self, *args, **kwargs):
        """Chain limit operation."""
        self._query_builder = self._query_builder.limit(*args, **kwargs)
        return self

    def order(self, *args, **kwargs):
        """Chain order operation."""
        self._query_builder = self._query_builder.order(*args, **kwargs)
        return self

    async def execute(self, max_attempts: int = 3) -> Any:
        """
        Execute the query asynchronously.

        Args:
            max_attempts: Maximum number of attempts

        Returns:
            Query result
        """
        query_builder = self._query_builder
        return await self.db_client._execute_sync(
            lambda: query_builder.execute(),
            max_attempts
        )


@lru_cache(maxsize=1)
def get_database() -> DatabaseClient:
    """Shared database client, created on first use."""
    return DatabaseClient()
