"""
Base service layer shared by the table models
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import asyncpg
from pydantic import BaseModel

from config.settings import QUERY_TIMEOUT_SECONDS
from database.connection import get_db_pool
from database.errors import (
    DataAccessError,
    DeadlineExceededError,
    PersistenceError,
    RecordNotFoundError,
)
from utils.error_handling import StructuredLogger, set_operation_context

logger = logging.getLogger(__name__)

class TableModel:
    """
    Bundles a database pool with the statements for one table.

    Every operation acquires a pooled connection, runs exactly one statement
    and is bounded by ``timeout`` seconds, covering both the acquire and the
    statement itself. Database errors are classified into the
    ``database.errors`` taxonomy before they reach the caller.
    """

    table_name: str = ""

    def __init__(self, pool: Optional[asyncpg.Pool] = None, timeout: float = QUERY_TIMEOUT_SECONDS):
        self.pool = pool
        self.timeout = timeout

    def _get_pool(self):
        pool = self.pool or get_db_pool()
        if not pool:
            raise RuntimeError("Database pool not initialized")
        return pool

    @staticmethod
    def _revalidate(record: BaseModel) -> None:
        """Re-check a record before writing it; catches in-place edits such as list appends"""
        type(record).model_validate(record.model_dump())

    def _classify_unique_violation(self, exc: asyncpg.UniqueViolationError) -> Optional[DataAccessError]:
        """Map a unique violation to a domain error; None means generic failure"""
        return None

    async def _run(
        self,
        operation: str,
        work: Callable[[asyncpg.Connection], Awaitable[Any]],
        context: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Run ``work`` on a pooled connection under the query timeout"""
        set_operation_context(f"{self.table_name}.{operation}")
        pool = self._get_pool()

        async def acquire_and_run():
            async with pool.acquire() as conn:
                return await work(conn)

        try:
            return await asyncio.wait_for(acquire_and_run(), timeout=self.timeout)

        except asyncio.TimeoutError as e:
            logger.warning(f"{self.table_name}.{operation} exceeded {self.timeout}s deadline")
            raise DeadlineExceededError() from e
        except asyncpg.QueryCanceledError as e:
            logger.warning(f"{self.table_name}.{operation} cancelled by server: {e}")
            raise DeadlineExceededError() from e
        except asyncpg.UniqueViolationError as e:
            domain_error = self._classify_unique_violation(e)
            if domain_error is None:
                raise self._persistence_error(operation, e, context) from e
            logger.warning(f"{self.table_name}.{operation} rejected: {domain_error}")
            raise domain_error from e
        # TimeoutError is an OSError on 3.11+, so it must be handled above
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            raise self._persistence_error(operation, e, context) from e

    def _persistence_error(
        self,
        operation: str,
        exc: Exception,
        context: Optional[Dict[str, Any]]
    ) -> PersistenceError:
        trace_id = StructuredLogger.log_error(
            "persistence_error",
            f"Database {operation} on {self.table_name} failed: {exc}",
            exception=exc,
            extra_context=context
        )
        return PersistenceError(f"{self.table_name} {operation} failed (trace {trace_id}): {exc}")

    async def _fetchrow(
        self,
        operation: str,
        query: str,
        *args: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> Optional[asyncpg.Record]:
        """Fetch a single row (or None) for ``query``"""
        async def work(conn):
            return await conn.fetchrow(query, *args)

        return await self._run(operation, work, context)

    async def delete(self, record_id: int) -> None:
        """
        Delete a record by ID

        Raises:
            RecordNotFoundError: no row has this id
        """
        if record_id < 1:
            raise RecordNotFoundError()

        query = f"DELETE FROM {self.table_name} WHERE id = $1"

        async def work(conn):
            return await conn.execute(query, record_id)

        result = await self._run("delete", work, {"id": record_id})

        # asyncpg returns "DELETE N" where N is the number of rows
        deleted_count = int(result.split()[-1]) if result else 0
        if deleted_count == 0:
            raise RecordNotFoundError()

        logger.info(f"Deleted {self.table_name} record {record_id}")
