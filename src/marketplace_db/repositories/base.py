"""
Base Repository

Provides the read/write plumbing shared by the marketplace repositories.
"""

import time
from typing import Any, Callable, Generic, Mapping, Protocol, TypeVar

from sqlalchemy import Table, desc, select
from sqlalchemy.sql import ClauseElement

from ledger_tables import TableNotFoundError, TransactionReceipt
from marketplace_db.connection import LedgerDatabase
from marketplace_db.schema import TABLE_BUILDERS, compile_statement


class RowModel(Protocol):
    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Any: ...


ModelType = TypeVar("ModelType", bound=RowModel)


class ConcurrentUpdateError(Exception):
    """Row changed between read and write, the caller should retry the whole update"""

    pass


class BaseRepository(Generic[ModelType]):
    """Base repository with common table operations"""

    logical_name: str

    def __init__(self, model: type[ModelType], db: LedgerDatabase, clock: Callable[[], float] = time.time):
        """
        Initialize repository

        Args:
            model: Record model with a ``from_row`` constructor
            db: Database connection context
            clock: Source of the current Unix time for insert timestamps
        """
        self.model = model
        self.db = db
        self.clock = clock

    @property
    def table(self) -> Table:
        """
        Table bound to the registered generated name

        Raises:
            TableNotFoundError: No table is registered for this repository
        """
        name = self.db.table_name(self.logical_name)
        if not name:
            raise TableNotFoundError(f"no such table: {self.logical_name} has not been provisioned")
        return TABLE_BUILDERS[self.logical_name](name)

    def now(self) -> int:
        """Current Unix time in whole seconds"""
        return int(self.clock())

    async def fetch_all(self, statement: ClauseElement) -> list[dict]:
        sql, params = compile_statement(statement)
        return await self.db.client.query(sql, params)

    async def fetch_first(self, statement: ClauseElement) -> dict | None:
        sql, params = compile_statement(statement)
        return await self.db.client.first(sql, params)

    async def write(self, statement: ClauseElement) -> TransactionReceipt:
        """Submit a write and wait for its confirmation"""
        sql, params = compile_statement(statement)
        return await self.db.client.execute(sql, params)

    async def get(self, id: int) -> ModelType | None:
        """
        Get record by ID

        Args:
            id: Record ID

        Returns:
            Model instance or None
        """
        table = self.table
        row = await self.fetch_first(select(table).where(table.c.id == id))
        return None if row is None else self.model.from_row(row)

    async def get_all(self) -> list[ModelType]:
        """
        Get all records, most recent first

        Returns:
            List of model instances
        """
        table = self.table
        rows = await self.fetch_all(select(table).order_by(desc(table.c.timestamp), desc(table.c.id)))
        return [self.model.from_row(row) for row in rows]
