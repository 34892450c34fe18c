"""
Table Schema and Provisioning

SQLAlchemy Core definitions of the marketplace tables. Statements are compiled
with the SQLite dialect (the table service speaks SQLite) into ``?`` placeholder
text and positional parameters for the table client.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable

from sqlalchemy import Column, Integer, MetaData, Table, Text
from sqlalchemy.dialects import sqlite
from sqlalchemy.schema import CreateTable
from sqlalchemy.sql import ClauseElement

from ledger_tables import TableServiceError

if TYPE_CHECKING:
    from marketplace_db.connection import LedgerDatabase

logger = logging.getLogger(__name__)


FREELANCERS = "freelancers"
PROJECTS = "projects"

_DIALECT = sqlite.dialect()


def freelancers_table(name: str) -> Table:
    """Freelancer table bound to a concrete (generated) name"""
    return Table(
        name,
        MetaData(),
        Column("id", Integer, primary_key=True),
        Column("wallet_address", Text),
        Column("full_name", Text),
        Column("email", Text),
        Column("skills", Text),
        Column("experience", Text),
        Column("hourly_rate", Integer),
        Column("portfolio", Text),
        Column("bio", Text),
        Column("timestamp", Integer),
    )


def projects_table(name: str) -> Table:
    """Project table bound to a concrete (generated) name"""
    return Table(
        name,
        MetaData(),
        Column("id", Integer, primary_key=True),
        Column("client_address", Text),
        Column("freelancer_address", Text),
        Column("title", Text),
        Column("description", Text),
        Column("budget", Integer),
        Column("timeline", Integer),
        Column("milestones", Text),
        Column("status", Text),
        Column("timestamp", Integer),
    )


TABLE_BUILDERS: dict[str, Callable[[str], Table]] = {
    FREELANCERS: freelancers_table,
    PROJECTS: projects_table,
}


def compile_statement(statement: ClauseElement) -> tuple[str, list[Any]]:
    """
    Compile a SQLAlchemy statement for the table client

    Returns:
        Statement text with ``?`` placeholders and the values in order
    """
    compiled = statement.compile(dialect=_DIALECT)
    params = [compiled.params[name] for name in (compiled.positiontup or [])]
    return compiled.string, params


def create_table_statement(logical_name: str, prefix: str) -> str:
    """CREATE TABLE statement for a logical table under its pre-id name"""
    ddl = str(CreateTable(TABLE_BUILDERS[logical_name](prefix)).compile(dialect=_DIALECT))
    return " ".join(ddl.split())


class SchemaProvisioner:
    """Creates the marketplace tables on the table service"""

    def __init__(self, db: "LedgerDatabase"):
        self.db = db

    async def create_table(self, logical_name: str) -> str:
        """
        Create a logical table and wait for confirmation

        Not idempotent: every call creates a new table and registers its name.

        Args:
            logical_name: FREELANCERS or PROJECTS

        Returns:
            Generated table name
        """
        chain_context = self.db.chain_context
        statement = create_table_statement(logical_name, chain_context.table_prefix(logical_name))

        transaction = await self.db.client.submit(statement)
        receipt = await transaction.wait()
        if not receipt.table_ids:
            raise TableServiceError(f"Create of {logical_name} confirmed without a table id")

        name = chain_context.table_name(logical_name, receipt.table_ids[0])
        self.db.set_table_name(logical_name, name)

        logger.info(f"Table created: {name}")
        return name

    async def create_freelancer_table(self) -> str:
        return await self.create_table(FREELANCERS)

    async def create_project_table(self) -> str:
        return await self.create_table(PROJECTS)

    async def table_exists(self, logical_name: str) -> bool:
        """Check that the registered table for a logical name exists"""
        name = self.db.table_name(logical_name)
        if not name:
            return False
        return await self.db.client.get_table(name) is not None

    async def ensure_table(self, logical_name: str) -> tuple[str, bool]:
        """
        Check-then-create a logical table

        Returns:
            (generated name, whether it was created by this call)
        """
        if await self.table_exists(logical_name):
            return self.db.table_name(logical_name), False  # type: ignore[return-value]

        logger.info(f"Table {logical_name} not provisioned, creating")
        return await self.create_table(logical_name), True

    async def ensure_schema(self) -> dict[str, str]:
        """Idempotently provision every marketplace table"""
        names = {}
        for logical_name in TABLE_BUILDERS:
            names[logical_name], _ = await self.ensure_table(logical_name)
        return names
