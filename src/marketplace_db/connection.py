"""
Database Connection Management

Settings and the explicit connection context for the ledger-backed tables.
A single LedgerDatabase is built at start-up and passed to every repository.
"""

import logging
from typing import Optional

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger_tables import LedgerChainContext, LedgerWallet, TableClient
from marketplace_db.enums import NetworkType
from marketplace_db.schema import FREELANCERS, PROJECTS, SchemaProvisioner


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class DatabaseSettings(BaseSettings):
    """Table service configuration from environment variables"""

    network: NetworkType = NetworkType.TESTNET
    gateway_url: str  # No default - must be set in .env
    wallet_mnemonic: str  # No default - must be set in .env

    # Generated names of already provisioned tables, e.g. projects_2_173
    freelancers_table: str | None = None
    projects_table: str | None = None

    # Request and confirmation settings
    request_timeout: float = 30.0
    confirmation_poll_interval: float = 2.0
    confirmation_timeout: float | None = None  # None waits indefinitely

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")


def configure_logging(level: str | None = None, settings: Optional[DatabaseSettings] = None) -> None:
    """
    Configure root logging for processes using this layer

    Args:
        level: Level name, defaults to ``settings.log_level``
        settings: Settings supplying the level when none is given

    Raises:
        ValueError: Unknown level name
    """
    if level is None:
        level = (settings or DatabaseSettings()).log_level  # type: ignore[call-arg]  # Pydantic settings loads from env
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)


class LedgerDatabase:
    """
    Connection context for the marketplace tables

    Owns the chain context, signing wallet, table client and the registry of
    generated table names.

    Usage:
        configure_logging(settings=settings)
        async with LedgerDatabase(settings) as db:
            await db.ensure_schema()
            projects = ProjectRepository(db)
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize database context

        Args:
            settings: Database settings (loads from environment if not provided)
            http_client: Pre-built HTTP client for the gateway
        """
        self.settings = settings or DatabaseSettings()  # type: ignore[call-arg]  # Pydantic settings loads from env

        self.chain_context = LedgerChainContext(
            network=self.settings.network.value,
            gateway_url=self.settings.gateway_url,
        )
        self.wallet = LedgerWallet(self.settings.wallet_mnemonic, network=self.settings.network.value)
        self.client = TableClient(
            self.chain_context,
            self.wallet,
            http_client=http_client,
            request_timeout=self.settings.request_timeout,
            poll_interval=self.settings.confirmation_poll_interval,
            confirmation_timeout=self.settings.confirmation_timeout,
        )

        self._tables: dict[str, str | None] = {
            FREELANCERS: self.settings.freelancers_table,
            PROJECTS: self.settings.projects_table,
        }
        self.provisioner = SchemaProvisioner(self)

    async def __aenter__(self) -> "LedgerDatabase":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def table_name(self, logical_name: str) -> str | None:
        """Generated name registered for a logical table, None if unknown"""
        return self._tables.get(logical_name)

    def set_table_name(self, logical_name: str, name: str) -> None:
        self._tables[logical_name] = name

    @property
    def tables(self) -> dict[str, str | None]:
        return dict(self._tables)

    async def ensure_schema(self) -> dict[str, str]:
        """Provision every missing table, returns logical → generated names"""
        return await self.provisioner.ensure_schema()

    async def close(self) -> None:
        """Close the gateway connection"""
        await self.client.close()
