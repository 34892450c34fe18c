"""
Pytest configuration

Fixtures wiring the data layer to the mock table service.
"""

import os
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from dotenv import load_dotenv

from marketplace_db.connection import DatabaseSettings, LedgerDatabase
from tests.factories import TEST_GATEWAY_URL, TEST_MNEMONIC, fake_clock
from tests.mocks import MockTableService


@pytest.fixture(scope="session", autouse=True)
def load_env():
    """Load environment variables for the live gateway tests"""
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    yield


@pytest.fixture
def table_service():
    """Mock table service with immediate confirmations"""
    return MockTableService()


@pytest.fixture
def settings():
    return DatabaseSettings(
        _env_file=None,
        network="testnet",
        gateway_url=TEST_GATEWAY_URL,
        wallet_mnemonic=TEST_MNEMONIC,
        freelancers_table=None,
        projects_table=None,
        confirmation_poll_interval=0,
        confirmation_timeout=None,
    )


@pytest_asyncio.fixture
async def db(settings, table_service):
    """Database context talking to the mock table service, no tables yet"""
    http_client = httpx.AsyncClient(transport=table_service.transport())
    database = LedgerDatabase(settings, http_client=http_client)
    yield database
    await database.close()
    await http_client.aclose()


@pytest_asyncio.fixture
async def provisioned_db(db):
    """Database context with both tables provisioned"""
    await db.ensure_schema()
    yield db


@pytest.fixture
def clock():
    return fake_clock()


@pytest.fixture
def live_settings():
    """Settings for a real gateway, skipped when none is configured"""
    if not (os.getenv("gateway_url") or os.getenv("GATEWAY_URL")):
        pytest.skip("No table service gateway configured in environment")
    return DatabaseSettings()  # type: ignore[call-arg]  # Pydantic settings loads from env
