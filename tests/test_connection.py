"""
Connection Context Tests

Tests for settings, logging setup and the LedgerDatabase context.
"""

import logging

import httpx
import pytest

from marketplace_db.connection import DatabaseSettings, LedgerDatabase, configure_logging
from marketplace_db.enums import NetworkType
from marketplace_db.schema import FREELANCERS, PROJECTS
from tests.factories import TEST_GATEWAY_URL, TEST_MNEMONIC


def test_settings_defaults(settings):
    assert settings.network is NetworkType.TESTNET
    assert settings.request_timeout == 30.0
    assert settings.confirmation_timeout is None
    assert settings.log_level == "INFO"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GATEWAY_URL", TEST_GATEWAY_URL)
    monkeypatch.setenv("WALLET_MNEMONIC", TEST_MNEMONIC)
    monkeypatch.setenv("PROJECTS_TABLE", "projects_2_173")
    monkeypatch.setenv("NETWORK", "mainnet")

    settings = DatabaseSettings(_env_file=None)

    assert settings.gateway_url == TEST_GATEWAY_URL
    assert settings.projects_table == "projects_2_173"
    assert settings.network is NetworkType.MAINNET


def test_configure_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging("debug")

    assert calls["level"] == logging.DEBUG
    assert "%(name)s" in calls["format"]


def test_configure_logging_uses_settings_level(monkeypatch, settings):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging(settings=settings.model_copy(update={"log_level": "warning"}))

    assert calls["level"] == logging.WARNING


def test_configure_logging_rejects_unknown_level(monkeypatch):
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: pytest.fail("basicConfig called"))

    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging("verbose")


@pytest.mark.asyncio
async def test_table_registry_seeded_from_settings(settings):
    settings = settings.model_copy(update={"projects_table": "projects_2_173"})

    async with LedgerDatabase(settings, http_client=httpx.AsyncClient()) as db:
        assert db.table_name(PROJECTS) == "projects_2_173"
        assert db.table_name(FREELANCERS) is None

        db.set_table_name(FREELANCERS, "freelancers_2_166")
        assert db.tables == {FREELANCERS: "freelancers_2_166", PROJECTS: "projects_2_173"}


@pytest.mark.asyncio
async def test_context_exposes_network_and_wallet(db):
    info = db.chain_context.get_network_info()
    wallet_info = db.wallet.get_wallet_info()

    assert info["network_id"] == 2
    assert info["base_url"] == TEST_GATEWAY_URL
    assert wallet_info["address"] == db.wallet.address
    assert wallet_info["network"] == "testnet"


@pytest.mark.asyncio
async def test_write_transaction_explorer_url(db):
    transaction = await db.client.submit("CREATE TABLE freelancers_2 (id integer primary key)")

    assert transaction.explorer_url == f"https://preview.cardanoscan.io/transaction/{transaction.transaction_hash}"
    receipt = await transaction.wait()
    assert await transaction.wait() is receipt
