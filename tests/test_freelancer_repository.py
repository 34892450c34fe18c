"""
Freelancer Repository Tests
"""

import pytest

from ledger_tables import TableNotFoundError
from marketplace_db.repositories import FreelancerRepository
from marketplace_db.schema import FREELANCERS
from tests.factories import AddressFactory, FreelancerFactory


@pytest.mark.asyncio
async def test_register_then_get_by_address_preserves_skills(provisioned_db, clock):
    repo = FreelancerRepository(provisioned_db, clock=clock)
    address = AddressFactory.create_testnet_address()
    skills = ["Solidity", "Python", "Data Viz", "Technical Writing"]

    receipt = await repo.register(FreelancerFactory.create_profile(wallet_address=address, skills=skills))
    freelancer = await repo.get_by_address(address)

    assert receipt.transaction_hash
    assert freelancer is not None
    assert freelancer.wallet_address == address
    assert freelancer.skills == skills
    assert freelancer.timestamp == 1_700_000_000


@pytest.mark.asyncio
async def test_register_stores_comma_joined_skills(provisioned_db, table_service):
    repo = FreelancerRepository(provisioned_db)

    await repo.register(FreelancerFactory.create_profile(skills=["Go", "SQL"]))

    [row] = table_service.rows(provisioned_db.table_name(FREELANCERS))
    assert row["skills"] == "Go,SQL"
    assert row["id"] == 1


@pytest.mark.asyncio
async def test_register_stores_stripped_skills(provisioned_db):
    repo = FreelancerRepository(provisioned_db)
    address = AddressFactory.create_testnet_address()
    profile = FreelancerFactory.create_profile(wallet_address=address, skills=[" Rust ", "Go"])

    await repo.register(profile)
    freelancer = await repo.get_by_address(address)

    assert freelancer.skills == ["Rust", "Go"]
    assert freelancer.skills == profile.skills



@pytest.mark.asyncio
async def test_get_by_address_not_found(provisioned_db):
    repo = FreelancerRepository(provisioned_db)

    assert await repo.get_by_address("addr_test1nobody") is None


@pytest.mark.asyncio
async def test_get_by_address_returns_first_match(provisioned_db, clock):
    repo = FreelancerRepository(provisioned_db, clock=clock)
    address = AddressFactory.create_testnet_address()

    await repo.register(FreelancerFactory.create_profile(wallet_address=address, full_name="First Profile"))
    await repo.register(FreelancerFactory.create_profile(wallet_address=address, full_name="Second Profile"))

    freelancer = await repo.get_by_address(address)
    assert freelancer.full_name == "First Profile"


@pytest.mark.asyncio
async def test_list_all_most_recent_first(provisioned_db, clock):
    repo = FreelancerRepository(provisioned_db, clock=clock)
    for name in ("Alan Turing", "Barbara Liskov", "Edsger Dijkstra"):
        await repo.register(FreelancerFactory.create_profile(full_name=name))

    freelancers = await repo.list_all()

    assert [f.full_name for f in freelancers] == ["Edsger Dijkstra", "Barbara Liskov", "Alan Turing"]
    assert all(f.skills == ["Python", "Plutus", "Data Engineering"] for f in freelancers)


@pytest.mark.asyncio
async def test_list_all_same_timestamp_most_recent_first(provisioned_db):
    repo = FreelancerRepository(provisioned_db, clock=lambda: 1_700_000_000)
    for name in ("Alan Turing", "Barbara Liskov", "Edsger Dijkstra"):
        await repo.register(FreelancerFactory.create_profile(full_name=name))

    freelancers = await repo.list_all()

    assert [f.full_name for f in freelancers] == ["Edsger Dijkstra", "Barbara Liskov", "Alan Turing"]



@pytest.mark.asyncio
async def test_list_all_empty(provisioned_db):
    assert await FreelancerRepository(provisioned_db).list_all() == []


@pytest.mark.asyncio
async def test_register_without_table_fails(db, table_service):
    repo = FreelancerRepository(db)

    with pytest.raises(TableNotFoundError):
        await repo.register(FreelancerFactory.create_profile())

    assert table_service.envelopes == []


@pytest.mark.asyncio
async def test_register_does_not_provision_dropped_table(provisioned_db, table_service):
    repo = FreelancerRepository(provisioned_db)
    table_service.drop_table("freelancers_2_1")

    with pytest.raises(TableNotFoundError):
        await repo.register(FreelancerFactory.create_profile())

    assert provisioned_db.table_name(FREELANCERS) == "freelancers_2_1"
