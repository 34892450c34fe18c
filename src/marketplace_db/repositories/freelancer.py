"""
Freelancer Repository

Manages freelancer profile data access operations.
"""

import logging
import time
from typing import Callable

from sqlalchemy import insert, select

from ledger_tables import TransactionReceipt
from marketplace_db.connection import LedgerDatabase
from marketplace_db.models import Freelancer, FreelancerProfile, encode_skills
from marketplace_db.repositories.base import BaseRepository
from marketplace_db.schema import FREELANCERS

logger = logging.getLogger(__name__)


class FreelancerRepository(BaseRepository[Freelancer]):
    """Repository for freelancer operations"""

    logical_name = FREELANCERS

    def __init__(self, db: LedgerDatabase, clock: Callable[[], float] = time.time):
        """Initialize freelancer repository"""
        super().__init__(Freelancer, db, clock)

    async def register(self, profile: FreelancerProfile) -> TransactionReceipt:
        """
        Register a freelancer profile

        Unlike project creation there is no provisioning fallback here,
        a missing table is reported to the caller.

        Args:
            profile: Freelancer profile

        Returns:
            Confirmed insert receipt

        Raises:
            TableNotFoundError: Freelancer table does not exist
        """
        table = self.table
        statement = insert(table).values(
            wallet_address=profile.wallet_address,
            full_name=profile.full_name,
            email=profile.email,
            skills=encode_skills(profile.skills),
            experience=profile.experience,
            hourly_rate=profile.hourly_rate,
            portfolio=profile.portfolio,
            bio=profile.bio,
            timestamp=self.now(),
        )
        receipt = await self.write(statement)

        logger.info(f"Freelancer registered: {profile.wallet_address}")
        return receipt

    async def get_by_address(self, wallet_address: str) -> Freelancer | None:
        """
        Get freelancer by wallet address

        Args:
            wallet_address: Wallet address

        Returns:
            First matching freelancer or None
        """
        table = self.table
        row = await self.fetch_first(select(table).where(table.c.wallet_address == wallet_address))
        return None if row is None else Freelancer.from_row(row)

    async def list_all(self) -> list[Freelancer]:
        """
        Get all freelancers

        Returns:
            List of freelancers (most recent first)
        """
        return await self.get_all()
