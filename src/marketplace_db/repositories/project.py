"""
Project Repository

Manages project data access operations.
"""

import logging
import time
from typing import Callable

from sqlalchemy import and_, desc, insert, select, update

from ledger_tables import TableServiceError, TransactionReceipt
from marketplace_db.connection import LedgerDatabase
from marketplace_db.models import NewProject, Project
from marketplace_db.repositories.base import BaseRepository, ConcurrentUpdateError
from marketplace_db.schema import PROJECTS

logger = logging.getLogger(__name__)


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations"""

    logical_name = PROJECTS

    def __init__(self, db: LedgerDatabase, clock: Callable[[], float] = time.time):
        """Initialize project repository"""
        super().__init__(Project, db, clock)

    async def create(self, project: NewProject) -> TransactionReceipt:
        """
        Create a project, provisioning the project table if needed

        On failure the project table is provisioned and the insert retried
        exactly once. If the registered table turns out to exist, the failure
        had another cause and the original error is raised instead.

        Args:
            project: Project without id and timestamp

        Returns:
            Confirmed insert receipt
        """
        try:
            receipt = await self._insert(project)
            logger.info(f"Project inserted into {self.db.table_name(PROJECTS)}")
            return receipt
        except TableServiceError as error:
            logger.warning(f"Project insert failed ({error}), provisioning {PROJECTS} table")
            try:
                _, created = await self.db.provisioner.ensure_table(PROJECTS)
            except TableServiceError as provision_error:
                logger.error(f"Provisioning {PROJECTS} failed: {provision_error}")
                raise error from provision_error
            if not created:
                raise

        receipt = await self._insert(project)
        logger.info(f"Project inserted into new table {self.db.table_name(PROJECTS)}")
        return receipt

    async def _insert(self, project: NewProject) -> TransactionReceipt:
        table = self.table
        statement = insert(table).values(
            client_address=project.client_address,
            freelancer_address=project.freelancer_address,
            title=project.title,
            description=project.description,
            budget=project.budget,
            timeline=project.timeline,
            milestones=project.milestones_text,
            status=project.status.value,
            timestamp=self.now(),
        )
        return await self.write(statement)

    async def list_by_freelancer(self, freelancer_address: str) -> list[Project]:
        """
        Get projects assigned to a freelancer

        Args:
            freelancer_address: Freelancer wallet address

        Returns:
            List of projects (most recent first), milestones left serialized
        """
        table = self.table
        statement = (
            select(table)
            .where(table.c.freelancer_address == freelancer_address)
            .order_by(desc(table.c.timestamp), desc(table.c.id))
        )
        rows = await self.fetch_all(statement)
        return [Project.from_row(row) for row in rows]

    async def get_by_id(self, project_id: int) -> Project | None:
        """
        Get project by ID

        Args:
            project_id: Project ID

        Returns:
            Project instance or None
        """
        return await self.get(project_id)

    async def list_all(self) -> list[Project]:
        """Get all projects, most recent first"""
        return await self.get_all()

    async def replace_milestones(
        self, project_id: int, milestones: str, expected: str | None = None
    ) -> TransactionReceipt:
        """
        Overwrite the serialized milestones column of one project

        Args:
            project_id: Project ID
            milestones: New serialized milestones
            expected: Serialized value read before the change; when given the
                write only applies if the column still holds it

        Returns:
            Confirmed update receipt

        Raises:
            ConcurrentUpdateError: Column no longer holds the written value

        The check reads the row after our write confirms. A later writer that
        confirms before that read also triggers the error even though our write
        applied, so callers should re-read and retry rather than assume the
        write was dropped.
        """
        table = self.table
        condition = table.c.id == project_id
        if expected is not None:
            condition = and_(condition, table.c.milestones == expected)

        receipt = await self.write(update(table).where(condition).values(milestones=milestones))

        # Receipts do not report affected rows, so verify by reading back
        stored = await self.get_by_id(project_id)
        if stored is None or stored.milestones != milestones:
            raise ConcurrentUpdateError(f"Milestones of project {project_id} changed since they were read")

        return receipt
