"""
Milestone State Updater

Read-modify-write of one milestone's completion flag inside a project's
serialized milestone list.
"""

import logging

from marketplace_db.connection import LedgerDatabase
from marketplace_db.models import decode_milestones, encode_milestones
from marketplace_db.repositories.project import ProjectRepository

logger = logging.getLogger(__name__)


class MilestoneUpdater:
    """Marks project milestones as completed"""

    def __init__(self, db: LedgerDatabase, projects: ProjectRepository | None = None):
        self.db = db
        self.projects = projects or ProjectRepository(db)

    async def update_milestone(self, project_id: int, milestone_index: int) -> None:
        """
        Mark the milestone at a position as completed

        The whole milestone list is written back in one confirmed write,
        guarded by the value read at the start. A concurrent change in between
        raises ConcurrentUpdateError and the caller retries the whole update.
        The error can also follow a successful write that a later writer
        overwrote before the check, retrying is safe since marking a milestone
        completed is idempotent.

        Args:
            project_id: Project ID
            milestone_index: Zero-based milestone position

        Raises:
            IndexError: No milestone at that position
            ConcurrentUpdateError: Milestones changed since they were read
        """
        project = await self.projects.get_by_id(project_id)
        if project is None:
            logger.warning(f"Project {project_id} not found, milestone {milestone_index} not updated")
            return

        milestones = decode_milestones(project.milestones)
        if milestone_index < 0:
            raise IndexError(f"Milestone index out of range: {milestone_index}")
        milestones[milestone_index].completed = True

        await self.projects.replace_milestones(project_id, encode_milestones(milestones), expected=project.milestones)
        logger.info(f"Milestone {milestone_index} of project {project_id} marked completed")
