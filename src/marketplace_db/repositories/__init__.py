"""Repositories for the marketplace data access layer"""

from .base import BaseRepository, ConcurrentUpdateError
from .freelancer import FreelancerRepository
from .milestone import MilestoneUpdater
from .project import ProjectRepository

__all__ = [
    "BaseRepository",
    "ConcurrentUpdateError",
    "FreelancerRepository",
    "MilestoneUpdater",
    "ProjectRepository",
]
