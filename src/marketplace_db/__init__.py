"""
Marketplace Data Layer

Freelancer and project persistence on the ledger-backed table service.
"""

from .connection import DatabaseSettings, LedgerDatabase, configure_logging
from .enums import NetworkType, ProjectStatus
from .models import Freelancer, FreelancerProfile, Milestone, NewProject, Project
from .repositories import ConcurrentUpdateError, FreelancerRepository, MilestoneUpdater, ProjectRepository
from .schema import FREELANCERS, PROJECTS, SchemaProvisioner


__all__ = [
    "DatabaseSettings",
    "LedgerDatabase",
    "configure_logging",
    "NetworkType",
    "ProjectStatus",
    "Freelancer",
    "FreelancerProfile",
    "Milestone",
    "NewProject",
    "Project",
    "ConcurrentUpdateError",
    "FreelancerRepository",
    "MilestoneUpdater",
    "ProjectRepository",
    "FREELANCERS",
    "PROJECTS",
    "SchemaProvisioner",
]
