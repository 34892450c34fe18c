"""
Shared Enums

Single source of truth for enums used across settings, models and repositories.
"""

from enum import Enum


class NetworkType(str, Enum):
    """Ledger network types"""

    TESTNET = "testnet"
    MAINNET = "mainnet"


class ProjectStatus(str, Enum):
    """
    Project lifecycle status

    - OPEN: Created, work not started
    - IN_PROGRESS: Freelancer is delivering milestones
    - COMPLETED: All work delivered
    - CANCELLED: Abandoned by either party
    """

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
