"""
Marketplace Record Models

Pydantic models for freelancer profiles and projects, plus the column codecs
for the denormalized skills and milestones fields.
"""

import json
from typing import Any, Mapping

from pydantic import BaseModel, field_validator

from marketplace_db.enums import ProjectStatus


SKILLS_DELIMITER = ","


# ============================================================================
# Column codecs
# ============================================================================


def encode_skills(skills: list[str]) -> str:
    """Join skills into the single text column"""
    for skill in skills:
        if SKILLS_DELIMITER in skill:
            raise ValueError(f"Skill may not contain '{SKILLS_DELIMITER}': {skill!r}")
        # decode_skills trims, so padded or empty skills would not come back unchanged
        if not skill or skill != skill.strip():
            raise ValueError(f"Skill must be non-empty without surrounding whitespace: {skill!r}")
    return SKILLS_DELIMITER.join(skills)


def decode_skills(text: str | None) -> list[str]:
    """Split the skills column back into trimmed skills"""
    if not text:
        return []
    return [skill.strip() for skill in text.split(SKILLS_DELIMITER)]


class Milestone(BaseModel):
    """Milestone sub-record, addressed by its position in the project"""

    name: str
    amount: str
    completed: bool = False


def encode_milestones(milestones: list[Milestone]) -> str:
    """Serialize milestones to compact JSON, order preserved"""
    return json.dumps([m.model_dump() for m in milestones], separators=(",", ":"))


def decode_milestones(text: str) -> list[Milestone]:
    """Deserialize the milestones column"""
    return [Milestone.model_validate(item) for item in json.loads(text)]


# ============================================================================
# Freelancers
# ============================================================================


class FreelancerProfile(BaseModel):
    """Freelancer registration data"""

    wallet_address: str
    full_name: str
    email: str
    skills: list[str] = []
    experience: str = ""
    hourly_rate: int
    portfolio: str = ""
    bio: str = ""

    @field_validator("skills")
    @classmethod
    def normalize_skills(cls, skills: list[str]) -> list[str]:
        skills = [skill.strip() for skill in skills]
        encode_skills(skills)
        return skills


class Freelancer(FreelancerProfile):
    """Stored freelancer record"""

    id: int
    timestamp: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Freelancer":
        return cls(
            id=int(row["id"]),
            wallet_address=str(row["wallet_address"]),
            full_name=str(row["full_name"]),
            email=str(row["email"]),
            skills=decode_skills(row["skills"]),
            experience=str(row["experience"]),
            hourly_rate=int(row["hourly_rate"]),
            portfolio=str(row["portfolio"]),
            bio=str(row["bio"]),
            timestamp=int(row["timestamp"]),
        )


# ============================================================================
# Projects
# ============================================================================


class NewProject(BaseModel):
    """Project creation data, id and timestamp are assigned on insert"""

    client_address: str
    freelancer_address: str
    title: str
    description: str = ""
    budget: int
    timeline: int
    milestones: list[Milestone] = []
    status: ProjectStatus = ProjectStatus.OPEN

    @field_validator("milestones", mode="before")
    @classmethod
    def parse_serialized_milestones(cls, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value)
        return value

    @property
    def milestones_text(self) -> str:
        return encode_milestones(self.milestones)


class Project(BaseModel):
    """
    Stored project record

    ``milestones`` is the raw serialized column, use ``decoded_milestones()``
    for the typed list.
    """

    id: int
    client_address: str
    freelancer_address: str
    title: str
    description: str
    budget: int
    timeline: int
    milestones: str
    status: ProjectStatus
    timestamp: int

    def decoded_milestones(self) -> list[Milestone]:
        return decode_milestones(self.milestones)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Project":
        return cls(
            id=int(row["id"]),
            client_address=str(row["client_address"]),
            freelancer_address=str(row["freelancer_address"]),
            title=str(row["title"]),
            description=str(row["description"]),
            budget=int(row["budget"]),
            timeline=int(row["timeline"]),
            milestones=str(row["milestones"]),
            status=ProjectStatus(row["status"]),
            timestamp=int(row["timestamp"]),
        )
