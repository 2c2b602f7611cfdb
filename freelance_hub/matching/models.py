"""Data models for the matching engine.

This module defines the inputs to scoring (job requirements and service
candidates) and the computed, never persisted, MatchScore.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from freelance_hub.domain.models import ExperienceLevel, JobFields


def _to_skill_set(v: Any) -> FrozenSet[str]:
    if v is None:
        return frozenset()
    if isinstance(v, str):
        raise ValueError("Skill set must be a list of identifiers, not a string")
    return frozenset(str(skill).strip() for skill in v if str(skill).strip())


class JobRequirements(BaseModel):
    """What a job asks for, in the terms the scoring formula uses."""

    model_config = ConfigDict(frozen=True)

    skill_set: FrozenSet[str] = Field(default_factory=frozenset)
    experience_level: ExperienceLevel
    budget_min: Decimal = Field(..., ge=0)
    budget_max: Decimal = Field(..., ge=0)
    remote: bool = False

    @field_validator("skill_set", mode="before")
    @classmethod
    def normalize_skill_set(cls, v: Any) -> FrozenSet[str]:
        return _to_skill_set(v)

    @classmethod
    def from_job_fields(cls, fields: JobFields) -> "JobRequirements":
        """Derive requirements from validated job posting fields.

        Remote is requested only when the location preference is "Remote".
        """
        return cls(
            skill_set=fields.skills,
            experience_level=fields.experience,
            budget_min=Decimal(fields.budget_min),
            budget_max=Decimal(fields.budget_max),
            remote=fields.location_pref == "Remote",
        )


class RateRange(BaseModel):
    """A candidate's rate bounds, inclusive."""

    model_config = ConfigDict(frozen=True)

    min: Decimal = Field(..., ge=0)
    max: Decimal = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.min > self.max:
            raise ValueError("Rate range min cannot exceed max")
        return self

    def within(self, low: Decimal, high: Decimal) -> bool:
        """True when the whole range lies inside [low, high]."""
        return self.min >= low and self.max <= high


class ServiceCandidate(BaseModel):
    """A service offering that can be matched against a job."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    description: str = ""
    skill_set: FrozenSet[str] = Field(default_factory=frozenset)
    experience_level: ExperienceLevel
    rate_range: RateRange
    remote_capable: bool = False

    @field_validator("skill_set", mode="before")
    @classmethod
    def normalize_skill_set(cls, v: Any) -> FrozenSet[str]:
        return _to_skill_set(v)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-component points of a match score.

    Attributes:
        skill: 0..60, share of required skills the candidate has
        experience: 20, 10 or 5 depending on tier comparison
        budget: 15 when the rate range fits the budget, else 5
        remote: 5 when remote is requested and offered, else 0
    """

    skill: int
    experience: int
    budget: int
    remote: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "skill": self.skill,
            "experience": self.experience,
            "budget": self.budget,
            "remote": self.remote,
        }


@dataclass(frozen=True)
class MatchScore:
    """Score of one candidate against one set of requirements.

    Attributes:
        candidate: The scored candidate
        total: Sum of the breakdown, capped at 100
        breakdown: Component points
    """

    candidate: ServiceCandidate
    total: int
    breakdown: ScoreBreakdown

    @property
    def percent_label(self) -> str:
        return f"{self.total}% match"
