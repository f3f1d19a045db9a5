"""Engine inputs: the user's profile, held skills, and market signals.

Out-of-range numbers are clamped on validation rather than rejected, so the
engines always receive values inside their documented ranges.
"""

from pydantic import BaseModel, field_validator

PROFICIENCY_MIN = 1
PROFICIENCY_MAX = 5  # 5 = "Expert"


class Profile(BaseModel):
    """A user's career profile. Every field is optional."""
    full_name: str | None = None
    job_title: str | None = None
    company: str | None = None
    industry: str | None = None
    experience_years: int | None = None
    location: str | None = None

    @field_validator("experience_years")
    @classmethod
    def clamp_experience(cls, value: int | None) -> int | None:
        if value is None:
            return None
        return max(0, value)


class Skill(BaseModel):
    """Catalog entry. `name` is the key into the market tables."""
    id: str
    name: str
    category: str = ""
    description: str = ""


class UserSkill(BaseModel):
    skill_id: str
    skill: Skill
    proficiency_level: int = PROFICIENCY_MIN  # 1-5
    years_experience: int = 0

    @field_validator("proficiency_level")
    @classmethod
    def clamp_proficiency(cls, value: int) -> int:
        return max(PROFICIENCY_MIN, min(PROFICIENCY_MAX, value))

    @field_validator("years_experience")
    @classmethod
    def clamp_years(cls, value: int) -> int:
        return max(0, value)


class MarketConditions(BaseModel):
    recession: bool = False
    inflation: float = 0.0  # percent
    unemployment: float = 0.0  # percent
