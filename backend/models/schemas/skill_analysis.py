"""Skill Analysis Engine output: gaps, strengths, and learning plan."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from models.schemas.profile import Skill

GapSeverity = Literal["low", "medium", "high", "critical"]
RecommendationType = Literal["learn_new", "improve_existing", "maintain_strength", "specialize_deeper"]


class LearningResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str  # course, certification, book, practice, bootcamp, project
    title: str
    provider: str
    duration: str
    difficulty: str  # beginner, intermediate, advanced
    cost: str  # free, paid, subscription
    url: str | None = None
    rating: float | None = None
    completion_rate: float | None = None


class SkillGapAnalysis(BaseModel):
    """A catalog skill the user does not hold."""
    model_config = ConfigDict(frozen=True)

    skill: Skill
    importance_score: float  # 0-100
    market_demand: float  # 0-100
    gap_severity: GapSeverity
    learning_resources: list[LearningResource] = []
    estimated_learning_time: str = ""
    salary_impact: float = 0.0  # percent

    @field_validator("importance_score", "market_demand")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return max(0.0, min(100.0, value))


class SkillStrength(BaseModel):
    """A held skill at proficiency 4 or above."""
    model_config = ConfigDict(frozen=True)

    skill: Skill
    proficiency_level: int
    years_experience: int
    market_value: float  # 0-100
    competitive_advantage: float  # 0-100
    future_proofing: float  # 0-100


class SkillRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: RecommendationType
    skill: Skill
    priority: int
    timeframe: str
    description: str
    expected_roi: float


class MarketAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_market_value: float = 0.0
    skill_diversity_score: float = 0.0  # 0-100
    automation_resistance: float = 0.0  # 0-100
    industry_alignment: float = 50.0  # 0-100
    emerging_skills_gap: float = 100.0  # 0-100


class CareerPathSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    required_skills: list[str]
    time_to_transition: str
    salary_range: str
    demand_level: str  # low, medium, high, very_high


class SkillAnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill_gaps: list[SkillGapAnalysis] = []
    strength_areas: list[SkillStrength] = []
    overall_score: int = 0  # 0-100
    recommendations: list[SkillRecommendation] = []
    market_analysis: MarketAnalysis = MarketAnalysis()
    career_path_suggestions: list[CareerPathSuggestion] = []
