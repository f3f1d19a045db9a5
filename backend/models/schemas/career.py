"""Career Recommendation Engine output."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

CareerRecommendationType = Literal["skill_development", "career_pivot", "industry_switch", "role_upgrade"]
ActionPriority = Literal["high", "medium", "low"]
ActionCategory = Literal["skill", "network", "experience", "certification"]


class RecommendationResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str  # course, certification, networking, job_board, mentor, ...
    title: str
    provider: str
    cost: str
    time_commitment: str
    url: str | None = None


class CareerRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: CareerRecommendationType
    title: str
    description: str
    priority: int  # higher = more urgent
    estimated_timeline: str
    resources: list[RecommendationResource] = []
    expected_outcome: str = ""
    risk_reduction: float = 0.0  # percent, 0-100


class CareerPath(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    required_skills: list[str]
    average_salary: str
    growth_outlook: str
    time_to_transition: str
    difficulty: str


class ActionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    task: str
    timeline: str
    priority: ActionPriority
    category: ActionCategory


class ActionPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    immediate: list[ActionItem] = []
    short_term: list[ActionItem] = []
    long_term: list[ActionItem] = []


class CareerRecommendationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    recommendations: list[CareerRecommendation] = []
    career_paths: list[CareerPath] = []
    action_plan: ActionPlan = ActionPlan()
