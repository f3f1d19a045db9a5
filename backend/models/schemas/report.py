"""Report Generator contracts."""

from typing import Literal

from pydantic import BaseModel

from models.schemas.career import CareerRecommendationResult
from models.schemas.prediction import PredictionResult
from models.schemas.profile import Profile, UserSkill
from models.schemas.skill_analysis import SkillAnalysisResult


class ChartData(BaseModel):
    type: Literal["bar", "pie", "line", "radar"]
    title: str
    data: list[float] = []
    labels: list[str] = []


class ReportSection(BaseModel):
    title: str
    content: str  # Markdown
    charts: list[ChartData] = []


class ReportData(BaseModel):
    profile: Profile
    user_skills: list[UserSkill] = []
    prediction: PredictionResult
    skill_analysis: SkillAnalysisResult
    career_recommendations: CareerRecommendationResult
