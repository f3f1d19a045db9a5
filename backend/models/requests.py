from pydantic import BaseModel, Field

from models.schemas.prediction import PredictionResult
from models.schemas.profile import MarketConditions, Profile, Skill, UserSkill
from models.schemas.skill_analysis import SkillAnalysisResult


class PredictRequest(BaseModel):
    profile: Profile = Profile()
    user_skills: list[UserSkill] = Field(default=[], max_length=500)
    company_health_score: float | None = Field(None, description="0-100, higher is healthier")
    market_conditions: MarketConditions | None = None


class SkillAnalysisRequest(BaseModel):
    user_skills: list[UserSkill] = Field(default=[], max_length=500)
    skill_catalog: list[Skill] = Field(default=[], max_length=2000)
    job_title: str | None = None
    industry: str | None = None


class CareerRecommendationRequest(BaseModel):
    profile: Profile = Profile()
    user_skills: list[UserSkill] = Field(default=[], max_length=500)
    prediction: PredictionResult
    skill_analysis: SkillAnalysisResult


class AssessmentRequest(BaseModel):
    profile: Profile = Profile()
    user_skills: list[UserSkill] = Field(default=[], max_length=500)
    skill_catalog: list[Skill] = Field(default=[], max_length=2000)
    company_health_score: float | None = Field(None, description="0-100, higher is healthier")
    market_conditions: MarketConditions | None = None
    include_report: bool = False
