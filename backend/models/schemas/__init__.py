"""Pydantic contracts shared by the scoring engines."""

from models.schemas.profile import MarketConditions, Profile, Skill, UserSkill
from models.schemas.prediction import PredictionFactors, PredictionResult
from models.schemas.skill_analysis import SkillAnalysisResult, SkillGapAnalysis, SkillStrength
from models.schemas.career import CareerRecommendationResult
from models.schemas.report import ReportData, ReportSection

__all__ = [
    "Profile",
    "Skill",
    "UserSkill",
    "MarketConditions",
    "PredictionFactors",
    "PredictionResult",
    "SkillAnalysisResult",
    "SkillGapAnalysis",
    "SkillStrength",
    "CareerRecommendationResult",
    "ReportData",
    "ReportSection",
]
