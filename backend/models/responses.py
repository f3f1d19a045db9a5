from pydantic import BaseModel

from models.schemas.career import CareerRecommendationResult
from models.schemas.prediction import PredictionResult
from models.schemas.report import ReportSection
from models.schemas.skill_analysis import SkillAnalysisResult


class HealthResponse(BaseModel):
    status: str = "ok"
    reference_data_version: str = ""


class AssessmentResponse(BaseModel):
    prediction: PredictionResult
    skill_analysis: SkillAnalysisResult
    career_recommendations: CareerRecommendationResult
    report: list[ReportSection] = []
    report_markdown: str = ""
