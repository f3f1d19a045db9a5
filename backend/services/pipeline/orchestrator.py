"""Assessment orchestrator: wires the four engines together.

Flow:
    profile + user_skills + skill_catalog
      ├─ RiskPredictionEngine.predict(profile, skills, ...)       → PredictionResult
      ├─ SkillAnalysisEngine.analyze(skills, catalog, title, ind) → SkillAnalysisResult
      │               ↓                                    ↓
      ├─ CareerRecommendationEngine.recommend(profile, skills, prediction, analysis)
      │                                                    → CareerRecommendationResult
      │                                    ↓
      └─ ReportGenerator.generate(ReportData)  (optional)  → list[ReportSection]
"""

import logging

from models.responses import AssessmentResponse
from models.schemas.career import CareerRecommendationResult
from models.schemas.prediction import PredictionResult
from models.schemas.profile import MarketConditions, Profile, Skill, UserSkill
from models.schemas.report import ReportData
from models.schemas.skill_analysis import SkillAnalysisResult
from services.pipeline.engine_registry import get_engine

logger = logging.getLogger(__name__)


def assess(
    profile: Profile,
    user_skills: list[UserSkill],
    skill_catalog: list[Skill],
    company_health_score: float | None = None,
    market_conditions: MarketConditions | None = None,
    include_report: bool = False,
) -> AssessmentResponse:
    """Run every engine in data-flow order and bundle the outputs."""

    # --- Stage 1: independent scoring ---
    prediction: PredictionResult = get_engine("risk_predictor").predict(
        profile=profile,
        user_skills=user_skills,
        company_health_score=company_health_score,
        market_conditions=market_conditions,
    )
    skill_analysis: SkillAnalysisResult = get_engine("skill_analyzer").analyze(
        user_skills=user_skills,
        skill_catalog=skill_catalog,
        job_title=profile.job_title,
        industry=profile.industry,
    )

    # --- Stage 2: recommendations (depend on Stage 1) ---
    career: CareerRecommendationResult = get_engine("career_recommender").recommend(
        profile=profile,
        user_skills=user_skills,
        prediction=prediction,
        skill_analysis=skill_analysis,
    )

    logger.info(
        "Assessment complete: risk=%d (%s), gaps=%d, recommendations=%d",
        prediction.risk_score, prediction.risk_level,
        len(skill_analysis.skill_gaps), len(career.recommendations),
    )

    response = AssessmentResponse(
        prediction=prediction,
        skill_analysis=skill_analysis,
        career_recommendations=career,
    )
    if not include_report:
        return response

    # --- Stage 3: report (optional) ---
    generator = get_engine("report_generator")
    sections = generator.generate(ReportData(
        profile=profile,
        user_skills=user_skills,
        prediction=prediction,
        skill_analysis=skill_analysis,
        career_recommendations=career,
    ))
    return response.model_copy(update={
        "report": sections,
        "report_markdown": generator.render_markdown(sections),
    })
