from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_reference_data
from config import settings
from models.requests import (
    AssessmentRequest,
    CareerRecommendationRequest,
    PredictRequest,
    SkillAnalysisRequest,
)
from models.responses import AssessmentResponse, HealthResponse
from models.schemas.career import CareerRecommendationResult
from models.schemas.prediction import PredictionResult
from models.schemas.skill_analysis import SkillAnalysisResult
from services.pipeline import orchestrator
from services.pipeline.engine_registry import get_engine
from services.reference_data import ReferenceDataError, get_default_reference_data

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health():
    try:
        reference = get_default_reference_data()
    except ReferenceDataError:
        return HealthResponse(status="degraded")
    return HealthResponse(status="ok", reference_data_version=reference.version)


@router.post("/predict", response_model=PredictionResult, dependencies=[Depends(get_reference_data)])
@limiter.limit(settings.rate_limit)
async def predict(request: Request, body: PredictRequest):
    return get_engine("risk_predictor").predict(
        profile=body.profile,
        user_skills=body.user_skills,
        company_health_score=body.company_health_score,
        market_conditions=body.market_conditions,
    )


@router.post("/skill-analysis", response_model=SkillAnalysisResult, dependencies=[Depends(get_reference_data)])
@limiter.limit(settings.rate_limit)
async def skill_analysis(request: Request, body: SkillAnalysisRequest):
    return get_engine("skill_analyzer").analyze(
        user_skills=body.user_skills,
        skill_catalog=body.skill_catalog,
        job_title=body.job_title,
        industry=body.industry,
    )


@router.post(
    "/career-recommendations",
    response_model=CareerRecommendationResult,
    dependencies=[Depends(get_reference_data)],
)
@limiter.limit(settings.rate_limit)
async def career_recommendations(request: Request, body: CareerRecommendationRequest):
    return get_engine("career_recommender").recommend(
        profile=body.profile,
        user_skills=body.user_skills,
        prediction=body.prediction,
        skill_analysis=body.skill_analysis,
    )


@router.post("/assessment", response_model=AssessmentResponse, dependencies=[Depends(get_reference_data)])
@limiter.limit(settings.rate_limit)
async def assessment(request: Request, body: AssessmentRequest):
    return orchestrator.assess(
        profile=body.profile,
        user_skills=body.user_skills,
        skill_catalog=body.skill_catalog,
        company_health_score=body.company_health_score,
        market_conditions=body.market_conditions,
        include_report=body.include_report,
    )
