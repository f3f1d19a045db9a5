"""Risk Prediction Engine output: ensemble risk score with factor breakdown."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

RiskLevel = Literal["low", "medium", "high", "critical"]
TrendDirection = Literal["improving", "stable", "declining"]

# Value a factor takes when its input is absent ("unknown, assume medium risk").
UNKNOWN_FACTOR = 50.0


class PredictionFactors(BaseModel):
    """Ten 0-100 risk contributions; higher means riskier."""
    model_config = ConfigDict(frozen=True)

    industry_risk: float = UNKNOWN_FACTOR
    company_health: float = UNKNOWN_FACTOR
    role_vulnerability: float = UNKNOWN_FACTOR
    skill_relevance: float = UNKNOWN_FACTOR
    experience_level: float = UNKNOWN_FACTOR
    market_demand: float = UNKNOWN_FACTOR
    economic_indicators: float = UNKNOWN_FACTOR
    network_strength: float = UNKNOWN_FACTOR
    adaptability_score: float = UNKNOWN_FACTOR
    geographic_risk: float = UNKNOWN_FACTOR

    @field_validator("*")
    @classmethod
    def clamp_factor(cls, value: float) -> float:
        return max(0.0, min(100.0, value))


class TrendAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: TrendDirection = "stable"
    velocity: float = 0.0
    projected_risk: float = 0.0  # 0-100


class MarketInsights(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry_growth: float = 50.0  # 0-100
    role_growth: float = 50.0  # 0-100
    skill_demand_trend: float = 0.0  # 0-100


class PredictionResult(BaseModel):
    """Immutable snapshot of one prediction run.

    Callers persist this as-is; reloading it must never re-derive the score.
    """
    model_config = ConfigDict(frozen=True)

    risk_score: int = 0  # 0-100
    risk_level: RiskLevel = "low"
    factors: PredictionFactors = PredictionFactors()
    recommendations: list[str] = []  # at most 6, trigger order
    confidence: int = 0  # 0-100
    trend_analysis: TrendAnalysis = TrendAnalysis()
    market_insights: MarketInsights = MarketInsights()
    reference_version: str = ""

    @field_validator("risk_score", "confidence")
    @classmethod
    def clamp_score(cls, value: int) -> int:
        return max(0, min(100, value))
