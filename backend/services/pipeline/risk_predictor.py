"""Risk Prediction Engine: ensemble layoff-risk score from ten factors.

Flow:
    profile + skills (+ company health, market conditions)
      ├─ ten factor formulas            → PredictionFactors (0-100, higher = riskier)
      ├─ linear weighted sum      ┐
      ├─ 3 → 2 logistic funnel    ├─ 0.40 / 0.35 / 0.25 blend → risk_score
      └─ ordered threshold rules  ┘
      └─ confidence, trend, market insights, recommendation strings

A factor whose input is absent takes the value 50 ("unknown, assume
medium risk"). The confidence score counts how many factors moved off
that value, so the convention has to hold exactly.
"""

import logging

import numpy as np

from models.schemas.prediction import (
    UNKNOWN_FACTOR,
    MarketInsights,
    PredictionFactors,
    PredictionResult,
    RiskLevel,
    TrendAnalysis,
)
from models.schemas.profile import PROFICIENCY_MAX, MarketConditions, Profile, UserSkill
from models.schemas.reference import Thresholds
from services.pipeline.base import BaseEngine
from services.reference_data import names_match, normalize, tokenize

logger = logging.getLogger(__name__)

FACTOR_NAMES = [
    "industry_risk",
    "company_health",
    "role_vulnerability",
    "skill_relevance",
    "experience_level",
    "market_demand",
    "economic_indicators",
    "network_strength",
    "adaptability_score",
    "geographic_risk",
]

# Weights sum to 1.0, in FACTOR_NAMES order
LINEAR_WEIGHTS = np.array([0.18, 0.22, 0.16, 0.14, 0.08, 0.10, 0.06, 0.03, 0.02, 0.01])

# Stage 1: three factor groupings (macro, role/skills, career capital)
FUNNEL_STAGE1 = np.array([
    [0.3, 0.4, 0.0, 0.0, 0.0, 0.0, 0.3, 0.0, 0.0, 0.0],
    [0.0, 0.0, 0.5, 0.3, 0.0, 0.0, 0.0, 0.0, 0.2, 0.0],
    [0.0, 0.0, 0.0, 0.0, 0.4, 0.3, 0.0, 0.3, 0.0, 0.0],
])
FUNNEL_STAGE2 = np.array([
    [0.6, 0.2, 0.2],
    [0.3, 0.4, 0.3],
])
FUNNEL_OUTPUT = np.array([0.7, 0.3])

W_LINEAR = 0.40
W_FUNNEL = 0.35
W_RULES = 0.25

BASE_CONFIDENCE = 75
RECESSION_MULTIPLIER = 1.3
STARTUP_PENALTY = 15
TECH_DEMAND_DISCOUNT = 0.8


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return float(max(low, min(high, value)))


def _score(value: float) -> float:
    """Clamp to 0-100 and round for output."""
    return round(_clamp(value), 2)


def _squash(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x / 20.0))


def risk_level(risk_score: float, thresholds: Thresholds | None = None) -> RiskLevel:
    """Map a 0-100 score to its level: ≤25 low, ≤50 medium, ≤75 high, else critical."""
    cuts = (thresholds or Thresholds()).risk_levels
    if risk_score <= cuts.low:
        return "low"
    if risk_score <= cuts.medium:
        return "medium"
    if risk_score <= cuts.high:
        return "high"
    return "critical"


def linear_score(factors: PredictionFactors) -> float:
    vec = np.array([getattr(factors, name) for name in FACTOR_NAMES])
    return float(vec @ LINEAR_WEIGHTS)


def funnel_score(factors: PredictionFactors) -> float:
    """Bounded non-linear mix: three logistic units feed two, blended ×100."""
    vec = np.array([getattr(factors, name) for name in FACTOR_NAMES])
    stage1 = _squash(FUNNEL_STAGE1 @ vec)
    stage2 = _squash(FUNNEL_STAGE2 @ stage1)
    return float(stage2 @ FUNNEL_OUTPUT * 100)


def rule_score(factors: PredictionFactors) -> float:
    """Ordered threshold rules; the first matching rule decides."""
    f = factors
    if f.company_health > 70:
        return 15 + f.industry_risk * 0.3
    if f.role_vulnerability > 60:
        return 60 + f.skill_relevance * 0.4
    if f.industry_risk > 50:
        return 45 + f.market_demand * 0.3
    if f.skill_relevance > 60:
        return 55 + f.adaptability_score * 0.2
    return 30 + (f.industry_risk + f.role_vulnerability) * 0.25


class RiskPredictionEngine(BaseEngine):
    engine_name = "risk_predictor"

    def predict(
        self,
        profile: Profile,
        user_skills: list[UserSkill],
        company_health_score: float | None = None,
        market_conditions: MarketConditions | None = None,
    ) -> PredictionResult:
        ref = self.reference
        factors = self.compute_factors(profile, user_skills, company_health_score, market_conditions)

        linear = linear_score(factors)
        funnel = funnel_score(factors)
        rules = rule_score(factors)
        risk_score = int(round(_clamp(linear * W_LINEAR + funnel * W_FUNNEL + rules * W_RULES)))

        logger.debug(
            "risk ensemble: linear=%.2f funnel=%.2f rules=%.2f -> %d",
            linear, funnel, rules, risk_score,
        )

        return PredictionResult(
            risk_score=risk_score,
            risk_level=risk_level(risk_score, ref.thresholds),
            factors=factors,
            recommendations=self._recommendations(factors, profile, user_skills),
            confidence=self._confidence(factors, user_skills),
            trend_analysis=self._trend(factors, profile, user_skills),
            market_insights=self._market_insights(profile, user_skills),
            reference_version=ref.version,
        )

    def compute_factors(
        self,
        profile: Profile,
        user_skills: list[UserSkill],
        company_health_score: float | None = None,
        market_conditions: MarketConditions | None = None,
    ) -> PredictionFactors:
        values = {
            "industry_risk": self._industry_risk(profile.industry, market_conditions),
            "company_health": self._company_health(company_health_score, profile.company),
            "role_vulnerability": self._role_vulnerability(profile.job_title),
            "skill_relevance": self._skill_relevance(user_skills),
            "experience_level": self._experience_level(profile.experience_years, profile.job_title),
            "market_demand": self._market_demand(user_skills, profile.industry),
            "economic_indicators": self._economic_indicators(profile.industry, market_conditions),
            "network_strength": self._network_strength(profile.experience_years, user_skills),
            "adaptability_score": self._adaptability(user_skills, profile.experience_years),
            "geographic_risk": self._geographic_risk(profile.location),
        }
        return PredictionFactors(**{k: _score(v) for k, v in values.items()})

    # -- factors ------------------------------------------------------------

    def _industry_risk(self, industry: str | None, conditions: MarketConditions | None) -> float:
        if not industry:
            return UNKNOWN_FACTOR
        data = self.reference.industry(industry)
        multiplier = RECESSION_MULTIPLIER if conditions is not None and conditions.recession else 1.0
        return data.base_risk * multiplier + (1 - data.growth_rate) * 20

    def _company_health(self, health_score: float | None, company: str | None) -> float:
        if health_score is None:
            return UNKNOWN_FACTOR
        risk = 100 - _clamp(health_score)
        if company and names_match("startup", company):
            risk += STARTUP_PENALTY
        return risk

    def _role_vulnerability(self, job_title: str | None) -> float:
        if not normalize(job_title):
            return UNKNOWN_FACTOR
        return self.reference.role_vulnerability(job_title)

    def _skill_relevance(self, user_skills: list[UserSkill]) -> float:
        if not user_skills:
            return 80.0

        total = 0.0
        total_weight = 0.0
        for us in user_skills:
            data = self.reference.skill(us.skill.name)
            relevance = (
                data.future_relevance * 40
                + (data.demand_growth - 1) * 30
                + us.proficiency_level * 2
            )
            weight = us.proficiency_level / PROFICIENCY_MAX
            total += relevance * weight
            total_weight += weight

        avg = total / total_weight if total_weight > 0 else UNKNOWN_FACTOR
        return max(0.0, 80 - avg)

    def _experience_level(self, years: int | None, job_title: str | None) -> float:
        if years is None:
            return UNKNOWN_FACTOR

        if years < 2:
            risk = 70.0
        elif years < 5:
            risk = 40.0
        elif years < 10:
            risk = 25.0
        else:
            risk = 30.0  # very senior profiles face age-related bias

        title_words = tokenize(job_title)
        for keyword, delta in self.reference.tables.seniority_adjustments.items():
            if normalize(keyword) in title_words:
                risk += delta
                break
        return risk

    def _market_demand(self, user_skills: list[UserSkill], industry: str | None) -> float:
        cutoff = self.reference.thresholds.demand_skill_growth
        demand = 0.0
        for us in user_skills:
            data = self.reference.skill(us.skill.name)
            if data.demand_growth > cutoff:
                demand += data.demand_growth * us.proficiency_level

        multiplier = TECH_DEMAND_DISCOUNT if normalize(industry) == "technology" else 1.0
        return max(0.0, 60 - demand * 2 * multiplier)

    def _economic_indicators(self, industry: str | None, conditions: MarketConditions | None) -> float:
        if conditions is None:
            return UNKNOWN_FACTOR

        score = 30.0
        if conditions.recession:
            score += 40
        if conditions.inflation > 5:
            score += 20
        if conditions.unemployment > 6:
            score += 15
        if self.reference.has_industry(industry):
            score += self.reference.industry(industry).volatility * 20
        return score

    def _network_strength(self, years: int | None, user_skills: list[UserSkill]) -> float:
        if years is None:
            return UNKNOWN_FACTOR

        experience_bonus = min(30, years * 3)
        diversity_bonus = min(20, len(user_skills) * 2)
        leadership_bonus = 15 if any(
            names_match(kw, us.skill.name)
            for us in user_skills
            for kw in self.reference.tables.network_skills
        ) else 0
        return max(0.0, 70 - (experience_bonus + diversity_bonus + leadership_bonus))

    def _adaptability(self, user_skills: list[UserSkill], years: int | None) -> float:
        groups = self.reference.tables.adaptability_skills

        def count(keywords: list[str]) -> int:
            return sum(1 for us in user_skills if any(names_match(kw, us.skill.name) for kw in keywords))

        diversity = min(40, (count(groups.technical) + count(groups.soft)) * 4)
        seniority = -10 if years is not None and years > 10 else 0
        return max(0.0, 60 - (diversity + seniority))

    def _geographic_risk(self, location: str | None) -> float:
        if not normalize(location):
            return UNKNOWN_FACTOR
        in_hub = any(names_match(hub, location) for hub in self.reference.tables.tech_hubs)
        return 15.0 if in_hub else 35.0

    # -- derived outputs ----------------------------------------------------

    def _confidence(self, factors: PredictionFactors, user_skills: list[UserSkill]) -> int:
        values = [getattr(factors, name) for name in FACTOR_NAMES]
        completeness = sum(1 for v in values if v != UNKNOWN_FACTOR) / len(values)

        confidence = BASE_CONFIDENCE + completeness * 20
        if len(user_skills) > 5:
            confidence += 5
        if any(us.proficiency_level >= PROFICIENCY_MAX for us in user_skills):
            confidence += 5
        return int(round(_clamp(confidence)))

    def _future_proof_count(self, user_skills: list[UserSkill]) -> int:
        cutoff = self.reference.thresholds.future_proof_growth
        return sum(1 for us in user_skills if self.reference.skill(us.skill.name).demand_growth > cutoff)

    def _trend(self, factors: PredictionFactors, profile: Profile, user_skills: list[UserSkill]) -> TrendAnalysis:
        future_skills = self._future_proof_count(user_skills)
        growth = self.reference.industry(profile.industry).growth_rate

        if future_skills >= 3 and growth > 0.8:
            direction = "improving"
            velocity = future_skills * 0.3 + (growth - 0.8) * 10
        elif future_skills < 1 or growth < 0.5:
            direction = "declining"
            velocity = max(0, 1 - future_skills) * 0.5 + max(0.0, 0.5 - growth) * 10
        else:
            direction = "stable"
            velocity = 0.0

        current = linear_score(factors)
        if direction == "improving":
            projected = current - velocity * 5
        elif direction == "declining":
            projected = current + velocity * 5
        else:
            projected = current

        return TrendAnalysis(
            direction=direction,
            velocity=round(velocity, 2),
            projected_risk=_score(projected),
        )

    def _market_insights(self, profile: Profile, user_skills: list[UserSkill]) -> MarketInsights:
        ref = self.reference
        role = ref.role(profile.job_title)

        if user_skills:
            mean_growth = float(np.mean([ref.skill(us.skill.name).demand_growth for us in user_skills]))
        else:
            mean_growth = 1.0

        return MarketInsights(
            industry_growth=_score(ref.industry(profile.industry).growth_rate * 100),
            role_growth=_score(role[1].future_proof * 100 if role else 50),
            skill_demand_trend=_score((mean_growth - 1) * 100),
        )

    def _missing_growth_skills(self, user_skills: list[UserSkill]) -> list[str]:
        ref = self.reference
        cutoff = ref.thresholds.future_proof_growth
        held = [us.skill.name for us in user_skills]
        return [
            name for name in ref.skill_names()
            if ref.skill(name).demand_growth > cutoff
            and not any(names_match(name, h) for h in held)
        ]

    def _defensive_industries(self) -> list[str]:
        ref = self.reference
        stable = [
            (name, o) for name, o in ref.outlook_items()
            if o.stability > ref.thresholds.stable_industry
        ]
        stable.sort(key=lambda item: item[1].stability, reverse=True)
        return [name for name, _ in stable[:2]]

    def _recommendations(
        self,
        factors: PredictionFactors,
        profile: Profile,
        user_skills: list[UserSkill],
    ) -> list[str]:
        """Messages in trigger order; earlier checks are higher priority."""
        ref = self.reference
        t = ref.thresholds.recommendation_triggers
        recs: list[str] = []

        if factors.skill_relevance > t.skill_relevance:
            missing = self._missing_growth_skills(user_skills)[:3]
            if missing:
                recs.append(f"Prioritize learning high-growth skills: {', '.join(missing)}")

        if factors.role_vulnerability > t.role_vulnerability:
            recs.append(
                "Consider transitioning to automation-resistant roles like strategic planning or creative leadership"
            )

        if factors.industry_risk > t.industry_risk:
            defensive = self._defensive_industries()
            if defensive:
                recs.append(f"Explore opportunities in more defensive industries such as {' and '.join(defensive)}")

        if factors.company_health > t.company_health:
            recs.append("Research your company's financial health and keep job alternatives in view")

        if factors.economic_indicators > t.economic_indicators:
            recs.append("Build recession-proof skills and consider defensive career moves")

        if factors.network_strength > t.network_strength:
            recs.append("Strengthen your professional network through industry events and mentorship")

        if factors.adaptability_score > t.adaptability_score:
            recs.append("Develop cross-functional skills to increase career flexibility")

        if ref.has_industry(profile.industry) and ref.industry(profile.industry).volatility > t.industry_volatility:
            recs.append("Consider diversifying into more stable industries as a backup plan")

        return recs[: ref.thresholds.max_recommendations]
