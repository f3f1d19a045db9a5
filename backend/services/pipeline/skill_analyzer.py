"""Skill Analysis Engine: gaps against a catalog, strengths, and a learning plan.

Gaps are catalog skills the user does not hold (matched by skill id). Each
gap gets an importance score from keyword rules over the job title and
industry, plus the market demand from the reference tables; the pair decides
both inclusion and severity.
"""

import logging

import numpy as np

from models.schemas.profile import PROFICIENCY_MAX, Skill, UserSkill
from models.schemas.reference import Thresholds
from models.schemas.skill_analysis import (
    CareerPathSuggestion,
    GapSeverity,
    LearningResource,
    MarketAnalysis,
    SkillAnalysisResult,
    SkillGapAnalysis,
    SkillRecommendation,
    SkillStrength,
)
from services.pipeline.base import BaseEngine
from services.reference_data import names_match, normalize

logger = logging.getLogger(__name__)

BASE_IMPORTANCE = 50.0
STRENGTH_PROFICIENCY = 4
MAX_CAREER_SUGGESTIONS = 4

SEVERITY_TIMEFRAMES = {
    "critical": "1-3 months",
    "high": "2-4 months",
    "medium": "3-6 months",
    "low": "6-12 months",
}


def _pct(value: float) -> float:
    return float(max(0.0, min(100.0, value)))


def gap_severity(importance: float, demand: float, thresholds: Thresholds | None = None) -> GapSeverity:
    """Bucket the mean of importance and demand: ≥90 critical, ≥75 high, ≥55 medium."""
    cuts = (thresholds or Thresholds()).gap_severity
    combined = (importance + demand) / 2
    if combined >= cuts.critical:
        return "critical"
    if combined >= cuts.high:
        return "high"
    if combined >= cuts.medium:
        return "medium"
    return "low"


def estimate_learning_time(difficulty: int) -> str:
    if difficulty <= 3:
        return "2-4 weeks"
    if difficulty <= 5:
        return "2-3 months"
    if difficulty <= 7:
        return "4-6 months"
    return "6-12 months"


def generic_resources(skill: Skill) -> list[LearningResource]:
    """Fallback learning resources for skills with no curated entry."""
    return [
        LearningResource(
            type="course", title=f"Learn {skill.name}", provider="Coursera",
            duration="4-8 weeks", difficulty="beginner", cost="subscription",
            rating=4.0, completion_rate=75,
        ),
        LearningResource(
            type="course", title=f"{skill.name} Tutorial", provider="YouTube",
            duration="2-4 weeks", difficulty="beginner", cost="free",
            rating=3.8, completion_rate=85,
        ),
        LearningResource(
            type="practice", title=f"{skill.name} Exercises", provider="Various Platforms",
            duration="Ongoing", difficulty="intermediate", cost="free",
            rating=4.2, completion_rate=70,
        ),
    ]


class SkillAnalysisEngine(BaseEngine):
    engine_name = "skill_analyzer"

    def analyze(
        self,
        user_skills: list[UserSkill],
        skill_catalog: list[Skill],
        job_title: str | None = None,
        industry: str | None = None,
    ) -> SkillAnalysisResult:
        gaps = self.identify_gaps(user_skills, skill_catalog, job_title, industry)
        strengths = self.identify_strengths(user_skills)

        logger.debug(
            "skill analysis: %d held, %d catalog, %d gaps, %d strengths",
            len(user_skills), len(skill_catalog), len(gaps), len(strengths),
        )

        return SkillAnalysisResult(
            skill_gaps=gaps,
            strength_areas=strengths,
            overall_score=self.overall_score(user_skills),
            recommendations=self._recommendations(gaps, strengths, user_skills),
            market_analysis=self._market_analysis(user_skills, industry),
            career_path_suggestions=self._career_suggestions(user_skills),
        )

    # -- gaps ---------------------------------------------------------------

    def importance(self, skill: Skill, job_title: str | None, industry: str | None) -> float:
        """Base 50 plus every matching title and industry rule bonus, capped at 100."""
        rules = self.reference.tables.importance_rules
        skill_name = normalize(skill.name)
        score = BASE_IMPORTANCE

        for text, rule_set in ((job_title, rules.job_title), (industry, rules.industry)):
            if not normalize(text):
                continue
            for rule in rule_set:
                if not names_match(rule.keyword, text):
                    continue
                by_name = skill_name in {normalize(s) for s in rule.skills}
                by_category = any(names_match(c, skill.category) for c in rule.categories)
                if by_name or by_category:
                    score += rule.bonus

        return min(100.0, score)

    def identify_gaps(
        self,
        user_skills: list[UserSkill],
        skill_catalog: list[Skill],
        job_title: str | None = None,
        industry: str | None = None,
    ) -> list[SkillGapAnalysis]:
        ref = self.reference
        inclusion = ref.thresholds.gap_inclusion
        held_ids = {us.skill_id for us in user_skills}

        gaps = []
        for skill in skill_catalog:
            if skill.id in held_ids:
                continue

            market = ref.skill(skill.name)
            importance = self.importance(skill, job_title, industry)
            if not (importance > inclusion.importance or market.demand > inclusion.demand):
                continue

            curated = ref.learning_resources(skill.name)
            resources = (
                [LearningResource(**r.model_dump()) for r in curated]
                if curated else generic_resources(skill)
            )
            gaps.append(SkillGapAnalysis(
                skill=skill,
                importance_score=importance,
                market_demand=_pct(market.demand),
                gap_severity=gap_severity(importance, market.demand, ref.thresholds),
                learning_resources=resources,
                estimated_learning_time=estimate_learning_time(market.learning_difficulty),
                salary_impact=round(market.salary_impact * 100 - 100),
            ))

        # sorted() is stable: equal sums keep catalog order
        gaps = sorted(gaps, key=lambda g: -(g.importance_score + g.market_demand))
        return gaps[: ref.thresholds.max_skill_gaps]

    # -- strengths ----------------------------------------------------------

    def identify_strengths(self, user_skills: list[UserSkill]) -> list[SkillStrength]:
        strengths = []
        for us in user_skills:
            if us.proficiency_level < STRENGTH_PROFICIENCY:
                continue
            market = self.reference.skill(us.skill.name)
            advantage = np.mean([
                us.proficiency_level / PROFICIENCY_MAX,
                min(us.years_experience / 5, 1.0),
                market.demand / 100,
            ]) * 100
            strengths.append(SkillStrength(
                skill=us.skill,
                proficiency_level=us.proficiency_level,
                years_experience=us.years_experience,
                market_value=_pct(market.demand),
                competitive_advantage=_pct(round(float(advantage))),
                future_proofing=_pct(round(market.automation_resistance * market.demand_growth * 50)),
            ))
        return sorted(strengths, key=lambda s: -s.market_value)

    def overall_score(self, user_skills: list[UserSkill]) -> int:
        if not user_skills:
            return 0
        scores = []
        for us in user_skills:
            market = self.reference.skill(us.skill.name)
            scores.append(
                (us.proficiency_level / PROFICIENCY_MAX) * (market.demand / 100) * market.salary_impact * 100
            )
        return int(round(_pct(float(np.mean(scores)))))

    # -- recommendations ----------------------------------------------------

    def _recommendations(
        self,
        gaps: list[SkillGapAnalysis],
        strengths: list[SkillStrength],
        user_skills: list[UserSkill],
    ) -> list[SkillRecommendation]:
        ref = self.reference
        recs: list[SkillRecommendation] = []

        for index, gap in enumerate(gaps[:3]):
            market = ref.skill(gap.skill.name)
            recs.append(SkillRecommendation(
                type="learn_new",
                skill=gap.skill,
                priority=5 - index,
                timeframe=SEVERITY_TIMEFRAMES[gap.gap_severity],
                description=(
                    f"Learn {gap.skill.name} to close a {gap.gap_severity} skill gap. "
                    f"Expected {gap.salary_impact:.0f}% salary increase."
                ),
                expected_roi=round(market.salary_impact * 20 + gap.market_demand * 0.2),
            ))

        mean_demand = ref.mean_skill_demand()
        improvable = [
            us for us in user_skills
            if us.proficiency_level < STRENGTH_PROFICIENCY
            and ref.skill(us.skill.name).demand > mean_demand
        ]
        improvable.sort(key=lambda us: us.proficiency_level)
        for us in improvable[:2]:
            recs.append(SkillRecommendation(
                type="improve_existing",
                skill=us.skill,
                priority=3,
                timeframe="2-4 months",
                description=f"Improve your {us.skill.name} skills from level {us.proficiency_level} to expert level",
                expected_roi=round(ref.skill(us.skill.name).salary_impact * 20),
            ))

        for strength in strengths[:2]:
            recs.append(SkillRecommendation(
                type="maintain_strength",
                skill=strength.skill,
                priority=2,
                timeframe="Ongoing",
                description=f"Continue developing {strength.skill.name} expertise to maintain competitive advantage",
                expected_roi=15,
            ))

        growth_cutoff = ref.thresholds.specialize_growth
        for gap in gaps:
            if ref.skill(gap.skill.name).demand_growth > growth_cutoff:
                recs.append(SkillRecommendation(
                    type="specialize_deeper",
                    skill=gap.skill,
                    priority=4,
                    timeframe="6-12 months",
                    description=(
                        f"Specialize in {gap.skill.name}, a rapidly growing field "
                        f"with a {gap.salary_impact:.0f}% salary premium"
                    ),
                    expected_roi=gap.salary_impact,
                ))
                break

        return sorted(recs, key=lambda r: -r.priority)

    # -- market view --------------------------------------------------------

    def _market_analysis(self, user_skills: list[UserSkill], industry: str | None) -> MarketAnalysis:
        ref = self.reference
        markets = [ref.skill(us.skill.name) for us in user_skills]

        total_value = sum(
            m.demand * m.salary_impact * us.proficiency_level / PROFICIENCY_MAX
            for m, us in zip(markets, user_skills)
        )
        categories = {normalize(us.skill.category) for us in user_skills} - {""}
        resistance = float(np.mean([m.automation_resistance for m in markets])) * 100 if markets else 0.0
        emerging = sum(1 for m in markets if m.demand_growth > ref.thresholds.emerging_skill_growth)

        return MarketAnalysis(
            total_market_value=round(total_value),
            skill_diversity_score=_pct(len(categories) * 20),
            automation_resistance=_pct(round(resistance)),
            industry_alignment=self._industry_alignment(user_skills, industry),
            emerging_skills_gap=_pct(100 - emerging * 25),
        )

    def _industry_alignment(self, user_skills: list[UserSkill], industry: str | None) -> float:
        """+20 for each expected industry skill found among held skill names."""
        if not normalize(industry):
            return 50.0
        held = [us.skill.name for us in user_skills]
        hits = sum(
            1 for expected in self.reference.expected_skills(industry)
            if any(names_match(expected, name) for name in held)
        )
        return _pct(hits * 20)

    def _career_suggestions(self, user_skills: list[UserSkill]) -> list[CareerPathSuggestion]:
        held = {normalize(us.skill.name) for us in user_skills}
        suggestions = []
        for family in self.reference.tables.skill_career_paths:
            if held & {normalize(t) for t in family.triggers}:
                suggestions.extend(CareerPathSuggestion(**p.model_dump()) for p in family.paths)
        return suggestions[:MAX_CAREER_SUGGESTIONS]
