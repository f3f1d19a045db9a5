"""Career Recommendation Engine: strategic moves, ranked career paths, action plan.

Consumes the outputs of the risk and skill engines; it never recomputes
their scores.
"""

import logging

from models.schemas.career import (
    ActionItem,
    ActionPlan,
    CareerPath,
    CareerRecommendation,
    CareerRecommendationResult,
    RecommendationResource,
)
from models.schemas.prediction import PredictionResult
from models.schemas.profile import Profile, UserSkill
from models.schemas.skill_analysis import SkillAnalysisResult
from services.pipeline.base import BaseEngine
from services.pipeline.risk_predictor import risk_level
from services.reference_data import names_match, normalize

logger = logging.getLogger(__name__)

MAX_CAREER_PATHS = 5
# Paths shown when the profile names no industry
FALLBACK_PATH_INDUSTRY = "Technology"

ROLE_UPGRADE_RESOURCES = [
    RecommendationResource(
        type="course", title="Leadership and Management Skills", provider="LinkedIn Learning",
        cost="subscription", time_commitment="3-4 weeks",
    ),
    RecommendationResource(
        type="certification", title="Project Management Professional (PMP)", provider="PMI",
        cost="paid", time_commitment="3-6 months",
    ),
]

CAREER_PIVOT_RESOURCES = [
    RecommendationResource(
        type="course", title="Strategic Thinking and Problem Solving", provider="edX",
        cost="free", time_commitment="6-8 weeks",
    ),
    RecommendationResource(
        type="networking", title="Industry Meetups and Conferences", provider="Meetup.com",
        cost="free", time_commitment="4-6 hours/month",
    ),
]

IMMEDIATE_ACTIONS = [
    ActionItem(task="Update resume and LinkedIn profile", timeline="1 week", priority="high", category="experience"),
    ActionItem(task="Start networking in target industry/role", timeline="2 weeks", priority="high", category="network"),
    ActionItem(task="Begin learning most critical skill gap", timeline="1 month", priority="high", category="skill"),
]

SHORT_TERM_ACTIONS = [
    ActionItem(task="Apply to 5-10 relevant positions", timeline="3 months", priority="medium", category="experience"),
    ActionItem(task="Attend industry conferences or meetups", timeline="4 months", priority="medium", category="network"),
]

REASSESS_ACTION = ActionItem(
    task="Evaluate progress and adjust career strategy", timeline="12 months", priority="medium", category="experience",
)


def _switch_resources(industry: str) -> list[RecommendationResource]:
    return [
        RecommendationResource(
            type="networking", title=f"{industry} Professional Networks", provider="LinkedIn",
            cost="free", time_commitment="2-3 hours/week",
        ),
        RecommendationResource(
            type="course", title=f"Introduction to {industry}", provider="Coursera",
            cost="subscription", time_commitment="4-6 weeks",
        ),
    ]


class CareerRecommendationEngine(BaseEngine):
    engine_name = "career_recommender"

    def recommend(
        self,
        profile: Profile,
        user_skills: list[UserSkill],
        prediction: PredictionResult,
        skill_analysis: SkillAnalysisResult,
    ) -> CareerRecommendationResult:
        recommendations = self._recommendations(profile, prediction, skill_analysis)
        paths = self._career_paths(profile, user_skills, skill_analysis)

        logger.debug(
            "career recommendations: %d recommendations, %d paths",
            len(recommendations), len(paths),
        )

        return CareerRecommendationResult(
            recommendations=recommendations,
            career_paths=paths,
            action_plan=self._action_plan(recommendations, skill_analysis),
        )

    def _recommendations(
        self,
        profile: Profile,
        prediction: PredictionResult,
        skill_analysis: SkillAnalysisResult,
    ) -> list[CareerRecommendation]:
        ref = self.reference
        recs: list[CareerRecommendation] = []

        for index, gap in enumerate(skill_analysis.skill_gaps[:3]):
            recs.append(CareerRecommendation(
                id=f"skill-dev-{index}",
                type="skill_development",
                title=f"Develop {gap.skill.name} Skills",
                description=f"Learn {gap.skill.name} to address critical skill gaps and improve job security",
                priority=5 - index,
                estimated_timeline="1-3 months" if gap.gap_severity == "critical" else "3-6 months",
                resources=[
                    RecommendationResource(
                        type=r.type, title=r.title, provider=r.provider,
                        cost=r.cost, time_commitment=r.duration, url=r.url,
                    )
                    for r in gap.learning_resources
                ],
                expected_outcome=f"Increase proficiency in {gap.skill.name} and improve market competitiveness",
                risk_reduction=max(0, min(100, round(gap.importance_score * 0.3))),
            ))

        outlook = ref.industry_outlook(profile.industry)
        if outlook is not None and outlook.stability < ref.thresholds.unstable_industry:
            for index, (industry, target) in enumerate(self._stable_industries()):
                recs.append(CareerRecommendation(
                    id=f"industry-switch-{index}",
                    type="industry_switch",
                    title=f"Consider Transitioning to {industry}",
                    description=(
                        f"{industry} offers better stability ({target.stability:g}%) "
                        f"and growth potential ({target.growth:g}%)"
                    ),
                    priority=4,
                    estimated_timeline="6-18 months",
                    resources=_switch_resources(industry),
                    expected_outcome="Transition to a more stable industry with better long-term prospects",
                    risk_reduction=40,
                ))

        # the level always follows the score, whatever level a posted snapshot carries
        if risk_level(prediction.risk_score, ref.thresholds) in ("high", "critical"):
            recs.append(CareerRecommendation(
                id="role-upgrade",
                type="role_upgrade",
                title="Pursue Leadership or Senior Roles",
                description="Move into management or senior technical positions to reduce layoff risk",
                priority=3,
                estimated_timeline="6-12 months",
                resources=ROLE_UPGRADE_RESOURCES,
                expected_outcome="Advance to senior roles with better job security and compensation",
                risk_reduction=35,
            ))

        if prediction.factors.role_vulnerability > ref.thresholds.career_pivot_vulnerability:
            recs.append(CareerRecommendation(
                id="career-pivot",
                type="career_pivot",
                title="Pivot to Automation-Resistant Roles",
                description="Transition to roles that require human creativity, strategy, or interpersonal skills",
                priority=4,
                estimated_timeline="8-15 months",
                resources=CAREER_PIVOT_RESOURCES,
                expected_outcome="Move to roles less susceptible to automation and technological disruption",
                risk_reduction=45,
            ))

        return sorted(recs, key=lambda r: -r.priority)

    def _stable_industries(self):
        """The two stable industries (stability > 80) with the highest growth."""
        ref = self.reference
        stable = [
            (name, o) for name, o in ref.outlook_items()
            if o.stability > ref.thresholds.stable_industry
        ]
        stable.sort(key=lambda item: -item[1].growth)
        return stable[:2]

    def _career_paths(
        self,
        profile: Profile,
        user_skills: list[UserSkill],
        skill_analysis: SkillAnalysisResult,
    ) -> list[CareerPath]:
        ref = self.reference
        current = profile.industry if normalize(profile.industry) else FALLBACK_PATH_INDUSTRY

        candidates = ref.career_paths(current)
        for industry, outlook in ref.outlook_items():
            if outlook.growth > ref.thresholds.high_growth_industry and normalize(industry) != normalize(current):
                candidates.extend(ref.career_paths(industry))

        held = [us.skill.name for us in user_skills]
        strong = [s.skill.name for s in skill_analysis.strength_areas]

        seen: set[str] = set()
        scored = []
        for path in candidates:
            key = normalize(path.title)
            if key in seen:
                continue
            seen.add(key)

            required = path.required_skills
            matched = sum(1 for s in required if any(names_match(s, h) for h in held))
            strengths = sum(1 for s in required if any(names_match(s, h) for h in strong))
            score = (matched / len(required) * 100 if required else 0.0) + strengths * 10
            if path.growth_outlook == "excellent":
                score += 20
            scored.append((score, path))

        scored.sort(key=lambda item: -item[0])
        return [CareerPath(**path.model_dump()) for _, path in scored[:MAX_CAREER_PATHS]]

    def _action_plan(
        self,
        recommendations: list[CareerRecommendation],
        skill_analysis: SkillAnalysisResult,
    ) -> ActionPlan:
        short_term = [
            ActionItem(
                task=f"Complete {gap.skill.name} certification or course",
                timeline="2-3 months" if gap.gap_severity == "critical" else "3-4 months",
                priority="high" if index == 0 else "medium",
                category="skill",
            )
            for index, gap in enumerate(skill_analysis.skill_gaps[:2])
        ]
        short_term.extend(SHORT_TERM_ACTIONS)

        long_term = [
            ActionItem(
                task=rec.title,
                timeline=rec.estimated_timeline,
                priority="high" if rec.priority >= 5 else "medium",
                category="skill" if rec.type == "skill_development" else "experience",
            )
            for rec in recommendations
            if rec.priority >= 4
        ]
        long_term.append(REASSESS_ACTION)

        return ActionPlan(immediate=list(IMMEDIATE_ACTIONS), short_term=short_term, long_term=long_term)
