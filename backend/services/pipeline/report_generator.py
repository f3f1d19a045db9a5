"""Report Generator: Markdown sections plus chart data from one assessment.

Every section except the Appendix is a pure function of the report data.
The Appendix carries the generation timestamp, taken from the injected clock.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from models.schemas.career import ActionItem
from models.schemas.prediction import PredictionFactors
from models.schemas.profile import PROFICIENCY_MAX, PROFICIENCY_MIN, UserSkill
from models.schemas.reference import Thresholds
from models.schemas.report import ChartData, ReportData, ReportSection
from services.pipeline.base import BaseEngine
from services.pipeline.risk_predictor import FACTOR_NAMES, risk_level
from services.reference_data import ReferenceData

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"

FACTOR_LABELS = {
    "industry_risk": "Industry Risk",
    "company_health": "Company Health",
    "role_vulnerability": "Role Vulnerability",
    "skill_relevance": "Skill Relevance",
    "experience_level": "Experience Level",
    "market_demand": "Market Demand",
    "economic_indicators": "Economic Indicators",
    "network_strength": "Network Strength",
    "adaptability_score": "Adaptability",
    "geographic_risk": "Geographic Risk",
}

PROFICIENCY_LABELS = ["Novice", "Beginner", "Intermediate", "Advanced", "Expert"]

LEVEL_WORDING = {"low": "Low", "medium": "Moderate", "high": "High", "critical": "Critical"}

FACTOR_DESCRIPTIONS = {
    "industry_risk": {
        "Low": "Your industry shows strong stability with minimal layoff risk.",
        "Moderate": "Your industry has moderate stability with some economic sensitivity.",
        "High": "Your industry faces significant challenges and higher layoff rates.",
        "Critical": "Your industry is experiencing major disruption with elevated layoff risk.",
    },
    "company_health": {
        "Low": "Your company appears financially healthy with strong market position.",
        "Moderate": "Your company shows mixed financial indicators requiring monitoring.",
        "High": "Your company may be facing financial challenges affecting job security.",
        "Critical": "Your company shows concerning financial health indicators.",
    },
    "role_vulnerability": {
        "Low": "Your role has low automation risk and strong job security.",
        "Moderate": "Your role has some automation risk but remains relatively secure.",
        "High": "Your role faces significant automation threats requiring skill development.",
        "Critical": "Your role is highly vulnerable to automation and technological disruption.",
    },
    "skill_relevance": {
        "Low": "Your skills are highly relevant and in-demand in the current market.",
        "Moderate": "Your skills are moderately relevant but could benefit from updates.",
        "High": "Your skills need significant updating to remain competitive.",
        "Critical": "Your skills are becoming obsolete and require immediate attention.",
    },
    "experience_level": {
        "Low": "Your experience level provides good job security.",
        "Moderate": "Your experience level offers moderate protection.",
        "High": "Your experience level may present some challenges in the job market.",
        "Critical": "Your experience level requires strategic career positioning.",
    },
    "market_demand": {
        "Low": "Strong market demand exists for your skill set.",
        "Moderate": "Moderate market demand for your skills with room for improvement.",
        "High": "Limited market demand for your current skills.",
        "Critical": "Very low market demand requiring immediate skill development.",
    },
}

SUCCESS_METRICS = [
    "Reduction in overall risk score",
    "Improvement in skill proficiency levels",
    "Completion of learning objectives",
    "Network expansion metrics",
    "Job market positioning improvements",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _bullets(lines: list[str], empty: str = "- None identified") -> str:
    return "\n".join(f"- {line}" for line in lines) if lines else empty


def _label(value: str) -> str:
    return value.replace("_", " ").upper()


def _actions(items: list[ActionItem]) -> str:
    return "\n\n".join(
        f"{i}. **{a.task}** ({a.priority.upper()} priority)\n"
        f"   - Timeline: {a.timeline}\n"
        f"   - Category: {_label(a.category)}"
        for i, a in enumerate(items, start=1)
    )


def factor_wording(score: float, thresholds: Thresholds | None = None) -> str:
    return LEVEL_WORDING[risk_level(score, thresholds)]


def skill_categories(user_skills: list[UserSkill]) -> list[str]:
    """Distinct non-empty categories in first-seen order."""
    seen: list[str] = []
    for us in user_skills:
        if us.skill.category and us.skill.category not in seen:
            seen.append(us.skill.category)
    return seen


class ReportGenerator(BaseEngine):
    engine_name = "report_generator"

    def __init__(
        self,
        reference: ReferenceData | None = None,
        now: Callable[[], datetime] = _utcnow,
        report_version: str = "1.0",
    ) -> None:
        super().__init__(reference)
        self._now = now
        self.report_version = report_version

    def generate(self, data: ReportData) -> list[ReportSection]:
        sections = [
            self._executive_summary(data),
            self._risk_assessment(data),
            self._skill_analysis(data),
            self._career_recommendations(data),
            self._action_plan(data),
            self._appendix(data),
        ]
        logger.debug("report generated: %d sections", len(sections))
        return sections

    @staticmethod
    def render_markdown(sections: list[ReportSection]) -> str:
        return "\n\n---\n\n".join(s.content for s in sections) + "\n"

    # -- sections -----------------------------------------------------------

    def _executive_summary(self, data: ReportData) -> ReportSection:
        p = data.profile
        prediction = data.prediction
        skills = data.skill_analysis
        f = prediction.factors
        critical = sum(1 for g in skills.skill_gaps if g.gap_severity == "critical")
        immediate = _bullets([a.task for a in data.career_recommendations.action_plan.immediate[:3]])

        experience = f"{p.experience_years} years" if p.experience_years is not None else NOT_SPECIFIED
        position = p.job_title or NOT_SPECIFIED
        if p.company:
            position = f"{position} at {p.company}"

        content = f"""# Executive Summary

**Professional Profile:** {p.full_name or NOT_SPECIFIED}
**Position:** {position}
**Industry:** {p.industry or NOT_SPECIFIED}
**Experience:** {experience}

## Key Findings

Your current layoff risk level is **{prediction.risk_level.capitalize()}** with a risk score of **{prediction.risk_score}/100** (confidence {prediction.confidence}%).

### Risk Factors:
- **Industry Risk:** {f.industry_risk:g}/100
- **Company Health:** {f.company_health:g}/100
- **Role Vulnerability:** {f.role_vulnerability:g}/100
- **Skill Relevance:** {f.skill_relevance:g}/100

### Skill Profile:
- **Total Skills Tracked:** {len(data.user_skills)}
- **Overall Skill Score:** {skills.overall_score}/100
- **Critical Skill Gaps:** {critical}
- **Strength Areas:** {len(skills.strength_areas)}

### Immediate Actions Required:
{immediate}

This report provides detailed analysis and actionable recommendations to improve your career security and reduce layoff risk."""

        return ReportSection(title="Executive Summary", content=content)

    def _factor_block(self, factors: PredictionFactors) -> str:
        blocks = []
        for name in FACTOR_NAMES:
            value = getattr(factors, name)
            block = f"### {FACTOR_LABELS[name]} ({value:g}/100)"
            wording = FACTOR_DESCRIPTIONS.get(name)
            if wording:
                block += "\n" + wording[factor_wording(value, self.reference.thresholds)]
            blocks.append(block)
        return "\n\n".join(blocks)

    def _risk_assessment(self, data: ReportData) -> ReportSection:
        ref = self.reference
        prediction = data.prediction
        trend = prediction.trend_analysis
        insights = prediction.market_insights

        industry = ref.industry(data.profile.industry)
        role = ref.role(data.profile.job_title)
        role_line = (
            f"- **Matched Role:** {role[0]} (demand growth {role[1].demand_growth:g}x)"
            if role else "- **Matched Role:** No catalog match"
        )

        content = f"""# Risk Assessment Analysis

## Overall Risk Score: {prediction.risk_score}/100

Your layoff risk has been assessed as **{prediction.risk_level.upper()}** based on multiple factors affecting job security in your industry and role.

## Risk Factor Breakdown

{self._factor_block(prediction.factors)}

## Market Context

- **Industry Automation Threat:** {industry.automation_threat:.0%}
{role_line}
- **Industry Growth:** {insights.industry_growth:g}/100
- **Role Growth:** {insights.role_growth:g}/100
- **Skill Demand Trend:** {insights.skill_demand_trend:g}/100
- **Trend:** {trend.direction} (velocity {trend.velocity:g}, projected risk {trend.projected_risk:g}/100)

## Risk Mitigation Strategies

{_bullets(prediction.recommendations)}"""

        chart = ChartData(
            type="radar",
            title="Risk Factor Analysis",
            data=[getattr(prediction.factors, name) for name in FACTOR_NAMES],
            labels=[FACTOR_LABELS[name] for name in FACTOR_NAMES],
        )
        return ReportSection(title="Risk Assessment", content=content, charts=[chart])

    def _skill_analysis(self, data: ReportData) -> ReportSection:
        analysis = data.skill_analysis
        user_skills = data.user_skills

        strengths = _bullets([
            f"**{s.skill.name}**: {s.proficiency_level}/{PROFICIENCY_MAX} proficiency, "
            f"{s.years_experience} years experience (Market Value: {s.market_value:g}%)"
            for s in analysis.strength_areas
        ])
        critical_gaps = [g for g in analysis.skill_gaps if g.gap_severity == "critical"]
        critical = _bullets([
            f"**{g.skill.name}**: critical gap (Importance: {g.importance_score:g}%, "
            f"Market Demand: {g.market_demand:g}%)"
            for g in critical_gaps
        ])
        high = _bullets([
            f"**{g.skill.name}**: {g.skill.description or g.estimated_learning_time} "
            f"(Importance: {g.importance_score:g}%)"
            for g in analysis.skill_gaps if g.gap_severity == "high"
        ][:5])
        recs = "\n\n".join(
            f"### {r.skill.name} (Priority: {r.priority}/5)\n"
            f"- **Type**: {_label(r.type)}\n"
            f"- **Timeline**: {r.timeframe}\n"
            f"- **Description**: {r.description}"
            for r in analysis.recommendations
        ) or "No skill recommendations at this time."

        content = f"""# Skill Analysis Report

## Overall Skill Score: {analysis.overall_score}/100

### Current Skill Portfolio ({len(user_skills)} skills)

#### Strength Areas ({len(analysis.strength_areas)})
{strengths}

#### Critical Skill Gaps ({len(critical_gaps)})
{critical}

#### High Priority Skill Gaps
{high}

## Skill Development Recommendations

{recs}"""

        categories = skill_categories(user_skills)
        charts = [
            ChartData(
                type="pie",
                title="Skills by Category",
                data=[sum(1 for us in user_skills if us.skill.category == c) for c in categories],
                labels=categories,
            ),
            ChartData(
                type="bar",
                title="Skill Proficiency Levels",
                data=[
                    sum(1 for us in user_skills if us.proficiency_level == level)
                    for level in range(PROFICIENCY_MIN, PROFICIENCY_MAX + 1)
                ],
                labels=PROFICIENCY_LABELS,
            ),
        ]
        return ReportSection(title="Skill Analysis", content=content, charts=charts)

    def _career_recommendations(self, data: ReportData) -> ReportSection:
        result = data.career_recommendations

        high_priority = "\n".join(
            f"#### {r.title}\n"
            f"- **Type**: {_label(r.type)}\n"
            f"- **Timeline**: {r.estimated_timeline}\n"
            f"- **Risk Reduction**: {r.risk_reduction:g}%\n"
            f"- **Description**: {r.description}\n"
            f"- **Expected Outcome**: {r.expected_outcome}\n\n"
            f"**Resources**:\n"
            + _bullets([f"{res.title} ({res.provider}) - {res.cost}" for res in r.resources]) + "\n"
            for r in result.recommendations if r.priority >= 4
        ) or "No high priority recommendations."

        paths = "\n".join(
            f"#### {p.title}\n"
            f"- **Salary Range**: {p.average_salary}\n"
            f"- **Growth Outlook**: {p.growth_outlook.upper()}\n"
            f"- **Transition Time**: {p.time_to_transition}\n"
            f"- **Difficulty**: {p.difficulty.upper()}\n"
            f"- **Description**: {p.description}\n\n"
            f"**Required Skills**: {', '.join(p.required_skills)}\n"
            for p in result.career_paths[:3]
        ) or "No alternative career paths identified."

        content = f"""# Career Recommendations

## Personalized Career Guidance

Based on your risk assessment and skill analysis, we've identified {len(result.recommendations)} key recommendations to improve your career security.

### High Priority Recommendations

{high_priority}

### Alternative Career Paths

{paths}"""

        return ReportSection(title="Career Recommendations", content=content.rstrip())

    def _action_plan(self, data: ReportData) -> ReportSection:
        plan = data.career_recommendations.action_plan

        content = f"""# Career Action Plan

## Structured Roadmap for Career Security

### Immediate Actions (Next 30 Days)
{_actions(plan.immediate)}

### Short-term Goals (1-6 Months)
{_actions(plan.short_term)}

### Long-term Strategy (6+ Months)
{_actions(plan.long_term)}

## Success Metrics

Track your progress using these key indicators:
{_bullets(SUCCESS_METRICS)}"""

        return ReportSection(title="Action Plan", content=content)

    def _appendix(self, data: ReportData) -> ReportSection:
        generated = self._now()

        content = f"""# Appendix

## Methodology

This report combines a weighted linear model, a small logistic network and a rule tree over ten risk factors:

{_bullets(list(FACTOR_LABELS.values()))}

## Disclaimer

This report provides guidance based on current market conditions and statistical analysis. Individual circumstances may vary, and this report should be used as one factor in career decision-making alongside professional career counseling.

## Report Details

- **Generated**: {generated.isoformat()}
- **Report Version**: {self.report_version}
- **Reference Data Version**: {data.prediction.reference_version or self.reference.version}
- **Confidence Level**: {data.prediction.confidence}%"""

        return ReportSection(title="Appendix", content=content)
