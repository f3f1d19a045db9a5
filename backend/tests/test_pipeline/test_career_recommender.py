"""Tests for the Career Recommendation Engine."""

import pytest

from models.schemas.prediction import PredictionFactors, PredictionResult
from models.schemas.profile import Profile, Skill
from models.schemas.skill_analysis import SkillAnalysisResult, SkillGapAnalysis
from services.pipeline.career_recommender import CareerRecommendationEngine
from services.pipeline.risk_predictor import RiskPredictionEngine
from services.pipeline.skill_analyzer import SkillAnalysisEngine


@pytest.fixture
def engine(reference):
    return CareerRecommendationEngine(reference)


@pytest.fixture
def engineer_inputs(reference, engineer_profile, engineer_skills, calm_market, catalog):
    prediction = RiskPredictionEngine(reference).predict(
        engineer_profile, engineer_skills, market_conditions=calm_market
    )
    analysis = SkillAnalysisEngine(reference).analyze(
        engineer_skills, catalog, engineer_profile.job_title, engineer_profile.industry
    )
    return engineer_profile, engineer_skills, prediction, analysis


@pytest.fixture
def retail_inputs(reference, retail_profile, catalog):
    prediction = RiskPredictionEngine(reference).predict(retail_profile, [])
    analysis = SkillAnalysisEngine(reference).analyze(
        [], catalog, retail_profile.job_title, retail_profile.industry
    )
    return retail_profile, [], prediction, analysis


class TestRecommendations:
    def test_skill_development_from_top_gaps(self, engine, engineer_inputs):
        result = engine.recommend(*engineer_inputs)
        recs = result.recommendations
        assert [r.type for r in recs] == ["skill_development"] * 3
        assert [r.title for r in recs] == [
            "Develop JavaScript Skills",
            "Develop Cybersecurity Skills",
            "Develop Machine Learning Skills",
        ]
        assert [r.priority for r in recs] == [5, 4, 3]
        assert recs[0].risk_reduction == 30
        assert recs[0].estimated_timeline == "1-3 months"  # critical gap
        assert recs[1].estimated_timeline == "3-6 months"
        assert recs[0].resources  # carried over from the gap

    def test_unstable_industry_triggers_switch_upgrade_and_pivot(self, engine, retail_inputs):
        result = engine.recommend(*retail_inputs)
        types = [r.type for r in result.recommendations]
        assert types.count("industry_switch") == 2
        assert "role_upgrade" in types
        assert "career_pivot" in types

        switches = [r for r in result.recommendations if r.type == "industry_switch"]
        assert [r.title for r in switches] == [
            "Consider Transitioning to Technology",
            "Consider Transitioning to Healthcare",
        ]
        assert all(r.risk_reduction == 40 for r in switches)

        pivot = next(r for r in result.recommendations if r.type == "career_pivot")
        assert pivot.risk_reduction == 45
        upgrade = next(r for r in result.recommendations if r.type == "role_upgrade")
        assert upgrade.risk_reduction == 35

    def test_sorted_by_priority(self, engine, retail_inputs):
        priorities = [r.priority for r in engine.recommend(*retail_inputs).recommendations]
        assert priorities == sorted(priorities, reverse=True)

    def test_risk_reduction_in_range(self, engine, retail_inputs):
        for rec in engine.recommend(*retail_inputs).recommendations:
            assert 0 <= rec.risk_reduction <= 100

    def test_pivot_uses_role_vulnerability_only(self, engine):
        prediction = PredictionResult(
            risk_level="low", factors=PredictionFactors(role_vulnerability=61)
        )
        result = engine.recommend(Profile(industry="Healthcare"), [], prediction, SkillAnalysisResult())
        assert [r.type for r in result.recommendations] == ["career_pivot"]

    @pytest.mark.parametrize("score,posted_level,expected", [
        (95, "low", ["role_upgrade"]),
        (10, "critical", []),
    ])
    def test_role_upgrade_follows_score(self, engine, score, posted_level, expected):
        prediction = PredictionResult(risk_score=score, risk_level=posted_level)
        result = engine.recommend(Profile(industry="Healthcare"), [], prediction, SkillAnalysisResult())
        assert [r.type for r in result.recommendations] == expected

    def test_posted_gap_scores_are_clamped(self, engine):
        gap = SkillGapAnalysis(
            skill=Skill(id="rust", name="Rust"),
            importance_score=-200,
            market_demand=150,
            gap_severity="low",
        )
        analysis = SkillAnalysisResult(skill_gaps=[gap])
        result = engine.recommend(Profile(industry="Healthcare"), [], PredictionResult(), analysis)
        dev = next(r for r in result.recommendations if r.type == "skill_development")
        assert dev.risk_reduction == 0


class TestCareerPaths:
    def test_best_match_first(self, engine, engineer_inputs):
        paths = engine.recommend(*engineer_inputs).career_paths
        assert len(paths) == 5
        assert paths[0].title == "AI/ML Engineer"

    def test_titles_unique(self, engine, retail_inputs):
        titles = [p.title for p in engine.recommend(*retail_inputs).career_paths]
        assert len(titles) == len(set(titles))
        assert len(titles) <= 5

    def test_unknown_industry_still_gets_high_growth_paths(self, engine):
        result = engine.recommend(Profile(industry="Space Mining"), [], PredictionResult(), SkillAnalysisResult())
        assert result.career_paths


class TestActionPlan:
    def test_empty_gaps_still_produce_a_plan(self, engine):
        result = engine.recommend(Profile(), [], PredictionResult(), SkillAnalysisResult())
        plan = result.action_plan
        assert len(plan.immediate) == 3
        assert [a.task for a in plan.short_term] == [
            "Apply to 5-10 relevant positions",
            "Attend industry conferences or meetups",
        ]
        assert plan.long_term[-1].task == "Evaluate progress and adjust career strategy"
        assert plan.long_term[-1].timeline == "12 months"

    def test_short_term_from_top_two_gaps(self, engine, engineer_inputs):
        plan = engine.recommend(*engineer_inputs).action_plan
        assert plan.short_term[0].task == "Complete JavaScript certification or course"
        assert plan.short_term[0].priority == "high"
        assert plan.short_term[0].timeline == "2-3 months"
        assert plan.short_term[1].priority == "medium"
        assert len(plan.short_term) == 4

    def test_long_term_from_high_priority_recommendations(self, engine, engineer_inputs):
        result = engine.recommend(*engineer_inputs)
        high = [r for r in result.recommendations if r.priority >= 4]
        long_term = result.action_plan.long_term
        assert [a.task for a in long_term[:-1]] == [r.title for r in high]
        assert long_term[0].priority == "high"
        assert long_term[0].category == "skill"
