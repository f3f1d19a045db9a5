"""Tests for the Skill Analysis Engine."""

import pytest

from models.schemas.profile import Skill
from models.schemas.skill_analysis import SkillAnalysisResult
from services.pipeline.skill_analyzer import (
    SkillAnalysisEngine,
    estimate_learning_time,
    gap_severity,
)

SEVERITY_ORDER = ["low", "medium", "high", "critical"]


@pytest.fixture
def engine(reference):
    return SkillAnalysisEngine(reference)


@pytest.fixture
def engineer_result(engine, engineer_skills, catalog):
    return engine.analyze(engineer_skills, catalog, job_title="Software Engineer", industry="Technology")


class TestGaps:
    def test_held_skills_are_not_gaps(self, engineer_result):
        names = [g.skill.name for g in engineer_result.skill_gaps]
        assert "Python" not in names
        assert len(names) == 6

    def test_sorted_by_importance_plus_demand(self, engineer_result):
        names = [g.skill.name for g in engineer_result.skill_gaps]
        assert names == ["JavaScript", "Cybersecurity", "Machine Learning", "Leadership", "Angular", "Basket Weaving"]

    def test_title_and_industry_bonuses_capped(self, engineer_result):
        js = engineer_result.skill_gaps[0]
        assert js.importance_score == 100  # 50 + 35 + 25, capped
        assert js.market_demand == 90
        assert js.gap_severity == "critical"

    def test_unknown_skill_uses_default_market_data(self, engineer_result):
        weaving = engineer_result.skill_gaps[-1]
        assert weaving.market_demand == 50
        assert weaving.gap_severity == "low"
        assert weaving.estimated_learning_time == "2-3 months"
        assert [r.provider for r in weaving.learning_resources] == ["Coursera", "YouTube", "Various Platforms"]

    def test_salary_impact_and_curated_resources(self, engine, catalog):
        result = engine.analyze([], catalog)
        cyber = next(g for g in result.skill_gaps if g.skill.name == "Cybersecurity")
        assert cyber.salary_impact == 60
        assert cyber.learning_resources[0].title == "CompTIA Security+"
        assert cyber.estimated_learning_time == "4-6 months"

    def test_stable_sort_keeps_catalog_order(self, engine):
        catalog = [Skill(id=f"s{i}", name=f"Unlisted Skill {i}") for i in range(5)]
        result = engine.analyze([], catalog)
        assert [g.skill.id for g in result.skill_gaps] == ["s0", "s1", "s2", "s3", "s4"]

    def test_capped_at_twelve(self, engine, reference):
        catalog = [Skill(id=name, name=name) for name in reference.skill_names()]
        result = engine.analyze([], catalog)
        assert len(result.skill_gaps) == 12

    def test_no_skills_still_finds_gaps(self, engine, catalog):
        result = engine.analyze([], catalog)
        assert result.overall_score == 0
        assert result.skill_gaps
        catalog_ids = {s.id for s in catalog}
        assert all(g.skill.id in catalog_ids for g in result.skill_gaps)

    def test_empty_catalog(self, engine, engineer_skills):
        result = engine.analyze(engineer_skills, [])
        assert result.skill_gaps == []
        assert isinstance(result, SkillAnalysisResult)

    def test_everything_empty(self, engine):
        result = engine.analyze([], [])
        assert result.skill_gaps == []
        assert result.strength_areas == []
        assert result.overall_score == 0
        assert result.recommendations == []


class TestGapSeverity:
    @pytest.mark.parametrize("importance,demand,expected", [
        (100, 80, "critical"),
        (80, 70, "high"),
        (60, 50, "medium"),
        (50, 50, "low"),
    ])
    def test_buckets(self, importance, demand, expected):
        assert gap_severity(importance, demand) == expected

    def test_monotonic_in_both_inputs(self):
        for fixed in range(0, 101, 10):
            row = [SEVERITY_ORDER.index(gap_severity(fixed, d)) for d in range(101)]
            col = [SEVERITY_ORDER.index(gap_severity(i, fixed)) for i in range(101)]
            assert row == sorted(row)
            assert col == sorted(col)

    @pytest.mark.parametrize("difficulty,bucket", [
        (1, "2-4 weeks"), (3, "2-4 weeks"), (5, "2-3 months"), (7, "4-6 months"), (9, "6-12 months"),
    ])
    def test_learning_time(self, difficulty, bucket):
        assert estimate_learning_time(difficulty) == bucket


class TestStrengths:
    def test_strength_values(self, engineer_result):
        [python] = engineer_result.strength_areas
        assert python.market_value == 92
        assert python.competitive_advantage == 77  # mean(0.8, 0.6, 0.92) * 100
        assert python.future_proofing == 60  # 0.8 * 1.5 * 50

    def test_only_proficiency_four_and_up(self, engine, user_skill):
        skills = [user_skill("Python", 3), user_skill("SQL", 4), user_skill("AWS", 5)]
        result = engine.analyze(skills, [])
        assert [s.skill.name for s in result.strength_areas] == ["AWS", "SQL"]

    def test_overall_score(self, engineer_result):
        # (4/5) * 0.92 * 1.3 * 100
        assert engineer_result.overall_score == 96


class TestRecommendations:
    def test_priority_order(self, engineer_result):
        recs = engineer_result.recommendations
        assert [(r.type, r.skill.name) for r in recs] == [
            ("learn_new", "JavaScript"),
            ("learn_new", "Cybersecurity"),
            ("specialize_deeper", "Cybersecurity"),
            ("learn_new", "Machine Learning"),
            ("maintain_strength", "Python"),
        ]
        priorities = [r.priority for r in recs]
        assert priorities == sorted(priorities, reverse=True)

    def test_learn_new_timeframe_follows_severity(self, engineer_result):
        js = engineer_result.recommendations[0]
        assert js.timeframe == "1-3 months"
        assert js.priority == 5

    def test_improve_existing_above_mean_demand(self, engine, user_skill):
        skills = [
            user_skill("JavaScript", proficiency=3),
            user_skill("Python", proficiency=2),
            user_skill("Angular", proficiency=1),  # demand below the table mean
        ]
        result = engine.analyze(skills, [])
        improve = [r for r in result.recommendations if r.type == "improve_existing"]
        assert [r.skill.name for r in improve] == ["Python", "JavaScript"]
        assert all(r.priority == 3 for r in improve)
        # whole-number ROI, same rounding as learn_new
        assert [r.expected_roi for r in improve] == [26, 24]


class TestMarketAnalysis:
    def test_engineer(self, engineer_result):
        m = engineer_result.market_analysis
        assert m.total_market_value == 96
        assert m.skill_diversity_score == 20
        assert m.automation_resistance == 80
        assert m.industry_alignment == 20
        assert m.emerging_skills_gap == 100  # Python grows 1.5, not above it

    def test_no_industry_is_neutral(self, engine, engineer_skills):
        assert engine.analyze(engineer_skills, []).market_analysis.industry_alignment == 50

    def test_emerging_skills_reduce_gap(self, engine, user_skill):
        skills = [user_skill("AWS"), user_skill("Rust"), user_skill("Cybersecurity")]
        assert engine.analyze(skills, []).market_analysis.emerging_skills_gap == 25

    def test_scores_in_range(self, engine, user_skill, reference):
        skills = [user_skill(n, proficiency=5, category=n) for n in reference.skill_names()]
        m = engine.analyze(skills, [], industry="Technology").market_analysis
        for value in (m.skill_diversity_score, m.automation_resistance, m.industry_alignment, m.emerging_skills_gap):
            assert 0 <= value <= 100


class TestCareerSuggestions:
    def test_python_unlocks_ai_paths(self, engineer_result):
        titles = [s.title for s in engineer_result.career_path_suggestions]
        assert titles == ["Machine Learning Engineer", "Data Scientist"]

    def test_capped_at_four(self, engine, user_skill):
        skills = [user_skill("Python"), user_skill("Cybersecurity"), user_skill("AWS")]
        assert len(engine.analyze(skills, []).career_path_suggestions) == 4

    def test_none_without_triggers(self, engine, user_skill):
        assert engine.analyze([user_skill("Leadership")], []).career_path_suggestions == []
