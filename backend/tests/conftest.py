"""Shared test configuration, pytest markers and fixtures."""

import pytest

from config import DEFAULT_REFERENCE_DATA
from models.schemas.profile import MarketConditions, Profile, Skill, UserSkill
from services.reference_data import load_reference_data


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: runs every engine end to end through the orchestrator"
    )


def make_user_skill(name: str, proficiency: int = 3, years: int = 1, category: str = "") -> UserSkill:
    skill_id = name.lower().replace(" ", "-")
    return UserSkill(
        skill_id=skill_id,
        skill=Skill(id=skill_id, name=name, category=category),
        proficiency_level=proficiency,
        years_experience=years,
    )


@pytest.fixture
def reference():
    """The bundled reference data file."""
    return load_reference_data(str(DEFAULT_REFERENCE_DATA))


@pytest.fixture
def catalog():
    return [
        Skill(id="python", name="Python", category="Programming"),
        Skill(id="javascript", name="JavaScript", category="Programming"),
        Skill(id="machine-learning", name="Machine Learning", category="AI"),
        Skill(id="cybersecurity", name="Cybersecurity", category="Security"),
        Skill(id="leadership", name="Leadership", category="Soft Skills"),
        Skill(id="angular", name="Angular", category="Frontend"),
        Skill(id="basket-weaving", name="Basket Weaving", category="Crafts"),
    ]


@pytest.fixture
def engineer_profile():
    return Profile(
        full_name="Jordan Lee",
        job_title="Software Engineer",
        company="Acme",
        industry="Technology",
        experience_years=5,
    )


@pytest.fixture
def engineer_skills():
    return [make_user_skill("Python", proficiency=4, years=3, category="Programming")]


@pytest.fixture
def calm_market():
    return MarketConditions(recession=False, inflation=3.2, unemployment=4.1)


@pytest.fixture
def retail_profile():
    return Profile(job_title="Administrative Assistant", industry="Retail", experience_years=1)


@pytest.fixture
def user_skill():
    """Factory for UserSkill entries keyed by skill name."""
    return make_user_skill
