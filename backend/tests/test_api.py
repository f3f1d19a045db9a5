from fastapi.testclient import TestClient

from main import app
from services.reference_data import ReferenceDataError

client = TestClient(app)

PROFILE = {
    "job_title": "Software Engineer",
    "industry": "Technology",
    "experience_years": 5,
}
SKILLS = [
    {
        "skill_id": "python",
        "skill": {"id": "python", "name": "Python", "category": "Programming"},
        "proficiency_level": 4,
        "years_experience": 3,
    }
]
CATALOG = [
    {"id": "python", "name": "Python", "category": "Programming"},
    {"id": "javascript", "name": "JavaScript", "category": "Programming"},
    {"id": "cybersecurity", "name": "Cybersecurity", "category": "Security"},
]
MARKET = {"recession": False, "inflation": 3.2, "unemployment": 4.1}


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["reference_data_version"] == "2024.1"


def test_predict():
    response = client.post(
        "/predict",
        json={"profile": PROFILE, "user_skills": SKILLS, "market_conditions": MARKET},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["risk_score"] == 41
    assert data["risk_level"] == "medium"
    assert set(data["factors"]) >= {"industry_risk", "role_vulnerability", "geographic_risk"}
    assert data["trend_analysis"]["direction"] == "stable"


def test_predict_clamps_out_of_range_input():
    skills = [dict(SKILLS[0], proficiency_level=9, years_experience=-2)]
    response = client.post("/predict", json={"profile": {"experience_years": -4}, "user_skills": skills})
    assert response.status_code == 200
    assert 0 <= response.json()["risk_score"] <= 100


def test_predict_rejects_malformed_body():
    response = client.post("/predict", json={"user_skills": [{"skill_id": "x"}]})
    assert response.status_code == 422


def test_skill_analysis():
    response = client.post(
        "/skill-analysis",
        json={
            "user_skills": SKILLS,
            "skill_catalog": CATALOG,
            "job_title": "Software Engineer",
            "industry": "Technology",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert [g["skill"]["name"] for g in data["skill_gaps"]] == ["JavaScript", "Cybersecurity"]
    assert data["overall_score"] == 96


def test_career_recommendations():
    prediction = client.post("/predict", json={"profile": PROFILE, "user_skills": SKILLS}).json()
    analysis = client.post(
        "/skill-analysis", json={"user_skills": SKILLS, "skill_catalog": CATALOG}
    ).json()

    response = client.post(
        "/career-recommendations",
        json={"profile": PROFILE, "user_skills": SKILLS, "prediction": prediction, "skill_analysis": analysis},
    )
    assert response.status_code == 200
    data = response.json()
    assert len(data["action_plan"]["immediate"]) == 3
    assert data["recommendations"][0]["type"] == "skill_development"


def test_assessment_with_report():
    response = client.post(
        "/assessment",
        json={
            "profile": PROFILE,
            "user_skills": SKILLS,
            "skill_catalog": CATALOG,
            "market_conditions": MARKET,
            "include_report": True,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["prediction"]["risk_level"] == "medium"
    assert [s["title"] for s in data["report"]][0] == "Executive Summary"
    assert "# Appendix" in data["report_markdown"]


def test_reference_data_failure_returns_503(monkeypatch):
    def broken():
        raise ReferenceDataError("Reference data file not found: /nowhere.yaml")

    monkeypatch.setattr("api.dependencies.get_default_reference_data", broken)
    monkeypatch.setattr("api.router.get_default_reference_data", broken)

    response = client.post("/predict", json={"profile": PROFILE})
    assert response.status_code == 503

    health = client.get("/health").json()
    assert health["status"] == "degraded"
    assert health["reference_data_version"] == ""
