"""Lazy-loading engine registry.

Global singletons, created and bound to the configured reference data on
first use.
"""

import logging

from services.pipeline.base import BaseEngine

logger = logging.getLogger(__name__)

_registry: dict[str, BaseEngine] = {}


def _create_engine(name: str) -> BaseEngine:
    """Factory: create an engine by name with deferred imports."""
    if name == "risk_predictor":
        from services.pipeline.risk_predictor import RiskPredictionEngine
        return RiskPredictionEngine()
    elif name == "skill_analyzer":
        from services.pipeline.skill_analyzer import SkillAnalysisEngine
        return SkillAnalysisEngine()
    elif name == "career_recommender":
        from services.pipeline.career_recommender import CareerRecommendationEngine
        return CareerRecommendationEngine()
    elif name == "report_generator":
        from config import settings
        from services.pipeline.report_generator import ReportGenerator
        return ReportGenerator(report_version=settings.report_version)
    else:
        raise ValueError(f"Unknown engine: {name}")


def get_engine(name: str) -> BaseEngine:
    """Get an engine by name, creating and loading it on first access."""
    if name not in _registry:
        _registry[name] = _create_engine(name)
    engine = _registry[name]
    engine.ensure_loaded()
    return engine


def preload(*names: str) -> None:
    """Pre-load multiple engines (e.g. at startup)."""
    for name in names:
        get_engine(name)


def clear() -> None:
    """Drop all engines. Useful for testing."""
    _registry.clear()
