"""Reference data loading and lookup.

The market tables ship as a versioned YAML file (see services/data/reference_v1.yaml)
and are wrapped in a ReferenceData object that engines receive at
construction time. All string keys go through one normalization step
(trim, collapse whitespace, casefold) and every lookup has a documented
fallback, so callers never see a KeyError or a None where a number is
expected.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from models.schemas.reference import (
    CareerPathEntry,
    IndustryOutlook,
    IndustryRisk,
    ReferenceTables,
    ResourceEntry,
    RoleAutomation,
    SkillMarket,
    Thresholds,
)

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY = IndustryRisk()
DEFAULT_SKILL = SkillMarket()
DEFAULT_ROLE_VULNERABILITY = 45.0


class ReferenceDataError(ValueError):
    """Raised when a reference data file is missing or malformed."""


def normalize(value: str | None) -> str:
    """Canonical form for table keys and free-text inputs."""
    return " ".join((value or "").split()).casefold()


def tokenize(value: str | None) -> list[str]:
    return normalize(value).split()


def names_match(needle: str, haystack: str) -> bool:
    """True when the normalized `needle` occurs inside the normalized `haystack`."""
    needle = normalize(needle)
    return bool(needle) and needle in normalize(haystack)


class ReferenceData:
    """Read-only lookup service over one version of the market tables."""

    def __init__(self, tables: ReferenceTables) -> None:
        self.tables = tables
        self._industries = {normalize(k): v for k, v in tables.industries.items()}
        self._outlook = {normalize(k): v for k, v in tables.industry_outlook.items()}
        self._skills = {normalize(k): v for k, v in tables.skills.items()}
        self._resources = {normalize(k): v for k, v in tables.learning_resources.items()}
        self._expected = {normalize(k): v for k, v in tables.industry_expected_skills.items()}
        self._paths = {normalize(k): v for k, v in tables.career_paths.items()}
        self._roles = [(tokenize(name), name, data) for name, data in tables.roles.items()]

    @property
    def version(self) -> str:
        return self.tables.version

    @property
    def thresholds(self) -> Thresholds:
        return self.tables.thresholds

    # -- industries ---------------------------------------------------------

    def has_industry(self, name: str | None) -> bool:
        return normalize(name) in self._industries

    def industry(self, name: str | None) -> IndustryRisk:
        return self._industries.get(normalize(name), DEFAULT_INDUSTRY)

    def industry_outlook(self, name: str | None) -> IndustryOutlook | None:
        return self._outlook.get(normalize(name))

    def outlook_items(self) -> list[tuple[str, IndustryOutlook]]:
        """(industry, outlook) pairs in table order."""
        return list(self.tables.industry_outlook.items())

    def expected_skills(self, industry: str | None) -> list[str]:
        return list(self._expected.get(normalize(industry), []))

    def career_paths(self, industry: str | None) -> list[CareerPathEntry]:
        return list(self._paths.get(normalize(industry), []))

    # -- roles --------------------------------------------------------------

    def role(self, job_title: str | None) -> tuple[str, RoleAutomation] | None:
        """Best catalog role for a free-text title by token overlap.

        A role word counts once when it is a substring of, or contains, any
        title word. Highest non-zero overlap wins; ties keep table order.
        """
        title_words = tokenize(job_title)
        if not title_words:
            return None

        best: tuple[str, RoleAutomation] | None = None
        best_overlap = 0
        for role_words, name, data in self._roles:
            overlap = sum(
                1 for rw in role_words
                if any(rw in tw or tw in rw for tw in title_words)
            )
            if overlap > best_overlap:
                best, best_overlap = (name, data), overlap
        return best

    def role_vulnerability(self, job_title: str | None) -> float:
        match = self.role(job_title)
        if match is None:
            return DEFAULT_ROLE_VULNERABILITY
        _, data = match
        return data.automation_risk + data.ai_impact * 30 - data.future_proof * 20

    # -- skills -------------------------------------------------------------

    def skill(self, name: str | None) -> SkillMarket:
        return self._skills.get(normalize(name), DEFAULT_SKILL)

    def skill_names(self) -> list[str]:
        return list(self.tables.skills.keys())

    def mean_skill_demand(self) -> float:
        if not self.tables.skills:
            return DEFAULT_SKILL.demand
        return sum(s.demand for s in self.tables.skills.values()) / len(self.tables.skills)

    def learning_resources(self, skill_name: str | None) -> list[ResourceEntry]:
        return list(self._resources.get(normalize(skill_name), []))


def _read_yaml(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ReferenceDataError(f"Reference data file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ReferenceDataError(f"Reference data file is not valid YAML: {path}") from e

    if not isinstance(payload, dict):
        raise ReferenceDataError(f"Reference data must be a mapping at the top level: {path}")
    return payload


def parse_reference_data(payload: dict) -> ReferenceData:
    """Validate an in-memory payload (e.g. a test fixture) into ReferenceData."""
    try:
        tables = ReferenceTables.model_validate(payload)
    except ValidationError as e:
        raise ReferenceDataError(f"Reference data failed validation: {e}") from e
    return ReferenceData(tables)


# Lazy-loaded reference data, keyed by file path
_reference_cache: dict[str, ReferenceData] = {}


def load_reference_data(path: str) -> ReferenceData:
    """Load and cache one reference data file."""
    if path in _reference_cache:
        return _reference_cache[path]
    data = parse_reference_data(_read_yaml(Path(path)))
    _reference_cache[path] = data
    logger.info(
        "Reference data %s loaded from %s (%d industries, %d roles, %d skills)",
        data.version, path,
        len(data.tables.industries), len(data.tables.roles), len(data.tables.skills),
    )
    return data


def get_default_reference_data() -> ReferenceData:
    """Reference data from the configured path."""
    from config import settings
    return load_reference_data(settings.reference_data_path)
