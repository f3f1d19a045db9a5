"""Reference data contract: the market tables every engine reads."""

from pydantic import BaseModel, ConfigDict, model_validator


class IndustryRisk(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_risk: float = 40.0
    volatility: float = 0.5
    growth_rate: float = 0.5
    automation_threat: float = 0.5


class IndustryOutlook(BaseModel):
    model_config = ConfigDict(frozen=True)

    stability: float
    growth: float
    future_proof: float


class RoleAutomation(BaseModel):
    model_config = ConfigDict(frozen=True)

    automation_risk: float
    ai_impact: float
    future_proof: float
    demand_growth: float = 1.0


class SkillMarket(BaseModel):
    """Market signals for one skill. Defaults are the lookup-miss values."""
    model_config = ConfigDict(frozen=True)

    demand_growth: float = 1.0  # also the skill growth rate
    future_relevance: float = 0.5
    salary_impact: float = 1.0
    automation_resistance: float = 0.5
    demand: float = 50.0  # 0-100
    learning_difficulty: int = 5  # 1-10


class ResourceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    title: str
    provider: str
    duration: str
    difficulty: str
    cost: str
    url: str | None = None
    rating: float | None = None
    completion_rate: float | None = None


class ImportanceRule(BaseModel):
    """Bonus applied when `keyword` appears in the title/industry and the skill matches."""
    model_config = ConfigDict(frozen=True)

    keyword: str
    bonus: float
    skills: list[str] = []
    categories: list[str] = []


class ImportanceRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_title: list[ImportanceRule] = []
    industry: list[ImportanceRule] = []


class CareerPathEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    required_skills: list[str]
    average_salary: str
    growth_outlook: str  # excellent, good, moderate, limited
    time_to_transition: str
    difficulty: str  # low, medium, high


class SuggestionEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    required_skills: list[str]
    time_to_transition: str
    salary_range: str
    demand_level: str


class SkillCareerFamily(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: str
    triggers: list[str]
    paths: list[SuggestionEntry]


class AdaptabilitySkills(BaseModel):
    model_config = ConfigDict(frozen=True)

    technical: list[str] = []
    soft: list[str] = []


class RecommendationTriggers(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill_relevance: float = 60
    role_vulnerability: float = 70
    industry_risk: float = 60
    company_health: float = 60
    economic_indicators: float = 60
    network_strength: float = 50
    adaptability_score: float = 50
    industry_volatility: float = 0.8


class RiskLevelCuts(BaseModel):
    """Upper bound (inclusive) of each level; anything above `high` is critical."""
    model_config = ConfigDict(frozen=True)

    low: float = 25
    medium: float = 50
    high: float = 75

    @model_validator(mode="after")
    def check_order(self) -> "RiskLevelCuts":
        if not self.low <= self.medium <= self.high:
            raise ValueError("risk level cuts must satisfy low <= medium <= high")
        return self


class GapInclusion(BaseModel):
    """A catalog skill becomes a gap when either score is above its cut."""
    model_config = ConfigDict(frozen=True)

    importance: float = 40
    demand: float = 70


class SeverityCuts(BaseModel):
    """Lower bound (inclusive) of each severity; anything below `medium` is low."""
    model_config = ConfigDict(frozen=True)

    critical: float = 90
    high: float = 75
    medium: float = 55

    @model_validator(mode="after")
    def check_order(self) -> "SeverityCuts":
        if not self.medium <= self.high <= self.critical:
            raise ValueError("gap severity cuts must satisfy medium <= high <= critical")
        return self


class Thresholds(BaseModel):
    """Tunable cut-offs. Each can be changed in the data file independently."""
    model_config = ConfigDict(frozen=True)

    risk_levels: RiskLevelCuts = RiskLevelCuts()
    gap_inclusion: GapInclusion = GapInclusion()
    gap_severity: SeverityCuts = SeverityCuts()
    max_skill_gaps: int = 12
    max_recommendations: int = 6
    future_proof_growth: float = 1.3
    demand_skill_growth: float = 1.2
    emerging_skill_growth: float = 1.5
    specialize_growth: float = 1.6
    recommendation_triggers: RecommendationTriggers = RecommendationTriggers()
    unstable_industry: float = 60
    stable_industry: float = 80
    high_growth_industry: float = 80
    career_pivot_vulnerability: float = 60


class ReferenceTables(BaseModel):
    """Raw tables as stored in the versioned YAML file."""
    model_config = ConfigDict(frozen=True)

    version: str
    industries: dict[str, IndustryRisk] = {}
    industry_outlook: dict[str, IndustryOutlook] = {}
    roles: dict[str, RoleAutomation] = {}
    skills: dict[str, SkillMarket] = {}
    learning_resources: dict[str, list[ResourceEntry]] = {}
    industry_expected_skills: dict[str, list[str]] = {}
    importance_rules: ImportanceRules = ImportanceRules()
    career_paths: dict[str, list[CareerPathEntry]] = {}
    skill_career_paths: list[SkillCareerFamily] = []
    tech_hubs: list[str] = []
    adaptability_skills: AdaptabilitySkills = AdaptabilitySkills()
    network_skills: list[str] = []
    seniority_adjustments: dict[str, float] = {}
    thresholds: Thresholds = Thresholds()
