"""
Centralized configuration for the activity catalog, keyword rules and statistics.

Every tunable constant lives here. The store, engine and report builders take
an optional ``cfg`` and fall back to ``HealthLogConfig()``.
"""

from dataclasses import dataclass, field
from typing import Tuple

from healthlog.models import ActivityCategory, ActivityTypeInfo


# ---------------------------------------------------------------------------
# Predefined activity types
# ---------------------------------------------------------------------------

DEFAULT_PREDEFINED_TYPES: Tuple[ActivityTypeInfo, ...] = (
    ActivityTypeInfo("Exercise", "minutes", "Physical activity", 30, 180, ActivityCategory.EXERCISE),
    ActivityTypeInfo("Water", "liters", "Hydration", 2, 4, ActivityCategory.HYDRATION),
    ActivityTypeInfo("Sleep", "hours", "Night rest", 6, 9, ActivityCategory.SLEEP),
    ActivityTypeInfo("Meditation", "minutes", "Mindfulness practice", 5, 60, ActivityCategory.MENTAL_HEALTH),
    ActivityTypeInfo("Walking", "minutes", "Light to moderate walk", 20, 120, ActivityCategory.EXERCISE),
    ActivityTypeInfo("Stretching", "minutes", "Flexibility exercises", 10, 30, ActivityCategory.EXERCISE),
    ActivityTypeInfo("Yoga", "minutes", "Yoga practice", 15, 90, ActivityCategory.EXERCISE),
    ActivityTypeInfo("Swimming", "minutes", "Recreational or competitive swimming", 20, 120, ActivityCategory.EXERCISE),
    ActivityTypeInfo("Running", "minutes", "Light to intense running", 15, 60, ActivityCategory.EXERCISE),
    ActivityTypeInfo("Cycling", "minutes", "Recreational cycling", 30, 120, ActivityCategory.EXERCISE),
)


# ---------------------------------------------------------------------------
# Keyword rules (declarative)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KeywordRule:
    """A single inference rule: any keyword found in the lower-cased name yields `value`."""

    keywords: Tuple[str, ...]
    value: object

    def __post_init__(self):
        if not self.keywords:
            raise ValueError("KeywordRule needs at least one keyword")

    def matches(self, lowered_name: str) -> bool:
        return any(k in lowered_name for k in self.keywords)


EXERCISE_KEYWORDS = (
    "exercício", "exercicio", "exercise",
    "corrida", "running",
    "caminhada", "walking",
    "yoga",
    "musculação", "musculacao", "weightlifting",
    "natação", "natacao", "swimming",
    "academia", "gym", "fitness", "workout",
)
HYDRATION_KEYWORDS = (
    "água", "agua", "water",
    "líquido", "liquido", "fluid",
    "bebida", "drink",
    "hidratação", "hidratacao", "hydration",
)
SLEEP_KEYWORDS = ("sono", "sleep", "dormir", "descanso", "repouso")
WEIGHT_KEYWORDS = ("peso", "weight", "balança", "balanca")
PRESSURE_KEYWORDS = ("pressão", "pressao", "pressure", "sanguínea", "sanguinea")
GLUCOSE_KEYWORDS = ("glicose", "glucose", "açúcar", "acucar", "sugar")
MENTAL_HEALTH_KEYWORDS = (
    "meditação", "meditacao", "meditation",
    "mindfulness",
    "relaxamento", "relaxation",
    "respiração", "respiracao", "breathing",
)
NUTRITION_KEYWORDS = (
    "comida", "food",
    "alimento",
    "refeição", "refeicao", "meal",
    "dieta", "diet",
    "caloria", "calorie",
)
MEDICAL_KEYWORDS = PRESSURE_KEYWORDS + GLUCOSE_KEYWORDS + (
    "medicamento", "medication",
    "vitamina", "vitamin",
    "suplemento", "supplement",
)

# Order matters: first matching rule wins.
DEFAULT_UNIT_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(EXERCISE_KEYWORDS, "minutes"),
    KeywordRule(HYDRATION_KEYWORDS, "liters"),
    KeywordRule(SLEEP_KEYWORDS, "hours"),
    KeywordRule(WEIGHT_KEYWORDS, "kg"),
    KeywordRule(PRESSURE_KEYWORDS, "mmHg"),
    KeywordRule(GLUCOSE_KEYWORDS, "mg/dL"),
)

DEFAULT_CATEGORY_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(EXERCISE_KEYWORDS, ActivityCategory.EXERCISE),
    KeywordRule(HYDRATION_KEYWORDS, ActivityCategory.HYDRATION),
    KeywordRule(SLEEP_KEYWORDS, ActivityCategory.SLEEP),
    KeywordRule(MENTAL_HEALTH_KEYWORDS, ActivityCategory.MENTAL_HEALTH),
    KeywordRule(NUTRITION_KEYWORDS, ActivityCategory.NUTRITION),
    KeywordRule(MEDICAL_KEYWORDS, ActivityCategory.MEDICAL),
)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CatalogConfig:
    """Predefined table plus the fallback used for custom type names."""

    predefined_types: Tuple[ActivityTypeInfo, ...] = DEFAULT_PREDEFINED_TYPES
    unit_rules: Tuple[KeywordRule, ...] = DEFAULT_UNIT_RULES
    category_rules: Tuple[KeywordRule, ...] = DEFAULT_CATEGORY_RULES

    default_unit: str = "units"
    default_description: str = "Custom activity"
    default_min: float = 0.0
    default_max: float = 100.0
    default_category: ActivityCategory = ActivityCategory.LIFESTYLE

    def __post_init__(self):
        if self.default_min > self.default_max:
            raise ValueError(
                f"Default recommended range is inverted: {self.default_min} > {self.default_max}"
            )
        names = [t.name for t in self.predefined_types]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate predefined activity types: {names}")


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StatisticsParams:
    """Knobs for the statistics engine and report insights."""

    intensity_metric: str = "average_intensity"
    min_trend_points: int = 2
    min_correlation_points: int = 2

    # Compliance rate (percent) at or above which a type counts as compliant
    compliance_threshold: float = 80.0

    def __post_init__(self):
        if not 0.0 <= self.compliance_threshold <= 100.0:
            raise ValueError(
                f"Compliance threshold must be a percentage, got {self.compliance_threshold}"
            )
        if self.min_trend_points < 2 or self.min_correlation_points < 2:
            raise ValueError("Trend and correlation need at least 2 data points")


# ---------------------------------------------------------------------------
# Top-level config aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthLogConfig:
    """Complete configuration. Pass to the store, engine or reports to override defaults."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    statistics: StatisticsParams = field(default_factory=StatisticsParams)
