"""
Activity type catalog: resolves a type name to unit, range and category.

Resolution is a chain of resolvers, first answer wins:
    TableResolver    : exact lookup in the predefined table
    KeywordResolver  : substring rules over the lower-cased name, with defaults

Both are pure functions of the name and the config. Nothing is cached.
"""

from typing import Dict, List, Optional, Tuple

from healthlog.config import CatalogConfig, HealthLogConfig, KeywordRule
from healthlog.models import ActivityCategory, ActivityTypeInfo


def first_match(rules: Tuple[KeywordRule, ...], name: str, default):
    """Return the value of the first rule matching `name`, else `default`."""
    lowered = name.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.value
    return default


def infer_unit(name: str, cfg: CatalogConfig) -> str:
    return first_match(cfg.unit_rules, name, cfg.default_unit)


def infer_category(name: str, cfg: CatalogConfig) -> ActivityCategory:
    return first_match(cfg.category_rules, name, cfg.default_category)


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

class TableResolver:
    """Case-sensitive lookup of the predefined types."""

    def __init__(self, cfg: CatalogConfig):
        self._table: Dict[str, ActivityTypeInfo] = {t.name: t for t in cfg.predefined_types}

    def resolve(self, name: str) -> Optional[ActivityTypeInfo]:
        return self._table.get(name)


class KeywordResolver:
    """Derives metadata for any name from the configured keyword rules. Never misses."""

    def __init__(self, cfg: CatalogConfig):
        self._cfg = cfg

    def resolve(self, name: str) -> Optional[ActivityTypeInfo]:
        c = self._cfg
        return ActivityTypeInfo(
            name=name,
            unit=infer_unit(name, c),
            description=c.default_description,
            recommended_min=c.default_min,
            recommended_max=c.default_max,
            category=infer_category(name, c),
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve_activity_type(
    name: str,
    cfg: HealthLogConfig | None = None,
) -> ActivityTypeInfo:
    """Resolve `name` to its metadata; custom names get derived metadata."""
    if cfg is None:
        cfg = HealthLogConfig()

    info = TableResolver(cfg.catalog).resolve(name)
    if info is not None:
        return info

    return KeywordResolver(cfg.catalog).resolve(name)


def is_predefined(name: str, cfg: HealthLogConfig | None = None) -> bool:
    if cfg is None:
        cfg = HealthLogConfig()
    return TableResolver(cfg.catalog).resolve(name) is not None


def list_predefined_types(cfg: HealthLogConfig | None = None) -> List[ActivityTypeInfo]:
    """Predefined catalog entries in declaration order."""
    if cfg is None:
        cfg = HealthLogConfig()
    return list(cfg.catalog.predefined_types)
