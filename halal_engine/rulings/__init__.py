from .ruling_schema import (
    Madhab,
    MatchType,
    RulingRule,
    RulingValidationError,
    RulingValue,
    validate_rulings,
)
from .ruling_store import (
    InMemoryRulingStore,
    JsonRulingStore,
    RulingStore,
    RulingStoreError,
    SupabaseRulingStore,
    get_default_store,
)
from .rule_cache import RuleCache
from .madhab import coerce_madhab, resolve_for_madhab

__all__ = [
    "Madhab",
    "MatchType",
    "RulingRule",
    "RulingValidationError",
    "RulingValue",
    "validate_rulings",
    "InMemoryRulingStore",
    "JsonRulingStore",
    "RulingStore",
    "RulingStoreError",
    "SupabaseRulingStore",
    "get_default_store",
    "RuleCache",
    "coerce_madhab",
    "resolve_for_madhab",
]
