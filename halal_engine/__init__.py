"""
Ingredient text normalization and madhab-aware halal ruling resolution.
"""
from .normalization import fold_diacritics, needs_normalization, normalize
from .matching import test_pattern
from .rulings import (
    Madhab,
    MatchType,
    RuleCache,
    RulingRule,
    RulingValue,
    resolve_for_madhab,
)
from .models import MatchResult, RulingVerdict
from .evaluation import RulingResolver, reset_rule_cache, resolve_rulings

__all__ = [
    "fold_diacritics",
    "needs_normalization",
    "normalize",
    "test_pattern",
    "Madhab",
    "MatchType",
    "RuleCache",
    "RulingRule",
    "RulingValue",
    "resolve_for_madhab",
    "MatchResult",
    "RulingVerdict",
    "RulingResolver",
    "reset_rule_cache",
    "resolve_rulings",
]
