from .resolver import (
    RulingResolver,
    get_default_resolver,
    match_rulings,
    reset_rule_cache,
    resolve_rulings,
    set_default_resolver,
)

__all__ = [
    "RulingResolver",
    "get_default_resolver",
    "match_rulings",
    "reset_rule_cache",
    "resolve_rulings",
    "set_default_resolver",
]
