"""
Override-aware ruling resolution. Single pipeline for full ingredient lists and single tokens.
normalize -> match every active rule -> build override map -> sort by priority -> dedup/suppress.
A higher-priority compound ("vinaigre de vin", overrides "vin") suppresses the keyword rule
whose own pattern is that keyword; it never suppresses rules that merely contain it.
"""
from typing import Iterable, List, Optional, Union
import logging

from halal_engine.matching.pattern_matcher import test_pattern
from halal_engine.models.verdict import MatchResult, RulingVerdict, summarize_matches
from halal_engine.normalization.normalizer import normalize_ingredient_text
from halal_engine.rulings.madhab import coerce_madhab, resolve_for_madhab
from halal_engine.rulings.rule_cache import RuleCache
from halal_engine.rulings.ruling_schema import Madhab, RulingRule
from halal_engine.rulings.ruling_store import get_default_store

logger = logging.getLogger(__name__)


def match_rulings(
    text: str,
    rules: Iterable[RulingRule],
    madhab: Union[Madhab, str] = Madhab.GENERAL,
    language: Optional[str] = None,
) -> List[MatchResult]:
    """
    Pure core of the resolver over an explicit rule list.
    Returns one MatchResult per surviving pattern, by descending priority.
    Equal priorities keep rule-store order (stable sort); a pattern is reported once.
    """
    school = coerce_madhab(madhab)
    lower = normalize_ingredient_text(text).lower()
    if not lower:
        return []

    direct_matches: List[RulingRule] = []
    override_map: dict[str, int] = {}
    for rule in rules:
        if not rule.is_active:
            continue
        if not test_pattern(lower, rule.compound_pattern, rule.match_type):
            continue
        direct_matches.append(rule)
        key = rule.overridden_key
        if key is not None and (key not in override_map or rule.priority > override_map[key]):
            override_map[key] = rule.priority

    direct_matches.sort(key=lambda r: r.priority, reverse=True)

    results: List[MatchResult] = []
    seen: set[str] = set()
    for rule in direct_matches:
        key = rule.pattern_key
        if key in seen:
            continue
        override_priority = override_map.get(key)
        if override_priority is not None and override_priority > rule.priority:
            logger.debug(
                "RULING_SUPPRESSED pattern=%s priority=%d overridden_at=%d",
                rule.compound_pattern, rule.priority, override_priority,
            )
            continue
        seen.add(key)
        results.append(
            MatchResult(
                pattern=rule.compound_pattern,
                ruling=resolve_for_madhab(rule, school),
                priority=rule.priority,
                confidence=rule.confidence,
                explanation=rule.explanation_for(language),
                category=rule.category,
                scholarly_reference=rule.scholarly_reference,
            )
        )

    if results:
        logger.debug(
            "RULING_MATCH madhab=%s matched=%d kept=%s",
            school.value, len(direct_matches), [r.pattern for r in results],
        )
    return results


class RulingResolver:
    """
    Resolves ingredient text against the cached active rule set.
    Async only at the cache boundary; matching itself is synchronous.
    """

    def __init__(self, cache: Optional[RuleCache] = None):
        self._cache = cache or RuleCache(get_default_store())

    @property
    def cache(self) -> RuleCache:
        return self._cache

    async def resolve(
        self,
        text: str,
        madhab: Union[Madhab, str] = Madhab.GENERAL,
        language: Optional[str] = None,
    ) -> List[MatchResult]:
        """Store/validation failures from the cache propagate; matching never raises."""
        school = coerce_madhab(madhab)
        rules = await self._cache.get()
        return match_rulings(text, rules, school, language)

    async def evaluate(
        self,
        text: str,
        madhab: Union[Madhab, str] = Madhab.GENERAL,
        language: Optional[str] = None,
    ) -> RulingVerdict:
        school = coerce_madhab(madhab)
        matches = await self.resolve(text, school, language)
        return summarize_matches(matches, school)

    def reset(self) -> None:
        self._cache.reset()


_default_resolver: Optional[RulingResolver] = None


def get_default_resolver() -> RulingResolver:
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = RulingResolver()
    return _default_resolver


def set_default_resolver(resolver: Optional[RulingResolver]) -> None:
    """Inject the resolver used by resolve_rulings(); None rebuilds from configuration on next use."""
    global _default_resolver
    _default_resolver = resolver


async def resolve_rulings(
    text: str,
    madhab: Union[Madhab, str] = Madhab.GENERAL,
    language: Optional[str] = None,
) -> List[MatchResult]:
    """Convenience: resolve with the default resolver."""
    return await get_default_resolver().resolve(text, madhab, language)


def reset_rule_cache() -> None:
    """Invalidate the default resolver's rule cache (tests, admin rule changes)."""
    if _default_resolver is not None:
        _default_resolver.reset()
