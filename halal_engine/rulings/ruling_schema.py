"""
Ingredient ruling rows. All rulings are data-driven; read-only to the matching engine.
Priority bands used by the bundled table (higher = evaluated first, wins overrides):
  100+  safe compounds that override a keyword ("vinaigre de vin" over "vin")
  50-99 haram/doubtful compounds ("gélatine porcine")
  1-49  single keywords ("vin", "porc")
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional


class MatchType(str, Enum):
    EXACT = "exact"
    CONTAINS = "contains"
    WORD_BOUNDARY = "word_boundary"
    REGEX = "regex"


class RulingValue(str, Enum):
    HALAL = "halal"
    HARAM = "haram"
    DOUBTFUL = "doubtful"


class Madhab(str, Enum):
    GENERAL = "general"
    HANAFI = "hanafi"
    SHAFII = "shafii"
    MALIKI = "maliki"
    HANBALI = "hanbali"


class RulingValidationError(ValueError):
    """Rule data rejected at load time (bad row, self-override, override cycle)."""


def _pick(d: dict, *names: str, default: Any = None) -> Any:
    """First present, non-None value among snake_case / camelCase column names."""
    for name in names:
        if d.get(name) is not None:
            return d[name]
    return default


_TRUE_STRINGS = {"true", "t", "1", "yes", "y"}
_FALSE_STRINGS = {"false", "f", "0", "no", "n"}


def _parse_bool(value: Any) -> bool:
    """Store rows may carry booleans as bool, 0/1 or text ("false")."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"not a boolean: {value!r}")


def _optional_ruling(value: Any) -> Optional[RulingValue]:
    if value is None or value == "":
        return None
    return RulingValue(str(value).lower())


@dataclass(frozen=True)
class RulingRule:
    compound_pattern: str
    match_type: MatchType
    ruling_default: RulingValue
    priority: int = 0
    # Per-madhab rulings; None = follows ruling_default
    ruling_hanafi: Optional[RulingValue] = None
    ruling_shafii: Optional[RulingValue] = None
    ruling_maliki: Optional[RulingValue] = None
    ruling_hanbali: Optional[RulingValue] = None
    confidence: float = 1.0
    # Primary (French) explanation; en/ar fall back to it
    explanation: str = ""
    explanation_en: Optional[str] = None
    explanation_ar: Optional[str] = None
    scholarly_reference: Optional[str] = None
    fatwa_source_name: Optional[str] = None
    fatwa_source_url: Optional[str] = None
    # Keyword this rule suppresses when it matches with higher priority
    overrides_keyword: Optional[str] = None
    category: Optional[str] = None
    is_active: bool = True
    id: Optional[str] = None

    @property
    def pattern_key(self) -> str:
        return self.compound_pattern.lower()

    @property
    def overridden_key(self) -> Optional[str]:
        if not self.overrides_keyword:
            return None
        return self.overrides_keyword.lower()

    def explanation_for(self, language: Optional[str] = None) -> str:
        lang = (language or "").lower()
        if lang == "en" and self.explanation_en:
            return self.explanation_en
        if lang == "ar" and self.explanation_ar:
            return self.explanation_ar
        return self.explanation

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "compound_pattern": self.compound_pattern,
            "match_type": self.match_type.value,
            "priority": self.priority,
            "ruling_default": self.ruling_default.value,
            "ruling_hanafi": self.ruling_hanafi.value if self.ruling_hanafi else None,
            "ruling_shafii": self.ruling_shafii.value if self.ruling_shafii else None,
            "ruling_maliki": self.ruling_maliki.value if self.ruling_maliki else None,
            "ruling_hanbali": self.ruling_hanbali.value if self.ruling_hanbali else None,
            "confidence": self.confidence,
            "explanation": self.explanation,
            "explanation_en": self.explanation_en,
            "explanation_ar": self.explanation_ar,
            "scholarly_reference": self.scholarly_reference,
            "fatwa_source_name": self.fatwa_source_name,
            "fatwa_source_url": self.fatwa_source_url,
            "overrides_keyword": self.overrides_keyword,
            "category": self.category,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "RulingRule":
        """Build from a store row (snake_case columns or camelCase keys). Bad rows raise RulingValidationError."""
        pattern = _pick(d, "compound_pattern", "compoundPattern")
        if not pattern or not isinstance(pattern, str):
            raise RulingValidationError(f"rule without compound_pattern: {d!r}"[:200])
        try:
            confidence = float(_pick(d, "confidence", default=1.0))
            if not 0.0 <= confidence <= 1.0:
                raise ValueError(f"confidence {confidence} outside [0, 1]")
            return cls(
                id=str(d["id"]) if d.get("id") is not None else None,
                compound_pattern=pattern,
                match_type=MatchType(_pick(d, "match_type", "matchType")),
                priority=int(_pick(d, "priority", default=0)),
                ruling_default=RulingValue(str(_pick(d, "ruling_default", "rulingDefault")).lower()),
                ruling_hanafi=_optional_ruling(_pick(d, "ruling_hanafi", "rulingHanafi")),
                ruling_shafii=_optional_ruling(_pick(d, "ruling_shafii", "rulingShafii")),
                ruling_maliki=_optional_ruling(_pick(d, "ruling_maliki", "rulingMaliki")),
                ruling_hanbali=_optional_ruling(_pick(d, "ruling_hanbali", "rulingHanbali")),
                confidence=confidence,
                explanation=_pick(d, "explanation", "explanation_fr", "explanationFr", default=""),
                explanation_en=_pick(d, "explanation_en", "explanationEn"),
                explanation_ar=_pick(d, "explanation_ar", "explanationAr"),
                scholarly_reference=_pick(d, "scholarly_reference", "scholarlyReference"),
                fatwa_source_name=_pick(d, "fatwa_source_name", "fatwaSourceName"),
                fatwa_source_url=_pick(d, "fatwa_source_url", "fatwaSourceUrl"),
                overrides_keyword=_pick(d, "overrides_keyword", "overridesKeyword"),
                category=_pick(d, "category"),
                is_active=_parse_bool(_pick(d, "is_active", "isActive", default=True)),
            )
        except (TypeError, ValueError) as e:
            raise RulingValidationError(f"rule {pattern!r}: {e}") from e


def _find_override_cycle(edges: dict[str, set[str]]) -> Optional[list[str]]:
    """Return one cycle in the pattern -> overridden keyword graph, or None."""
    visiting: set[str] = set()
    done: set[str] = set()
    path: list[str] = []

    def visit(node: str) -> Optional[list[str]]:
        visiting.add(node)
        path.append(node)
        for nxt in sorted(edges.get(node, ())):
            if nxt in visiting:
                return path[path.index(nxt):] + [nxt]
            if nxt not in done:
                cycle = visit(nxt)
                if cycle:
                    return cycle
        visiting.discard(node)
        done.add(node)
        path.pop()
        return None

    for start in sorted(edges):
        if start not in done:
            cycle = visit(start)
            if cycle:
                return cycle
    return None


def validate_rulings(rules: Iterable[RulingRule]) -> None:
    """
    Reject active rule sets whose override semantics are undefined:
    - a rule overriding its own pattern
    - mutually overriding keywords (any cycle, e.g. "a" overrides "b" and "b" overrides "a")
    Invalid regex patterns are not rejected here; they never match at evaluation time.
    """
    edges: dict[str, set[str]] = {}
    for rule in rules:
        if not rule.is_active or rule.overridden_key is None:
            continue
        if rule.overridden_key == rule.pattern_key:
            raise RulingValidationError(
                f"rule {rule.compound_pattern!r} overrides its own pattern"
            )
        edges.setdefault(rule.pattern_key, set()).add(rule.overridden_key)
    cycle = _find_override_cycle(edges)
    if cycle:
        raise RulingValidationError("override cycle: " + " -> ".join(cycle))
