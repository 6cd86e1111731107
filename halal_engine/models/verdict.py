"""
Resolver output: one MatchResult per surviving rule, and the per-ingredient verdict
consumed by the scan pipeline.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from halal_engine.rulings.ruling_schema import Madhab, RulingValue

# Worst ruling wins when aggregating
_SEVERITY = {
    RulingValue.HALAL: 0,
    RulingValue.DOUBTFUL: 1,
    RulingValue.HARAM: 2,
}


@dataclass(frozen=True)
class MatchResult:
    pattern: str
    ruling: RulingValue
    priority: int
    confidence: float
    explanation: str
    category: Optional[str] = None
    scholarly_reference: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "ruling": self.ruling.value,
            "priority": self.priority,
            "confidence": self.confidence,
            "explanation": self.explanation,
            "category": self.category,
            "scholarly_reference": self.scholarly_reference,
        }


@dataclass
class RulingVerdict:
    status: Optional[RulingValue]  # None: no rule matched
    madhab: Madhab = Madhab.GENERAL
    matches: List[MatchResult] = field(default_factory=list)
    confidence: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value if self.status else None,
            "madhab": self.madhab.value,
            "matches": [m.to_dict() for m in self.matches],
            "confidence": self.confidence,
        }


def summarize_matches(matches: List[MatchResult], madhab: Madhab = Madhab.GENERAL) -> RulingVerdict:
    """
    Aggregate matches: status = worst ruling (haram > doubtful > halal);
    confidence = highest confidence among matches carrying that ruling.
    """
    if not matches:
        return RulingVerdict(status=None, madhab=madhab, matches=[], confidence=0.0)
    worst = max((m.ruling for m in matches), key=lambda r: _SEVERITY[r])
    confidence = max(m.confidence for m in matches if m.ruling == worst)
    return RulingVerdict(status=worst, madhab=madhab, matches=list(matches), confidence=confidence)
