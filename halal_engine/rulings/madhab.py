"""
Per-school ruling selection. A null school-specific ruling silently follows ruling_default.
"""
from typing import Union

from .ruling_schema import Madhab, RulingRule, RulingValue


def coerce_madhab(madhab: Union[Madhab, str, None]) -> Madhab:
    """Accepts Madhab or a case-insensitive name; None -> general. Unknown names raise ValueError."""
    if madhab is None:
        return Madhab.GENERAL
    if isinstance(madhab, Madhab):
        return madhab
    return Madhab(str(madhab).strip().lower())


def resolve_for_madhab(rule: RulingRule, madhab: Union[Madhab, str] = Madhab.GENERAL) -> RulingValue:
    """Ruling for the requested school; "general" or a missing school opinion -> ruling_default."""
    school = coerce_madhab(madhab)
    if school == Madhab.HANAFI:
        specific = rule.ruling_hanafi
    elif school == Madhab.SHAFII:
        specific = rule.ruling_shafii
    elif school == Madhab.MALIKI:
        specific = rule.ruling_maliki
    elif school == Madhab.HANBALI:
        specific = rule.ruling_hanbali
    else:
        specific = None
    return specific or rule.ruling_default
