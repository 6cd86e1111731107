"""
Evaluates one (text, pattern, match_type) triple. Both sides are lowercased and
diacritics-folded, so "présure" matches "presure animale" and "gelatine" matches "gélatine".
Malformed rule data (unknown match type, invalid regex) is a non-match, never an exception.
"""
import re
import logging
from functools import lru_cache
from typing import Optional, Union

from halal_engine.normalization.diacritics import fold_diacritics
from halal_engine.rulings.ruling_schema import MatchType

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1024)
def _standalone_re(folded_pattern: str) -> re.Pattern:
    # Not preceded or followed by a letter/digit: "vin" never matches inside "vinaigre"
    return re.compile(r"(?<![^\W_])" + re.escape(folded_pattern) + r"(?![^\W_])")


@lru_cache(maxsize=1024)
def _compile_regex(pattern: str) -> Optional[re.Pattern]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        logger.warning("PATTERN_REGEX invalid pattern=%r error=%s", pattern[:80], e)
        return None


def test_pattern(text: str, pattern: str, match_type: Union[MatchType, str]) -> bool:
    """
    exact: folded text equals folded pattern (surrounding whitespace ignored).
    contains: substring.
    word_boundary: pattern as a standalone token.
    regex: IGNORECASE search of the folded pattern, case kept; invalid regex -> False.
    """
    if not text or not pattern:
        return False
    try:
        kind = MatchType(match_type)
    except ValueError:
        logger.warning("PATTERN_MATCH unknown match_type=%r pattern=%r", match_type, pattern[:80])
        return False

    folded_text = fold_diacritics(text.lower())
    if kind == MatchType.REGEX:
        # not lowercased: \S, \D, \W keep their meaning
        compiled = _compile_regex(fold_diacritics(pattern))
        if compiled is None:
            return False
        return compiled.search(folded_text) is not None

    folded_pattern = fold_diacritics(pattern.lower())

    if kind == MatchType.EXACT:
        return folded_text.strip() == folded_pattern.strip()
    if kind == MatchType.CONTAINS:
        return folded_pattern in folded_text
    if kind == MatchType.WORD_BOUNDARY:
        return _standalone_re(folded_pattern).search(folded_text) is not None
    return False


# not a pytest test function
test_pattern.__test__ = False
