"""
Deterministic ingredient text normalization. No fuzzy matching, no stemming.
Turns noisy label/OFF text into a matching-ready string:
quotes -> OCR repair -> E-codes -> hyphen artifacts -> abbreviations -> synonym injection.
Synonyms are appended after INJECTION_MARKER; the original text is kept for the matcher.
"""
import re
import logging
from typing import List, Tuple

from .diacritics import fold_diacritics
from .tables import (
    ABBREVIATIONS,
    ABBREVIATION_STEMS,
    APOSTROPHE_VARIANTS,
    CANONICAL_TERMS,
    INJECTION_JOINER,
    INJECTION_MARKER,
    OCR_FIXES,
    PUNCTUATION_FIXES,
    SHORT_SYNONYM_MAX_LEN,
    SYNONYMS,
)

logger = logging.getLogger(__name__)

_QUOTES_RE = re.compile("[" + APOSTROPHE_VARIANTS + "]")

# Replacement form: separator optional, so "E471" is lowercased too.
# Detection form: separator required, so already-canonical "e471" is not flagged.
_E_CODE_REPLACE_RE = re.compile(r"\bE[\s.\-]?(\d{3,4}[a-z]?)\b", re.IGNORECASE)
_E_CODE_DETECT_RE = re.compile(r"\bE[\s.\-](\d{3,4}[a-z]?)\b", re.IGNORECASE)

_OCR_DIGIT_RE = re.compile(r"[a-z]\d[a-z]", re.IGNORECASE)
_ABBREVIATION_DETECT_RE = re.compile(
    r"\b(?:" + "|".join(ABBREVIATION_STEMS) + r")\.\s", re.IGNORECASE
)
# Accented letters outside plain French label text (DE/ES/IT)
_FOREIGN_LETTERS_RE = re.compile(r"[äöüßñàòùèìíóú]", re.IGNORECASE)


def _compile_table(table: List[Tuple[str, str]]) -> List[Tuple[re.Pattern, str]]:
    return [(re.compile(pattern, re.IGNORECASE), repl) for pattern, repl in table]


_OCR_FIXES = _compile_table(OCR_FIXES)
_PUNCTUATION_FIXES = _compile_table(PUNCTUATION_FIXES)
_ABBREVIATIONS = _compile_table(ABBREVIATIONS)


def _standalone_re(term: str) -> re.Pattern:
    """Term not adjacent to a letter, digit or hyphen (Unicode-aware)."""
    return re.compile(r"(?<![^\W_])(?<!-)" + re.escape(term) + r"(?![^\W_])(?!-)")


def _build_synonym_probes():
    probes = []
    for synonym, canonical in SYNONYMS.items():
        key = synonym.lower()
        folded_key = fold_diacritics(key)
        if len(key) <= SHORT_SYNONYM_MAX_LEN:
            probes.append((key, folded_key, canonical, _standalone_re(key), _standalone_re(folded_key)))
        else:
            probes.append((key, folded_key, canonical, None, None))
    return probes


_SYNONYM_PROBES = _build_synonym_probes()


def canonicalize_quotes(text: str) -> str:
    return _QUOTES_RE.sub("'", text)


def fix_ocr_artifacts(text: str) -> str:
    """Apply the scoped OCR repair table in order (gé1atine -> gélatine, a1cool -> alcool)."""
    for pattern, repl in _OCR_FIXES:
        text = pattern.sub(repl, text)
    return text


def normalize_e_codes(text: str) -> str:
    """E.471, E 471, E-471, e 120 -> e471, e471, e471, e120. Suffix letters lowercased (E.160a -> e160a)."""
    return _E_CODE_REPLACE_RE.sub(lambda m: "e" + m.group(1).lower(), text)


def fix_hyphen_artifacts(text: str) -> str:
    for pattern, repl in _PUNCTUATION_FIXES:
        text = pattern.sub(repl, text)
    return text


def expand_abbreviations(text: str) -> str:
    for pattern, repl in _ABBREVIATIONS:
        text = pattern.sub(repl, text)
    return text


def find_synonym_terms(text: str) -> List[str]:
    """
    Canonical terms whose synonym occurs in text (lowercase or diacritics-folded form).
    Short synonyms (<= SHORT_SYNONYM_MAX_LEN) must stand alone: "lab" matches "lab, sel"
    but not "label" or "lab-fermented". Order follows SYNONYMS; each term once.
    """
    lower = text.lower()
    folded = fold_diacritics(lower)
    found: List[str] = []
    for key, folded_key, canonical, short_re, short_folded_re in _SYNONYM_PROBES:
        if canonical in found:
            continue
        if short_re is not None:
            hit = bool(short_re.search(lower) or short_folded_re.search(folded))
        else:
            hit = key in lower or folded_key in folded
        if hit:
            found.append(canonical)
    return found


def split_injected_terms(text: str) -> Tuple[str, List[str]]:
    """
    Separate a previous synonym injection from the body.
    The tail after the last INJECTION_MARKER counts as injected only when every
    item is a known canonical term; otherwise the whole text is body.
    """
    body, sep, tail = text.rpartition(INJECTION_MARKER)
    if not sep:
        return text, []
    terms = [t.strip() for t in tail.split(INJECTION_JOINER.strip())]
    if terms and all(t in CANONICAL_TERMS for t in terms):
        return body, terms
    return text, []


def normalize_ingredient_text(raw: str) -> str:
    """
    Normalize raw ingredient text for pattern matching. Pure, never raises.
    Applying it to its own output returns the same string: a previous injection
    is recognized and canonical terms are never appended twice.
    """
    if not raw or not isinstance(raw, str):
        return ""
    body, injected = split_injected_terms(raw)

    body = canonicalize_quotes(body)
    body = fix_ocr_artifacts(body)
    body = normalize_e_codes(body)
    body = fix_hyphen_artifacts(body)
    body = expand_abbreviations(body)

    terms = list(injected)
    for term in find_synonym_terms(body):
        if term not in terms:
            terms.append(term)
    if len(terms) > len(injected):
        logger.debug("NORMALIZE synonyms injected=%s", terms[len(injected):])
    if not terms:
        return body
    return body + INJECTION_MARKER + INJECTION_JOINER.join(terms)


# Short public name used across the package
normalize = normalize_ingredient_text


def needs_normalization(text: str) -> bool:
    """
    Cheap pre-check so callers can skip normalize() on clean text:
    separated E-codes, digit between letters, known abbreviation stems, DE/ES/IT accents.
    """
    if not text:
        return False
    if _E_CODE_DETECT_RE.search(text):
        return True
    if _OCR_DIGIT_RE.search(text):
        return True
    if _ABBREVIATION_DETECT_RE.search(text):
        return True
    if _FOREIGN_LETTERS_RE.search(text):
        return True
    return False
