"""
Accent-insensitive comparison form. Used for matching only; the stored or
displayed text is never rewritten with it.
"""
import unicodedata


def fold_diacritics(text: str) -> str:
    """
    Canonical decomposition (NFD) then drop combining marks.
    "gélatine" -> "gelatine", "carmín" -> "carmin", "Alkohöl" -> "Alkohol".
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
