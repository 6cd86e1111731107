from .diacritics import fold_diacritics
from .normalizer import normalize, normalize_ingredient_text, needs_normalization

__all__ = [
    "fold_diacritics",
    "normalize",
    "normalize_ingredient_text",
    "needs_normalization",
]
