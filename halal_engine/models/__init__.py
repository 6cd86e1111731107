from .verdict import MatchResult, RulingVerdict, summarize_matches

__all__ = ["MatchResult", "RulingVerdict", "summarize_matches"]
