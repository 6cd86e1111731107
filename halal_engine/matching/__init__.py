from .pattern_matcher import test_pattern

__all__ = ["test_pattern"]
