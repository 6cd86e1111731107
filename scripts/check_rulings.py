#!/usr/bin/env python3
"""
Load the configured ingredient ruling store and check it is usable.
Run from repo root: python scripts/check_rulings.py ["sample ingredient text"] [--madhab hanafi]
Exit 0 if rules load and validate; 1 on store or validation errors.
"""
import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import List, Optional

# Add repo root to path when run as script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check the ingredient rulings store.")
    parser.add_argument("text", nargs="?", default=None, help="optional ingredient text to resolve")
    parser.add_argument("--madhab", default="general", help="general, hanafi, shafii, maliki or hanbali")
    parser.add_argument("--language", default=None, help="explanation language (fr, en, ar)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from halal_engine import config
    from halal_engine.evaluation.resolver import match_rulings
    from halal_engine.models.verdict import summarize_matches
    from halal_engine.rulings import (
        RulingStoreError,
        RulingValidationError,
        coerce_madhab,
        get_default_store,
        validate_rulings,
    )

    config.log_config()
    store = get_default_store()
    print(f"Checking ingredient rulings (store={store.name})...")
    try:
        rules = store.list_rules(active_only=True)
        validate_rulings(rules)
    except RulingStoreError as e:
        print(f"  Store: FAIL - {e}")
        return 1
    except RulingValidationError as e:
        print(f"  Validation: FAIL - {e}")
        return 1

    print(f"  Active rules: {len(rules)}")
    by_category = Counter(r.category or "uncategorized" for r in rules)
    for category, count in sorted(by_category.items()):
        print(f"    {category}: {count}")
    by_type = Counter(r.match_type.value for r in rules)
    print("  Match types: " + ", ".join(f"{k}={v}" for k, v in sorted(by_type.items())))
    overrides = sum(1 for r in rules if r.overridden_key)
    print(f"  Override rules: {overrides}")

    if args.text:
        try:
            madhab = coerce_madhab(args.madhab)
        except ValueError:
            print(f"Unknown madhab: {args.madhab}")
            return 1
        matches = match_rulings(args.text, rules, madhab, args.language)
        verdict = summarize_matches(matches, madhab)
        status = verdict.status.value if verdict.status else "no match"
        print(f"Sample ({madhab.value}): {status}")
        for m in matches:
            print(f"  {m.pattern} [{m.ruling.value}, p={m.priority}] {m.explanation}")
    print("Rulings OK.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
