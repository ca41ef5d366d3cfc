#!/usr/bin/env python
"""Offline verification script for dudleyscores."""

import asyncio
import sys
from dataclasses import replace


def main():
    print("=" * 60)
    print("DUDLEY SCORES VERIFICATION")
    print("=" * 60)

    errors = []

    # Test 1: Imports
    print("\n[1/4] Testing imports...")
    try:
        from dudleyscores import GamesService, apply_score_suppression, extract_game
        from dudleyscores.config import settings
        from dudleyscores.models import Dataset
        print("  ✓ All imports successful")
    except ImportError as e:
        print(f"  ✗ {e}")
        return 1

    # Test 2: Extraction
    print("\n[2/4] Testing extraction...")
    try:
        kind, record = extract_game(
            "Macquarie v Dudley Redhead Sat 9 Aug Full Time 12-18", "check", "U13 Div 2"
        )
        assert kind == "result", f"Expected result, got {kind}"
        assert (record["scoreHome"], record["scoreAway"]) == (12, 18)
        kind, record = extract_game("Dudley Redhead vs Central Sat 10 Aug", "check", "U15 Div 1")
        assert kind == "fixture", f"Expected fixture, got {kind}"
        assert record["venue"] == "TBC"
        print("  ✓ Result and fixture classified")
    except Exception as e:
        errors.append(f"Extraction failed: {e}")
        print(f"  ✗ {e}")

    # Test 3: Minis/Mods suppression
    print("\n[3/4] Testing Minis/Mods suppression...")
    try:
        out = apply_score_suppression({"grade": "U9", "scoreHome": 4, "scoreAway": 10})
        assert out["scoreHome"] is None and out["scoreAway"] is None
        print("  ✓ U9 scores suppressed")
    except Exception as e:
        errors.append(f"Suppression failed: {e}")
        print(f"  ✗ {e}")

    # Test 4: Fallback orchestration
    print("\n[4/4] Testing fallback orchestration...")
    try:
        service = GamesService(replace(settings, browserless_ws=""))
        outcome = asyncio.run(service.refresh())
        Dataset.model_validate(outcome.data)
        assert outcome.source == "fallback", f"Unexpected source: {outcome.source}"
        print(f"  ✓ Fallback dataset: {len(outcome.data['upcoming'])} upcoming, "
              f"{len(outcome.data['results'])} results")
    except Exception as e:
        errors.append(f"Fallback failed: {e}")
        print(f"  ✗ {e}")

    # Summary
    print("\n" + "=" * 60)
    if errors:
        print(f"FAILED: {len(errors)} error(s)")
        for err in errors:
            print(f"  - {err}")
        return 1
    else:
        print("ALL CHECKS PASSED ✓")
        return 0


if __name__ == "__main__":
    sys.exit(main())
