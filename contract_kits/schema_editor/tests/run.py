"""
Schema Editor Kit Acceptance Test Runner

Run every test module of the kit in order and print a pass/fail banner.
This script is the CI gate for kit changes.

Usage:
    python -m contract_kits.schema_editor.tests.run

    or

    pytest contract_kits/schema_editor/tests
"""

import inspect
import sys
import traceback
from pathlib import Path

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

import pytest

from contract_kits.schema_editor.tests import test_display, test_mutations, test_parser, test_tree

MODULES = [test_parser, test_tree, test_mutations, test_display]


def _run_module(module) -> int:
    failures = 0
    for name, func in inspect.getmembers(module, inspect.isfunction):
        if not name.startswith('test_') or func.__module__ != module.__name__:
            continue
        params = inspect.signature(func).parameters
        try:
            if 'monkeypatch' in params:
                with pytest.MonkeyPatch.context() as monkeypatch:
                    func(monkeypatch)
            else:
                func()
        except AssertionError as e:
            failures += 1
            print(f"❌ FAIL: {module.__name__.rsplit('.', 1)[-1]}::{name} {e}")
        except Exception:
            failures += 1
            print(f"❌ ERROR: {module.__name__.rsplit('.', 1)[-1]}::{name}")
            traceback.print_exc()
        else:
            print(f"✅ PASS: {module.__name__.rsplit('.', 1)[-1]}::{name}")
    return failures


def main():
    """Run all acceptance tests."""
    print("=" * 70)
    print("SCHEMA EDITOR KIT ACCEPTANCE TEST RUNNER")
    print("=" * 70)

    failures = 0
    for module in MODULES:
        print(f"\n[{module.__name__.rsplit('.', 1)[-1]}]")
        failures += _run_module(module)

    print("\n" + "=" * 70)
    if failures:
        print(f"❌ {failures} TEST(S) FAILED")
        print("=" * 70)
        return 1

    print("✅ ALL TESTS PASSED")
    print("=" * 70)
    return 0


if __name__ == '__main__':
    sys.exit(main())
