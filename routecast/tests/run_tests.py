"""
Comprehensive test runner for the route precipitation risk service.
"""

import importlib
import sys
import traceback
from datetime import datetime


TEST_MODULES = [
    ("test_geometry", "Geometry and Leg Normalization"),
    ("test_risk", "Risk Classification and Features"),
    ("test_providers", "Provider Clients"),
    ("test_pipeline", "Annotation Pipeline"),
    ("test_api", "HTTP API"),
]


def run_test_module(module_name: str) -> bool:
    """Run a specific test module."""
    print(f"\n{'=' * 80}")
    print(f"Running: {module_name}")
    print(f"{'=' * 80}")

    try:
        module = importlib.import_module(f".{module_name}", package=__package__)
        module.run_all_tests()
        return True

    except Exception as e:
        print(f"\n❌ TEST FAILED: {module_name}")
        print(f"Error: {str(e)}")
        print("\nTraceback:")
        traceback.print_exc()
        return False


def main():
    """Run all test suites."""
    print("\n" + "=" * 80)
    print("ROUTECAST PRECIPITATION RISK SERVICE")
    print("COMPREHENSIVE TEST SUITE")
    print("=" * 80)
    print(f"Test started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 80)

    results = {}

    for module_name, description in TEST_MODULES:
        results[description] = run_test_module(module_name)

    # Print summary
    print("\n" + "=" * 80)
    print("TEST SUMMARY")
    print("=" * 80)

    passed = sum(1 for v in results.values() if v)
    total = len(results)

    for test_name, success in results.items():
        status = "✅ PASSED" if success else "❌ FAILED"
        print(f"{status}: {test_name}")

    print("=" * 80)
    print(f"Results: {passed}/{total} test suites passed")

    if passed == total:
        print("🎉 ALL TESTS PASSED!")
        print("=" * 80)
        return 0
    else:
        print("⚠️  SOME TESTS FAILED")
        print("=" * 80)
        return 1


if __name__ == "__main__":
    sys.exit(main())
