"""Test runner script for the EP verb console.

Runs the pytest suite, optionally with a coverage report over the
application packages.
"""
import argparse
import subprocess
import sys

PACKAGES = ("app", "config", "core", "speech", "verbs")


def build_command(coverage: bool = False, keyword: str = None) -> list:
    cmd = [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short"]
    if keyword:
        cmd += ["-k", keyword]
    if coverage:
        cmd += [f"--cov={pkg}" for pkg in PACKAGES]
        cmd += ["--cov-report=term-missing", "--cov-report=html"]
    return cmd


def run_tests(coverage: bool = False, keyword: str = None) -> int:
    """Run the test suite and return pytest's exit code."""
    title = "Running Tests with Coverage Report" if coverage else "Running EP Verb Console Tests"
    print("=" * 70)
    print(title)
    print("=" * 70)
    print()

    try:
        result = subprocess.run(build_command(coverage, keyword), check=False)
    except FileNotFoundError:
        print("ERROR: pytest not found. Install it with: pip install -e .[test]")
        return 1

    if coverage and result.returncode == 0:
        print()
        print("Coverage report generated in htmlcov/index.html")
    return result.returncode


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the test suite")
    parser.add_argument("-c", "--coverage", action="store_true", help="Collect coverage")
    parser.add_argument("-k", "--keyword", help="Only run tests matching this expression")
    args = parser.parse_args()

    sys.exit(run_tests(coverage=args.coverage, keyword=args.keyword))
