#!/usr/bin/env python3
"""
Script to run black (and optionally mypy) over sheets_orm and its tests.
"""
import argparse
import os
import subprocess
import sys

from run_mypy import run_mypy

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
TARGETS = ["sheets_orm", "tests"]


def run_black(check_only=False):
    """Format the package and tests; with check_only, report without rewriting"""
    print("Running black on sheets_orm...")

    cmd = ["black", "--line-length", "120"]
    if check_only:
        cmd.append("--check")
    cmd.extend(os.path.join(PROJECT_ROOT, target) for target in TARGETS)

    try:
        subprocess.run(cmd, check=True)
        print("Black completed successfully!")
        return 0
    except subprocess.CalledProcessError as e:
        print(f"Error running black: {e}")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Format sheets_orm with black")
    parser.add_argument("--check", action="store_true", help="Only report files black would change")
    parser.add_argument("--with-mypy", action="store_true", help="Also run mypy afterwards")
    args = parser.parse_args()

    black_result = run_black(check_only=args.check)
    mypy_result = run_mypy() if args.with_mypy else 0
    sys.exit(black_result or mypy_result)
