#!/usr/bin/env python3
# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the slmodel CI checks locally: format, lint, tests with coverage, and build.

Pass step names (``format``, ``lint``, ``tests``, ``build``) to run a subset.
"""

import argparse
import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, tuple[str, list[str]]] = {
    "format": ("Format check", ["ruff", "format", "--check", "src/", "tests/", "tools/"]),
    "lint": ("Lint", ["ruff", "check", "src/", "tests/", "tools/"]),
    "tests": ("Tests", ["pytest", "--cov=slmodel", "--cov-report=term-missing"]),
    "build": ("Build", [sys.executable, "-m", "pip", "wheel", "--no-deps", "-w", "dist", "."]),
}


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps and print a summary; return the process exit code."""
    parser = argparse.ArgumentParser(prog="ci", description="Run slmodel CI checks locally.")
    parser.add_argument("steps", nargs="*", help=f"Steps to run: {', '.join(STEPS)} (default: all)")
    parser.add_argument("--fail-fast", action="store_true", help="Stop after the first failing step")
    args = parser.parse_args(argv)
    unknown = [step for step in args.steps if step not in STEPS]
    if unknown:
        parser.error(f"unknown step(s): {', '.join(unknown)}")

    selected = args.steps or list(STEPS)
    results: list[tuple[str, bool, float]] = []
    for key in selected:
        title, cmd = STEPS[key]
        _banner(title)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        passed = proc.returncode == 0
        results.append((title, passed, time.monotonic() - start))
        if not passed and args.fail_fast:
            break

    _banner("Summary")
    for title, passed, elapsed in results:
        status = chalk.green("PASS") if passed else chalk.red("FAIL")
        print(f"  {status}  {title} ({elapsed:.1f}s)")
    print()
    return 0 if results and all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(f"  {title}"))
    print(sep)


def _repo_root() -> str:
    return str(pathlib.Path(__file__).resolve().parent.parent)


if __name__ == "__main__":
    sys.exit(main())
