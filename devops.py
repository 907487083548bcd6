"""Development tasks for macclean.

Usage: uv run devops.py <task> [pytest args]
Tasks: fmt, lint, test, clean
"""

import subprocess
import sys
from collections.abc import Callable

SOURCES = ["app", "tests", "devops.py"]

# Generated by pytest, ruff and hatch
ARTIFACTS = [".pytest_cache", ".ruff_cache", "dist", "build"]


def _run(commands: list[list[str]]) -> None:
    """Execute a sequence of commands, exiting on first failure."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code(_args: list[str]) -> None:
    """Format and autofix the sources with Ruff."""
    _run(
        [
            ["ruff", "format", *SOURCES],
            ["ruff", "check", "--fix", *SOURCES],
        ]
    )


def lint(_args: list[str]) -> None:
    """Check formatting and lint rules without touching files."""
    _run(
        [
            ["ruff", "format", "--check", *SOURCES],
            ["ruff", "check", *SOURCES],
        ]
    )


def test(args: list[str]) -> None:
    """Run the unit tests; extra arguments go to pytest."""
    _run([["uv", "run", "pytest", "-q", *args]])


def clean(_args: list[str]) -> None:
    """Remove bytecode and tool artifacts."""
    _run(
        [
            ["find", ".", "-type", "d", "-name", "__pycache__", "-exec", "rm", "-rf", "{}", "+"],
            ["find", ".", "-type", "d", "-name", "*.egg-info", "-exec", "rm", "-rf", "{}", "+"],
            ["rm", "-rf", *ARTIFACTS],
        ]
    )


TASKS: dict[str, Callable[[list[str]], None]] = {
    "fmt": format_code,
    "lint": lint,
    "test": test,
    "clean": clean,
}


def main(argv: list[str]) -> None:
    if not argv or argv[0] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    TASKS[argv[0]](argv[1:])


if __name__ == "__main__":
    main(sys.argv[1:])
