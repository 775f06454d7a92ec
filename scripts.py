"""Development tasks for textcon, run as ``python scripts.py <task>``."""

import subprocess
import sys

SOURCES = ["src", "tests"]


def run_tests():
    subprocess.run(["pytest"], check=True)


def run_cli_tests():
    """Include the subprocess-based CLI tests skipped by default."""
    subprocess.run(["pytest", "--run-cli-tests", "tests/integration"], check=True)


def run_doctests():
    subprocess.run(["pytest", "--doctest-modules", "src/textcon"], check=True)


def run_lint():
    subprocess.run(["flake8", "--max-line-length", "120", *SOURCES], check=True)


def run_typecheck():
    subprocess.run(["mypy", "src"], check=True)


def run_format():
    subprocess.run(["black", *SOURCES], check=True)


def run_coverage():
    subprocess.run(["pytest", "--run-cli-tests", "--cov=textcon", "tests/", "--cov-report=xml"], check=True)


TASKS = {name: task for name, task in globals().items() if name.startswith("run_")}

if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        sys.exit(f"usage: python scripts.py {{{','.join(sorted(TASKS))}}}")
    TASKS[sys.argv[1]]()
