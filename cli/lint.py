from cli._runner import run

LINT_PATHS = ["error_mapping", "cli", "tests"]


def main() -> None:
    """Run linting."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "check", *LINT_PATHS]))


def format() -> None:
    """Run code formatting."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "format", *LINT_PATHS]))
