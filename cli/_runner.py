"""Runner utility for CLI commands."""

from __future__ import annotations

import subprocess


def run(cmd: list[str]) -> int:
    """Run a command and return its exit code."""
    return subprocess.run(cmd, check=False).returncode
