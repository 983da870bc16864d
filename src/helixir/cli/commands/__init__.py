"""CLI commands for helixir."""

from . import check, deploy, progress, run

__all__ = [
    "check",
    "deploy",
    "progress",
    "run",
]
