"""Main CLI entry point for helixir."""

from helixir.cli.app import app

# Register commands
from helixir.cli.commands import check, deploy, progress, run  # noqa: F401

if __name__ == "__main__":
    app()
