"""Command-line interface for helixir."""
