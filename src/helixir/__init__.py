"""helixir - answer checking for the HelixDB interactive tutorial."""

__version__ = "0.1.0"
