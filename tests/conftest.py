"""Shared fixtures for helixir tests."""

import os

import pytest

import helixir.config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test from an empty directory with no cached or env config."""
    for name in list(os.environ):
        if name.startswith("HELIXIR_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    helixir.config._CONFIG_CACHE = None
    yield tmp_path
    helixir.config._CONFIG_CACHE = None
