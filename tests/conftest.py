"""Shared test fixtures and helpers."""

from __future__ import annotations

import os

import pytest


ENV_PREFIX = "TAXMAP_"


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch):
    """Drop any TAXMAP_* variables from the developer's shell.

    Settings classes read the environment on construction, so a stray
    variable would change defaults under test.
    """
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
