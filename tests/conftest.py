"""Root test configuration: isolate tests from the caller's GARDENFM_* environment"""

import os

import pytest


@pytest.fixture(autouse=True)
def clear_gardenfm_env(monkeypatch):
    """Drop GARDENFM_<FIELD> overrides so every test starts from Settings defaults."""
    for name in list(os.environ):
        if name.startswith("GARDENFM_"):
            monkeypatch.delenv(name)
