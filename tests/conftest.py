import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep PERPLEXITY_* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("PERPLEXITY_"):
            monkeypatch.delenv(key)
