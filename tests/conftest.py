import os

import pytest


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep SLIPSTITCH_* settings (including ones set by load_env) from leaking between tests."""
    for key in list(os.environ):
        if key.startswith('SLIPSTITCH_'):
            monkeypatch.delenv(key)
    yield
    for key in list(os.environ):
        if key.startswith('SLIPSTITCH_'):
            del os.environ[key]
