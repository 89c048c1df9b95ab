import io
import os

import pytest

from snakelog import diagnostics


@pytest.fixture(autouse=True)
def diagnostics_stream(monkeypatch):
    """
    Routes the diagnostics channel into an in-memory stream for each test.
    The module-level logger is restored afterwards so tests stay isolated.
    """
    stream = io.StringIO()
    monkeypatch.setattr(diagnostics, "_diagnostics", None)
    diagnostics.configure_diagnostics(level="DEBUG", stream=stream)
    yield stream


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run from an empty directory with no SNAKELOG_* variables set."""
    for key in list(os.environ):
        if key.startswith("SNAKELOG_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path
