"""
Pytest configuration for bloomkit tests.

Provides shared fixtures and keeps cached settings isolated between tests.
"""

import os
import sys
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# isolated_settings is autouse and function-scoped; it only resets cached
# configuration and holds no per-example state.
settings.register_profile(
    "bloomkit", suppress_health_check=[HealthCheck.function_scoped_fixture]
)
settings.load_profile("bloomkit")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test against default settings with no config file or BLOOMKIT_* env."""
    from bloomkit.core.config import reset_settings

    for key in list(os.environ):
        if key.startswith("BLOOMKIT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))

    reset_settings()
    yield
    reset_settings()
