"""Pytest fixtures and configuration for EntiToon testing."""

import sys
from pathlib import Path

# Add the project root to Python path to enable 'entitoon' imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from entitoon.integration.toon import config as toon_config
from entitoon.integration.toon.config import ENV_PREFIX, ToonConfigManager


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def medical_records():
    """Two patient records with nested vitals and diagnosis."""
    return [
        {
            "patient_id": "P-101",
            "name": "John Doe",
            "visit_date": "2025-02-15",
            "vitals": {"temperature": 98.6, "blood_pressure": "120/80"},
            "medications": ["Metformin", "Aspirin"],
        },
        {
            "patient_id": "P-102",
            "name": "Jane Smith",
            "visit_date": "2025-02-16",
            "diagnosis": {"primary": "Hypertension", "status": "Stable"},
        },
    ]


@pytest.fixture
def sequential_ids():
    """Deterministic fallback id factory yielding id00001, id00002, ..."""
    counter = {"n": 0}

    def factory():
        counter["n"] += 1
        return f"id{counter['n']:05d}"

    return factory


# =============================================================================
# Configuration Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Give every test a fresh global config manager and no ENTITOON_* env vars."""
    import os

    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(toon_config, "_config_manager", ToonConfigManager())
    yield
