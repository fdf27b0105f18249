# tests/conftest.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from chlorisafe.schemas.disinfection import ProcessState
from chlorisafe.services.disinfection.constants import KEEGAN_2012
from chlorisafe.services.disinfection.engine import DisinfectionEngine

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> Dict[str, Any]:
    with open(FIXTURES_DIR / name, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(scope="session")
def scenario_a_fixture() -> Dict[str, Any]:
    """Pinned regression values for the default process point."""
    return load_fixture("scenario_a.json")


@pytest.fixture()
def scenario_a(scenario_a_fixture) -> ProcessState:
    return ProcessState.model_validate(scenario_a_fixture["inputs"])


@pytest.fixture()
def engine() -> DisinfectionEngine:
    return DisinfectionEngine(KEEGAN_2012)


@pytest.fixture(scope="session")
def low_dose_fixture() -> Dict[str, Any]:
    """Pinned values for a point whose credits all sit below the cap."""
    return load_fixture("low_dose_unbaffled.json")
