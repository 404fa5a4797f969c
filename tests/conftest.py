import json
from pathlib import Path

import pytest

from excalidraw_mermaid.core.logging import setup_logging

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def quiet_logging():
    # The CLI rebinds the log handler to the captured stderr of each test
    setup_logging("WARNING")
    yield
    setup_logging("WARNING")


def fixture_path(name: str) -> Path:
    return FIXTURES_DIR / name


def load_fixture(name: str) -> dict:
    return json.loads(fixture_path(name).read_text(encoding="utf-8"))


@pytest.fixture
def simple_flow():
    return load_fixture("simple-flow.excalidraw")


@pytest.fixture
def decision_flow():
    return load_fixture("decision-flow.excalidraw")


@pytest.fixture
def all_shapes():
    return load_fixture("all-shapes.excalidraw")


@pytest.fixture
def grouped():
    return load_fixture("grouped.excalidraw")
