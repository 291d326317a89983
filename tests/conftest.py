"""
Pytest configuration and shared fixtures for the sheet layout planner tests.
"""

import random

import pytest

from models.part import Component, LayoutState, Sheet
from storage.store import LayoutStore


@pytest.fixture
def store(tmp_path) -> LayoutStore:
    """A store backed by a file in a temporary directory."""
    return LayoutStore(str(tmp_path / "state.json"))


@pytest.fixture
def sample_state() -> LayoutState:
    return LayoutState(
        sheets=(Sheet(1000, 500, 18), Sheet(2500.5, 1250, 0)),
        components=(Component(200, 100), Component(300.25, 150), Component(50, 50)),
        tolerance=2.5
    )


@pytest.fixture
def random_layouts():
    """Integer-sized layouts so cursor arithmetic stays exact."""
    rng = random.Random(1234)
    layouts = []
    for _ in range(200):
        sheets = [Sheet(rng.randint(50, 600), rng.randint(50, 600), rng.randint(0, 30))
                  for _ in range(rng.randint(1, 4))]
        components = [Component(rng.randint(1, 400), rng.randint(1, 400))
                      for _ in range(rng.randint(0, 25))]
        layouts.append((sheets, components, rng.randint(0, 15)))
    return layouts
