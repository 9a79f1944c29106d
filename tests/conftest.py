"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def smile_counts():
    """One-sample frequencies of smiling vs not smiling."""
    return {"Smile": 25, "No Smile": 37}


@pytest.fixture
def weather_table():
    """Mood (rows: No Smile, Smile) by weather (cols: Rainy, Sunny)."""
    return np.array([[37, 33], [25, 50]])


@pytest.fixture
def weather_records(weather_table):
    """The weather table expanded into one record per observation."""
    moods = ["No Smile", "Smile"]
    weathers = ["Rainy", "Sunny"]
    records = []
    for i, mood in enumerate(moods):
        for j, weather in enumerate(weathers):
            n = int(weather_table[i, j])
            records.extend({"mood": mood, "weather": weather} for _ in range(n))
    return records


@pytest.fixture
def sparse_table():
    """2x2 table with an expected count below 5."""
    return np.array([[4, 2], [5, 7]])
