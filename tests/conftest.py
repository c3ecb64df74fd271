"""Shared pytest configuration and fixtures for gerryaway tests."""

import json
from typing import Any, Dict

import pytest

from gerryaway.config import AnalysisConfig, get_config


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


def _polygon_feature(
    office_id: Any, state: str, ring: list, **extra: Any
) -> Dict[str, Any]:
    closed = ring + [ring[0]]
    return {
        "type": "Feature",
        "properties": {"OFFICE_ID": office_id, "STATE": state, **extra},
        "geometry": {"type": "Polygon", "coordinates": [closed]},
    }


@pytest.fixture
def district_collection() -> Dict[str, Any]:
    """
    A small FeatureCollection of districts.

    * TX-01: unit square (compact, hull ratio 1.0)
    * TX-02: shallow U shape (hull ratio 16 / 12, passes)
    * TX-03: deep U shape (hull ratio 16 / 10, fails)
    * TX-04: long thin 10 x 1 rectangle (hull ratio 1.0, aspect 10)
    * CA-01: other state, never selected by STATE == "TX"
    """
    return {
        "type": "FeatureCollection",
        "features": [
            _polygon_feature(
                "TX-03",
                "TX",
                [
                    [0, 0], [4, 0], [4, 4], [3, 4], [3, 1],
                    [1, 1], [1, 4], [0, 4],
                ],
            ),
            _polygon_feature("TX-01", "TX", [[0, 0], [1, 0], [1, 1], [0, 1]]),
            _polygon_feature(
                "TX-02",
                "TX",
                [
                    [0, 0], [4, 0], [4, 4], [3, 4], [3, 2],
                    [1, 2], [1, 4], [0, 4],
                ],
            ),
            _polygon_feature(
                "TX-04", "TX", [[0, 0], [10, 0], [10, 1], [0, 1]]
            ),
            _polygon_feature("CA-01", "CA", [[0, 0], [1, 0], [1, 1], [0, 1]]),
        ],
    }


@pytest.fixture
def district_file(tmp_path, district_collection):
    path = tmp_path / "districts.geojson"
    path.write_text(json.dumps(district_collection), encoding="utf-8")
    return path


@pytest.fixture
def default_config(monkeypatch, tmp_path) -> AnalysisConfig:
    """Configuration isolated from the caller's environment and .env."""
    for name in (
        "GERRYAWAY_HULL_AREA_RATIO_THRESHOLD",
        "GERRYAWAY_ASPECT_RATIO_THRESHOLD",
        "GERRYAWAY_ID_PROPERTY",
        "GERRYAWAY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_config.cache_clear()
    yield AnalysisConfig()
    get_config.cache_clear()
