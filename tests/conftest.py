# tests/conftest.py
import json
import os
import sys

import pytest

# Add the project root directory to sys.path so that "import sea_router" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from sea_router.services.graph_manager import build_routing_graph  # noqa: E402
from sea_router.services.graph_preparer import iter_edges  # noqa: E402

# New York area -> Port Said area, one long line
ATLANTIC = [(-73.5, 40.0), (-40.0, 38.0), (-10.0, 36.0), (5.0, 37.5), (31.0, 31.5)]
# The network is cut at the dateline: one line ends on 180, the next starts on -180
PACIFIC_WEST = [(170.0, 10.0), (179.6, 10.0), (180.0, 10.0)]
PACIFIC_EAST = [(-180.0, 10.0), (-179.6, 10.0), (-170.0, 10.0)]
# Not connected to anything else
ISLAND = [(100.0, -40.0), (101.0, -40.0)]

TOLERANCE_M = 500_000.0


def feature_collection(*lines):
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": [list(p) for p in line]},
                "properties": {},
            }
            for line in lines
        ],
    }


@pytest.fixture
def make_fc():
    return feature_collection


@pytest.fixture
def ocean_fc():
    return feature_collection(ATLANTIC, PACIFIC_WEST, PACIFIC_EAST, ISLAND)


@pytest.fixture
def make_graph():
    def _make(*lines):
        return build_routing_graph(iter_edges(feature_collection(*lines)))

    return _make


@pytest.fixture
def ocean_graph(ocean_fc):
    return build_routing_graph(iter_edges(ocean_fc))


@pytest.fixture
def dataset_path(tmp_path, ocean_fc):
    path = tmp_path / "marnet.geojson"
    path.write_text(json.dumps(ocean_fc), encoding="utf-8")
    return path
