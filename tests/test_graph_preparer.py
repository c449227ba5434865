# tests/test_graph_preparer.py
import json

import pytest

from sea_router.core.errors import GraphUnavailable
from sea_router.services.graph_preparer import (
    iter_edges,
    load_feature_collection,
    load_split_cache,
    split_lines,
    write_split_cache,
)


def _lines(fc):
    return [tuple(tuple(p) for p in f["geometry"]["coordinates"]) for f in fc["features"]]


def test_split_lines_emits_one_feature_per_point_pair(make_fc):
    fc = make_fc([(0, 0), (1, 0), (2, 1), (3, 1)], [(5, 5)], [])

    split = split_lines(fc)

    assert split["type"] == "FeatureCollection"
    assert _lines(split) == [
        ((0.0, 0.0), (1.0, 0.0)),
        ((1.0, 0.0), (2.0, 1.0)),
        ((2.0, 1.0), (3.0, 1.0)),
    ]
    assert all(f["geometry"]["type"] == "LineString" for f in split["features"])


def test_split_lines_is_idempotent(make_fc):
    pre_split = make_fc([(0, 0), (1, 0)], [(1, 0), (2, 1)], [(10, 10), (11, 11)])

    once = split_lines(pre_split)
    twice = split_lines(once)

    assert set(_lines(once)) == set(_lines(pre_split))
    assert set(_lines(twice)) == set(_lines(once))
    assert len(once["features"]) == len(pre_split["features"])


def test_iter_edges_walks_multilinestrings_and_skips_other_geometries():
    fc = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {
                    "type": "MultiLineString",
                    "coordinates": [[[0, 0], [1, 1]], [[2, 2], [3, 3], [4, 4]]],
                },
            },
            {"type": "Feature", "geometry": {"type": "Point", "coordinates": [9, 9]}},
            {"type": "Feature", "geometry": None},
            # elevation values are ignored
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": [[7, 7, 12.5], [8, 8, 3.0]]},
            },
        ],
    }

    assert list(iter_edges(fc)) == [
        ((0.0, 0.0), (1.0, 1.0)),
        ((2.0, 2.0), (3.0, 3.0)),
        ((3.0, 3.0), (4.0, 4.0)),
        ((7.0, 7.0), (8.0, 8.0)),
    ]


@pytest.mark.parametrize(
    "coordinates",
    [
        [[0, 0], [1]],
        [[0, 0], None],
        [[0, 0], ["east", "north"]],
        [[0, 0], [float("nan"), 1]],
        "0,0 1,1",
    ],
)
def test_iter_edges_rejects_malformed_coordinates(coordinates):
    fc = {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "geometry": {"type": "LineString", "coordinates": coordinates}},
        ],
    }

    with pytest.raises(GraphUnavailable):
        list(iter_edges(fc))


def test_load_feature_collection_missing_file(tmp_path):
    with pytest.raises(GraphUnavailable):
        load_feature_collection(str(tmp_path / "nope.geojson"))


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", '{"type": "FeatureCollection"}'])
def test_load_feature_collection_unparsable(tmp_path, content):
    path = tmp_path / "broken.geojson"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(GraphUnavailable) as excinfo:
        load_feature_collection(str(path))
    assert excinfo.value.kind == "GraphUnavailable"


def test_split_cache_round_trip(tmp_path, make_fc):
    split = split_lines(make_fc([(0, 0), (1, 0), (2, 0)]))
    path = tmp_path / "cache" / "splitCoords.geojson"

    assert write_split_cache(split, str(path)) is True
    assert json.loads(path.read_text(encoding="utf-8")) == split
    assert load_split_cache(str(path)) == split


def test_split_cache_missing_or_corrupt_is_not_an_error(tmp_path):
    assert load_split_cache(str(tmp_path / "absent.geojson")) is None

    corrupt = tmp_path / "splitCoords.geojson"
    corrupt.write_text("{truncated", encoding="utf-8")
    assert load_split_cache(str(corrupt)) is None


def test_write_split_cache_failure_is_reported_not_raised(tmp_path, make_fc):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")

    ok = write_split_cache(split_lines(make_fc([(0, 0), (1, 0)])), str(blocker / "split.geojson"))

    assert ok is False
