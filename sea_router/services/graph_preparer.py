# sea_router/services/graph_preparer.py
import json
import math
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from sea_router.core.errors import GraphUnavailable
from sea_router.core.logger import logger
from sea_router.models.route import Edge, Position

FeatureCollection = Dict[str, Any]


def split_lines(fc: FeatureCollection) -> FeatureCollection:
    """
    Decompose every navigable line into two-point LineString features.

    The search only works on pairwise segments, so a line with N points
    becomes N - 1 features. Lines with fewer than two points are dropped.
    Already split data comes back unchanged (one feature per input line).
    """
    features: List[Dict[str, Any]] = []

    for edge in iter_edges(fc):
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "LineString",
                    "coordinates": [list(edge[0]), list(edge[1])],
                },
                "properties": {},
            }
        )

    return {"type": "FeatureCollection", "features": features}


def iter_edges(fc: FeatureCollection) -> Iterator[Edge]:
    """
    Yield one Edge per consecutive point pair of every line in `fc`.

    LineString and MultiLineString geometries are walked; any other geometry
    type carries no navigable segments and is skipped. Malformed line or
    coordinate data raises GraphUnavailable.
    """
    for feature in fc.get("features") or []:
        if not isinstance(feature, dict):
            continue
        geometry = feature.get("geometry")
        if not isinstance(geometry, dict):
            continue
        geom_type = geometry.get("type")
        coords = geometry.get("coordinates") or []

        if geom_type == "LineString":
            parts = [coords]
        elif geom_type == "MultiLineString":
            parts = coords
        else:
            continue

        if not isinstance(parts, list):
            raise GraphUnavailable(f"Malformed {geom_type} coordinates in maritime network dataset")

        for line in parts:
            if not isinstance(line, list):
                raise GraphUnavailable(f"Malformed {geom_type} coordinates in maritime network dataset")
            points = [_as_position(c) for c in line]
            for a, b in zip(points[:-1], points[1:]):
                yield (a, b)


def load_feature_collection(path: str) -> FeatureCollection:
    """
    Read a GeoJSON FeatureCollection of navigable lines.

    Raises GraphUnavailable when the file is missing or cannot be parsed;
    without it there is nothing to route on.
    """
    dataset = Path(path)
    if not dataset.exists():
        raise GraphUnavailable(f"Maritime network dataset not found at {dataset}")

    try:
        with dataset.open("r", encoding="utf-8") as fh:
            fc = json.load(fh)
    except (OSError, ValueError) as exc:
        raise GraphUnavailable(f"Could not read maritime network dataset {dataset}: {exc}")

    if not isinstance(fc, dict) or not isinstance(fc.get("features"), list):
        raise GraphUnavailable(f"{dataset} is not a GeoJSON FeatureCollection")

    return fc


def load_split_cache(path: str) -> Optional[FeatureCollection]:
    """
    Load a previously written pre-split dataset, or None when unavailable.
    """
    cache = Path(path)
    if not cache.exists():
        logger.info("Split dataset {} does not exist; the raw dataset will be split.", cache)
        return None

    try:
        return load_feature_collection(str(cache))
    except GraphUnavailable as exc:
        logger.warning("Ignoring unreadable split dataset: {}", exc.message)
        return None


def write_split_cache(fc: FeatureCollection, path: str) -> bool:
    """
    Persist the pre-split dataset so later runs can skip decomposition.

    Best-effort: failures are logged and reported through the return value.
    """
    cache = Path(path)
    tmp = cache.with_name(cache.name + ".tmp")
    try:
        cache.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(fc, fh)
        tmp.replace(cache)
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Could not write split dataset to {}: {}", cache, exc)
        return False

    logger.info("Split dataset written to {} ({} features)", cache, len(fc["features"]))
    return True


def _as_position(coord: Any) -> Position:
    # GeoJSON may carry a third (elevation) value; only lon/lat matter here
    try:
        lon, lat = float(coord[0]), float(coord[1])
    except (IndexError, KeyError, TypeError, ValueError):
        raise GraphUnavailable(f"Malformed coordinate {coord!r} in maritime network dataset")

    if not (math.isfinite(lon) and math.isfinite(lat)):
        raise GraphUnavailable(f"Non-finite coordinate {coord!r} in maritime network dataset")
    return (lon, lat)
