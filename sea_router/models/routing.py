# sea_router/models/routing.py

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """
    Simple longitude/latitude coordinate (decimal degrees).

    Range checks are done by the routing service so that out-of-range values
    come back as a structured InvalidCoordinate error.
    """
    lon: float
    lat: float


class MultiRouteRequest(BaseModel):
    """
    Request body for the /multi-routes endpoint: the waypoints to visit, in
    order, e.g. [{"lon": -74.0, "lat": 40.7}, {"lon": 31.2, "lat": 30.0}].
    """
    coordinates: List[Coordinate]


class PassageRequest(BaseModel):
    """
    Request body for the /waypoints endpoint (single origin/destination).

    Either both port names or both coordinates must be given; port names win
    when both are present.
    """
    model_config = ConfigDict(populate_by_name=True)

    from_port: Optional[str] = Field(default=None, alias="fromPort")
    to_port: Optional[str] = Field(default=None, alias="toPort")
    origin: Optional[Coordinate] = None
    destination: Optional[Coordinate] = None


class RouteGeometry(BaseModel):
    """
    GeoJSON LineString or MultiLineString in [lon, lat] order.
    """
    type: str = "LineString"
    coordinates: List[Any]


class LegProperties(BaseModel):
    """
    Distance accounting for one consecutive waypoint pair, in kilometres.

    `fallback` marks a pair that could not be routed on the network and was
    replaced by a direct great-circle line.
    """
    origin: List[float]
    destination: List[float]
    distance_km: float
    origin_access_km: float
    graph_km: float
    destination_access_km: float
    fallback: bool


class RouteProperties(BaseModel):
    total_distance: float  # km
    route_count: int
    segment_count: int
    fallback_count: int
    legs: List[LegProperties]


class RouteFeature(BaseModel):
    """
    Response for the /multi-routes endpoint.
    """
    type: str = "Feature"
    geometry: RouteGeometry
    properties: RouteProperties


class PassageProperties(BaseModel):
    o_coords: List[float]
    d_coords: List[float]
    o_to_wp_dist: float
    wp_to_d_dist: float
    wp_dist: float
    total_dist: float
    route_name: str
    fallback: bool = False


class PassageFeature(BaseModel):
    type: str = "Feature"
    id: str
    geometry: RouteGeometry
    properties: PassageProperties


class PassageCollection(BaseModel):
    """
    Response for the /waypoints endpoint: origin connection, main route and
    destination connection as separate features.
    """
    type: str = "FeatureCollection"
    name: str = "Short Sea Route"
    features: List[PassageFeature]


class Port(BaseModel):
    port: str
    country: str = ""
    latitude: float
    longitude: float


class ErrorResponse(BaseModel):
    error: str
    kind: str
