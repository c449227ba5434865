# sea_router/core/errors.py


class RouteError(Exception):
    """
    Base class for every error the routing engine reports to callers.

    `kind` is a stable machine-readable name, `message` the human-readable
    explanation. Both end up in the JSON error body of the API.
    """

    kind: str = "RouteError"
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class InvalidCoordinate(RouteError):
    """Out-of-range or non-finite longitude/latitude."""

    kind = "InvalidCoordinate"
    status_code = 400


class InsufficientWaypoints(RouteError):
    """Fewer than two waypoints supplied."""

    kind = "InsufficientWaypoints"
    status_code = 400


class PathNotFound(RouteError):
    """No graph vertex within tolerance, or no connected path."""

    kind = "PathNotFound"
    status_code = 404


class GraphUnavailable(RouteError):
    """The maritime network dataset is missing or unparsable."""

    kind = "GraphUnavailable"
    status_code = 503


class PortNotFound(RouteError):
    kind = "PortNotFound"
    status_code = 404
