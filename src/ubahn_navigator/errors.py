"""Errors raised by the line catalog, network accessors and route search."""

from __future__ import annotations

from enum import Enum


class RouteErrorKind(str, Enum):
    """What went wrong, for callers that map failures to responses."""
    UNKNOWN_STATION = "unknown_station"
    STATION_NOT_FOUND = "station_not_found"
    NO_ROUTE = "no_route"


class RoutingError(Exception):
    """Base class for lookup and routing failures."""
    kind: RouteErrorKind


class StationNotFound(RoutingError):
    """The station is not served by the given line."""
    kind = RouteErrorKind.STATION_NOT_FOUND

    def __init__(self, station: str, line: str):
        self.station = station
        self.line = line
        super().__init__(f"Station {station!r} is not on line {line}")


class UnknownStation(RoutingError):
    """No line in the network serves the station."""
    kind = RouteErrorKind.UNKNOWN_STATION

    def __init__(self, station: str):
        self.station = station
        super().__init__(f"Station not found: {station}")


class NoRouteFound(RoutingError):
    """No simple path connects the two stations."""
    kind = RouteErrorKind.NO_ROUTE

    def __init__(self, origin: str, destination: str):
        self.origin = origin
        self.destination = destination
        super().__init__(f"No route found from {origin} to {destination}")


class CatalogError(ValueError):
    """Line data could not be loaded."""
