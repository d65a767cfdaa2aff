"""Subway routing with graph-based pathfinding."""

from __future__ import annotations

import heapq
import itertools
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

import structlog

from .config import MAX_ROUTE_HOPS
from .errors import NoRouteFound, RouteErrorKind, RoutingError, UnknownStation
from .lines import Line, get_catalog
from .network import Edge, NetworkGraph, build_network

logger = structlog.get_logger(__name__)


class Action(str, Enum):
    ENTER = "enter"
    SWITCH = "switch"
    EXIT = "exit"


@dataclass(frozen=True)
class RouteSegment:
    """One step of an itinerary: enter, switch to, or exit `line` at `station`."""
    action: Action
    station: str
    line: Line

    def __str__(self):
        if self.action is Action.ENTER:
            return f"Enter {self.line.name} at {self.station}"
        if self.action is Action.SWITCH:
            return f"Switch to {self.line.name} at {self.station}"
        return f"Exit {self.line.name} at {self.station}"

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "station": self.station,
            "line": {"name": self.line.name, "color": self.line.color},
        }


@dataclass
class Route:
    """A complete itinerary: enter first, exit last, switches in between."""
    segments: list[RouteSegment]
    hops: int = 0

    @property
    def switch_count(self) -> int:
        return sum(1 for seg in self.segments if seg.action is Action.SWITCH)

    def stations(self) -> list[str]:
        return [seg.station for seg in self.segments]

    def to_dict(self) -> list[dict]:
        return [seg.to_dict() for seg in self.segments]

    def __str__(self):
        result = [f"{i}. {seg}" for i, seg in enumerate(self.segments, 1)]
        result.append(f"\n{self.hops} stop(s), {self.switch_count} switch(es)")
        return "\n".join(result)


def segmentize(path: Sequence[Edge]) -> Route:
    """Collapse a hop path into enter/switch/exit segments."""
    if not path:
        raise ValueError("Cannot build a route from an empty path")

    segments: list[RouteSegment] = []
    current_line: Optional[Line] = None

    for edge in path:
        if current_line is None:
            segments.append(RouteSegment(Action.ENTER, edge.from_station, edge.line))
            current_line = edge.line
        elif edge.line.name != current_line.name:
            segments.append(RouteSegment(Action.SWITCH, edge.from_station, edge.line))
            current_line = edge.line

    segments.append(RouteSegment(Action.EXIT, path[-1].to_station, current_line))
    return Route(segments=segments, hops=len(path))


class RouteFinder:
    """Finds itineraries over a prebuilt network graph.

    Cost is the number of station hops; among equally short paths the one
    with fewer line switches wins.
    """

    def __init__(self, graph: NetworkGraph, max_hops: Optional[int] = None):
        self.graph = graph
        self.max_hops = max_hops

    def find_route(self, origin: str, destination: str) -> Route:
        """Find the best route between two stations.

        Raises:
            UnknownStation: if no line serves `origin` or `destination`
            NoRouteFound: if the stations are not connected (within `max_hops`)
        """
        origin_lines = self.graph.lines_at(origin)
        if not origin_lines:
            raise UnknownStation(origin)
        if not self.graph.has_station(destination):
            raise UnknownStation(destination)

        if origin == destination:
            line = origin_lines[0]
            return Route(segments=[
                RouteSegment(Action.ENTER, origin, line),
                RouteSegment(Action.EXIT, origin, line),
            ])

        path = self._search(origin, destination, origin_lines)
        if path is None:
            logger.info("no_route_found", origin=origin, destination=destination,
                        max_hops=self.max_hops)
            raise NoRouteFound(origin, destination)

        route = segmentize(path)
        logger.info("route_found", origin=origin, destination=destination,
                    hops=route.hops, switches=route.switch_count)
        return route

    def _search(self, origin: str, destination: str,
                origin_lines: Sequence[Line]) -> Optional[tuple[Edge, ...]]:
        """Best-first search over (station, line) states.

        Queue entries: (hops, switches, tie, station, line, path_stations, path)
        """
        tie = itertools.count()
        pq = []
        for line in origin_lines:
            heapq.heappush(pq, (0, 0, next(tie), origin, line, frozenset([origin]), ()))

        settled: set[tuple[str, str]] = set()

        while pq:
            hops, switches, _, current, current_line, on_path, path = heapq.heappop(pq)

            if current == destination:
                return path

            state = (current, current_line.name)
            if state in settled:
                continue
            settled.add(state)

            if self.max_hops is not None and hops >= self.max_hops:
                continue

            # Stay on the current line, or change to any other line serving this station
            for line in self.graph.lines_at(current):
                changes = 0 if line.name == current_line.name else 1
                for edge in self.graph.edges_from(current, line):
                    neighbor = edge.to_station
                    if neighbor in on_path or (neighbor, line.name) in settled:
                        continue
                    heapq.heappush(pq, (
                        hops + 1,
                        switches + changes,
                        next(tie),
                        neighbor,
                        line,
                        on_path | {neighbor},
                        path + (edge,),
                    ))

        return None


def get_route(origin: str, destination: str, all_lines: Sequence[Line],
              max_hops: Optional[int] = None) -> Route:
    """Find a route between two stations over an explicit set of lines."""
    return RouteFinder(build_network(all_lines), max_hops=max_hops).find_route(
        origin, destination
    )


@dataclass
class RouteResult:
    """Outcome of a route request, for callers that report rather than raise."""
    route: Optional[Route] = None
    error: Optional[RouteErrorKind] = None
    message: str = ""
    details: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None


def plan_route(finder: RouteFinder, origin: str, destination: str) -> RouteResult:
    """Run a route search and fold any lookup failure into a RouteResult."""
    try:
        route = finder.find_route(origin, destination)
    except RoutingError as e:
        return RouteResult(error=e.kind, message=str(e),
                           details={"origin": origin, "destination": destination})
    return RouteResult(route=route)


# Singleton instance
_route_finder: Optional[RouteFinder] = None
_route_finder_lock = threading.Lock()


def get_route_finder() -> RouteFinder:
    """Get or create the shared finder over the process-wide catalog."""
    global _route_finder
    if _route_finder is None:
        with _route_finder_lock:
            if _route_finder is None:
                graph = build_network(get_catalog().lines)
                _route_finder = RouteFinder(graph, max_hops=MAX_ROUTE_HOPS)
    return _route_finder
