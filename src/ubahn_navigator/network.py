"""Network graph built from line sequences, plus per-line station accessors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

import structlog

from .errors import StationNotFound
from .lines import Line

logger = structlog.get_logger(__name__)


class Direction(str, Enum):
    """Travel direction along a line's station list."""
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class Edge:
    """A directed hop between two consecutive stations on one line."""
    from_station: str
    to_station: str
    line: Line


class NetworkGraph:
    """Graph representation of the subway network.

    Built once from the line list and never modified afterwards, so a single
    instance can be shared between concurrent route searches.
    """

    def __init__(self, lines: Iterable[Line]):
        self.lines: tuple[Line, ...] = tuple(lines)
        adjacency: dict[str, list[Edge]] = {}
        station_lines: dict[str, list[Line]] = {}

        for line in self.lines:
            for station in line.stations:
                station_lines.setdefault(station, []).append(line)
            for from_id, to_id in zip(line.stations, line.stations[1:]):
                # Add both directions
                adjacency.setdefault(from_id, []).append(Edge(from_id, to_id, line))
                adjacency.setdefault(to_id, []).append(Edge(to_id, from_id, line))

        self._adjacency: Mapping[str, tuple[Edge, ...]] = MappingProxyType(
            {station: tuple(edges) for station, edges in adjacency.items()}
        )
        self._station_lines: Mapping[str, tuple[Line, ...]] = MappingProxyType(
            {station: tuple(ls) for station, ls in station_lines.items()}
        )
        logger.debug(
            "network_built",
            lines=len(self.lines),
            stations=len(self._station_lines),
            edges=self.edge_count,
        )

    @property
    def stations(self) -> tuple[str, ...]:
        return tuple(self._station_lines)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())

    def has_station(self, station: str) -> bool:
        return station in self._station_lines

    def lines_at(self, station: str) -> tuple[Line, ...]:
        """Lines serving a station, in catalog order (empty if unknown)."""
        return self._station_lines.get(station, ())

    def edges_from(self, station: str, line: Optional[Line] = None) -> tuple[Edge, ...]:
        """Outgoing hops from a station, optionally restricted to one line."""
        edges = self._adjacency.get(station, ())
        if line is None:
            return edges
        return tuple(edge for edge in edges if edge.line.name == line.name)


def build_network(lines: Iterable[Line]) -> NetworkGraph:
    """Compile lines into a directed adjacency graph."""
    return NetworkGraph(lines)


def get_accessible_lines(line: Line, station: str, all_lines: Sequence[Line]) -> list[Line]:
    """Lines other than `line` that also stop at `station`.

    Args:
        line: The line the rider is currently on
        station: A station on that line
        all_lines: Every line in the network

    Returns:
        Matching lines, in the order of `all_lines`

    Raises:
        StationNotFound: if `station` is not on `line`
    """
    if station not in line.stations:
        raise StationNotFound(station, line.name)
    return [other for other in all_lines
            if other.name != line.name and station in other.stations]


def get_next_stops(line: Line, direction: Direction, count: int, station: str) -> list[str]:
    """The next `count` stations after `station` when travelling `direction` on `line`.

    Backward results are ordered nearest first. Fewer than `count` stations
    are returned when the end of the line comes first.

    Raises:
        StationNotFound: if `station` is not on `line`
    """
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")

    stations = line.stations
    try:
        index = stations.index(station)
    except ValueError:
        raise StationNotFound(station, line.name) from None

    if Direction(direction) is Direction.FORWARD:
        return list(stations[index + 1:index + 1 + count])
    return list(reversed(stations[max(0, index - count):index]))
