"""Tests for subway routing functionality."""

import pytest
from ubahn_navigator.errors import NoRouteFound, RouteErrorKind, UnknownStation
from ubahn_navigator.lines import Line, load_lines
from ubahn_navigator.network import Edge, build_network
from ubahn_navigator.routing import (
    Action,
    RouteFinder,
    get_route,
    get_route_finder,
    plan_route,
    segmentize,
)

LINE_A = Line(name="A", color="#ff0000", stations=("X", "Y", "Z"))
LINE_B = Line(name="B", color="#0000ff", stations=("Y", "M", "N"))


def _summary(route):
    return [(seg.action.value, seg.station, seg.line.name) for seg in route.segments]


@pytest.fixture(scope="module")
def berlin():
    """Finder over the built-in Berlin network."""
    return RouteFinder(build_network(load_lines()))


def test_route_with_switch():
    """Test changing lines at the shared station."""
    route = get_route("X", "N", [LINE_A, LINE_B])
    assert _summary(route) == [
        ("enter", "X", "A"),
        ("switch", "Y", "B"),
        ("exit", "N", "B"),
    ]
    assert route.hops == 3
    assert route.switch_count == 1


def test_route_single_line():
    """Test a route along one line has no switch."""
    route = get_route("Z", "X", [LINE_A, LINE_B])
    assert _summary(route) == [("enter", "Z", "A"), ("exit", "X", "A")]


def test_route_single_hop():
    """Test one hop yields exactly enter and exit."""
    route = get_route("M", "N", [LINE_A, LINE_B])
    assert _summary(route) == [("enter", "M", "B"), ("exit", "N", "B")]
    assert route.hops == 1


def test_route_same_station():
    """Test a route to the origin itself is enter plus exit on one line."""
    route = get_route("Y", "Y", [LINE_A, LINE_B])
    assert _summary(route) == [("enter", "Y", "A"), ("exit", "Y", "A")]
    assert route.switch_count == 0
    assert route.hops == 0


def test_unknown_origin():
    """Test an origin on no line fails before searching."""
    with pytest.raises(UnknownStation) as exc:
        get_route("Q", "X", [LINE_A, LINE_B])
    assert exc.value.station == "Q"


def test_unknown_destination():
    """Test a destination on no line fails explicitly."""
    with pytest.raises(UnknownStation) as exc:
        get_route("X", "Q", [LINE_A, LINE_B])
    assert exc.value.station == "Q"


def test_disconnected_network():
    """Test unconnected stations raise NoRouteFound, not an empty route."""
    island = Line(name="C", color="#00ff00", stations=("P", "R"))
    with pytest.raises(NoRouteFound):
        get_route("X", "P", [LINE_A, LINE_B, island])


def test_fewest_hops_wins():
    """Test a shorter path with a switch beats a longer direct one."""
    long_line = Line(name="A", color="#000000", stations=("O", "a1", "a2", "a3", "D"))
    first = Line(name="B", color="#000000", stations=("O", "b"))
    second = Line(name="C", color="#000000", stations=("b", "D"))
    route = get_route("O", "D", [long_line, first, second])
    assert route.hops == 2
    assert _summary(route) == [("enter", "O", "B"), ("switch", "b", "C"), ("exit", "D", "C")]


def test_equal_hops_prefer_fewer_switches():
    """Test ties on hops go to the route with fewer switches."""
    first = Line(name="B", color="#000000", stations=("O", "b"))
    second = Line(name="C", color="#000000", stations=("b", "D"))
    direct = Line(name="A", color="#000000", stations=("O", "m", "D"))
    route = get_route("O", "D", [first, second, direct])
    assert _summary(route) == [("enter", "O", "A"), ("exit", "D", "A")]


def test_max_hops_bound():
    """Test a route longer than the hop bound is reported as not found."""
    finder = RouteFinder(build_network([LINE_A, LINE_B]), max_hops=2)
    with pytest.raises(NoRouteFound):
        finder.find_route("X", "N")
    assert finder.find_route("X", "M").hops == 2


def test_get_route_max_hops_argument():
    """Test the hop bound is passed explicitly to get_route."""
    with pytest.raises(NoRouteFound):
        get_route("X", "N", [LINE_A, LINE_B], max_hops=2)
    assert get_route("X", "N", [LINE_A, LINE_B], max_hops=3).hops == 3


def test_get_route_ignores_configured_bound(monkeypatch):
    """Test get_route is unbounded unless a bound is passed in."""
    monkeypatch.setattr("ubahn_navigator.routing.MAX_ROUTE_HOPS", 1)
    assert get_route("X", "N", [LINE_A, LINE_B]).hops == 3


def test_route_on_single_station_line():
    """Test a one-station line still routes to itself."""
    route = get_route("X", "X", [Line(name="A", color="#ff0000", stations=["X"])])
    assert _summary(route) == [("enter", "X", "A"), ("exit", "X", "A")]


def test_berlin_route(berlin):
    """Test the U6 to U9 change at Leopoldplatz."""
    route = berlin.find_route("Otisstraße", "Hansaplatz")
    assert _summary(route) == [
        ("enter", "Otisstraße", "U6"),
        ("switch", "Leopoldplatz", "U9"),
        ("exit", "Hansaplatz", "U9"),
    ]
    assert route.hops == 11


def test_berlin_shared_track_no_spurious_switch(berlin):
    """Test U1/U3 shared track does not produce a switch."""
    route = berlin.find_route("Warschauer Straße", "Uhlandstraße")
    assert route.switch_count == 0
    assert route.segments[0].line.name == "U1"
    assert route.hops == 12


@pytest.mark.parametrize("origin,destination", [
    ("Alt-Tegel", "Rudow"),
    ("Pankow", "Krumme Lanke"),
    ("Hönow", "Ruhleben"),
    ("Rathaus Spandau", "Wittenau"),
    ("Innsbrucker Platz", "Hauptbahnhof"),
    ("Rathaus Steglitz", "Hermannstraße"),
])
def test_berlin_routes_are_valid(berlin, origin, destination):
    """Test routes form simple paths with one switch per line change."""
    route = berlin.find_route(origin, destination)
    segments = route.segments

    assert segments[0].action is Action.ENTER
    assert segments[0].station == origin
    assert segments[-1].action is Action.EXIT
    assert segments[-1].station == destination
    assert all(seg.action is Action.SWITCH for seg in segments[1:-1])

    stations = route.stations()
    assert len(stations) == len(set(stations))

    for prev, seg in zip(segments, segments[1:]):
        # each leg runs along the line boarded at its start
        assert prev.station in prev.line
        assert seg.station in prev.line
        if seg.action is Action.SWITCH:
            assert seg.line.name != prev.line.name
            assert seg.station in seg.line
        else:
            assert seg.line.name == prev.line.name


def test_segmentize_state_machine():
    """Test switches are emitted only when the line changes."""
    path = [
        Edge("X", "Y", LINE_A),
        Edge("Y", "M", LINE_B),
        Edge("M", "N", LINE_B),
    ]
    route = segmentize(path)
    assert _summary(route) == [
        ("enter", "X", "A"),
        ("switch", "Y", "B"),
        ("exit", "N", "B"),
    ]


def test_segmentize_empty_path():
    """Test an empty path cannot become a route."""
    with pytest.raises(ValueError):
        segmentize([])


def test_plan_route_result():
    """Test failures come back as error kinds instead of exceptions."""
    finder = RouteFinder(build_network([LINE_A, LINE_B]))

    ok = plan_route(finder, "X", "N")
    assert ok.ok
    assert ok.route.switch_count == 1

    unknown = plan_route(finder, "Q", "N")
    assert not unknown.ok
    assert unknown.error is RouteErrorKind.UNKNOWN_STATION
    assert unknown.route is None

    island = Line(name="C", color="#00ff00", stations=("P", "R"))
    finder = RouteFinder(build_network([LINE_A, LINE_B, island]))
    no_route = plan_route(finder, "X", "R")
    assert no_route.error is RouteErrorKind.NO_ROUTE


def test_route_to_dict():
    """Test the serialized form used by the API."""
    route = get_route("X", "N", [LINE_A, LINE_B])
    data = route.to_dict()
    assert data[1] == {
        "action": "switch",
        "station": "Y",
        "line": {"name": "B", "color": "#0000ff"},
    }


def test_shared_finder_is_cached():
    """Test the default finder is built once."""
    assert get_route_finder() is get_route_finder()
