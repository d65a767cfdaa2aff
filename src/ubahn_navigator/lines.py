"""Berlin U-Bahn line data and the line catalog."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

import structlog

from .config import LINES_FILE
from .errors import CatalogError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Line:
    """A subway line: ordered stations, travelled in both directions."""
    name: str
    color: str
    stations: tuple[str, ...]
    type: str = "ubahn"

    def __post_init__(self):
        # Accept lists from callers but store an immutable tuple
        object.__setattr__(self, "stations", tuple(self.stations))
        if len(set(self.stations)) != len(self.stations):
            raise ValueError(f"Line {self.name} lists a station more than once")

    def __contains__(self, station: str) -> bool:
        return station in self.stations

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "color": self.color,
            "type": self.type,
            "stations": list(self.stations),
        }


# Format: name, color, stations (in line order)
LINES_DATA = [
    ("U1", "#7DAD4C", [
        "Warschauer Straße", "Schlesisches Tor", "Görlitzer Bahnhof", "Kottbusser Tor",
        "Prinzenstraße", "Hallesches Tor", "Möckernbrücke", "Gleisdreieck",
        "Kurfürstenstraße", "Nollendorfplatz", "Wittenbergplatz", "Kurfürstendamm",
        "Uhlandstraße",
    ]),
    ("U2", "#DA421E", [
        "Pankow", "Vinetastraße", "Schönhauser Allee", "Eberswalder Straße",
        "Senefelderplatz", "Rosa-Luxemburg-Platz", "Alexanderplatz", "Klosterstraße",
        "Märkisches Museum", "Spittelmarkt", "Hausvogteiplatz", "Stadtmitte",
        "Mohrenstraße", "Potsdamer Platz", "Mendelssohn-Bartholdy-Park", "Gleisdreieck",
        "Bülowstraße", "Nollendorfplatz", "Wittenbergplatz", "Zoologischer Garten",
        "Ernst-Reuter-Platz", "Deutsche Oper", "Bismarckstraße", "Sophie-Charlotte-Platz",
        "Kaiserdamm", "Theodor-Heuss-Platz", "Neu-Westend", "Olympia-Stadion", "Ruhleben",
    ]),
    ("U3", "#16683D", [
        "Warschauer Straße", "Schlesisches Tor", "Görlitzer Bahnhof", "Kottbusser Tor",
        "Prinzenstraße", "Hallesches Tor", "Möckernbrücke", "Gleisdreieck",
        "Kurfürstenstraße", "Nollendorfplatz", "Wittenbergplatz", "Augsburger Straße",
        "Spichernstraße", "Hohenzollernplatz", "Fehrbelliner Platz", "Heidelberger Platz",
        "Rüdesheimer Platz", "Breitenbachplatz", "Podbielskiallee", "Dahlem-Dorf",
        "Freie Universität (Thielplatz)", "Oskar-Helene-Heim", "Onkel Toms Hütte",
        "Krumme Lanke",
    ]),
    ("U4", "#F0D722", [
        "Nollendorfplatz", "Viktoria-Luise-Platz", "Bayerischer Platz",
        "Rathaus Schöneberg", "Innsbrucker Platz",
    ]),
    ("U5", "#7E5330", [
        "Hauptbahnhof", "Bundestag", "Brandenburger Tor", "Unter den Linden",
        "Museumsinsel", "Rotes Rathaus", "Alexanderplatz", "Schillingstraße",
        "Strausberger Platz", "Weberwiese", "Frankfurter Tor", "Samariterstraße",
        "Frankfurter Allee", "Magdalenenstraße", "Lichtenberg", "Friedrichsfelde",
        "Tierpark", "Biesdorf-Süd", "Elsterwerdaer Platz", "Wuhletal", "Kaulsdorf-Nord",
        "Kienberg (Gärten der Welt)", "Cottbusser Platz", "Hellersdorf",
        "Louis-Lewin-Straße", "Hönow",
    ]),
    ("U6", "#8C6DAB", [
        "Alt-Tegel", "Borsigwerke", "Holzhauser Straße", "Otisstraße",
        "Scharnweberstraße", "Kurt-Schumacher-Platz", "Afrikanische Straße", "Rehberge",
        "Seestraße", "Leopoldplatz", "Wedding", "Reinickendorfer Straße",
        "Schwartzkopffstraße", "Naturkundemuseum", "Oranienburger Tor", "Friedrichstraße",
        "Unter den Linden", "Stadtmitte", "Kochstraße", "Hallesches Tor", "Mehringdamm",
        "Platz der Luftbrücke", "Paradestraße", "Tempelhof", "Alt-Tempelhof",
        "Kaiserin-Augusta-Straße", "Ullsteinstraße", "Westphalweg", "Alt-Mariendorf",
    ]),
    ("U7", "#528DBA", [
        "Rathaus Spandau", "Altstadt Spandau", "Zitadelle", "Haselhorst",
        "Paulsternstraße", "Rohrdamm", "Siemensdamm", "Halemweg", "Jakob-Kaiser-Platz",
        "Jungfernheide", "Mierendorffplatz", "Richard-Wagner-Platz", "Bismarckstraße",
        "Wilmersdorfer Straße", "Adenauerplatz", "Konstanzer Straße", "Fehrbelliner Platz",
        "Blissestraße", "Berliner Straße", "Bayerischer Platz", "Eisenacher Straße",
        "Kleistpark", "Yorckstraße", "Möckernbrücke", "Mehringdamm", "Gneisenaustraße",
        "Südstern", "Hermannplatz", "Rathaus Neukölln", "Karl-Marx-Straße", "Neukölln",
        "Grenzallee", "Blaschkoallee", "Parchimer Allee", "Britz-Süd",
        "Johannisthaler Chaussee", "Lipschitzallee", "Wutzkyallee", "Zwickauer Damm",
        "Rudow",
    ]),
    ("U8", "#224F86", [
        "Wittenau", "Rathaus Reinickendorf", "Karl-Bonhoeffer-Nervenklinik",
        "Lindauer Allee", "Paracelsus-Bad", "Residenzstraße", "Franz-Neumann-Platz",
        "Osloer Straße", "Pankstraße", "Gesundbrunnen", "Voltastraße", "Bernauer Straße",
        "Rosenthaler Platz", "Weinmeisterstraße", "Alexanderplatz", "Jannowitzbrücke",
        "Heinrich-Heine-Straße", "Moritzplatz", "Kottbusser Tor", "Schönleinstraße",
        "Hermannplatz", "Boddinstraße", "Leinestraße", "Hermannstraße",
    ]),
    ("U9", "#F3791D", [
        "Osloer Straße", "Nauener Platz", "Leopoldplatz", "Amrumer Straße", "Westhafen",
        "Birkenstraße", "Turmstraße", "Hansaplatz", "Zoologischer Garten",
        "Kurfürstendamm", "Spichernstraße", "Güntzelstraße", "Berliner Straße",
        "Bundesplatz", "Friedrich-Wilhelm-Platz", "Walther-Schreiber-Platz",
        "Schloßstraße", "Rathaus Steglitz",
    ]),
]


def _line_from_record(record: dict) -> Line:
    """Build a Line from a JSON record, raising CatalogError on bad input."""
    if not isinstance(record, dict):
        raise CatalogError(f"Line record must be an object, got {type(record).__name__}")
    try:
        name = record["name"]
        color = record["color"]
        stations = record["stations"]
    except KeyError as e:
        raise CatalogError(f"Line record missing field {e.args[0]!r}") from e
    if not isinstance(stations, list) or not all(isinstance(s, str) for s in stations):
        raise CatalogError(f"Line {name}: stations must be a list of strings")
    try:
        return Line(
            name=str(name),
            color=str(color),
            stations=tuple(stations),
            type=str(record.get("type", "ubahn")),
        )
    except ValueError as e:
        raise CatalogError(str(e)) from e


def load_lines(path: Optional[Union[str, Path]] = None) -> tuple[Line, ...]:
    """Load lines from a JSON file, or the built-in Berlin data when no path is given.

    Args:
        path: JSON file holding an array of {name, color, type?, stations}

    Returns:
        Lines in file order
    """
    if path is None:
        return tuple(Line(name=name, color=color, stations=tuple(stations))
                     for name, color, stations in LINES_DATA)

    path = Path(path)
    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read line data from {path}: {e}") from e

    if not isinstance(records, list):
        raise CatalogError("Line data must be a JSON array")

    lines = tuple(_line_from_record(record) for record in records)
    names = [line.name for line in lines]
    if len(set(names)) != len(names):
        raise CatalogError("Line names must be unique")

    logger.info("lines_loaded", path=str(path), count=len(lines))
    return lines


class LineCatalog:
    """Read-only collection of lines, indexed by name."""

    def __init__(self, lines: Iterable[Line]):
        self._lines = tuple(lines)
        self._by_name = {line.name: line for line in self._lines}

    @property
    def lines(self) -> tuple[Line, ...]:
        return self._lines

    def __iter__(self):
        return iter(self._lines)

    def __len__(self):
        return len(self._lines)

    def get_line(self, name: str) -> Optional[Line]:
        """Find a line by its name (e.g. "U8")."""
        return self._by_name.get(name)

    def lines_serving(self, station: str) -> list[Line]:
        """All lines stopping at a station, in catalog order."""
        return [line for line in self._lines if station in line]

    def all_stations(self) -> list[str]:
        """Distinct station names, in first-seen order."""
        seen: dict[str, None] = {}
        for line in self._lines:
            for station in line.stations:
                seen.setdefault(station, None)
        return list(seen)


# Singleton instance
_catalog: Optional[LineCatalog] = None
_catalog_lock = threading.Lock()


def get_catalog() -> LineCatalog:
    """Get or create the process-wide catalog (honours UBAHN_LINES_FILE)."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = LineCatalog(load_lines(LINES_FILE))
    return _catalog
