"""FastAPI web interface for the U-Bahn navigator."""

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .errors import StationNotFound
from .lines import Line, LineCatalog, get_catalog
from .network import Direction, get_accessible_lines, get_next_stops
from .routing import RouteFinder, get_route_finder, plan_route

app = FastAPI(
    title="U-Bahn Navigator",
    description="Line information and route planning for the Berlin U-Bahn",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class LineSummary(BaseModel):
    name: str
    color: str


class LineDetail(LineSummary):
    type: str
    stations: list[str]


class RouteSegmentOut(BaseModel):
    action: str
    station: str
    line: LineSummary


def _summary(line: Line) -> LineSummary:
    return LineSummary(name=line.name, color=line.color)


def _require_line(catalog: LineCatalog, line_id: str) -> Line:
    line = catalog.get_line(line_id)
    if not line:
        raise HTTPException(status_code=404, detail=f"Line not found: {line_id}")
    return line


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "U-Bahn Navigator"}


@app.get("/lines", response_model=list[LineSummary])
async def list_lines(catalog: LineCatalog = Depends(get_catalog)):
    """List all lines with their display colors."""
    return [_summary(line) for line in catalog]


@app.get("/lines/{line_id}", response_model=LineDetail)
async def get_line(line_id: str, catalog: LineCatalog = Depends(get_catalog)):
    """Get a specific line by id, e.g. `GET /lines/U8`."""
    line = _require_line(catalog, line_id)
    return LineDetail(name=line.name, color=line.color, type=line.type,
                      stations=list(line.stations))


@app.get("/lines/{line_id}/stations", response_model=list[str])
async def get_line_stations(line_id: str, catalog: LineCatalog = Depends(get_catalog)):
    """Stations of a line, in line order."""
    return list(_require_line(catalog, line_id).stations)


@app.get("/lines/{line_id}/stations/{station}/next-stations", response_model=list[str])
async def get_next_stations(
    line_id: str,
    station: str,
    max_stations: int = Query(3, alias="maxStations", ge=1),
    direction: Direction = Direction.FORWARD,
    catalog: LineCatalog = Depends(get_catalog),
):
    """Next stations after a given station on a given line."""
    line = _require_line(catalog, line_id)
    try:
        return get_next_stops(line, direction, max_stations, station)
    except StationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/lines/{line_id}/stations/{station}/available-lines",
         response_model=list[LineSummary])
async def get_available_lines(line_id: str, station: str,
                              catalog: LineCatalog = Depends(get_catalog)):
    """Other lines that stop at a given station of a given line."""
    line = _require_line(catalog, line_id)
    try:
        return [_summary(other) for other in get_accessible_lines(line, station, catalog.lines)]
    except StationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/navigation/{origin}/{destination}", response_model=list[RouteSegmentOut])
async def navigate(
    origin: str,
    destination: str,
    finder: RouteFinder = Depends(get_route_finder),
):
    """Get a route between two stations."""
    result = plan_route(finder, origin, destination)
    if not result.ok:
        raise HTTPException(status_code=404, detail=result.message)

    return result.route.to_dict()


def run_server(host: str = None, port: int = None):
    """Run the FastAPI server."""
    import uvicorn

    from .config import API_HOST, API_PORT, LOG_LEVEL
    from .logging_config import configure_logging

    configure_logging(log_level=LOG_LEVEL)
    uvicorn.run(app, host=host or API_HOST, port=port or API_PORT, log_config=None)


if __name__ == "__main__":
    run_server()
