"""Data structures exchanged across the renderer boundary."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

Coordinate = Tuple[float, float]


@dataclass(frozen=True)
class PaintRule:
    """Compiled fill-color expression plus compilation statistics.

    Attributes:
        expression: MapLibre-style expression (nested lists) or a bare color
            string when nothing is colored
        colored_areas: Wage areas that received a tier color
        direct_names: County names colored by a single name arm
        nested_names: County names split by state (collision or strict mode)
    """

    expression: Union[List[Any], str]
    colored_areas: int = 0
    direct_names: int = 0
    nested_names: int = 0


@dataclass(frozen=True)
class RenderedFeature:
    """A county polygon as reported by the renderer.

    ``feature_id`` is opaque to the core; it is only handed back in
    highlight requests.
    """

    feature_id: Any
    county_name: str
    state_code: str
    geometry: Optional[Mapping[str, Any]] = None


@dataclass
class Bounds:
    """Axis-aligned lon/lat box grown by point accumulation."""

    west: float = float("inf")
    south: float = float("inf")
    east: float = float("-inf")
    north: float = float("-inf")

    @property
    def is_empty(self) -> bool:
        return self.west > self.east or self.south > self.north

    def extend(self, point: Sequence[float]) -> None:
        lon, lat = float(point[0]), float(point[1])
        self.west = min(self.west, lon)
        self.south = min(self.south, lat)
        self.east = max(self.east, lon)
        self.north = max(self.north, lat)

    def extend_geometry(self, geometry: Optional[Mapping[str, Any]]) -> None:
        """Add every vertex of a GeoJSON geometry."""
        if not geometry:
            return
        for point in iter_coordinates(geometry.get("coordinates")):
            self.extend(point)

    def as_list(self) -> List[List[float]]:
        """``[[west, south], [east, north]]`` as expected by fitBounds."""
        return [[self.west, self.south], [self.east, self.north]]


def iter_coordinates(coordinates: Any) -> Iterator[Sequence[float]]:
    """Yield positions from arbitrarily nested GeoJSON coordinate arrays."""
    if not coordinates:
        return
    if isinstance(coordinates[0], (int, float)):
        yield coordinates
        return
    for part in coordinates:
        yield from iter_coordinates(part)


class FitPadding(BaseModel):
    """Pixel padding for fit-to-bounds; the left side clears the side panel."""

    model_config = ConfigDict(frozen=True)

    top: int = Field(50, ge=0)
    bottom: int = Field(50, ge=0)
    left: int = Field(450, ge=0)
    right: int = Field(50, ge=0)


@dataclass(frozen=True)
class FitBoundsRequest:
    """Ask the renderer to frame ``bounds`` with padding and a zoom ceiling."""

    bounds: Bounds
    padding: FitPadding = field(default_factory=FitPadding)
    max_zoom: float = 9.0

    def to_options(self) -> dict:
        return {"padding": self.padding.model_dump(), "maxZoom": self.max_zoom}


def collect_bounds(features: Iterable[RenderedFeature]) -> Bounds:
    bounds = Bounds()
    for feature in features:
        bounds.extend_geometry(feature.geometry)
    return bounds
