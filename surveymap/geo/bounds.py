"""
Rectangular lat/lng bounds.

Bounds are backed by a shapely ``box`` in (lng, lat) order so containment
follows shapely's ``covers`` semantics: a rectangle covers itself and any
rectangle lying inside it, edges included.

Usage
-----
    viewport = LatLngBounds(south=51.4, west=-0.3, north=51.6, east=0.1)
    viewport.query_params()   # {"ne": "51.6,0.1", "sw": "51.4,-0.3"}
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from shapely.geometry import Polygon, box


@dataclass(frozen=True)
class LatLngBounds:
    """Axis-aligned geographic rectangle."""
    south: float
    west: float
    north: float
    east: float

    def __post_init__(self) -> None:
        if self.south > self.north:
            raise ValueError(f"south {self.south} is north of north {self.north}")
        if self.west > self.east:
            raise ValueError(f"west {self.west} is east of east {self.east}")

    @property
    def polygon(self) -> Polygon:
        return box(self.west, self.south, self.east, self.north)

    def contains(self, other: "LatLngBounds") -> bool:
        """True if *other* lies wholly within these bounds."""
        return self.polygon.covers(other.polygon)

    def query_params(self) -> Dict[str, str]:
        """Corner parameters for the survey API."""
        return {
            "ne": f"{self.north},{self.east}",
            "sw": f"{self.south},{self.west}",
        }
