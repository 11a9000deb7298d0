"""Domain models for map display."""

from dataclasses import dataclass
from enum import Enum


class PinKind(str, Enum):
    """Source collection of a map pin."""

    VISIT = "visit"
    WISHLIST = "wishlist"


@dataclass(frozen=True)
class GeoPin:
    """A labelled coordinate shown on the map."""

    id: str
    latitude: float
    longitude: float
    title: str = ""
    subtitle: str = ""
    kind: PinKind = PinKind.VISIT


@dataclass(frozen=True)
class MapRegion:
    """Viewport center and span in degrees."""

    center_latitude: float
    center_longitude: float
    span_latitude: float
    span_longitude: float
