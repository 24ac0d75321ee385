"""Typed views over raw Overpass elements."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ElementKind(str, Enum):
    """Element type filter accepted by the query API."""

    ANY = "any"
    NODE = "node"
    WAY = "way"
    RELATION = "relation"

    def matches(self, element: Mapping[str, Any]) -> bool:
        return self is ElementKind.ANY or element.get("type") == self.value


@dataclass(frozen=True)
class Position:
    """A lat/lon pair."""

    lat: float
    lon: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class Bounds:
    """Four-corner bounding box of an element.

    Attributes:
        minlat: Southern edge
        minlon: Western edge
        maxlat: Northern edge
        maxlon: Eastern edge
    """

    minlat: float
    minlon: float
    maxlat: float
    maxlon: float

    @classmethod
    def from_element(cls, element: Mapping[str, Any]) -> "Bounds | None":
        """Read the ``bounds`` field of an element, if present and complete."""
        raw = element.get("bounds")
        if not isinstance(raw, Mapping):
            return None
        try:
            return cls(
                minlat=raw["minlat"],
                minlon=raw["minlon"],
                maxlat=raw["maxlat"],
                maxlon=raw["maxlon"],
            )
        except KeyError:
            return None

    @property
    def min_corner(self) -> Position:
        return Position(lat=self.minlat, lon=self.minlon)


@dataclass(frozen=True)
class ElementTags:
    """Accessor helpers over an element's open ``tags`` mapping.

    Only the handful of keys the gateway understands get a property;
    everything else is reachable through ``get``.
    """

    raw: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_element(cls, element: Mapping[str, Any]) -> "ElementTags | None":
        tags = element.get("tags")
        if not isinstance(tags, Mapping):
            return None
        return cls(raw=tags)

    def get(self, key: str) -> str | None:
        value = self.raw.get(key)
        # empty strings count as absent
        return value or None

    def first(self, *keys: str) -> str | None:
        """Return the first populated value among ``keys``."""
        for key in keys:
            value = self.get(key)
            if value is not None:
                return value
        return None

    @property
    def tourism(self) -> str | None:
        return self.get("tourism")

    @property
    def historic(self) -> str | None:
        return self.get("historic")

    @property
    def name(self) -> str | None:
        return self.first("name:en", "name")

    @property
    def wiki(self) -> str | None:
        return self.first("wikipedia:en", "wikipedia")

    @property
    def website(self) -> str | None:
        return self.get("website")
