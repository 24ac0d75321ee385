"""Overpass QL query construction for coordinate searches.

The search box is not computed geodesically. Offsets are taken once
from a reference point in Dubai and its hand-picked output box, then
applied unchanged to every coordinate. The upper longitude offset keeps
its original sign, so the eastern edge of the box falls slightly west
of the point itself.
"""

from urllib.parse import urlencode

AROUND_METERS = 22.5
QUERY_TIMEOUT_SECONDS = 10

REFERENCE_LAT = 25.35782
REFERENCE_LON = 55.38433
REFERENCE_BOX_MINLAT = 25.35412
REFERENCE_BOX_MINLON = 55.38133
REFERENCE_BOX_MAXLON = 55.38671

DIFF_LAT_MIN = REFERENCE_LAT - REFERENCE_BOX_MINLAT
DIFF_LON_MIN = REFERENCE_LON - REFERENCE_BOX_MINLON
DIFF_LAT_MAX = REFERENCE_BOX_MINLAT - REFERENCE_LAT
DIFF_LON_MAX = REFERENCE_BOX_MAXLON - REFERENCE_LON


def search_box(lat: float, lon: float) -> tuple[float, float, float, float]:
    """Return the (minlat, minlon, maxlat, maxlon) geometry box around a point."""
    return (
        lat - DIFF_LAT_MIN,
        lon - DIFF_LON_MIN,
        lat - DIFF_LAT_MAX,
        lon - DIFF_LON_MAX,
    )


def build_search_query(lat: float, lon: float) -> str:
    """Build the Overpass QL query for elements around a coordinate.

    Nodes and ways within ``AROUND_METERS`` are returned with tags and
    clipped geometry, then relations with full geometry.
    """
    box = ",".join(str(v) for v in search_box(lat, lon))
    around = f"around:{AROUND_METERS},{lat},{lon}"
    return "".join(
        [
            f"[timeout:{QUERY_TIMEOUT_SECONDS}][out:json];",
            "(",
            f"node({around});",
            f"way({around});",
            ");",
            f"out tags geom({box});",
            f"relation({around});",
            f"out geom({box});",
        ]
    )


def encode_form(query: str) -> str:
    """Encode a query as the ``data=`` form body the interpreter expects."""
    return urlencode({"data": query})
