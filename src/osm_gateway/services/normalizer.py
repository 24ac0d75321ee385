"""POI normalization.

Derives a uniform summary from an element's optional tag bag:

- ``name``: ``name:en`` if present, else ``name``
- ``cat``: ``tourism:<value>`` if tagged tourism, else ``historic:<value>``,
  else an empty string
- ``wiki``: ``wikipedia:en`` if present, else ``wikipedia``
- ``website``: the ``website`` tag
- ``position``: the south-west corner of ``bounds``, used as a
  representative point

Only elements whose ``tourism`` or ``historic`` value is an accepted
category are kept.
"""

from collections.abc import Collection, Iterable, Mapping
from typing import Any

from osm_gateway.entities import Bounds, ElementTags


def is_point_of_interest(
    tags: ElementTags | None,
    tourism_values: Collection[str],
    historic_values: Collection[str],
) -> bool:
    if tags is None:
        return False
    return tags.tourism in tourism_values or tags.historic in historic_values


def category_label(tags: ElementTags) -> str:
    if tags.tourism is not None:
        return f"tourism:{tags.tourism}"
    if tags.historic is not None:
        return f"historic:{tags.historic}"
    return ""


def normalize(
    element: Mapping[str, Any],
    tourism_values: Collection[str],
    historic_values: Collection[str],
) -> dict[str, Any] | None:
    """Enrich a sanitized element with display fields.

    Args:
        element: Sanitized upstream element
        tourism_values: Accepted values of the ``tourism`` tag
        historic_values: Accepted values of the ``historic`` tag

    Returns:
        The element's fields followed by the derived fields (derived
        values win on collision), or None if the element is not a POI
    """
    tags = ElementTags.from_element(element)
    if not is_point_of_interest(tags, tourism_values, historic_values):
        return None

    bounds = Bounds.from_element(element)
    derived = {
        "position": bounds.min_corner.to_dict() if bounds else None,
        "name": tags.name,
        "cat": category_label(tags),
        "wiki": tags.wiki,
        "website": tags.website,
    }
    return {**element, **derived}


def normalize_all(
    elements: Iterable[Mapping[str, Any]],
    tourism_values: Collection[str],
    historic_values: Collection[str],
) -> list[dict[str, Any]]:
    """Normalize a list of elements, dropping the ones that are not POIs."""
    result = []
    for element in elements:
        poi = normalize(element, tourism_values, historic_values)
        if poi is not None:
            result.append(poi)
    return result
