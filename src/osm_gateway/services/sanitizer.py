"""Cleanup of raw Overpass element lists.

Overpass answers may contain null placeholders at several levels: in
the top-level ``elements`` array, in an element's ``geometry`` and
``members`` arrays, and in the ``geometry`` of each member. Everything
downstream assumes dense sequences.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from osm_gateway.errors import MalformedResponse

logger = logging.getLogger(__name__)


def _dense(items: Any) -> Any:
    if not isinstance(items, list):
        return items
    return [item for item in items if item is not None]


def _sanitize_member(member: Any) -> Any:
    if isinstance(member, Mapping) and "geometry" in member:
        return {**member, "geometry": _dense(member["geometry"])}
    return member


def sanitize_element(element: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of an element with null geometry points and members removed.

    Fields the element does not carry stay absent.
    """
    cleaned = dict(element)
    if "geometry" in cleaned:
        cleaned["geometry"] = _dense(cleaned["geometry"])
    if "members" in cleaned:
        members = _dense(cleaned["members"])
        if isinstance(members, list):
            members = [_sanitize_member(m) for m in members]
        cleaned["members"] = members
    return cleaned


def sanitize(elements: Iterable[Any]) -> list[dict[str, Any]]:
    """Drop null entries from an element list and densify nested arrays.

    The input is not modified. Entries that are not JSON objects are
    dropped along with nulls.

    Args:
        elements: Raw ``elements`` array from an upstream document

    Returns:
        New list of sanitized elements, in input order
    """
    return [sanitize_element(el) for el in elements if isinstance(el, Mapping)]


def _elements_of(payload: Any) -> list[Any]:
    if not isinstance(payload, Mapping):
        raise MalformedResponse(f"expected a JSON object, got {type(payload).__name__}")
    elements = payload.get("elements")
    if not isinstance(elements, list):
        raise MalformedResponse("response has no 'elements' array")
    return elements


def extract_elements(payload: Any) -> list[Any]:
    """Return the raw ``elements`` array of an upstream document.

    A document without a usable ``elements`` array yields an empty list
    so the normalization pipeline always has something to work with.
    """
    try:
        return _elements_of(payload)
    except MalformedResponse as e:
        logger.warning("Malformed upstream response, using empty result: %s", e)
        return []
