"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services.
They are NOT used for API contracts - use DTOs from the dto package
for that.

Upstream elements themselves stay plain JSON mappings: OSM tags form an
open-ended string mapping and unknown fields must survive untouched.
The entities here are typed views over the few fields the gateway reads.
"""

from .element import Bounds, ElementKind, ElementTags, Position

__all__ = ["Bounds", "ElementKind", "ElementTags", "Position"]
