"""Selection regions and region sets."""

from .region import Region
from .selection import Selection

__all__ = ["Region", "Selection"]
