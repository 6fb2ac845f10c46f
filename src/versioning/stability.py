"""Ordering of stability levels.

Higher index means more stable. Labels are matched case-insensitively; anything
outside the five known levels raises UnknownStabilityError.
"""

from typing import Union

from .errors import UnknownStabilityError
from .models import StabilityLevel

_ORDER = list(StabilityLevel)


def parse_stability(label: Union[str, StabilityLevel]) -> StabilityLevel:
    """Return the StabilityLevel for ``label``."""
    if isinstance(label, StabilityLevel):
        return label
    try:
        return StabilityLevel(str(label).strip().lower())
    except ValueError as exc:
        raise UnknownStabilityError(str(label)) from exc


def stability_index(label: Union[str, StabilityLevel]) -> int:
    """Return a numerical representation of a stability. Higher is more stable."""
    return _ORDER.index(parse_stability(label))


def is_stable_enough(
    minimum: Union[str, StabilityLevel],
    possible: Union[str, StabilityLevel],
) -> bool:
    """Check if ``possible`` meets the ``minimum`` stability requirement."""
    return stability_index(possible) >= stability_index(minimum)
