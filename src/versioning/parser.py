"""Version string utilities: numeric prefix, stability tag and ordering."""

import re
from typing import List, Optional

from .models import StabilityLevel

_PURE_VERSION_RE = re.compile(r"^(\d+\.)?(\d+\.)?(\*|\d+)", re.IGNORECASE)

_DIGITS = "0123456789"

# Same separators PHP's version_compare() folds into dots.
_SPECIAL_SEPARATORS = "-_+"

# Ranks for alphabetic segments; matched by prefix, first hit wins.
_SPECIAL_FORMS = (
    ("dev", 0),
    ("alpha", 1),
    ("a", 1),
    ("beta", 2),
    ("b", 2),
    ("RC", 3),
    ("rc", 3),
    ("#", 4),
    ("pl", 5),
    ("p", 5),
)
_NUMBER_FORM = "#"


def pure_numeric_prefix(version: Optional[str]) -> Optional[str]:
    """Return the leading dotted numeric part of ``version`` (e.g. "2.0.*").

    Up to three groups are matched, each a run of digits or a literal "*".
    Returns None when the string does not start with a number.
    """
    if not version:
        return None
    match = _PURE_VERSION_RE.match(version)
    if match:
        return match.group(0)
    return None


def classify_stability(version: str) -> StabilityLevel:
    """Determine the stability of a given version.

    The first level (dev, alpha, beta, rc, stable) found anywhere in the
    lower-cased string wins, so "2.0.0-src" is classified as rc.
    """
    version = version.lower()
    for level in StabilityLevel:
        if level.value in version:
            return level
    return StabilityLevel.STABLE


def _is_digit(char: str) -> bool:
    return char in _DIGITS


def _canonicalize(version: str) -> str:
    """Normalize separators and split digit/letter runs with dots."""
    if not version:
        return ""
    out = [version[0]]
    last = version[0]
    for char in version[1:]:
        prev_out = out[-1]
        if char in _SPECIAL_SEPARATORS:
            if prev_out != ".":
                out.append(".")
        elif (_is_digit(char) and last != "." and not _is_digit(last)) or (
            _is_digit(last) and char != "." and not _is_digit(char)
        ):
            if prev_out != ".":
                out.append(".")
            out.append(char)
        elif not char.isalnum():
            if prev_out != ".":
                out.append(".")
        else:
            out.append(char)
        last = char
    return "".join(out)


def _segments(version: Optional[str]) -> List[str]:
    return [part for part in _canonicalize(version or "").split(".") if part]


def _special_rank(form: str) -> int:
    for name, rank in _SPECIAL_FORMS:
        if form.startswith(name):
            return rank
    return -1


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _compare_special(left: str, right: str) -> int:
    return _sign(_special_rank(left) - _special_rank(right))


def _compare_segments(left: str, right: str) -> int:
    left_numeric = _is_digit(left[0])
    right_numeric = _is_digit(right[0])
    if left_numeric and right_numeric:
        return _sign(int(left) - int(right))
    if not left_numeric and not right_numeric:
        return _compare_special(left, right)
    if left_numeric:
        return _compare_special(_NUMBER_FORM, right)
    return _compare_special(left, _NUMBER_FORM)


def compare_versions(left: Optional[str], right: Optional[str]) -> int:
    """Compare two version strings segment by segment.

    Returns -1, 0 or 1. Numeric segments compare as integers; word segments
    rank dev < alpha < beta < rc < (number) < pl, unknown words below dev.
    When one side has extra segments, a numeric one makes it newer while a
    word like "beta" makes it older ("1.0.0-beta" < "1.0.0" < "1.0.0.1").
    """
    left_parts = _segments(left)
    right_parts = _segments(right)

    for left_part, right_part in zip(left_parts, right_parts):
        result = _compare_segments(left_part, right_part)
        if result:
            return result

    if len(left_parts) > len(right_parts):
        extra = left_parts[len(right_parts)]
        return 1 if _is_digit(extra[0]) else _compare_special(extra, _NUMBER_FORM)
    if len(right_parts) > len(left_parts):
        extra = right_parts[len(left_parts)]
        return -1 if _is_digit(extra[0]) else _compare_special(_NUMBER_FORM, extra)
    return 0
