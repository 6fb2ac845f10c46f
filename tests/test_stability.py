"""Tests for the stability level ordering."""

import pytest

from versioning.errors import UnknownStabilityError
from versioning.models import StabilityLevel
from versioning.stability import is_stable_enough, parse_stability, stability_index


class TestStabilityIndex:
    """Test ranking of stability labels."""

    def test_levels_are_ordered_least_to_most_stable(self):
        """dev < alpha < beta < rc < stable."""
        ranks = [stability_index(label) for label in ("dev", "alpha", "beta", "rc", "stable")]
        assert ranks == [0, 1, 2, 3, 4]

    def test_labels_are_case_insensitive(self):
        """Manifest values like "RC" or "Stable" are accepted."""
        assert stability_index("RC") == stability_index("rc")
        assert stability_index("Stable") == 4

    def test_accepts_enum_members(self):
        """Enum members rank the same as their labels."""
        assert stability_index(StabilityLevel.BETA) == stability_index("beta")

    def test_unknown_label_raises(self):
        """A label outside the five levels is a hard error."""
        with pytest.raises(UnknownStabilityError) as exc_info:
            stability_index("gamma")
        assert exc_info.value.stability == "gamma"
        assert "Unknown stability: gamma" in str(exc_info.value)

    def test_unknown_label_is_a_value_error(self):
        """Callers catching ValueError still see the failure."""
        with pytest.raises(ValueError):
            parse_stability("")


class TestIsStableEnough:
    """Test the minimum-stability gate."""

    @pytest.mark.parametrize(
        "minimum,possible,expected",
        [
            ("rc", "beta", False),
            ("rc", "rc", True),
            ("rc", "stable", True),
            ("dev", "dev", True),
            ("stable", "rc", False),
            ("alpha", "beta", True),
        ],
    )
    def test_gate(self, minimum, possible, expected):
        """A candidate passes when it is at least as stable as the minimum."""
        assert is_stable_enough(minimum, possible) is expected

    def test_unknown_minimum_raises(self):
        """A malformed minimum-stability cannot gate anything."""
        with pytest.raises(UnknownStabilityError):
            is_stable_enough("nightly", StabilityLevel.STABLE)
