"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default warnings
    - has_warning() method
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pycategorical.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


# ═══════════════════════════════════════════════════════════════════════
# Construction and field access
# ═══════════════════════════════════════════════════════════════════════


class TestResultConstruction:

    def test_basic_creation(self):
        result = Result(
            params=FakeParams(value=42.0),
            info={"test_type": "chisq_independence"},
            timing={"total_seconds": 0.01},
            backend_name="cpu_association",
        )
        assert result.params.value == 42.0
        assert result.info["test_type"] == "chisq_independence"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_association"

    def test_default_warnings_empty(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="cpu")
        assert result.warnings == ()
        assert result.timing is None


# ═══════════════════════════════════════════════════════════════════════
# Immutability
# ═══════════════════════════════════════════════════════════════════════


class TestResultFrozen:

    def test_cannot_reassign_params(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="cpu")
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(2.0)

    def test_cannot_reassign_warnings(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="cpu")
        with pytest.raises(FrozenInstanceError):
            result.warnings = ("new",)


# ═══════════════════════════════════════════════════════════════════════
# has_warning
# ═══════════════════════════════════════════════════════════════════════


class TestHasWarning:

    def test_substring_match(self):
        result = Result(
            params=FakeParams(1.0), info={}, timing=None, backend_name="cpu",
            warnings=("Chi-squared approximation may be incorrect",),
        )
        assert result.has_warning("approximation")
        assert not result.has_warning("singular")

    def test_no_warnings(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="cpu")
        assert not result.has_warning("anything")
