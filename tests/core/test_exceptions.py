"""
Tests for PyCategorical exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyCategoricalError)
    - DimensionError is a kind of InvalidInputError
    - Diagnostic attributes on InvalidInputError, InvalidConfigurationError,
      DegenerateTableError
    - Default attribute values
"""

import pytest

from pycategorical.core.exceptions import (
    DegenerateTableError,
    DimensionError,
    EmptyDataError,
    InvalidConfigurationError,
    InvalidInputError,
    NumericalError,
    PyCategoricalError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyCategoricalError."""

    @pytest.mark.parametrize("exc", [
        DimensionError("wrong shape"),
        InvalidInputError("negative count"),
        EmptyDataError("no observations"),
        InvalidConfigurationError("not 2x2"),
    ])
    def test_validation_errors(self, exc):
        assert isinstance(exc, ValidationError)
        assert isinstance(exc, PyCategoricalError)

    def test_dimension_error_is_invalid_input(self):
        with pytest.raises(InvalidInputError) as exc_info:
            raise DimensionError("x and y differ in length", field="y")
        assert exc_info.value.field == "y"

    def test_degenerate_table_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise DegenerateTableError("zero expected count")

    def test_degenerate_table_is_not_validation_error(self):
        err = DegenerateTableError("zero expected count")
        assert not isinstance(err, ValidationError)
        assert isinstance(err, PyCategoricalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestInvalidInputError:

    def test_field(self):
        err = InvalidInputError("field 'mood' is missing", field="mood")
        assert str(err) == "field 'mood' is missing"
        assert err.field == "mood"

    def test_default_field_is_none(self):
        assert InvalidInputError("bad").field is None


class TestInvalidConfigurationError:

    def test_all_attributes(self):
        err = InvalidConfigurationError(
            "continuity correction applies only to 2x2 tables",
            option="correct",
            shape=(2, 3),
        )
        assert err.option == "correct"
        assert err.shape == (2, 3)

    def test_defaults_are_none(self):
        err = InvalidConfigurationError("bad option")
        assert err.option is None
        assert err.shape is None


class TestDegenerateTableError:

    def test_cells(self):
        err = DegenerateTableError("zero expected", cells=[(0, 1), (1, 1)])
        assert err.cells == [(0, 1), (1, 1)]

    def test_default_cells_empty(self):
        assert DegenerateTableError("zero expected").cells == []

    def test_catchable_with_attributes(self):
        with pytest.raises(DegenerateTableError) as exc_info:
            raise DegenerateTableError("zero expected", cells=[(2, 0)])
        assert exc_info.value.cells == [(2, 0)]
