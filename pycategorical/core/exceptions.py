"""
Exception hierarchy for PyCategorical.

All exceptions inherit from PyCategoricalError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyCategoricalError(Exception):
    """Base exception for all PyCategorical errors."""
    pass


class ValidationError(PyCategoricalError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InvalidInputError(ValidationError):
    """
    Observation data or counts are malformed.

    Raised for negative, non-finite or fractional counts, records missing
    a categorical field, or tables with fewer than 2 categories.

    Attributes:
        field: Name of the offending field or argument, if known
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DimensionError(InvalidInputError):
    """
    Counts or label vectors have the wrong shape.

    Raised for tables of more than two dimensions and for parallel
    label vectors or probability vectors of mismatched length.
    """
    pass


class EmptyDataError(ValidationError):
    """
    The table holds no observations.

    Raised when the grand total of a contingency table is zero, which
    leaves expected frequencies undefined.
    """
    pass


class InvalidConfigurationError(ValidationError):
    """
    A test option is incompatible with the table it is applied to.

    Raised when a continuity correction or Fisher's exact test is
    requested for a table that is not 2x2, or when a configuration
    value (alpha, conf_level, backend) is out of range.

    Attributes:
        option: Name of the offending option
        shape: Shape of the table the option was applied to, if any
    """

    def __init__(
        self,
        message: str,
        option: str | None = None,
        shape: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.option = option
        self.shape = shape


class NumericalError(PyCategoricalError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DegenerateTableError(NumericalError):
    """
    Expected frequency of zero in at least one cell.

    Raised instead of producing an infinite or NaN statistic when a whole
    row or column of the table is empty.

    Attributes:
        cells: (row, col) indices of the zero expected cells
    """

    def __init__(
        self,
        message: str,
        cells: list[tuple[int, ...]] | None = None,
    ):
        super().__init__(message)
        self.cells = cells if cells is not None else []
