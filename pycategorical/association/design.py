"""
AssociationDesign: validated, immutable inputs for an association test.

Uses factory classmethods per test type. The `test_type` field identifies
which fields are populated. All configuration (continuity correction,
alpha, Monte Carlo replicates, confidence level) is checked here, so
backends never see an invalid combination.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pycategorical.core.exceptions import (
    InvalidConfigurationError,
    InvalidInputError,
)
from pycategorical.core.validation import check_open_unit_interval
from pycategorical.association._common import VALID_ALTERNATIVES
from pycategorical.association.table import (
    ContingencyTable,
    build_contingency_table,
)


def _validate_alternative(alternative: str) -> str:
    """Validate and return alternative hypothesis string."""
    if alternative not in VALID_ALTERNATIVES:
        raise InvalidConfigurationError(
            f"alternative must be one of {VALID_ALTERNATIVES}, got {alternative!r}",
            option="alternative",
        )
    return alternative


def _resolve_table(
    x: Any,
    y: ArrayLike | None,
    fields: str | Sequence[str] | None,
) -> tuple[ContingencyTable, str]:
    """Build the table and a short description of where it came from."""
    if y is not None:
        if fields is not None:
            raise InvalidInputError(
                "pass either y or fields, not both", field="fields",
            )
        return ContingencyTable.from_labels(x, y), "x and y"

    table = build_contingency_table(x, fields)
    if fields is not None:
        names = [fields] if isinstance(fields, str) else list(fields)
        return table, " by ".join(names)
    return table, "x"


def resolve_correction(
    correct: bool | None,
    table: ContingencyTable,
    simulate_p_value: bool = False,
) -> bool:
    """
    Decide whether Yates' continuity correction is applied.

    None applies it to 2x2 tables only. An explicit True is honoured for
    2x2 tables and rejected for any other shape or for simulated p-values.
    """
    if correct is None:
        return table.is_2x2 and not simulate_p_value

    if correct and not table.is_2x2:
        raise InvalidConfigurationError(
            f"continuity correction applies only to 2x2 tables, "
            f"got shape {table.shape}",
            option="correct",
            shape=table.shape,
        )
    if correct and simulate_p_value:
        raise InvalidConfigurationError(
            "continuity correction cannot be combined with a simulated p-value",
            option="correct",
            shape=table.shape,
        )
    return bool(correct)


@dataclass(frozen=True)
class AssociationDesign:
    """
    Design for association tests.

    Uses a tagged-union approach: the `test_type` field identifies which
    fields are populated. Factory classmethods validate inputs.

    Do not construct directly; use factory classmethods.
    """
    test_type: str
    _table: ContingencyTable

    # Test configuration
    _alpha: float = 0.05
    _correct: bool = False

    # Goodness-of-fit
    _expected_p: NDArray[np.floating[Any]] | None = None

    # Monte Carlo
    _simulate_p_value: bool = False
    _n_monte_carlo: int = 2000
    _seed: int | None = None

    # Fisher-specific
    _alternative: str = "two-sided"
    _compute_conf_int: bool = True
    _conf_level: float = 0.95

    # Metadata
    _data_name: str = "x"

    # --- Properties ---

    @property
    def table(self) -> ContingencyTable:
        return self._table

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def correct(self) -> bool:
        return self._correct

    @property
    def expected_p(self) -> NDArray[np.floating[Any]] | None:
        return self._expected_p

    @property
    def simulate_p_value(self) -> bool:
        return self._simulate_p_value

    @property
    def n_monte_carlo(self) -> int:
        return self._n_monte_carlo

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def alternative(self) -> str:
        return self._alternative

    @property
    def compute_conf_int(self) -> bool:
        return self._compute_conf_int

    @property
    def conf_level(self) -> float:
        return self._conf_level

    @property
    def data_name(self) -> str:
        return self._data_name

    # --- Factory classmethods ---

    @classmethod
    def for_chisq_test(
        cls,
        x: Any,
        y: ArrayLike | None = None,
        *,
        fields: str | Sequence[str] | None = None,
        correct: bool | None = None,
        p: ArrayLike | None = None,
        rescale_p: bool = False,
        alpha: float = 0.05,
        simulate_p_value: bool = False,
        B: int = 2000,
        seed: int | None = None,
    ) -> AssociationDesign:
        """
        Build design for chisq_test().

        A two-way table (or x and y label vectors, or two fields) gives a
        test of independence. A one-way table (1-D counts, a label ->
        count mapping, or a single field) gives a goodness-of-fit test
        against `p`, uniform by default.
        """
        alpha = check_open_unit_interval(alpha, "alpha")
        table, data_name = _resolve_table(x, y, fields)
        correct = resolve_correction(correct, table, simulate_p_value)

        if simulate_p_value and B < 1:
            raise InvalidConfigurationError(
                f"B must be a positive number of replicates, got {B}",
                option="B",
            )

        if not table.is_one_way:
            if p is not None:
                raise InvalidConfigurationError(
                    "p applies only to one-sample (1 x k) tables, "
                    f"got shape {table.shape}",
                    option="p",
                    shape=table.shape,
                )
            return cls(
                test_type="chisq_independence",
                _table=table,
                _alpha=alpha,
                _correct=correct,
                _simulate_p_value=simulate_p_value,
                _n_monte_carlo=int(B),
                _seed=seed,
                _data_name=data_name,
            )

        k = table.shape[1]
        p_arr = None
        if p is not None:
            p_arr = np.asarray(p, dtype=np.float64).ravel()
            if len(p_arr) != k:
                raise InvalidInputError(
                    f"length of p ({len(p_arr)}) must equal number of "
                    f"categories ({k})",
                    field="p",
                )
            if np.any(~np.isfinite(p_arr)) or np.any(p_arr <= 0):
                raise InvalidInputError(
                    "all probabilities must be positive and finite", field="p",
                )
            if rescale_p:
                p_arr = p_arr / np.sum(p_arr)
            else:
                p_sum = np.sum(p_arr)
                if abs(p_sum - 1.0) > 1e-7:
                    raise InvalidInputError(
                        f"probabilities must sum to 1, got {p_sum:.10g}. "
                        f"Use rescale_p=True to normalize.",
                        field="p",
                    )

        return cls(
            test_type="chisq_gof",
            _table=table,
            _alpha=alpha,
            _correct=correct,
            _expected_p=p_arr,
            _simulate_p_value=simulate_p_value,
            _n_monte_carlo=int(B),
            _seed=seed,
            _data_name=data_name,
        )

    @classmethod
    def for_fisher_test(
        cls,
        x: Any,
        y: ArrayLike | None = None,
        *,
        fields: str | Sequence[str] | None = None,
        alternative: str = "two-sided",
        conf_int: bool = True,
        conf_level: float = 0.95,
        alpha: float = 0.05,
    ) -> AssociationDesign:
        """
        Build design for fisher_test().

        Parameters
        ----------
        x : various
            A 2x2 table in any form build_contingency_table() accepts,
            or a label vector when y is given.
        y : array-like or None
            Second label vector to cross-tabulate against x.
        fields : str or sequence of str, optional
            Two fields to tabulate raw observations by.
        alternative : str
            "two-sided", "less", or "greater".
        conf_int : bool
            Compute the exact confidence interval for the odds ratio.
        conf_level : float
            Confidence level.
        alpha : float
            Significance level for the verdict.
        """
        alternative = _validate_alternative(alternative)
        conf_level = check_open_unit_interval(conf_level, "conf_level")
        alpha = check_open_unit_interval(alpha, "alpha")
        table, data_name = _resolve_table(x, y, fields)

        if not table.is_2x2:
            raise InvalidConfigurationError(
                f"Fisher's exact test requires a 2x2 table, got shape {table.shape}",
                option="fisher",
                shape=table.shape,
            )

        return cls(
            test_type="fisher_2x2",
            _table=table,
            _alpha=alpha,
            _alternative=alternative,
            _compute_conf_int=conf_int,
            _conf_level=conf_level,
            _data_name=data_name,
        )

    def __repr__(self) -> str:
        return (
            f"AssociationDesign(test_type={self.test_type!r}, "
            f"table={self._table.shape}, n={self._table.total:g})"
        )
