"""
Common types for association tests.

Defines the parameter payloads carried inside Result[P]: ChisqParams for
Pearson's chi-squared tests and FisherParams for Fisher's exact test.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray


VALID_ALTERNATIVES = ("two-sided", "less", "greater")

# Cells with an expected count below this make the chi-squared
# approximation unreliable.
MIN_EXPECTED_COUNT = 5.0

LOW_EXPECTED_WARNING = "Chi-squared approximation may be incorrect"


@dataclass(frozen=True)
class ChisqParams:
    """
    Parameter payload for Pearson's chi-squared tests.

    Attributes
    ----------
    statistic : float
        X-squared statistic, always >= 0.
    df : int
        Degrees of freedom: (rows - 1) * (cols - 1), or k - 1 for a
        one-sample 1 x k table.
    p_value : float
        Upper-tail probability of the statistic, or the Monte Carlo
        estimate when `replicates` is set.
    observed : ndarray
        Observed counts, shape (rows, cols).
    expected : ndarray
        Expected counts under the null, same shape as observed.
    residuals : ndarray
        Pearson residuals (O - E) / sqrt(E).
    stdres : ndarray or None
        Standardized residuals (independence tests only).
    low_expected_count : bool
        True if any expected count is below 5. Advisory only.
    correction_applied : bool
        True if Yates' continuity correction was used.
    cramers_v : float or None
        Cramér's V effect size (independence tests only).
    method : str
        Human-readable method name.
    data_name : str
        Description of the data.
    replicates : int or None
        Number of Monte Carlo replicates behind p_value, if simulated.
    """
    statistic: float
    df: int
    p_value: float
    observed: NDArray[np.floating[Any]]
    expected: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    stdres: NDArray[np.floating[Any]] | None
    low_expected_count: bool
    correction_applied: bool
    cramers_v: float | None
    method: str
    data_name: str
    replicates: int | None = None


@dataclass(frozen=True)
class FisherParams:
    """
    Parameter payload for Fisher's exact test on a 2x2 table.

    Attributes
    ----------
    odds_ratio : float
        Sample odds ratio (a*d)/(b*c) for cells a, b, c, d in row-major
        order. inf when b*c == 0 < a*d, nan when a margin is empty.
    p_value : float
        Exact p-value from the hypergeometric distribution.
    conditional_odds_ratio : float
        Conditional maximum likelihood estimate of the odds ratio.
    conf_int : ndarray or None
        Exact confidence interval for the conditional odds ratio.
    conf_level : float
        Confidence level of conf_int.
    alternative : str
        "two-sided", "less", or "greater".
    observed : ndarray
        The 2x2 table.
    method : str
        Human-readable method name.
    data_name : str
        Description of the data.
    """
    odds_ratio: float
    p_value: float
    conditional_odds_ratio: float
    conf_int: NDArray[np.floating[Any]] | None
    conf_level: float
    alternative: str
    observed: NDArray[np.floating[Any]]
    method: str
    data_name: str
