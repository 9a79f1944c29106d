"""
Association test solution types.

ChisqSolution and FisherSolution wrap Result[ChisqParams] and
Result[FisherParams], add the significance verdict against alpha, and
print in the familiar htest layout via summary(). AssociationReport pairs
the two for association_test().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pycategorical.core.result import Result
from pycategorical.association._common import ChisqParams, FisherParams

if TYPE_CHECKING:
    from pycategorical.association.design import AssociationDesign


@dataclass
class _TestSolution:
    """Fields and metadata shared by every association solution."""
    _result: Result
    _design: 'AssociationDesign'

    @property
    def p_value(self) -> float:
        """p-value of the test."""
        return self._result.params.p_value

    @property
    def method(self) -> str:
        """Human-readable method name."""
        return self._result.params.method

    @property
    def data_name(self) -> str:
        """Description of the data."""
        return self._result.params.data_name

    @property
    def observed(self) -> NDArray[np.floating[Any]]:
        """Observed counts."""
        return self._result.params.observed

    @property
    def alpha(self) -> float:
        """Significance level the verdict is judged against."""
        return self._design.alpha

    @property
    def significant(self) -> bool:
        """True if p_value < alpha."""
        return bool(self.p_value < self.alpha)

    @property
    def verdict(self) -> str:
        """Plain-language conclusion at the configured alpha."""
        return (
            f"{self._conclusion()} at alpha = {self.alpha:g} "
            f"(p-value = {_format_pvalue(self.p_value)})"
        )

    def _conclusion(self) -> str:
        if self.significant:
            return "Reject the null hypothesis: significant association"
        return "Fail to reject the null hypothesis: no significant association"

    # --- Metadata ---

    @property
    def params(self):
        return self._result.params

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings


@dataclass
class ChisqSolution(_TestSolution):
    """
    User-facing chi-squared test results.

    The low expected count condition never raises; it is reported by
    `low_expected_count` and as an entry in `warnings`.
    """
    _result: Result[ChisqParams]

    @property
    def statistic(self) -> float:
        """X-squared statistic."""
        return self._result.params.statistic

    @property
    def df(self) -> int:
        """Degrees of freedom."""
        return self._result.params.df

    @property
    def expected(self) -> NDArray[np.floating[Any]]:
        """Expected counts under the null."""
        return self._result.params.expected

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        """Pearson residuals."""
        return self._result.params.residuals

    @property
    def stdres(self) -> NDArray[np.floating[Any]] | None:
        """Standardized residuals (independence test only)."""
        return self._result.params.stdres

    @property
    def low_expected_count(self) -> bool:
        """True if any expected count is below 5."""
        return self._result.params.low_expected_count

    @property
    def correction_applied(self) -> bool:
        return self._result.params.correction_applied

    @property
    def cramers_v(self) -> float | None:
        """Cramér's V (independence test only)."""
        return self._result.params.cramers_v

    @property
    def is_goodness_of_fit(self) -> bool:
        return self._design.test_type == "chisq_gof"

    def _conclusion(self) -> str:
        if not self.is_goodness_of_fit:
            return super()._conclusion()
        if self.significant:
            return "Reject the null hypothesis: observed frequencies differ from expected"
        return (
            "Fail to reject the null hypothesis: observed frequencies "
            "are consistent with expected"
        )

    def summary(self) -> str:
        """
        Format as an htest printout.

        Produces output like:
            Pearson's Chi-squared test

        data:  weather by mood
        X-squared = 5.6386, df = 1, p-value = 0.01757
        """
        p = self._result.params
        lines = [f"\t{p.method}", "", f"data:  {p.data_name}"]

        parts = [f"X-squared = {p.statistic:.5g}"]
        if p.replicates is None:
            parts.append(f"df = {p.df}")
        parts.append(f"p-value = {_format_pvalue(p.p_value)}")
        lines.append(", ".join(parts))

        if p.cramers_v is not None:
            lines.append(f"Cramer's V = {p.cramers_v:.4g}")
        for w in self._result.warnings:
            lines.append(f"Warning: {w}")
        lines.append(self.verdict)
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"ChisqSolution(method={p.method!r}, X-squared={p.statistic:.4g}, "
            f"df={p.df}, p_value={p.p_value:.4g})"
        )


@dataclass
class FisherSolution(_TestSolution):
    """User-facing Fisher's exact test results (2x2 tables)."""
    _result: Result[FisherParams]

    @property
    def odds_ratio(self) -> float:
        """Sample odds ratio (a*d)/(b*c)."""
        return self._result.params.odds_ratio

    @property
    def conditional_odds_ratio(self) -> float:
        """Conditional maximum likelihood estimate of the odds ratio."""
        return self._result.params.conditional_odds_ratio

    @property
    def conf_int(self) -> NDArray[np.floating[Any]] | None:
        """Exact confidence interval for the conditional odds ratio."""
        return self._result.params.conf_int

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def alternative(self) -> str:
        return self._result.params.alternative

    def summary(self) -> str:
        """Format as an htest printout."""
        p = self._result.params
        lines = [
            f"\t{p.method}",
            "",
            f"data:  {p.data_name}",
            f"p-value = {_format_pvalue(p.p_value)}",
        ]

        relation = {
            "two-sided": "is not equal to",
            "less": "is less than",
            "greater": "is greater than",
        }[p.alternative]
        lines.append(f"alternative hypothesis: true odds ratio {relation} 1")

        if p.conf_int is not None:
            lines.append(f"{p.conf_level * 100:g} percent confidence interval:")
            lo, hi = p.conf_int
            lines.append(f" {_format_number(lo)}  {_format_number(hi)}")

        lines.append("sample estimates:")
        lines.append(f"{'odds ratio':>16s} {'conditional MLE':>16s}")
        lines.append(
            f"{_format_number(p.odds_ratio):>16s} "
            f"{_format_number(p.conditional_odds_ratio):>16s}"
        )
        lines.append(self.verdict)
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"FisherSolution(odds_ratio={p.odds_ratio:.4g}, "
            f"p_value={p.p_value:.4g})"
        )


@dataclass(frozen=True)
class AssociationReport:
    """
    Chi-squared test plus, for 2x2 tables, Fisher's exact test.

    Attributes
    ----------
    chisq : ChisqSolution
    fisher : FisherSolution or None
        Present only for 2x2 tables when requested.
    """
    chisq: ChisqSolution
    fisher: FisherSolution | None = None

    @property
    def significant(self) -> bool:
        """
        Significance of the preferred test.

        Fisher's exact result is preferred when it was computed and the
        chi-squared approximation is flagged as unreliable.
        """
        return self.preferred.significant

    @property
    def preferred(self) -> _TestSolution:
        if self.fisher is not None and self.chisq.low_expected_count:
            return self.fisher
        return self.chisq

    @property
    def verdict(self) -> str:
        return self.preferred.verdict

    def summary(self) -> str:
        parts = [self.chisq.summary()]
        if self.fisher is not None:
            parts.append(self.fisher.summary())
        return "\n".join(parts)


def _format_pvalue(p: float) -> str:
    """Format p-value the way R's print.htest does."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"


def _format_number(x: float) -> str:
    """Format a number, handling infinity and nan."""
    if np.isnan(x):
        return "NaN"
    if np.isinf(x):
        return "-Inf" if x < 0 else "Inf"
    return f"{x:.7g}"
