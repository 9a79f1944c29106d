"""
Solver dispatch for association tests.

Provides chisq_test(), fisher_test() and association_test().
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Any, Literal
from numpy.typing import ArrayLike

from pycategorical.core.compute.device import detect_gpu
from pycategorical.core.exceptions import InvalidConfigurationError
from pycategorical.association.design import AssociationDesign
from pycategorical.association.solution import (
    AssociationReport,
    ChisqSolution,
    FisherSolution,
)
from pycategorical.association.backends.cpu import CPUAssociationBackend


BackendChoice = Literal['cpu', 'gpu', 'auto']
# GPU is only useful for Monte Carlo simulation of chi-squared tests.
# All other requests fall back to CPU automatically.


def _get_backend(backend: str = 'cpu', design: AssociationDesign | None = None):
    """
    Select backend for association tests.

    'auto' picks the GPU only for simulated p-values when one is present.
    """
    if backend == 'cpu':
        return CPUAssociationBackend()
    if backend == 'auto':
        if design is not None and design.simulate_p_value and detect_gpu() is not None:
            from pycategorical.association.backends.gpu import GPUAssociationBackend
            return GPUAssociationBackend()
        return CPUAssociationBackend()
    if backend == 'gpu':
        from pycategorical.association.backends.gpu import GPUAssociationBackend
        return GPUAssociationBackend()
    raise InvalidConfigurationError(
        f"Unknown backend: {backend!r}. Use 'cpu', 'gpu' or 'auto'.",
        option="backend",
    )


def chisq_test(
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
    backend: BackendChoice = 'cpu',
) -> ChisqSolution:
    """
    Pearson's Chi-squared test.

    Parameters
    ----------
    x : various or AssociationDesign
        Anything build_contingency_table() accepts: a 2D count matrix
        (test of independence), a 1D count vector or label -> count
        mapping (goodness-of-fit), raw records / a DataFrame together with
        `fields`, or a label vector when y is given. Can also be a
        pre-built AssociationDesign.
    y : array-like or None
        Second label vector; x and y are cross-tabulated.
    fields : str or sequence of str, optional
        One field (goodness-of-fit) or two fields (independence) to
        tabulate raw observations by.
    correct : bool or None
        Yates' continuity correction. None (default) applies it to 2x2
        tables only; True on any other shape raises
        InvalidConfigurationError; False never applies it.
    p : array-like or None
        Expected proportions for the goodness-of-fit test. Uniform if None.
    rescale_p : bool
        If True, rescale p to sum to 1.
    alpha : float
        Significance level for the verdict. Default 0.05.
    simulate_p_value : bool
        If True, compute the p-value by Monte Carlo simulation.
    B : int
        Number of Monte Carlo replicates. Default 2000.
    seed : int or None
        Seed for the Monte Carlo generator.
    backend : str
        'cpu' (default), 'gpu', or 'auto'.

    Returns
    -------
    ChisqSolution
        statistic, df, p_value, expected, residuals, low_expected_count,
        verdict.
    """
    if isinstance(x, AssociationDesign):
        design = x
    else:
        design = AssociationDesign.for_chisq_test(
            x, y,
            fields=fields,
            correct=correct,
            p=p,
            rescale_p=rescale_p,
            alpha=alpha,
            simulate_p_value=simulate_p_value,
            B=B,
            seed=seed,
        )

    be = _get_backend(backend, design)
    result = be.solve(design)
    return ChisqSolution(_result=result, _design=design)


def fisher_test(
    x: Any,
    y: ArrayLike | None = None,
    *,
    fields: str | Sequence[str] | None = None,
    alternative: str = "two-sided",
    conf_int: bool = True,
    conf_level: float = 0.95,
    alpha: float = 0.05,
    backend: BackendChoice = 'cpu',
) -> FisherSolution:
    """
    Fisher's Exact Test for Count Data on a 2x2 table.

    Parameters
    ----------
    x : various or AssociationDesign
        A 2x2 table in any form build_contingency_table() accepts.
    y : array-like or None
        Second label vector to cross-tabulate against x.
    fields : str or sequence of str, optional
        Two fields to tabulate raw observations by.
    alternative : str
        "two-sided" (default), "less", or "greater".
    conf_int : bool
        Compute the exact confidence interval for the odds ratio.
    conf_level : float
        Confidence level. Default 0.95.
    alpha : float
        Significance level for the verdict. Default 0.05.
    backend : str
        'cpu' (default). 'gpu' falls back to CPU.

    Returns
    -------
    FisherSolution
        odds_ratio, p_value, conditional_odds_ratio, conf_int, verdict.

    Raises
    ------
    InvalidConfigurationError
        If the table is not 2x2.
    """
    if isinstance(x, AssociationDesign):
        design = x
    else:
        design = AssociationDesign.for_fisher_test(
            x, y,
            fields=fields,
            alternative=alternative,
            conf_int=conf_int,
            conf_level=conf_level,
            alpha=alpha,
        )

    be = _get_backend(backend, design)
    result = be.solve(design)
    return FisherSolution(_result=result, _design=design)


def association_test(
    x: Any,
    y: ArrayLike | None = None,
    *,
    fields: str | Sequence[str] | None = None,
    correct: bool | None = None,
    alpha: float = 0.05,
    fisher: bool | None = None,
) -> AssociationReport:
    """
    Chi-squared test, with Fisher's exact test alongside for 2x2 tables.

    Parameters
    ----------
    x, y, fields, correct, alpha
        As for chisq_test().
    fisher : bool or None
        None (default) runs Fisher's test whenever the table is 2x2.
        True requires a 2x2 table (InvalidConfigurationError otherwise).
        False skips it.

    Returns
    -------
    AssociationReport
    """
    chisq_design = AssociationDesign.for_chisq_test(
        x, y, fields=fields, correct=correct, alpha=alpha,
    )
    chisq = chisq_test(chisq_design)

    table = chisq_design.table
    run_fisher = table.is_2x2 if fisher is None else fisher
    if not run_fisher:
        return AssociationReport(chisq=chisq)

    fisher_design = AssociationDesign.for_fisher_test(table, alpha=alpha)
    fisher_design = dataclasses.replace(fisher_design, _data_name=chisq_design.data_name)
    return AssociationReport(chisq=chisq, fisher=fisher_test(fisher_design))

