"""
Categorical association testing.

Chi-squared tests of independence and goodness-of-fit, and Fisher's exact
test for 2x2 tables.

Public API:
    chisq_test(x)                 - Pearson's chi-squared test (independence, GOF)
    fisher_test(x)                - Fisher's exact test (2x2)
    association_test(x)           - chi-squared plus Fisher for 2x2 tables
    build_contingency_table(obs)  - tabulate raw observations or counts
    compute_expected(table)       - expected counts under the null
    chi_square_statistic(o, e)    - X-squared and degrees of freedom
    p_value(stat, df)             - upper-tail chi-squared probability
    low_expected_cell_warning(e)  - any expected count below 5
    fisher_exact_test(table)      - odds ratio and exact p-value
"""

from pycategorical.association.solvers import (
    chisq_test, fisher_test, association_test,
)
from pycategorical.association.table import (
    ContingencyTable, build_contingency_table,
)
from pycategorical.association.backends._chisq_test import (
    compute_expected,
    chi_square_statistic,
    p_value,
    low_expected_cell_warning,
)
from pycategorical.association.backends._fisher_test import fisher_exact_test
from pycategorical.association.design import AssociationDesign
from pycategorical.association._common import ChisqParams, FisherParams
from pycategorical.association.solution import (
    ChisqSolution, FisherSolution, AssociationReport,
)

__all__ = [
    "chisq_test",
    "fisher_test",
    "association_test",
    "ContingencyTable",
    "build_contingency_table",
    "compute_expected",
    "chi_square_statistic",
    "p_value",
    "low_expected_cell_warning",
    "fisher_exact_test",
    "AssociationDesign",
    "ChisqParams",
    "FisherParams",
    "ChisqSolution",
    "FisherSolution",
    "AssociationReport",
]
