"""
PyCategorical: association tests for categorical data.

Chi-squared tests of independence and goodness-of-fit, and Fisher's exact
test, with every distributional primitive delegated to SciPy. Monte Carlo
p-values can optionally run on a GPU through PyTorch.

Submodules:
    association: contingency tables, chi-squared and Fisher's exact tests
    core: exceptions, result envelope, validation, timing
"""

__version__ = "0.1.0"

from pycategorical import association
from pycategorical.association import (
    chisq_test,
    fisher_test,
    association_test,
    build_contingency_table,
)

__all__ = [
    "__version__",
    "association",
    "chisq_test",
    "fisher_test",
    "association_test",
    "build_contingency_table",
]
