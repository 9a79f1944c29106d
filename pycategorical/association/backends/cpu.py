"""
CPU reference backend for association tests.

Dispatches to test-specific submodules based on design.test_type.
"""

from __future__ import annotations

from pycategorical.core.result import Result
from pycategorical.core.compute.timing import Timer
from pycategorical.association.design import AssociationDesign


class CPUAssociationBackend:
    """CPU reference backend for association tests."""

    @property
    def name(self) -> str:
        return 'cpu_association'

    def solve(self, design: AssociationDesign) -> Result:
        """Run the test named by design.test_type and wrap it in a Result."""
        test_type = design.test_type

        with Timer() as timer, timer.section(test_type):
            if test_type == "chisq_independence":
                from pycategorical.association.backends._chisq_test import chisq_independence
                params, warnings_list = chisq_independence(design)
            elif test_type == "chisq_gof":
                from pycategorical.association.backends._chisq_test import chisq_gof
                params, warnings_list = chisq_gof(design)
            elif test_type == "fisher_2x2":
                from pycategorical.association.backends._fisher_test import fisher_2x2
                params, warnings_list = fisher_2x2(design)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        info = {'test_type': test_type, 'shape': design.table.shape}
        if design.simulate_p_value:
            info['replicates'] = design.n_monte_carlo

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
