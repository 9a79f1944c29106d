"""
The Result envelope returned by every association backend.

A backend never returns bare numbers: the test payload (ChisqParams,
FisherParams) travels together with what produced it and how long it
took. Advisory conditions such as small expected counts are recorded
in `warnings` rather than raised.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable output of one backend solve.

    Attributes:
        params: Test payload (ChisqParams or FisherParams)
        info: Design facts: test_type, table shape, Monte Carlo replicates
        timing: Timer breakdown in seconds, or None when not recorded
        backend_name: e.g. 'cpu_association' or 'gpu_cuda_association'
        warnings: Advisory messages, e.g. the low expected count warning

    Example:
        >>> Result(
        ...     params=chisq_params,
        ...     info={'test_type': 'chisq_independence', 'shape': (2, 2)},
        ...     timing={'total_seconds': 0.0004},
        ...     backend_name='cpu_association',
        ...     warnings=('Chi-squared approximation may be incorrect',),
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """True if any warning message contains `substring`."""
        return any(substring in message for message in self.warnings)
