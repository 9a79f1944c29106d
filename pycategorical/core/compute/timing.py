"""
Wall-clock timing for backend solves.

Each backend wraps its solve in a Timer and stores the breakdown on the
Result, e.g. {'total_seconds': ..., 'chisq_independence': ...,
'monte_carlo': ...}.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Context-managed timer with named, accumulating sections.

    Usage:
        with Timer() as timer:
            with timer.section('statistic'):
                stat, df = chi_square_statistic(observed, expected)
            with timer.section('p_value'):
                p = p_value(stat, df)
        timer.result()

    Args:
        sync_cuda: Call torch.cuda.synchronize() at every boundary so
            asynchronous kernels are charged to the section that
            launched them.
    """

    def __init__(self, sync_cuda: bool = False):
        self._sync_cuda = sync_cuda
        self._sections: dict[str, float] = {}
        self._t0: float | None = None
        self._elapsed: float | None = None

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def _now(self) -> float:
        if self._sync_cuda:
            import torch
            if torch.cuda.is_available():
                torch.cuda.synchronize()
        return time.perf_counter()

    def start(self) -> None:
        self._t0 = self._now()
        self._elapsed = None

    def stop(self) -> float:
        """Stop the clock and return the total elapsed seconds."""
        if self._t0 is None:
            raise RuntimeError("Timer was stopped without being started")
        self._elapsed = self._now() - self._t0
        return self._elapsed

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Charge the enclosed block to `name`, adding to earlier runs."""
        t = self._now()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + self._now() - t

    def result(self) -> dict[str, float]:
        """
        Breakdown as {'total_seconds': ..., <section>: ...}.

        Raises:
            RuntimeError: If the timer is still running
        """
        if self._elapsed is None:
            raise RuntimeError("Timer is still running; call stop() first")
        return {'total_seconds': self._elapsed, **self._sections}
