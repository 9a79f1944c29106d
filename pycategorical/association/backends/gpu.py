"""
GPU Monte Carlo backend for association tests.

Only accelerates chi-squared tests with simulate_p_value=True: the B
replicate statistics are evaluated as one batched tensor expression.
Everything else (analytic p-values, Fisher's exact test) is a handful of
scalar operations and runs on the CPU backend.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pycategorical.core.compute.device import detect_gpu
from pycategorical.core.compute.timing import Timer
from pycategorical.core.result import Result
from pycategorical.association._common import ChisqParams
from pycategorical.association.design import AssociationDesign

logger = logging.getLogger(__name__)

BATCH_SIZE = 1000


class GPUAssociationBackend:
    """
    GPU Monte Carlo backend for association tests.

    Falls back to CPU for every design that is not a simulated
    chi-squared test.

    Args:
        device: 'cuda', 'mps', or 'auto'
    """

    def __init__(self, device: str = 'auto'):
        import torch

        self._torch = torch

        if device == 'auto':
            info = detect_gpu()
            if info is None:
                raise RuntimeError("No GPU available (need CUDA or MPS)")
            self._device = info.device_type
        else:
            self._device = device

    @property
    def name(self) -> str:
        return f'gpu_{self._device}_association'

    def solve(self, design: AssociationDesign) -> Result:
        """Dispatch: GPU Monte Carlo for chisq, CPU for everything else."""
        if not (design.test_type.startswith("chisq") and design.simulate_p_value):
            from pycategorical.association.backends.cpu import CPUAssociationBackend
            result = CPUAssociationBackend().solve(design)
            return dataclasses.replace(
                result, backend_name=self.name + " (cpu_fallback)",
            )

        from pycategorical.association.backends._chisq_test import (
            chisq_gof,
            chisq_independence,
        )

        test_type = design.test_type
        analytic = dataclasses.replace(design, _simulate_p_value=False)
        B = design.n_monte_carlo

        with Timer(sync_cuda=self._device == 'cuda') as timer:
            with timer.section(test_type):
                if test_type == "chisq_independence":
                    params, warnings_list = chisq_independence(analytic)
                else:
                    params, warnings_list = chisq_gof(analytic)

            with timer.section("gpu_monte_carlo"):
                if test_type == "chisq_independence":
                    p = self._mc_independence(params, B, design.seed)
                else:
                    probs = params.expected.ravel() / params.expected.sum()
                    p = self._mc_gof(params, probs, B, design.seed)

        params = dataclasses.replace(
            params,
            p_value=p,
            method=params.method + f" with simulated p-value\n\t(based on {B} replicates)",
            replicates=B,
        )

        return Result(
            params=params,
            info={'test_type': test_type, 'shape': design.table.shape, 'replicates': B},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    # -----------------------------------------------------------------------
    # GPU kernels
    # -----------------------------------------------------------------------

    def _count_exceeding(
        self, sims: Any, expected: NDArray[np.floating[Any]], observed_stat: float,
    ) -> int:
        """Number of simulated tables whose X-squared reaches observed_stat."""
        torch = self._torch
        expected_t = torch.tensor(expected, dtype=torch.float32, device=self._device)
        dims = tuple(range(1, sims.dim()))
        stats = ((sims - expected_t.unsqueeze(0)) ** 2 / expected_t.unsqueeze(0)).sum(dim=dims)
        return int((stats >= observed_stat - 1e-6).sum().item())

    def _mc_independence(self, params: ChisqParams, B: int, seed: int | None) -> float:
        """
        Monte Carlo p-value for the independence test.

        Tables are drawn on the CPU with Patefield's algorithm
        (scipy.stats.random_table); their statistics are computed on the GPU.
        """
        torch = self._torch
        table = params.observed
        row_sums = table.sum(axis=1).astype(int)
        col_sums = table.sum(axis=0).astype(int)
        dist = sp_stats.random_table(row_sums, col_sums)
        rng = np.random.default_rng(seed)

        count = 0
        for start in range(0, B, BATCH_SIZE):
            size = min(BATCH_SIZE, B - start)
            sims = torch.tensor(
                dist.rvs(size=size, random_state=rng),
                dtype=torch.float32, device=self._device,
            )
            count += self._count_exceeding(sims, params.expected, params.statistic)

        logger.debug("gpu independence MC: %d of %d replicates exceed", count, B)
        return (count + 1) / (B + 1)

    def _mc_gof(
        self, params: ChisqParams, probs: NDArray[np.floating[Any]], B: int, seed: int | None,
    ) -> float:
        """Monte Carlo p-value for the goodness-of-fit test (multinomial draws on GPU)."""
        torch = self._torch
        n = int(params.observed.sum())
        k = probs.size
        expected = params.expected.ravel()

        generator = torch.Generator(device=self._device)
        if seed is not None:
            generator.manual_seed(seed)
        p_t = torch.tensor(probs, dtype=torch.float32, device=self._device)

        count = 0
        for start in range(0, B, BATCH_SIZE):
            size = min(BATCH_SIZE, B - start)
            indices = torch.multinomial(
                p_t.unsqueeze(0).expand(size, -1), n,
                replacement=True, generator=generator,
            )
            sims = torch.nn.functional.one_hot(indices, k).sum(dim=1).float()
            count += self._count_exceeding(sims, expected, params.statistic)

        logger.debug("gpu gof MC: %d of %d replicates exceed", count, B)
        return (count + 1) / (B + 1)
