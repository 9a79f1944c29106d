"""
Association test backends.

Available backends:
    CPUAssociationBackend: CPU reference implementation
    GPUAssociationBackend: PyTorch Monte Carlo (import from .gpu; needs torch)
"""

from pycategorical.association.backends.cpu import CPUAssociationBackend

__all__ = [
    "CPUAssociationBackend",
]
