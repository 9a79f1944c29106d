"""
GPU detection for the optional PyTorch Monte Carlo backend.

torch is imported lazily; importing this module never requires it.
"""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class DeviceInfo:
    """
    A compute device the Monte Carlo kernels can run on.

    Attributes:
        device_type: 'cuda' or 'mps'
        name: Human-readable device name
    """
    device_type: Literal['cuda', 'mps']
    name: str

    def __str__(self) -> str:
        return f"{self.device_type.upper()} ({self.name})"


def has_torch() -> bool:
    """True if PyTorch can be imported."""
    try:
        import torch  # noqa: F401
    except ImportError:
        return False
    return True


def detect_gpu() -> DeviceInfo | None:
    """
    Detect the best available GPU, if any.

    Priority: CUDA > MPS (Apple Silicon). Returns None when torch is
    missing or no device is usable.
    """
    if not has_torch():
        return None

    import torch
    if torch.cuda.is_available():
        idx = torch.cuda.current_device()
        return DeviceInfo(
            device_type='cuda',
            name=torch.cuda.get_device_properties(idx).name,
        )
    if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
        return DeviceInfo(device_type='mps', name='Apple Silicon GPU')
    return None
