"""
Shared compute infrastructure for PyCategorical.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared infrastructure only.

Submodules:
    device: GPU detection for the optional torch backend
    timing: Execution timing utilities
"""

from pycategorical.core.compute.device import DeviceInfo, detect_gpu, has_torch
from pycategorical.core.compute.timing import Timer

__all__ = [
    "DeviceInfo",
    "detect_gpu",
    "has_torch",
    "Timer",
]
