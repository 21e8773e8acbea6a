"""
Utility functions: seeding and device selection.
"""

import random

import numpy as np
import torch


def set_seed(random_seed: int) -> None:
    """Set random seeds for reproducible runs.

    Sets the random seed for Python's random module, PyTorch (CPU and every CUDA
    device), and NumPy so that a case draws the same inputs every time it runs.

    Args:
        random_seed (int): Seed value to use for all random number generators

    Example:
        set_seed(42)  # Ensures reproducible results
        data = torch.rand(100, 10)  # Will generate same data every time
    """
    random.seed(random_seed)
    torch.manual_seed(random_seed)
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(random_seed)
    np.random.seed(random_seed)


def cuda_available() -> bool:
    """Return True when torch can dispatch to a CUDA device."""
    return torch.cuda.is_available()


def get_device(preferred: str = "cuda") -> torch.device:
    """Resolve ``preferred`` to a torch.device, falling back to CPU without CUDA.

    Args:
        preferred (str): Device string such as "cuda", "cuda:1" or "cpu"

    Returns:
        torch.device: The requested device, or CPU when CUDA was requested but is unavailable
    """
    device = torch.device(preferred)
    if device.type == "cuda" and not cuda_available():
        return torch.device("cpu")
    return device


def count_parameters(model: torch.nn.Module) -> int:
    """Total number of trainable elements in ``model``."""
    return sum(p.numel() for p in model.parameters() if p.requires_grad)
