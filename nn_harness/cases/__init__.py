"""
Copyright (c) 2025. All rights reserved.
"""

"""
Registered harness cases.

Every module in this package adds its cases to the shared ``registry`` at
import time.

Modules:
    conv: Conv1d and Conv2d shape and gradient checks
    linear: Linear layers alone and stacked in containers
    cuda: Moving modules between CPU and CUDA
    dropout: Dropout in training and evaluation mode
    lstm: Stateful multi-layer LSTM
    optim: Learning XOR with the torch optimizers
    serialization: Saving and restoring trained models and checkpoints
    integration: Training a CNN on MNIST
"""

from nn_harness.registry import CaseRegistry

registry = CaseRegistry()

from nn_harness.cases import (  # noqa: E402
    conv,
    cuda,
    dropout,
    integration,
    linear,
    lstm,
    optim,
    serialization,
)


def build_registry() -> CaseRegistry:
    """Registry holding every built-in case."""
    return registry


__all__ = ["registry", "build_registry"]
