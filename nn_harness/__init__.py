"""
Copyright (c) 2025. All rights reserved.
"""

"""
Integration harness for the PyTorch neural network API.

Builds models from torch layer primitives, runs forward and backward passes,
and checks shape and numeric invariants through a registry of named cases.

Modules:
    expect: expect(), cuda_guard() and the harness exception hierarchy
    registry: Ordered case registry
    runner: Strict and lenient sequential runner
    models: XOR, MNIST and stateful LSTM networks
    mnist: IDX file reader
    cases: The registered cases
"""

from .expect import CaseSkipped, DuplicateCaseError, ExpectationError, HarnessError
from .registry import Case, CaseRegistry
from .runner import CaseResult, CaseStatus, HarnessRunner, RunReport

__version__ = "1.0.0"

__all__ = [
    # Errors
    "HarnessError",
    "ExpectationError",
    "DuplicateCaseError",
    "CaseSkipped",
    # Registry
    "Case",
    "CaseRegistry",
    # Runner
    "HarnessRunner",
    "CaseResult",
    "CaseStatus",
    "RunReport",
]
