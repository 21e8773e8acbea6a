"""
Copyright (c) 2025. All rights reserved.
"""

"""
Device dispatch cases. Both skip on hosts without CUDA.
"""

import torch

from lib.configs import HarnessConfig
from nn_harness.cases import registry
from nn_harness.cases.linear import check_linear
from nn_harness.expect import cuda_guard, expect


@registry.register("autograd/cuda/1")
def cuda_forward(config: HarnessConfig) -> None:
    cuda_guard()
    model = torch.nn.Linear(5, 2)
    model.cuda()
    expect(model.weight.is_cuda)
    check_linear(model, torch.device("cuda"))


@registry.register("autograd/cuda/2")
def cuda_round_trip(config: HarnessConfig) -> None:
    cuda_guard()
    model = torch.nn.Linear(5, 2)
    model.cuda()
    model.cpu()
    expect(not model.weight.is_cuda)
    check_linear(model, torch.device("cpu"))
