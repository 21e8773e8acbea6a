"""
Copyright (c) 2025. All rights reserved.
"""

"""
Linear layer cases, alone and stacked in list and named containers.
"""

import torch

from lib.configs import HarnessConfig
from nn_harness.cases import registry
from nn_harness.expect import expect


def check_linear(model: torch.nn.Linear, device: torch.device) -> None:
    """Forward/backward a batch of 10 through Linear(5, 2) on ``device``."""
    x = torch.randn(10, 5, device=device, requires_grad=True)
    y = model(x)
    s = y.sum()

    s.backward()
    expect(y.dim() == 2)
    expect(s.dim() == 0)
    expect(y.size(0) == 10)
    expect(y.size(1) == 2)

    expect(model.weight.grad.numel() == 2 * 5)


@registry.register("autograd/linear/basic1")
def linear_basic(config: HarnessConfig) -> None:
    check_linear(torch.nn.Linear(5, 2), torch.device("cpu"))


@registry.register("autograd/linear/sequential")
def linear_sequential(config: HarnessConfig) -> None:
    model = torch.nn.ModuleList(
        [torch.nn.Linear(10, 3), torch.nn.Linear(3, 5), torch.nn.Linear(5, 100)]
    )

    x = torch.randn(1000, 10, requires_grad=True)
    for layer in model:
        x = layer(x).clamp_min(0)  # relu

    x.backward(torch.ones_like(x))
    expect(x.dim() == 2)
    expect(x.size(0) == 1000)
    expect(x.size(1) == 100)
    expect(x.detach().min().item() == 0)


@registry.register("autograd/linear/simple")
def linear_simple(config: HarnessConfig) -> None:
    model = torch.nn.ModuleDict()
    model["l1"] = torch.nn.Linear(10, 3)
    model["l2"] = torch.nn.Linear(3, 5)
    model["l3"] = torch.nn.Linear(5, 100)

    x = torch.randn(1000, 10, requires_grad=True)
    x = model["l1"](x).clamp_min(0)
    x = model["l2"](x).clamp_min(0)
    x = model["l3"](x).clamp_min(0)

    x.backward(torch.ones_like(x))
    expect(x.dim() == 2)
    expect(x.size(0) == 1000)
    expect(x.size(1) == 100)
    expect(x.detach().min().item() == 0)
    expect(all(p.grad is not None for p in model.parameters()))
