"""
Copyright (c) 2025. All rights reserved.
"""

"""
Convolution cases: output shapes after a strided convolution and the size of
the weight gradient.
"""

import torch

from lib.configs import HarnessConfig
from nn_harness.cases import registry
from nn_harness.expect import expect


@registry.register("autograd/conv2d/even")
def conv2d_even(config: HarnessConfig) -> None:
    model = torch.nn.Conv2d(3, 2, 3, stride=2)
    x = torch.randn(2, 3, 5, 5, requires_grad=True)
    y = model(x)
    s = y.sum()

    s.backward()
    expect(y.dim() == 4)
    expect(s.dim() == 0)
    for i in range(4):
        expect(y.size(i) == 2)

    expect(model.weight.grad.numel() == 3 * 2 * 3 * 3)


@registry.register("autograd/conv2d/uneven")
def conv2d_uneven(config: HarnessConfig) -> None:
    model = torch.nn.Conv2d(3, 2, (3, 2), stride=2)
    x = torch.randn(2, 3, 5, 4, requires_grad=True)
    y = model(x)
    s = y.sum()

    s.backward()
    expect(y.dim() == 4)
    expect(s.dim() == 0)
    for i in range(4):
        expect(y.size(i) == 2)

    expect(model.weight.grad.numel() == 3 * 2 * 3 * 2)


@registry.register("autograd/conv1d/even")
def conv1d_even(config: HarnessConfig) -> None:
    model = torch.nn.Conv1d(3, 2, 3, stride=2)
    x = torch.randn(2, 3, 5, requires_grad=True)
    y = model(x)
    s = y.sum()

    s.backward()
    expect(y.dim() == 3)
    expect(s.dim() == 0)
    for i in range(3):
        expect(y.size(i) == 2)

    expect(model.weight.grad.numel() == 3 * 2 * 3)
