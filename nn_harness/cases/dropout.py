"""
Copyright (c) 2025. All rights reserved.
"""

"""
Dropout case: rescaled masking in training mode, identity in evaluation mode.
"""

import torch

from lib.configs import HarnessConfig
from nn_harness.cases import registry
from nn_harness.expect import expect


@registry.register("autograd/dropout/1")
def dropout_train_eval(config: HarnessConfig) -> None:
    dropout = torch.nn.Dropout(0.5)
    x = torch.ones(100, requires_grad=True)
    y = dropout(x)

    y.backward(torch.ones_like(y))
    expect(y.dim() == 1)
    expect(y.size(0) == 100)
    expect(y.sum().item() < 130)  # Probably
    expect(y.sum().item() > 70)  # Probably

    dropout.eval()
    y = dropout(x)
    expect(y.detach().sum().item() == 100)
