"""
Copyright (c) 2025. All rights reserved.
"""

"""
LSTM case: output shape, hidden state shape, and hidden state carried into
the next call.
"""

import torch

from lib.configs import HarnessConfig
from nn_harness.cases import registry
from nn_harness.expect import expect
from nn_harness.models import StatefulLSTM


@registry.register("autograd/LSTM/1")
def lstm_stateful(config: HarnessConfig) -> None:
    model = StatefulLSTM(128, 64, num_layers=2, dropout=0.2)
    x = torch.randn(10, 16, 128, requires_grad=True)
    out = model(x)
    y = out.mean()

    y.backward()
    expect(out.dim() == 3)
    expect(out.size(0) == 10)
    expect(out.size(1) == 16)
    expect(out.size(2) == 64)

    hiddens = model.hiddens()
    expect(len(hiddens) == 2)
    for hidden in hiddens:
        expect(hidden.dim() == 2)
        expect(hidden.size(0) == 16)
        expect(hidden.size(1) == 64)
        # Something is in the hiddens
        expect(hidden.norm().item() > 0)

    saved_hidden = hiddens[0]
    model(x)
    diff = model.hiddens()[0] - saved_hidden

    # Hiddens changed
    expect(diff.abs().sum().item() > 1e-3)
