"""
Copyright (c) 2025. All rights reserved.
"""

"""
Unit tests for the reference networks.
"""

import os
import sys

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

import torch

from nn_harness.models import MNISTNet, StatefulLSTM, XORNet


class TestXORNet:
    """Test suite for XORNet."""

    def test_output_is_probability(self):
        """Output is [batch, 1] strictly inside (0, 1)."""
        model = XORNet(hidden_dim=8)
        y = model(torch.randn(6, 2))

        assert y.shape == (6, 1)
        assert torch.all((y > 0) & (y < 1))

    def test_layers_are_a_list(self):
        """Layers are iterable in order like a list container."""
        model = XORNet(hidden_dim=4)

        assert [layer.out_features for layer in model.layers] == [4, 1]


class TestMNISTNet:
    """Test suite for MNISTNet."""

    def test_log_probabilities(self):
        """Output is [batch, 10] log-probabilities."""
        model = MNISTNet()
        model.eval()
        y = model(torch.rand(4, 1, 28, 28))

        assert y.shape == (4, 10)
        torch.testing.assert_close(y.exp().sum(dim=1), torch.ones(4))

    def test_gradient_flow(self):
        """Every parameter receives a gradient."""
        model = MNISTNet()
        loss = model(torch.rand(2, 1, 28, 28)).sum()
        loss.backward()

        assert all(p.grad is not None for p in model.parameters())

    def test_eval_is_deterministic(self):
        """Dropout layers are registered and disabled by eval()."""
        model = MNISTNet(dropout=0.5)
        model.eval()
        x = torch.rand(3, 1, 28, 28)

        torch.testing.assert_close(model(x), model(x))


class TestStatefulLSTM:
    """Test suite for StatefulLSTM."""

    def test_no_hiddens_before_forward(self):
        """hiddens() is empty until the first call."""
        assert StatefulLSTM(8, 4).hiddens() == []

    def test_shapes(self):
        """Output and last-layer hidden/cell shapes."""
        model = StatefulLSTM(8, 4, num_layers=2)
        out = model(torch.randn(5, 3, 8))

        assert out.shape == (5, 3, 4)
        h, c = model.hiddens()
        assert h.shape == (3, 4)
        assert c.shape == (3, 4)

    def test_state_is_detached_and_carried(self):
        """Kept state does not track gradients and feeds the next call."""
        model = StatefulLSTM(8, 4)
        x = torch.randn(5, 3, 8, requires_grad=True)
        model(x)
        first = model.hiddens()[0]

        assert not first.requires_grad

        carried = model(x)
        model.reset()
        fresh = model(x)
        assert not torch.allclose(carried, fresh)

    def test_batch_size_change_resets(self):
        """A different batch size starts from a zero state."""
        model = StatefulLSTM(8, 4)
        model(torch.randn(5, 3, 8))
        out = model(torch.randn(5, 2, 8))

        assert out.shape == (5, 2, 4)
        assert model.hiddens()[0].shape == (2, 4)
