"""
Copyright (c) 2025. All rights reserved.
"""

"""
Reference networks built by the harness cases.

XORNet is the two-layer sigmoid network trained by the optimizer and
serialization cases, MNISTNet is the small CNN of the integration case, and
StatefulLSTM wraps torch.nn.LSTM so that the hidden state persists between
forward calls.
"""

from typing import List, Optional, Tuple

import torch
import torch.nn.functional as F


class XORNet(torch.nn.Module):
    """
    Two linear layers, each followed by a sigmoid.

    Input Shape: [batch_size, 2]
    Output Shape: [batch_size, 1] (probability that the inputs differ)
    """

    def __init__(self, hidden_dim: int = 8) -> None:
        super().__init__()
        self.layers = torch.nn.ModuleList(
            [torch.nn.Linear(2, hidden_dim), torch.nn.Linear(hidden_dim, 1)]
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        for layer in self.layers:
            x = torch.sigmoid(layer(x))
        return x


class MNISTNet(torch.nn.Module):
    """
    Convolutional network for 28x28 single-channel digit images.

    Architecture:
        - Conv2d(1->10, k=5) + MaxPool2d(2) + ReLU -> [10, 12, 12]
        - Conv2d(10->20, k=5) + Dropout2d + MaxPool2d(2) + ReLU -> [20, 4, 4]
        - Flatten + Linear(320->50) + ReLU + Dropout
        - Linear(50->10) + LogSoftmax

    Input Shape: [batch_size, 1, 28, 28]
    Output Shape: [batch_size, 10] (class log-probabilities)
    """

    def __init__(self, dropout: float = 0.3) -> None:
        """
        Args:
            dropout (float): Drop probability of both the channel and the feature dropout
        """
        super().__init__()
        self.conv1 = torch.nn.Conv2d(1, 10, kernel_size=5)
        self.conv2 = torch.nn.Conv2d(10, 20, kernel_size=5)
        self.drop2d = torch.nn.Dropout2d(dropout)
        self.linear1 = torch.nn.Linear(320, 50)
        self.drop = torch.nn.Dropout(dropout)
        self.linear2 = torch.nn.Linear(50, 10)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        x = F.max_pool2d(self.conv1(x), 2).clamp_min(0)  # [batch, 10, 12, 12]
        x = self.drop2d(self.conv2(x))  # [batch, 20, 8, 8]
        x = F.max_pool2d(x, 2).clamp_min(0)  # [batch, 20, 4, 4]

        x = x.view(-1, 320)
        x = self.drop(self.linear1(x).clamp_min(0))  # [batch, 50]
        x = self.linear2(x)  # [batch, 10]
        return F.log_softmax(x, dim=1)


class StatefulLSTM(torch.nn.Module):
    """
    Sequence-first LSTM that carries its hidden state across forward calls.

    The state kept between calls is detached, so each call starts a new
    autograd graph.

    Input Shape: [seq_len, batch_size, input_size]
    Output Shape: [seq_len, batch_size, hidden_size]
    """

    def __init__(
        self, input_size: int, hidden_size: int, num_layers: int = 1, dropout: float = 0.0
    ) -> None:
        super().__init__()
        self.lstm = torch.nn.LSTM(
            input_size, hidden_size, num_layers=num_layers, dropout=dropout
        )
        self._state: Optional[Tuple[torch.Tensor, torch.Tensor]] = None

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        if self._state is not None and self._state[0].size(1) != x.size(1):
            self.reset()
        output, (h, c) = self.lstm(x, self._state)
        self._state = (h.detach(), c.detach())
        return output

    def hiddens(self) -> List[torch.Tensor]:
        """Last layer's [hidden, cell] state, each [batch_size, hidden_size]."""
        if self._state is None:
            return []
        h, c = self._state
        return [h[-1], c[-1]]

    def reset(self) -> None:
        self._state = None
