"""
Copyright (c) 2025. All rights reserved.
"""

"""
Synthetic data for the XOR training cases.
"""

from typing import Tuple

import torch


def xor_batch(batch_size: int) -> Tuple[torch.Tensor, torch.Tensor]:
    """Draw ``batch_size`` random bit pairs and their exclusive or.

    Args:
        batch_size (int): Number of samples

    Returns:
        Tuple[torch.Tensor, torch.Tensor]: float32 inputs [batch_size, 2] with values
            in {0, 1}, and float32 labels [batch_size, 1]
    """
    bits = torch.randint(0, 2, (batch_size, 2))
    labels = bits[:, 0] ^ bits[:, 1]
    return bits.float(), labels.float().unsqueeze(1)
