"""
Loss function utilities: BCE, NLL.
"""

import torch


def get_loss_function(custom_loss: str) -> torch.nn.Module:
    """Factory function for creating loss function instances.

    Creates and returns appropriate loss function based on string identifier.
    Covers the losses the training cases need.

    Args:
        custom_loss (str): Loss function identifier. Supported values:
                          - 'bce': Binary cross entropy on probabilities (XOR cases)
                          - 'nll': Negative log likelihood on log-probabilities (MNIST case)

    Returns:
        torch.nn.Module: Instantiated loss function ready for training

    Raises:
        ValueError: If unsupported loss function identifier is provided

    Example:
        loss_fn = get_loss_function('bce')
        loss = loss_fn(probabilities, labels)
    """
    if custom_loss == "bce":
        return torch.nn.BCELoss()
    elif custom_loss == "nll":
        return torch.nn.NLLLoss()
    else:
        raise ValueError(
            f"Unsupported loss function: {custom_loss}. "
            f"Supported functions: bce, nll"
        )
