"""
Copyright (c) 2025. All rights reserved.
"""

"""
Configuration dataclasses for harness runs.

This module groups the parameters of a harness run into structured dataclasses.
Each config class holds the settings for one aspect of the run: the training
hyperparameters of the XOR and MNIST cases, and the top-level harness options
that the command line fills in.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class XORTrainConfig:
    """
    Configuration for the XOR training loop shared by the optimizer and
    serialization cases.

    Training stops once the exponentially smoothed loss drops to
    ``target_loss``. Each step draws a fresh batch of random bit pairs.

    Attributes:
        optimizer (str): Optimizer algorithm ("sgd" or "adam")
        lr (float): Learning rate
        momentum (float): SGD momentum factor
        nesterov (bool): Use Nesterov momentum with SGD
        weight_decay (float): L2 penalty applied by the optimizer
        hidden_dim (int): Width of the hidden layer
        batch_size (int): Number of bit pairs per step
        max_epochs (int): Step budget before the case fails
        target_loss (float): Running loss at which training stops
        smoothing (float): Decay factor of the running loss

    Example:
        xor_config = XORTrainConfig(optimizer="adam", lr=1e-2)
    """

    optimizer: str = "sgd"      # Optimizer algorithm
    lr: float = 1e-1            # Learning rate
    momentum: float = 0.9       # SGD momentum
    nesterov: bool = True       # Nesterov momentum
    weight_decay: float = 1e-6  # L2 penalty
    hidden_dim: int = 8         # Hidden layer width
    batch_size: int = 4         # Bit pairs per step
    max_epochs: int = 3000      # Step budget
    target_loss: float = 0.1    # Convergence threshold
    smoothing: float = 0.99     # Running loss decay


@dataclass
class MNISTTrainConfig:
    """
    Configuration for the MNIST integration case.

    Attributes:
        epochs (int): Passes over the training set
        batch_size (int): Images per optimizer step; the last partial batch is dropped
        lr (float): SGD learning rate
        momentum (float): SGD momentum factor
        dropout (float): Drop probability for both dropout layers
        min_accuracy (float): Test accuracy the trained network has to exceed
        device (str): Device the network is trained on
    """

    epochs: int = 3
    batch_size: int = 32
    lr: float = 1e-2
    momentum: float = 0.5
    dropout: float = 0.3
    min_accuracy: float = 0.8
    device: str = "cuda"


@dataclass
class HarnessConfig:
    """
    Complete harness configuration handed to every registered case.

    Attributes:
        seed (int): Seed applied to every RNG before each case runs
        strict (bool): Abort on the first failing case instead of reporting and continuing
        filter (Optional[str]): Shell-style pattern limiting which cases run
        mnist_dir (str): Directory holding the four MNIST IDX files
        tensorboard_log_dir (Optional[str]): Write training curves here when set
        xor (XORTrainConfig): XOR training hyperparameters
        mnist (MNISTTrainConfig): MNIST training hyperparameters

    Example:
        config = HarnessConfig(seed=7, strict=False, filter="autograd/linear/*")
    """

    seed: int = 0
    strict: bool = True
    filter: Optional[str] = None
    mnist_dir: str = "mnist"
    tensorboard_log_dir: Optional[str] = None
    xor: XORTrainConfig = field(default_factory=XORTrainConfig)
    mnist: MNISTTrainConfig = field(default_factory=MNISTTrainConfig)
