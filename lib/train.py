"""
Copyright (c) 2025. All rights reserved.
"""

"""
Training utilities for harness cases.

This module provides the training loops, optimizer factory, and checkpoint
helpers used by the optimizer, serialization, and integration cases. Two loops
are offered: a convergence loop that draws a fresh batch every step until a
smoothed loss target is reached, and an epoch loop over a DataLoader.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import torch

from lib.logger import Logger

logger = logging.getLogger(__name__)

BatchSampler = Callable[[int], Tuple[torch.Tensor, torch.Tensor]]


@dataclass
class TrainContext:
    """
    Configuration container for training parameters.

    Holds the components a training loop needs: the optimizer, the loss
    criterion and an optional TensorBoard logger.

    Attributes:
        optimizer (torch.optim.Optimizer): PyTorch optimizer instance
        loss_criterion (torch.nn.Module): Loss function for computing training loss
        logger (Optional[Logger]): TensorBoard logger, None to disable curves (default: None)
        log_every_k_steps (int): Frequency of logging in steps (default: 100)
    """

    optimizer: torch.optim.Optimizer  # PyTorch optimizer instance
    loss_criterion: torch.nn.Module  # Loss function
    logger: Optional[Logger] = None  # TensorBoard logger
    log_every_k_steps: int = 100  # Frequency of logging (every k steps)


@dataclass
class ConvergenceResult:
    """Outcome of train_until_converged.

    Attributes:
        epochs (int): Optimizer steps taken
        running_loss (float): Smoothed loss when the loop stopped
        converged (bool): Whether running_loss reached the target within the budget
    """

    epochs: int
    running_loss: float
    converged: bool


def train_step(
    model: torch.nn.Module, train_context: TrainContext, inputs: torch.Tensor, targets: torch.Tensor
) -> torch.Tensor:
    """
    Run one forward/backward/update step and return the detached loss.

    Args:
        model (torch.nn.Module): Model to update
        train_context (TrainContext): Optimizer and loss criterion
        inputs (torch.Tensor): Batch inputs
        targets (torch.Tensor): Batch targets

    Returns:
        torch.Tensor: Scalar loss of this step, detached from the graph
    """
    # forward pass
    predictions = model(inputs)
    loss = train_context.loss_criterion(predictions, targets)

    # backward pass
    train_context.optimizer.zero_grad()
    loss.backward()
    train_context.optimizer.step()

    return loss.detach()


def train_until_converged(
    model: torch.nn.Module,
    train_context: TrainContext,
    sample_batch: BatchSampler,
    batch_size: int,
    target_loss: float,
    max_epochs: int,
    smoothing: float = 0.99,
) -> ConvergenceResult:
    """
    Train on freshly sampled batches until the running loss reaches the target.

    The running loss starts at 1 and is updated as
    ``running = smoothing * running + (1 - smoothing) * loss`` after every step.

    Args:
        model (torch.nn.Module): Model to train
        train_context (TrainContext): Optimizer, loss criterion and logger
        sample_batch (Callable): Returns an (inputs, targets) batch of the given size
        batch_size (int): Samples per step
        target_loss (float): Stop once the running loss is at or below this value
        max_epochs (int): Maximum number of steps
        smoothing (float): Decay factor of the running loss (default: 0.99)

    Returns:
        ConvergenceResult: Steps taken, final running loss and whether the target was met
    """
    model.train()
    running_loss = 1.0
    epoch = 0
    while running_loss > target_loss:
        if epoch >= max_epochs:
            logger.warning(
                f"No convergence after {epoch} steps, running loss {running_loss:.4f}"
            )
            return ConvergenceResult(epochs=epoch, running_loss=running_loss, converged=False)

        inputs, targets = sample_batch(batch_size)
        loss = train_step(model, train_context, inputs, targets)
        running_loss = running_loss * smoothing + loss.item() * (1 - smoothing)
        epoch += 1

        if train_context.logger is not None and epoch % train_context.log_every_k_steps == 0:
            train_context.logger.log_scalars(
                {"loss": loss.item(), "running_loss": running_loss}, step=epoch
            )

    logger.info(f"Converged after {epoch} steps, running loss {running_loss:.4f}")
    return ConvergenceResult(epochs=epoch, running_loss=running_loss, converged=True)


def train_model_with_dataloader(
    model: torch.nn.Module,
    train_context: TrainContext,
    train_dataloader: torch.utils.data.DataLoader,
    epochs: int,
    device: torch.device,
) -> float:
    """
    Train a model for a fixed number of epochs over a DataLoader.

    Args:
        model (torch.nn.Module): PyTorch model to train
        train_context (TrainContext): Configuration object with training parameters
        train_dataloader (DataLoader): DataLoader for training data batches
        epochs (int): Number of passes over the training data
        device (torch.device): Device batches are moved to before the forward pass

    Returns:
        float: Loss of the final training step
    """
    loss = torch.zeros(())
    step = 0
    for epoch in range(epochs):
        model.train()
        for batch_inputs, batch_targets in train_dataloader:
            loss = train_step(
                model, train_context, batch_inputs.to(device), batch_targets.to(device)
            )
            step += 1
            if train_context.logger is not None and step % train_context.log_every_k_steps == 0:
                train_context.logger.log_scalars({"loss": loss.item()}, step=step)

        logger.info(f"Epoch {epoch + 1}/{epochs}, Train Loss: {loss.item():.4f}")

    return loss.item()


@torch.no_grad()
def evaluate_accuracy(
    model: torch.nn.Module,
    inputs: torch.Tensor,
    labels: torch.Tensor,
    device: torch.device,
    batch_size: int = 1000,
) -> float:
    """
    Fraction of ``inputs`` whose arg-max prediction equals the label.

    Args:
        model (torch.nn.Module): Classifier returning per-class scores
        inputs (torch.Tensor): Evaluation inputs
        labels (torch.Tensor): Integer class labels
        device (torch.device): Device the model lives on
        batch_size (int): Evaluation chunk size

    Returns:
        float: Accuracy in [0, 1]
    """
    model.eval()
    correct = 0
    for start in range(0, inputs.size(0), batch_size):
        batch = inputs[start : start + batch_size].to(device)
        predictions = model(batch).argmax(dim=1)
        correct += (predictions.cpu() == labels[start : start + batch_size]).sum().item()
    return correct / inputs.size(0)


def get_optimizer(
    optimizer_type: str,
    lr: float,
    model: torch.nn.Module,
    momentum: float = 0.0,
    nesterov: bool = False,
    weight_decay: float = 0.0,
) -> torch.optim.Optimizer:
    """
    Factory function to create PyTorch optimizers.

    Args:
        optimizer_type (str): Type of optimizer ('adam', 'sgd')
        lr (float): Learning rate
        model (torch.nn.Module): Model whose parameters to optimize
        momentum (float): Momentum factor (SGD only)
        nesterov (bool): Enable Nesterov momentum (SGD only)
        weight_decay (float): L2 penalty

    Returns:
        torch.optim.Optimizer: Configured optimizer instance

    Raises:
        ValueError: If optimizer_type is not supported
    """
    if optimizer_type == "adam":
        return torch.optim.Adam(model.parameters(), lr=lr, weight_decay=weight_decay)
    elif optimizer_type == "sgd":
        return torch.optim.SGD(
            model.parameters(),
            lr=lr,
            momentum=momentum,
            nesterov=nesterov,
            weight_decay=weight_decay,
        )
    else:
        raise ValueError(f"Unsupported Optimizer Type: {optimizer_type}")


def save_checkpoint(
    path: str, model: torch.nn.Module, optimizer: Optional[torch.optim.Optimizer] = None, **extra
) -> None:
    """
    Save model weights, optimizer state and any extra values to one file.

    Args:
        path (str): Destination file
        model (torch.nn.Module): Model whose state_dict is stored
        optimizer (Optional[torch.optim.Optimizer]): Optimizer whose state_dict is stored
        **extra: Additional picklable values stored alongside
    """
    checkpoint = {"model": model.state_dict(), **extra}
    if optimizer is not None:
        checkpoint["optimizer"] = optimizer.state_dict()
    torch.save(checkpoint, path)
    logger.debug(f"Saved checkpoint to {path}")


def load_checkpoint(
    path: str,
    model: torch.nn.Module,
    optimizer: Optional[torch.optim.Optimizer] = None,
    map_location: str = "cpu",
) -> dict:
    """
    Restore a checkpoint written by save_checkpoint.

    Args:
        path (str): Checkpoint file
        model (torch.nn.Module): Model receiving the stored weights
        optimizer (Optional[torch.optim.Optimizer]): Optimizer receiving the stored state
        map_location (str): Device the stored tensors are mapped to

    Returns:
        dict: The raw checkpoint dictionary, including any extra values
    """
    checkpoint = torch.load(path, map_location=map_location)
    model.load_state_dict(checkpoint["model"])
    if optimizer is not None:
        optimizer.load_state_dict(checkpoint["optimizer"])
    logger.debug(f"Loaded checkpoint from {path}")
    return checkpoint
