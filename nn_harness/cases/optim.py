"""
Copyright (c) 2025. All rights reserved.
"""

"""
Optimizer cases: every optimizer has to be able to learn XOR within the
configured step budget.
"""

from dataclasses import replace
from typing import Optional

import torch

from lib.configs import HarnessConfig, XORTrainConfig
from lib.logger import open_logger
from lib.loss_functions import get_loss_function
from lib.train import ConvergenceResult, TrainContext, get_optimizer, train_until_converged
from nn_harness.cases import registry
from nn_harness.dataset import xor_batch
from nn_harness.expect import expect
from nn_harness.models import XORNet


def make_xor_optimizer(model: torch.nn.Module, xor_config: XORTrainConfig) -> torch.optim.Optimizer:
    return get_optimizer(
        optimizer_type=xor_config.optimizer,
        lr=xor_config.lr,
        model=model,
        momentum=xor_config.momentum,
        nesterov=xor_config.nesterov,
        weight_decay=xor_config.weight_decay,
    )


def train_xor(
    model: torch.nn.Module,
    config: HarnessConfig,
    run_name: str,
    optimizer: Optional[torch.optim.Optimizer] = None,
    xor_config: Optional[XORTrainConfig] = None,
) -> ConvergenceResult:
    """Train ``model`` on XOR and expect convergence within ``max_epochs`` steps."""
    xor_config = xor_config or config.xor
    if optimizer is None:
        optimizer = make_xor_optimizer(model, xor_config)

    tb_logger = open_logger(config.tensorboard_log_dir, run_name)
    train_context = TrainContext(
        optimizer=optimizer,
        loss_criterion=get_loss_function("bce"),
        logger=tb_logger,
    )
    try:
        result = train_until_converged(
            model,
            train_context,
            xor_batch,
            batch_size=xor_config.batch_size,
            target_loss=xor_config.target_loss,
            max_epochs=xor_config.max_epochs,
            smoothing=xor_config.smoothing,
        )
    finally:
        if tb_logger is not None:
            tb_logger.close()

    expect(result.converged, f"epoch < {xor_config.max_epochs}")
    return result


def xor_loss(model: torch.nn.Module, batch_size: int, device: str = "cpu") -> float:
    """BCE of ``model`` on a fresh XOR batch, without tracking gradients."""
    inputs, labels = xor_batch(batch_size)
    with torch.no_grad():
        predictions = model(inputs.to(device))
        return get_loss_function("bce")(predictions, labels.to(device)).item()


@registry.register("autograd/optim/sgd")
def optim_sgd(config: HarnessConfig) -> None:
    # We better be able to learn XOR
    train_xor(XORNet(config.xor.hidden_dim), config, "optim_sgd")


@registry.register("autograd/optim/adam")
def optim_adam(config: HarnessConfig) -> None:
    xor_config = replace(config.xor, optimizer="adam", lr=5e-2)
    train_xor(XORNet(xor_config.hidden_dim), config, "optim_adam", xor_config=xor_config)
