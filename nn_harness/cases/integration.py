"""
Copyright (c) 2025. All rights reserved.
"""

"""
End-to-end case: train a small CNN on MNIST and check test accuracy.

The ``~`` in the group name makes this case sort, and therefore run, last.
"""

import logging

import torch
from torch.utils.data import DataLoader

from lib.configs import HarnessConfig
from lib.logger import open_logger
from lib.loss_functions import get_loss_function
from lib.train import TrainContext, evaluate_accuracy, get_optimizer, train_model_with_dataloader
from lib.utils import count_parameters, get_device
from nn_harness.cases import registry
from nn_harness.expect import CaseSkipped, cuda_guard, expect
from nn_harness.mnist import MNISTDataset, load_mnist, mnist_available
from nn_harness.models import MNISTNet

logger = logging.getLogger(__name__)


@registry.register("autograd/~integration/mnist")
def integration_mnist(config: HarnessConfig) -> None:
    mnist_config = config.mnist
    if torch.device(mnist_config.device).type == "cuda":
        cuda_guard()
    if not mnist_available(config.mnist_dir):
        raise CaseSkipped(f"MNIST files not found in {config.mnist_dir}")

    logger.info(f"Training MNIST for {mnist_config.epochs} epochs, rest your eyes for a bit!")
    device = get_device(mnist_config.device)

    train_images, train_labels, test_images, test_labels = load_mnist(config.mnist_dir)
    train_dataloader = DataLoader(
        MNISTDataset(train_images, train_labels),
        batch_size=mnist_config.batch_size,
        shuffle=True,
        drop_last=True,
    )

    model = MNISTNet(mnist_config.dropout).to(device)
    logger.info(f"MNISTNet has {count_parameters(model)} trainable parameters")
    optimizer = get_optimizer(
        optimizer_type="sgd",
        lr=mnist_config.lr,
        model=model,
        momentum=mnist_config.momentum,
    )

    tb_logger = open_logger(config.tensorboard_log_dir, "integration_mnist")
    train_context = TrainContext(
        optimizer=optimizer,
        loss_criterion=get_loss_function("nll"),
        logger=tb_logger,
    )
    try:
        train_model_with_dataloader(
            model, train_context, train_dataloader, mnist_config.epochs, device
        )
        accuracy = evaluate_accuracy(model, test_images, test_labels, device)
        if tb_logger is not None:
            tb_logger.log_scalars({"accuracy": accuracy}, step=mnist_config.epochs)
    finally:
        if tb_logger is not None:
            tb_logger.close()

    num_correct = round(accuracy * test_labels.size(0))
    logger.info(f"Num correct: {num_correct} out of {test_labels.size(0)}")
    expect(accuracy > mnist_config.min_accuracy, f"accuracy > {mnist_config.min_accuracy}")
