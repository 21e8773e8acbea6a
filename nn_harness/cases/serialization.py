"""
Copyright (c) 2025. All rights reserved.
"""

"""
Serialization cases: trained weights and optimizer state survive a save and
load, including a save made from CUDA and loaded on the CPU.
"""

import os
import tempfile

import torch

from lib.configs import HarnessConfig
from lib.loss_functions import get_loss_function
from lib.train import TrainContext, load_checkpoint, save_checkpoint, train_step
from nn_harness.cases import registry
from nn_harness.cases.optim import make_xor_optimizer, train_xor, xor_loss
from nn_harness.dataset import xor_batch
from nn_harness.expect import cuda_guard, expect
from nn_harness.models import XORNet


def _save(model: torch.nn.Module, path: str) -> None:
    torch.save(model.state_dict(), path)


def _load(path: str, model: torch.nn.Module) -> None:
    model.load_state_dict(torch.load(path, map_location="cpu"))


@registry.register("autograd/serialization/xor")
def serialization_xor(config: HarnessConfig) -> None:
    # We better be able to save and load a XOR model!
    model = XORNet(config.xor.hidden_dim)
    model2 = XORNet(config.xor.hidden_dim)
    model3 = XORNet(config.xor.hidden_dim)

    train_xor(model, config, "serialization_xor")

    with tempfile.TemporaryDirectory() as tmp_dir:
        path = os.path.join(tmp_dir, "test.bin")
        _save(model, path)
        _load(path, model2)

        loss = xor_loss(model2, 100)
        expect(loss < 0.1, f"loss < 0.1 (loss={loss:.4f})")

        cuda_guard()
        model2.cuda()
        _save(model2, path)
        _load(path, model3)

        loss = xor_loss(model3, 100)
        expect(loss < 0.1, f"loss < 0.1 (loss={loss:.4f})")


@registry.register("autograd/serialization/checkpoint")
def serialization_checkpoint(config: HarnessConfig) -> None:
    model = XORNet(config.xor.hidden_dim)
    optimizer = make_xor_optimizer(model, config.xor)
    train_context = TrainContext(optimizer=optimizer, loss_criterion=get_loss_function("bce"))
    steps = 20
    for _ in range(steps):
        inputs, labels = xor_batch(config.xor.batch_size)
        train_step(model, train_context, inputs, labels)

    restored = XORNet(config.xor.hidden_dim)
    restored_optimizer = make_xor_optimizer(restored, config.xor)

    with tempfile.TemporaryDirectory() as tmp_dir:
        path = os.path.join(tmp_dir, "checkpoint.pt")
        save_checkpoint(path, model, optimizer, epoch=steps)
        checkpoint = load_checkpoint(path, restored, restored_optimizer)

    expect(checkpoint["epoch"] == steps)
    for name, value in model.state_dict().items():
        expect(torch.equal(value, restored.state_dict()[name]), f"{name} restored")

    saved_state = optimizer.state_dict()["state"]
    restored_state = restored_optimizer.state_dict()["state"]
    expect(saved_state.keys() == restored_state.keys())
    for index, param_state in saved_state.items():
        for key, value in param_state.items():
            if torch.is_tensor(value):
                expect(torch.equal(value, restored_state[index][key]), f"state[{index}][{key}] restored")
