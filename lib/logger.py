"""
Copyright (c) 2025. All rights reserved.
"""

"""
TensorBoard logging utilities for harness training loops.

This module provides a Logger class that wraps PyTorch's SummaryWriter to
record the loss and accuracy curves of the training cases. Scalars go both to
TensorBoard and to the standard logging stream.
"""

import logging
from typing import Optional, Union
from torch.utils.tensorboard import SummaryWriter

logger = logging.getLogger(__name__)


class Logger:
    """
    TensorBoard logging wrapper for training cases.

    Provides convenient methods to log scalars to TensorBoard while
    also echoing them through the module logger for immediate feedback.
    """

    def __init__(self, log_dir: str, run_name: Optional[str] = None):
        """
        Initialize the Logger with TensorBoard SummaryWriter.

        Args:
            log_dir (str): Base directory for TensorBoard logs
            run_name (str, optional): Name for this specific run. Creates subdirectory if provided.
        """
        if run_name:
            self.log_dir = f"{log_dir}/{run_name}"
        else:
            self.log_dir = log_dir
        self.writer = SummaryWriter(self.log_dir)

    def log_scalars(self, scalar_dict: dict[str, Union[int, float]], step: int = 0) -> None:
        """
        Log scalar values to TensorBoard and to the module logger.

        Args:
            scalar_dict (dict): Dictionary of metric names and values
            step (int): Global step number for TensorBoard timeline
        """
        for k, v in scalar_dict.items():
            self.writer.add_scalar(k, v, step)

        logger.debug(", ".join(f"{k}:{v}" for k, v in scalar_dict.items()))

    def close(self) -> None:
        """
        Close the TensorBoard writer and flush any remaining data.
        Should be called when logging is complete to ensure all data is written.
        """
        self.writer.close()


def open_logger(log_dir: Optional[str], run_name: str) -> Optional[Logger]:
    """Return a Logger under ``log_dir`` or None when TensorBoard output is disabled."""
    if log_dir is None:
        return None
    return Logger(log_dir, run_name)
