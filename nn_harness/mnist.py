"""
Copyright (c) 2025. All rights reserved.
"""

"""
MNIST IDX file reader.

IDX files start with a big-endian int32 header (magic number, item count and,
for images, row and column counts) followed by one unsigned byte per pixel or
label. Files ending in ``.gz`` are decompressed transparently.
"""

import gzip
import os
from os import PathLike
from typing import Tuple, Union

import numpy as np
import torch
from torch.utils.data import Dataset

from nn_harness.expect import HarnessError

IMAGES_MAGIC = 2051
LABELS_MAGIC = 2049

TRAIN_IMAGES = "train-images-idx3-ubyte"
TRAIN_LABELS = "train-labels-idx1-ubyte"
TEST_IMAGES = "t10k-images-idx3-ubyte"
TEST_LABELS = "t10k-labels-idx1-ubyte"

_HEADER_DTYPE = np.dtype(">i4")


class IDXFormatError(HarnessError):
    """An IDX file is truncated, has negative sizes or carries the wrong magic number."""


def _read_bytes(path: Union[str, PathLike]) -> bytes:
    opener = gzip.open if os.fspath(path).endswith(".gz") else open
    with opener(path, "rb") as f:
        return f.read()


def _parse_header(raw: bytes, num_ints: int, expected_magic: int, path) -> np.ndarray:
    header_size = num_ints * _HEADER_DTYPE.itemsize
    if len(raw) < header_size:
        raise IDXFormatError(f"{path}: failed to read an integer")
    header = np.frombuffer(raw, dtype=_HEADER_DTYPE, count=num_ints)
    if header[0] != expected_magic:
        raise IDXFormatError(f"{path}: bad magic number {header[0]}, expected {expected_magic}")
    for size in header[1:]:
        if size < 0:
            raise IDXFormatError(f"{path}: negative dimension {size}")
    return header


def read_idx_images(path: Union[str, PathLike]) -> torch.Tensor:
    """Read an IDX image file.

    Args:
        path: Location of the (optionally gzipped) image file

    Returns:
        torch.Tensor: float32 images [count, 1, rows, cols] scaled to [0, 1]

    Raises:
        FileNotFoundError: If the file does not exist
        IDXFormatError: If the header or pixel data is malformed
    """
    raw = _read_bytes(path)
    _, count, rows, cols = (int(v) for v in _parse_header(raw, 4, IMAGES_MAGIC, path))

    offset = 4 * _HEADER_DTYPE.itemsize
    expected = count * rows * cols
    if len(raw) - offset < expected:
        raise IDXFormatError(f"{path}: failed to read a byte")

    pixels = np.frombuffer(raw, dtype=np.uint8, count=expected, offset=offset)
    images = pixels.reshape(count, 1, rows, cols).astype(np.float32) / 255
    return torch.from_numpy(images)


def read_idx_labels(path: Union[str, PathLike]) -> torch.Tensor:
    """Read an IDX label file.

    Args:
        path: Location of the (optionally gzipped) label file

    Returns:
        torch.Tensor: int64 labels [count]

    Raises:
        FileNotFoundError: If the file does not exist
        IDXFormatError: If the header or label data is malformed
    """
    raw = _read_bytes(path)
    _, count = (int(v) for v in _parse_header(raw, 2, LABELS_MAGIC, path))

    offset = 2 * _HEADER_DTYPE.itemsize
    if len(raw) - offset < count:
        raise IDXFormatError(f"{path}: failed to read a byte")

    labels = np.frombuffer(raw, dtype=np.uint8, count=count, offset=offset)
    return torch.from_numpy(labels.astype(np.int64))


def resolve(data_dir: Union[str, PathLike], name: str) -> str:
    """Path of ``name`` in ``data_dir``, preferring the uncompressed file."""
    plain = os.path.join(data_dir, name)
    if os.path.exists(plain):
        return plain
    compressed = plain + ".gz"
    if os.path.exists(compressed):
        return compressed
    return plain


def mnist_available(data_dir: Union[str, PathLike]) -> bool:
    """True when all four MNIST files exist in ``data_dir``."""
    return all(
        os.path.exists(resolve(data_dir, name))
        for name in (TRAIN_IMAGES, TRAIN_LABELS, TEST_IMAGES, TEST_LABELS)
    )


def _load_split(
    data_dir: Union[str, PathLike], images_name: str, labels_name: str
) -> Tuple[torch.Tensor, torch.Tensor]:
    images = read_idx_images(resolve(data_dir, images_name))
    labels = read_idx_labels(resolve(data_dir, labels_name))
    if images.size(0) != labels.size(0):
        raise IDXFormatError(f"{data_dir}: {images.size(0)} images but {labels.size(0)} labels")
    return images, labels


def load_mnist(
    data_dir: Union[str, PathLike],
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor, torch.Tensor]:
    """Load the four standard MNIST files from ``data_dir``.

    Args:
        data_dir: Directory holding the plain or gzipped IDX files

    Returns:
        Tuple of (train_images, train_labels, test_images, test_labels)

    Raises:
        FileNotFoundError: If any of the files is missing
        IDXFormatError: If a file is malformed or a split's counts disagree
    """
    train_images, train_labels = _load_split(data_dir, TRAIN_IMAGES, TRAIN_LABELS)
    test_images, test_labels = _load_split(data_dir, TEST_IMAGES, TEST_LABELS)
    return train_images, train_labels, test_images, test_labels


class MNISTDataset(Dataset):
    """PyTorch Dataset over one loaded MNIST split.

    Attributes:
        images (torch.Tensor): Images [num_samples, 1, 28, 28]
        labels (torch.Tensor): Class labels [num_samples]
    """

    def __init__(self, images: torch.Tensor, labels: torch.Tensor) -> None:
        super().__init__()
        self.images = images
        self.labels = labels

    def __len__(self) -> int:
        return self.labels.size(0)

    def __getitem__(self, index: int) -> Tuple[torch.Tensor, torch.Tensor]:
        return self.images[index], self.labels[index]
