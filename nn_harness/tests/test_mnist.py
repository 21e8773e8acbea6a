"""
Copyright (c) 2025. All rights reserved.
"""

"""
Unit tests for the MNIST IDX reader.
"""

import gzip
import os
import struct
import sys

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

import numpy as np
import pytest
import torch

from nn_harness.mnist import (
    IMAGES_MAGIC,
    LABELS_MAGIC,
    TEST_IMAGES,
    TEST_LABELS,
    TRAIN_IMAGES,
    TRAIN_LABELS,
    IDXFormatError,
    MNISTDataset,
    load_mnist,
    mnist_available,
    read_idx_images,
    read_idx_labels,
    resolve,
)


def images_bytes(pixels: np.ndarray, magic: int = IMAGES_MAGIC) -> bytes:
    count, rows, cols = pixels.shape
    return struct.pack(">iiii", magic, count, rows, cols) + pixels.astype(np.uint8).tobytes()


def labels_bytes(labels: np.ndarray, magic: int = LABELS_MAGIC) -> bytes:
    return struct.pack(">ii", magic, len(labels)) + labels.astype(np.uint8).tobytes()


def write_split(directory, images_name, labels_name, count, rows=28, cols=28):
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(count, rows, cols))
    labels = rng.integers(0, 10, size=count)
    (directory / images_name).write_bytes(images_bytes(pixels))
    (directory / labels_name).write_bytes(labels_bytes(labels))
    return pixels, labels


class TestReadImages:
    """Test suite for read_idx_images."""

    def test_shape_dtype_and_scale(self, tmp_path):
        """Pixels become float32 [N, 1, R, C] divided by 255."""
        pixels = np.array([[[0, 255, 51], [102, 153, 204]]] * 3)
        path = tmp_path / "images"
        path.write_bytes(images_bytes(pixels))

        images = read_idx_images(path)

        assert images.shape == (3, 1, 2, 3)
        assert images.dtype == torch.float32
        expected = torch.tensor([[0.0, 1.0, 0.2], [0.4, 0.6, 0.8]])
        torch.testing.assert_close(images[2, 0], expected)

    def test_gzip(self, tmp_path):
        """Files ending in .gz are decompressed."""
        pixels = np.full((2, 4, 4), 255)
        path = tmp_path / "images.gz"
        with gzip.open(path, "wb") as f:
            f.write(images_bytes(pixels))

        images = read_idx_images(path)

        assert images.shape == (2, 1, 4, 4)
        assert torch.all(images == 1.0)

    def test_truncated_header(self, tmp_path):
        """A header shorter than four integers is rejected."""
        path = tmp_path / "images"
        path.write_bytes(struct.pack(">ii", IMAGES_MAGIC, 1))

        with pytest.raises(IDXFormatError, match="failed to read an integer"):
            read_idx_images(path)

    def test_truncated_pixels(self, tmp_path):
        """Fewer pixel bytes than the header promises are rejected."""
        path = tmp_path / "images"
        path.write_bytes(images_bytes(np.zeros((2, 3, 3)))[:-1])

        with pytest.raises(IDXFormatError, match="failed to read a byte"):
            read_idx_images(path)

    def test_wrong_magic(self, tmp_path):
        """A label file cannot be read as images."""
        path = tmp_path / "images"
        path.write_bytes(images_bytes(np.zeros((1, 2, 2)), magic=LABELS_MAGIC))

        with pytest.raises(IDXFormatError, match="bad magic number"):
            read_idx_images(path)

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_idx_images(tmp_path / "absent")

    @pytest.mark.parametrize("header", [(-1, 28, 28), (3, -28, 28), (3, 28, -28)])
    def test_negative_sizes(self, tmp_path, header):
        """Negative counts or dimensions are rejected even with data present."""
        path = tmp_path / "images"
        path.write_bytes(struct.pack(">iiii", IMAGES_MAGIC, *header) + bytes(3 * 28 * 28))

        with pytest.raises(IDXFormatError, match="negative dimension"):
            read_idx_images(path)


class TestReadLabels:
    """Test suite for read_idx_labels."""

    def test_values_and_dtype(self, tmp_path):
        """Labels become int64 [N]."""
        path = tmp_path / "labels"
        path.write_bytes(labels_bytes(np.array([7, 2, 1, 0, 4])))

        labels = read_idx_labels(path)

        assert labels.dtype == torch.int64
        assert labels.tolist() == [7, 2, 1, 0, 4]

    def test_truncated_labels(self, tmp_path):
        """Fewer label bytes than the count are rejected."""
        path = tmp_path / "labels"
        path.write_bytes(labels_bytes(np.array([1, 2, 3]))[:-2])

        with pytest.raises(IDXFormatError):
            read_idx_labels(path)

    def test_negative_count(self, tmp_path):
        """A negative label count is rejected."""
        path = tmp_path / "labels"
        path.write_bytes(struct.pack(">ii", LABELS_MAGIC, -5) + bytes(7))

        with pytest.raises(IDXFormatError, match="negative dimension -5"):
            read_idx_labels(path)


class TestLoadMNIST:
    """Test suite for locating and loading the MNIST splits."""

    def test_available_and_load(self, tmp_path):
        """Both splits load once all four files are present."""
        assert not mnist_available(tmp_path)

        train_pixels, train_labels = write_split(tmp_path, TRAIN_IMAGES, TRAIN_LABELS, 12)
        write_split(tmp_path, TEST_IMAGES, TEST_LABELS, 5)
        assert mnist_available(tmp_path)

        images, labels, test_images, test_labels = load_mnist(tmp_path)

        assert images.shape == (12, 1, 28, 28)
        assert labels.tolist() == train_labels.tolist()
        assert test_images.shape == (5, 1, 28, 28)
        assert test_labels.shape == (5,)
        torch.testing.assert_close(images[4, 0] * 255, torch.from_numpy(train_pixels[4]).float())

    def test_loads_gzipped_files(self, tmp_path):
        """Gzipped files are found and read when the plain ones are absent."""
        for name, payload in (
            (TRAIN_IMAGES, images_bytes(np.zeros((3, 28, 28)))),
            (TRAIN_LABELS, labels_bytes(np.array([1, 2, 3]))),
            (TEST_IMAGES, images_bytes(np.zeros((2, 28, 28)))),
            (TEST_LABELS, labels_bytes(np.array([4, 5]))),
        ):
            with gzip.open(tmp_path / f"{name}.gz", "wb") as f:
                f.write(payload)

        _, labels, _, test_labels = load_mnist(tmp_path)

        assert labels.tolist() == [1, 2, 3]
        assert test_labels.tolist() == [4, 5]

    def test_count_mismatch(self, tmp_path):
        """Image and label counts of a split must agree."""
        write_split(tmp_path, TRAIN_IMAGES, TRAIN_LABELS, 3)
        write_split(tmp_path, TEST_IMAGES, "unused", 4)
        (tmp_path / TEST_LABELS).write_bytes(labels_bytes(np.array([1, 2])))

        with pytest.raises(IDXFormatError, match="4 images but 2 labels"):
            load_mnist(tmp_path)

    def test_missing_file(self, tmp_path):
        """A missing split raises FileNotFoundError."""
        write_split(tmp_path, TRAIN_IMAGES, TRAIN_LABELS, 3)

        with pytest.raises(FileNotFoundError):
            load_mnist(tmp_path)

    def test_resolve_prefers_plain_file(self, tmp_path):
        """resolve() prefers the uncompressed file and falls back to .gz."""
        (tmp_path / "name.gz").write_bytes(b"")
        assert resolve(tmp_path, "name") == os.path.join(tmp_path, "name.gz")

        (tmp_path / "name").write_bytes(b"")
        assert resolve(tmp_path, "name") == os.path.join(tmp_path, "name")


class TestMNISTDataset:
    """Test suite for MNISTDataset."""

    def test_indexing(self):
        """Items are (image, label) pairs from the wrapped tensors."""
        images = torch.rand(4, 1, 28, 28)
        labels = torch.tensor([3, 1, 4, 1])

        dataset = MNISTDataset(images, labels)

        assert len(dataset) == 4
        image, label = dataset[2]
        assert torch.equal(image, images[2])
        assert label.item() == 4
