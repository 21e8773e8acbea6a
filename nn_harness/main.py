"""
Copyright (c) 2025. All rights reserved.
"""

"""
CLI for running the harness cases.

Without positional arguments every case runs in strict mode and the first
failure aborts the process. Passing any positional argument (or
``--keep-going``) switches to lenient mode, where each failure is reported and
the remaining cases still run.
"""

import argparse
import logging
import sys
from typing import List, Optional

from lib.configs import HarnessConfig, MNISTTrainConfig
from nn_harness.registry import CaseRegistry
from nn_harness.runner import HarnessRunner

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Run the neural network API integration cases"
    )
    parser.add_argument(
        "lenient",
        nargs="*",
        help="Any positional argument reports failures and keeps going instead of aborting.",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Report each failing case and continue. Same as passing a positional argument.",
    )
    parser.add_argument(
        "--filter",
        type=str,
        default=None,
        help="Shell-style pattern selecting case names, e.g. 'autograd/linear/*'.",
    )
    parser.add_argument("--list", action="store_true", help="Print the selected case names and exit.")
    parser.add_argument(
        "--seed", type=int, default=0, help="Seed applied before every case. Default is 0."
    )
    parser.add_argument(
        "--mnist-dir",
        type=str,
        default="mnist",
        help="Directory holding the MNIST IDX files. Default is ./mnist.",
    )
    parser.add_argument(
        "--mnist-device",
        type=str,
        default="cuda",
        help="Device for the MNIST integration case. Default is cuda; the case skips without CUDA.",
    )
    parser.add_argument(
        "--tensorboard-dir",
        type=str,
        default=None,
        help="Write training curves to this TensorBoard log directory.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    return parser


def config_from_args(args: argparse.Namespace) -> HarnessConfig:
    return HarnessConfig(
        seed=args.seed,
        strict=not (args.lenient or args.keep_going),
        filter=args.filter,
        mnist_dir=args.mnist_dir,
        tensorboard_log_dir=args.tensorboard_dir,
        mnist=MNISTTrainConfig(device=args.mnist_device),
    )


def main(argv: Optional[List[str]] = None, registry: Optional[CaseRegistry] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    if registry is None:
        from nn_harness.cases import build_registry

        registry = build_registry()

    config = config_from_args(args)
    if config.filter:
        registry = registry.select(config.filter)

    if args.list:
        for name in registry.names():
            print(name)
        return 0

    HarnessRunner(registry, config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
