"""
Copyright (c) 2025. All rights reserved.
"""

"""
Expectation helpers and the harness exception hierarchy.

A case checks its invariants with ``expect``. A failed expectation raises
ExpectationError carrying the caller's location and source text, formatted as
``<file>:<line>: <code>`` so a report line points straight at the check.
"""

import inspect
import linecache
import logging
import os
from typing import Any, Optional

from lib.utils import cuda_available

logger = logging.getLogger(__name__)


class HarnessError(Exception):
    """Base class for errors raised by the harness itself."""


class ExpectationError(HarnessError, AssertionError):
    """A case invariant did not hold."""


class DuplicateCaseError(HarnessError):
    """A case name was registered twice."""


class CaseSkipped(Exception):
    """Raised inside a case to stop it early without failing it."""


_MAX_LOOKBACK = 10


def _caller_source(filename: str, lineno: int) -> str:
    # The reported line may fall anywhere inside a multi-line call
    start = lineno
    for candidate in range(lineno, max(0, lineno - _MAX_LOOKBACK), -1):
        if "expect(" in linecache.getline(filename, candidate):
            start = candidate
            break

    lines = []
    depth = 0
    while True:
        line = linecache.getline(filename, start + len(lines))
        if not line:
            break
        lines.append(line.strip())
        depth += line.count("(") - line.count(")")
        if depth <= 0:
            break
    if not lines:
        return "<unknown>"

    source = " ".join(lines)
    # Trim the call itself so the message shows only the checked expression
    if source.startswith("expect(") and source.endswith(")"):
        return source[len("expect(") : -1].strip().rstrip(",").strip()
    return source


def expect(condition: Any, description: Optional[str] = None) -> None:
    """Raise ExpectationError unless ``condition`` is truthy.

    Args:
        condition: Value tested for truthiness; single-element tensors work too
        description (Optional[str]): Text shown after the location. Defaults to the
            caller's source text, joined across lines when the call spans several.

    Raises:
        ExpectationError: With message ``"<file>:<line>: <description>"``
    """
    if condition:
        return

    caller = inspect.stack(context=0)[1]
    try:
        if description is not None:
            code = description
        else:
            code = _caller_source(caller.filename, caller.lineno)
        location = f"{os.path.basename(caller.filename)}:{caller.lineno}"
    finally:
        del caller
    raise ExpectationError(f"{location}: {code}")


def cuda_guard() -> None:
    """Skip the running case when no CUDA device is present."""
    if not cuda_available():
        logger.warning("No cuda, skipping test")
        raise CaseSkipped("No cuda, skipping test")
