"""
Copyright (c) 2025. All rights reserved.
"""

"""
Sequential case runner with strict and lenient failure handling.

Cases run one after another in registry order. Before each case every RNG is
reseeded so a case draws the same data whether it runs alone or in a full
sweep. In strict mode the first exception leaves ``run`` untouched; in lenient
mode each failure is logged and recorded and the sweep continues.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from lib.configs import HarnessConfig
from lib.utils import set_seed
from nn_harness.expect import CaseSkipped
from nn_harness.registry import Case, CaseRegistry

logger = logging.getLogger(__name__)


class CaseStatus(Enum):
    """Outcome of a single case."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class CaseResult:
    """Result of running one case."""
    name: str
    status: CaseStatus
    message: str = ""
    elapsed_seconds: float = 0.0


@dataclass
class RunReport:
    """Ordered results of a harness run."""
    results: List[CaseResult] = field(default_factory=list)

    def _count(self, status: CaseStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def passed(self) -> int:
        return self._count(CaseStatus.PASSED)

    @property
    def failed(self) -> int:
        return self._count(CaseStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(CaseStatus.SKIPPED)

    @property
    def failures(self) -> List[CaseResult]:
        return [result for result in self.results if result.status == CaseStatus.FAILED]

    def was_successful(self) -> bool:
        return self.failed == 0

    def summary(self) -> str:
        return (
            f"{len(self.results)} cases: {self.passed} passed, "
            f"{self.failed} failed, {self.skipped} skipped"
        )


class HarnessRunner:
    """Runs every case of a registry against one HarnessConfig."""

    def __init__(self, registry: CaseRegistry, config: HarnessConfig):
        self.registry = registry
        self.config = config

    def run_case(self, case: Case) -> CaseResult:
        """Run a single case; exceptions other than CaseSkipped propagate."""
        logger.info(f"Doing {case.name}")
        set_seed(self.config.seed)
        start = time.perf_counter()
        try:
            case(self.config)
        except CaseSkipped as skip:
            return CaseResult(case.name, CaseStatus.SKIPPED, str(skip), time.perf_counter() - start)
        return CaseResult(case.name, CaseStatus.PASSED, "", time.perf_counter() - start)

    def run(self) -> RunReport:
        """Run all cases in order and return the collected report.

        Raises:
            Exception: In strict mode, the first exception raised by a case
        """
        report = RunReport()
        for case in self.registry:
            if self.config.strict:
                report.results.append(self.run_case(case))
                continue

            start = time.perf_counter()
            try:
                result = self.run_case(case)
            except Exception as e:
                logger.error(f"Test failed! {e}")
                result = CaseResult(
                    case.name, CaseStatus.FAILED, str(e), time.perf_counter() - start
                )
            report.results.append(result)

        logger.info("Done!")
        logger.info(report.summary())
        return report
