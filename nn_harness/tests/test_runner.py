"""
Copyright (c) 2025. All rights reserved.
"""

"""
Unit tests for the strict and lenient runner.
"""

import logging
import os
import sys

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

import pytest
import torch

from lib.configs import HarnessConfig
from nn_harness.expect import CaseSkipped, ExpectationError, expect
from nn_harness.registry import CaseRegistry
from nn_harness.runner import CaseStatus, HarnessRunner


def make_registry(calls):
    """Registry with a passing, a failing, a skipping and another passing case."""
    registry = CaseRegistry()

    @registry.register("autograd/a/pass")
    def passing(config):
        calls.append("a")

    @registry.register("autograd/b/fail")
    def failing(config):
        calls.append("b")
        expect(False, "always fails")

    @registry.register("autograd/c/skip")
    def skipping(config):
        calls.append("c")
        raise CaseSkipped("not today")

    @registry.register("autograd/d/pass")
    def passing_again(config):
        calls.append("d")

    return registry


class TestStrictMode:
    """Test suite for strict runs."""

    def test_first_failure_propagates(self):
        """The first failing case aborts the run."""
        calls = []
        runner = HarnessRunner(make_registry(calls), HarnessConfig(strict=True))

        with pytest.raises(ExpectationError, match="always fails"):
            runner.run()

        assert calls == ["a", "b"]

    def test_skip_is_not_a_failure(self):
        """CaseSkipped never aborts a strict run."""
        calls = []
        registry = make_registry(calls).select("autograd/[acd]/*")

        report = HarnessRunner(registry, HarnessConfig(strict=True)).run()

        assert calls == ["a", "c", "d"]
        assert report.passed == 2
        assert report.skipped == 1
        assert report.was_successful()


class TestLenientMode:
    """Test suite for lenient runs."""

    def test_failures_recorded_and_run_continues(self):
        """Every case runs and the failure is recorded."""
        calls = []
        report = HarnessRunner(make_registry(calls), HarnessConfig(strict=False)).run()

        assert calls == ["a", "b", "c", "d"]
        assert [r.status for r in report.results] == [
            CaseStatus.PASSED,
            CaseStatus.FAILED,
            CaseStatus.SKIPPED,
            CaseStatus.PASSED,
        ]
        assert report.failed == 1
        assert report.failures[0].name == "autograd/b/fail"
        assert report.failures[0].message.endswith("always fails")
        assert not report.was_successful()
        assert report.summary() == "4 cases: 2 passed, 1 failed, 1 skipped"

    def test_log_messages(self, caplog):
        """Progress, failures and completion are logged."""
        with caplog.at_level(logging.INFO, logger="nn_harness.runner"):
            HarnessRunner(make_registry([]), HarnessConfig(strict=False)).run()

        messages = [record.getMessage() for record in caplog.records]
        assert "Doing autograd/a/pass" in messages
        assert any(m.startswith("Test failed! ") and "always fails" in m for m in messages)
        assert "Done!" in messages

    def test_unexpected_exceptions_are_caught(self):
        """Errors other than ExpectationError are reported too."""
        registry = CaseRegistry()
        registry.add("autograd/x/boom", lambda config: torch.zeros(2, 3) @ torch.zeros(2, 3))

        report = HarnessRunner(registry, HarnessConfig(strict=False)).run()

        assert report.failed == 1


class TestReseeding:
    """Test suite for per-case seeding."""

    def test_every_case_sees_same_random_stream(self):
        """Each case starts from the configured seed."""
        draws = []
        registry = CaseRegistry()
        registry.add("autograd/r/1", lambda config: draws.append(torch.rand(3)))
        registry.add("autograd/r/2", lambda config: draws.append(torch.rand(3)))

        HarnessRunner(registry, HarnessConfig(seed=123)).run()

        assert torch.equal(draws[0], draws[1])
