"""Shared fixtures for specbasis_testkit tests."""

from typing import Any, List, Tuple

import pytest

from specbasis_testkit.runners.runner import (
    FailedExpectation,
    RunInfo,
    RunResult,
    SpecInfo,
    SpecResult,
    SpecStatus,
    SuiteInfo,
)

pytest_plugins = ["pytester"]


class RecordingListener:
    """Listener that records every lifecycle event it receives."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []
        self.results: List[SpecResult] = []
        self.run_result: RunResult | None = None

    def run_started(self, info: RunInfo) -> None:
        self.events.append(("run_started", info.total_specs_defined))

    def suite_started(self, suite: SuiteInfo) -> None:
        self.events.append(("suite_started", suite.full_name))

    def spec_started(self, spec: SpecInfo) -> None:
        self.events.append(("spec_started", spec.full_name))

    def spec_finished(self, result: SpecResult) -> None:
        self.results.append(result)
        self.events.append(("spec_finished", (result.full_name, result.status.value)))

    def suite_finished(self, suite: SuiteInfo) -> None:
        self.events.append(("suite_finished", suite.full_name))

    def run_finished(self, result: RunResult) -> None:
        self.run_result = result
        self.events.append(("run_finished", result.overall_status))


@pytest.fixture
def recorder() -> RecordingListener:
    """Create a fresh recording listener."""
    return RecordingListener()


def make_result(
    name: str,
    status: SpecStatus = SpecStatus.PASSED,
    expectations: Tuple[FailedExpectation, ...] = (),
    pending_reason: str = "",
) -> SpecResult:
    """Build a spec result whose full name is ``Suite <name>``."""
    return SpecResult(
        description=name,
        status=status,
        full_name=f"Suite {name}",
        failed_expectations=expectations,
        pending_reason=pending_reason,
    )


@pytest.fixture(name="make_result")
def make_result_fixture() -> Any:
    """Expose the spec result builder to tests."""
    return make_result
