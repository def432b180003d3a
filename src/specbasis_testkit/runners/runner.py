from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple
import pathlib
import pytest
from ..config import AppConfig
from ..logging import setup_logging

class SpecStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    EXCLUDED = "excluded"

@dataclass(frozen=True)
class RunInfo:
    total_specs_defined: int

@dataclass(frozen=True)
class SuiteInfo:
    description: str
    full_name: str
    node_id: str = ""

@dataclass(frozen=True)
class SpecInfo:
    description: str
    full_name: str
    node_id: str = ""

@dataclass(frozen=True)
class FailedExpectation:
    message: str = ""
    stack: str = ""

@dataclass(frozen=True)
class SpecResult:
    description: str
    status: SpecStatus
    full_name: str
    failed_expectations: Tuple[FailedExpectation, ...] = ()
    pending_reason: str = ""
    node_id: str = ""

@dataclass(frozen=True)
class RunResult:
    overall_status: str
    exit_code: int
    passed: int = 0
    failed: int = 0
    pending: int = 0
    excluded: int = 0

class LifecycleListener(Protocol):
    """Receives run milestones in order: run, suites, specs, run end.

    Every hook is optional for a registered listener; missing ones are skipped.
    """
    def run_started(self, info: RunInfo) -> None: ...
    def suite_started(self, suite: SuiteInfo) -> None: ...
    def spec_started(self, spec: SpecInfo) -> None: ...
    def spec_finished(self, result: SpecResult) -> None: ...
    def suite_finished(self, suite: SuiteInfo) -> None: ...
    def run_finished(self, result: RunResult) -> None: ...

def overall_status(exit_code: int) -> str:
    if exit_code == pytest.ExitCode.OK:
        return "passed"
    if exit_code == pytest.ExitCode.TESTS_FAILED:
        return "failed"
    return "incomplete"

class _SpecCollector:
    """Collect-only plugin backing SpecRunner.discover()."""
    def __init__(self):
        self.specs: List[SpecInfo] = []

    def pytest_collection_finish(self, session: pytest.Session) -> None:
        from .bridge import describe_spec
        self.specs = [describe_spec(item) for item in session.items]

class SpecRunner:
    def __init__(self, cfg: AppConfig, base_dir: str = "."):
        from ..reporters.console import ColorReporter
        self.cfg = cfg
        self.base_dir = pathlib.Path(base_dir)
        self.log = setup_logging(cfg.log_level)
        self.reporters: List[LifecycleListener] = [
            ColorReporter(indent_width=cfg.reporter.stack_indent, color=cfg.reporter.color)
        ]

    def add_reporter(self, reporter: LifecycleListener) -> None:
        self.reporters.append(reporter)

    def clear_reporters(self) -> None:
        self.reporters = []

    def build_args(self, files: Optional[Sequence[str]] = None) -> List[str]:
        spec = self.cfg.spec
        args = list(files) if files else [(self.base_dir / spec.spec_dir).as_posix()]
        args += ["-o", "python_files=" + " ".join(spec.spec_files),
                 "-o", "python_classes=" + " ".join(spec.spec_classes),
                 "-o", "python_functions=" + " ".join(spec.spec_functions)]
        for helper in spec.helpers:
            args += ["-p", helper]
        if spec.stop_on_failure:
            args.append("-x")
        if spec.filter:
            args += ["-k", spec.filter]
        if self.cfg.reporter.suppress_default_reporter:
            args += ["-p", "no:terminal"]
        return args

    def discover(self, files: Optional[Sequence[str]] = None) -> List[SpecInfo]:
        collector = _SpecCollector()
        args = self.build_args(files) + ["--collect-only"]
        self.log.debug("Collecting specs: pytest %s", " ".join(args))
        pytest.main(args, plugins=[collector])
        return collector.specs

    def run(self, files: Optional[Sequence[str]] = None) -> RunResult:
        from .bridge import LifecycleBridge
        bridge = LifecycleBridge(self.reporters)
        args = self.build_args(files)
        self.log.debug("Running specs: pytest %s", " ".join(args))
        exit_code = int(pytest.main(args, plugins=[bridge]))
        result = bridge.result or RunResult(overall_status=overall_status(exit_code), exit_code=exit_code)
        self.log.info("Run %s (exit code %d)", result.overall_status, result.exit_code)
        return result
