"""pytest plugin that replays a session as spec lifecycle events.

pytest has no notion of suites starting and finishing, so the bridge derives
them from the collection tree: every ``Module`` and ``Class`` node above a test
item is a suite, opened when its first item runs and closed once the run moves
past its last one.
"""
from typing import Dict, List, Optional, Sequence
import pytest
from .runner import (
    FailedExpectation,
    LifecycleListener,
    RunInfo,
    RunResult,
    SpecInfo,
    SpecResult,
    SpecStatus,
    SuiteInfo,
    overall_status,
)

def describe_node(node: pytest.Item | pytest.Collector) -> str:
    """First docstring line of the node's object, else the pytest node name."""
    doc = getattr(getattr(node, "obj", None), "__doc__", None)
    if isinstance(doc, str) and doc.strip():
        description = doc.strip().splitlines()[0].strip()
        callspec = getattr(node, "callspec", None)
        return f"{description} [{callspec.id}]" if callspec is not None else description
    return node.name

def suite_chain(item: pytest.Item) -> List[SuiteInfo]:
    chain: List[SuiteInfo] = []
    for node in item.listchain():
        if isinstance(node, (pytest.Module, pytest.Class)):
            description = describe_node(node)
            full_name = f"{chain[-1].full_name} {description}" if chain else description
            chain.append(SuiteInfo(description=description, full_name=full_name, node_id=node.nodeid))
    return chain

def describe_spec(item: pytest.Item) -> SpecInfo:
    description = describe_node(item)
    chain = suite_chain(item)
    full_name = f"{chain[-1].full_name} {description}" if chain else description
    return SpecInfo(description=description, full_name=full_name, node_id=item.nodeid)

def expectation_from(report: pytest.TestReport | pytest.CollectReport) -> FailedExpectation:
    crash = getattr(report.longrepr, "reprcrash", None)
    stack = report.longreprtext or ""
    if crash is not None:
        message = crash.message
    else:
        lines = stack.strip().splitlines()
        message = lines[-1] if lines else ""
    when = getattr(report, "when", "call")
    if when not in ("call", "collect"):
        message = f"[{when}] {message}"
    return FailedExpectation(message=message, stack=stack)

def pending_reason(report: pytest.TestReport) -> str:
    if hasattr(report, "wasxfail"):
        return report.wasxfail
    if isinstance(report.longrepr, tuple):
        return str(report.longrepr[2])
    return ""

class LifecycleBridge:
    def __init__(self, listeners: Sequence[LifecycleListener]):
        self.listeners = list(listeners)
        self.result: Optional[RunResult] = None
        self._open_suites: List[SuiteInfo] = []
        self._specs: Dict[str, SpecInfo] = {}
        self._reports: Dict[str, List[pytest.TestReport]] = {}
        self._collect_errors: List[SpecResult] = []
        self._excluded: List[SpecResult] = []
        self._started = False
        self._counts = {SpecStatus.PASSED: 0, SpecStatus.FAILED: 0, SpecStatus.PENDING: 0, SpecStatus.EXCLUDED: 0}

    def _emit(self, event: str, payload) -> None:
        for listener in self.listeners:
            hook = getattr(listener, event, None)
            if hook is not None:
                hook(payload)

    def _start_run(self, total: int) -> None:
        self._started = True
        self._emit("run_started", RunInfo(total_specs_defined=total))
        for result in self._collect_errors + self._excluded:
            self._finish_spec(result)
        self._collect_errors = []
        self._excluded = []

    def _finish_spec(self, result: SpecResult) -> None:
        self._counts[result.status] += 1
        self._emit("spec_finished", result)

    def _enter_suites(self, chain: List[SuiteInfo]) -> None:
        shared = 0
        for opened, wanted in zip(self._open_suites, chain):
            if opened.node_id != wanted.node_id:
                break
            shared += 1
        while len(self._open_suites) > shared:
            self._emit("suite_finished", self._open_suites.pop())
        for suite in chain[shared:]:
            self._open_suites.append(suite)
            self._emit("suite_started", suite)

    # ---------- pytest hooks ----------
    def pytest_collectreport(self, report: pytest.CollectReport) -> None:
        if report.failed:
            self._collect_errors.append(SpecResult(
                description=f"Error collecting {report.nodeid}",
                status=SpecStatus.FAILED,
                full_name=report.nodeid,
                failed_expectations=(expectation_from(report),),
                node_id=report.nodeid,
            ))

    def pytest_deselected(self, items: Sequence[pytest.Item]) -> None:
        for item in items:
            spec = describe_spec(item)
            self._excluded.append(SpecResult(spec.description, SpecStatus.EXCLUDED, spec.full_name,
                                             pending_reason="deselected", node_id=spec.node_id))

    def pytest_collection_finish(self, session: pytest.Session) -> None:
        # deselected specs are still defined for the run
        self._start_run(len(session.items) + len(self._excluded))

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_protocol(self, item: pytest.Item, nextitem: Optional[pytest.Item]) -> None:
        self._enter_suites(suite_chain(item))
        spec = describe_spec(item)
        self._specs[item.nodeid] = spec
        self._reports[item.nodeid] = []
        self._emit("spec_started", spec)

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        reports = self._reports.setdefault(report.nodeid, [])
        reports.append(report)
        if report.when != "teardown":
            return
        del self._reports[report.nodeid]
        spec = self._specs.pop(report.nodeid, None) or SpecInfo(description=report.nodeid, full_name=report.nodeid, node_id=report.nodeid)
        failed = [r for r in reports if r.failed]
        skipped = [r for r in reports if r.skipped]
        if failed:
            result = SpecResult(spec.description, SpecStatus.FAILED, spec.full_name,
                                tuple(expectation_from(r) for r in failed), node_id=spec.node_id)
        elif skipped:
            result = SpecResult(spec.description, SpecStatus.PENDING, spec.full_name,
                                pending_reason=pending_reason(skipped[0]), node_id=spec.node_id)
        else:
            result = SpecResult(spec.description, SpecStatus.PASSED, spec.full_name, node_id=spec.node_id)
        self._finish_spec(result)

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        if not self._started:
            self._start_run(len(getattr(session, "items", [])))
        self._enter_suites([])
        exit_code = int(exitstatus)
        self.result = RunResult(
            overall_status=overall_status(exit_code),
            exit_code=exit_code,
            passed=self._counts[SpecStatus.PASSED],
            failed=self._counts[SpecStatus.FAILED],
            pending=self._counts[SpecStatus.PENDING],
            excluded=self._counts[SpecStatus.EXCLUDED],
        )
        self._emit("run_finished", self.result)
