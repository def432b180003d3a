from typing import List, Optional, TextIO
from ..runners.runner import RunInfo, RunResult, SpecInfo, SpecResult, SpecStatus, SuiteInfo

ANSI_COLOR = {
    "green": "\x1b[32m",
    "red": "\x1b[31m",
    "cyan": "\x1b[36m",
    "yellow": "\x1b[33m",
    "none": "\x1b[0m",
}

def colorize(text: str, color: str) -> str:
    return f"{ANSI_COLOR[color]}{text}{ANSI_COLOR['none']}"

def indent(text: Optional[str], spaces: int) -> str:
    """Prefix every line of ``text``, blank ones included, with ``spaces`` spaces."""
    pad = " " * spaces
    return "\n".join(pad + line for line in (text or "").split("\n"))

class ColorReporter:
    """Colorized progress lines plus a digest of every failed spec at the end of the run."""
    def __init__(self, stream: Optional[TextIO] = None, indent_width: int = 4, color: bool = True):
        self.stream = stream
        self.indent_width = indent_width
        self.color = color
        self.failed_specs: List[SpecResult] = []

    def _print(self, text: str, color: Optional[str] = None) -> None:
        if color and self.color:
            text = colorize(text, color)
        print(text, file=self.stream)

    def run_started(self, info: RunInfo) -> None:
        self.failed_specs = []
        self._print(f"Running {info.total_specs_defined} specs", "cyan")

    def suite_started(self, suite: SuiteInfo) -> None:
        self._print(f"Running suite {suite.full_name}", "cyan")

    def spec_started(self, spec: SpecInfo) -> None:
        pass

    def spec_finished(self, result: SpecResult) -> None:
        if result.status == SpecStatus.PASSED:
            self._print(f"  Pass: {result.description}", "green")
        elif result.status == SpecStatus.FAILED:
            self._print(f"  Fail: {result.description}", "red")
            self.failed_specs.append(result)
        else:
            reason = f" ({result.pending_reason})" if result.pending_reason else ""
            self._print(f"  Pending: {result.description}{reason}", "yellow")

    def suite_finished(self, suite: SuiteInfo) -> None:
        pass

    def run_finished(self, result: Optional[RunResult] = None) -> None:
        if not self.failed_specs:
            return
        self._print("\n\nFailures:", "cyan")
        for spec in self.failed_specs:
            self._print(spec.full_name, "red")
            for e in spec.failed_expectations:
                self._print("  Message:")
                self._print(f"    {e.message or ''}", "red")
                self._print("  Stack:")
                self._print(indent(e.stack, self.indent_width))
