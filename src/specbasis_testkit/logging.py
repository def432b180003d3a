import logging
from rich.console import Console
from rich.logging import RichHandler
def setup_logging(level: str = "INFO") -> logging.Logger:
    # reporter output owns stdout, diagnostics go to stderr
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
    logging.basicConfig(level="WARNING", format="%(message)s", datefmt="[%X]", handlers=[handler])
    log = logging.getLogger("specbasis_testkit")
    log.setLevel(level)
    return log
