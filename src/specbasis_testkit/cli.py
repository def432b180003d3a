from typing import List, Optional
import typer
from .config import load_config, dump_config, AppConfig
from .runners.runner import SpecRunner

DEFAULT_CONFIG = "spec/support/specbasis.yaml"

app = typer.Typer(add_completion=False, help="SpecBasis Testkit - a guided tour of pytest with a colorized spec reporter")

@app.command()
def run(
    files: Optional[List[str]] = typer.Argument(None, help="Spec files or directories; defaults to the configured spec_dir"),
    config: str = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Path to config YAML"),
    filter: Optional[str] = typer.Option(None, "--filter", "-k", help="Only run specs matching this pytest -k expression"),
    fail_fast: bool = typer.Option(False, "--fail-fast", "-x", help="Stop after the first failing spec"),
    no_color: bool = typer.Option(False, "--no-color", help="Print reporter output without ANSI colors"),
    list_specs: bool = typer.Option(False, "--list", help="List specs without running"),
):
    cfg: AppConfig = load_config(config)
    if filter:
        cfg.spec.filter = filter
    if fail_fast:
        cfg.spec.stop_on_failure = True
    if no_color:
        cfg.reporter.color = False
    runner = SpecRunner(cfg)

    if list_specs:
        for spec in runner.discover(files):
            typer.echo(spec.full_name)
        raise typer.Exit(code=0)

    result = runner.run(files)
    typer.echo(f"Done. {result.passed} passed, {result.failed} failed, {result.pending} pending, {result.excluded} excluded.")
    raise typer.Exit(code=result.exit_code)

@app.command("show-config")
def show_config(config: str = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Path to config YAML")):
    typer.echo(dump_config(load_config(config)), nl=False)

if __name__ == "__main__":
    app()
