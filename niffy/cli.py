"""CLI entry point for niffy."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from niffy.models.config import NiffyConfig
from niffy.models.result import RunResult
from niffy.orchestrator import Niffy
from niffy.reporter.json_report import generate_json_report

console = Console()

RESULT_STYLES = {"pass": "green", "fail": "red", "error": "red"}


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


async def _run(config: NiffyConfig, paths: list[str]) -> RunResult:
    async with Niffy(config=config) as niffy:
        return await niffy.run_paths(paths)


def _print_results(run_result: RunResult) -> None:
    table = Table(title=f"{run_result.base_host} vs {run_result.test_host}")
    table.add_column("Path", style="bold")
    table.add_column("Result")
    table.add_column("Different", justify="right")
    table.add_column("Diff image")
    for c in run_result.comparisons:
        style = RESULT_STYLES.get(c.result, "white")
        pct = f"{c.percentage:.4f}%" if c.percentage is not None else "-"
        table.add_row(c.path, f"[{style}]{c.result}[/{style}]", pct, c.diff_filepath or c.message)
    console.print(table)
    console.print(
        f"[green]{run_result.passed} passed[/green], "
        f"[red]{run_result.failed} failed[/red], "
        f"[red]{run_result.errors} errors[/red] "
        f"(threshold {run_result.threshold}%, {run_result.duration_seconds}s)"
    )


def _exit_code(run_result: RunResult) -> int:
    return 0 if run_result.failed == 0 and run_result.errors == 0 else 1


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Visual regression testing between a base host and a test host."""
    setup_logging(verbose)


@cli.command()
@click.argument("base")
@click.argument("test")
@click.argument("paths", nargs=-1, required=True)
@click.option("--threshold", type=float, default=None, help="Allowed difference in percent")
@click.option("--width", type=int, default=None, help="Viewport width")
@click.option("--height", type=int, default=None, help="Viewport height")
@click.option("--show", is_flag=True, help="Show the browser window")
@click.option("--imgfiledir", default=None, help="Directory for screenshots and diffs")
def compare(
    base: str,
    test: str,
    paths: tuple[str, ...],
    threshold: float | None,
    width: int | None,
    height: int | None,
    show: bool,
    imgfiledir: str | None,
) -> None:
    """Compare PATHS rendered on BASE and TEST hosts."""
    try:
        cfg = NiffyConfig.from_options(
            base, test, threshold=threshold, width=width, height=height,
            show=show, imgfiledir=imgfiledir,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid options:[/red] {e}")
        sys.exit(2)

    run_result = asyncio.run(_run(cfg, list(paths)))
    _print_results(run_result)
    sys.exit(_exit_code(run_result))


@cli.command()
@click.option("--config", "-c", default="niffy-config.json", help="Config file path")
def run(config: str) -> None:
    """Compare every path listed in the config file."""
    try:
        cfg = NiffyConfig.load(config)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config}[/red]")
        console.print("Run 'niffy init' to create a default config.")
        sys.exit(1)

    if not cfg.paths:
        console.print("[yellow]No paths configured[/yellow]")
        return

    run_result = asyncio.run(_run(cfg, cfg.paths))
    _print_results(run_result)
    report_path = generate_json_report(run_result, Path(cfg.report_output_dir))
    console.print(f"  JSON report: [blue]{report_path}[/blue]")
    sys.exit(_exit_code(run_result))


@cli.command()
@click.option("--base", "-b", prompt="Base host", help="Reference host, e.g. https://example.com")
@click.option("--test", "-t", prompt="Test host", help="Host under test, e.g. http://localhost:3000")
@click.option("--path", "-p", "paths", multiple=True, help="Logical path to compare (repeatable)")
def init(base: str, test: str, paths: tuple[str, ...]) -> None:
    """Create a default configuration file."""
    config_path = Path("niffy-config.json")
    if config_path.exists():
        if not click.confirm("niffy-config.json already exists. Overwrite?"):
            return

    cfg = NiffyConfig(base_host=base, test_host=test, paths=list(paths) or ["/"])
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nAdd the paths to compare and run:")
    console.print("  [blue]niffy run[/blue]")


if __name__ == "__main__":
    cli()
