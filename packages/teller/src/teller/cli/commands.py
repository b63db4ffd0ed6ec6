"""
CLI Commands for the Teller Register

Command-line front end for replaying session scripts and trying one-off
withdrawals against a register.
"""

from pathlib import Path
from typing import Dict, Optional

import typer
from loguru import logger

from teller_types.utils.export_schema import export_all_schemas

from ..config import load_config
from ..errors import ConfigurationError, InvalidArgument
from ..logging_utils import setup_logging
from ..pairs import parse_pair_string
from ..register import Register, describe_chain
from ..session import load_script, run_script
from ..writer import write_report

app = typer.Typer(name="teller", help="Note register with denomination substitution")


def _configure(config_file: Optional[Path], verbose: bool):
    try:
        settings = load_config(config_file)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(2)
    setup_logging("DEBUG" if verbose else settings.log_level, settings.json_logs)
    return settings


def _format_counts(counts: Dict[int, int]) -> str:
    return "  ".join(f"{d}: {c}" for d, c in sorted(counts.items()))


@app.command("run")
def run(
    script_file: Path = typer.Argument(
        ..., exists=True, readable=True, help="Session script (YAML or JSON)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write a JSON report to this path"
    ),
    fail_fast: bool = typer.Option(
        False, "--fail-fast", help="Stop on first failed step instead of continuing"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 if any step failed"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Replay a session script and print each step and the final counts.

    The register comes from the script's setup block, or from the
    configuration when the script has none.
    """
    settings = _configure(config_file, verbose)

    try:
        script = load_script(script_file)
        register = Register.from_config(script.setup or settings.register_config)
        result = run_script(script, fail_fast=fail_fast, register=register)
    except ConfigurationError as e:
        typer.echo(f"Session failed: {e}", err=True)
        raise typer.Exit(2)

    typer.echo(f"Session: {result.name}")
    for step in result.steps:
        status = "ok" if step.success else f"FAILED ({step.message})"
        extra = f" -> {step.quantity}" if step.quantity is not None else ""
        typer.echo(f"  [{step.index}] {step.op}{extra}: {status}")

    if result.aborted:
        typer.echo("Stopped early (--fail-fast)")

    typer.echo(f"Final counts: {_format_counts(result.final.counts)}")
    typer.echo(f"Final total: {result.final.total_value}")

    if output is not None:
        digest = write_report(result, output)
        typer.echo(f"Report: {output} (sha256 {digest[:12]})")

    if strict and result.failures:
        raise typer.Exit(1)


@app.command("dispense")
def dispense(
    deposit: str = typer.Option(
        "", "--deposit", "-d", help='Notes to load first, e.g. "1:3,5:0,10:1,20:2"'
    ),
    request: str = typer.Option(
        ..., "--request", "-r", help='Notes to withdraw, e.g. "1:5,10:1"'
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Load a register, attempt one withdrawal and print the result.
    """
    settings = _configure(config_file, verbose)
    register = Register.from_config(settings.register_config)

    try:
        register.deposit(parse_pair_string(deposit))
        requested = parse_pair_string(request)
    except InvalidArgument as e:
        typer.echo(f"Invalid argument: {e.message}", err=True)
        raise typer.Exit(2)

    outcome = register.attempt_withdrawal(requested)
    if outcome.success:
        typer.echo(f"Dispensed {outcome.requested_value} ({outcome.breaks} break(s))")
    else:
        typer.echo(f"Withdrawal failed: {outcome.reason.value}")
    typer.echo(f"Counts: {_format_counts(register.counts())}")

    if not outcome.success:
        raise typer.Exit(1)


@app.command("denominations")
def denominations(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file"
    ),
):
    """
    Show the configured denominations and how each note breaks down.
    """
    settings = _configure(config_file, False)
    chain = settings.register_config.denominations
    typer.echo("Denominations: " + ", ".join(str(d) for d in chain))
    for line in describe_chain(chain):
        typer.echo(f"  {line}")


@app.command("schemas")
def schemas(
    output_dir: Path = typer.Option(
        Path("schemas"), "--output-dir", "-o", help="Directory for JSON schema files"
    ),
):
    """
    Export JSON schemas for scripts, configs and reports.
    """
    for path in export_all_schemas(output_dir):
        logger.debug(f"Exported {path}")
        typer.echo(f"  {path}")


if __name__ == "__main__":
    app()
