# chlorisafe/cli.py

from __future__ import annotations
import json
import typer
from pydantic import TypeAdapter, ValidationError
from typing import List

from chlorisafe.core.logger import setup_logging
from chlorisafe.schemas.disinfection import BaffleFactorPreset, ProcessState
from chlorisafe.services.disinfection.engine import DisinfectionEngine
from chlorisafe.services.disinfection.presets import (
    baffle_factor_presets,
    default_process_state,
    prepare_process_state,
)

app = typer.Typer(help="ChloriSafe Ct - chlorine disinfection Ct / LRV calculator")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to stderr")):
    if verbose:
        setup_logging()


@app.command("calculate")
def calculate(
    json_path: str,
    pretty: bool = True,
    results_only: bool = typer.Option(
        False, "--results-only", help="Print only the calculation result record"
    ),
):
    """Evaluate the process state stored in JSON_PATH."""
    try:
        with open(json_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        state = prepare_process_state(ProcessState.model_validate(raw))
        report = DisinfectionEngine().run(state)
    except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    # same record names as the HTTP API
    out = report.results if results_only else report
    typer.echo(out.model_dump_json(indent=2 if pretty else None, by_alias=True))


@app.command("defaults")
def defaults():
    """Print the default process state as JSON."""
    typer.echo(default_process_state().model_dump_json(indent=2))


@app.command("baffle-factors")
def baffle_factors():
    """List the T10/T presets."""
    presets = TypeAdapter(List[BaffleFactorPreset]).dump_python(baffle_factor_presets())
    typer.echo(json.dumps(presets, indent=2))


if __name__ == "__main__":
    app()
