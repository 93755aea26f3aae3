"""Typer CLI entrypoints."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import rich
import typer
from loguru import logger
from rich.table import Table

from coinbind.codec import JsonCodec, unmapped_fields
from coinbind.config.settings import load_settings
from coinbind.errors import DecodeError
from coinbind.logging_utils import configure_logging
from coinbind.model.responses import RESPONSE_TYPES, response_type
from coinbind.samples import check_samples

app = typer.Typer(name="coinbind", help="bitcoind JSON-RPC response model tools", add_completion=False)


@app.command()
def check(
    paths: Annotated[list[Path] | None, typer.Argument(help="Sample files or directories.")] = None,
    semantic: Annotated[
        bool,
        typer.Option("--semantic", help="Accept semantically equal output instead of identical bytes."),
    ] = False,
) -> None:
    """Round-trip every sample reply and report unmapped fields."""

    configure_logging()
    settings = load_settings()
    codec = JsonCodec.from_settings(settings)
    targets = paths or [settings.resolve_samples_dir()]
    exact = settings.exact_round_trip and not semantic
    logger.info("check.start targets={} exact={}", ",".join(str(target) for target in targets), exact)

    reports = check_samples(targets, codec, exact=exact)

    table = Table(title="Sample round-trip")
    table.add_column("Sample")
    table.add_column("Type")
    table.add_column("Round-trip")
    table.add_column("Unmapped fields")
    for report in reports:
        if report.error:
            status = f"[red]error[/red] {report.error}"
        else:
            status = "[green]ok[/green]" if report.round_trip_ok else "[red]mismatch[/red]"
        table.add_row(report.path.name, report.type_name, status, ", ".join(sorted(report.unmapped)) or "-")
    rich.print(table)

    if not reports:
        rich.print("[yellow]No samples found.[/yellow]")
    failed = [report for report in reports if not report.ok]
    for report in failed:
        rich.print(f"[red]FAIL[/red] {report.path.name} ({report.type_name})")
        for path in sorted(report.unmapped):
            rich.print(f"  unmapped: {path}")
    rich.print(f"{len(reports)} samples, {len(failed)} failed")
    if failed:
        raise typer.Exit(code=1)


@app.command()
def show(
    type_name: Annotated[str, typer.Argument(help="Response class name, e.g. GetInfoResponse.")],
    sample: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)],
) -> None:
    """Decode one reply and print the typed model."""

    configure_logging()
    try:
        model_type = response_type(type_name)
    except KeyError:
        rich.print(f"[red]Unknown response type:[/red] {type_name}")
        rich.print("Known types: " + ", ".join(sorted(RESPONSE_TYPES)))
        raise typer.Exit(code=2) from None

    codec = JsonCodec.from_settings()
    try:
        model = codec.decode(sample.read_bytes(), model_type)
    except DecodeError as exc:
        rich.print(f"[red]Decode failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    rich.print(model)
    unmapped = unmapped_fields(model)
    if unmapped:
        rich.print("[yellow]Unmapped fields:[/yellow]")
        for path, value in sorted(unmapped.items()):
            rich.print(f"  {path} = {value!r}")


def main() -> None:
    app()
