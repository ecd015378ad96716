#!/usr/bin/env python3
"""
Purchase order (Ordem de Compra) extraction: CLI entry point.

Input is document text that has already been decoded (PDF text layer, OCR,
HTML flattening or a plain text file).

Usage examples:
  python main.py extract oc_4521.txt                   # JSON to stdout
  python main.py extract oc_4521.txt --format csv      # one row per item
  python main.py extract oc_4521.txt -f xml -o out/    # writes out/OC_4521.xml
  python main.py extract oc_4521.txt -f summary        # supplier confirmation text

  python main.py validate oc_4521.txt                  # confidence, errors, warnings
"""
import logging
import os
import sys
from pathlib import Path

import click

from config import Config
from exporters import EXPORT_FORMATS, export_filename, render
from pipeline.exceptions import ExtractionError
from pipeline.processor import ExtractionEngine

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )


def _read_text(path: Path, encoding: str) -> str:
    """Read *path*; legacy exports that are not valid *encoding* are read as ISO-8859-1."""
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError:
        logger.warning("%s is not valid %s, reading as ISO-8859-1", path.name, encoding)
        return path.read_text(encoding="iso-8859-1")


def _extract_or_exit(engine: ExtractionEngine, path: Path, encoding: str):
    try:
        return engine.process(_read_text(path, encoding), path.name)
    except ExtractionError as exc:
        click.echo(f"Erro ao processar: {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Purchase order extraction: extract, validate and export OCs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _setup_logging(verbose)


# --------------------------------------------------------------------
# extract command
# --------------------------------------------------------------------

@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format", "-f", "fmt", type=click.Choice(EXPORT_FORMATS), default="json",
    show_default=True, help="Export format",
)
@click.option("--output", "-o", default=None, type=click.Path(), help="Output file or directory")
@click.option("--encoding", default="utf-8", show_default=True, help="Text file encoding")
@click.option("--no-pretty", is_flag=True, help="Output compact (non-indented) JSON")
@click.pass_context
def extract(
    ctx: click.Context,
    source: str,
    fmt: str,
    output: str | None,
    encoding: str,
    no_pretty: bool,
) -> None:
    """Extract a purchase order from a text file and export it."""
    config = Config()
    if no_pretty:
        config.pretty_json = False

    engine = ExtractionEngine(config)
    order, validation = _extract_or_exit(engine, Path(source), encoding)
    content = render(order, fmt, pretty=config.pretty_json)

    if output is None:
        click.echo(content)
        return

    out_path = Path(output)
    # A trailing separator names a directory, created if missing
    if out_path.is_dir() or output.endswith((os.sep, "/")):
        out_path = out_path / export_filename(order, fmt)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")

    click.echo()
    click.echo(f"  OC:          {order.order_number or '(unknown)'}")
    click.echo(f"  Date:        {order.date or '(unknown)'}")
    click.echo(f"  Supplier:    {order.supplier.name or '(unknown)'}")
    click.echo(f"  Items:       {order.totals.item_count}")
    click.echo(f"  Total:       {order.totals.total_value_formatted}")
    click.echo(f"  Confidence:  {order.metadata.confidence:.0%} ({order.confidence_level})")
    if not validation.is_valid:
        click.echo(f"  ✗ {len(validation.errors)} validation error(s), run 'validate' for details")
    click.echo()
    click.echo(f"  Result saved to: {out_path}")


# --------------------------------------------------------------------
# validate command
# --------------------------------------------------------------------

@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--encoding", default="utf-8", show_default=True, help="Text file encoding")
@click.pass_context
def validate(ctx: click.Context, source: str, encoding: str) -> None:
    """Extract a purchase order and report its validation issues."""
    engine = ExtractionEngine(Config())
    order, validation = _extract_or_exit(engine, Path(source), encoding)

    click.echo()
    click.echo(f"  OC:          {order.order_number or '(unknown)'}")
    click.echo(f"  Confidence:  {order.metadata.confidence:.0%} ({order.confidence_level})")
    for name, satisfied in engine.scorer.explain(order):
        click.echo(f"    {'✓' if satisfied else '✗'} {name}")
    click.echo()

    if validation.issues:
        click.echo(f"  Issues ({len(validation.issues)}):")
        for issue in validation.issues:
            icon = "✗" if issue.kind == "error" else "⚠"
            click.echo(f"    {icon} [{issue.kind.upper()}] {issue.message}")
    else:
        click.echo("  ✓ No issues found")
    click.echo()

    if not validation.is_valid:
        sys.exit(1)


if __name__ == "__main__":
    cli()
