"""
bloomkit CLI - Main Entry Point.

Provides the `bloomkit` command for sizing filters and inspecting
theoretical error rates.
"""

from pathlib import Path

import numpy as np
import typer
from rich.console import Console
from rich.table import Table

from bloomkit.core.validation import ValidationError
from bloomkit.filters import analysis
from bloomkit.observability.logging import configure_from_settings

app = typer.Typer(
    name="bloomkit",
    help="bloomkit - Fixed-capacity Bloom filters with double hashing",
    no_args_is_help=True,
)

console = Console()

DEFAULT_RATIOS = [3.0, 6.0, 9.0, 12.0]


@app.callback()
def setup_logging():
    """Apply log_level and log_json from settings before any command runs."""
    configure_from_settings()


# =============================================================================
# Sizing Commands
# =============================================================================


@app.command()
def sizing(
    capacity_bits: int = typer.Option(..., "--capacity-bits", "-m", min=1, help="Bit-vector length"),
    expected: int = typer.Option(..., "--expected", "-n", min=0, help="Expected element count"),
    hash_count: int | None = typer.Option(None, "--hash-count", "-k", min=1, help="Explicit hash count"),
):
    """Show the derived hash count and expected false-positive rate."""
    try:
        k = hash_count or analysis.optimal_hash_count(capacity_bits, expected)
        rate = analysis.false_positive_rate(capacity_bits, k, expected)
    except ValidationError as e:
        console.print(f"[red]Invalid parameters:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Bloom Filter Sizing")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value")
    table.add_row("capacity_bits", str(capacity_bits))
    table.add_row("expected_elements", str(expected))
    table.add_row("bits_per_element", f"{capacity_bits / expected:.2f}" if expected else "-")
    table.add_row("hash_count", f"{k}" + (" (explicit)" if hash_count else ""))
    table.add_row("false_positive_rate", f"{rate:.6g}")
    table.add_row("memory_bytes", str((capacity_bits + 7) // 8))
    console.print(table)


@app.command("error-rate")
def error_rate(
    capacity_bits: int = typer.Option(10_000, "--capacity-bits", "-m", min=1, help="Bit-vector length"),
    max_inserted: int = typer.Option(80_000, "--max-inserted", "-N", min=1, help="Largest insertion count"),
    step: int = typer.Option(10_000, "--step", "-s", min=1, help="Insertion count step"),
    ratios: list[float] = typer.Option(
        DEFAULT_RATIOS, "--ratio", "-r", help="Design bits per element (repeatable)",
    ),
    csv: bool = typer.Option(False, "--csv", help="Print comma-separated values instead of a table"),
):
    """Tabulate the theoretical error rate as insertions exceed the design load."""
    if any(r <= 0 for r in ratios):
        console.print("[red]Ratios must be positive[/red]")
        raise typer.Exit(1)

    inserted = np.arange(step, max_inserted + 1, step)
    if inserted.size == 0:
        inserted = np.array([max_inserted])
    curve = analysis.error_rate_curve(capacity_bits, ratios, inserted)

    if csv:
        typer.echo(",".join(["inserted"] + [f"bpe_{r:g}" for r in ratios]))
        for n, row in zip(inserted, curve):
            typer.echo(",".join([str(int(n))] + [f"{v:.6g}" for v in row]))
        return

    table = Table(title=f"Theoretical Error Rate (m={capacity_bits})")
    table.add_column("Inserted", style="cyan", justify="right")
    for r in ratios:
        table.add_column(f"{r:g} bits/elem", justify="right")
    for n, row in zip(inserted, curve):
        table.add_row(str(int(n)), *[f"{v:.4g}" for v in row])
    console.print(table)


# =============================================================================
# Info Commands
# =============================================================================


@app.command()
def version():
    """Show version information."""
    from bloomkit import __version__

    console.print(f"bloomkit v{__version__}")


@app.command()
def config(
    show: bool = typer.Option(False, "--show", "-s", help="Show current configuration"),
    init: bool = typer.Option(False, "--init", "-i", help="Initialize config file"),
    path: Path | None = typer.Option(None, "--path", "-p", help="Config file path"),
):
    """Manage configuration."""
    from bloomkit.core.config import get_settings

    if init:
        config_path = path or Path.home() / ".bloomkit" / "config.yaml"
        config_path.parent.mkdir(parents=True, exist_ok=True)

        default_config = """# bloomkit configuration
environment: development

# Hashing
hash_engine: murmur3
hash_seed: 0

# Defaults for BloomFilter.from_settings
default_capacity_bits: 1048576
default_expected_elements: 100000

# Typed values
byte_order: little

# Logging
log_level: INFO
log_json: false
"""
        config_path.write_text(default_config)
        console.print(f"[green]Created config file:[/green] {config_path}")
        return

    if show:
        settings = get_settings()
        table = Table(title="Current Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for name in type(settings).model_fields:
            table.add_row(name, str(getattr(settings, name)))
        console.print(table)
        return

    console.print("Use --show or --init")


# =============================================================================
# Entry Point
# =============================================================================


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
