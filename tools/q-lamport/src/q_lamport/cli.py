"""Command-line interface for the q-lamport signing tool."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .bits import BitIndexError, get_bit
from .config import LamportConfig, generate_default_config, load_config
from .keys import derive_public_key, generate_key_pair
from .signer import sign
from .verify import verify_detailed

console = Console()
err_console = Console(stderr=True)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="q-lamport")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Configuration file (YAML or JSON)")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Optional[str]) -> None:
    """Lamport one-time signature tool.

    Generate single-use key pairs, sign and verify messages.
    """
    ctx.ensure_object(dict)

    try:
        config = load_config(Path(config_path)) if config_path else LamportConfig()
    except ValueError as e:
        err_console.print(f"[bold red]✗[/bold red] Invalid configuration: {e}")
        sys.exit(1)

    _setup_logging("DEBUG" if verbose else config.log_level)

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


@main.command()
@click.pass_context
def keygen(ctx: click.Context) -> None:
    """Generate a key pair and print its hex dumps.

    Nothing is written to disk.
    """
    config: LamportConfig = ctx.obj["config"]
    verbose: bool = ctx.obj["verbose"]

    private_key = generate_key_pair(hash_algorithm=config.hash_function())
    public_key = derive_public_key(private_key)

    click.echo(str(private_key))
    click.echo(str(public_key))

    if verbose:
        table = Table(title="Key Information")
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("Hash Algorithm", config.hash_algorithm)
        table.add_row("Key Pairs", str(len(private_key)))
        table.add_row("Public Key Fingerprint", public_key.fingerprint()[:16])
        err_console.print(table)


@main.command()
@click.option("--message", "-m", default="lamport", show_default=True, help="Message to sign")
@click.option("--tamper", "-t", help="Different message to check the signature against")
@click.pass_context
def demo(ctx: click.Context, message: str, tamper: Optional[str]) -> None:
    """Sign a message with a fresh key and verify the signature."""
    config: LamportConfig = ctx.obj["config"]
    indexing = config.indexing_mode()

    private_key = generate_key_pair(
        hash_algorithm=config.hash_function(),
        single_use=config.single_use,
    )
    public_key = derive_public_key(private_key)
    console.print(
        f"[bold blue]Signing with {config.hash_algorithm} ({indexing.value} indexing)[/bold blue]"
    )

    signature = sign(private_key, message.encode(), indexing=indexing)

    table = Table(title="Verification Results")
    table.add_column("Message", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Details")

    result = verify_detailed(public_key, message.encode(), signature, indexing=indexing)
    table.add_row(message, "✓ PASS" if result.is_valid() else "✗ FAIL", result.details)
    ok = result.is_valid()

    if tamper is not None:
        tampered = verify_detailed(public_key, tamper.encode(), signature, indexing=indexing)
        table.add_row(
            tamper,
            "✓ REJECTED" if not tampered.is_valid() else "✗ ACCEPTED",
            tampered.details,
        )
        ok = ok and not tampered.is_valid()

    console.print(table)

    if ok:
        console.print("[bold green]✓[/bold green] Lamport signature behaves as expected")
        sys.exit(0)
    else:
        console.print("[bold red]✗[/bold red] Unexpected verification result")
        sys.exit(1)


@main.command()
@click.argument("byte")
@click.argument("index", type=int)
def bit(byte: str, index: int) -> None:
    """Print bit INDEX (0 = least significant) of BYTE.

    BYTE accepts decimal, 0x hex or 0b binary notation.
    """
    try:
        value = get_bit(int(byte, 0), index)
    except BitIndexError as e:
        err_console.print(f"[bold red]✗[/bold red] {e}")
        sys.exit(2)
    except ValueError as e:
        err_console.print(f"[bold red]✗[/bold red] Invalid byte {byte!r}: {e}")
        sys.exit(2)

    click.echo("1" if value else "0")


@main.command("config")
@click.option("--format", "-f", "fmt", type=click.Choice(["yaml", "json"]), default="yaml", help="Output format")
def show_config(fmt: str) -> None:
    """Print the default configuration."""
    click.echo(generate_default_config(fmt).rstrip("\n"))


if __name__ == "__main__":
    main()
