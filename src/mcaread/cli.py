"""Command-line interface for mcaread."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .anvil import Chunk, Region
from .config import ReaderConfig
from .errors import AnvilError

app = typer.Typer(
    name="mcaread",
    help="Inspect blocks, biomes and heightmaps in Minecraft region files.",
    no_args_is_help=True,
)
console = Console()

EXIT_ERROR = 1
EXIT_ABSENT = 2


def version_callback(value: bool):
    if value:
        console.print(f"mcaread version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-d", help="Show debug logging."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Reader config JSON"),
):
    """mcaread: Minecraft region file inspector."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    try:
        ctx.obj = ReaderConfig.load(config) if config else ReaderConfig()
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] Cannot load config {config}: {e}")
        raise typer.Exit(EXIT_ERROR)


def _load_chunk(ctx: typer.Context, region_file: Path, chunk_x: int, chunk_z: int) -> Chunk:
    """Load a chunk or exit with a message."""
    try:
        region = Region.from_file(region_file)
        chunk = region.get_chunk(chunk_x, chunk_z, ctx.obj)
    except (OSError, AnvilError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)
    if chunk is None:
        console.print(f"[yellow]Chunk ({chunk_x}, {chunk_z}) is not present[/yellow]")
        raise typer.Exit(EXIT_ABSENT)
    return chunk


@app.command()
def info(
    region_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Region file"),
):
    """List the chunks stored in a region file.

    Example:
        mcaread info world/region/r.0.0.mca
    """
    try:
        region = Region.from_file(region_file)
        table = Table(title=f"Chunks in {region_file.name}")
        table.add_column("Chunk", style="cyan")
        table.add_column("Sector", justify="right")
        table.add_column("Sectors", justify="right")
        table.add_column("Modified")

        count = 0
        for x, z in region.present_chunks():
            offset, sectors = region.chunk_location(x, z)
            timestamp = region.chunk_timestamp(x, z)
            modified = datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat() if timestamp else "-"
            table.add_row(f"({x}, {z})", str(offset), str(sectors), modified)
            count += 1
    except AnvilError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    console.print(table)
    console.print(f"[bold]{count}[/bold] of 1024 chunks present")


@app.command()
def status(
    ctx: typer.Context,
    region_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Region file"),
    chunk_x: int = typer.Argument(..., help="Chunk X within the region"),
    chunk_z: int = typer.Argument(..., help="Chunk Z within the region"),
):
    """Show the generation status of a chunk."""
    chunk = _load_chunk(ctx, region_file, chunk_x, chunk_z)
    try:
        console.print(chunk.get_status())
    except AnvilError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)


@app.command()
def block(
    ctx: typer.Context,
    region_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Region file"),
    chunk_x: int = typer.Argument(..., help="Chunk X within the region"),
    chunk_z: int = typer.Argument(..., help="Chunk Z within the region"),
    x: int = typer.Argument(..., help="Block X (0-15)"),
    y: int = typer.Argument(..., help="World Y (-64 to 319)"),
    z: int = typer.Argument(..., help="Block Z (0-15)"),
    biome: bool = typer.Option(False, "--biome/--no-biome", help="Also resolve the biome"),
):
    """Show the block at a position in a chunk.

    Example:
        mcaread block r.0.0.mca 2 3 -- 5 -12 9
    """
    chunk = _load_chunk(ctx, region_file, chunk_x, chunk_z)
    try:
        found = chunk.get_block(x, y, z, with_biome=biome)
    except AnvilError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    console.print(f"[bold]{found.name}[/bold]")
    for key, value in found.properties:
        console.print(f"  {key} = {value}")
    if found.biome:
        console.print(f"  [cyan]biome:[/cyan] {found.biome}")


@app.command()
def biome(
    ctx: typer.Context,
    region_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Region file"),
    chunk_x: int = typer.Argument(..., help="Chunk X within the region"),
    chunk_z: int = typer.Argument(..., help="Chunk Z within the region"),
    y: int = typer.Argument(..., help="World Y (-64 to 319)"),
    x: int = typer.Option(0, "--x", help="Block X (0-15)"),
    z: int = typer.Option(0, "--z", help="Block Z (0-15)"),
):
    """Show the biome at a height in a chunk."""
    chunk = _load_chunk(ctx, region_file, chunk_x, chunk_z)
    try:
        console.print(chunk.get_biome(y, x, z))
    except AnvilError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)


@app.command()
def heightmap(
    ctx: typer.Context,
    region_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Region file"),
    chunk_x: int = typer.Argument(..., help="Chunk X within the region"),
    chunk_z: int = typer.Argument(..., help="Chunk Z within the region"),
    ignore_water: bool = typer.Option(False, "--ignore-water", help="Use the ocean floor heightmap"),
):
    """Print a chunk's surface heights as a 16x16 grid (rows are Z)."""
    chunk = _load_chunk(ctx, region_file, chunk_x, chunk_z)
    try:
        heights = chunk.get_heightmap(ignore_water)
    except AnvilError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    if heights is None:
        console.print(f"[yellow]Heightmap unavailable (status {chunk.get_status()})[/yellow]")
        raise typer.Exit(EXIT_ABSENT)
    for row in range(0, len(heights), 16):
        console.print(" ".join(f"{h:4d}" for h in heights[row:row + 16]))


if __name__ == "__main__":
    app()
