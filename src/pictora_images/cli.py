"""
CLI for the Pictora image layer.

Commands:
- fetch: Load images through the cache and report the outcome
- info: Show configuration
"""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from .config import settings
from .logging import get_logger, setup_logging

app = typer.Typer(
    name="pictora-images",
    help="Network image cache for the Pictora AI art client",
)
logger = get_logger("cli")
console = Console()

STATUS_STYLES = {
    "loaded": "green",
    "failed": "red",
    "loading": "yellow",
    "idle": "dim",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Pictora Images - cached network image loading."""
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, json_output=settings.log_json)
    logger.debug("CLI initialized with log level: {}", log_level)


@app.command()
def fetch(
    urls: list[str] = typer.Argument(..., help="Image URLs to load"),
    repeat: int = typer.Option(1, "--repeat", "-r", min=1, help="Number of load rounds"),
    max_dimension: int | None = typer.Option(
        settings.image_max_dimension,
        "--max-dimension",
        "-m",
        help="Downscale images larger than this many pixels",
    ),
    coalesce: bool = typer.Option(
        settings.coalesce_fetches,
        "--coalesce/--no-coalesce",
        help="Share one network fetch per URL across concurrent loads",
    ),
):
    """Load images through a shared cache and print the results."""
    logger.info("Fetching {} URLs ({} rounds)", len(urls), repeat)

    async def run_fetch():
        from .images import (
            CacheJanitor,
            FetchCoalescer,
            ImageCache,
            ImageFetchCoordinator,
            PillowDecoder,
        )
        from .transport import create_transport

        cache = ImageCache.from_settings(settings)
        decoder = PillowDecoder(max_dimension=max_dimension)
        coalescer = FetchCoalescer() if coalesce else None
        janitor = CacheJanitor(
            cache,
            max_age=settings.cache_max_age_seconds,
            interval=settings.cache_sweep_interval_seconds,
        )

        async with janitor, create_transport(timeout=settings.fetch_timeout) as transport:
            for round_number in range(1, repeat + 1):
                coordinators = [
                    ImageFetchCoordinator(cache, transport, decoder=decoder, coalescer=coalescer)
                    for _ in urls
                ]
                states = await asyncio.gather(
                    *(c.load(url) for c, url in zip(coordinators, urls))
                )

                table = Table(title=f"Round {round_number}")
                table.add_column("URL", style="cyan")
                table.add_column("Status")
                table.add_column("Size")
                table.add_column("Detail")
                for url, state in zip(urls, states):
                    style = STATUS_STYLES.get(state.status.value, "white")
                    size = "-"
                    detail = ""
                    if state.image is not None:
                        size = f"{state.image.width}x{state.image.height}"
                        detail = state.image.media_type or ""
                    if state.error is not None:
                        detail = str(state.error)
                    table.add_row(url, f"[{style}]{state.status.value}[/]", size, detail)
                console.print(table)

        return cache.stats, states

    stats, states = asyncio.run(run_fetch())

    console.print(
        f"Cached images: {stats.size} | hits: {stats.hits} | misses: {stats.misses} "
        f"| evictions: {stats.evictions} | hit rate: {stats.hit_rate:.0%}"
    )
    failures = sum(1 for state in states if state.error is not None)
    if failures:
        logger.warning("{} of {} images failed to load", failures, len(states))
        raise typer.Exit(1)


@app.command()
def info():
    """Show configuration."""
    logger.debug("Displaying configuration")
    console.print("[bold blue]Pictora Images Configuration[/]")

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Max Cached Images", str(settings.cache_max_entries))
    table.add_row("Max Cache Cost (bytes)", str(settings.cache_max_cost_bytes))
    table.add_row("Max Idle Age (s)", str(settings.cache_max_age_seconds))
    table.add_row("Sweep Interval (s)", str(settings.cache_sweep_interval_seconds))
    table.add_row("Fetch Timeout (s)", str(settings.fetch_timeout))
    table.add_row("Max Image Dimension", str(settings.image_max_dimension or "original"))
    table.add_row("Coalesce Fetches", str(settings.coalesce_fetches))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


if __name__ == "__main__":
    app()
