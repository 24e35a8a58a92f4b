"""Main CLI entry point for Media Scout."""

import asyncio
import sys

import hydra
from omegaconf import DictConfig
from rich.console import Console
from rich.table import Table

from .config import Settings, setup_logging
from .events import create_sink
from .extractor import ExtractionResult
from .pipeline import MediaPipeline
from .server import run_server
from .utils.formatting import human_readable_size

console = Console()


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entry point."""
    settings = Settings.from_config(cfg)
    setup_logging(settings.logging)

    if cfg.mode == "serve":
        run_server(settings)
        return

    if not cfg.url:
        console.print("[red]No URL given.[/red] Usage: media-scout url=example.com")
        sys.exit(2)

    console.print("[bold blue]Media Scout[/bold blue]")
    console.print()

    result = asyncio.run(run_extraction(str(cfg.url), settings))
    if not result.success:
        console.print(f"[red]Extraction failed ({result.http_status}):[/red] {result.error_message}")
        sys.exit(1)

    show_items(result)


async def run_extraction(url: str, settings: Settings) -> ExtractionResult:
    """Run one extraction with the configured event sink."""
    pipeline = MediaPipeline(settings.extractor, create_sink(settings.events))
    with console.status(f"Extracting media from {url}..."):
        return await pipeline.extract(url)


def show_items(result: ExtractionResult) -> None:
    """Display extracted items."""
    if not result.items:
        console.print("[yellow]No media found on this page.[/yellow]")
        return

    table = Table(title=f"Media found via {result.method.value if result.method else 'unknown'}")
    table.add_column("Type", style="cyan")
    table.add_column("File", style="green")
    table.add_column("Size", justify="right")
    table.add_column("URL", overflow="fold")

    for item in result.items:
        table.add_row(
            item.type.value,
            item.filename or "-",
            human_readable_size(item.file_size) or "-",
            item.src,
        )

    console.print(table)
    console.print(f"  Total: [green]{len(result.items)}[/green] items")


if __name__ == "__main__":
    main()
