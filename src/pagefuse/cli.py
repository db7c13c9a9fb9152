"""Command-line interface for PageFuse."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
import structlog
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pagefuse import __version__
from pagefuse.config.config import Config, settings
from pagefuse.exceptions import PageFuseError
from pagefuse.observability import configure_logging
from pagefuse.pipeline import ScrapePipeline, extract_assets_payload

console = Console()
logger = structlog.get_logger(__name__)


def _load_config(config_path: Optional[Path]) -> Config:
    if config_path:
        return Config.from_yaml(config_path)
    return settings


def _counts_table(title: str, metadata: Dict[str, Any]) -> Table:
    table = Table(title=title)
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right", style="green")
    for key, value in metadata.items():
        if key.endswith("Count"):
            table.add_row(key[: -len("Count")], str(value))
    return table


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides configuration)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """PageFuse - Web-page asset extraction and content fusion."""
    ctx.ensure_object(dict)
    cfg = _load_config(Path(config) if config else None)
    monitoring = cfg.monitoring
    if log_level:
        monitoring = monitoring.model_copy(update={"log_level": log_level})
    configure_logging(monitoring)
    ctx.obj["config"] = cfg


@cli.command()
@click.argument("html_file", type=click.File("r", encoding="utf-8"))
@click.option("--url", help="Page URL used to resolve relative references")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the JSON payload to this file")
def extract(html_file: Any, url: Optional[str], output: Optional[str]) -> None:
    """Extract the asset manifest from an HTML file ('-' reads stdin)."""
    try:
        payload = extract_assets_payload(html_file.read(), url)
    except PageFuseError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    rendered = json.dumps(payload, indent=2)
    if output:
        Path(output).write_text(rendered, encoding="utf-8")
        console.print(_counts_table("Extracted assets", payload["metadata"]))
        console.print(f"[green]Manifest written to {output}[/green]")
    else:
        click.echo(rendered)


@cli.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the full response payload as JSON")
@click.pass_context
def scrape(ctx: click.Context, url: str, as_json: bool) -> None:
    """Scrape URL through the provider and print the fused document."""
    config: Config = ctx.obj["config"]

    async def run_scrape() -> Dict[str, Any]:
        pipeline = ScrapePipeline(config)
        try:
            return await pipeline.run(url)
        finally:
            await pipeline.aclose()

    try:
        payload = asyncio.run(run_scrape())
    except PageFuseError as e:
        logger.error("Scrape failed", component="scrape-url-enhanced", url=url, error=str(e))
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(payload, indent=2))
        return

    console.print(
        Panel.fit(
            f"[bold blue]{payload['structured']['title'] or url}[/bold blue]\n"
            f"Cached: {payload['metadata']['cached']}\n"
            f"Content length: {payload['metadata']['contentLength']}",
            title="Scrape complete",
        )
    )
    click.echo(payload["content"])


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Run the HTTP service."""
    from pagefuse.web.main import run_web_server

    config: Config = ctx.obj["config"]
    console.print("[bold green]Starting PageFuse web service[/bold green]")
    run_web_server(config, host=host, port=port)


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
