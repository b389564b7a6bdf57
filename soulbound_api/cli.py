"""
CLI entry point for the Soulbound Mint API.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
import typer
import uvicorn

from .catalog import ItemCatalog
from .config import Settings, get_settings
from .minter import MintResult, SoulboundMinter
from .solana_client import SolanaClient

app = typer.Typer(
    name="soulbound-api",
    help="Soulbound Metaplex Core minting service",
    add_completion=False,
)

logger = structlog.get_logger()


def _configure_console_logging() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ]
    )


def _load_settings(config_path: Optional[Path]) -> Settings:
    return Settings(_env_file=config_path) if config_path else get_settings()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: PORT or 5000)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """
    Run the HTTP server.
    """
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    logger.info("Server listening", host=host, port=port)
    uvicorn.run(
        "soulbound_api.main:app",
        host=host,
        port=port,
        reload=reload or settings.debug,
    )


async def _mint(settings: Settings, wallet: str, item_name: str) -> MintResult:
    client = SolanaClient(settings)
    try:
        return await SoulboundMinter(settings, client).mint(wallet, item_name)
    finally:
        await client.close()


@app.command()
def mint(
    wallet: str = typer.Argument(..., help="Owner wallet address"),
    item_name: str = typer.Argument(..., help="Catalog item name"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to .env configuration file",
    ),
) -> None:
    """
    Mint one soulbound asset without going through HTTP.
    """
    _configure_console_logging()
    settings = _load_settings(config_path)

    try:
        result = asyncio.run(_mint(settings, wallet, item_name))
    except Exception as e:
        typer.echo(f"Error minting NFT: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Mint:      {result.mint}")
    typer.echo(f"Name:      {result.name}")
    typer.echo(f"Signature: {result.signature}")
    typer.echo(f"Explorer:  {settings.explorer_url(result.mint)}")


@app.command()
def catalog(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to .env configuration file",
    ),
) -> None:
    """
    Show catalog entries in match order.
    """
    settings = _load_settings(config_path)
    items = ItemCatalog(settings.catalog_entries())

    if not len(items):
        typer.echo("No catalog items configured")
        raise typer.Exit(1)

    for i, entry in enumerate(items.entries, start=1):
        typer.echo(f"{i}. {entry.prefix!r} -> {entry.name} ({entry.uri})")


@app.command()
def version() -> None:
    """Show the service version."""
    from soulbound_api import __version__
    typer.echo(f"soulbound-api v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
