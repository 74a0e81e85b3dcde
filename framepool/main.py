"""Main CLI entry point for framepool."""

import asyncio
import logging
import sys

import click
import httpx
from rich.console import Console
from rich.table import Table

from framepool import __version__
from framepool.services.logger_service import cleanup_old_logs, setup_logging
from framepool.utils.retry import ImmichApiError

console = Console()
logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose (DEBUG) logging",
)
@click.pass_context
def cli(ctx, verbose: bool):
    """
    framepool - pick photos from an Immich library for a photo frame.

    Assets are loaded once per source, filtered by the account settings
    (FRAMEPOOL_* environment variables or .env) and sampled on demand.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_logging(verbose=verbose)

    from framepool.config import settings
    cleanup_old_logs(max_age_days=settings.log_max_age_days)


async def _with_pool(action):
    """Build the account's pool and run `action(pool, cache)` against it."""
    from framepool.config import settings
    from framepool.pool import build_asset_pool
    from framepool.services.cache import ApiCache
    from framepool.services.immich import ImmichApi

    cache = ApiCache(duration_seconds=settings.cache_duration_seconds)
    async with ImmichApi() as api:
        pool = build_asset_pool(settings, api, cache)
        return await action(pool, cache)


def _run(action) -> None:
    try:
        asyncio.run(_with_pool(action))
    except (ImmichApiError, httpx.HTTPError) as e:
        logger.error(f"Failed to load assets: {e}")
        sys.exit(1)


@cli.command()
@click.option(
    "--count",
    "-n",
    default=5,
    type=int,
    help="Number of assets to pick",
)
def sample(count: int):
    """Pick assets to show now."""

    async def action(pool, cache):
        assets = await pool.get_assets(count)

        table = Table(title=f"{len(assets)} assets")
        table.add_column("ID", style="cyan")
        table.add_column("File", style="green")
        table.add_column("Date", style="yellow")
        table.add_column("Rating", style="magenta")
        for asset in assets:
            table.add_row(
                asset.id,
                asset.original_file_name or "-",
                asset.effective_date.strftime("%Y-%m-%d"),
                str(asset.rating) if asset.rating is not None else "-",
            )
        console.print(table)

        stats = cache.get_stats()
        console.print(
            f"[dim]Cache: {stats['hits']} hits, {stats['misses']} misses, "
            f"{stats['entries']} entries[/dim]"
        )

    _run(action)


@cli.command()
def count():
    """Show how many assets pass the account filters."""

    async def action(pool, cache):
        total = await pool.get_asset_count()
        console.print(f"[bold cyan]{total}[/bold cyan] displayable assets")

    _run(action)


if __name__ == "__main__":
    cli()
