"""In-process key-value cache with per-entry expiration."""

import logging

import click
from dotenv import load_dotenv

from .cache import ExpiringCache
from .config import CacheConfig, JanitorConfig, load_config
from .errors import NotExistsError

__version__ = "0.1.0"

logger = logging.getLogger("timecache")


@click.group()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to .env file",
)
def main(verbose: int, env_file: str | None) -> None:
    """Developer tooling for the timecache expiring cache."""
    logging_level = logging.WARNING
    if verbose == 1:
        logging_level = logging.INFO
    elif verbose >= 2:
        logging_level = logging.DEBUG

    logging.basicConfig(
        level=logging_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if env_file:
        logger.debug("Loading environment from file: %s", env_file)
        load_dotenv(env_file)
    else:
        load_dotenv()


@main.command("config")
def config_command() -> None:
    """Print the cache configuration resolved from the environment."""
    config = load_config()
    click.echo(f"store_seconds={config.effective_store_seconds:g}")
    click.echo(f"sweep_period_seconds={config.janitor.sweep_period_seconds:g}")
    click.echo(f"yield_every={config.janitor.yield_every}")
    if config.janitor.sweep_period_seconds == 0:
        click.echo("janitor disabled; call sweep_expired() manually")


@main.command("bench")
@click.option("--entries", default=1_000_000, show_default=True, help="Entries to fill before sweeping")
@click.option(
    "--yield-every",
    default=10_000,
    show_default=True,
    help="Release the write lock every N inspected entries (0 = never)",
)
def bench_command(entries: int, yield_every: int) -> None:
    """Sweep a filled cache while timing concurrent reads."""
    if entries <= 0:
        raise click.ClickException("--entries must be positive")
    if yield_every < 0:
        raise click.ClickException("--yield-every must be >= 0")

    from .bench import run_bench

    logger.info("Filling %s entries (yield_every=%s)", entries, yield_every)
    result = run_bench(entries, yield_every)
    click.echo(f"entries={result.entries} removed={result.removed}")
    click.echo(f"sweep={result.sweep_seconds * 1000:.1f}ms")
    click.echo(f"gets={result.gets} max_get={result.max_get_seconds * 1000:.3f}ms")


__all__ = [
    "CacheConfig",
    "ExpiringCache",
    "JanitorConfig",
    "NotExistsError",
    "__version__",
    "load_config",
    "main",
]

if __name__ == "__main__":
    main()
