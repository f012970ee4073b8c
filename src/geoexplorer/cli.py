import logging
import random
from pathlib import Path
from typing import Annotated, Optional

import typer

from .catalog import GeoCatalog
from .config import ConfigurationError, ExplorerSettings, load_settings
from .domain.enums import GeoLevel
from .economy import EconomicIndex
from .errors import ExplorerError
from .navigation import NavigationController
from .utils import setup_logging

app = typer.Typer(help="Geo Explorer: world -> continent -> country reference data browser")

logger = logging.getLogger(__name__)


def resolve_settings(
    config: Optional[Path],
    data_dir: Optional[Path],
    seed: Optional[int] = None,
    log_file: Optional[Path] = None,
    verbose: Optional[bool] = None
) -> ExplorerSettings:
    """Load settings or exit with a readable error."""
    try:
        return load_settings(
            config,
            data_dir=data_dir,
            seed=seed,
            log_file=log_file,
            verbose=verbose or None
        )
    except ConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)


def load_economy(gdp_path: Path) -> Optional[EconomicIndex]:
    """
    Load the GDP table if present.

    A missing or unreadable table disables GDP panels instead of failing.
    """
    try:
        return EconomicIndex.from_csv(gdp_path)
    except FileNotFoundError:
        logger.warning(f"GDP data unavailable: {gdp_path} not found")
    except ExplorerError as e:
        logger.warning(f"GDP data unavailable: {e}")
    return None


def build_catalog(settings: ExplorerSettings) -> GeoCatalog:
    return GeoCatalog(settings.data_dir, rng=random.Random(settings.seed))


@app.command("browse")
def browse(
    data_dir: Annotated[Optional[Path], typer.Option("--data-dir", "-d", help="Directory with list, geometry and metadata files")] = None,
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to YAML configuration file")] = None,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Seed for the fun-fact draw")] = None,
    log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Write logs to this file while the UI runs")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")] = False,
):
    """Open the interactive explorer."""
    settings = resolve_settings(config, data_dir, seed, log_file, verbose)
    # curses owns stdout once the UI starts
    setup_logging(settings.verbose, settings.log_file, console=False)

    try:
        catalog = build_catalog(settings)
        controller = NavigationController(catalog, load_economy(settings.gdp_path))
    except ExplorerError as e:
        logger.error(f"Startup failed: {e}")
        typer.echo(f"ERROR: Cannot load world data from {settings.data_dir}: {e}", err=True)
        raise typer.Exit(1)

    from .tui import run
    run(controller, settings.poll_interval_ms)
    logger.info("Session ended")


@app.command("list-items")
def list_items(
    level: Annotated[str, typer.Argument(help="Hierarchy level: world, continent or country")],
    key: Annotated[str, typer.Argument(help="List key, e.g. 'world' or a continent name")],
    data_dir: Annotated[Optional[Path], typer.Option("--data-dir", "-d", help="Data directory")] = None,
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to YAML configuration file")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")] = False,
):
    """Print the names stored in a list file."""
    settings = resolve_settings(config, data_dir, verbose=verbose)
    setup_logging(settings.verbose)

    try:
        geo_level = GeoLevel[level.upper()]
    except KeyError:
        typer.echo(f"ERROR: Unknown level '{level}'. Use world, continent or country", err=True)
        raise typer.Exit(1)

    try:
        items = build_catalog(settings).load_list(geo_level, key)
    except ExplorerError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    for item in items:
        typer.echo(item)


@app.command("country")
def country(
    name: Annotated[str, typer.Argument(help="Country display name")],
    data_dir: Annotated[Optional[Path], typer.Option("--data-dir", "-d", help="Data directory")] = None,
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to YAML configuration file")] = None,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Seed for the fun-fact draw")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")] = False,
):
    """Show metadata, a fun fact and the latest GDP for one country."""
    settings = resolve_settings(config, data_dir, seed, verbose=verbose)
    setup_logging(settings.verbose)

    catalog = build_catalog(settings)
    info = catalog.load_country_info(name)
    typer.echo(info.summary() if info else f"No metadata for {name}")

    fact = catalog.random_fact(name)
    if fact:
        typer.echo(f"\nDid you know? {fact}")

    economy = load_economy(settings.gdp_path)
    latest = economy.latest(name) if economy else None
    if latest:
        year, value = latest
        typer.echo(f"\nGDP ({year}): {EconomicIndex.format_magnitude(value)}")


@app.command("gdp")
def gdp(
    name: Annotated[str, typer.Argument(help="Country display name (fuzzy matched)")],
    series: Annotated[bool, typer.Option("--series", help="Print every year instead of the latest value")] = False,
    data_dir: Annotated[Optional[Path], typer.Option("--data-dir", "-d", help="Data directory")] = None,
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to YAML configuration file")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")] = False,
):
    """Print GDP for a country."""
    settings = resolve_settings(config, data_dir, verbose=verbose)
    setup_logging(settings.verbose)

    economy = load_economy(settings.gdp_path)
    if economy is None:
        typer.echo(f"ERROR: GDP data unavailable at {settings.gdp_path}", err=True)
        raise typer.Exit(1)

    if series:
        values = economy.full_series(name)
        if not values:
            typer.echo(f"No GDP data for {name}")
            raise typer.Exit(1)
        for year, value in values.items():
            typer.echo(f"{year}: {EconomicIndex.format_magnitude(value)}")
        return

    latest = economy.latest(name)
    if latest is None:
        typer.echo(f"No GDP data for {name}")
        raise typer.Exit(1)
    year, value = latest
    typer.echo(f"GDP ({year}): {EconomicIndex.format_magnitude(value)}")


@app.command("version")
def version():
    """Display version information."""
    from . import __version__
    typer.echo(f"geoexplorer version: {__version__}")


if __name__ == "__main__":
    app()
