"""
Command line interface of relfetch.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from relfetch.installer import ArtifactInstaller
from relfetch.artifact_resolver import LinkResolver
from relfetch.relfetch_config import Target
from relfetch.relfetch_exceptions import ConfigError, ResolutionError
from relfetch.relfetch_logger import RelfetchLogger
from relfetch.relfetch_settings import LogLevel, RelfetchSettings

app = typer.Typer(no_args_is_help=True, help="Download and cache release archives declared in a config file.")

_console = Console()


def configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=LogLevel(level).value,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_settings() -> RelfetchSettings:
    try:
        return RelfetchSettings()
    except ValidationError as e:
        _console.print(f"[red]Invalid RELFETCH_* settings:[/red] {e}")
        raise typer.Exit(code=2) from e


def _parse_targets(values: Optional[List[str]]) -> Optional[List[Target]]:
    if not values:
        return None
    try:
        return [Target.parse(v) for v in values]
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--target") from e


@app.command()
def install(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Artifacts JSON file."),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Directory to download into."),
    target: Optional[List[str]] = typer.Option(
        None, "--target", "-t", help="PLATFORM/ARCH to download for, repeatable."
    ),
    max_redirects: Optional[int] = typer.Option(None, "--max-redirects", min=0),
    log_level: Optional[LogLevel] = typer.Option(None, "--log-level", case_sensitive=False),
) -> None:
    """Download every declared component for each target, skipping files already on disk."""

    settings = _load_settings()
    configure_logging(log_level or settings.log_level)
    run_config = settings.to_config(
        root_dir=root,
        config_path=config,
        targets=_parse_targets(target),
        max_redirects=max_redirects,
    )
    logger = RelfetchLogger()

    try:
        asyncio.run(ArtifactInstaller(run_config, logger).install_all_targets())
    except ConfigError as e:
        logger.log(f"Installation aborted: {e}", logging.CRITICAL)
        raise typer.Exit(code=1) from e

    logger.log("All software checked", logging.INFO)


@app.command()
def resolve(
    software: str = typer.Argument(..., help="jdk, redis, postgresql or a configured extra prefix."),
    version: str = typer.Argument(...),
    platform: str = typer.Argument(..., help="linux or windows."),
    arch: str = typer.Argument(..., help="e.g. amd64, arm64, x64."),
) -> None:
    """Print the download URL of one artifact."""

    settings = _load_settings()
    configure_logging(settings.log_level)
    resolver = LinkResolver(settings.to_config().download_prefixes, RelfetchLogger())
    try:
        link = resolver.resolve(software, version, platform, arch)
    except ResolutionError as e:
        _console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    _console.print(link.url, soft_wrap=True)


def main() -> None:
    app()
