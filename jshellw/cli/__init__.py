"""
Click-based CLI for jshellw.

Usage:
    jshellw [OPTIONS] ARCHIVE
"""

from __future__ import annotations

import signal
from pathlib import Path
from typing import Any

import click

from ..core.bootstrap import bootstrap
from ..core.container import resolve
from ..core.exceptions import JShellwException
from ..core.interfaces.logger import ILogger
from ..core.interfaces.presenter import IPresenter
from ..services.adapter import AdapterService
from .context import JShellwContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("jshellw")
except Exception:
    __version__ = "0.1.0"

USAGE = "Usage: $ jshellw <path/to/spring-boot-app.jar>"


@click.command("jshellw", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("archive", required=False, type=click.Path(path_type=Path))
@click.option(
    "--strategy",
    type=click.Choice(["enumerated", "wildcard"]),
    default=None,
    help="List every library jar, or pass lib/* for the shell to expand",
)
@click.option(
    "--java-home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Java installation whose bin/jshell is launched",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from this TOML file",
)
@click.option("-q", "--quiet", is_flag=True, default=False, help="Suppress progress messages")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Diagnostic log level",
)
@click.version_option(version=__version__, prog_name="jshellw")
def cli(
    archive: Path | None,
    strategy: str | None,
    java_home: Path | None,
    config_path: Path | None,
    quiet: bool,
    log_level: str | None,
) -> None:
    """Launch JShell against the classpath of a Spring Boot JAR or WAR.

    Extracts BOOT-INF (or WEB-INF) from ARCHIVE into a temporary directory,
    starts JShell with the extracted classes and libraries on its class
    path, and deletes the directory when JShell exits. The exit code is
    JShell's own.

    \b
    Examples:
        jshellw target/app.jar
        jshellw --strategy wildcard target/app.war
    """
    if archive is None:
        click.echo(USAGE)
        raise SystemExit(1)

    try:
        ctx = JShellwContext.create(
            config_path=config_path,
            overrides=_option_overrides(strategy, java_home, quiet, log_level),
        )
    except JShellwException as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(e.exit_code) from e

    bootstrap(ctx.settings)
    presenter: IPresenter = resolve(IPresenter)  # type: ignore[type-abstract]
    logger: ILogger = resolve(ILogger)  # type: ignore[type-abstract]
    logger.debug("Settings: %s", ctx.settings.to_dict())
    logger.debug("Platform: %s", ctx.platform.model_dump())
    if not ctx.is_interactive:
        logger.info("stdin is not a terminal; JShell will read input from it as a script")

    if ctx.settings.config_error:
        presenter.print_warning(f"{ctx.settings.config_error}; using defaults")

    service = AdapterService.from_settings(ctx.settings, ctx.platform)
    try:
        result = service.run(archive)
    except JShellwException as e:
        presenter.print_error(str(e))
        raise SystemExit(e.exit_code) from e
    except KeyboardInterrupt:
        presenter.print_error("Interrupted")
        raise SystemExit(128 + signal.SIGINT) from None

    raise SystemExit(result.exit_code)


def _option_overrides(
    strategy: str | None,
    java_home: Path | None,
    quiet: bool,
    log_level: str | None,
) -> dict[str, Any]:
    """Translate command-line options into settings sections."""
    overrides: dict[str, Any] = {}
    if strategy:
        overrides["classpath"] = {"strategy": strategy}
    if java_home:
        overrides["shell"] = {"java_home": str(java_home)}
    if quiet:
        overrides["output"] = {"quiet": True}
    if log_level:
        overrides["logging"] = {"level": log_level}
    return overrides


__all__ = [
    "USAGE",
    "JShellwContext",
    "__version__",
    "cli",
]
