"""CLI module for subselect."""

import logging
from pathlib import Path

import click

from subselect.cli.exit_codes import ExitCode
from subselect.cli.output import error_exit
from subselect.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        config_path: Config file to read logging defaults from.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    from subselect.config.logging_factory import configure_logging_from_cli

    try:
        configure_logging_from_cli(
            config_path=config_path,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)


@click.group()
@click.version_option(package_name="subselect")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.config/subselect/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """subselect - Automatic subtitle and audio track selection."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    _configure_logging(config_path, log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from subselect.cli.predict import predict_command
    from subselect.cli.prefs import prefs_group
    from subselect.cli.select import select_command

    main.add_command(predict_command)
    main.add_command(prefs_group)
    main.add_command(select_command)


_register_commands()
