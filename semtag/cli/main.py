"""
semtag CLI entry point.

Main command group for the semtag CLI.
"""

from pathlib import Path
from typing import Optional

import click

from semtag import __version__
from semtag.config import ConfigError, SemtagConfig
from semtag.logging_config import LOG_FORMATS, LOG_LEVELS, configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="semtag")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the configuration file (default: platform config dir)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (overrides configuration)",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS, case_sensitive=False),
    default=None,
    help="Log output format (overrides configuration)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """
    semtag - Find the latest semantic version among release tags.

    Tags are parsed leniently ("v1.2.3", "release-1.2.3-rc1", ...) and
    compared by major, minor and patch number. A stable release outranks
    a prerelease with the same numbers.

    Use 'semtag COMMAND --help' for more information on a command.
    """
    ctx.ensure_object(dict)

    try:
        config = SemtagConfig(config_path=config_path)
        config.validate()
    except ConfigError as e:
        raise click.ClickException(str(e))

    ctx.obj["config"] = config

    configure_logging(
        level=log_level or config.log_level,
        log_format=log_format or config.log_format,
    )


# Import and register subcommands
from semtag.cli.latest import latest  # noqa: E402
from semtag.cli.rewrite import rewrite  # noqa: E402
from semtag.cli.config import config  # noqa: E402

cli.add_command(latest)
cli.add_command(rewrite)
cli.add_command(config)


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
