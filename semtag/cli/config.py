"""
Config CLI commands.

Shows and updates the semtag configuration file.
"""

import json

import click
import yaml

from semtag.cli.common import get_config
from semtag.config import SCALAR_KEYS, ConfigError


# ============================================================================
# Config Command Group
# ============================================================================


@click.group()
@click.pass_context
def config(ctx: click.Context) -> None:
    """
    Manage semtag configuration.

    Settings are read from environment variables first, then from the
    configuration file, then from defaults.
    """
    ctx.ensure_object(dict)


@config.command("show")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Output as JSON",
)
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """
    Display the effective configuration.

    Example:

        semtag config show
    """
    semtag_config = get_config(ctx)

    try:
        data = semtag_config.to_dict()
    except ConfigError as e:
        raise click.ClickException(str(e))

    if as_json:
        data["config_path"] = str(semtag_config.config_path)
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"Configuration file: {semtag_config.config_path}")
    if not semtag_config.config_path.exists():
        click.echo(click.style("  (not created yet, showing defaults)", fg="yellow"))
    click.echo()
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip())


@config.command("set")
@click.argument("key", type=click.Choice(SCALAR_KEYS))
@click.argument("value")
@click.pass_context
def set_value(ctx: click.Context, key: str, value: str) -> None:
    """
    Persist a setting to the configuration file.

    Example:

        semtag config set stable_only true
    """
    semtag_config = get_config(ctx)

    try:
        semtag_config.set_value(key, value)
    except ConfigError as e:
        raise click.ClickException(str(e))

    semtag_config.save()

    click.echo(click.style("Updated: ", fg="green") + f"{key} = {value}")
    click.echo(f"  Saved to {semtag_config.config_path}")
