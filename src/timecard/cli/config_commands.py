"""CLI commands for configuration management."""

import json
from typing import Any

import click  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]

from timecard.cli.common import console, fail, get_config


@click.group()  # type: ignore[misc]
def config() -> None:
    """Manage TimeCard configuration.

    Configuration is stored in ~/.timecard/config.yml unless --config is given.
    """
    pass


@config.command("show")  # type: ignore[misc]
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show all configuration settings.

    Example:
        timecard config show
        timecard config show --json
    """
    config_mgr = get_config(ctx)

    if as_json:
        click.echo(json.dumps(config_mgr.to_dict(), indent=2))
        return

    table = Table(title="TimeCard Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    def add_rows(prefix: str, data: dict[str, Any]) -> None:
        """Recursively add configuration rows."""
        for key, value in data.items():
            full_key = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                add_rows(full_key, value)
            else:
                table.add_row(full_key, str(value))

    add_rows("", config_mgr.to_dict())
    console.print(table)
    console.print(f"\nConfig file: {config_mgr.config_path}")


@config.command("get")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_get(ctx: click.Context, key: str) -> None:
    """Get a specific configuration value.

    Example:
        timecard config get general.data_file
    """
    value = get_config(ctx).get(key)

    if value is None:
        fail(f"Configuration key '{key}' not found")

    if isinstance(value, dict):
        click.echo(json.dumps(value, indent=2))
    else:
        click.echo(str(value))


@config.command("set")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.argument("value")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value.

    Use 'true'/'false' for booleans and 'null' to clear a value.

    Example:
        timecard config set report.default_period week
        timecard config set general.backup_on_save true
    """
    config_mgr = get_config(ctx)

    converted_value: Any = value
    if value.lower() in ("true", "yes"):
        converted_value = True
    elif value.lower() in ("false", "no"):
        converted_value = False
    elif value.lower() == "null":
        converted_value = None

    try:
        config_mgr.set(key, converted_value)
    except ValueError as e:
        fail(e)

    console.print(f"[green]✓[/green] Set {key} = {converted_value}")


@config.command("reset")  # type: ignore[misc]
@click.confirmation_option(prompt="Reset all settings to defaults?")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_reset(ctx: click.Context) -> None:
    """Reset configuration to defaults."""
    get_config(ctx).reset()
    console.print("[green]✓[/green] Configuration reset to defaults")


@config.command("path")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_path(ctx: click.Context) -> None:
    """Show the configuration file path."""
    click.echo(str(get_config(ctx).config_path))
