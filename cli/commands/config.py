"""Config file commands."""

import typer
import yaml

from cli.config import get_config_path, init_config, load_config, validate_config
from cli.output import error_message, success_message
from sqlgen.catalog.engine import sanitize_connection_string

app = typer.Typer(help="Manage the sqlgen config file")


@app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Create a config file with default values.

    Example:
        sqlgen config init
    """
    try:
        path = init_config(force=force)
    except FileExistsError as e:
        error_message(str(e), hint="Use --force to overwrite it")
        raise typer.Exit(1) from e

    success_message(f"Config written to {path}")


@app.command("show")
def config_show() -> None:
    """Show the active config with passwords masked."""
    try:
        config = load_config()
    except ValueError as e:
        error_message(str(e))
        raise typer.Exit(1) from e

    data = config.model_dump(mode="json", by_alias=True)
    data["connections"] = {name: sanitize_connection_string(conn) for name, conn in config.connections.items()}

    typer.echo(f"# {get_config_path()}")
    typer.echo(yaml.dump(data, default_flow_style=False, sort_keys=False), nl=False)

    for problem in validate_config(config):
        error_message(problem)
