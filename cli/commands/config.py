"""Configuration file commands."""

import typer
import yaml

from cli.config import get_config_path, init_config, load_config, save_config, validate_config
from cli.output import EXIT_RUNTIME_ERROR, error_message, success_message

app = typer.Typer(help="Manage the dbmeta configuration file")


@app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Create a config file with default values."""
    try:
        path = init_config(force=force)
        success_message(f"Config written to {path}")
    except FileExistsError as e:
        error_message(str(e), hint="Use --force to overwrite it")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e


@app.command("show")
def config_show() -> None:
    """Print the current configuration with passwords masked."""
    try:
        config = load_config()
    except ValueError as e:
        error_message(str(e), hint=f"Fix or recreate {get_config_path()}")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e

    data = config.model_dump()
    data["defaults"]["database"]["password"] = "***"

    from dbmeta.database.engine import sanitize_connection_string

    data["connections"] = {name: sanitize_connection_string(cs) for name, cs in config.connections.items()}

    typer.echo(f"# {get_config_path()}")
    typer.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))

    for problem in validate_config(config):
        typer.secho(f"  ! {problem}", fg=typer.colors.YELLOW, err=True)


@app.command("set-connection")
def config_set_connection(
    name: str = typer.Argument(..., help="Connection name, referenced as @name"),
    connection_string: str = typer.Argument(..., help="Database URL"),
) -> None:
    """Add or replace a named connection."""
    try:
        config = load_config()
        config.connections[name] = connection_string

        errors = validate_config(config)
        if errors:
            for problem in errors:
                error_message(problem)
            raise typer.Exit(EXIT_RUNTIME_ERROR)

        path = save_config(config)
        success_message(f"Connection '{name}' saved to {path}")
    except ValueError as e:
        error_message(str(e), hint=f"Fix or recreate {get_config_path()}")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
