from typing import Optional

import typer

from helixir.config import ConfigManager, init_cli_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        import helixir

        typer.echo(f"helixir version: {helixir.__version__}")
        raise typer.Exit()


app = typer.Typer(name="helixir", no_args_is_help=True)


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """helixir - check your HelixDB tutorial answers."""
    init_cli_logging(ConfigManager().config)
