"""Check and redeploy the learner's HelixDB instance with the helix CLI."""

from typing import Annotated, Optional

import typer
from loguru import logger

from helixir.cli.app import app
from helixir.cli.commands.command_utils import console, get_config, get_progress
from helixir.errors import HelixCommandError
from helixir.helix_cli import is_helix_initialized, redeploy_instance, run_helix_check


@app.command()
def deploy(
    instance_id: Annotated[
        Optional[str],
        typer.Option("--instance-id", help="Instance to redeploy; saved for later runs"),
    ] = None,
):
    """Run `helix check`, then redeploy your instance with the current queries.

    The instance id is asked for once and stored in the progress file.
    """
    config = get_config()
    if not is_helix_initialized(config):
        console.print(
            f"[red]Error: {config.config_dir} not found. Run 'helix init' first.[/red]"
        )
        raise typer.Exit(1)

    progress = get_progress(config)
    if instance_id is None:
        instance_id = progress.instance_id
    if not instance_id:
        console.print("Run 'helix instances' in another terminal and copy your instance ID.")
        instance_id = typer.prompt("Enter your instance ID").strip()
    if instance_id != progress.instance_id:
        progress.instance_id = instance_id
        console.print("Instance ID saved. Future deploys will use it automatically.")

    try:
        if not run_helix_check():
            console.print(
                "[ERROR] helix check failed. Fix the errors it reports and try again.",
                style="red",
                markup=False,
            )
            raise typer.Exit(1)
        outcome = redeploy_instance(instance_id)
    except HelixCommandError as e:
        logger.error(f"Error running helix: {e}")
        console.print(f"[ERROR] {e}", style="red", markup=False)
        raise typer.Exit(1)

    if not outcome.ok:
        console.print(f"[ERROR] {outcome.message}", style="red", markup=False)
        raise typer.Exit(1)
    console.print(outcome.message, style="green")
