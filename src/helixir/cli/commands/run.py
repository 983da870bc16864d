"""Run a tutorial query against the live HelixDB instance."""

import asyncio
import json
from typing import Annotated, Any

import typer
from loguru import logger

from helixir.cli.app import app
from helixir.cli.commands.command_utils import console, get_config, get_progress
from helixir.config import HelixirConfig
from helixir.errors import HelixirError
from helixir.executor import ExecutionOutcome, execute_and_compare, get_client
from helixir.lesson_queries import default_registry


async def _run_query(
    config: HelixirConfig, query_name: str, payload: dict[str, Any]
) -> ExecutionOutcome:
    async with get_client(config) as client:
        return await execute_and_compare(
            client, default_registry(), get_progress(config), query_name, payload
        )


@app.command()
def run(
    query_name: Annotated[str, typer.Argument(help="Name of the deployed query")],
    input_json: Annotated[
        str, typer.Option("--input", "-i", help="Query input as a JSON object")
    ] = "{}",
):
    """Execute a query and check the database's answer.

    Ids created by earlier lessons (continent, country, city) are filled in
    automatically.
    """
    try:
        payload = json.loads(input_json)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: --input is not valid JSON: {e}[/red]")
        raise typer.Exit(1)
    if not isinstance(payload, dict):
        console.print("[red]Error: --input must be a JSON object[/red]")
        raise typer.Exit(1)

    try:
        outcome = asyncio.run(_run_query(get_config(), query_name, payload))
    except HelixirError as e:
        logger.error(f"Error running {query_name}: {e}")
        console.print(f"[ERROR] {e}", style="red", markup=False)
        raise typer.Exit(1)

    if outcome.passed:
        console.print("[CORRECT]", style="bold green", markup=False)
        console.print(outcome.message, markup=False)
    else:
        console.print("[INCORRECT]", style="bold red", markup=False)
        console.print(outcome.message, markup=False)
        raise typer.Exit(1)
