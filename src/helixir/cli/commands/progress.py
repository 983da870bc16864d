"""Show tutorial progress."""

from rich.table import Table

from helixir.cli.app import app
from helixir.cli.commands.command_utils import console, get_config, get_progress


@app.command()
def progress():
    """Show the current lesson and the lessons completed so far."""
    config = get_config()
    state = get_progress(config)
    completed = state.completed_lessons()

    console.print(f"Current lesson: {state.current_lesson}")
    if not completed:
        console.print("[yellow]No lessons completed yet.[/yellow]")
        return

    console.print(f"Completed lessons: {len(completed)}")
    table = Table()
    table.add_column("Lesson", justify="right", style="cyan")
    for lesson in completed:
        table.add_row(str(lesson))
    console.print(table)
