"""Answer checking CLI commands for helixir.

Registered as a subcommand group: `helixir check schema`, `helixir check queries`.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger

from helixir.cli.app import app
from helixir.cli.commands.command_utils import (
    console,
    get_config,
    get_progress,
    print_feedback,
)
from helixir.config import AnswerKind, HelixirConfig
from helixir.errors import HxFileError
from helixir.validation import (
    diff_queries,
    diff_schema,
    load_queries,
    load_schema,
    query_feedback,
    schema_feedback,
)

check_app = typer.Typer(help="Check your answers against a lesson's reference answer")
app.add_typer(check_app, name="check")


def _resolve_paths(
    config: HelixirConfig,
    kind: AnswerKind,
    user_file: Optional[Path],
    expected_file: Optional[Path],
    lesson: Optional[int],
) -> tuple[Path, Path]:
    if user_file is None:
        user_file = config.schema_path if kind == "schema" else config.queries_path

    if expected_file is None:
        if lesson is None:
            console.print("[red]Error: give an EXPECTED file or --lesson N[/red]")
            raise typer.Exit(1)
        expected_file = config.answer_path(lesson, kind)

    return user_file, expected_file


def _run_check(
    kind: AnswerKind,
    user_file: Optional[Path],
    expected_file: Optional[Path],
    lesson: Optional[int],
) -> None:
    config = get_config()
    user_path, expected_path = _resolve_paths(config, kind, user_file, expected_file, lesson)

    loader = load_schema if kind == "schema" else load_queries
    try:
        user_model = loader(user_path)
    except HxFileError as e:
        logger.error(f"Could not load answer: {e}")
        console.print(f"[ERROR] Could not load your {kind}: {e}", style="red", markup=False)
        raise typer.Exit(1)
    try:
        expected_model = loader(expected_path)
    except HxFileError as e:
        logger.error(f"Could not load reference answer: {e}")
        console.print(f"[ERROR] Could not load expected {kind}: {e}", style="red", markup=False)
        raise typer.Exit(1)

    if kind == "schema":
        report = diff_schema(user_model, expected_model)
        print_feedback(schema_feedback(report))
    else:
        report = diff_queries(user_model, expected_model)
        print_feedback(query_feedback(report))

    if not report.is_correct:
        raise typer.Exit(1)

    if lesson is not None:
        get_progress(config).mark_completed(lesson)
        console.print(f"Lesson {lesson} completed!", style="green")


UserFile = Annotated[
    Optional[Path],
    typer.Argument(help="Your answer file (defaults to the file in the config directory)"),
]
ExpectedFile = Annotated[
    Optional[Path],
    typer.Argument(help="Reference answer file (defaults to the lesson's answer)"),
]
LessonOption = Annotated[
    Optional[int],
    typer.Option("--lesson", "-l", help="Lesson number; marks it completed on success"),
]


@check_app.command()
def schema(
    user_file: UserFile = None,
    expected_file: ExpectedFile = None,
    lesson: LessonOption = None,
):
    """Compare a schema.hx against the reference schema.

    Exits with code 1 when the schema does not match.
    """
    _run_check("schema", user_file, expected_file, lesson)


@check_app.command()
def queries(
    user_file: UserFile = None,
    expected_file: ExpectedFile = None,
    lesson: LessonOption = None,
):
    """Compare a queries.hx against the reference queries.

    Exits with code 1 when any expected query is missing or differs.
    """
    _run_check("queries", user_file, expected_file, lesson)
