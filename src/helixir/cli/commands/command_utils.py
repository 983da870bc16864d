"""utility functions for commands"""

from rich.console import Console
from rich.text import Text

from helixir.config import ConfigManager, HelixirConfig
from helixir.progress import JsonProgressStore, Progress
from helixir.validation.feedback import CORRECT, ERROR, INCORRECT

console = Console()

TAG_STYLES = {
    CORRECT: "bold green",
    INCORRECT: "bold red",
    ERROR: "bold red",
}


def get_config() -> HelixirConfig:
    return ConfigManager().config


def get_progress(config: HelixirConfig) -> Progress:
    return Progress(JsonProgressStore(config.progress_path))


def feedback_text(line: str) -> Text:
    """Colour the leading tag of a feedback line; the rest stays plain text."""
    for tag, style in TAG_STYLES.items():
        if line.startswith(tag):
            return Text.assemble((tag, style), line[len(tag) :])
    return Text(line)


def print_feedback(lines: list[str]) -> None:
    for line in lines:
        console.print(feedback_text(line))
