"""Configuration management for helixir.

Settings come from, in priority order:
1. HELIXIR_* environment variables
2. helixir.json in the working directory (or the file named by HELIXIR_CONFIG_FILE)
3. Defaults below
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Literal, Optional

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILE_NAME = "helixir.json"

AnswerKind = Literal["schema", "queries"]


class HelixirConfig(BaseSettings):
    """Settings for locating tutorial files and reaching a HelixDB instance."""

    config_dir: Path = Field(
        default=Path("helixdb-cfg"),
        description="Directory holding the learner's schema.hx and queries.hx",
    )
    schema_file: str = Field(default="schema.hx", description="Learner schema file name")
    queries_file: str = Field(default="queries.hx", description="Learner queries file name")
    answers_dir: Path = Field(
        default=Path("lesson_answers"),
        description="Directory holding reference answers (lesson<N>_schema.hx, ...)",
    )
    progress_file: str = Field(
        default="instance.json",
        description="Progress file name, stored inside config_dir",
    )

    helix_url: str = Field(
        default="http://localhost:6969",
        description="Base URL of the running HelixDB instance",
    )
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    log_level: str = Field(default="WARNING", description="Console log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    model_config = SettingsConfigDict(
        env_prefix="HELIXIR_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment beats values loaded from the config file (passed as init kwargs)
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @property
    def schema_path(self) -> Path:
        return self.config_dir / self.schema_file

    @property
    def queries_path(self) -> Path:
        return self.config_dir / self.queries_file

    @property
    def progress_path(self) -> Path:
        return self.config_dir / self.progress_file

    def answer_path(self, lesson: int, kind: AnswerKind) -> Path:
        """Reference answer file for a lesson, e.g. lesson_answers/lesson3_schema.hx."""
        return self.answers_dir / f"lesson{lesson}_{kind}.hx"


_CONFIG_CACHE: Optional[HelixirConfig] = None


class ConfigManager:
    """Loads and saves helixir.json and caches the merged configuration."""

    def __init__(self, config_file: Optional[Path] = None) -> None:
        env_file = os.environ.get("HELIXIR_CONFIG_FILE")
        if config_file is not None:
            self.config_file = Path(config_file)
        elif env_file:
            self.config_file = Path(env_file)
        else:
            self.config_file = Path.cwd() / CONFIG_FILE_NAME

    @property
    def config(self) -> HelixirConfig:
        """Cached configuration, loaded on first access."""
        global _CONFIG_CACHE
        if _CONFIG_CACHE is None:
            _CONFIG_CACHE = self.load_config()
        return _CONFIG_CACHE

    def _read_file(self) -> dict[str, Any]:
        if not self.config_file.exists():
            return {}
        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable config file {self.config_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file}: expected a JSON object")
            return {}
        return data

    def load_config(self) -> HelixirConfig:
        """Load configuration from file and environment, bypassing the cache."""
        return HelixirConfig(**self._read_file())

    def save_config(self, config: HelixirConfig) -> None:
        """Write configuration to the config file and refresh the cache."""
        global _CONFIG_CACHE
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        _CONFIG_CACHE = config


def init_cli_logging(config: Optional[HelixirConfig] = None) -> None:
    """Route loguru output for CLI use.

    Console output goes to stderr so it never mixes with command output.
    """
    config = config or ConfigManager().config
    logger.remove()
    logger.add(sys.stderr, level=config.log_level.upper(), format="{level}: {message}")
    if config.log_file is not None:
        logger.add(
            str(config.log_file),
            level="DEBUG",
            rotation="1 MB",
            retention=3,
            backtrace=False,
        )
