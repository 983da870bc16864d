import pytest
from loguru import logger
from typer.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI callback points loguru at the runner's stderr; drop that sink afterwards."""
    yield
    logger.remove()


@pytest.fixture
def write_file(tmp_path):
    def _write(relative: str, content: str):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
