import pytest
from click.testing import CliRunner

from ini_reader.constants import MAP_IMPLEMENTATION_ENV_VAR, MAX_FILE_SIZE_ENV_VAR
from ini_reader.containers import set_map_implementation


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_process_settings(monkeypatch):
    """Keeps process-wide map selection and env overrides out of other tests."""
    monkeypatch.delenv(MAP_IMPLEMENTATION_ENV_VAR, raising=False)
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)
    set_map_implementation(None)
    yield
    set_map_implementation(None)
