import logging
import os

import pytest
from typer.testing import CliRunner

from mockdrills import main
from mockdrills.infrastructure.config import settings


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps each test away from loaded configuration, env vars and wired dependencies."""
    for key in list(os.environ):
        if key.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(settings, "_loaded", True)
    monkeypatch.setattr(settings, "_config", {})
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    settings.clear_test_config()
    main.reset_dependencies()
    yield
    settings.clear_test_config()
    main.reset_dependencies()
    # setup_logging binds handlers to the CliRunner stdout; drop them
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def document_text():
    """Builds the bytes of a header-framed document."""
    def _build(doc_format: str = "4.0", created: str = "2026-10-10T09:30:00", body: str = "payload\n") -> bytes:
        return f"---\nformat: \"{doc_format}\"\ncreated: {created}\n---\n{body}".encode("utf-8")
    return _build
