"""Main entry point for the mockdrills application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from mockdrills.core.command_handler import CommandHandler
from mockdrills.core.services.file_sender import FileSender
from mockdrills.core.services.thing_cache import ThingCache

# --- Infrastructure Layer ---
from mockdrills.infrastructure.cli.display import ConsoleDisplay
from mockdrills.infrastructure.config.settings import (
    get_accepted_formats,
    get_config,
    get_outbox_dir,
    get_signing_credential,
    load_configuration,
)
from mockdrills.infrastructure.crypto.hmac_cryptographer import HmacCryptographer
from mockdrills.infrastructure.delivery.outbox_sender import OutboxSender
from mockdrills.infrastructure.filesystem.local_fs import LocalFileSystem
from mockdrills.infrastructure.lookup.catalog_thing_service import CatalogThingService
from mockdrills.infrastructure.monitoring.logger_setup import DEFAULT_LOG_FORMAT, setup_logging
from mockdrills.infrastructure.recognition.header_recognizer import HeaderRecognizer

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

_dependencies: Dict[str, Any] = {}


def build_thing_cache(catalog_path: Path) -> ThingCache:
    """Creates a fresh cache over a YAML catalog."""
    return ThingCache(CatalogThingService.from_yaml(catalog_path))


def build_file_sender(outbox_dir: Path) -> FileSender:
    """Creates a FileSender wired to the production adapters."""
    return FileSender(
        cryptographer=_dependencies['cryptographer'],
        sender=OutboxSender(outbox_dir),
        recognizer=HeaderRecognizer(),
        accepted_formats=get_accepted_formats(),
    )


def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. Configuration and logging are set up
    here rather than at import time.
    """
    if _dependencies:
        return _dependencies

    # 1. Load Configuration First
    load_configuration()
    log_level_name = str(get_config('logging.level', 'WARNING')).upper()
    log_level = getattr(logging, log_level_name, logging.WARNING)
    setup_logging(
        log_level=log_level,
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )
    logger.info("Configuration and logging initialized.")

    # 2. Instantiate Infrastructure Adapters
    _dependencies['ui'] = ConsoleDisplay()
    _dependencies['file_system'] = LocalFileSystem()
    _dependencies['cryptographer'] = HmacCryptographer()

    # 3. Instantiate Command Handler
    _dependencies['command_handler'] = CommandHandler(
        ui=_dependencies['ui'],
        file_system=_dependencies['file_system'],
        thing_cache_factory=build_thing_cache,
        file_sender_factory=build_file_sender,
        credential_provider=get_signing_credential,
        cryptographer=_dependencies['cryptographer'],
    )
    logger.info("All dependencies initialized successfully.")
    return _dependencies


def reset_dependencies() -> None:
    """Drops the wired dependencies so the next command rebuilds them."""
    _dependencies.clear()


def _handler() -> CommandHandler:
    return create_dependencies()['command_handler']

# --- Typer App Definition ---
app = typer.Typer(
    name="mockdrills",
    help="Read-through thing lookups and validated, signed document delivery.",
    add_completion=False,
)

# --- CLI Commands ---

KeyIdOption = Annotated[
    Optional[str],
    typer.Option("--key-id", "-k", help="Signing key id. Uses signing.key_id if not set.")
]


@app.command()
def lookup(
    thing_ids: Annotated[List[str], typer.Argument(help="Thing ids to look up; repeat an id to hit the cache.")],
    catalog: Annotated[
        Optional[Path],
        typer.Option("--catalog", "-c", help="YAML catalog of things. Uses lookup.catalog if not set.")
    ] = None,
):
    """Look up things through a read-through cache."""
    handler = _handler()
    if catalog is None:
        configured = get_config('lookup.catalog')
        catalog = Path(str(configured)) if configured else None
    raise typer.Exit(code=handler.handle_lookup(thing_ids, catalog))


@app.command()
def send(
    patterns: Annotated[List[str], typer.Argument(help="Files or glob patterns to send.")],
    outbox: Annotated[
        Optional[Path],
        typer.Option("--outbox", "-o", help="Outbox directory. Uses sender.outbox_dir if not set.")
    ] = None,
    key_id: KeyIdOption = None,
):
    """Recognize, validate, sign and deliver files; exits 1 if any was skipped."""
    handler = _handler()
    raise typer.Exit(code=handler.handle_send(patterns, outbox or get_outbox_dir(), key_id))


@app.command(name="sign-check")
def sign_check(
    file: Annotated[Path, typer.Argument(help="Signed payload from the outbox.")],
    key_id: KeyIdOption = None,
):
    """Verify the signature of a delivered payload."""
    handler = _handler()
    raise typer.Exit(code=handler.handle_sign_check(str(file), key_id))

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
