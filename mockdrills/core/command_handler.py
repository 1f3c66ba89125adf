"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), builds the services
they need through injected factories, and reports results through the
UserInterface. Every handler returns a process exit code.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from mockdrills.core.services.file_sender import FileSender
from mockdrills.core.services.thing_cache import ThingCache
from mockdrills.domain.exceptions import ConfigurationError, MockdrillsError
from mockdrills.domain.interfaces.cryptographer import Cryptographer
from mockdrills.domain.interfaces.file_system import FileSystem
from mockdrills.domain.interfaces.user_interface import UserInterface
from mockdrills.domain.models.common import ThingId
from mockdrills.domain.models.delivery import File, SigningCredential

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


class CommandHandler:
    """Handles incoming commands and delegates to appropriate services."""

    def __init__(
        self,
        ui: UserInterface,
        file_system: FileSystem,
        thing_cache_factory: Callable[[Path], ThingCache],
        file_sender_factory: Callable[[Path], FileSender],
        credential_provider: Callable[[Optional[str]], SigningCredential],
        cryptographer: Cryptographer,
    ):
        """Initializes the CommandHandler with required services and factories."""
        self.ui = ui
        self.file_system = file_system
        self.thing_cache_factory = thing_cache_factory
        self.file_sender_factory = file_sender_factory
        self.credential_provider = credential_provider
        self.cryptographer = cryptographer

    def handle_lookup(self, thing_ids: Sequence[str], catalog_path: Optional[Path]) -> int:
        """Handles the 'lookup' command: resolves ids through one ThingCache."""
        logger.info(f"Handling 'lookup' command for {len(thing_ids)} id(s), catalog: {catalog_path}")
        if catalog_path is None:
            self.ui.display_error("No catalog given. Pass --catalog or set lookup.catalog.")
            return EXIT_USAGE
        try:
            cache = self.thing_cache_factory(catalog_path)
        except MockdrillsError as e:
            logger.error(f"Failed to open catalog {catalog_path}: {e}", exc_info=True)
            self.ui.display_error(f"Lookup failed: {e}")
            return EXIT_USAGE

        rows: List[List[str]] = []
        cache_hits = 0
        try:
            for raw_id in thing_ids:
                thing_id = ThingId(raw_id)
                was_cached = thing_id in cache
                thing = cache.get(thing_id)
                if was_cached:
                    cache_hits += 1
                    status = "cached"
                elif thing is not None:
                    status = "found"
                else:
                    status = "missing"
                attributes = "" if thing is None else ", ".join(f"{k}={v}" for k, v in thing.attributes.items())
                rows.append([thing_id, status, attributes])
        except Exception as e:
            logger.error(f"Lookup command failed: {e}", exc_info=True)
            self.ui.display_error(f"Lookup failed: {e}")
            return EXIT_FAILED

        self.ui.display_table("Lookup results", ["Id", "Status", "Attributes"], rows)
        self.ui.display_info(
            f"{len(thing_ids)} lookup(s), {len(thing_ids) - cache_hits} backing read(s), "
            f"{cache_hits} served from cache."
        )
        return EXIT_OK

    def handle_send(self, patterns: Sequence[str], outbox_dir: Path, key_id: Optional[str] = None) -> int:
        """Handles the 'send' command: one FileSender batch over all matched files."""
        logger.info(f"Handling 'send' command for patterns: {list(patterns)}, outbox: {outbox_dir}")
        try:
            credential = self.credential_provider(key_id)
            paths = self._expand_patterns(patterns)
            files: List[File] = [self.file_system.read_file(path) for path in paths]
            file_sender = self.file_sender_factory(outbox_dir)
        except (MockdrillsError, OSError) as e:
            logger.error(f"Send command could not start: {e}", exc_info=True)
            self.ui.display_error(f"Send failed: {e}")
            return EXIT_USAGE

        result = file_sender.send_files(files, credential)

        # Identical files compare equal, so map results back by identity
        path_of = {id(file): path for path, file in zip(paths, files)}
        for file in result.sent_files:
            self.ui.display_output(f"sent     {path_of[id(file)]}")
        for file in result.skipped_files:
            self.ui.display_output(f"skipped  {path_of[id(file)]}")

        if result.all_sent:
            self.ui.display_info(f"All {len(files)} file(s) sent to {outbox_dir}.")
            return EXIT_OK
        self.ui.display_warning(f"{len(result.skipped_files)} of {len(files)} file(s) skipped.")
        return EXIT_FAILED

    def handle_sign_check(self, path: str, key_id: Optional[str] = None) -> int:
        """Handles the 'sign-check' command: verifies one signed outbox payload."""
        logger.info(f"Handling 'sign-check' command for: {path}")
        try:
            credential = self.credential_provider(key_id)
            signed = self.file_system.read_file(path)
        except (MockdrillsError, OSError) as e:
            logger.error(f"Sign check could not start: {e}", exc_info=True)
            self.ui.display_error(f"Sign check failed: {e}")
            return EXIT_USAGE

        if self.cryptographer.verify(signed.content, credential):
            self.ui.display_info(f"Signature of '{path}' is valid for key '{credential.key_id}'.")
            return EXIT_OK
        self.ui.display_error(f"Signature of '{path}' is NOT valid for key '{credential.key_id}'.")
        return EXIT_FAILED

    def _expand_patterns(self, patterns: Sequence[str]) -> List[str]:
        """Resolves glob patterns to unique paths, keeping first-seen order."""
        paths: List[str] = []
        for pattern in patterns:
            matches = self.file_system.find_files(pattern)
            if not matches:
                logger.warning(f"No files match pattern: {pattern}")
            for match in matches:
                if match not in paths:
                    paths.append(match)
        if not paths:
            raise ConfigurationError("No files matched the given patterns.")
        return paths
