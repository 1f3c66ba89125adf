"""Validates, signs and delivers a batch of files.

Each file runs through recognition, a format whitelist, a freshness check,
signing and delivery. A file that fails any stage is reported as skipped;
files never affect each other.
"""

import logging
from datetime import datetime
from typing import Callable, FrozenSet, Iterable, Sequence

from mockdrills.domain.interfaces.cryptographer import Cryptographer
from mockdrills.domain.interfaces.recognizer import Recognizer
from mockdrills.domain.interfaces.sender import Sender
from mockdrills.domain.models.delivery import Document, File, SendResult, SigningCredential
from mockdrills.utils.dates import add_months

logger = logging.getLogger(__name__)

DEFAULT_ACCEPTED_FORMATS: FrozenSet[str] = frozenset({"4.0", "3.1"})
MAX_DOCUMENT_AGE_MONTHS = 1


class FileSender:
    """Sends files whose documents are recognized, supported and recent."""

    def __init__(
        self,
        cryptographer: Cryptographer,
        sender: Sender,
        recognizer: Recognizer,
        accepted_formats: Iterable[str] = DEFAULT_ACCEPTED_FORMATS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initializes the FileSender.

        Args:
            cryptographer: Signs document content.
            sender: Delivers signed content.
            recognizer: Turns raw files into documents.
            accepted_formats: Exact format strings that may be sent.
            clock: Returns the current time; compared against document
                creation times.
        """
        self.cryptographer = cryptographer
        self.sender = sender
        self.recognizer = recognizer
        self.accepted_formats = frozenset(accepted_formats)
        self.clock = clock

    def send_files(self, files: Sequence[File], credential: SigningCredential) -> SendResult:
        """Sends every file independently and reports the skipped ones.

        Args:
            files: The batch to send.
            credential: Key material passed to the cryptographer.

        Returns:
            A SendResult whose lists keep the batch order.
        """
        result = SendResult()
        for file in files:
            if self._try_send_file(file, credential):
                result.sent_files.append(file)
            else:
                result.skipped_files.append(file)
        logger.info(
            f"Sent {len(result.sent_files)} of {len(files)} file(s), "
            f"skipped {len(result.skipped_files)}."
        )
        return result

    def _try_send_file(self, file: File, credential: SigningCredential) -> bool:
        try:
            document = self.recognizer.try_recognize(file)
            if document is None:
                logger.debug(f"Skipping '{file.name}': not recognized.")
                return False
            if not self._check_format(document) or not self._check_actual(document):
                return False
            signed_content = self.cryptographer.sign(document.content, credential)
            if not self.sender.try_send(signed_content):
                logger.debug(f"Skipping '{file.name}': delivery refused.")
                return False
            return True
        except Exception as e:
            logger.warning(f"Skipping '{file.name}': {e}", exc_info=True)
            return False

    def _check_format(self, document: Document) -> bool:
        if document.format in self.accepted_formats:
            return True
        logger.debug(f"Skipping '{document.name}': unsupported format '{document.format}'.")
        return False

    def _check_actual(self, document: Document) -> bool:
        if add_months(document.created, MAX_DOCUMENT_AGE_MONTHS) > self.clock():
            return True
        logger.debug(f"Skipping '{document.name}': created {document.created.isoformat()} is too old.")
        return False
