"""Sender that delivers signed payloads into a local outbox directory.

Each payload is stored under its SHA-256 digest, sharded by the first two
hex characters, and written atomically.
"""

import hashlib
import logging
import os
from pathlib import Path
from typing import Union

from mockdrills.domain.exceptions import DeliveryError
from mockdrills.domain.interfaces.sender import Sender
from mockdrills.domain.models.common import SignedContent

logger = logging.getLogger(__name__)

SIGNED_SUFFIX = ".sig"


class OutboxSender(Sender):
    """Writes each signed payload to `<outbox>/<hh>/<sha256>.sig`."""

    def __init__(self, outbox_dir: Union[str, Path]):
        """Initializes the sender and creates the outbox directory.

        Raises:
            DeliveryError: If the outbox directory cannot be created.
        """
        self.outbox_dir = Path(outbox_dir)
        try:
            self.outbox_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DeliveryError(f"Cannot prepare outbox directory {self.outbox_dir}: {e}") from e
        logger.info(f"OutboxSender initialized. outbox={self.outbox_dir}")

    def path_for(self, signed_content: bytes) -> Path:
        """Returns where a payload is (or would be) stored."""
        digest = hashlib.sha256(signed_content).hexdigest()
        return self.outbox_dir / digest[:2] / f"{digest}{SIGNED_SUFFIX}"

    def try_send(self, signed_content: SignedContent) -> bool:
        target = self.path_for(signed_content)
        temp_path = target.with_suffix('.tmp')
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, 'wb') as f:
                f.write(signed_content)
            os.replace(str(temp_path), str(target))
        except OSError as e:
            logger.warning(f"Failed to deliver payload to {target}: {e}")
            try:
                temp_path.unlink(missing_ok=True)
            except OSError as cleanup_err:
                logger.debug(f"Could not remove temp file {temp_path}: {cleanup_err}")
            return False
        logger.debug(f"Delivered {len(signed_content)} byte(s) to {target}")
        return True
