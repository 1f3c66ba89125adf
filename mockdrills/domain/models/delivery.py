"""Domain models specific to document delivery.

Includes the raw `File`, the recognized `Document`, the credential used
for signing and the `SendResult` of a batch.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from mockdrills.domain.models.common import DocumentFormat, FileName


@dataclass(frozen=True)
class File:
    """A raw input item: a name and its byte content."""
    name: FileName
    content: bytes


@dataclass(frozen=True)
class Document:
    """A file after recognition."""
    name: FileName
    content: bytes
    created: datetime
    format: DocumentFormat


@dataclass(frozen=True)
class SigningCredential:
    """Key material handed to a Cryptographer."""
    key_id: str
    secret: bytes = field(repr=False)


@dataclass
class SendResult:
    """Result of sending a batch of files.

    Both lists preserve the order of the input batch.
    """
    skipped_files: List[File] = field(default_factory=list)
    sent_files: List[File] = field(default_factory=list)

    @property
    def all_sent(self) -> bool:
        """True when no file in the batch was skipped."""
        return not self.skipped_files
