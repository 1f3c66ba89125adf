"""Recognizer for files that start with a YAML front-matter header.

Recognized layout::

    ---
    format: "4.0"
    created: 2026-10-01T12:00:00
    ---
    <body bytes>

The body after the closing delimiter becomes the document content.
"""

import logging
from datetime import datetime
from typing import Any, Optional

import yaml

from mockdrills.domain.interfaces.recognizer import Recognizer
from mockdrills.domain.models.common import DocumentFormat
from mockdrills.domain.models.delivery import Document, File

logger = logging.getLogger(__name__)

HEADER_DELIMITER = b"---"


class HeaderRecognizer(Recognizer):
    """Recognizes documents carrying `format` and `created` in a header block."""

    def try_recognize(self, file: File) -> Optional[Document]:
        header_bytes, body = self._split_header(file.content)
        if header_bytes is None:
            logger.debug(f"'{file.name}' has no header block.")
            return None

        try:
            # BaseLoader keeps every scalar as its literal text, so 3.10 stays "3.10"
            header = yaml.load(header_bytes.decode('utf-8'), Loader=yaml.BaseLoader)
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            logger.debug(f"'{file.name}' has an unreadable header: {e}")
            return None
        if not isinstance(header, dict):
            logger.debug(f"'{file.name}' header is not a mapping.")
            return None

        doc_format = header.get('format')
        created = _parse_created(header.get('created'))
        if not isinstance(doc_format, str) or not doc_format or created is None:
            logger.debug(f"'{file.name}' header lacks a usable format or created field.")
            return None

        return Document(
            name=file.name,
            content=body,
            created=created,
            format=DocumentFormat(doc_format),
        )

    @staticmethod
    def _split_header(content: bytes):
        """Returns (header, body), or (None, content) if there is no header block."""
        lines = content.splitlines(keepends=True)
        if not lines or lines[0].rstrip(b"\r\n") != HEADER_DELIMITER:
            return None, content
        for index in range(1, len(lines)):
            if lines[index].rstrip(b"\r\n") == HEADER_DELIMITER:
                header = b"".join(lines[1:index])
                body = b"".join(lines[index + 1:])
                return header, body
        return None, content


def _parse_created(value: Any) -> Optional[datetime]:
    """Parses an ISO-8601 date or timestamp; aware values become naive local time."""
    if not isinstance(value, str):
        return None
    try:
        created = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if created.tzinfo is not None:
        created = created.astimezone().replace(tzinfo=None)
    return created
