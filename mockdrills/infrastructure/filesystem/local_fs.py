"""Concrete implementation of the FileSystem interface using standard Python libraries
for local file system operations.

Uses `pathlib` and `glob` for file operations.
"""

import glob
import logging
from pathlib import Path
from typing import List

from mockdrills.domain.interfaces.file_system import FileSystem
from mockdrills.domain.models.common import FileName
from mockdrills.domain.models.delivery import File

logger = logging.getLogger(__name__)


class LocalFileSystem(FileSystem):
    """Implementation of FileSystem for the local disk."""

    def read_file(self, path: str) -> File:
        """Reads a file's raw bytes into a File named after its base name."""
        file_path = Path(path)
        logger.debug(f"Attempting to read file: {file_path}")
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            content = file_path.read_bytes()
        except PermissionError as e:
            logger.error(f"Permission denied reading file: {file_path}")
            raise PermissionError(f"Permission denied: {path}") from e
        logger.debug(f"Successfully read {len(content)} bytes from {file_path}")
        return File(name=FileName(file_path.name), content=content)

    def find_files(self, pattern: str) -> List[str]:
        """Finds files using glob patterns; `**` matches recursively."""
        logger.debug(f"Searching for files matching glob pattern: {pattern}")
        matched_paths = sorted(glob.glob(pattern, recursive=True))
        result = [p for p in matched_paths if Path(p).is_file()]
        logger.debug(f"Found {len(result)} files matching '{pattern}'")
        return result
