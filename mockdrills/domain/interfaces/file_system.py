import abc
from typing import List

from mockdrills.domain.models.delivery import File


class FileSystem(abc.ABC):
    """Interface for file system operations."""

    @abc.abstractmethod
    def read_file(self, path: str) -> File:
        """Reads a file as raw bytes.

        Args:
            path: The path to the file.

        Returns:
            A File named after the path's base name.

        Raises:
            FileNotFoundError: If the file does not exist.
            PermissionError: If the user lacks permission to read the file.
        """
        pass

    @abc.abstractmethod
    def find_files(self, pattern: str) -> List[str]:
        """Finds files matching a pattern.

        Args:
            pattern: A glob pattern.

        Returns:
            A list of file paths matching the pattern.
        """
        pass
