import abc
from typing import Optional

from mockdrills.domain.models.delivery import Document, File


class Recognizer(abc.ABC):
    """Interface for turning a raw file into a Document."""

    @abc.abstractmethod
    def try_recognize(self, file: File) -> Optional[Document]:
        """Recognizes a raw file.

        Args:
            file: The raw file to inspect.

        Returns:
            The recognized Document, or None if the file is not recognized.
        """
        pass
