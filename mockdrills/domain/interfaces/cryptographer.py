import abc

from mockdrills.domain.models.common import SignedContent
from mockdrills.domain.models.delivery import SigningCredential


class Cryptographer(abc.ABC):
    """Interface for signing document content."""

    @abc.abstractmethod
    def sign(self, content: bytes, credential: SigningCredential) -> SignedContent:
        """Signs content with the given credential.

        Args:
            content: The bytes to sign.
            credential: Key material to sign with.

        Returns:
            The signed payload, ready to hand to a Sender.

        Raises:
            SigningError: If the credential cannot be used.
        """
        pass

    @abc.abstractmethod
    def verify(self, signed_content: bytes, credential: SigningCredential) -> bool:
        """Checks a payload produced by `sign` against a credential.

        Args:
            signed_content: The signed payload.
            credential: Key material the payload should have been signed with.

        Returns:
            True if the signature matches, False otherwise.
        """
        pass
