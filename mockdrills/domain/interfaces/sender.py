import abc

from mockdrills.domain.models.common import SignedContent


class Sender(abc.ABC):
    """Interface for delivering signed payloads."""

    @abc.abstractmethod
    def try_send(self, signed_content: SignedContent) -> bool:
        """Delivers a signed payload.

        Args:
            signed_content: The payload produced by a Cryptographer.

        Returns:
            True if the payload was delivered, False otherwise.
        """
        pass
