"""HMAC signing of document content using the `cryptography` package.

Signed payloads are envelopes: a single header line followed by the
original content::

    MDSIG1 <key_id> <hex digest>\\n<content>
"""

import logging
from typing import Optional, Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from mockdrills.domain.exceptions import SigningError
from mockdrills.domain.interfaces.cryptographer import Cryptographer
from mockdrills.domain.models.common import SignedContent
from mockdrills.domain.models.delivery import SigningCredential

logger = logging.getLogger(__name__)

ENVELOPE_MAGIC = b"MDSIG1"

_ALGORITHMS = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}


class HmacCryptographer(Cryptographer):
    """Signs content with HMAC keyed by the credential's secret."""

    def __init__(self, algorithm: str = "sha256"):
        if algorithm not in _ALGORITHMS:
            raise SigningError(f"Unsupported HMAC algorithm '{algorithm}'. Choose one of {sorted(_ALGORITHMS)}.")
        self.algorithm = algorithm

    def _new_hmac(self, credential: SigningCredential) -> hmac.HMAC:
        if not credential.secret:
            raise SigningError(f"Credential '{credential.key_id}' has an empty secret.")
        return hmac.HMAC(credential.secret, _ALGORITHMS[self.algorithm]())

    def sign(self, content: bytes, credential: SigningCredential) -> SignedContent:
        if not credential.key_id or any(c.isspace() for c in credential.key_id):
            raise SigningError(f"Key id {credential.key_id!r} must be non-empty and contain no whitespace.")
        mac = self._new_hmac(credential)
        mac.update(content)
        digest = mac.finalize().hex().encode('ascii')
        header = b" ".join([ENVELOPE_MAGIC, credential.key_id.encode('utf-8'), digest])
        logger.debug(f"Signed {len(content)} byte(s) with key '{credential.key_id}'")
        return SignedContent(header + b"\n" + content)

    def verify(self, signed_content: bytes, credential: SigningCredential) -> bool:
        """Checks an envelope produced by `sign` against a credential.

        Returns False for malformed envelopes, a different key id, or a
        digest mismatch.
        """
        parsed = parse_envelope(signed_content)
        if parsed is None:
            logger.debug("Signed content is not a valid envelope.")
            return False
        key_id, digest_hex, content = parsed
        if key_id != credential.key_id:
            logger.debug(f"Envelope key '{key_id}' does not match credential '{credential.key_id}'.")
            return False
        try:
            expected = bytes.fromhex(digest_hex)
        except ValueError:
            return False
        mac = self._new_hmac(credential)
        mac.update(content)
        try:
            mac.verify(expected)
        except InvalidSignature:
            logger.debug(f"Signature mismatch for key '{key_id}'.")
            return False
        return True


def parse_envelope(signed_content: bytes) -> Optional[Tuple[str, str, bytes]]:
    """Splits an envelope into (key_id, hex digest, content), or None if malformed."""
    header, separator, content = signed_content.partition(b"\n")
    if not separator:
        return None
    parts = header.split(b" ")
    if len(parts) != 3 or parts[0] != ENVELOPE_MAGIC:
        return None
    try:
        return parts[1].decode('utf-8'), parts[2].decode('ascii'), content
    except UnicodeDecodeError:
        return None
