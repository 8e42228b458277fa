"""Ed25519 request signature verification."""
from typing import Optional

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from .errors import ConfigurationError

SIGNATURE_HEADER = 'X-Signature-Ed25519'
TIMESTAMP_HEADER = 'X-Signature-Timestamp'


class SignatureVerifier:
    """Checks that a request body was signed by the platform.

    The public key is decoded once; a malformed key raises ConfigurationError
    so the service refuses to start.
    """

    def __init__(self, public_key: str, logger=None):
        if not public_key:
            raise ConfigurationError("DISCORD_PUBLIC_KEY not configured")
        try:
            self._verify_key = VerifyKey(bytes.fromhex(public_key.strip()))
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid DISCORD_PUBLIC_KEY: {e}") from e
        self.logger = logger

    def verify(self, body: bytes, timestamp: Optional[str], signature: Optional[str]) -> bool:
        """Verify a request signature.

        Args:
            body: Raw request bytes, exactly as received
            timestamp: X-Signature-Timestamp header value
            signature: X-Signature-Ed25519 header value (hex)

        Returns:
            True if the signature matches timestamp + body
        """
        if not signature or not timestamp:
            self._warn("Missing signature headers")
            return False

        try:
            message = timestamp.encode() + body
            self._verify_key.verify(message, bytes.fromhex(signature))
            return True
        except (BadSignatureError, ValueError) as e:
            # ValueError covers bad hex and wrong signature length
            self._warn("Signature verification failed", error_type=type(e).__name__)
            return False

    def _warn(self, message: str, **kwargs):
        if self.logger:
            self.logger.warning(message, **kwargs)
