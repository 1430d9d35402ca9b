"""Encryption utilities for bank details and other PII."""

import base64
import json
from typing import Any

from cryptography.fernet import Fernet, InvalidToken
from loguru import logger

from app.utils.exceptions import SecurityError


class EncryptionService:
    """
    Encryption service for sensitive data.

    Uses Fernet (symmetric encryption). Without a key the service runs
    in pass-through mode, which is refused in production.
    """

    def __init__(
        self,
        encryption_key: str | None = None,
        environment: str = "development",
    ) -> None:
        """
        Initialize encryption service.

        Args:
            encryption_key: Base64-encoded Fernet key
            environment: Deployment environment name

        Raises:
            SecurityError: Missing or invalid key in production
        """
        self.environment = environment
        self.fernet: Fernet | None = None

        if encryption_key:
            try:
                self.fernet = Fernet(encryption_key.encode())
            except ValueError as e:
                logger.error(f"Invalid encryption key: {e}")
                if self.is_production:
                    raise SecurityError(
                        "Invalid encryption key in production environment. "
                        "Encryption is required for bank details."
                    ) from e
        elif self.is_production:
            raise SecurityError(
                "Encryption key not configured in production environment. "
                "Set ENCRYPTION_KEY in .env file."
            )

    @property
    def enabled(self) -> bool:
        """Whether a valid key is loaded."""
        return self.fernet is not None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt plaintext.

        Args:
            plaintext: Text to encrypt

        Returns:
            Encrypted text (base64), or plaintext when disabled (dev only)
        """
        if not self.fernet:
            if self.is_production:
                raise SecurityError(
                    "Encryption must be enabled in production. "
                    "Cannot save bank details without encryption."
                )
            logger.warning("Encryption disabled - storing plaintext (DEV ONLY)")
            return plaintext

        encrypted = self.fernet.encrypt(plaintext.encode())
        return base64.b64encode(encrypted).decode()

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt ciphertext.

        Args:
            ciphertext: Encrypted text (base64)

        Returns:
            Decrypted text

        Raises:
            SecurityError: Token is corrupt or was made with another key
        """
        if not self.fernet:
            if self.is_production:
                raise SecurityError(
                    "Encryption must be enabled in production. "
                    "Cannot decrypt data without encryption service."
                )
            logger.warning("Encryption disabled - returning ciphertext as-is (DEV ONLY)")
            return ciphertext

        try:
            encrypted = base64.b64decode(ciphertext.encode())
            return self.fernet.decrypt(encrypted).decode()
        except (InvalidToken, ValueError) as e:
            logger.error(f"Decryption error: {e}")
            raise SecurityError("Decryption failed") from e

    def encrypt_json(self, data: dict[str, Any]) -> str:
        """
        Encrypt a JSON-serializable mapping (bank details).

        Args:
            data: Mapping to store

        Returns:
            Encrypted JSON document
        """
        return self.encrypt(json.dumps(data, sort_keys=True))

    def decrypt_json(self, ciphertext: str) -> dict[str, Any]:
        """Decrypt a document produced by encrypt_json."""
        return json.loads(self.decrypt(ciphertext))

    @staticmethod
    def generate_key() -> str:
        """
        Generate new Fernet key.

        Returns:
            Base64-encoded key
        """
        return Fernet.generate_key().decode()


# Singleton instance
_encryption_service: EncryptionService | None = None


def get_encryption_service() -> EncryptionService:
    """
    Get encryption service singleton.

    Created from settings on first use.
    """
    global _encryption_service

    if _encryption_service is None:
        from app.config.settings import settings

        _encryption_service = EncryptionService(
            settings.encryption_key, settings.environment
        )

    return _encryption_service


def init_encryption_service(
    encryption_key: str | None = None,
    environment: str = "development",
) -> EncryptionService:
    """Initialize encryption service singleton."""
    global _encryption_service

    _encryption_service = EncryptionService(encryption_key, environment)

    return _encryption_service
