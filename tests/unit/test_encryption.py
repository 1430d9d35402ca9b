"""
Tests for EncryptionService.
"""

import pytest

from app.utils.encryption import EncryptionService, init_encryption_service
from app.utils.exceptions import SecurityError


@pytest.fixture
def service() -> EncryptionService:
    return EncryptionService(EncryptionService.generate_key(), "test")


class TestEncryptionService:
    """Tests for encrypting bank details."""

    def test_encrypt_decrypt(self, service) -> None:
        ciphertext = service.encrypt("DE89370400440532013000")

        assert ciphertext != "DE89370400440532013000"
        assert service.decrypt(ciphertext) == "DE89370400440532013000"

    def test_json_document(self, service) -> None:
        details = {"account_number": "000123456789", "routing_number": "021000021"}

        assert service.decrypt_json(service.encrypt_json(details)) == details

    def test_wrong_key(self, service) -> None:
        """Ciphertext from another key is refused."""
        other = EncryptionService(EncryptionService.generate_key(), "test")

        with pytest.raises(SecurityError, match="Decryption failed"):
            other.decrypt(service.encrypt("secret"))

    def test_corrupt_ciphertext(self, service) -> None:
        with pytest.raises(SecurityError):
            service.decrypt("not-a-token")

    def test_enabled(self, service) -> None:
        assert service.enabled is True
        assert EncryptionService(None, "development").enabled is False


class TestWithoutKey:
    """Pass-through mode outside production."""

    def test_development_passthrough(self) -> None:
        service = EncryptionService(None, "development")

        assert service.encrypt("plain") == "plain"
        assert service.decrypt("plain") == "plain"

    def test_invalid_key_in_development(self) -> None:
        service = EncryptionService("short", "development")

        assert service.enabled is False

    def test_production_requires_key(self) -> None:
        with pytest.raises(SecurityError, match="not configured"):
            EncryptionService(None, "production")

    def test_production_rejects_invalid_key(self) -> None:
        with pytest.raises(SecurityError, match="Invalid encryption key"):
            EncryptionService("short", "production")


class TestSingleton:

    def test_init_replaces_instance(self) -> None:
        key = EncryptionService.generate_key()

        service = init_encryption_service(key, "test")

        assert service.enabled is True
        assert service.decrypt(service.encrypt("x")) == "x"
