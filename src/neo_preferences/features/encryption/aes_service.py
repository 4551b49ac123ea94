"""AES-256-GCM encryption for sensitive preference values.

Each value gets its own random salt; the key is derived from the password
with scrypt. Encrypted values are marked with a fixed prefix so they can be
recognized without attempting decryption.
"""

import asyncio
import base64
import binascii
import logging
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from ...core.exceptions import EncryptionError

logger = logging.getLogger(__name__)

ENCRYPTED_PREFIX = "encrypted:"


class AESEncryptionService:
    """Password-based AES-GCM encryption service."""

    KEY_LENGTH = 32
    SALT_LENGTH = 32
    NONCE_LENGTH = 12
    MIN_PASSWORD_LENGTH = 8

    # scrypt work factors
    SCRYPT_N = 2 ** 14
    SCRYPT_R = 8
    SCRYPT_P = 1

    def __init__(self, password: str):
        if not password or len(password) < self.MIN_PASSWORD_LENGTH:
            raise EncryptionError(
                f"Password must be at least {self.MIN_PASSWORD_LENGTH} characters long"
            )
        self._password = password.encode("utf-8")

    def _derive_key(self, salt: bytes) -> bytes:
        kdf = Scrypt(
            salt=salt,
            length=self.KEY_LENGTH,
            n=self.SCRYPT_N,
            r=self.SCRYPT_R,
            p=self.SCRYPT_P,
        )
        return kdf.derive(self._password)

    def _encrypt_sync(self, value: str) -> str:
        salt = os.urandom(self.SALT_LENGTH)
        nonce = os.urandom(self.NONCE_LENGTH)
        key = self._derive_key(salt)

        ciphertext = AESGCM(key).encrypt(nonce, value.encode("utf-8"), None)
        payload = base64.b64encode(salt + nonce + ciphertext).decode("ascii")
        return f"{ENCRYPTED_PREFIX}{payload}"

    def _decrypt_sync(self, encrypted: str) -> str:
        data = base64.b64decode(encrypted[len(ENCRYPTED_PREFIX):], validate=True)

        header_length = self.SALT_LENGTH + self.NONCE_LENGTH
        if len(data) <= header_length:
            raise ValueError("Encrypted payload is truncated")

        salt = data[:self.SALT_LENGTH]
        nonce = data[self.SALT_LENGTH:header_length]
        key = self._derive_key(salt)

        return AESGCM(key).decrypt(nonce, data[header_length:], None).decode("utf-8")

    async def encrypt(self, value: str) -> str:
        """Encrypt ``value``; key derivation runs in a worker thread."""
        try:
            return await asyncio.to_thread(self._encrypt_sync, value)
        except Exception as e:
            raise EncryptionError("Failed to encrypt value", e)

    async def decrypt(self, encrypted: str) -> str:
        """Decrypt a value produced by ``encrypt``.

        Raises:
            EncryptionError: The value is not encrypted, is malformed, or
                was encrypted with another password
        """
        if not self.is_encrypted(encrypted):
            raise EncryptionError("Value is not encrypted")

        try:
            return await asyncio.to_thread(self._decrypt_sync, encrypted)
        except (InvalidTag, binascii.Error, ValueError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to decrypt preference value: {type(e).__name__}")
            raise EncryptionError("Failed to decrypt value", e)

    def is_encrypted(self, value: str) -> bool:
        return isinstance(value, str) and value.startswith(ENCRYPTED_PREFIX)
