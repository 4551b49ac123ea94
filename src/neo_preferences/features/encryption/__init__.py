"""Encryption services for sensitive preference values."""

from .aes_service import AESEncryptionService, ENCRYPTED_PREFIX
from .noop_service import NoOpEncryptionService

__all__ = [
    "AESEncryptionService",
    "ENCRYPTED_PREFIX",
    "NoOpEncryptionService",
]
