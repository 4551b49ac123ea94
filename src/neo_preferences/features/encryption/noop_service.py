"""Pass-through encryption service used when none is configured."""


class NoOpEncryptionService:
    """Identity encrypt/decrypt; nothing is ever recognized as encrypted."""

    async def encrypt(self, value: str) -> str:
        return value

    async def decrypt(self, encrypted: str) -> str:
        return encrypted

    def is_encrypted(self, value: str) -> bool:
        return False
