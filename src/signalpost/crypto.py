"""Cipher-key payload encryption with NaCl SecretBox (XSalsa20-Poly1305)."""

from __future__ import annotations

import base64
import hashlib

import nacl.utils
from nacl.secret import SecretBox

# Used instead of a random nonce when use_random_iv is off, so that the
# same message and key always produce the same ciphertext.
FIXED_NONCE = b"0123456789012345signalpo"


def derive_key(cipher_key: str) -> bytes:
    """Stretch an arbitrary cipher key string to SecretBox.KEY_SIZE bytes."""
    return hashlib.sha256(cipher_key.encode("utf-8")).digest()


class Crypto:
    """Encrypts message text into base64 ciphertext and back."""

    def __init__(self, cipher_key: str, use_random_iv: bool = True) -> None:
        if not cipher_key:
            raise ValueError("cipher_key must not be empty")
        self._box = SecretBox(derive_key(cipher_key))
        self.use_random_iv = use_random_iv

    def _nonce(self) -> bytes:
        if self.use_random_iv:
            return nacl.utils.random(SecretBox.NONCE_SIZE)
        return FIXED_NONCE

    def encrypt(self, plaintext: str) -> str:
        """Encrypt text; the nonce is prepended to the ciphertext before base64."""
        ct = self._box.encrypt(plaintext.encode("utf-8"), self._nonce())
        return base64.b64encode(bytes(ct)).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt base64 text produced by encrypt()."""
        pt = self._box.decrypt(base64.b64decode(ciphertext))
        return pt.decode("utf-8")
