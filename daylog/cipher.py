"""Symmetric encryption for free-text note fields.

Cipher-text uses the OpenSSL passphrase layout
``base64("Salted__" + salt + AES-256-CBC(plaintext))`` with the key and IV
derived by ``EVP_BytesToKey`` (MD5, one round). Notes already stored by the
web client are in this layout, so they decrypt here unchanged.

Both directions fail open: a value that cannot be encrypted is stored as is,
and a value that cannot be decrypted is returned as is. Notes written before
encryption was introduced are plain strings and pass through.
"""
from __future__ import annotations

import base64
import hashlib
import logging
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

logger = logging.getLogger(__name__)

SALT_HEADER = b"Salted__"
SALT_SIZE = 8
KEY_SIZE = 32
IV_SIZE = 16
LEGACY_PLAINTEXT_MAX_LEN = 20


def _evp_bytes_to_key(passphrase: bytes, salt: bytes) -> tuple[bytes, bytes]:
    derived = b""
    block = b""
    while len(derived) < KEY_SIZE + IV_SIZE:
        block = hashlib.md5(block + passphrase + salt).digest()
        derived += block
    return derived[:KEY_SIZE], derived[KEY_SIZE : KEY_SIZE + IV_SIZE]


def looks_like_plaintext(value: str) -> bool:
    # No format tag distinguishes the two, so short strings without base64
    # symbols are taken to be notes saved before encryption existed.
    return "/" not in value and "+" not in value and len(value) < LEGACY_PLAINTEXT_MAX_LEN


class NoteCipher:
    def __init__(self, secret: str):
        self._passphrase = str(secret).encode("utf-8")

    def _encrypt_raw(self, plaintext: str) -> str:
        salt = os.urandom(SALT_SIZE)
        key, iv = _evp_bytes_to_key(self._passphrase, salt)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        body = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(SALT_HEADER + salt + body).decode("ascii")

    def _decrypt_raw(self, cipher_text: str) -> str:
        raw = base64.b64decode(cipher_text.encode("ascii"), validate=True)
        if not raw.startswith(SALT_HEADER) or len(raw) <= len(SALT_HEADER) + SALT_SIZE:
            raise ValueError("Missing salt header")
        salt = raw[len(SALT_HEADER) : len(SALT_HEADER) + SALT_SIZE]
        body = raw[len(SALT_HEADER) + SALT_SIZE :]
        key, iv = _evp_bytes_to_key(self._passphrase, salt)
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(body) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")

    def encrypt(self, plaintext: str | None) -> str:
        if not plaintext:
            return ""
        try:
            return self._encrypt_raw(plaintext)
        except Exception as exc:
            logger.warning("Note encryption failed, storing plaintext: %s", exc)
            return plaintext

    def decrypt(self, cipher_text: str | None) -> str:
        if not cipher_text:
            return ""
        if looks_like_plaintext(cipher_text):
            return cipher_text
        try:
            plaintext = self._decrypt_raw(cipher_text)
        except Exception as exc:
            logger.debug("Value is not readable cipher-text, returning it as is: %s", exc)
            return cipher_text
        if not plaintext:
            return cipher_text
        return plaintext

    def encrypt_array(self, items) -> list[str]:
        if not items:
            return []
        return [self.encrypt(item) for item in items]

    def decrypt_array(self, items) -> list[str]:
        if not items:
            return []
        return [self.decrypt(item) for item in items]
