"""
Access token encryption at rest (Fernet: AES-128-CBC + HMAC-SHA256).

The Fernet key is derived from TOKEN_ENCRYPTION_KEY, which must be at least
32 characters.
"""
import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken

from creatorfit import config

MIN_KEY_LENGTH = 32


class TokenEncryptionError(Exception):
    """Key misconfigured or ciphertext cannot be decrypted."""


def _fernet():
    secret = config.TOKEN_ENCRYPTION_KEY or ''
    if len(secret) < MIN_KEY_LENGTH:
        raise TokenEncryptionError(f'TOKEN_ENCRYPTION_KEY must be at least {MIN_KEY_LENGTH} chars')
    digest = hashlib.sha256(secret.encode('utf-8')).digest()
    return Fernet(base64.urlsafe_b64encode(digest))


def encrypt_token(token: str) -> str:
    return _fernet().encrypt(token.encode('utf-8')).decode('ascii')


def decrypt_token(encrypted: str) -> str:
    try:
        return _fernet().decrypt(encrypted.encode('ascii')).decode('utf-8')
    except (InvalidToken, UnicodeError) as e:
        raise TokenEncryptionError('Stored token cannot be decrypted') from e
