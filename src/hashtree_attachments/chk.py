"""Content-hash-key (CHK) encryption for attachment blobs.

The decrypt key is the SHA-256 of the plaintext, so identical content always
produces identical ciphertext. The AES key is derived from the decrypt key
with HKDF, and encryption uses a fixed all-zero nonce: the derived key is
unique per plaintext, so no (key, nonce) pair is reused across contents.
Changing the nonce scheme changes the wire format.
"""

import hashlib
import hmac
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.hashes import SHA256
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from .encoding import hex_encode
from .types import (
    AuthenticationError,
    CHK_INFO,
    CHK_SALT,
    HASH_SIZE,
    KEY_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
)


ZERO_NONCE = bytes(NONCE_SIZE)


@dataclass(frozen=True)
class EncryptedBlob:
    """CHK-encrypted blob ready for upload."""
    encrypted_bytes: bytes  # ciphertext + 16-byte tag
    decrypt_key: bytes  # 32 bytes, SHA-256 of plaintext
    encrypted_hash: bytes  # 32 bytes, SHA-256 of encrypted_bytes

    @property
    def encrypted_hash_hex(self) -> str:
        """Lowercase hex of the encrypted hash (the blob store key)."""
        return hex_encode(self.encrypted_hash)


def derive_chk_key(decrypt_key: bytes) -> bytes:
    """
    Derive the AES-256 key for a CHK decrypt key.

    Args:
        decrypt_key: 32-byte content hash

    Returns:
        32-byte AES key
    """
    hkdf = HKDF(algorithm=SHA256(), length=32, salt=CHK_SALT, info=CHK_INFO)
    return hkdf.derive(decrypt_key)


def encrypt_chk_for_upload(plaintext: bytes) -> EncryptedBlob:
    """
    Encrypt attachment bytes with a content-derived key.

    Args:
        plaintext: Attachment bytes

    Returns:
        EncryptedBlob with ciphertext, decrypt key and ciphertext hash
    """
    decrypt_key = hashlib.sha256(plaintext).digest()

    cipher = AESGCM(derive_chk_key(decrypt_key))
    encrypted_bytes = cipher.encrypt(ZERO_NONCE, bytes(plaintext), None)

    return EncryptedBlob(
        encrypted_bytes=encrypted_bytes,
        decrypt_key=decrypt_key,
        encrypted_hash=hashlib.sha256(encrypted_bytes).digest(),
    )


def decrypt_chk_download(encrypted_bytes: bytes, decrypt_key: bytes) -> bytes:
    """
    Decrypt a downloaded CHK blob.

    Args:
        encrypted_bytes: Ciphertext followed by the 16-byte GCM tag
        decrypt_key: 32-byte decrypt key from the nhash reference

    Returns:
        Plaintext bytes

    Raises:
        ValueError: If the key is not 32 bytes or the blob is shorter than a tag
        AuthenticationError: If the tag does not verify
    """
    if len(decrypt_key) != KEY_SIZE:
        raise ValueError(f"Decrypt key must be {KEY_SIZE} bytes, got {len(decrypt_key)}")
    if len(encrypted_bytes) < TAG_SIZE:
        raise ValueError(
            f"Encrypted data too short: {len(encrypted_bytes)} bytes (minimum {TAG_SIZE})"
        )

    cipher = AESGCM(derive_chk_key(decrypt_key))
    try:
        return cipher.decrypt(ZERO_NONCE, bytes(encrypted_bytes), None)
    except InvalidTag as e:
        raise AuthenticationError("CHK authentication failed: corrupted blob or wrong key") from e


def verify_encrypted_hash(encrypted_bytes: bytes, expected_hash: bytes) -> bool:
    """Check that encrypted bytes hash to the expected 32-byte value."""
    if len(expected_hash) != HASH_SIZE:
        return False
    actual = hashlib.sha256(encrypted_bytes).digest()
    return hmac.compare_digest(actual, bytes(expected_hash))
