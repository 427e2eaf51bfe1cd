"""Type definitions and protocol constants for hashtree attachments."""


# Reference format constants
NHASH_HRP = "nhash"
MAX_REFERENCE_LENGTH = 4096  # BIP-173 caps at 90; keyed references are longer
HASH_SIZE = 32
KEY_SIZE = 32

# TLV tags
TLV_HASH = 0
TLV_DECRYPT_KEY = 5

# CHK constants
TAG_SIZE = 16
NONCE_SIZE = 12
CHK_SALT = b"hashtree-chk"
CHK_INFO = b"encryption-key"

# Message text
LINK_SCHEMES = ("htree://", "nhash://")
DEFAULT_PREVIEW_LENGTH = 50


# Exception types
class HashtreeError(Exception):
    """Base exception for hashtree attachment errors."""
    pass


class Bech32Error(HashtreeError, ValueError):
    """Malformed bech32 string or bit-group payload."""
    pass


class AuthenticationError(HashtreeError):
    """Ciphertext failed authentication (corrupted blob or wrong key)."""
    pass


class AttachmentError(HashtreeError):
    """Attachment could not be prepared, uploaded or downloaded."""
    pass


class BlobNotFoundError(HashtreeError):
    """Blob not present in the store."""

    def __init__(self, hash_hex: str) -> None:
        self.hash_hex = hash_hex
        super().__init__(f"Blob not found: {hash_hex}")


class BlobIntegrityError(HashtreeError):
    """Stored blob does not hash to the referenced value."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Blob integrity check failed: expected {expected}, got {actual}")
