"""
hashtree-attachments - Encrypted, content-addressed chat attachments

Python implementation of hashtree CHK encryption (HKDF-SHA256 + AES-256-GCM),
bech32 nhash references, and attachment links in message text.
"""

from .bech32 import convert_bits, bech32_encode, bech32_decode, CHARSET
from .nhash import encode_nhash, decode_nhash, is_nhash, DecodedNhash
from .chk import (
    encrypt_chk_for_upload,
    decrypt_chk_download,
    derive_chk_key,
    verify_encrypted_hash,
    EncryptedBlob,
)
from .links import (
    format_file_link,
    parse_file_link,
    extract_file_links,
    append_links_to_message,
    build_attachment_aware_preview,
    is_image_filename,
    FileLink,
    FileLinkExtraction,
)
from .encoding import hex_encode, hex_decode
from .config import AttachmentConfig
from .storage import BlobStore, InMemoryBlobStore
from .service import AttachmentService, PreparedAttachment, UploadedAttachment
from .types import (
    NHASH_HRP,
    MAX_REFERENCE_LENGTH,
    HashtreeError,
    Bech32Error,
    AuthenticationError,
    AttachmentError,
    BlobNotFoundError,
    BlobIntegrityError,
)

__version__ = "0.1.0"

__all__ = [
    # Bech32
    "convert_bits",
    "bech32_encode",
    "bech32_decode",
    "CHARSET",
    # Nhash
    "encode_nhash",
    "decode_nhash",
    "is_nhash",
    "DecodedNhash",
    # CHK
    "encrypt_chk_for_upload",
    "decrypt_chk_download",
    "derive_chk_key",
    "verify_encrypted_hash",
    "EncryptedBlob",
    # Links
    "format_file_link",
    "parse_file_link",
    "extract_file_links",
    "append_links_to_message",
    "build_attachment_aware_preview",
    "is_image_filename",
    "FileLink",
    "FileLinkExtraction",
    # Encoding
    "hex_encode",
    "hex_decode",
    # Config
    "AttachmentConfig",
    # Storage
    "BlobStore",
    "InMemoryBlobStore",
    # Service
    "AttachmentService",
    "PreparedAttachment",
    "UploadedAttachment",
    # Constants
    "NHASH_HRP",
    "MAX_REFERENCE_LENGTH",
    # Errors
    "HashtreeError",
    "Bech32Error",
    "AuthenticationError",
    "AttachmentError",
    "BlobNotFoundError",
    "BlobIntegrityError",
]
