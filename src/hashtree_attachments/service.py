"""
Attachment service for encrypted, content-addressed file sharing.

The AttachmentService ties the pieces together:
- CHK-encrypting attachment bytes
- Building nhash references and message links
- Uploading ciphertext to a BlobStore
- Fetching, verifying and decrypting downloads

Example usage:
    ```python
    service = AttachmentService(store=my_blob_store)

    uploaded = await service.upload_bytes(data, "cat.png")
    content = append_links_to_message("look!", [uploaded.link])

    for link in extract_file_links(content).links:
        plaintext = await service.download(link)
    ```
"""

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .chk import decrypt_chk_download, encrypt_chk_for_upload, verify_encrypted_hash
from .config import AttachmentConfig
from .encoding import hex_encode
from .links import FileLink, build_attachment_aware_preview, format_file_link
from .nhash import decode_nhash, encode_nhash
from .storage import BlobStore
from .types import AttachmentError, AuthenticationError, BlobIntegrityError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedAttachment:
    """Attachment stored in the blob store."""
    nhash: str
    link: str
    filename: str
    encrypted_hash_hex: str


@dataclass(frozen=True)
class PreparedAttachment:
    """Encrypted attachment ready for upload."""
    nhash: str
    link: str
    filename: str
    encrypted_hash_hex: str
    encrypted_bytes: bytes

    def to_uploaded_attachment(self) -> UploadedAttachment:
        """Drop the ciphertext once it has been uploaded."""
        return UploadedAttachment(
            nhash=self.nhash,
            link=self.link,
            filename=self.filename,
            encrypted_hash_hex=self.encrypted_hash_hex,
        )


class AttachmentService:
    """Prepares, uploads and downloads CHK-encrypted attachments."""

    def __init__(
        self,
        store: BlobStore,
        config: Optional[AttachmentConfig] = None,
    ) -> None:
        """
        Initialize the attachment service.

        Args:
            store: Blob store holding encrypted bytes.
            config: Optional configuration (default: AttachmentConfig()).
        """
        self.store = store
        self.config = config or AttachmentConfig()

    def prepare_bytes(self, data: bytes, filename: str) -> PreparedAttachment:
        """
        Encrypt attachment bytes and build its reference and link.

        Args:
            data: Attachment bytes.
            filename: Display filename embedded in the link.

        Returns:
            PreparedAttachment holding the ciphertext.

        Raises:
            AttachmentError: If the filename or data is empty, or data is too large.
        """
        name = filename.strip()
        if not name:
            raise AttachmentError("Attachment filename is empty")
        if not data:
            raise AttachmentError("Attachment file is empty")
        if len(data) > self.config.max_attachment_size:
            raise AttachmentError(
                f"Attachment too large: {len(data)} bytes (max {self.config.max_attachment_size})"
            )

        blob = encrypt_chk_for_upload(data)
        nhash = encode_nhash(
            blob.encrypted_hash,
            blob.decrypt_key,
            max_length=self.config.max_reference_length,
        )
        link = format_file_link(nhash, name)

        logger.debug("Prepared attachment %s (%d bytes)", blob.encrypted_hash_hex, len(data))

        return PreparedAttachment(
            nhash=nhash,
            link=link,
            filename=name,
            encrypted_hash_hex=blob.encrypted_hash_hex,
            encrypted_bytes=blob.encrypted_bytes,
        )

    def prepare_file(
        self,
        file_path: Union[str, Path],
        filename: Optional[str] = None,
    ) -> PreparedAttachment:
        """
        Read and prepare an attachment from disk.

        Args:
            file_path: Path to the attachment.
            filename: Display filename (default: the file's basename).

        Returns:
            PreparedAttachment holding the ciphertext.

        Raises:
            AttachmentError: If the file does not exist or is unusable.
        """
        path = Path(file_path)
        name = filename.strip() if filename and filename.strip() else path.name
        if not path.is_file():
            raise AttachmentError(f"Attachment file does not exist: {file_path}")

        return self.prepare_bytes(path.read_bytes(), name)

    async def upload_prepared(self, prepared: PreparedAttachment) -> UploadedAttachment:
        """Upload a prepared attachment's ciphertext."""
        await self.store.put(prepared.encrypted_hash_hex, prepared.encrypted_bytes)
        logger.info("Uploaded attachment %s", prepared.encrypted_hash_hex)
        return prepared.to_uploaded_attachment()

    async def upload_bytes(self, data: bytes, filename: str) -> UploadedAttachment:
        """Prepare and upload attachment bytes."""
        return await self.upload_prepared(self.prepare_bytes(data, filename))

    async def upload_file(
        self,
        file_path: Union[str, Path],
        filename: Optional[str] = None,
    ) -> UploadedAttachment:
        """Prepare and upload an attachment from disk."""
        return await self.upload_prepared(self.prepare_file(file_path, filename))

    def preview(self, text: str) -> str:
        """Conversation-list preview of a message, using the configured length."""
        return build_attachment_aware_preview(text, max_length=self.config.preview_max_length)

    async def download(self, link: FileLink) -> bytes:
        """
        Fetch and decrypt an attachment.

        Args:
            link: Attachment link parsed from message text.

        Returns:
            Decrypted attachment bytes.

        Raises:
            AttachmentError: If the link's nhash is invalid or has no decrypt key.
            BlobNotFoundError: If the store does not have the blob.
            BlobIntegrityError: If the fetched bytes do not match the hash.
            AuthenticationError: If decryption fails.
        """
        decoded = decode_nhash(link.nhash, max_length=self.config.max_reference_length)
        if decoded is None:
            raise AttachmentError(f"Invalid attachment reference: {link.nhash}")
        if decoded.decrypt_key is None:
            raise AttachmentError("Attachment reference has no decrypt key")

        hash_hex = hex_encode(decoded.hash)
        encrypted_bytes = await self.store.get(hash_hex)

        if not verify_encrypted_hash(encrypted_bytes, decoded.hash):
            actual = hashlib.sha256(encrypted_bytes).hexdigest()
            logger.warning("Attachment %s failed integrity check (got %s)", hash_hex, actual)
            raise BlobIntegrityError(hash_hex, actual)

        try:
            plaintext = decrypt_chk_download(encrypted_bytes, decoded.decrypt_key)
        except AuthenticationError:
            logger.warning("Attachment %s failed to decrypt", hash_hex)
            raise

        logger.debug("Downloaded attachment %s (%d bytes)", hash_hex, len(plaintext))
        return plaintext

    async def download_to_path(self, link: FileLink, output_path: Union[str, Path]) -> Path:
        """Download an attachment and write it to output_path."""
        plaintext = await self.download(link)
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(plaintext)
        return path
