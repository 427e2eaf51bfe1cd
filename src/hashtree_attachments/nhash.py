"""Encoding and decoding of nhash attachment references.

An nhash is a bech32 string (hrp "nhash") whose payload is a sequence of
TLV records:

    [0]     tag (1 byte)
    [1]     length (1 byte)
    [2..]   value (length bytes)

Tag 0 carries the 32-byte encrypted blob hash and is required. Tag 5
carries the optional 32-byte decrypt key. Other tags are skipped.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .bech32 import bech32_decode, bech32_encode, convert_bits
from .types import (
    Bech32Error,
    HASH_SIZE,
    KEY_SIZE,
    MAX_REFERENCE_LENGTH,
    NHASH_HRP,
    TLV_DECRYPT_KEY,
    TLV_HASH,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedNhash:
    """Decoded nhash payload."""
    hash: bytes  # 32 bytes
    decrypt_key: Optional[bytes] = None  # 32 bytes when present


def encode_nhash(
    hash: bytes,
    decrypt_key: Optional[bytes] = None,
    max_length: int = MAX_REFERENCE_LENGTH,
) -> str:
    """
    Encode a blob hash and optional decrypt key as an nhash string.

    Args:
        hash: 32-byte encrypted blob hash
        decrypt_key: Optional 32-byte CHK decrypt key
        max_length: Maximum length of the bech32 string

    Returns:
        The nhash string

    Raises:
        ValueError: If hash or decrypt_key is not 32 bytes
    """
    if len(hash) != HASH_SIZE:
        raise ValueError(f"Hash must be {HASH_SIZE} bytes, got {len(hash)}")
    if decrypt_key is not None and len(decrypt_key) != KEY_SIZE:
        raise ValueError(f"Decrypt key must be {KEY_SIZE} bytes, got {len(decrypt_key)}")

    tlv = bytes([TLV_HASH, HASH_SIZE]) + bytes(hash)
    if decrypt_key is not None:
        tlv += bytes([TLV_DECRYPT_KEY, KEY_SIZE]) + bytes(decrypt_key)

    data5 = convert_bits(tlv, 8, 5, pad=True)
    return bech32_encode(NHASH_HRP, data5, max_length)


def decode_nhash(nhash: str, max_length: int = MAX_REFERENCE_LENGTH) -> Optional[DecodedNhash]:
    """
    Decode an nhash string.

    References come from other users and relays, so any malformed input
    yields None rather than an exception.

    Args:
        nhash: The nhash string
        max_length: Maximum accepted length of the bech32 string

    Returns:
        DecodedNhash, or None if the reference is not a valid nhash
    """
    if not isinstance(nhash, str):
        return None

    try:
        hrp, data5 = bech32_decode(nhash, max_length)
        data = convert_bits(data5, 5, 8, pad=False)
    except Bech32Error as e:
        logger.debug("Rejected nhash reference: %s", e)
        return None

    if hrp != NHASH_HRP:
        logger.debug("Rejected nhash reference with prefix %r", hrp)
        return None

    return _parse_tlv(data)


def _parse_tlv(data: List[int]) -> Optional[DecodedNhash]:
    if not data:
        return None

    hash_value = None
    decrypt_key = None

    offset = 0
    while offset < len(data):
        if offset + 2 > len(data):
            return None
        tag = data[offset]
        length = data[offset + 1]
        offset += 2

        if length == 0 or offset + length > len(data):
            return None
        value = bytes(data[offset : offset + length])
        offset += length

        if tag == TLV_HASH:
            hash_value = value
        elif tag == TLV_DECRYPT_KEY:
            decrypt_key = value

    if hash_value is None or len(hash_value) != HASH_SIZE:
        return None
    if decrypt_key is not None and len(decrypt_key) != KEY_SIZE:
        return None

    return DecodedNhash(hash=hash_value, decrypt_key=decrypt_key)


def is_nhash(value: str) -> bool:
    """Check if a string is a decodable nhash reference."""
    return decode_nhash(value) is not None
