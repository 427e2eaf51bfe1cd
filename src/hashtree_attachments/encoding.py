"""Hex helpers for hashes and keys."""

import string


def hex_encode(data: bytes) -> str:
    """Encode bytes as lowercase hex."""
    return bytes(data).hex()


def hex_decode(value: str) -> bytes:
    """
    Decode a hex string.

    Raises:
        ValueError: If the string has odd length or non-hex characters
    """
    if len(value) % 2 != 0:
        raise ValueError(f"Hex string length must be even, got {len(value)}")
    if any(c not in string.hexdigits for c in value):
        raise ValueError("Hex string contains non-hex characters")
    return bytes.fromhex(value)
