"""Bech32 encoding with a configurable length ceiling.

Checksums follow BIP-173 (constant 1). The length ceiling defaults to
MAX_REFERENCE_LENGTH instead of BIP-173's 90 characters so that references
carrying a decrypt key still fit.
"""

from typing import Iterable, List, Sequence, Tuple

from .types import Bech32Error, MAX_REFERENCE_LENGTH


CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
CHECKSUM_SIZE = 6
SEPARATOR = "1"

_CHARSET_MAP = {c: i for i, c in enumerate(CHARSET)}
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


def convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> List[int]:
    """
    Regroup a sequence of from_bits-wide values into to_bits-wide values.

    Args:
        data: Input values, each fitting in from_bits bits
        from_bits: Width of input groups
        to_bits: Width of output groups
        pad: Emit a final zero-padded group for leftover bits

    Returns:
        List of to_bits-wide values

    Raises:
        ValueError: If an input value does not fit in from_bits
        Bech32Error: If pad is False and the leftover bits are not valid padding
    """
    acc = 0
    bits = 0
    result = []
    max_value = (1 << to_bits) - 1
    # acc never needs more than one partial group plus one input group
    max_acc = (1 << (from_bits + to_bits - 1)) - 1

    for value in data:
        if value < 0 or (value >> from_bits) != 0:
            raise ValueError(f"Value out of range for {from_bits}-bit group: {value}")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((acc >> bits) & max_value)

    if pad:
        if bits > 0:
            result.append((acc << (to_bits - bits)) & max_value)
    else:
        if bits >= from_bits:
            raise Bech32Error("illegal zero padding")
        if ((acc << (to_bits - bits)) & max_value) != 0:
            raise Bech32Error("non-zero padding")

    return result


def _polymod(values: Iterable[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ value
        for i, generator in enumerate(_GENERATOR):
            if (top >> i) & 1:
                chk ^= generator
    return chk


def _hrp_expand(hrp: str) -> List[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _create_checksum(hrp: str, data: Sequence[int]) -> List[int]:
    polymod = _polymod(_hrp_expand(hrp) + list(data) + [0] * CHECKSUM_SIZE) ^ 1
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(CHECKSUM_SIZE)]


def _verify_checksum(hrp: str, data: Sequence[int]) -> bool:
    return _polymod(_hrp_expand(hrp) + list(data)) == 1


def _check_hrp(hrp: str) -> None:
    if not hrp:
        raise Bech32Error("Human-readable part is empty")
    for c in hrp:
        if ord(c) < 33 or ord(c) > 126:
            raise Bech32Error(f"Invalid character in human-readable part: {c!r}")


def bech32_encode(hrp: str, data: Sequence[int], max_length: int = MAX_REFERENCE_LENGTH) -> str:
    """
    Encode 5-bit values as a bech32 string.

    Args:
        hrp: Human-readable prefix
        data: 5-bit values (without checksum)
        max_length: Maximum allowed length of the result

    Returns:
        Lowercase bech32 string

    Raises:
        Bech32Error: If the prefix or data is invalid or the result is too long
    """
    _check_hrp(hrp)
    hrp = hrp.lower()

    for value in data:
        if value < 0 or value > 31:
            raise Bech32Error(f"Data value is not a 5-bit group: {value}")

    checksum = _create_checksum(hrp, data)
    encoded = hrp + SEPARATOR + "".join(CHARSET[d] for d in list(data) + checksum)

    if len(encoded) > max_length:
        raise Bech32Error(f"Encoded string too long: {len(encoded)} characters (max {max_length})")

    return encoded


def bech32_decode(bech: str, max_length: int = MAX_REFERENCE_LENGTH) -> Tuple[str, List[int]]:
    """
    Decode a bech32 string.

    Args:
        bech: The bech32 string
        max_length: Maximum accepted length

    Returns:
        Tuple of (lowercase hrp, 5-bit data values without checksum)

    Raises:
        Bech32Error: If the string is too long, mixed-case, malformed or
            has an invalid checksum
    """
    if len(bech) > max_length:
        raise Bech32Error(f"String too long: {len(bech)} characters (max {max_length})")

    if bech.lower() != bech and bech.upper() != bech:
        raise Bech32Error("Mixed-case string")

    bech = bech.lower()
    pos = bech.rfind(SEPARATOR)
    if pos < 0:
        raise Bech32Error("Missing separator")

    hrp = bech[:pos]
    _check_hrp(hrp)

    data_part = bech[pos + 1:]
    if len(data_part) < CHECKSUM_SIZE:
        raise Bech32Error("Checksum too short")

    data = []
    for c in data_part:
        value = _CHARSET_MAP.get(c)
        if value is None:
            raise Bech32Error(f"Invalid data character: {c!r}")
        data.append(value)

    if not _verify_checksum(hrp, data):
        raise Bech32Error("Invalid checksum")

    return hrp, data[:-CHECKSUM_SIZE]
