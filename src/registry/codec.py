"""Identifier codec - 6-character hex text <-> 24-bit integer id.

The canonical external form of an identifier is six uppercase hex
characters. Input is case-insensitive. The codec is a bijection between
the canonical form and [0, 16777215]:

    decode("ff8000")  # 16744448
    encode(16744448)  # "FF8000"
"""

from __future__ import annotations

from .constants import HEX_LENGTH, ID_SPACE
from .errors import InvalidFormatError, OutOfRangeError

HEX_DIGITS = "0123456789ABCDEF"


def _nibble(char: str) -> int:
    """Map one hex character to its 4-bit value, or -1 if it isn't one."""
    code = ord(char)
    if 0x30 <= code <= 0x39:  # 0-9
        return code - 0x30
    if 0x41 <= code <= 0x46:  # A-F
        return code - 0x41 + 10
    if 0x61 <= code <= 0x66:  # a-f
        return code - 0x61 + 10
    return -1


def decode(text: str) -> int:
    """Decode six hex characters into an identifier.

    The rightmost character is the least significant nibble.

    Raises:
        InvalidFormatError: Not a string, not exactly six characters, or a
            character outside 0-9A-Fa-f.
    """
    if not isinstance(text, str):
        raise InvalidFormatError(
            f"Hex text must be a string, got {type(text).__name__}",
            text=repr(text),
        )
    if len(text) != HEX_LENGTH:
        raise InvalidFormatError(
            f"Hex text must be exactly {HEX_LENGTH} characters, got {len(text)}",
            text=text,
        )

    value = 0
    for position in range(HEX_LENGTH):
        char = text[HEX_LENGTH - 1 - position]
        nibble = _nibble(char)
        if nibble < 0:
            raise InvalidFormatError(
                f"Invalid hex character {char!r} in {text!r}",
                text=text,
                position=HEX_LENGTH - 1 - position,
            )
        value |= nibble << (4 * position)

    assert value < ID_SPACE, f"decoded id {value} escaped the 24-bit space"
    return value


def encode(token_id: int) -> str:
    """Encode an identifier as six uppercase hex characters.

    Raises:
        OutOfRangeError: token_id is not an int in [0, 16777215].
    """
    if isinstance(token_id, bool) or not isinstance(token_id, int):
        raise OutOfRangeError(
            f"Identifier must be an int, got {type(token_id).__name__}",
            token_id=repr(token_id),
        )
    if not 0 <= token_id < ID_SPACE:
        raise OutOfRangeError(
            f"Identifier {token_id} is outside [0, {ID_SPACE - 1}]",
            token_id=token_id,
        )

    chars = [""] * HEX_LENGTH
    value = token_id
    for position in range(HEX_LENGTH - 1, -1, -1):
        chars[position] = HEX_DIGITS[value & 0xF]
        value >>= 4
    return "".join(chars)


def normalize(text: str) -> str:
    """Return the canonical (uppercase) form of hex text."""
    return encode(decode(text))
