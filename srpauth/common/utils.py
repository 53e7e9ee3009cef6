"""Hex text helpers: clean_hex, is_hex, is_valid_integer."""

import re

_HEX_RE = re.compile(r"-?[0-9a-fA-F]+")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_hex(text: str) -> str:
    """
    Removes all whitespace from a hex string.
    Published constants are often grouped in 8-digit words over several lines.
    """
    return _WHITESPACE_RE.sub("", text)


def is_hex(text: str) -> bool:
    """Returns True if text is an optionally signed hex digit sequence."""
    return bool(_HEX_RE.fullmatch(text))


def is_valid_integer(hex_string, required_length: int) -> bool:
    """
    Checks if the given string is a valid padded hex integer
    of exactly required_length digits. Never raises.
    """
    if not isinstance(hex_string, str) or not hex_string:
        return False
    if len(hex_string) != required_length:
        return False
    return is_hex(hex_string)
