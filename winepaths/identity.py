"""Instance naming from filesystem identity numbers."""

from __future__ import annotations

import struct

# width of the platform's unsigned long
NATIVE_WORD_BITS = struct.calcsize("L") * 8

SERVER_DIR_PREFIX = "server-"


def _hex_id(value: int, word_bits: int) -> str:
    if value < 0:
        raise ValueError(f"identity numbers are unsigned, got {value}")
    mask = (1 << word_bits) - 1
    if value == value & mask:
        return f"{value:x}"
    width = word_bits // 4
    return f"{value >> word_bits:x}{value & mask:0{width}x}"


def instance_name(device: int, inode: int, *, word_bits: int = NATIVE_WORD_BITS) -> str:
    """Return ``<hex-device>-<hex-inode>``.

    A value wider than *word_bits* is written as its high part followed by
    the zero-padded low word, so the text still maps back to one number.
    """
    return f"{_hex_id(device, word_bits)}-{_hex_id(inode, word_bits)}"


def server_dir_name(device: int, inode: int, *, word_bits: int = NATIVE_WORD_BITS) -> str:
    return SERVER_DIR_PREFIX + instance_name(device, inode, word_bits=word_bits)
