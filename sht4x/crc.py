# Ref: Sensirion SHT4x Datasheet, §4.4 Checksum Calculation
#
# The checksum is CRC-8 with polynomial 0x31, initialization 0xFF, no reflection and no final
# XOR, computed over each 2-byte word of a response. This is the CRC-8/NRSC-5 catalog entry.

import struct

from amaranth.lib.crc.catalog import CRC8_NRSC_5

from .error import SHT4xChecksumError


__all__ = ["crc8", "check_word"]


crc8 = CRC8_NRSC_5(data_width=8).compute


def check_word(frame: bytes | bytearray | memoryview, offset: int, quantity: str) -> int:
    """Validate the 3-byte word at ``frame[offset:offset + 3]``.

    Returns the big-endian 16-bit value of the first two bytes. Raises
    :class:`SHT4xChecksumError` naming ``quantity`` if the third byte is not the checksum of
    the first two.
    """
    chunk, actual = struct.unpack_from(">2sB", frame, offset)
    expected = crc8(chunk)
    if expected != actual:
        raise SHT4xChecksumError(quantity, expected, actual)
    value, = struct.unpack(">H", chunk)
    return value
