__all__ = ["SHT4xError", "SHT4xTransportError", "SHT4xChecksumError"]


class SHT4xError(Exception):
    """An exception raised when communication with an SHT4x sensor fails."""


class SHT4xTransportError(SHT4xError):
    """The I²C bus could not be opened, or a transfer on it failed."""


class SHT4xChecksumError(SHT4xError):
    """A word of a response frame does not match its trailing checksum byte."""

    def __init__(self, quantity: str, expected: int, actual: int):
        self.quantity = quantity
        self.expected = expected
        self.actual   = actual
        super().__init__(
            f"CRC failed on {quantity} (expected {expected:#04x}, received {actual:#04x})")
