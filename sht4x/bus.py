import asyncio
import logging

from smbus2 import SMBus, i2c_msg

from .support.logging import dump_hex
from .error import SHT4xTransportError


__all__ = ["SMBusI2CInterface"]


class SMBusI2CInterface:
    """I²C controller backed by a Linux ``i2c-dev`` bus.

    Each :meth:`write` and :meth:`read` is a single plain I²C transfer (START, address, data,
    STOP) issued through ``I2C_RDWR``; the SHT4x has no register address, so SMBus register
    commands are not used. Blocking ioctls run in a worker thread.
    """

    def __init__(self, logger: logging.Logger, bus_index: int = 1):
        self._logger = logger
        self._level  = logging.DEBUG if self._logger.name == __name__ else logging.TRACE

        self._bus_index = bus_index
        try:
            self._bus = SMBus(bus_index)
        except OSError as error:
            raise SHT4xTransportError(
                f"cannot open I²C bus {bus_index}: {error.strerror or error}") from error
        self._log("open bus=%d", bus_index)

    def _log(self, message, *args):
        self._logger.log(self._level, "I²C: " + message, *args)

    @property
    def bus_index(self) -> int:
        return self._bus_index

    def close(self):
        if self._bus is not None:
            self._log("close bus=%d", self._bus_index)
            self._bus.close()
            self._bus = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    async def _transfer(self, message: i2c_msg, operation: str, address: int):
        if self._bus is None:
            raise SHT4xTransportError(f"I²C bus {self._bus_index} is closed")
        try:
            await asyncio.to_thread(self._bus.i2c_rdwr, message)
        except OSError as error:
            raise SHT4xTransportError(
                f"{operation} at address {address:#04x} failed: "
                f"{error.strerror or error}") from error

    async def write(self, address: int, data: bytes | bytearray | memoryview):
        """Write bytes.

        Raises
        ------
        SHT4xTransportError
            If the bus is closed, or the target address or data is not acknowledged.
        """
        assert address in range(0, 128)

        self._log("write addr=%#04x data=<%s>", address, dump_hex(data))
        await self._transfer(i2c_msg.write(address, bytes(data)), "write", address)

    async def read(self, address: int, count: int) -> bytes:
        """Read bytes.

        The I²C bus design requires :py:`count` to be 1 or more.

        Raises
        ------
        SHT4xTransportError
            If the bus is closed, or the target address is not acknowledged.
        """
        assert address in range(0, 128) and count >= 1

        message = i2c_msg.read(address, count)
        await self._transfer(message, "read", address)
        data = bytes(list(message))
        self._log("read addr=%#04x data=<%s>", address, dump_hex(data))
        return data

    async def delay(self, milliseconds: int):
        await asyncio.sleep(milliseconds / 1000)
