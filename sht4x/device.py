# Ref: Sensirion SHT4x Datasheet, §4 Operation and Communication

from dataclasses import dataclass
import logging

from .support.logging import dump_hex
from .error import *
from .crc import check_word
from .mode import SHT4xMode


__all__ = [
    "SHT4xError", "SHT4xTransportError", "SHT4xChecksumError",
    "SHT4xMeasurement", "SHT4xI2CInterface", "decode_temperature", "decode_humidity",
]


def decode_temperature(raw: int) -> float:
    """Convert a raw 16-bit temperature word to °C.

    The result is not clamped; values outside of the rated range of the sensor are returned
    as-is.
    """
    return -49.0 + 315.0 * raw / 65535.0


def decode_humidity(raw: int) -> float:
    """Convert a raw 16-bit humidity word to %RH, clamped to 0..100."""
    rh_pct = -6.0 + 125.0 * raw / 65535.0
    return max(min(rh_pct, 100.0), 0.0)


@dataclass
class SHT4xMeasurement:
    temp_degC: float
    rh_pct: float


class SHT4xI2CInterface:
    """Sensirion SHT4x temperature and humidity sensor.

    The ``i2c_iface`` must provide ``write(address, data)``, ``read(address, count)`` and
    ``delay(milliseconds)`` coroutines (see :class:`sht4x.bus.SMBusI2CInterface`).

    Every operation is a single write, delay, read sequence on the bus. The interface does not
    lock the bus; callers sharing one instance must not run operations concurrently, or one
    caller may read the response to a command issued by another.
    """

    default_address = 0x44

    _CMD_SOFT_RESET  = 0x94
    _CMD_READ_SERIAL = 0x89

    _RESET_DELAY_MS  = 1
    _SERIAL_DELAY_MS = 10

    _FRAME_LENGTH = 6

    def __init__(self, logger: logging.Logger, i2c_iface, *,
                 address: int = default_address,
                 mode: SHT4xMode | str = SHT4xMode.NOHEAT_HIGHPRECISION):
        assert address in range(0, 128)

        self._logger = logger
        self._level  = logging.DEBUG if self._logger.name == __name__ else logging.TRACE

        self._i2c_iface = i2c_iface
        self._address   = address
        self._mode      = SHT4xMode.NOHEAT_HIGHPRECISION
        self.mode       = mode

    @classmethod
    async def open(cls, bus_index: int = 1, *, logger: logging.Logger | None = None,
                   address: int = default_address) -> "SHT4xI2CInterface":
        """Open I²C bus ``bus_index``, soft-reset the sensor on it, and return its interface.

        Raises
        ------
        SHT4xTransportError
            If the bus cannot be opened, or the reset command is not acknowledged.
        """
        from .bus import SMBusI2CInterface

        if logger is None:
            logger = logging.getLogger(__name__)
        i2c_iface = SMBusI2CInterface(logger, bus_index)
        sht4x_iface = cls(logger, i2c_iface, address=address)
        try:
            await sht4x_iface.reset()
        except BaseException:
            i2c_iface.close()
            raise
        return sht4x_iface

    def _log(self, message, *args):
        self._logger.log(self._level, "SHT4x: " + message, *args)

    @property
    def lower(self):
        return self._i2c_iface

    @property
    def address(self) -> int:
        return self._address

    @property
    def mode(self) -> str:
        """Name of the measurement mode used by :meth:`measurements`.

        Assigning anything other than a :class:`SHT4xMode` member or the name of one leaves the
        mode unchanged.
        """
        return self._mode.name

    @mode.setter
    def mode(self, mode: SHT4xMode | str):
        if not isinstance(mode, SHT4xMode):
            name, mode = mode, SHT4xMode.lookup(mode)
            if mode is None:
                self._log("ignoring unknown mode %r", name)
                return
        self._mode = mode

    async def _command(self, command: int, delay_ms: int, count: int = 0) -> bytes | None:
        self._log("cmd=%#04x delay=%d [ms]", command, delay_ms)
        await self._i2c_iface.write(self._address, bytes([command]))
        await self._i2c_iface.delay(delay_ms)
        if count == 0:
            return None
        data = await self._i2c_iface.read(self._address, count)
        self._log("cmd=%#04x data=<%s>", command, dump_hex(data))
        return data

    async def reset(self):
        self._log("soft reset")
        await self._command(self._CMD_SOFT_RESET, self._RESET_DELAY_MS)

    async def serial_number(self) -> int:
        frame = await self._command(self._CMD_READ_SERIAL, self._SERIAL_DELAY_MS,
                                    self._FRAME_LENGTH)
        check_word(frame, 0, "serial half 1")
        check_word(frame, 3, "serial half 2")
        serial = (frame[0] << 24) | (frame[1] << 16) | (frame[3] << 8) | frame[4]
        self._log("serial number=%#010x", serial)
        return serial

    async def measurements(self) -> SHT4xMeasurement:
        mode = self._mode
        frame = await self._command(mode.command, mode.settle_ms, self._FRAME_LENGTH)
        temp_raw = check_word(frame, 0, "temperature")
        rh_raw   = check_word(frame, 3, "humidity")
        measurement = SHT4xMeasurement(
            temp_degC=decode_temperature(temp_raw),
            rh_pct=decode_humidity(rh_raw))
        self._log("measured mode=%s T=%.2f [°C] RH=%.2f [%%]",
                  mode.name, measurement.temp_degC, measurement.rh_pct)
        return measurement

    # Each of these performs a complete measurement; reading both issues two commands, and the
    # two values may come from slightly different conditions.

    async def temperature(self) -> float:
        return (await self.measurements()).temp_degC

    async def relative_humidity(self) -> float:
        return (await self.measurements()).rh_pct
