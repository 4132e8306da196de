import enum


__all__ = ["SHT4xMode"]


class SHT4xMode(enum.Enum):
    """Single-shot measurement modes.

    Each mode is a one-byte command; the heater modes additionally power the on-chip heater for
    the given duration before measuring. The response to a command may only be read once its
    settle time has elapsed.
    """

    #                       command  description                   settle_ms
    NOHEAT_HIGHPRECISION = (0xFD,    "No heater, high precision",  10)
    NOHEAT_MEDPRECISION  = (0xF6,    "No heater, med precision",   5)
    NOHEAT_LOWPRECISION  = (0xE0,    "No heater, low precision",   2)
    HIGHHEAT_1S          = (0x39,    "High heat, 1 second",        1110)
    HIGHHEAT_100MS       = (0x32,    "High heat, 0.1 second",      110)
    MEDHEAT_1S           = (0x2F,    "Med heat, 1 second",         1110)
    MEDHEAT_100MS        = (0x24,    "Med heat, 0.1 second",       110)
    LOWHEAT_1S           = (0x1E,    "Low heat, 1 second",         1110)
    LOWHEAT_100MS        = (0x15,    "Low heat, 0.1 second",       110)

    def __init__(self, command: int, description: str, settle_ms: int):
        assert command in range(0x100) and settle_ms >= 1
        self.command     = command
        self.description = description
        self.settle_ms   = settle_ms

    @classmethod
    def lookup(cls, name: str) -> "SHT4xMode | None":
        """Return the mode called ``name``, or ``None`` if there is no such mode."""
        if not isinstance(name, str):
            return None
        return cls.__members__.get(name)
