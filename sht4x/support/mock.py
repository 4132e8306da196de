from collections import deque

from ..error import SHT4xTransportError


__all__ = ["MockI2CInterface"]


class MockI2CInterface:
    """In-memory stand-in for an I²C controller interface.

    Records every ``write``, ``read`` and ``delay`` in :attr:`log` as tuples
    ``("write", address, data)``, ``("read", address, count)`` and ``("delay", milliseconds)``.
    Each ``read`` consumes the next queued response; a queued exception is raised instead of
    being returned. Writes fail with :class:`SHT4xTransportError` while :attr:`nak_writes` is set.
    """

    def __init__(self, responses=()):
        self.log        = []
        self.nak_writes = False
        self.closed     = False
        self._responses = deque(responses)

    def queue(self, response):
        self._responses.append(response)

    @property
    def pending(self) -> int:
        return len(self._responses)

    def close(self):
        self.closed = True

    async def write(self, address: int, data):
        self.log.append(("write", address, bytes(data)))
        if self.nak_writes:
            raise SHT4xTransportError(f"write at address {address:#04x} failed: not acknowledged")

    async def read(self, address: int, count: int) -> bytes:
        self.log.append(("read", address, count))
        if not self._responses:
            raise AssertionError(f"unexpected read of {count} bytes at address {address:#04x}")
        response = self._responses.popleft()
        if isinstance(response, Exception):
            raise response
        assert len(response) == count, \
            f"queued response has {len(response)} bytes, {count} requested"
        return bytes(response)

    async def delay(self, milliseconds: int):
        self.log.append(("delay", milliseconds))
