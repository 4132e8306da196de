import asyncio
import logging
import unittest
from unittest import mock

from sht4x.bus import SMBusI2CInterface
from sht4x.error import SHT4xTransportError


class SMBusI2CInterfaceTestCase(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch("sht4x.bus.SMBus")
        self.smbus_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.smbus = self.smbus_cls.return_value
        self.iface = SMBusI2CInterface(logging.getLogger(__name__), 2)

    def test_open(self):
        self.smbus_cls.assert_called_once_with(2)
        self.assertEqual(self.iface.bus_index, 2)

    def test_open_error(self):
        self.smbus_cls.side_effect = PermissionError(13, "Permission denied")
        with self.assertRaisesRegex(SHT4xTransportError, r"bus 1: Permission denied"):
            SMBusI2CInterface(logging.getLogger(__name__), 1)

    def test_close(self):
        with self.iface:
            pass
        self.smbus.close.assert_called_once_with()
        self.iface.close()
        self.smbus.close.assert_called_once_with()

    async def do_test_write(self):
        await self.iface.write(0x44, b"\xfd")
        message, = self.smbus.i2c_rdwr.call_args.args
        self.assertEqual(message.addr, 0x44)
        self.assertEqual(list(message), [0xfd])

    def test_write(self):
        asyncio.run(self.do_test_write())

    async def do_test_read(self):
        data = await self.iface.read(0x44, 6)
        message, = self.smbus.i2c_rdwr.call_args.args
        self.assertEqual(message.addr, 0x44)
        self.assertEqual(message.len, 6)
        self.assertEqual(data, bytes(6))

    def test_read(self):
        asyncio.run(self.do_test_read())

    async def do_test_nak(self):
        self.smbus.i2c_rdwr.side_effect = OSError(121, "Remote I/O error")
        with self.assertRaisesRegex(SHT4xTransportError, r"write at address 0x44 failed"):
            await self.iface.write(0x44, b"\x94")
        with self.assertRaisesRegex(SHT4xTransportError, r"read at address 0x44 failed"):
            await self.iface.read(0x44, 6)

    def test_nak(self):
        asyncio.run(self.do_test_nak())

    async def do_test_closed(self):
        self.iface.close()
        with self.assertRaisesRegex(SHT4xTransportError, r"closed"):
            await self.iface.write(0x44, b"\x94")
        self.smbus.i2c_rdwr.assert_not_called()

    def test_closed(self):
        asyncio.run(self.do_test_closed())

    async def do_test_delay(self):
        with mock.patch("asyncio.sleep") as sleep:
            await self.iface.delay(1110)
        sleep.assert_awaited_once_with(1.11)

    def test_delay(self):
        asyncio.run(self.do_test_delay())
