"""An example of using the SHT4x driver as a library, without the command line interface.

Opens I²C bus 1, which soft-resets the sensor, then prints its serial number and one
measurement in each precision mode that does not use the heater.
"""

import asyncio
import logging

from sht4x import SHT4xI2CInterface, SHT4xMode


logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger()


async def main():
    sensor = await SHT4xI2CInterface.open(1, logger=logger)
    try:
        print(f"serial number: {await sensor.serial_number():#010x}")
        for mode in (SHT4xMode.NOHEAT_HIGHPRECISION,
                     SHT4xMode.NOHEAT_MEDPRECISION,
                     SHT4xMode.NOHEAT_LOWPRECISION):
            sensor.mode = mode
            sample = await sensor.measurements()
            print(f"{mode.description}: {sample.temp_degC:.2f} °C, {sample.rh_pct:.2f} %RH")
    finally:
        sensor.lower.close()


if __name__ == "__main__":
    asyncio.run(main())
