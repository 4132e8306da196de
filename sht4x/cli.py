import re
import os
import sys
import logging
import asyncio
import argparse
import textwrap
import platform
import time

from . import __version__
from .support.logging import dump_hex
from .error import SHT4xError
from .mode import SHT4xMode
from .device import SHT4xI2CInterface


# When running as `-m sht4x.cli`, `__name__` is `__main__`, and the real name
# can be retrieved from `__loader__.name`.
logger = logging.getLogger(__loader__.name)


class TextHelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog):
        if "COLUMNS" in os.environ:
            columns = int(os.environ["COLUMNS"])
        else:
            try:
                columns, _ = os.get_terminal_size(sys.stderr.fileno())
            except OSError:
                columns = 80
        super().__init__(prog, width=columns, max_help_position=28)

    def _fill_text(self, text, width, indent):
        text = textwrap.dedent(text).strip()
        paragraphs = re.split(r"\n\s*\n", text)
        return "\n\n".join(
            textwrap.fill(re.sub(r"\s+", " ", paragraph), width,
                          initial_indent=indent, subsequent_indent=indent)
            for paragraph in paragraphs)


def version_info():
    python_version = ".".join(map(str, sys.version_info[:3]))
    python_implementation = platform.python_implementation()
    python_platform = platform.platform()
    return (
        f"sht4x {__version__} "
        f"({python_implementation} {python_version} on {python_platform})"
    )


def arg_conv_range(conv, low, high):
    def arg(value):
        value = conv(value)
        if not (low <= value <= high):
            raise argparse.ArgumentTypeError(
                f"{value} is not between {low} and {high}")
        return value
    return arg


def create_argparser():
    parser = argparse.ArgumentParser(
        prog="sht4x", formatter_class=TextHelpFormatter, fromfile_prefix_chars="@",
        description="""
        Measure temperature and relative humidity with Sensirion SHT4x sensors connected
        to a Linux I²C bus.
        """)

    parser.add_argument(
        "-V", "--version", action="version", version=version_info(),
        help="show version and exit")
    parser.add_argument(
        "-v", "--verbose", default=0, action="count",
        help="increase logging verbosity")
    parser.add_argument(
        "-q", "--quiet", default=0, action="count",
        help="decrease logging verbosity")
    parser.add_argument(
        "-L", "--log-file", metavar="FILE", type=argparse.FileType("w"),
        help="save log messages at highest verbosity to FILE")
    parser.add_argument(
        "-F", "--filter-log", metavar="FILTER", type=str, action="append",
        help="raise TRACE log messages to INFO if they begin with 'FILTER: '")
    parser.add_argument(
        "--no-shorten", default=False, action="store_true",
        help="do not shorten sequences in logs")
    parser.add_argument(
        "-b", "--bus", metavar="BUS", type=arg_conv_range(int, 0, 255), default=1,
        help="use I²C bus /dev/i2c-BUS (default: %(default)s)")
    parser.add_argument(
        "-a", "--address", metavar="ADDR", type=arg_conv_range(lambda x: int(x, 0), 0, 127),
        default=SHT4xI2CInterface.default_address,
        help="use I²C address ADDR (default: %(default)#04x)")

    def add_mode_argument(parser):
        parser.add_argument(
            "-m", "--mode", metavar="MODE", choices=list(SHT4xMode.__members__),
            default=SHT4xMode.NOHEAT_HIGHPRECISION.name,
            help="measure in MODE (default: %(default)s; one of: %(choices)s)")

    p_operation = parser.add_subparsers(dest="operation", metavar="OPERATION", required=True)

    p_operation.add_parser(
        "reset", help="soft-reset the sensor")

    p_operation.add_parser(
        "serial", help="read the serial number")

    p_measure = p_operation.add_parser(
        "measure", help="read temperature and relative humidity once")
    add_mode_argument(p_measure)

    p_log = p_operation.add_parser(
        "log", help="log temperature and relative humidity periodically")
    add_mode_argument(p_log)
    p_log.add_argument(
        "-i", "--interval", metavar="INTERVAL", type=arg_conv_range(float, 0.0, 86400.0),
        default=1.0,
        help="measure every INTERVAL seconds (default: %(default)s)")

    return parser


class TerminalFormatter(logging.Formatter):
    DEFAULT_COLORS = {
        "TRACE"   : "\033[0m",
        "DEBUG"   : "\033[36m",
        "INFO"    : "\033[1m",
        "WARNING" : "\033[1;33m",
        "ERROR"   : "\033[1;31m",
        "CRITICAL": "\033[1;41m",
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.colors = dict(self.DEFAULT_COLORS)
        for color_override in os.getenv("SHT4X_COLORS", "").split(":"):
            if color_override:
                level, color = color_override.split("=", 1)
                self.colors[level] = f"\033[{color}m"

    def format(self, record):
        color = self.colors.get(record.levelname, "")
        return f"{color}{super().format(record)}\033[0m"


class SubjectFilter:
    def __init__(self, level, subjects):
        self.level    = level
        self.subjects = subjects or ()

    def filter(self, record):
        levelno = record.levelno
        for subject in self.subjects:
            if isinstance(record.msg, str) and record.msg.startswith(subject + ": "):
                levelno = logging.INFO
        return levelno >= self.level


def create_logger():
    root_logger = logging.getLogger()

    term_formatter_args = {"style": "{",
        "fmt": "{levelname[0]:s}: {name:s}: {message:s}"}
    term_handler = logging.StreamHandler()
    if sys.stderr.isatty() and sys.platform != 'win32':
        term_handler.setFormatter(TerminalFormatter(**term_formatter_args))
    else:
        term_handler.setFormatter(logging.Formatter(**term_formatter_args))
    root_logger.addHandler(term_handler)
    return term_handler


def configure_logger(args, term_handler):
    root_logger = logging.getLogger()

    file_formatter_args = {"style": "{",
        "fmt": "[{asctime:s}] {levelname:s}: {name:s}: {message:s}"}
    if args.log_file:
        file_handler = logging.StreamHandler(args.log_file)
        file_handler.setFormatter(logging.Formatter(**file_formatter_args))
        root_logger.addHandler(file_handler)

    level = logging.INFO + args.quiet * 10 - args.verbose * 10
    if level < 0 or args.no_shorten:
        dump_hex.limit = None

    if args.log_file or args.filter_log:
        term_handler.addFilter(SubjectFilter(level, args.filter_log))
        root_logger.setLevel(logging.TRACE)
    else:
        root_logger.setLevel(level)


async def run(args, sht4x_iface: SHT4xI2CInterface):
    if args.operation == "reset":
        await sht4x_iface.reset()
        logger.info("sensor reset")

    if args.operation == "serial":
        serial = await sht4x_iface.serial_number()
        print(f"serial number : {serial} ({serial:#010x})")

    if args.operation in ("measure", "log"):
        sht4x_iface.mode = args.mode
        logger.debug("using mode %s", sht4x_iface.mode)

    if args.operation == "measure":
        sample = await sht4x_iface.measurements()
        print(f"temperature       : {sample.temp_degC:.2f} °C")
        print(f"relative humidity : {sample.rh_pct:.2f} %")

    if args.operation == "log":
        while True:
            try:
                sample = await sht4x_iface.measurements()
                timestamp = time.strftime("%Y%m%dT%H%M%SZ", time.gmtime())
                print(f"[{timestamp}] T={sample.temp_degC:.2f} °C, RH={sample.rh_pct:.2f} %",
                      flush=True)
            except SHT4xError as error:
                logger.error(error)
                await sht4x_iface.reset()
            await asyncio.sleep(args.interval)


async def main(argv=None):
    term_handler = create_logger()

    args = create_argparser().parse_args(argv)
    configure_logger(args, term_handler)

    sht4x_iface = None
    try:
        sht4x_iface = await SHT4xI2CInterface.open(
            args.bus, logger=logging.getLogger("sht4x"), address=args.address)
        await run(args, sht4x_iface)

    except SHT4xError as e:
        logger.error(e)
        return 1

    finally:
        if sht4x_iface is not None:
            sht4x_iface.lower.close()

    return 0


# This entry point is invoked via `project.scripts.sht4x` when installing the package.
def run_main():
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.warning("interrupted")
        sys.exit(130) # 128 + SIGINT


# This entry point is invoked when running `python -m sht4x.cli`.
if __name__ == "__main__":
    run_main()
