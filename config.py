# config.py
# Protocol constants, timing limits and UI settings for the I/O poll console.

import logging

# CO3715-1H opcodes, combined into a single "set outputs and poll inputs" frame.
CMD_WRITE_OUTPUT = 0xBA
CMD_READ_INPUT = 0xB9

# Both 16-bit masks travel little-endian (low byte first).
RESPONSE_SIZE = 2

TIME_LIMIT_MS = 100  # write completion and first response byte
DRAIN_WAIT_MS = 10   # trailing bytes after the first one
SERIAL_POLL_INTERVAL = 0.001  # in seconds

VALID_BAUD_RATES = (1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200)
DEFAULT_BAUD_RATE = 9600

IO_LINE_COUNT = 16

TURNED_ON_STYLE = "QLabel { background-color : green; }"
TURNED_OFF_STYLE = "QLabel { background-color : grey; }"

LOG_LEVEL = logging.DEBUG  # change to INFO in production
