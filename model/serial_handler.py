# model/serial_handler.py

import logging
import time

import serial
from serial.tools import list_ports

from config import SERIAL_POLL_INTERVAL
from model.errors import ConnectionOpenError

logger = logging.getLogger(__name__)


def available_ports():
    """Names of the serial ports currently present on the system."""
    return sorted(port.device for port in list_ports.comports())


class SerialHandler:
    """
    A low-level serial transport built on pyserial. It only deals with opening
    the port, pushing bytes out and collecting whatever comes back; commands
    and response decoding live in the protocol worker.
    """

    def __init__(self):
        self.ser = None
        self._tx_buffer = b""

    def open(self, port: str, baud_rate: int):
        try:
            self.ser = serial.Serial(port=port, baudrate=baud_rate, timeout=0)
        except (serial.SerialException, ValueError) as e:
            self.ser = None
            raise ConnectionOpenError(port, e) from e
        self._tx_buffer = b""
        logger.info(f"Serial port name: {self.ser.port}")
        logger.info(f"Serial port baud rate: {self.ser.baudrate}")

    def close(self):
        """Close the serial port if open."""
        if self.ser and self.ser.is_open:
            self.ser.close()
            logger.info(f"Closed serial port {self.ser.port}.")
        self._tx_buffer = b""

    def is_open(self) -> bool:
        return self.ser is not None and self.ser.is_open

    def write(self, data: bytes):
        self._tx_buffer += data

    def wait_for_bytes_written(self, timeout_ms: int) -> bool:
        if not self.is_open():
            return False
        deadline = time.monotonic() + timeout_ms / 1000.0
        try:
            self.ser.write_timeout = timeout_ms / 1000.0
            self.ser.write(self._tx_buffer)
            self._tx_buffer = b""
            while self.ser.out_waiting:
                if time.monotonic() >= deadline:
                    return False
                time.sleep(SERIAL_POLL_INTERVAL)
        except serial.SerialTimeoutException:
            logger.warning(f"Write to {self.ser.port} timed out after {timeout_ms} ms.")
            return False
        except serial.SerialException as e:
            logger.error(f"Error writing to serial port {self.ser.port}: {e}")
            return False
        return True

    def wait_for_ready_read(self, timeout_ms: int) -> bool:
        if not self.is_open():
            return False
        deadline = time.monotonic() + timeout_ms / 1000.0
        try:
            while not self.ser.in_waiting:
                if time.monotonic() >= deadline:
                    return False
                time.sleep(SERIAL_POLL_INTERVAL)
        except serial.SerialException as e:
            logger.error(f"Error reading from serial port {self.ser.port}: {e}")
            return False
        return True

    def read_all(self) -> bytes:
        """Drain pending bytes. A failing read raises serial.SerialException."""
        if not self.is_open():
            return b""
        waiting = self.ser.in_waiting
        return self.ser.read(waiting) if waiting else b""
