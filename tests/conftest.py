# tests/conftest.py

import os
import threading
import time
from collections import deque

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5.QtCore import Qt, QCoreApplication
from PyQt5.QtWidgets import QApplication


class FakeTransport:
    """
    Scripted stand-in for SerialHandler.

    Each reply is a list of chunks; one chunk becomes readable per
    wait_for_ready_read() call, so a reply split in several chunks exercises
    the trailing-byte drain.
    """

    def __init__(self, replies=(), default_reply=None, echo=False,
                 open_error=None, write_ok=True, write_error=None,
                 read_error=None, close_error=None):
        self.replies = deque(replies)
        self.default_reply = default_reply
        self.echo = echo
        self.open_error = open_error
        self.write_ok = write_ok
        self.write_error = write_error
        self.read_error = read_error
        self.close_error = close_error
        self.frames = []
        self.opened_with = None
        self.closed = False
        self.gate = None
        self.reading = threading.Event()
        self._rx = deque()

    def open(self, port, baud_rate):
        if self.open_error is not None:
            raise self.open_error
        self.opened_with = (port, baud_rate)

    def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error

    def write(self, data):
        if self.write_error is not None:
            raise self.write_error
        self.frames.append(bytes(data))
        if self.echo:
            self._rx.append(bytes(data[1:3]))
        elif self.replies:
            self._rx.extend(self.replies.popleft())
        elif self.default_reply is not None:
            self._rx.extend(self.default_reply)

    def wait_for_bytes_written(self, timeout_ms):
        return self.write_ok

    def wait_for_ready_read(self, timeout_ms):
        self.reading.set()
        if self.gate is not None:
            self.gate.wait(5)
        return bool(self._rx)

    def read_all(self):
        if self.read_error is not None:
            raise self.read_error
        return self._rx.popleft() if self._rx else b""


class EventRecorder:
    """Collects worker events on the worker thread itself."""

    def __init__(self, worker):
        self.responses = []
        self.errors = []
        self._cond = threading.Condition()
        worker.responseReceived.connect(self.on_response, type=Qt.DirectConnection)
        worker.errorOccurred.connect(self.on_error, type=Qt.DirectConnection)

    def on_response(self, mask):
        with self._cond:
            self.responses.append(mask)
            self._cond.notify_all()

    def on_error(self, message):
        with self._cond:
            self.errors.append(message)
            self._cond.notify_all()

    def wait_for_responses(self, count, timeout=2.0):
        with self._cond:
            return self._cond.wait_for(lambda: len(self.responses) >= count, timeout)


def wait_until(predicate, timeout=2.0):
    """Pump the Qt event loop until predicate() holds or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        QCoreApplication.processEvents()
        if predicate():
            return True
        time.sleep(0.005)
    QCoreApplication.processEvents()
    return predicate()


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def factory_for(*transports):
    """Transport factory handing out the given transports in order."""
    pending = deque(transports)
    created = []

    def factory():
        transport = pending.popleft()
        created.append(transport)
        return transport

    factory.created = created
    return factory
