# controller/protocol_worker.py

import enum
import logging
from collections import namedtuple

from PyQt5.QtCore import QThread, QMutex, QMutexLocker, QWaitCondition, pyqtSignal

from config import TIME_LIMIT_MS, DRAIN_WAIT_MS, VALID_BAUD_RATES
from model.errors import (
    ProtocolWorkerError, WriteTimeoutError, ReadTimeoutError
)
from model.serial_handler import SerialHandler
from model.transport import Transport
from utils.conversions import mask_to_hex
from utils.protocol_formatter import ProtocolFormatter

logger = logging.getLogger(__name__)

ConnectionParameters = namedtuple('ConnectionParameters', ['port', 'baud_rate'])


class SessionState(enum.Enum):
    IDLE = 'idle'
    OPENING = 'opening'
    RUNNING = 'running'
    TERMINATING = 'terminating'
    STOPPING = 'stopping'


class ProtocolWorker(QThread):
    """
    Drives the CO3715-1H poll cycle on its own thread:
      - sends the latest requested output mask together with an input read,
      - waits for the 2-byte answer and emits the decoded input mask,
      - sleeps until the next request or a stop.

    Every failure ends the session after a single errorOccurred emission. The
    caller decides whether to start a new one.
    """
    responseReceived = pyqtSignal(int)
    errorOccurred = pyqtSignal(str)
    stateChanged = pyqtSignal(str)

    def __init__(self, transport_factory=SerialHandler, parent=None):
        """
        :param transport_factory: Callable returning a fresh, unopened transport
                                  for each session.
        """
        super().__init__(parent)
        self.transport_factory = transport_factory
        self._mutex = QMutex()
        self._wait_condition = QWaitCondition()
        # Guarded by _mutex.
        self._quit = False
        self._request = 0x0000
        self._request_pending = False
        self._params = None
        self._state = SessionState.IDLE

    @property
    def connection_parameters(self):
        locker = QMutexLocker(self._mutex)
        return self._params

    @property
    def state(self) -> SessionState:
        locker = QMutexLocker(self._mutex)
        return self._state

    def start_session(self, port: str, baud_rate: int) -> bool:
        """Launch a session. Returns False when one is still running and the call was ignored."""
        if baud_rate not in VALID_BAUD_RATES:
            raise ValueError(f"Unsupported baud rate: {baud_rate}")
        locker = QMutexLocker(self._mutex)
        if self.isRunning():
            logger.debug(f"Session already running on {self._params.port}, start ignored.")
            return False
        self._params = ConnectionParameters(port, int(baud_rate))
        self._quit = False
        self._request_pending = False
        changed = self._set_state(SessionState.OPENING)
        locker.unlock()
        if changed:
            self.stateChanged.emit(SessionState.OPENING.name)
        self.start()
        return True

    def stop_session(self):
        locker = QMutexLocker(self._mutex)
        if not self.isRunning():
            return
        logger.info("Stop requested.")
        self._quit = True
        changed = self._state is SessionState.RUNNING and self._set_state(SessionState.STOPPING)
        self._wait_condition.wakeOne()
        locker.unlock()
        if changed:
            self.stateChanged.emit(SessionState.STOPPING.name)

    def submit_request(self, output_mask: int):
        if not 0 <= output_mask <= 0xFFFF:
            raise ValueError(f"Output mask out of range: {output_mask!r}")
        locker = QMutexLocker(self._mutex)
        self._request = output_mask
        self._request_pending = True
        if self.isRunning():
            self._wait_condition.wakeOne()

    def shutdown(self, timeout_ms=None) -> bool:
        """Request a stop and wait for the session thread to finish."""
        self.stop_session()
        if timeout_ms is None:
            return self.wait()
        return self.wait(timeout_ms)

    def run(self):
        params = self.connection_parameters
        transport = None
        try:
            transport = self.transport_factory()
            transport.open(params.port, params.baud_rate)
            logger.info(f"Session opened on {params.port} at {params.baud_rate} baud.")
            self._enter_running()
            while True:
                quit_requested, output_mask = self._take_request()
                if quit_requested:
                    break
                input_mask = self._poll(transport, output_mask)
                self.responseReceived.emit(input_mask)
                self._wait_for_request()
        except ProtocolWorkerError as e:
            logger.error(f"Session on {params.port} aborted: {e}")
            self._terminate(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error in session on {params.port}")
            self._terminate(f"Unexpected error: {e}")
        finally:
            try:
                if transport is not None:
                    transport.close()
            except Exception:
                logger.exception(f"Error closing transport for {params.port}")
            finally:
                self._leave()

    def _poll(self, transport: Transport, output_mask: int) -> int:
        frame = ProtocolFormatter.format_poll_frame(output_mask)
        logger.debug(f"Sending frame {ProtocolFormatter.format_bytes(frame)} (outputs {mask_to_hex(output_mask)})")
        transport.write(frame)
        if not transport.wait_for_bytes_written(TIME_LIMIT_MS):
            raise WriteTimeoutError()
        if not transport.wait_for_ready_read(TIME_LIMIT_MS):
            raise ReadTimeoutError()

        data = transport.read_all()
        while transport.wait_for_ready_read(DRAIN_WAIT_MS):
            data += transport.read_all()
        logger.debug(f"Received {ProtocolFormatter.format_bytes(data)}")

        input_mask = ProtocolFormatter.parse_input_response(data)
        logger.debug(f"Inputs {mask_to_hex(input_mask)}")
        return input_mask

    def _take_request(self):
        locker = QMutexLocker(self._mutex)
        self._request_pending = False
        return self._quit, self._request

    def _wait_for_request(self):
        locker = QMutexLocker(self._mutex)
        while not self._quit and not self._request_pending:
            self._wait_condition.wait(self._mutex)

    def _enter_running(self):
        self._transition(SessionState.RUNNING, only_from=SessionState.OPENING)

    def _terminate(self, message: str):
        self._transition(SessionState.TERMINATING)
        self.errorOccurred.emit(message)

    def _leave(self):
        self._transition(SessionState.IDLE)
        logger.info("Session closed.")

    def _transition(self, state: SessionState, only_from=None):
        locker = QMutexLocker(self._mutex)
        if only_from is not None and self._state is not only_from:
            return
        changed = self._set_state(state)
        locker.unlock()
        if changed:
            self.stateChanged.emit(state.name)

    def _set_state(self, state: SessionState) -> bool:
        # Caller holds _mutex; the signal is emitted once it is released.
        if state is self._state:
            return False
        logger.debug(f"Session state {self._state.name} -> {state.name}")
        self._state = state
        return True
