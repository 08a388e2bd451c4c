# controller/main_controller.py

from PyQt5.QtCore import QObject, pyqtSignal, pyqtSlot
import logging
from controller.protocol_worker import ProtocolWorker
from model.serial_handler import SerialHandler, available_ports
from config import IO_LINE_COUNT, VALID_BAUD_RATES
from utils.conversions import bits_to_mask, mask_to_bits

logger = logging.getLogger(__name__)

class MainController(QObject):
    # Signals for communicating with the UI.
    inputsUpdated = pyqtSignal(list)
    outputsUpdated = pyqtSignal(list)
    connectionChanged = pyqtSignal(bool)
    errorOccurred = pyqtSignal(str)  # Centralized error signal.

    def __init__(self, transport_factory=SerialHandler):
        super().__init__()
        self.is_connected = False
        # Desired output states, index 0 = output line 0.
        self.output_states = [False] * IO_LINE_COUNT

        self.worker = ProtocolWorker(transport_factory)
        self.worker.responseReceived.connect(self.onResponse)
        self.worker.errorOccurred.connect(self.onError)

    def availablePorts(self):
        return available_ports()

    def availableBaudRates(self):
        return list(VALID_BAUD_RATES)

    def outputMask(self) -> int:
        return bits_to_mask(self.output_states)

    def connectDevice(self, port: str, baud_rate: int):
        """Start a poll session; the current output states go out in the first frame."""
        if self.is_connected:
            return
        self.worker.submit_request(self.outputMask())
        if not self.worker.start_session(port, int(baud_rate)):
            logger.warning("Previous session is still closing, connect ignored.")
            return
        self.is_connected = True
        logger.info(f"Connecting to {port} at {baud_rate} baud.")
        self.connectionChanged.emit(True)

    def disconnectDevice(self):
        self.worker.stop_session()
        if self.is_connected:
            self.is_connected = False
            logger.info("Disconnected.")
            self.connectionChanged.emit(False)

    def toggleConnection(self, port: str, baud_rate: int):
        if self.is_connected:
            self.disconnectDevice()
        else:
            self.connectDevice(port, baud_rate)

    def setOutput(self, index: int, state: bool):
        """
        Record the desired state of one output line. It reaches the device with
        the next request, which is issued right after the current response.
        """
        if not 0 <= index < IO_LINE_COUNT:
            raise IndexError(f"Output line {index} does not exist")
        self.output_states[index] = bool(state)

    @pyqtSlot(int)
    def onResponse(self, input_mask: int):
        self.inputsUpdated.emit(mask_to_bits(input_mask))
        self.outputsUpdated.emit(list(self.output_states))
        if self.is_connected:
            self.worker.submit_request(self.outputMask())

    @pyqtSlot(str)
    def onError(self, message: str):
        logger.error(f"Communication error: {message}")
        self.disconnectDevice()
        self.errorOccurred.emit(message)

    def cleanup(self):
        """Stop the poll session and wait for its thread before the app exits."""
        self.is_connected = False
        self.worker.shutdown()
