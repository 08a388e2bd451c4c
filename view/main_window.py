# view/main_window.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QComboBox,
    QPushButton, QGridLayout, QGroupBox, QMessageBox
)
from PyQt5.QtCore import pyqtSlot
import logging
from config import IO_LINE_COUNT, DEFAULT_BAUD_RATE, TURNED_ON_STYLE, TURNED_OFF_STYLE

logger = logging.getLogger(__name__)

class MainWindow(QWidget):
    def __init__(self, controller):
        super().__init__()
        self.controller = controller
        # Ordered by line index, built once.
        self.output_buttons = []
        self.output_indicators = []
        self.input_indicators = []
        self.init_ui()
        self.connect_signals()

    def init_ui(self):
        self.setWindowTitle("Digital I/O Console")

        # --- Connection controls ---
        connection_layout = QHBoxLayout()
        self.port_combo = QComboBox()
        self.port_combo.addItems(self.controller.availablePorts())
        self.baud_combo = QComboBox()
        for baud_rate in self.controller.availableBaudRates():
            self.baud_combo.addItem(str(baud_rate))
        self.baud_combo.setCurrentText(str(DEFAULT_BAUD_RATE))
        self.connect_button = QPushButton("Connect")
        connection_layout.addWidget(QLabel("Port:"))
        connection_layout.addWidget(self.port_combo)
        connection_layout.addWidget(QLabel("Baud rate:"))
        connection_layout.addWidget(self.baud_combo)
        connection_layout.addWidget(self.connect_button)

        # --- One row per I/O line: output button, output indicator, input indicator ---
        control_group = QGroupBox("Control")
        grid = QGridLayout()
        grid.addWidget(QLabel("Output"), 0, 0)
        grid.addWidget(QLabel("Output state"), 0, 1)
        grid.addWidget(QLabel("Input state"), 0, 2)
        for i in range(IO_LINE_COUNT):
            button = QPushButton(f"Output {i}")
            button.setCheckable(True)
            button.setEnabled(False)
            output_indicator = QLabel(f"OUT {i}")
            output_indicator.setStyleSheet(TURNED_OFF_STYLE)
            input_indicator = QLabel(f"IN {i}")
            input_indicator.setStyleSheet(TURNED_OFF_STYLE)
            self.output_buttons.append(button)
            self.output_indicators.append(output_indicator)
            self.input_indicators.append(input_indicator)
            grid.addWidget(button, i + 1, 0)
            grid.addWidget(output_indicator, i + 1, 1)
            grid.addWidget(input_indicator, i + 1, 2)
        control_group.setLayout(grid)

        main_layout = QVBoxLayout()
        main_layout.addLayout(connection_layout)
        main_layout.addWidget(control_group)
        self.setLayout(main_layout)

    def connect_signals(self):
        self.connect_button.clicked.connect(self.on_connect_clicked)
        for i, button in enumerate(self.output_buttons):
            button.toggled.connect(lambda checked, index=i: self.controller.setOutput(index, checked))
        self.controller.inputsUpdated.connect(self.update_inputs)
        self.controller.outputsUpdated.connect(self.update_outputs)
        self.controller.connectionChanged.connect(self.on_connection_changed)
        self.controller.errorOccurred.connect(self.show_error)

    @pyqtSlot()
    def on_connect_clicked(self):
        port = self.port_combo.currentText()
        if not port and not self.controller.is_connected:
            self.show_error("No serial port selected.")
            return
        self.controller.toggleConnection(port, int(self.baud_combo.currentText()))

    @pyqtSlot(bool)
    def on_connection_changed(self, connected: bool):
        self.connect_button.setText("Disconnect" if connected else "Connect")
        self.port_combo.setEnabled(not connected)
        self.baud_combo.setEnabled(not connected)
        for button in self.output_buttons:
            button.setEnabled(connected)

    @pyqtSlot(list)
    def update_inputs(self, states: list):
        for indicator, state in zip(self.input_indicators, states):
            indicator.setStyleSheet(TURNED_ON_STYLE if state else TURNED_OFF_STYLE)

    @pyqtSlot(list)
    def update_outputs(self, states: list):
        for indicator, state in zip(self.output_indicators, states):
            indicator.setStyleSheet(TURNED_ON_STYLE if state else TURNED_OFF_STYLE)

    @pyqtSlot(str)
    def show_error(self, message: str):
        logger.debug(f"Showing error dialog: {message}")
        QMessageBox.critical(self, "Communication error", message)

    def closeEvent(self, event):
        self.controller.cleanup()
        event.accept()
