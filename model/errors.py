# model/errors.py


class ProtocolWorkerError(Exception):
    """Base class for every failure that terminates a poll session."""


class ConnectionOpenError(ProtocolWorkerError):
    def __init__(self, port, reason):
        super().__init__(f"Can't open {port}: {reason}")
        self.port = port
        self.reason = reason


class WriteTimeoutError(ProtocolWorkerError):
    def __init__(self):
        super().__init__("Wait write request timeout.")


class ReadTimeoutError(ProtocolWorkerError):
    def __init__(self):
        super().__init__("Wait read response timeout.")


class SizeMismatchError(ProtocolWorkerError):
    def __init__(self, length: int):
        super().__init__(
            f"The received data does not match the expected size. Its size is {length} bytes."
        )
        self.length = length
