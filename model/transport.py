# model/transport.py
"""
Transport contract required by the protocol worker.

The worker owns exactly one transport per session and only ever talks to it
from its own thread, so implementations need no locking of their own.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):

    def open(self, port: str, baud_rate: int) -> None:
        """Open the link. Raises ConnectionOpenError on failure."""
        ...

    def close(self) -> None:
        """Release the link. Safe to call when already closed."""
        ...

    def write(self, data: bytes) -> None:
        """Queue bytes for sending; they go out in wait_for_bytes_written()."""
        ...

    def wait_for_bytes_written(self, timeout_ms: int) -> bool:
        """True once every queued byte has left, False on timeout."""
        ...

    def wait_for_ready_read(self, timeout_ms: int) -> bool:
        """True as soon as at least one byte can be read, False on timeout."""
        ...

    def read_all(self) -> bytes:
        """Non-blocking drain of whatever has arrived so far."""
        ...
