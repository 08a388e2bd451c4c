# utils/protocol_formatter.py

import struct

from config import CMD_WRITE_OUTPUT, CMD_READ_INPUT, RESPONSE_SIZE
from model.errors import SizeMismatchError

# opcode, output mask (little-endian), opcode
_FRAME_FORMAT = "<BHB"
_MASK_FORMAT = "<H"


class ProtocolFormatter:
    @staticmethod
    def format_poll_frame(output_mask: int) -> bytes:
        """
        Builds the combined command sent once per poll cycle:
            - WRITE_OUTPUT opcode (0xBA)
            - output mask, low byte first
            - READ_INPUT opcode (0xB9)
        """
        if not 0 <= output_mask <= 0xFFFF:
            raise ValueError(f"Output mask out of range: {output_mask!r}")
        return struct.pack(_FRAME_FORMAT, CMD_WRITE_OUTPUT, output_mask, CMD_READ_INPUT)

    @staticmethod
    def parse_input_response(data: bytes) -> int:
        """
        Decodes the device answer as the 16-bit input mask (low byte first).
        The protocol has no length field or checksum, so any size other than
        two bytes is rejected.
        """
        if len(data) != RESPONSE_SIZE:
            raise SizeMismatchError(len(data))
        return struct.unpack(_MASK_FORMAT, data)[0]

    @staticmethod
    def format_bytes(data: bytes) -> str:
        """Renders raw bytes as spaced hex for the debug log."""
        return ' '.join(f"{b:02X}" for b in data)
