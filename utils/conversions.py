# utils/conversions.py

from config import IO_LINE_COUNT


def mask_to_bits(mask: int, count: int = IO_LINE_COUNT) -> list:
    """
    Expand a line mask into a list of booleans, bit 0 first.
    """
    return [bool(mask & (1 << i)) for i in range(count)]

def bits_to_mask(bits) -> int:
    """
    Fold a sequence of line states (index 0 = bit 0) back into a mask.
    """
    mask = 0
    for i, state in enumerate(bits):
        if state:
            mask |= 1 << i
    return mask

def mask_to_hex(mask: int) -> str:
    return f"0x{mask:04X}"
