# ---------------------------------------------------------------------
# Gufo Probe: Internet checksum
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

"""RFC 1071 Internet checksum."""

MASK16 = 0xFFFF
MASK32 = 0xFFFFFFFF


def checksum(data: bytes) -> int:
    """
    Calculate the Internet checksum.

    Input is summed as the sequence of big-endian 16-bit words.
    The odd trailing byte is treated as the high byte of
    the zero-padded word.

    Args:
        data: Input bytes.

    Returns:
        16-bit ones' complement of the ones' complement sum.

    Example:
        ``` py
        from gufo.probe.checksum import checksum

        checksum(b"\\x08\\x00\\x00\\x00\\x00\\x01\\x00\\x01")  # 0xf7fd
        ```
    """
    n = len(data)
    s = 0
    for i in range(0, n - 1, 2):
        s = (s + ((data[i] << 8) | data[i + 1])) & MASK32
    if n & 1:
        s = (s + (data[-1] << 8)) & MASK32
    # Fold carries
    while s >> 16:
        s = (s & MASK16) + (s >> 16)
    return ~s & MASK16


def verify(data: bytes) -> bool:
    """
    Check the packet with embedded checksum.

    Args:
        data: Packet with the checksum field filled.

    Returns:
        True, if the packet sums to 0xFFFF.
    """
    return checksum(data) == 0
