# ---------------------------------------------------------------------
# Gufo Probe: ICMP Echo packets
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

"""
ICMP Echo Request builder and Echo Reply decoder.

Attributes:
    ICMP_ECHO_REQUEST: Echo Request ICMP type.
    ICMP_ECHO_REPLY: Echo Reply ICMP type.
    HEADER_OVERHEAD: IPv4 header + ICMP header size, in bytes.
    MAX_SIZE: Maximal payload size, in bytes.
"""

# Python modules
import struct

# Gufo Probe modules
from .checksum import checksum

ICMP_ECHO_REQUEST = 8
ICMP_ECHO_REPLY = 0
ICMP_HEADER = struct.Struct("!BBHHH")
HEADER_OVERHEAD = 28
MAX_SIZE = 65535 - HEADER_OVERHEAD
# IPv4 header offsets of the raw reply
TTL_OFFSET = 8
SRC_ADDR_OFFSET = 12
MIN_REPLY_SIZE = 20


class EchoPacket(object):
    """
    ICMP Echo Request.

    Identifier and sequence number share the same value.

    Args:
        seq: Identifier and sequence number.
        size: Payload size, in bytes.
    """

    def __init__(self: "EchoPacket", seq: int, size: int = 64) -> None:
        self.type = ICMP_ECHO_REQUEST
        self.code = 0
        self.identifier = seq & 0xFFFF
        self.sequence = seq & 0xFFFF
        self.payload = bytes(size)

    def to_bytes(self: "EchoPacket") -> bytes:
        """
        Serialize packet.

        Checksum is calculated over the packet with the zeroed
        checksum field, then written at the offsets 2 and 3.

        Returns:
            Wire representation of the packet.
        """
        msg = bytearray(
            ICMP_HEADER.pack(
                self.type, self.code, 0, self.identifier, self.sequence
            )
        )
        msg += self.payload
        cs = checksum(msg)
        msg[2] = cs >> 8
        msg[3] = cs & 0xFF
        return bytes(msg)


class EchoReply(object):
    """
    Reply, as read from the raw socket.

    Raw IPv4 sockets pass the IP header along with the ICMP message,
    so the source address and TTL are taken from the fixed offsets
    of the IPv4 header.

    Args:
        size: ICMP payload size, in bytes.
        src_addr: Source address of the reply.
        ttl: Reply's time-to-live.
    """

    def __init__(
        self: "EchoReply", size: int, src_addr: str, ttl: int
    ) -> None:
        self.size = size
        self.src_addr = src_addr
        self.ttl = ttl

    @classmethod
    def decode(cls, buf: bytes, n: int) -> "EchoReply":
        """
        Decode raw reply.

        Args:
            buf: Receive buffer.
            n: Amount of bytes received.

        Returns:
            Decoded reply.

        Raises:
            ValueError: When the buffer is too short to contain IPv4 header.
        """
        if n < MIN_REPLY_SIZE or len(buf) < MIN_REPLY_SIZE:
            msg = f"reply is too short: {n} bytes"
            raise ValueError(msg)
        src = buf[SRC_ADDR_OFFSET : SRC_ADDR_OFFSET + 4]
        return cls(
            size=n - HEADER_OVERHEAD,
            src_addr=".".join(str(x) for x in src),
            ttl=buf[TTL_OFFSET],
        )
