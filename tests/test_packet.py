# ---------------------------------------------------------------------
# Gufo Probe: Test packets
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

# Python modules
import struct

# Third-party modules
import pytest

# Gufo Probe modules
from gufo.probe.packet import (
    HEADER_OVERHEAD,
    ICMP_ECHO_REQUEST,
    EchoPacket,
    EchoReply,
)

from .util import make_reply


@pytest.mark.parametrize(
    ("seq", "size"), [(1, 64), (2, 0), (0xFFFF, 56), (0x10001, 1)]
)
def test_to_bytes(seq: int, size: int) -> None:
    msg = EchoPacket(seq, size).to_bytes()
    assert len(msg) == 8 + size
    t, code, cs, req_id, req_seq = struct.unpack("!BBHHH", msg[:8])
    assert t == ICMP_ECHO_REQUEST
    assert code == 0
    assert cs != 0
    assert req_id == seq & 0xFFFF
    assert req_seq == seq & 0xFFFF
    assert msg[8:] == bytes(size)


def test_checksum_offset() -> None:
    msg = EchoPacket(1, 0).to_bytes()
    assert msg == b"\x08\x00\xf7\xfd\x00\x01\x00\x01"


def test_decode() -> None:
    buf = make_reply(size=HEADER_OVERHEAD, ttl=57, src=(10, 1, 2, 3))
    reply = EchoReply.decode(buf, len(buf))
    assert reply.size == 0
    assert reply.ttl == 57
    assert reply.src_addr == "10.1.2.3"


def test_decode_full() -> None:
    buf = make_reply(size=92, ttl=255, src=(127, 0, 0, 1))
    reply = EchoReply.decode(buf, len(buf))
    assert reply.size == 64
    assert reply.ttl == 255
    assert reply.src_addr == "127.0.0.1"


@pytest.mark.parametrize("size", [0, 8, 19])
def test_decode_short(size: int) -> None:
    with pytest.raises(ValueError):
        EchoReply.decode(bytes(size), size)
