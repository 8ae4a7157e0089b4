# ---------------------------------------------------------------------
# Gufo Probe: Test Utilities
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

# Python modules
import asyncio
import socket
from functools import cached_property
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

# Gufo Probe modules
from gufo.probe import Probe
from gufo.probe.proto import ConnectionProto

Reply = Union[bytes, BaseException]


class Caps(object):
    @cached_property
    def has_ipv4(self: "Caps") -> bool:
        """
        Check system allows IPv4 raw sockets.

        Returns:
            * True - if IPv4 raw sockets are allowed.
            * False - if IPv4 raw sockets are denied.
        """
        try:
            s = socket.socket(
                socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP
            )
            s.bind(("127.0.0.1", 0))
            s.close()
            return True
        except OSError:
            return False

    @cached_property
    def is_denied(self: "Caps") -> bool:
        """Check if raw sockets are denied."""
        return not self.has_ipv4


class FakeConnection(object):
    """
    In-memory connection.

    Args:
        replies: Results of consequent `recv` calls. Exceptions are raised.
            `recv` times out when replies are exhausted.
        send_errors: Raise OSError on first `send_errors` sends.
        address: Destination address.
    """

    def __init__(
        self: "FakeConnection",
        replies: Iterable[Reply] = (),
        send_errors: int = 0,
        address: str = "192.0.2.1",
    ) -> None:
        self.address = address
        self.replies: List[Reply] = list(replies)
        self.send_errors = send_errors
        self.sent: List[bytes] = []
        self.deadlines: List[Optional[float]] = []
        self.deadline: Optional[float] = None
        self.closed = False

    def set_deadline(
        self: "FakeConnection", deadline: Optional[float]
    ) -> None:
        self.deadline = deadline
        self.deadlines.append(deadline)

    async def send(self: "FakeConnection", data: bytes) -> None:
        if self.send_errors:
            self.send_errors -= 1
            msg = "Network is unreachable"
            raise OSError(msg)
        self.sent.append(data)

    async def recv(self: "FakeConnection", size: int) -> bytes:
        if not self.replies:
            raise asyncio.TimeoutError
        r = self.replies.pop(0)
        if isinstance(r, BaseException):
            raise r
        return r[:size]

    def close(self: "FakeConnection") -> None:
        self.closed = True


class FakeProbe(Probe):
    """Probe, connecting to the given fake connection."""

    def __init__(
        self: "FakeProbe",
        conn: Union[ConnectionProto, BaseException],
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("interval", 0.01)
        super().__init__(**kwargs)
        self.conn = conn

    async def _connect(
        self: "FakeProbe", destination: str
    ) -> ConnectionProto:
        if isinstance(self.conn, BaseException):
            raise self.conn
        return self.conn


def make_reply(
    size: int = 92,
    ttl: int = 64,
    src: Sequence[int] = (192, 0, 2, 1),
) -> bytes:
    """
    Build raw reply with IPv4 header.

    Args:
        size: Total size, including IPv4 and ICMP headers.
        ttl: IPv4 TTL.
        src: Source address octets.

    Returns:
        Raw reply.
    """
    buf = bytearray(size)
    buf[0] = 0x45
    buf[8] = ttl
    buf[9] = socket.IPPROTO_ICMP
    buf[12:16] = bytes(src)
    return bytes(buf)


def as_str(v: Dict[str, Any]) -> str:
    """
    Format parameters for @parametrize(..., ids).

    Args:
        v: Input parameters.

    Returns:
        String to display as test id.

    Example:
        ``` py
        @pytest.mark.parametrize(...., ids=as_str)
        ```
    """
    return str(v)


caps = Caps()
