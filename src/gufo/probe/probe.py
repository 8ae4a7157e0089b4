# ---------------------------------------------------------------------
# Gufo Probe: Probe implementation
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

"""
Probe loop implementation.

Attributes:
    RECV_BUFFER_SIZE: Reply receive buffer size, in bytes.
"""

# Python modules
import asyncio
import logging
import struct
from time import perf_counter
from typing import Optional

# Gufo Probe modules
from .packet import HEADER_OVERHEAD, MAX_SIZE, EchoPacket, EchoReply
from .proto import ConnectionProto
from .session import ProbeSession
from .socket import IcmpConnection

RECV_BUFFER_SIZE = 128

logger = logging.getLogger("gufo.probe")


def _err(e: BaseException) -> str:
    """Format exception for log."""
    return str(e) or e.__class__.__name__


class Probe(object):
    """
    ICMPv4 echo probe.

    Send one Echo Request every `interval` seconds,
    await for the reply, then print the statistics.

    Args:
        timeout: Connection and reply timeout, in milliseconds.
        size: Payload size, in bytes.
        count: Stop after `count` packets sent.
        interval: Interval between requests, in seconds.

    Note:
        Opening the Raw Socket may require super-user priveleges
        or additional permissions. Refer to the operation system's
        documentation for details.

    Example:
        ``` py
        import asyncio
        from gufo.probe import Probe

        asyncio.run(Probe(count=2).run("127.0.0.1"))
        ```
    """

    def __init__(
        self: "Probe",
        timeout: int = 1000,
        size: int = 64,
        count: int = 4,
        interval: float = 1.0,
    ) -> None:
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if size < 0 or size > MAX_SIZE:
            msg = f"size must be in 0..{MAX_SIZE} range"
            raise ValueError(msg)
        if count < 1:
            msg = "count must be positive"
            raise ValueError(msg)
        if interval <= 0:
            msg = "interval must be positive"
            raise ValueError(msg)
        self.__timeout = timeout
        self.__size = size
        self.__count = count
        self.__interval = interval

    async def _connect(self: "Probe", destination: str) -> ConnectionProto:
        """
        Open connection to the destination.

        Args:
            destination: Host name or IPv4 address.

        Returns:
            Open connection.
        """
        return await IcmpConnection.connect(
            destination, timeout=self.__timeout / 1000.0
        )

    async def run(
        self: "Probe",
        destination: str,
        stop: Optional[asyncio.Event] = None,
    ) -> Optional[ProbeSession]:
        """
        Run probe until `count` packets sent or stopped.

        Banner, replies and final statistics are printed to stdout.
        Errors are logged.

        Args:
            destination: Host name or IPv4 address.
            stop: Stop when set. Checked once per tick.

        Returns:
            * Finished session.
            * None - if failed to connect.
        """
        if stop is None:
            stop = asyncio.Event()
        try:
            conn = await self._connect(destination)
        except (OSError, asyncio.TimeoutError) as e:
            logger.error("%s: %s", destination, _err(e))
            return None
        try:
            session = ProbeSession(
                destination,
                conn.address,
                timeout=self.__timeout,
                size=self.__size,
                count=self.__count,
            )
            print(
                f"PING {destination} ({conn.address}) "
                f"{self.__size}({self.__size + HEADER_OVERHEAD}) "
                "bytes of data."
            )
            try:
                await self._loop(conn, session, stop)
            finally:
                for line in session.report():
                    print(line)
        finally:
            conn.close()
        return session

    async def _loop(
        self: "Probe",
        conn: ConnectionProto,
        session: ProbeSession,
        stop: asyncio.Event,
    ) -> None:
        """Tick until complete or stopped."""
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self.__interval
        while True:
            if await self._wait_tick(stop, next_tick):
                return
            if not await self._tick(conn, session):
                return
            # Missed ticks are dropped
            next_tick = max(next_tick + self.__interval, loop.time())

    @staticmethod
    async def _wait_tick(stop: asyncio.Event, next_tick: float) -> bool:
        """
        Wait until next tick.

        Args:
            stop: Stop token.
            next_tick: Tick's time, in event loop's time.

        Returns:
            True, if stopped.
        """
        if stop.is_set():
            return True
        left = next_tick - asyncio.get_running_loop().time()
        if left > 0:
            try:
                await asyncio.wait_for(stop.wait(), left)
            except asyncio.TimeoutError:
                pass
        return stop.is_set()

    async def _tick(
        self: "Probe", conn: ConnectionProto, session: ProbeSession
    ) -> bool:
        """
        Send request and await for reply.

        Args:
            conn: Open connection.
            session: Current session.

        Returns:
            False, if the loop must be terminated.
        """
        seq = session.next_seq()
        packet = EchoPacket(seq, self.__size)
        try:
            msg = packet.to_bytes()
        except (struct.error, ValueError) as e:
            logger.error("cannot build packet: %s", _err(e))
            return True
        conn.set_deadline(
            asyncio.get_running_loop().time() + self.__timeout / 1000.0
        )
        try:
            await conn.send(msg)
        except (OSError, asyncio.TimeoutError) as e:
            logger.error("send: %s", _err(e))
            return True
        session.on_sent()
        t0 = perf_counter()
        try:
            buf = await conn.recv(RECV_BUFFER_SIZE)
            reply = EchoReply.decode(buf, len(buf))
        except (OSError, asyncio.TimeoutError, ValueError) as e:
            logger.error("recv: %s", _err(e))
            return not session.is_complete
        rtt = (perf_counter() - t0) * 1000.0
        print(
            f"{reply.size} bytes from {reply.src_addr}: "
            f"icmp_seq={packet.sequence} ttl={reply.ttl} time={rtt:.1f} ms"
        )
        session.on_reply(rtt)
        return not session.is_complete
