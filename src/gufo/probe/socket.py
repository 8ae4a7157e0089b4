# ---------------------------------------------------------------------
# Gufo Probe: IcmpConnection implementation
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

"""
IcmpConnection implementation.

Attributes:
    ICMP_PORT: Dummy port for connecting raw socket.
"""

# Python modules
import socket
from asyncio import TimeoutError, get_running_loop, wait_for
from typing import Optional

ICMP_PORT = 0


class IcmpConnection(object):
    """
    Raw ICMPv4 socket, connected to the single destination.

    Use `IcmpConnection.connect()` to resolve the destination
    and open the connection.

    Args:
        sock: Connected non-blocking raw socket.
        address: Destination address.

    Note:
        Opening the Raw Socket may require super-user priveleges
        or additional permissions. Refer to the operation system's
        documentation for details.
    """

    def __init__(
        self: "IcmpConnection", sock: socket.socket, address: str
    ) -> None:
        self.__sock = sock
        self.address = address
        self.__deadline: Optional[float] = None

    @classmethod
    async def connect(
        cls, destination: str, timeout: float = 1.0
    ) -> "IcmpConnection":
        """
        Resolve destination and open the connection.

        Args:
            destination: Host name or IPv4 address.
            timeout: Connection timeout, in seconds.

        Returns:
            Open connection.

        Raises:
            OSError: When failed to resolve or to open raw socket.
            asyncio.TimeoutError: When resolution is timed out.
        """
        loop = get_running_loop()
        infos = await wait_for(
            loop.getaddrinfo(destination, None, family=socket.AF_INET),
            timeout,
        )
        if not infos:
            msg = f"cannot resolve {destination}"
            raise OSError(msg)
        address = infos[0][4][0]
        sock = socket.socket(
            socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP
        )
        try:
            sock.setblocking(False)
            sock.connect((address, ICMP_PORT))
        except OSError:
            sock.close()
            raise
        return cls(sock, address)

    def set_deadline(
        self: "IcmpConnection", deadline: Optional[float]
    ) -> None:
        """
        Set deadline for the following send and recv operations.

        Args:
            deadline: Absolute deadline, in event loop's time.
                None - wait forever.
        """
        self.__deadline = deadline

    def _get_timeout(self: "IcmpConnection") -> Optional[float]:
        """
        Get time left until the deadline.

        Returns:
            Time left in seconds, None if no deadline set.

        Raises:
            asyncio.TimeoutError: When deadline is already expired.
        """
        if self.__deadline is None:
            return None
        left = self.__deadline - get_running_loop().time()
        if left <= 0:
            raise TimeoutError
        return left

    async def send(self: "IcmpConnection", data: bytes) -> None:
        """
        Send packet to the destination.

        Args:
            data: Packet to send.
        """
        await wait_for(
            get_running_loop().sock_sendall(self.__sock, data),
            self._get_timeout(),
        )

    async def recv(self: "IcmpConnection", size: int) -> bytes:
        """
        Receive the packet.

        Args:
            size: Receive buffer size.

        Returns:
            Received bytes, including IPv4 header.
        """
        return await wait_for(
            get_running_loop().sock_recv(self.__sock, size),
            self._get_timeout(),
        )

    def close(self: "IcmpConnection") -> None:
        """Close the socket."""
        self.__sock.close()
