# ---------------------------------------------------------------------
# Gufo Probe: ConnectionProto
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

"""ConnectionProto protocol definition."""

# Python modules
from typing import Optional, Protocol


class ConnectionProto(Protocol):
    """
    ICMP connection protocol.

    Connection is bound to the single destination
    and is exclusively owned by the probe loop.

    Attributes:
        address: Resolved destination address.
    """

    address: str

    def set_deadline(
        self: "ConnectionProto", deadline: Optional[float]
    ) -> None:
        """
        Set deadline for the following send and recv operations.

        Args:
            deadline: Absolute deadline, in event loop's time.
                None - wait forever.
        """
        ...

    async def send(self: "ConnectionProto", data: bytes) -> None:
        """
        Send packet to the destination.

        Args:
            data: Packet to send.

        Raises:
            OSError: On send failure.
            asyncio.TimeoutError: When deadline is expired.
        """
        ...

    async def recv(self: "ConnectionProto", size: int) -> bytes:
        """
        Receive the packet.

        Args:
            size: Receive buffer size.

        Returns:
            Received bytes.

        Raises:
            OSError: On receive failure.
            asyncio.TimeoutError: When deadline is expired.
        """
        ...

    def close(self: "ConnectionProto") -> None:
        """Release the connection."""
        ...
