# ---------------------------------------------------------------------
# Gufo Probe: ProbeSession
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

"""ProbeSession implementation."""

# Python modules
from typing import List, Optional


class ProbeSession(object):
    """
    Run state of the single probe.

    Args:
        destination: Destination, as given by user.
        address: Resolved destination address.
        timeout: Reply timeout, in milliseconds.
        size: Payload size, in bytes.
        count: Stop after `count` packets sent.
    """

    def __init__(
        self: "ProbeSession",
        destination: str,
        address: str,
        timeout: int = 1000,
        size: int = 64,
        count: int = 4,
    ) -> None:
        self.destination = destination
        self.address = address
        self.timeout = timeout
        self.size = size
        self.count = count
        self.sent = 0
        self.received = 0
        self.min_rtt: Optional[float] = None
        self.max_rtt: Optional[float] = None
        self.total_rtt = 0.0
        self.seq = 0

    def next_seq(self: "ProbeSession") -> int:
        """Advance and return identifier/sequence counter."""
        self.seq += 1
        return self.seq

    def on_sent(self: "ProbeSession") -> None:
        """Account the sent packet."""
        self.sent += 1

    def on_reply(self: "ProbeSession", rtt: float) -> None:
        """
        Account the received reply.

        Args:
            rtt: Round-trip time, in milliseconds.
        """
        self.received += 1
        if self.min_rtt is None or rtt < self.min_rtt:
            self.min_rtt = rtt
        if self.max_rtt is None or rtt > self.max_rtt:
            self.max_rtt = rtt
        self.total_rtt += rtt

    @property
    def is_complete(self: "ProbeSession") -> bool:
        """Check all packets are sent."""
        return self.sent >= self.count

    @property
    def loss(self: "ProbeSession") -> int:
        """Packet loss, in percents. 0 when nothing is sent."""
        if not self.sent:
            return 0
        return (self.sent - self.received) * 100 // self.sent

    @property
    def avg_rtt(self: "ProbeSession") -> float:
        """Average rtt, in milliseconds. 0.0 when nothing is received."""
        if not self.received:
            return 0.0
        return self.total_rtt / self.received

    def report(self: "ProbeSession") -> List[str]:
        """
        Format statistics.

        Returns:
            List of lines.
        """
        return [
            f"--- {self.destination} ping statistics ---",
            f"{self.sent} packets transmitted, {self.received} received, "
            f"{self.loss}% packet loss, time {int(self.total_rtt)}ms",
            f"rtt min/avg/max = {self.min_rtt or 0.0:.3f}/"
            f"{self.avg_rtt:.3f}/{self.max_rtt or 0.0:.3f} ms",
        ]
