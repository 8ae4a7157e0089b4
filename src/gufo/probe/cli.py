# ---------------------------------------------------------------------
# Gufo Probe: Command-line utility
# ---------------------------------------------------------------------
# Copyright (C) 2024-25, Gufo Labs
# See LICENSE.md for details
# ---------------------------------------------------------------------
"""
`gufo-probe` command line utility.

Attributes:
    NAME: Utility's name.
"""

# Python modules
import argparse
import asyncio
import logging
import signal
import sys
from enum import IntEnum
from typing import List, NoReturn, Optional

# Gufo Probe modules
from gufo.probe import Probe

NAME = "gufo-probe"
LOG_FORMAT = "%(asctime)s %(message)s"


class ExitCode(IntEnum):
    """
    Cli exit codes.

    Attributes:
        OK: Successful exit
        ERR: Usage error or connection failure
    """

    OK = 0
    ERR = 1


class Cli(object):
    """`gufo-probe` utility class."""

    def die(self, msg: Optional[str] = None) -> NoReturn:
        """Die with message."""
        if msg:
            print(msg)
        sys.exit(ExitCode.ERR.value)

    def run(self: "Cli", args: List[str]) -> ExitCode:
        """
        Parse command-line arguments and run appropriate command.

        Args:
            args: List of command-line arguments
        Returns:
            ExitCode
        """
        # Prepare command-line parser
        parser = argparse.ArgumentParser(
            prog=NAME, description="ICMPv4 echo probe"
        )
        parser.add_argument(
            "address", nargs="?", help="Destination host or address"
        )
        parser.add_argument(
            "-w",
            dest="timeout",
            type=int,
            default=1000,
            help="Time to wait for response, in milliseconds",
        )
        parser.add_argument(
            "-s",
            dest="size",
            type=int,
            default=64,
            help="Use `size` as number of data bytes to be sent",
        )
        parser.add_argument(
            "-c",
            dest="count",
            type=int,
            default=4,
            help="Stop after `count` packets sent",
        )
        # Parse arguments
        ns = parser.parse_args(args)
        if not ns.address:
            self.die("ping: usage error: destination address required")
        try:
            probe = Probe(timeout=ns.timeout, size=ns.size, count=ns.count)
        except ValueError as e:
            self.die(f"ping: {e}")
        self.setup_logging()
        # Setup loop
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop = asyncio.Event()
        main_task = loop.create_task(self._run(probe, ns.address, stop))
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop.set)
        # Run
        try:
            return loop.run_until_complete(main_task)
        finally:
            loop.close()

    @staticmethod
    def setup_logging() -> None:
        """Log errors to stderr."""
        logger = logging.getLogger("gufo.probe")
        if logger.handlers:
            return
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    async def _run(
        self, probe: Probe, address: str, stop: asyncio.Event
    ) -> ExitCode:
        session = await probe.run(address, stop=stop)
        if session is None:
            return ExitCode.ERR
        return ExitCode.OK


def main(args: Optional[List[str]] = None) -> int:
    """Run `gufo-probe` with command-line arguments."""
    return Cli().run(sys.argv[1:] if args is None else args).value
