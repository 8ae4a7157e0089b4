import asyncio
import sys

from gufo.probe import Probe


async def main(address: str) -> None:
    session = await Probe(count=1, timeout=500).run(address)
    if session is not None and session.received:
        print(f"rtt={session.min_rtt:.3f}ms")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1]))
