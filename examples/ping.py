import asyncio
import sys

from gufo.probe import Probe


async def main(address: str, size: int = 64, count: int = 4) -> None:
    session = await Probe(size=size, count=count).run(address)
    if session is None:
        print(f"Cannot reach {address}")
        return
    print(f"Average rtt: {session.avg_rtt:.3f} ms, loss: {session.loss}%")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1]))
