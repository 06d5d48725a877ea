from typing import AsyncIterator, Iterator
import asyncio

DEFAULT_INTERVAL = 0.015


def typewriter(text: str) -> Iterator[str]:
    """Yield the revealed prefix of `text`, one character longer each step."""
    for i in range(1, len(text) + 1):
        yield text[:i]


async def atypewriter(text: str, interval: float = DEFAULT_INTERVAL) -> AsyncIterator[str]:
    for shown in typewriter(text):
        yield shown
        await asyncio.sleep(interval)
