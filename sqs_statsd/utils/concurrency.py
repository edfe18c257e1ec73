import asyncio
from typing import Callable, TypeVar

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args, **kwargs) -> T:
    """Run a blocking boto3/socket call off the event loop.

    The loop only waits on the tick timer and the shutdown event; everything
    that touches the network goes through here.
    """
    return await asyncio.to_thread(func, *args, **kwargs)
