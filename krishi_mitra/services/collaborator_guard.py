import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def guarded_call(
    name: str, awaitable: Awaitable[T], timeout: float
) -> Optional[T]:
    """
    Awaits a collaborator call, bounded by ``timeout`` seconds.

    A timeout or any error is logged and reported as None, i.e. the signal
    the collaborator would have provided is absent.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("%s timed out after %.1fs", name, timeout)
    except Exception:
        logger.exception("%s failed", name)
    return None
