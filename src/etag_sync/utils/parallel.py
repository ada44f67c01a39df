"""Bounded concurrency for coroutine workers."""

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

from loguru import logger

from etag_sync.exceptions import ExecutorError, PreconditionError

T = TypeVar("T")
R = TypeVar("R")


async def gather_bounded(
    items: Iterable[T],
    worker: Callable[[T], Awaitable[R]],
    concurrency: int = 1,
) -> List[R]:
    """
    Run ``worker`` over ``items`` with at most ``concurrency`` calls in flight.

    ``min(concurrency, len(items))`` lanes run side by side. Each lane claims the
    next unclaimed item in input order and stores the worker's result at that
    item's index, so the returned list lines up with ``items`` no matter which
    call finishes first.

    After the first worker failure no lane claims another item. Calls already in
    flight are left to finish, their results are discarded, and the first failure
    is raised once every lane has drained.

    Args:
        items: Inputs, consumed once in order
        worker: Coroutine function applied to each input
        concurrency: Maximum number of simultaneous worker calls

    Returns:
        Worker results, positionally aligned with ``items``

    Raises:
        PreconditionError: If concurrency is not a positive integer
        ExecutorError: Wrapping the first worker failure
    """
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise PreconditionError(f"concurrency must be a positive integer, got {concurrency!r}")

    inputs = list(items)
    if not inputs:
        return []

    results: List[Optional[R]] = [None] * len(inputs)
    pending = iter(enumerate(inputs))
    failures: List[ExecutorError] = []

    async def lane() -> None:
        while not failures:
            claimed = next(pending, None)
            if claimed is None:
                return
            index, item = claimed
            try:
                results[index] = await worker(item)
            except Exception as e:
                if not failures:
                    logger.error(f"Worker failed on item {index}: {e}")
                    failures.append(ExecutorError(index, item, e))
                else:
                    logger.debug(f"Ignoring failure on item {index} after batch already failed: {e}")
                return

    lanes = min(concurrency, len(inputs))
    logger.debug(f"Running {len(inputs)} items on {lanes} lanes")
    await asyncio.gather(*(lane() for _ in range(lanes)))

    if failures:
        error = failures[0]
        raise error from error.cause

    return results  # pyright: ignore [reportReturnType]
