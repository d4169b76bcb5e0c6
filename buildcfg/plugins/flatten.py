"""Resolve nested, partly asynchronous plugin output into one flat list."""

import asyncio
import inspect
import logging
from typing import Any

from buildcfg.plugins.exceptions import (
    ElementResolutionFailedError,
    UnresolvableStructureError,
)
from buildcfg.utils.share import arraify, is_array

logger = logging.getLogger(__name__)

# Each round resolves at least one level of pending values. The cap only
# stops values that keep resolving to new pending values in a loop.
MAX_FLATTEN_ROUNDS = 10_000


def is_pending(value: Any) -> bool:
    """True for anything that has to be awaited (coroutines, futures, tasks)."""
    return inspect.isawaitable(value)


def flatten_sequence(items: Any) -> list:
    """
    Flatten nested lists/tuples depth-first, left to right.

    Pending values are kept in place as single elements.

    Raises:
        UnresolvableStructureError: If a sequence contains itself
    """
    flat = []
    stack = [iter(items)]
    open_ids = [id(items)]

    while stack:
        try:
            item = next(stack[-1])
        except StopIteration:
            stack.pop()
            open_ids.pop()
            continue

        if is_array(item):
            if id(item) in open_ids:
                raise UnresolvableStructureError("Sequence contains itself")
            stack.append(iter(item))
            open_ids.append(id(item))
        else:
            flat.append(item)

    return flat


def discard_pending(values: Any) -> None:
    """
    Close coroutines and cancel futures that will never be awaited.

    Walks nested lists/tuples; anything already resolved is left alone.
    """
    stack = [values]
    seen = set()

    while stack:
        value = stack.pop()
        if is_array(value):
            if id(value) not in seen:
                seen.add(id(value))
                stack.extend(value)
        elif inspect.iscoroutine(value):
            value.close()
        elif isinstance(value, asyncio.Future):
            value.cancel()


def _drop_settled(futures: list) -> None:
    """Mark settled futures as handled and discard whatever they resolved to."""
    for future in futures:
        if future.cancelled():
            continue
        if future.exception() is None:
            discard_pending(future.result())


async def async_flatten(items: Any, max_rounds: int = MAX_FLATTEN_ROUNDS) -> list:
    """
    Resolve every pending element and flatten all nesting.

    Each round awaits all currently pending elements together, then
    flattens whatever they resolved to. Stops once nothing is pending.
    Result order follows the structure of the input, not the order in
    which elements finished. A resolved value that happens to be an
    exception object is kept as data; only raising counts as failure.

    Args:
        items: Sequence of values, awaitables and nested sequences
        max_rounds: Upper bound on rounds before giving up

    Returns:
        Flat list of resolved values

    Raises:
        ElementResolutionFailedError: If any pending element raised
        UnresolvableStructureError: On self-containing sequences, values
            that resolve to themselves, or more than max_rounds rounds

    Example:
        await async_flatten([fetch_a(), [fetch_b(), 4]])  # -> [a, b..., 4]
    """
    try:
        working = flatten_sequence(arraify(items))
    except UnresolvableStructureError:
        discard_pending(items)
        raise

    for round_no in range(1, max_rounds + 1):
        pending = [i for i, value in enumerate(working) if is_pending(value)]
        if not pending:
            return working

        logger.debug(f"Round {round_no}: awaiting {len(pending)} pending element(s)")
        futures = [asyncio.ensure_future(working[i]) for i in pending]
        try:
            await asyncio.wait(futures)
        except asyncio.CancelledError:
            for future in futures:
                future.cancel()
            raise

        for position, (index, future) in enumerate(zip(pending, futures)):
            if future.cancelled():
                _drop_settled(futures[position + 1 :])
                discard_pending(working)
                raise asyncio.CancelledError(f"Element {index} was cancelled")

            error = future.exception()
            if error is not None:
                _drop_settled(futures[position + 1 :])
                discard_pending(working)
                if not isinstance(error, Exception):
                    raise error
                raise ElementResolutionFailedError(
                    f"Element {index} failed to resolve: {error!r}",
                    cause=error,
                    index=index,
                ) from error

            result = future.result()
            if result is working[index] or result is future:
                _drop_settled(futures[position + 1 :])
                discard_pending(working)
                raise UnresolvableStructureError(f"Element {index} resolves to itself")
            working[index] = result

        try:
            working = flatten_sequence(working)
        except UnresolvableStructureError:
            discard_pending(working)
            raise

    discard_pending(working)
    raise UnresolvableStructureError(
        f"Still pending after {max_rounds} rounds; "
        "a value keeps resolving to another pending value"
    )
