"""
Trailing-edge debounce on the asyncio event loop.

    search = debounce(fetch_results, 500)
    search("ber")
    search("berg")     # cancels the pending "ber" call
    search.cancel()    # nothing fires

Only one timer is ever pending per debounced function.
"""

import asyncio
import functools
import inspect
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


def debounce(
    fn: Callable[..., Any],
    delay_ms: float,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> Callable[..., None]:
    """
    Wrap `fn` so a burst of calls results in a single call `delay_ms` after
    the last one, with the last call's arguments.

    Coroutine functions are scheduled as tasks on the loop; a task that
    raises is logged, not re-raised.

    Args:
        fn: Function to debounce
        delay_ms: Quiet period in milliseconds
        loop: Event loop to schedule on (default: the running loop at call time)

    Returns:
        Debounced function with `.cancel()` and `.is_pending()` attached
    """
    if delay_ms < 0:
        raise ValueError("delay_ms must be >= 0")

    handle: Optional[asyncio.TimerHandle] = None
    # the loop only keeps weak references to tasks
    tasks: set[asyncio.Task] = set()
    name = getattr(fn, "__name__", fn)

    def _task_done(task: asyncio.Task) -> None:
        tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Debounced call to %s failed: %s", name, error, exc_info=error)

    def _fire(args: tuple, kwargs: dict) -> None:
        nonlocal handle
        handle = None
        if inspect.iscoroutinefunction(fn):
            task = (loop or asyncio.get_running_loop()).create_task(fn(*args, **kwargs))
            tasks.add(task)
            task.add_done_callback(_task_done)
        else:
            fn(*args, **kwargs)

    @functools.wraps(fn)
    def debounced(*args: Any, **kwargs: Any) -> None:
        nonlocal handle
        if handle is not None:
            handle.cancel()
        target_loop = loop or asyncio.get_running_loop()
        handle = target_loop.call_later(delay_ms / 1000, _fire, args, kwargs)

    def cancel() -> None:
        """Drop the pending call, if any. Later calls are unaffected."""
        nonlocal handle
        if handle is not None:
            handle.cancel()
            handle = None
            logger.debug("Cancelled pending call to %s", name)

    def is_pending() -> bool:
        return handle is not None

    debounced.cancel = cancel
    debounced.is_pending = is_pending
    return debounced
