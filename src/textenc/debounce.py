"""Coalescing of repeated requests into a single delayed action."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future

from textenc._utils import DEFAULT_SCAN_DELAY, _validate_delay

logger = logging.getLogger(__name__)


class Debouncer:
    """Run *action* once requests have been quiet for *delay* seconds.

    There is a single pending slot: :meth:`schedule` replaces any pending
    request and restarts the timer.  When the timer fires, the request is
    handed to *executor* and the slot is cleared.  Requests already handed
    over are never interrupted.
    """

    def __init__(
        self,
        action: Callable[[], object],
        executor: Executor,
        delay: float = DEFAULT_SCAN_DELAY,
    ) -> None:
        _validate_delay(delay)
        self._action = action
        self._executor = executor
        self._delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """Whether a request is waiting for its timer."""
        with self._lock:
            return self._timer is not None

    def schedule(self) -> None:
        """Request the action, replacing any request still pending."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self._delay, self._fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> bool:
        """Drop the pending request, if any.

        :returns: True if a request was pending.
        """
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is None:
            return False
        timer.cancel()
        return True

    def _fire(self) -> Future | None:
        with self._lock:
            # A timer replaced or cancelled after it started firing must not run.
            if self._timer is not threading.current_thread():
                return None
            self._timer = None
        logger.debug("debounced request fired after %.3fs", self._delay)
        try:
            return self._executor.submit(self._action)
        except RuntimeError:
            logger.debug("executor shut down; dropping debounced request")
            return None
