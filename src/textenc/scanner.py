"""Background, debounced compatibility scanning for an open document."""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from textenc._utils import DEFAULT_SCAN_DELAY
from textenc.compatibility import IncompatibleCharacter, scan_incompatible_characters
from textenc.debounce import Debouncer
from textenc.line_endings import LineEnding
from textenc.registry import EncodingInfo

Observer = Callable[[tuple[IncompatibleCharacter, ...]], None]


@dataclasses.dataclass(frozen=True, slots=True)
class ScanTarget:
    """Snapshot of what to scan: the text and how it will be saved."""

    text: str
    encoding: EncodingInfo | str
    line_ending: LineEnding | None = None


class IncompatibleCharacterScanner:
    """Keeps the incompatible-character report of a document up to date.

    *source* is called on the worker thread at the start of every scan and
    must return a :class:`ScanTarget` snapshot.  Scans run one at a time on a
    dedicated thread; the most recently completed scan replaces
    :attr:`incompatible_characters` and is passed to every observer.

    :meth:`invalidate` coalesces bursts of edits into one scan after
    *delay* seconds of quiet and does nothing unless :attr:`should_scan` is
    set.  :meth:`scan` runs immediately and drops any pending coalesced
    request.
    """

    def __init__(
        self,
        source: Callable[[], ScanTarget],
        delay: float = DEFAULT_SCAN_DELAY,
        should_scan: bool = False,
    ) -> None:
        self.logger = logging.getLogger(__name__)
        self.should_scan = should_scan
        self._source = source
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="textenc-scan"
        )
        self._debouncer = Debouncer(self._run, self._executor, delay)
        self._lock = threading.Lock()
        self._observers: list[Observer] = []
        self._incompatible_characters: tuple[IncompatibleCharacter, ...] = ()
        self._scan_count = 0
        self._closed = False

    def __enter__(self) -> IncompatibleCharacterScanner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def incompatible_characters(self) -> tuple[IncompatibleCharacter, ...]:
        """The report of the most recently completed scan."""
        with self._lock:
            return self._incompatible_characters

    @property
    def scan_count(self) -> int:
        """Number of scans completed so far."""
        with self._lock:
            return self._scan_count

    @property
    def pending(self) -> bool:
        """Whether a coalesced scan is waiting for its delay to elapse."""
        return self._debouncer.pending

    def add_observer(self, observer: Observer) -> None:
        """Call *observer* with each new report, on the worker thread.

        An exception from one observer is logged and does not stop the others.
        """
        with self._lock:
            self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        with self._lock:
            self._observers.remove(observer)

    def invalidate(self) -> None:
        """Request a coalesced rescan after the text or encoding changed."""
        if not self.should_scan or self._closed:
            return
        self._debouncer.schedule()

    def scan(self) -> Future:
        """Scan now, cancelling any pending coalesced request.

        :returns: A future resolving to the new report.
        :raises RuntimeError: If the scanner has been closed.
        """
        self._debouncer.cancel()
        return self._executor.submit(self._run)

    def close(self) -> None:
        """Cancel pending requests and wait for a running scan to finish."""
        self._closed = True
        self._debouncer.cancel()
        self._executor.shutdown(wait=True)

    def _run(self) -> tuple[IncompatibleCharacter, ...]:
        # Coalesced scans return a future nobody reads; log before propagating.
        try:
            target = self._source()
            report = tuple(
                scan_incompatible_characters(
                    target.text, target.encoding, target.line_ending
                )
            )
        except Exception:
            self.logger.exception("incompatible character scan failed")
            raise
        self.logger.debug("scan found %d incompatible characters", len(report))
        with self._lock:
            self._incompatible_characters = report
            self._scan_count += 1
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(report)
            except Exception:
                self.logger.exception("scan observer %r failed", observer)
        return report
