import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Iterable, Optional

from subsite.store.base import ContentStore
from .record_visit import RecordResult, VisitStatus, record_visit


class AnalyticsRecorder:
    """
    Runs visit inserts on a background worker so responses never wait
    on analytics.

    At most `max_pending` visits are queued; further visits are dropped
    until the worker catches up.
    """

    def __init__(
        self,
        store: ContentStore,
        *,
        self_addresses: Iterable[str] = (),
        logger,
        max_pending: int = 1000,
    ):
        self.store = store
        self.self_addresses = tuple(self_addresses)
        self.logger = logger
        self.max_pending = max_pending

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="analytics")
        self._pending = set()
        self._lock = threading.Lock()

    def submit(self, visitor: str, hostname: str, path: str) -> "Future[RecordResult]":
        with self._lock:
            # done callbacks may lag behind completion
            self._pending = {f for f in self._pending if not f.done()}
            if len(self._pending) >= self.max_pending:
                dropped = Future()
                dropped.set_result(RecordResult(VisitStatus.DROPPED))
                self.logger.debug("Analytics backlog full, dropping %s%s", hostname, path)
                return dropped

            future = self._executor.submit(
                record_visit,
                store=self.store,
                visitor=visitor,
                hostname=hostname,
                path=path,
                self_addresses=self.self_addresses,
            )
            self._pending.add(future)

        future.add_done_callback(self._on_done)
        return future

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait for every submitted visit to finish."""
        with self._lock:
            pending = list(self._pending)
        wait(pending, timeout=timeout)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def _on_done(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

        result = future.result()
        if result.status is VisitStatus.FAILED:
            self.logger.debug("Analytics write dropped: %s", result.error)
