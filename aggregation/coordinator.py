"""
aggregation/coordinator.py

Aggregation coordinator: fans files out to a bounded pool of tally workers
and merges their partial tallies into one GlobalTally.

Protocol
--------
1. Start ``pool_size`` worker threads reading from a work queue.
2. Enqueue every file, then one stop marker per worker.
3. Each worker tallies a file, puts the PartialTally on the results queue,
   and adds the file's record count to a lock-guarded counter.
4. Wait for the work queue to drain and every worker to exit.
5. Merge all partial tallies into the GlobalTally on the calling thread.

The GlobalTally is never touched by worker threads; the record counter is
the only state they share.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Sequence
from pathlib import Path

from aggregation.pool import HalfFileCountPolicy, PoolSizingPolicy
from aggregation.worker import FileTallyWorker
from app.domain.tally import GlobalTally, PartialTally
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

_STOP = object()


class _RecordCounter:
    """
    Running record total shared by worker threads.
    """

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def add(self, amount: int) -> None:
        with self._lock:
            self._value += amount

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class AggregationCoordinator:
    """
    Runs a FileTallyWorker over many files with a fixed-size thread pool.
    """

    def __init__(
        self,
        *,
        worker: FileTallyWorker,
        pool_policy: PoolSizingPolicy | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._worker = worker
        self._pool_policy = pool_policy or HalfFileCountPolicy()
        self._cancel_event = cancel_event or threading.Event()

    def pool_size_for(self, file_count: int) -> int:
        return max(1, self._pool_policy(file_count))

    def aggregate(self, files: Sequence[str | Path]) -> GlobalTally:
        """
        Tally every file and return the merged GlobalTally.

        Per-file failures contribute nothing and are only logged, so the
        result may be empty with ``total_records == 0``.
        """

        paths = [Path(item) for item in files]
        tally = GlobalTally(mode=self._worker.mode)
        if not paths:
            return tally

        pool_size = self.pool_size_for(len(paths))
        work_queue: queue.Queue[object] = queue.Queue(maxsize=len(paths))
        results: queue.Queue[PartialTally] = queue.Queue()
        counter = _RecordCounter()
        started_at = time.monotonic()

        log_event(
            logger,
            logging.INFO,
            "aggregation_started",
            file_count=len(paths),
            pool_size=pool_size,
            mode=tally.mode.value,
        )

        threads = [
            threading.Thread(
                target=self._work,
                args=(work_queue, results, counter),
                name=f"tally-worker-{index}",
                daemon=True,
            )
            for index in range(pool_size)
        ]
        for thread in threads:
            thread.start()

        for path in paths:
            work_queue.put(path)
        for _ in threads:
            work_queue.put(_STOP)

        work_queue.join()
        for thread in threads:
            thread.join()

        # Single-threaded merge; every producer has exited.
        files_processed = 0
        files_failed = 0
        while True:
            try:
                partial = results.get_nowait()
            except queue.Empty:
                break
            files_processed += 1
            if partial.failed:
                files_failed += 1
            tally.merge(partial)

        tally.total_records = counter.value

        log_event(
            logger,
            logging.INFO,
            "aggregation_completed",
            elapsed_seconds=round(time.monotonic() - started_at, 3),
            file_count=len(paths),
            files_failed=files_failed,
            files_processed=files_processed,
            files_skipped=len(paths) - files_processed,
            groups=len(tally),
            total_records=tally.total_records,
        )
        return tally

    def _work(
        self,
        work_queue: queue.Queue[object],
        results: queue.Queue[PartialTally],
        counter: _RecordCounter,
    ) -> None:
        while True:
            item = work_queue.get()
            try:
                if item is _STOP:
                    return
                if self._cancel_event.is_set():
                    continue
                partial = self._tally_one(Path(str(item)))
                if partial is None:
                    continue
                results.put(partial)
                counter.add(partial.records)
            finally:
                work_queue.task_done()

    def _tally_one(self, path: Path) -> PartialTally | None:
        try:
            return self._worker.tally(path)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected failure tallying file %s: %s", path, exc)
            return None
