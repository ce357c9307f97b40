"""
app/services/detection_service.py

Service layer for anomaly detection runs.

A run executes these stages in order:

    1. discover_input_files()          — fails fast on a bad directory or no files
    2. AggregationCoordinator.aggregate() — concurrent per-file tallies, merged at the end
    3. AnomalyScorer.score()           — log-proportion scoring and ordering
    4. ResultSink.emit()               — optional rendering of the ResultSet

Stage 1 errors propagate to the caller. Per-file errors in stage 2 are
absorbed by the tally worker and only logged.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from pathlib import Path

from aggregation.coordinator import AggregationCoordinator
from aggregation.pool import FixedPoolSize, HalfFileCountPolicy, PoolSizingPolicy
from aggregation.source import discover_input_files
from aggregation.worker import FileTallyWorker
from app.config import DetectionSettings, get_detection_settings
from app.domain.anomaly import ResultSet
from app.domain.tally import ColumnSelector, GlobalTally, TallyMode
from app.schemas.detection import DetectionRequest
from scoring.rarity import AnomalyScorer
from sinks.base import ResultSink

logger = logging.getLogger(__name__)


class DetectionService:
    """
    Coordinates file discovery, aggregation, scoring and rendering.
    """

    def __init__(self, *, settings: DetectionSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> DetectionSettings:
        return self._settings

    def pool_policy(self, workers: int | None = None) -> PoolSizingPolicy:
        if workers is not None:
            return FixedPoolSize(workers)
        return HalfFileCountPolicy(
            minimum=self._settings.min_workers,
            maximum=self._settings.max_workers,
        )

    def aggregate(
        self,
        *,
        directory: str | Path,
        selector: ColumnSelector,
        mode: TallyMode = TallyMode.COUNT,
        workers: int | None = None,
        cancel_event: threading.Event | None = None,
    ) -> GlobalTally:
        """
        Discover the directory's files and return their merged tally.

        Raises:
            InputDirectoryNotFound: ``directory`` does not exist.
            NoInputFilesFound:      no file matched the configured extension.
        """

        files = discover_input_files(directory, extension=self._settings.file_extension)
        worker = FileTallyWorker(
            selector=selector,
            mode=mode,
            encoding=self._settings.file_encoding,
        )
        coordinator = AggregationCoordinator(
            worker=worker,
            pool_policy=self.pool_policy(workers),
            cancel_event=cancel_event,
        )
        return coordinator.aggregate(files)

    def detect(
        self,
        request: DetectionRequest,
        *,
        sink: ResultSink | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ResultSet:
        """
        Run one detection request end to end and return its ResultSet.

        When ``sink`` is given the ResultSet is emitted to it before returning.
        """

        selector = ColumnSelector.from_names(request.columns)
        tally = self.aggregate(
            directory=request.directory,
            selector=selector,
            mode=TallyMode(request.mode),
            workers=request.workers,
            cancel_event=cancel_event,
        )
        results = AnomalyScorer(threshold=request.threshold).score(
            tally,
            columns=selector.columns,
        )
        logger.info(
            "Detection finished directory=%r columns=%r anomalies=%s total_records=%s",
            request.directory,
            list(selector.columns),
            len(results),
            results.total_records,
        )
        if sink is not None:
            sink.emit(results)
        return results


@lru_cache(maxsize=1)
def get_detection_service() -> DetectionService:
    """
    Build and cache the detection service with env-driven settings.
    """
    return DetectionService(settings=get_detection_settings())
