"""
scoring/rarity.py

Log-proportion anomaly scorer implementing BaseScorer.

A group's rarity score is ``log10(count / total_records)``. Groups whose
score is strictly below the threshold are anomalies; a threshold of -3.0
flags groups making up less than 0.1% of all records.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from app import failure_codes
from app.domain.anomaly import ResultSet, ScoredGroup
from app.domain.tally import GlobalTally, TallyMode
from app.logging_utils import log_event
from scoring.base import BaseScorer

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD: float = -3.0


def rarity_score(count: int, total_records: int) -> float:
    """Return ``log10(count / total_records)``.

    Raises:
        ValueError: if either argument is not positive.
    """
    if count <= 0 or total_records <= 0:
        raise ValueError("count and total_records must both be positive.")
    return math.log10(count / total_records)


def _report_order(group: ScoredGroup) -> tuple[float, tuple[str, ...], tuple[str, ...]]:
    # Equal scores fall back to the key, then the row, so output never
    # depends on worker scheduling.
    return (group.score, group.key_fields(), group.row or ())


class AnomalyScorer(BaseScorer):
    """Flags groups whose rarity score falls below a threshold.

    In COUNT mode each anomalous group yields one ScoredGroup. In ROWS mode
    every original row of an anomalous group yields its own ScoredGroup
    carrying the group's shared count and score.
    """

    def __init__(self, *, threshold: float = DEFAULT_THRESHOLD) -> None:
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def score(self, tally: GlobalTally, *, columns: Sequence[str] = ()) -> ResultSet:
        total = tally.total_records
        if total <= 0:
            log_event(
                logger,
                logging.WARNING,
                "zero_total_records",
                code=failure_codes.ZERO_TOTAL_RECORDS,
                groups=len(tally),
            )
            return self._result(tally, (), columns)

        anomalies: list[ScoredGroup] = []
        for key, count in tally.counts.items():
            if count <= 0:
                continue
            score = rarity_score(count, total)
            if not score < self._threshold:
                continue
            if tally.mode is TallyMode.ROWS:
                anomalies.extend(
                    ScoredGroup(key=key, count=count, score=score, row=row)
                    for row in tally.rows.get(key, ())
                )
            else:
                anomalies.append(ScoredGroup(key=key, count=count, score=score))

        anomalies.sort(key=_report_order)

        log_event(
            logger,
            logging.INFO,
            "scoring_completed",
            anomalies=len(anomalies),
            groups=len(tally),
            threshold=self._threshold,
            total_records=total,
        )
        return self._result(tally, tuple(anomalies), columns)

    def _result(
        self,
        tally: GlobalTally,
        groups: tuple[ScoredGroup, ...],
        columns: Sequence[str],
    ) -> ResultSet:
        return ResultSet(
            groups=groups,
            threshold=self._threshold,
            total_records=tally.total_records,
            mode=tally.mode,
            columns=tuple(columns),
        )
