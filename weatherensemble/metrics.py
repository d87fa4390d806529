"""Timing and outcome counters for the seven per-day forecast tasks."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

TOTAL_DAYS = 7


@dataclass
class TaskMetrics:
    """Counters and timestamps collected while processing forecast days."""

    total_start_time: float = field(default_factory=time.perf_counter)
    total_end_time: float | None = None
    task_start_times: list[float] = field(default_factory=list)
    task_end_times: list[float] = field(default_factory=list)
    successful_tasks: int = 0
    failed_tasks: int = 0
    timed_out_tasks: int = 0

    def finish_total(self) -> None:
        """Record the end of the whole run."""
        self.total_end_time = time.perf_counter()

    def total_duration(self) -> float:
        """Seconds from start to finish, or to now if not finished."""
        end = self.total_end_time if self.total_end_time is not None else time.perf_counter()
        return end - self.total_start_time

    def log_summary(self) -> None:
        """Write a summary of the run to the log."""
        duration = self.total_duration()
        if self.successful_tasks > 0 and duration > 0:
            efficiency = self.successful_tasks / duration * 100.0
        else:
            efficiency = 0.0

        logger.info("=== Parallel Forecast Processing Metrics ===")
        logger.info("Total processing time: %.3fs", duration)
        logger.info("Successful tasks: %d/%d", self.successful_tasks, TOTAL_DAYS)
        logger.info("Failed tasks: %d", self.failed_tasks)
        logger.info("Timed out tasks: %d", self.timed_out_tasks)
        logger.info("Parallelism efficiency: %.1f%%", efficiency)
        for day, (start, end) in enumerate(zip(self.task_start_times, self.task_end_times)):
            logger.info("Day %d processing time: %.3fs", day, end - start)
        logger.info("============================================")