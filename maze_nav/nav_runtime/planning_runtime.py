#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PlanningRuntime - periodic replanning on a single worker thread.

Key design:
- A timer thread fires trigger() every interval_s (first fire after one interval)
- A single worker thread runs one PlanningCycle at a time; cycles never overlap
- Triggers that arrive while a cycle is running are dropped (default) or
  coalesced into one pending run (queue policy)
"""

import threading
import time
from enum import Enum
from typing import Optional

from loguru import logger

from maze_nav.config.models import ScheduleConfig
from maze_nav.service.path_planning_service import CycleResult, PlanningCycle


class PlanningRuntime:
    """Planning runtime with a timer thread and a worker thread.

    Lifecycle:
        IDLE -> start() -> RUNNING
        RUNNING -> stop() -> IDLE
    """

    class State(Enum):
        IDLE = 1           # Threads not running
        RUNNING = 2        # Timer and worker threads alive

    def __init__(self, cycle: PlanningCycle, schedule: Optional[ScheduleConfig] = None):
        self.cycle_ = cycle
        self.schedule_ = schedule or ScheduleConfig()
        self._state = PlanningRuntime.State.IDLE

        self._lock = threading.Lock()
        self._wake_event = threading.Event()
        self._stop_event = threading.Event()

        self._busy = False
        self._pending = False
        self._dropped = 0
        self._completed = 0
        self._last_result: Optional[CycleResult] = None

        self._timer_thread: Optional[threading.Thread] = None
        self._worker_thread: Optional[threading.Thread] = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> bool:
        """Start timer and worker threads.

        Returns:
            True if the runtime is running after the call.
        """
        if self._state == PlanningRuntime.State.RUNNING:
            logger.warning("PlanningRuntime already running")
            return True

        self._stop_event.clear()
        self._wake_event.clear()
        self._pending = False
        self._busy = False

        self._worker_thread = threading.Thread(target=self._workerLoop, name="planning-worker", daemon=True)
        self._timer_thread = threading.Thread(target=self._timerLoop, name="planning-timer", daemon=True)
        self._state = PlanningRuntime.State.RUNNING

        self._worker_thread.start()
        self._timer_thread.start()

        logger.info(
            f"PlanningRuntime started (interval={self.schedule_.interval_s}s, "
            f"policy={self.schedule_.overlap_policy})"
        )
        return True

    def stop(self, timeout: float = 2.0) -> None:
        """Stop both threads. A cycle in progress is allowed to finish."""
        if self._state != PlanningRuntime.State.RUNNING:
            logger.debug("PlanningRuntime not running")
            return

        logger.info("Stopping PlanningRuntime...")
        self._state = PlanningRuntime.State.IDLE
        self._stop_event.set()
        self._wake_event.set()

        if self._timer_thread and self._timer_thread.is_alive():
            self._timer_thread.join(timeout=timeout)
        if self._worker_thread and self._worker_thread.is_alive():
            self._worker_thread.join(timeout=timeout)

        self._timer_thread = None
        self._worker_thread = None
        logger.info(
            f"PlanningRuntime stopped (completed={self._completed}, dropped={self._dropped})"
        )

    # =========================================================================
    # Triggering
    # =========================================================================

    def trigger(self) -> bool:
        """Request a recompute.

        Returns:
            True if a cycle was scheduled, False if dropped or not running.
        """
        with self._lock:
            if self._state != PlanningRuntime.State.RUNNING:
                return False
            if self._busy:
                if self.schedule_.overlap_policy == "queue":
                    self._pending = True
                    return True
                self._dropped += 1
                logger.debug(f"Cycle still running, trigger dropped (total dropped={self._dropped})")
                return False
            self._pending = True
            self._wake_event.set()
            return True

    def runOnce(self) -> CycleResult:
        """Run one cycle synchronously on the calling thread (runtime must be idle)."""
        if self._state == PlanningRuntime.State.RUNNING:
            raise RuntimeError("runOnce() is not allowed while the runtime is running")
        result = self.cycle_.run()
        self._recordResult(result)
        return result

    # =========================================================================
    # State queries
    # =========================================================================

    def getState(self) -> "PlanningRuntime.State":
        return self._state

    def isRunning(self) -> bool:
        return self._state == PlanningRuntime.State.RUNNING

    def isBusy(self) -> bool:
        with self._lock:
            return self._busy

    @property
    def last_result(self) -> Optional[CycleResult]:
        with self._lock:
            return self._last_result

    def getStats(self) -> dict:
        with self._lock:
            last = self._last_result
            return {
                "completed": self._completed,
                "dropped": self._dropped,
                "busy": self._busy,
                "last_status": last.status.value if last is not None else None,
            }

    # =========================================================================
    # Thread loops
    # =========================================================================

    def _timerLoop(self) -> None:
        """Timer thread: fire trigger() at a fixed cadence."""
        logger.info("Timer thread started")

        interval = self.schedule_.interval_s
        next_fire = time.perf_counter() + interval

        while not self._stop_event.is_set():
            delay = next_fire - time.perf_counter()
            if delay > 0 and self._stop_event.wait(delay):
                break

            self.trigger()

            next_fire += interval
            now = time.perf_counter()
            if next_fire < now:
                # Fell behind, resync instead of bursting
                next_fire = now + interval

        logger.info("Timer thread exited")

    def _workerLoop(self) -> None:
        """Worker thread: run one planning cycle per scheduled trigger."""
        logger.info("Worker thread started")

        while not self._stop_event.is_set():
            if not self._wake_event.wait(timeout=0.1):
                continue

            with self._lock:
                self._wake_event.clear()
                if not self._pending or self._stop_event.is_set():
                    continue
                self._pending = False
                self._busy = True

            try:
                result = self.cycle_.run()
                self._recordResult(result)
            except Exception as e:
                logger.error(f"Planning cycle error: {e}")
            finally:
                with self._lock:
                    self._busy = False
                    if self._pending:
                        self._wake_event.set()

        logger.info("Worker thread exited")

    def _recordResult(self, result: CycleResult) -> None:
        with self._lock:
            self._last_result = result
            self._completed += 1
