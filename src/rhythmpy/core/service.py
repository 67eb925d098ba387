"""Keeps the current rhythm result of one user up to date.

The service owns the result cell and runs the analysis on a single background
worker, so that at most one computation is in flight at a time. Consumers register
callbacks instead of polling shared state.
"""

import datetime
import threading
from concurrent import futures
from typing import Callable, List, Optional, Sequence, Tuple

from rhythmpy.core import config, models, orchestrator
from rhythmpy.processing import recompute

logger = config.get_logger()

SampleSource = Callable[[], Sequence[models.DailySample]]
ResultCallback = Callable[[Optional[models.RhythmResult]], None]


class RhythmService:
    """Recomputes and publishes the rhythm result as samples accumulate.

    Attributes:
        settings: The analysis settings.
    """

    def __init__(
        self,
        sample_source: SampleSource,
        settings: Optional[config.AnalysisSettings] = None,
        clock: Optional[orchestrator.Clock] = None,
        executor: Optional[futures.Executor] = None,
    ) -> None:
        """Initialize the service with an empty result cell.

        Args:
            sample_source: Returns the full sample history on demand. One sample
                per day, any order.
            settings: The analysis settings. Defaults to AnalysisSettings().
            clock: Returns the current time. Defaults to datetime.datetime.now.
            executor: Runs the analysis. Defaults to a private single worker
                thread pool, which is shut down by shutdown().
        """
        self.settings = settings or config.AnalysisSettings()
        self._sample_source = sample_source
        self._clock = clock or datetime.datetime.now
        self._owns_executor = executor is None
        self._executor = executor or futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="rhythmpy"
        )

        self._lock = threading.RLock()
        self._current_result: Optional[models.RhythmResult] = None
        self._last_computed_sample_count: Optional[int] = None
        self._in_flight: Optional[futures.Future] = None
        self._rerun_pending = False
        self._rerun_forced = False
        self._generation = 0
        self._debounce_timer: Optional[threading.Timer] = None
        self._callbacks: List[ResultCallback] = []
        self._closed = False

    def __enter__(self) -> "RhythmService":
        """Enter the runtime context."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Shut the service down when leaving the runtime context."""
        self.shutdown()

    @property
    def current_result(self) -> Optional[models.RhythmResult]:
        """The most recent result, None before the first computation."""
        with self._lock:
            return self._current_result

    @property
    def last_computed_sample_count(self) -> Optional[int]:
        """Number of samples the current result was computed from."""
        with self._lock:
            return self._last_computed_sample_count

    @property
    def last_calculation_date(self) -> Optional[datetime.datetime]:
        """When the current result was computed."""
        with self._lock:
            if self._current_result is None:
                return None
            return self._current_result.analysis_date

    @property
    def is_calculating(self) -> bool:
        """Whether a computation is currently queued or running."""
        with self._lock:
            return self._in_flight is not None and not self._in_flight.done()

    @property
    def has_data(self) -> bool:
        """Whether the current result holds at least one detected period."""
        result = self.current_result
        return result is not None and result.has_data(self.settings.min_data_points)

    def subscribe(self, callback: ResultCallback) -> Callable[[], None]:
        """Registers a callback for every new result.

        The callback runs on the worker thread. It receives None when the stored
        data is cleared.

        Args:
            callback: Called with each newly stored result.

        Returns:
            A function that removes the callback again.
        """
        with self._lock:
            self._callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def calculate_if_needed(self, force: bool = False) -> Optional[futures.Future]:
        """Starts a computation in the background if one is due.

        A trigger that arrives while a computation is in flight does not start a
        second one; instead the service runs once more after the current
        computation finishes.

        Args:
            force: Bypass the recompute cadence.

        Returns:
            The future of the scheduled or in-flight computation, or None if no
            computation is due. The future resolves to the new RhythmResult, or to
            None if the result was discarded by clear().
        """
        samples = list(self._sample_source())
        sample_count = len(samples)

        with self._lock:
            if self._closed:
                logger.debug("Service is shut down, not computing.")
                return None

            if sample_count < self.settings.min_data_points:
                logger.info(
                    "Not enough data: %s samples, at least %s required.",
                    sample_count,
                    self.settings.min_data_points,
                )
                return None

            if self._in_flight is not None and not self._in_flight.done():
                logger.debug("Computation in flight, queueing a rerun.")
                self._rerun_pending = True
                self._rerun_forced = self._rerun_forced or force
                return self._in_flight

            if not recompute.should_recompute(
                current_sample_count=sample_count,
                last_computed_sample_count=self._last_computed_sample_count,
                has_existing_result=self._current_result is not None,
                forced=force,
                cadence=self.settings.recompute_cadence,
            ):
                logger.debug("No recomputation due at %s samples.", sample_count)
                return None

            logger.info("Starting rhythm analysis with %s samples.", sample_count)
            future = self._executor.submit(self._compute, samples, self._generation)
            self._in_flight = future
            return future

    def force_recalculation(self) -> Optional[futures.Future]:
        """Recomputes regardless of the recompute cadence."""
        return self.calculate_if_needed(force=True)

    def notify_samples_changed(self) -> None:
        """Signals that the sample history changed.

        Bursts of notifications are coalesced: the computation check runs once,
        debounce_seconds after the last notification.
        """
        with self._lock:
            if self._debounce_timer is not None:
                self._debounce_timer.cancel()
            timer = threading.Timer(
                self.settings.debounce_seconds, self._on_debounce_elapsed
            )
            timer.daemon = True
            self._debounce_timer = timer
        timer.start()

    def load_result(self, result: models.RhythmResult) -> bool:
        """Seeds the result cell with a previously stored result.

        The stored result is discarded if the current history no longer holds
        enough samples to support it.

        Args:
            result: The stored result.

        Returns:
            True if the result was loaded.
        """
        sample_count = len(self._sample_source())
        if sample_count < self.settings.min_data_points:
            logger.info(
                "Stored result discarded, only %s samples available.", sample_count
            )
            self.clear()
            return False

        with self._lock:
            self._current_result = result
            self._last_computed_sample_count = result.total_data_points
        logger.info(
            "Loaded stored result based on %s data points.", result.total_data_points
        )
        return True

    def clear(self) -> None:
        """Drops the stored result and discards any computation in flight."""
        with self._lock:
            self._generation += 1
            self._current_result = None
            self._last_computed_sample_count = None
            self._rerun_pending = False
            self._rerun_forced = False
            if self._debounce_timer is not None:
                self._debounce_timer.cancel()
                self._debounce_timer = None
            callbacks = list(self._callbacks)
        logger.info("Cleared stored rhythm data.")
        self._publish(callbacks, None)

    def cycle_days(self, indicator: models.Indicator) -> Optional[int]:
        """The detected cycle length of an indicator in whole days, if any."""
        result = self.current_result
        if result is None:
            return None
        return result.cycle_days(indicator)

    def debug_info(self) -> str:
        """Human readable description of the current state."""
        result = self.current_result
        if result is None:
            return "No result computed."
        return (
            f"Rhythm service, settings: {self.settings.model_dump()}\n"
            f"{result.summary()}"
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stops the debounce timer and the private worker.

        Args:
            wait: Block until the computation in flight has finished.
        """
        with self._lock:
            self._closed = True
            if self._debounce_timer is not None:
                self._debounce_timer.cancel()
                self._debounce_timer = None
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def _on_debounce_elapsed(self) -> None:
        with self._lock:
            self._debounce_timer = None
        self.calculate_if_needed()

    def _compute(
        self, samples: List[models.DailySample], generation: int
    ) -> Optional[models.RhythmResult]:
        """Runs the analysis and stores its result, unless cleared meanwhile.

        Triggers that arrived during the analysis start one more computation
        afterwards, whether the analysis succeeded or raised.
        """
        rerun, rerun_forced = False, False
        try:
            result = orchestrator.analyze(
                samples, settings=self.settings, clock=self._clock
            )

            with self._lock:
                rerun, rerun_forced = self._finish_computation()
                stored = generation == self._generation
                if stored:
                    self._current_result = result
                    self._last_computed_sample_count = len(samples)
                callbacks = list(self._callbacks)

            if stored:
                self._publish(callbacks, result)
            else:
                logger.info("Data was cleared during the analysis, result discarded.")
            return result if stored else None
        except Exception:
            logger.exception("Rhythm analysis failed.")
            with self._lock:
                rerun, rerun_forced = self._finish_computation()
            raise
        finally:
            if rerun:
                self.calculate_if_needed(force=rerun_forced)

    def _finish_computation(self) -> Tuple[bool, bool]:
        """Marks the computation as done and takes the pending rerun, if any.

        Must be called with the lock held.
        """
        self._in_flight = None
        rerun, rerun_forced = self._rerun_pending, self._rerun_forced
        self._rerun_pending = False
        self._rerun_forced = False
        return rerun, rerun_forced

    def _publish(
        self,
        callbacks: List[ResultCallback],
        result: Optional[models.RhythmResult],
    ) -> None:
        for callback in callbacks:
            try:
                callback(result)
            except Exception:
                logger.exception("Result callback %r failed.", callback)
