"""Controller that turns user events and a periodic clock into engine calls."""

from __future__ import annotations

import logging
from typing import Any, Callable

from countdown.core.engine import CONFIGURABLE_STATES, TimerEngine, TimerState

logger = logging.getLogger(__name__)

ScheduleFn = Callable[[int, Callable[[], None]], Any]
CancelFn = Callable[[Any], None]


class TimerController:
    """Drives a :class:`TimerEngine` from button clicks and a repeating tick.

    Scheduling goes through the injected *schedule_fn* / *cancel_fn* pair
    (``Tk.after`` / ``Tk.after_cancel`` in the desktop window) so this class
    never touches a clock or a thread.  At most one tick is pending, and
    only while the engine is RUNNING.
    """

    def __init__(
        self,
        engine: TimerEngine,
        schedule_fn: ScheduleFn,
        cancel_fn: CancelFn,
        tick_interval_ms: int = 1000,
    ) -> None:
        self._engine = engine
        self._schedule_fn = schedule_fn
        self._cancel_fn = cancel_fn
        self._tick_interval_ms = tick_interval_ms
        self._pending: Any = None

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def has_pending_tick(self) -> bool:
        return self._pending is not None

    # --- User events ---

    def toggle(self, hours: object, minutes: object, seconds: object) -> None:
        """Start/Pause button: pause when running, otherwise start.

        The field values are passed on to :meth:`start_with`.
        """
        if self._engine.state == TimerState.RUNNING:
            self.pause()
        else:
            self.start_with(hours, minutes, seconds)

    def start(self) -> None:
        """Start or resume the engine and begin ticking."""
        self._engine.start()
        self._schedule_tick()

    def start_with(self, hours: object, minutes: object, seconds: object) -> None:
        """Start using the current field values.

        A paused countdown resumes with its remaining time; the fields are
        only applied when nothing is in progress.
        """
        if self._engine.state in CONFIGURABLE_STATES:
            self._engine.configure(hours, minutes, seconds)
        self.start()

    def pause(self) -> None:
        self._cancel_tick()
        self._engine.pause()

    def reset(self) -> None:
        self._cancel_tick()
        self._engine.reset()

    def edit(self, hours: object, minutes: object, seconds: object) -> bool:
        """Apply edited field values.

        Returns ``False`` (and changes nothing) while a countdown is in
        progress.  Invalid values raise ``ValidationError``.
        """
        if self._engine.state not in CONFIGURABLE_STATES:
            logger.debug("ignoring field edit while %s", self._engine.state.value)
            return False
        self._engine.configure(hours, minutes, seconds)
        return True

    def close(self) -> None:
        """Cancel any pending tick."""
        self._cancel_tick()

    # --- Scheduling ---

    def _on_tick(self) -> None:
        self._pending = None
        completed = self._engine.tick()
        if completed:
            logger.info("timer finished")
            return
        if self._engine.state == TimerState.RUNNING:
            self._schedule_tick()

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._pending = self._schedule_fn(self._tick_interval_ms, self._on_tick)

    def _cancel_tick(self) -> None:
        if self._pending is not None:
            self._cancel_fn(self._pending)
            self._pending = None
