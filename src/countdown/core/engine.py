"""Timer engine — a pure, tick-driven countdown state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from countdown.core.timespec import DEFAULT_SPEC, TimeSpec, format_hms, validate

logger = logging.getLogger(__name__)


class TimerState(Enum):
    """Possible states of the engine."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class InvalidStateError(Exception):
    """Raised when an invalid state transition is attempted."""


@dataclass(frozen=True)
class TimerSnapshot:
    """Point-in-time view of the engine handed to observers."""

    configured_hours: int
    configured_minutes: int
    configured_seconds: int
    remaining_seconds: int
    state: TimerState

    @property
    def is_running(self) -> bool:
        return self.state == TimerState.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.state == TimerState.COMPLETED

    @property
    def is_configurable(self) -> bool:
        """True when the duration may be changed (IDLE or COMPLETED)."""
        return self.state in CONFIGURABLE_STATES

    @property
    def display(self) -> str:
        return format_hms(self.remaining_seconds)


Observer = Callable[[TimerSnapshot], None]

CONFIGURABLE_STATES = frozenset({TimerState.IDLE, TimerState.COMPLETED})
_RESETTABLE_STATES = frozenset({TimerState.RUNNING, TimerState.PAUSED, TimerState.COMPLETED})


class TimerEngine:
    """A countdown timer advanced only by explicit :meth:`tick` calls.

    The engine never reads a clock and owns no threads; whoever drives it
    decides when a second has passed.  All operations must be called from
    one thread.  After every successful transition the registered observer
    receives exactly one frozen :class:`TimerSnapshot`.
    """

    def __init__(self, spec: TimeSpec = DEFAULT_SPEC) -> None:
        self._spec: TimeSpec = spec
        self._remaining: int = spec.total_seconds()
        self._state: TimerState = TimerState.IDLE
        self._observer: Optional[Observer] = None
        self._notifying: bool = False

    # -- public interface ----------------------------------------------------

    def set_observer(self, callback: Optional[Observer]) -> None:
        """Register *callback* for snapshots, replacing any previous one."""
        self._observer = callback

    def current_snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            configured_hours=self._spec.hours,
            configured_minutes=self._spec.minutes,
            configured_seconds=self._spec.seconds,
            remaining_seconds=self._remaining,
            state=self._state,
        )

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def spec(self) -> TimeSpec:
        return self._spec

    def configure(self, hours: object, minutes: object, seconds: object) -> None:
        """Replace the configured duration.

        Valid only from IDLE or COMPLETED; always lands in IDLE with the
        full new duration remaining.  Raises
        :class:`~countdown.core.timespec.ValidationError` on bad input.
        """
        self._check_reentry("configure")
        spec = validate(hours, minutes, seconds)
        self._require_state("configure", CONFIGURABLE_STATES)

        self._spec = spec
        self._remaining = spec.total_seconds()
        self._state = TimerState.IDLE
        logger.debug("configured %s", format_hms(self._remaining))
        self._notify()

    def start(self) -> None:
        """Start counting down from IDLE, or continue from PAUSED.

        Starting an IDLE engine with nothing left to count is rejected so a
        zero duration can never complete without a tick.
        """
        self._check_reentry("start")
        if self._state == TimerState.PAUSED:
            self._enter_running()
            return
        self._require_state("start", frozenset({TimerState.IDLE}))
        if self._remaining == 0:
            logger.debug("start() rejected: zero duration")
            raise InvalidStateError("start() is not valid with a zero duration")
        self._enter_running()

    def resume(self) -> None:
        """Continue a paused countdown.  Valid only from PAUSED."""
        self._check_reentry("resume")
        self._require_state("resume", frozenset({TimerState.PAUSED}))
        self._enter_running()

    def pause(self) -> None:
        """Freeze a running countdown.  Does nothing in any other state."""
        self._check_reentry("pause")
        if self._state != TimerState.RUNNING:
            return
        self._state = TimerState.PAUSED
        logger.debug("paused at %s", format_hms(self._remaining))
        self._notify()

    def reset(self) -> None:
        """Return to IDLE with the configured duration.  No-op when IDLE."""
        self._check_reentry("reset")
        if self._state not in _RESETTABLE_STATES:
            return
        self._remaining = self._spec.total_seconds()
        self._state = TimerState.IDLE
        logger.debug("reset to %s", format_hms(self._remaining))
        self._notify()

    def tick(self) -> bool:
        """Consume one second.

        Ignored unless RUNNING.  Returns ``True`` only on the tick that
        completes the countdown.
        """
        self._check_reentry("tick")
        if self._state != TimerState.RUNNING:
            return False

        self._remaining -= 1
        completed = self._remaining == 0
        if completed:
            self._state = TimerState.COMPLETED
            logger.info("countdown of %s completed", format_hms(self._spec.total_seconds()))
        self._notify()
        return completed

    # -- private helpers -----------------------------------------------------

    def _require_state(self, method: str, valid: frozenset[TimerState]) -> None:
        """Raise ``InvalidStateError`` if the current state is not in *valid*."""
        if self._state not in valid:
            logger.debug("%s() rejected in %s state", method, self._state.value)
            raise InvalidStateError(f"{method}() is not valid from {self._state.value} state")

    def _check_reentry(self, method: str) -> None:
        if self._notifying:
            raise InvalidStateError(f"{method}() may not be called from an observer")

    def _enter_running(self) -> None:
        self._state = TimerState.RUNNING
        logger.debug("running with %s remaining", format_hms(self._remaining))
        self._notify()

    def _notify(self) -> None:
        if self._observer is None:
            return
        snapshot = self.current_snapshot()
        self._notifying = True
        try:
            self._observer(snapshot)
        finally:
            self._notifying = False
