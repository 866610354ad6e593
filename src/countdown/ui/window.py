"""Desktop window — tkinter front end for the countdown controller."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk

from countdown.config import Settings
from countdown.core.controller import TimerController
from countdown.core.engine import InvalidStateError, TimerEngine, TimerSnapshot, TimerState
from countdown.core.timespec import ValidationError

logger = logging.getLogger(__name__)


class TimerWindow(ttk.Frame):
    """Entry fields, a big HH:MM:SS display, Start/Pause and Reset.

    Everything stateful lives in the :class:`TimerController`; this frame
    only forwards events and renders snapshots.
    """

    def __init__(self, master: tk.Tk, settings: Settings) -> None:
        super().__init__(master, padding=16)

        engine = TimerEngine(settings.default_spec)
        self.controller = TimerController(
            engine,
            schedule_fn=self.after,
            cancel_fn=self.after_cancel,
            tick_interval_ms=settings.tick_interval_ms,
        )

        self.hours_var = tk.StringVar(value=str(settings.default_hours))
        self.minutes_var = tk.StringVar(value=str(settings.default_minutes))
        self.seconds_var = tk.StringVar(value=str(settings.default_seconds))
        self.display_var = tk.StringVar()
        self.status_var = tk.StringVar()
        self.error_var = tk.StringVar()

        self._build_ui()

        engine.set_observer(self._render)
        for var in (self.hours_var, self.minutes_var, self.seconds_var):
            var.trace_add("write", self._on_field_edit)

        self._render(engine.current_snapshot())

    def _build_ui(self) -> None:
        self.columnconfigure(0, weight=1)

        fields = ttk.Frame(self)
        fields.grid(row=0, column=0, pady=(0, 8))
        self._entries = []
        for col, (label, var) in enumerate(
            (("h", self.hours_var), ("m", self.minutes_var), ("s", self.seconds_var))
        ):
            entry = ttk.Entry(fields, textvariable=var, width=4, justify="center")
            entry.grid(row=0, column=col * 2)
            ttk.Label(fields, text=label).grid(row=0, column=col * 2 + 1, padx=(2, 8))
            self._entries.append(entry)

        ttk.Label(self, textvariable=self.error_var, foreground="#b00020").grid(
            row=1, column=0
        )

        ttk.Label(self, textvariable=self.display_var, font=("Sans", 40, "bold")).grid(
            row=2, column=0, pady=8
        )
        ttk.Label(self, textvariable=self.status_var, font=("Sans", 12)).grid(row=3, column=0)

        btns = ttk.Frame(self)
        btns.grid(row=4, column=0, pady=(12, 0))
        self.start_btn = ttk.Button(btns, text="Start", command=self._start_pause)
        self.reset_btn = ttk.Button(btns, text="Reset", command=self._reset)
        self.start_btn.grid(row=0, column=0, padx=(0, 6))
        self.reset_btn.grid(row=0, column=1)

    # ---- Event handlers ----
    def _fields(self) -> tuple[str, str, str]:
        return self.hours_var.get(), self.minutes_var.get(), self.seconds_var.get()

    def _on_field_edit(self, *_args: object) -> None:
        try:
            self.controller.edit(*self._fields())
        except ValidationError as exc:
            self.error_var.set("\n".join(e.message for e in exc.errors))
        else:
            self.error_var.set("")

    def _start_pause(self) -> None:
        try:
            self.controller.toggle(*self._fields())
        except ValidationError as exc:
            self.error_var.set("\n".join(e.message for e in exc.errors))
        except InvalidStateError as exc:
            logger.debug("start rejected: %s", exc)
            self.error_var.set("Set a duration longer than zero.")

    def _reset(self) -> None:
        self.controller.reset()

    # ---- Rendering ----
    def _render(self, snap: TimerSnapshot) -> None:
        self.display_var.set(snap.display)
        self.start_btn.configure(text="Pause" if snap.is_running else "Start")
        entry_state = ["!disabled"] if snap.is_configurable else ["disabled"]
        for entry in self._entries:
            entry.state(entry_state)

        if snap.is_completed:
            self.status_var.set("Time's up!")
        elif snap.is_running:
            self.status_var.set("Running...")
        elif snap.state == TimerState.PAUSED:
            self.status_var.set("Paused")
        else:
            self.status_var.set("Ready")


def run(settings: Settings) -> None:
    """Open the countdown window and block until it is closed."""
    root = tk.Tk()
    root.title("Countdown")
    window = TimerWindow(root, settings)
    window.pack(fill="both", expand=True)

    def _on_close() -> None:
        window.controller.close()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", _on_close)
    root.mainloop()
