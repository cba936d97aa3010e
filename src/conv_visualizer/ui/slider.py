"""Range slider + text box pair for one integer parameter."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable


def parse_int(text: str) -> int | None:
    """Parse an integer typed by the user; None if the text is not one yet."""
    try:
        return int(str(text).strip())
    except ValueError:
        return None


class ParamSlider:
    """A ttk.Scale and ttk.Spinbox that edit the same integer value.

    `on_change(value)` fires only for user edits that differ from the current
    value. Text that is not an integer is refused and the box reverts.
    """

    def __init__(
        self,
        parent: tk.Misc,
        label: str,
        on_change: Callable[[int], None],
        row: int,
    ) -> None:
        self._on_change = on_change
        self._value = 0
        # Scale.set/configure fire `command`; ignore those while syncing.
        self._syncing = False
        self.lo = 0
        self.hi = 0

        self.var = tk.StringVar(value="0")
        ttk.Label(parent, text=label, style="Section.TLabel").grid(
            row=row, column=0, padx=(0, 8), pady=3, sticky="w"
        )
        self.scale = ttk.Scale(
            parent,
            from_=0,
            to=1,
            orient="horizontal",
            length=180,
            command=self._on_scale,
        )
        self.scale.grid(row=row, column=1, padx=(0, 8), pady=3, sticky="we")
        self.spin = ttk.Spinbox(
            parent,
            from_=0,
            to=1,
            textvariable=self.var,
            width=4,
            command=self._on_text,
            style="App.TSpinbox",
        )
        self.spin.grid(row=row, column=2, pady=3, sticky="w")
        self.spin.bind("<Return>", lambda _e: self._on_text())
        self.spin.bind("<FocusOut>", lambda _e: self._on_text())

    @property
    def value(self) -> int:
        return self._value

    def set_value(self, value: int) -> None:
        """Show `value` without firing on_change."""
        self._value = value
        self.var.set(str(value))
        self._syncing = True
        try:
            self.scale.set(value)
        finally:
            self._syncing = False

    def set_bounds(self, lo: int, hi: int, disabled: bool = False) -> None:
        """Update the legal range; the pair is disabled when there is no choice."""
        self.lo, self.hi = lo, hi
        self._syncing = True
        try:
            self._configure_range(lo, hi, disabled)
        finally:
            self._syncing = False

    def _configure_range(self, lo: int, hi: int, disabled: bool) -> None:
        self.scale.configure(from_=lo, to=max(hi, lo))
        self.spin.configure(from_=lo, to=max(hi, lo))
        state = "disabled" if disabled or lo >= hi else "normal"
        self.scale.state(["disabled"] if state == "disabled" else ["!disabled"])
        self.spin.configure(state=state)
        # Scale.configure may clamp the shown position; put it back.
        self.scale.set(self._value)

    def _on_scale(self, raw: str) -> None:
        try:
            value = int(round(float(raw)))
        except (ValueError, tk.TclError):
            return
        self._emit(value)

    def _on_text(self) -> None:
        try:
            value = parse_int(self.var.get())
        except tk.TclError:
            value = None
        if value is None:
            self.var.set(str(self._value))
            return
        self._emit(value)

    def _emit(self, value: int) -> None:
        if self._syncing or value == self._value:
            return
        self._on_change(value)
