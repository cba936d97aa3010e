"""Interaction state for the visualizer: current focus and animation tick.

The controller owns the only mutable state of the highlight engine. Every
event (pointer enter/leave, timer tick, shape change) updates that state
and synchronously recomputes the three colorizers, then hands them to an
optional listener (normally the Tk view).
"""

from __future__ import annotations

from typing import Callable

from conv_visualizer.core.association import AssociationTable, cached_association_table
from conv_visualizer.core.highlight import (
    NO_FOCUS,
    Colorizers,
    Focus,
    FocusKind,
    animated_cell,
    compute_colorizers,
)
from conv_visualizer.core.shape_math import ShapeParams


class FocusController:
    """State machine over (focus, tick). No transition is ever rejected."""

    def __init__(
        self,
        shape: ShapeParams,
        on_change: Callable[[Colorizers], None] | None = None,
    ) -> None:
        self._on_change = on_change
        self.focus: Focus = NO_FOCUS
        self.tick = 0
        self.shape = shape
        self.table: AssociationTable = cached_association_table(shape)
        self.colorizers: Colorizers = self._recompute()

    @property
    def animated_cell(self) -> tuple[int, int]:
        return animated_cell(self.shape, self.tick)

    def on_enter(self, kind: FocusKind | str, row: int, col: int) -> Colorizers:
        """Pointer entered cell (row, col) of the given matrix."""
        kind = FocusKind(kind)
        if kind is FocusKind.NONE:
            return self.on_leave()
        self.focus = Focus(kind, row, col)
        return self._recompute()

    def on_leave(self) -> Colorizers:
        """Pointer left a matrix; fall back to following the animation."""
        self.focus = NO_FOCUS
        return self._recompute()

    def on_tick(self) -> Colorizers:
        """Advance the animation. Wrapping happens when the cell is derived."""
        self.tick += 1
        return self._recompute()

    def set_shape(self, shape: ShapeParams) -> Colorizers:
        """Swap in new shape parameters and rebuild the association table.

        Raises InvalidShapeError (state unchanged) if the shape is invalid.
        Focus is reset because old coordinates may not exist in the new grids.
        """
        table = cached_association_table(shape)
        self.shape = shape
        self.table = table
        self.focus = NO_FOCUS
        return self._recompute()

    def _recompute(self) -> Colorizers:
        self.colorizers = compute_colorizers(self.shape, self.table, self.focus, self.tick)
        if self._on_change is not None:
            self._on_change(self.colorizers)
        return self.colorizers
