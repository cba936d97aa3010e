from __future__ import annotations

"""Interactive convolution (cross-correlation) visualizer.

The window shows three grids: the padded input, the weight (kernel) and
the output. Hovering a cell highlights every cell it is related to by a
multiply-accumulate, and an animation steps through the output cells once
per second so the sliding window is visible even without hovering.
"""

import dataclasses
import sys
import tkinter as tk
from pathlib import Path

# Allow running this file directly (e.g. `python src/conv_visualizer/app.py`)
# by ensuring `src/` is on sys.path for absolute package imports.
if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from conv_visualizer.core.focus import FocusController
from conv_visualizer.core.highlight import Colorizers, FocusKind
from conv_visualizer.core.shape_math import ShapeParams, parameter_bounds
from conv_visualizer.services.param_store import PARAMS_PATH, load_params, save_params
from conv_visualizer.ui.canvas import draw_color_grid
from conv_visualizer.ui.constants import (
    ANIMATION_INTERVAL_MS,
    BOUND_SEARCH_LIMIT,
    COLOR_BG,
    COLOR_STATUS_INFO_BG,
    COLOR_STATUS_INFO_FG,
    COLOR_STATUS_WARN_BG,
    COLOR_STATUS_WARN_FG,
    DEFAULT_PARAMS,
    GRID_CELL_SIZE,
    GRID_MARGIN,
    LINKED_FIELDS,
    MAX_INPUT_SIZE,
    WINDOW_MIN_SIZE,
    WINDOW_SIZE,
)
from conv_visualizer.ui.layout import bind_shortcuts, build_layout, configure_styles
from conv_visualizer.ui.render import cell_at, grid_pixel_size


class ConvVisualizerUI:
    """Main application class: owns shape parameters and wires Tk events.

    Highlight state (focus + animation tick) lives in `FocusController`;
    this class only translates widget events into controller calls and
    paints whatever colorizers the controller produces.
    """

    def __init__(
        self,
        root: tk.Tk,
        shape: ShapeParams | None = None,
        params_path: Path | None = PARAMS_PATH,
    ) -> None:
        self.root = root
        self.root.title("Convolution Visualizer")
        self.root.geometry(WINDOW_SIZE)
        self.root.minsize(*WINDOW_MIN_SIZE)
        self.root.configure(bg=COLOR_BG)

        self.status_var = tk.StringVar(value="Starting...")
        self.params_path = params_path

        restored = load_params(params_path) if shape is None and params_path is not None else None
        self.shape = shape or restored or ShapeParams(**DEFAULT_PARAMS)

        # Last hovered (matrix, row, col); avoids recomputing on every pixel of motion.
        self._hover: tuple[FocusKind, int, int] | None = None
        # Scheduled animation callback id.
        self._tick_job: str | None = None
        self._paused = False

        configure_styles(self.root)
        build_layout(self)
        bind_shortcuts(self)

        self._resize_grids()
        self.focus_controller = FocusController(self.shape, on_change=self._render)
        self._sync_controls()

        if shape is None and restored is None and params_path is not None and params_path.exists():
            self._set_status(
                f"Could not restore saved parameters from {params_path}; using defaults.",
                level="warn",
            )
        else:
            self._set_status(
                f"Ready. Output is {self.shape.output_height} x {self.shape.output_width}. "
                "Hover any cell to trace its multiply-accumulates.",
                level="info",
            )
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)
        self._schedule_tick()

    def _set_status(self, message: str, level: str = "info") -> None:
        """Update bottom status banner text + color based on severity."""
        self.status_var.set(message)
        if level == "warn":
            self.status_label.configure(bg=COLOR_STATUS_WARN_BG, fg=COLOR_STATUS_WARN_FG)
        else:
            self.status_label.configure(bg=COLOR_STATUS_INFO_BG, fg=COLOR_STATUS_INFO_FG)

    # ------------------------------
    # Parameter edits
    # ------------------------------
    def on_param_change(self, name: str, value: int) -> bool:
        """Apply one slider edit; invalid shapes are refused and the slider reverts.

        Typed text is not limited by the spinbox range, so every edited field
        is checked against its slider bounds before the shape is rebuilt.
        """
        updates = {name: value}
        if self.link_axes_var.get() and name in LINKED_FIELDS:
            updates[LINKED_FIELDS[name]] = value

        bounds = self._control_bounds()
        for field, new_value in updates.items():
            lo, hi = bounds[field]
            if not lo <= new_value <= hi:
                self._set_status(
                    f"{field.replace('_', ' ').capitalize()} must be between {lo} and {hi}; "
                    f"{new_value} refused.",
                    level="warn",
                )
                self._sync_controls()
                return False

        try:
            candidate = dataclasses.replace(self.shape, **updates)
        except (TypeError, ValueError):
            self._sync_controls()
            return False

        if not candidate.is_valid():
            self._set_status(
                f"{name.replace('_', ' ').capitalize()} = {value} leaves no output cells; "
                "edit refused.",
                level="warn",
            )
            self._sync_controls()
            return False

        self.apply_shape(candidate)
        return True

    def apply_shape(self, shape: ShapeParams) -> None:
        """Switch to new (valid) shape parameters and redraw everything."""
        self.shape = shape
        self._hover = None
        self._resize_grids()
        self.focus_controller.set_shape(shape)
        self._sync_controls()
        self._save_params()
        self._set_status(
            f"Output is now {shape.output_height} x {shape.output_width}.",
            level="info",
        )

    def reset_params(self) -> None:
        self.apply_shape(ShapeParams(**DEFAULT_PARAMS))

    def _save_params(self) -> None:
        if self.params_path is None:
            return
        try:
            save_params(self.shape, self.params_path)
        except OSError as exc:
            self._set_status(f"Could not save parameters: {exc}", level="warn")

    def _control_bounds(self) -> dict[str, tuple[int, int]]:
        """Slider range of every field, widened to include its current value."""
        bounds = parameter_bounds(self.shape, MAX_INPUT_SIZE, BOUND_SEARCH_LIMIT)
        widened = {}
        for name, (lo, hi) in bounds.items():
            # A valid value can sit outside the scanned range (e.g. a large stride).
            value = getattr(self.shape, name)
            widened[name] = (min(lo, value), max(hi, value))
        return widened

    def _sync_controls(self) -> None:
        """Push current values and legal ranges into every slider."""
        bounds = self._control_bounds()
        one_by_one = self.shape.weight_height == 1 and self.shape.weight_width == 1
        for name, slider in self.sliders.items():
            lo, hi = bounds[name]
            slider.set_value(getattr(self.shape, name))
            slider.set_bounds(lo, hi, disabled=(name == "dilation" and one_by_one))

    # ------------------------------
    # Pointer interactions
    # ------------------------------
    def on_grid_motion(self, kind: FocusKind, x: float, y: float) -> None:
        """Translate pointer motion over a grid into focus changes."""
        rows, cols = self._grid_dims(kind)
        cell = cell_at(x, y, rows, cols, GRID_CELL_SIZE, GRID_MARGIN)
        if cell is None:
            self.on_grid_leave()
            return
        hover = (kind, cell[0], cell[1])
        if hover == self._hover:
            return
        self._hover = hover
        self.focus_controller.on_enter(kind, cell[0], cell[1])

    def on_grid_leave(self) -> None:
        if self._hover is None:
            return
        self._hover = None
        self.focus_controller.on_leave()

    # ------------------------------
    # Animation
    # ------------------------------
    def toggle_animation(self) -> None:
        """Pause or resume the animation timer (hover keeps working)."""
        self._paused = not self._paused
        if self._paused:
            if self._tick_job is not None:
                self.root.after_cancel(self._tick_job)
                self._tick_job = None
            self.pause_button.configure(text="Resume")
            self._set_status("Animation paused.", level="info")
        else:
            self.pause_button.configure(text="Pause")
            self._set_status("Animation resumed.", level="info")
            self._schedule_tick()

    def _schedule_tick(self) -> None:
        if self._tick_job is None:
            self._tick_job = self.root.after(ANIMATION_INTERVAL_MS, self._on_tick)

    def _on_tick(self) -> None:
        self._tick_job = None
        if self._paused:
            return
        self.focus_controller.on_tick()
        self._schedule_tick()

    # ------------------------------
    # Rendering
    # ------------------------------
    def _grid_dims(self, kind: FocusKind) -> tuple[int, int]:
        if kind is FocusKind.INPUT:
            return self.shape.padded_input_height, self.shape.padded_input_width
        if kind is FocusKind.WEIGHT:
            return self.shape.weight_height, self.shape.weight_width
        return self.shape.output_height, self.shape.output_width

    def _resize_grids(self) -> None:
        """Fit each canvas to its matrix and refresh the grid titles."""
        s = self.shape
        titles = {
            FocusKind.INPUT: (
                f"Input ({s.input_height} × {s.input_width}"
                + (f", padded {s.padded_input_height} × {s.padded_input_width})" if s.padding else ")")
            ),
            FocusKind.WEIGHT: f"Weight ({s.weight_height} × {s.weight_width})",
            FocusKind.OUTPUT: f"Output ({s.output_height} × {s.output_width})",
        }
        for kind, canvas in self.grid_canvases.items():
            width, height = grid_pixel_size(*self._grid_dims(kind), GRID_CELL_SIZE, GRID_MARGIN)
            canvas.configure(width=width, height=height)
            self.grid_titles[kind].set(titles[kind])

    def _render(self, colorizers: Colorizers) -> None:
        """Paint all three grids from freshly computed colorizers."""
        for kind, colorizer, (rows, cols) in (
            (FocusKind.INPUT, colorizers.input, colorizers.input_shape),
            (FocusKind.WEIGHT, colorizers.weight, colorizers.weight_shape),
            (FocusKind.OUTPUT, colorizers.output, colorizers.output_shape),
        ):
            draw_color_grid(
                canvas=self.grid_canvases[kind],
                rows=rows,
                cols=cols,
                colorizer=colorizer,
                cell_size=GRID_CELL_SIZE,
                margin=GRID_MARGIN,
            )

    def _on_close(self) -> None:
        """Stop the animation timer and close the Tk window cleanly."""
        if self._tick_job is not None:
            self.root.after_cancel(self._tick_job)
            self._tick_job = None
        self.root.destroy()


def main(shape: ShapeParams | None = None, params_path: Path | None = PARAMS_PATH) -> None:
    root = tk.Tk()
    ConvVisualizerUI(root, shape=shape, params_path=params_path)
    root.mainloop()


if __name__ == "__main__":
    main()
