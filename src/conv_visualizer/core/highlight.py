"""Highlight state -> per-cell colors for the input, weight and output grids.

`compute_colorizers` is a pure function of the shape, its association
table, the current focus and the animation tick. It returns three
colorizers, each mapping a (row, col) inside its matrix to a hex color or
`None` (transparent).

Two things are highlighted at once:
- the focused cell (what the pointer is over), drawn in full color, and
- the animated output cell, cycling once per tick, drawn as a faint shadow
  so it stays visible while the user hovers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from conv_visualizer.core.association import AssociationTable
from conv_visualizer.core.colors import (
    TRANSPARENT,
    Color,
    KernelPalette,
    darken,
    toward_white,
)
from conv_visualizer.core.shape_math import ShapeParams

# Grey used for the focused output cell.
NEUTRAL_COLOR = "#666666"
# Background assumed for transparent cells before the padding darkening.
WHITE = "#ffffff"
# How far toward white the animation shadow is pushed.
SHADOW_FRACTION = 0.8
# Inputs touched by the hovered weight that are also under the animated stencil.
STENCIL_LIGHTEN_FRACTION = 0.2
# Darkening applied to the animated step while a weight is hovered.
ANIMATED_DARKEN = 1.0
# Darkening applied to every padding-border cell.
PADDING_DARKEN = 2.5


class FocusKind(Enum):
    NONE = "none"
    INPUT = "input"
    WEIGHT = "weight"
    OUTPUT = "output"


@dataclass(frozen=True)
class Focus:
    """What the pointer is over. Row/col are ignored for FocusKind.NONE."""

    kind: FocusKind
    row: int = 0
    col: int = 0


NO_FOCUS = Focus(FocusKind.NONE)

Colorizer = Callable[[int, int], Color | None]


@dataclass(frozen=True)
class Colorizers:
    """The three colorizers for one render, plus the domain each covers."""

    input: Colorizer
    weight: Colorizer
    output: Colorizer
    input_shape: tuple[int, int]
    weight_shape: tuple[int, int]
    output_shape: tuple[int, int]


def animated_cell(shape: ShapeParams, tick: int) -> tuple[int, int]:
    """Output cell shown by the animation at `tick`, cycling in row-major order."""
    flat = tick % (shape.output_height * shape.output_width)
    return divmod(flat, shape.output_width)


def resolve_focus(shape: ShapeParams, focus: Focus, tick: int) -> Focus:
    """Collapse NONE and INPUT focus onto an equivalent OUTPUT focus.

    No focus behaves like hovering the animated output cell. Hovering an
    input cell snaps to the output whose receptive field has its top-left
    corner under the cursor.
    """
    if focus.kind is FocusKind.NONE:
        row, col = animated_cell(shape, tick)
        return Focus(FocusKind.OUTPUT, row, col)
    if focus.kind is FocusKind.INPUT:
        row = min(max(focus.row // shape.stride_height, 0), shape.output_height - 1)
        col = min(max(focus.col // shape.stride_width, 0), shape.output_width - 1)
        return Focus(FocusKind.OUTPUT, row, col)
    return focus


def _bounded(colorizer: Colorizer, height: int, width: int) -> Colorizer:
    def bounded(i: int, j: int) -> Color | None:
        if not (0 <= i < height and 0 <= j < width):
            raise IndexError(f"cell ({i}, {j}) outside {height} x {width} matrix")
        return colorizer(i, j)

    return bounded


def _with_padding_border(shape: ShapeParams, colorizer: Colorizer) -> Colorizer:
    """Darken padding-border cells; transparent border cells start from white."""

    def wrapped(i: int, j: int) -> Color | None:
        color = colorizer(i, j)
        if shape.in_padding(i, j):
            return darken(color if color is not None else WHITE, PADDING_DARKEN)
        return color

    return wrapped


def _output_focused(
    shape: ShapeParams,
    table: AssociationTable,
    palette: KernelPalette,
    hovered: tuple[int, int],
    animated: tuple[int, int],
) -> tuple[Colorizer, Colorizer, Colorizer]:
    hovered_footprint = table.input_to_weight_at(*hovered)
    animated_footprint = table.input_to_weight_at(*animated)
    padded_width = shape.padded_input_width

    def output_colorizer(i: int, j: int) -> Color | None:
        if (i, j) == hovered:
            return NEUTRAL_COLOR
        if (i, j) == animated:
            return toward_white(NEUTRAL_COLOR, SHADOW_FRACTION)
        return TRANSPARENT

    def input_colorizer(i: int, j: int) -> Color | None:
        flat = i * padded_width + j
        kernel = hovered_footprint.get(flat)
        if kernel is not None:
            return palette.color(*kernel)
        kernel = animated_footprint.get(flat)
        if kernel is not None:
            return toward_white(palette.color(*kernel), SHADOW_FRACTION)
        return TRANSPARENT

    # The whole palette is shown, so the user can match inputs to weights.
    def weight_colorizer(i: int, j: int) -> Color | None:
        return palette.color(i, j)

    return input_colorizer, weight_colorizer, output_colorizer


def _weight_focused(
    shape: ShapeParams,
    table: AssociationTable,
    palette: KernelPalette,
    hovered: tuple[int, int],
    animated: tuple[int, int],
) -> tuple[Colorizer, Colorizer, Colorizer]:
    touched = table.input_to_output_at(*hovered)
    animated_footprint = table.input_to_weight_at(*animated)
    padded_width = shape.padded_input_width
    base = palette.color(*hovered)

    def weight_colorizer(i: int, j: int) -> Color | None:
        if (i, j) == hovered:
            return base
        return TRANSPARENT

    def input_colorizer(i: int, j: int) -> Color | None:
        flat = i * padded_width + j
        stencil_kernel = animated_footprint.get(flat)
        if stencil_kernel == hovered:
            # This input times the hovered weight is the animated step's term.
            return darken(base, ANIMATED_DARKEN)
        if flat in touched:
            if stencil_kernel is not None:
                return toward_white(base, STENCIL_LIGHTEN_FRACTION)
            return base
        if stencil_kernel is not None:
            return toward_white(palette.color(*stencil_kernel), SHADOW_FRACTION)
        return TRANSPARENT

    # Every output is touched by every weight entry.
    def output_colorizer(i: int, j: int) -> Color | None:
        if (i, j) == animated:
            return darken(base, ANIMATED_DARKEN)
        return base

    return input_colorizer, weight_colorizer, output_colorizer


def compute_colorizers(
    shape: ShapeParams,
    table: AssociationTable,
    focus: Focus,
    tick: int,
) -> Colorizers:
    """Build the input, weight and output colorizers for one render."""
    palette = KernelPalette(shape.weight_height, shape.weight_width)
    animated = animated_cell(shape, tick)
    resolved = resolve_focus(shape, focus, tick)
    hovered = (resolved.row, resolved.col)

    if resolved.kind is FocusKind.WEIGHT:
        input_fn, weight_fn, output_fn = _weight_focused(shape, table, palette, hovered, animated)
    else:
        input_fn, weight_fn, output_fn = _output_focused(shape, table, palette, hovered, animated)

    input_shape = (shape.padded_input_height, shape.padded_input_width)
    weight_shape = (shape.weight_height, shape.weight_width)
    output_shape = (shape.output_height, shape.output_width)
    return Colorizers(
        input=_bounded(_with_padding_border(shape, input_fn), *input_shape),
        weight=_bounded(weight_fn, *weight_shape),
        output=_bounded(output_fn, *output_shape),
        input_shape=input_shape,
        weight_shape=weight_shape,
        output_shape=output_shape,
    )
