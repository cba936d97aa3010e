"""Reusable geometry/text helpers for the matrix views.

These helpers are pure functions (no UI state), which makes them easy
to test and easy to reuse from the command line report.
"""

from __future__ import annotations

from conv_visualizer.core.association import AssociationTable
from conv_visualizer.core.shape_math import ShapeParams


def grid_pixel_size(rows: int, cols: int, cell_size: int, margin: int) -> tuple[int, int]:
    """Canvas (width, height) needed to show a rows x cols grid."""
    return cols * cell_size + 2 * margin, rows * cell_size + 2 * margin


def cell_at(x: float, y: float, rows: int, cols: int, cell_size: int, margin: int) -> tuple[int, int] | None:
    """Map a canvas pixel to the (row, col) under it, or None outside the grid."""
    col = int((x - margin) // cell_size)
    row = int((y - margin) // cell_size)
    if x < margin or y < margin or row >= rows or col >= cols:
        return None
    return row, col


def format_shape_summary(shape: ShapeParams) -> str:
    """One-paragraph description of the matrix geometry."""
    return "\n".join(
        [
            f"Input:  {shape.input_height} x {shape.input_width} "
            f"(padded {shape.padded_input_height} x {shape.padded_input_width}, padding {shape.padding})",
            f"Weight: {shape.weight_height} x {shape.weight_width} (dilation {shape.dilation})",
            f"Stride: {shape.stride_height} x {shape.stride_width}",
            f"Output: {shape.output_height} x {shape.output_width}",
        ]
    )


def format_receptive_field(table: AssociationTable, out_row: int, out_col: int) -> str:
    """List the padded-input cell each kernel entry reads for one output cell.

    Cells inside the zero-padding border are marked with `(pad)`.
    """
    shape = table.shape
    lines = [f"out[{out_row},{out_col}] ="]
    for k_row in range(shape.weight_height):
        for k_col in range(shape.weight_width):
            flat = table.lookup(out_row, out_col, k_row, k_col)
            in_row, in_col = divmod(flat, shape.padded_input_width)
            marker = " (pad)" if shape.in_padding(in_row, in_col) else ""
            lines.append(f"  + w[{k_row},{k_col}] * in[{in_row},{in_col}]{marker}")
    return "\n".join(lines)
