"""Symbolic association table for a 2D cross-correlation.

For every output cell and every kernel offset, the table records the flat
index of the padded-input cell that is multiplied by that kernel entry.

Padding is not subtracted when building the table: coordinates live in
padded-input space, so every entry is defined. Whether a referenced cell is
part of the zero border is decided later, at coloring time.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from conv_visualizer.core.shape_math import ShapeParams


class InvalidShapeError(ValueError):
    """Raised when shape parameters are out of range or produce an empty output.

    `output_height`/`output_width` are None when a field is below its
    minimum, since the output size is undefined then (a zero stride).
    """

    def __init__(self, shape: ShapeParams) -> None:
        self.shape = shape
        errors = shape.field_errors()
        if errors:
            self.output_height = self.output_width = None
            super().__init__("; ".join(errors))
            return
        self.output_height = shape.output_height
        self.output_width = shape.output_width
        super().__init__(
            f"shape produces a {self.output_height} x {self.output_width} output; "
            "both output dimensions must be at least 1"
        )


class AssociationTable:
    """Read-only (outR, outC, kR, kC) -> flat padded-input index mapping.

    Entries live in one flat int64 array indexed by
    `((outR * outW + outC) * kH + kR) * kW + kC`.
    """

    def __init__(self, shape: ShapeParams, flat: np.ndarray) -> None:
        self.shape = shape
        self.output_height = shape.output_height
        self.output_width = shape.output_width
        self.weight_height = shape.weight_height
        self.weight_width = shape.weight_width
        self.padded_width = shape.padded_input_width
        self._flat = flat
        self._flat.setflags(write=False)

    def __len__(self) -> int:
        return int(self._flat.size)

    def _offset(self, out_row: int, out_col: int, k_row: int, k_col: int) -> int:
        if not (0 <= out_row < self.output_height and 0 <= out_col < self.output_width):
            raise IndexError(f"output cell ({out_row}, {out_col}) out of range")
        if not (0 <= k_row < self.weight_height and 0 <= k_col < self.weight_width):
            raise IndexError(f"kernel offset ({k_row}, {k_col}) out of range")
        return ((out_row * self.output_width + out_col) * self.weight_height + k_row) * self.weight_width + k_col

    def lookup(self, out_row: int, out_col: int, k_row: int, k_col: int) -> int:
        """Flat padded-input index read by kernel (k_row, k_col) for one output cell."""
        return int(self._flat[self._offset(out_row, out_col, k_row, k_col)])

    def flat_indices(self) -> np.ndarray:
        """Read-only view of every entry, in arena order."""
        return self._flat

    def input_to_weight_at(self, out_row: int, out_col: int) -> dict[int, tuple[int, int]]:
        """Flat input index -> kernel coordinate, restricted to one output cell."""
        start = self._offset(out_row, out_col, 0, 0)
        footprint = self._flat[start : start + self.weight_height * self.weight_width]
        mapping: dict[int, tuple[int, int]] = {}
        for k, flat_input in enumerate(footprint.tolist()):
            mapping[flat_input] = divmod(k, self.weight_width)
        return mapping

    def input_to_output_at(self, k_row: int, k_col: int) -> dict[int, tuple[int, int]]:
        """Flat input index -> output cell, restricted to one kernel coordinate."""
        self._offset(0, 0, k_row, k_col)
        kernel_slot = k_row * self.weight_width + k_col
        column = self._flat[kernel_slot :: self.weight_height * self.weight_width]
        mapping: dict[int, tuple[int, int]] = {}
        for out, flat_input in enumerate(column.tolist()):
            # One kernel entry never reads the same input for two outputs (stride >= 1).
            assert flat_input not in mapping, f"input {flat_input} reached twice by kernel ({k_row}, {k_col})"
            mapping[flat_input] = divmod(out, self.output_width)
        return mapping


def build_association_table(shape: ShapeParams) -> AssociationTable:
    """Compute the full association table for `shape`.

    Raises `InvalidShapeError` when a field is below its minimum or either
    output dimension is below 1.
    """
    if not shape.is_valid():
        raise InvalidShapeError(shape)

    out_r = np.arange(shape.output_height).reshape(-1, 1, 1, 1)
    out_c = np.arange(shape.output_width).reshape(1, -1, 1, 1)
    k_r = np.arange(shape.weight_height).reshape(1, 1, -1, 1)
    k_c = np.arange(shape.weight_width).reshape(1, 1, 1, -1)

    input_row = out_r * shape.stride_height + k_r * shape.dilation
    input_col = out_c * shape.stride_width + k_c * shape.dilation
    flat = (input_row * shape.padded_input_width + input_col).astype(np.int64).reshape(-1)
    return AssociationTable(shape, flat)


@lru_cache(maxsize=32)
def cached_association_table(shape: ShapeParams) -> AssociationTable:
    """Memoized `build_association_table`; ShapeParams is hashable by value."""
    return build_association_table(shape)
