"""Shape arithmetic for a single 2D cross-correlation.

Everything here is a pure function of integers. The UI uses these helpers
to size the three matrices and to decide which slider values are legal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


def output_size(input_size: int, weight_size: int, padding: int, dilation: int, stride: int) -> int:
    """The classic convolution output size formula (one axis).

    The result may be zero or negative for degenerate parameters, so callers
    should check it (or use `params_ok`).
    """
    return (input_size + 2 * padding - dilation * (weight_size - 1) - 1) // stride + 1


def params_ok(input_size: int, weight_size: int, padding: int, dilation: int, stride: int) -> bool:
    """True when one axis produces at least one output cell."""
    return output_size(input_size, weight_size, padding, dilation, stride) > 0


def max_while(start: int, end: int, pred: Callable[[int], bool]) -> int:
    """Largest i in [start, end] such that pred holds for every value start..i.

    The scan stops at the first failure, so a later True after a False is
    never found. Returns `end` if pred never fails.
    """
    for i in range(start, end + 1):
        if not pred(i):
            return i - 1
    return end


def min_while(start: int, end: int, pred: Callable[[int], bool]) -> int:
    """Smallest i in [end, start] such that pred holds for every value i..start.

    Mirror image of `max_while`, scanning downward from `start`.
    """
    for i in range(start, end - 1, -1):
        if not pred(i):
            return i + 1
    return end


# Smallest legal value of each ShapeParams field.
FIELD_MINIMUMS = {
    "input_height": 1,
    "input_width": 1,
    "weight_height": 1,
    "weight_width": 1,
    "padding": 0,
    "dilation": 1,
    "stride_height": 1,
    "stride_width": 1,
}


@dataclass(frozen=True)
class ShapeParams:
    """Immutable shape parameters for one single-channel 2D correlation."""

    input_height: int
    input_width: int
    weight_height: int
    weight_width: int
    padding: int
    dilation: int
    stride_height: int
    stride_width: int

    @classmethod
    def square(
        cls,
        input_size: int,
        weight_size: int,
        padding: int = 0,
        dilation: int = 1,
        stride: int = 1,
    ) -> "ShapeParams":
        """Build the square special case (height == width on every axis)."""
        return cls(
            input_height=input_size,
            input_width=input_size,
            weight_height=weight_size,
            weight_width=weight_size,
            padding=padding,
            dilation=dilation,
            stride_height=stride,
            stride_width=stride,
        )

    @property
    def padded_input_height(self) -> int:
        return self.input_height + 2 * self.padding

    @property
    def padded_input_width(self) -> int:
        return self.input_width + 2 * self.padding

    @property
    def output_height(self) -> int:
        return output_size(
            self.input_height, self.weight_height, self.padding, self.dilation, self.stride_height
        )

    @property
    def output_width(self) -> int:
        return output_size(
            self.input_width, self.weight_width, self.padding, self.dilation, self.stride_width
        )

    def field_errors(self) -> list[str]:
        """One message per field that is not an integer at or above its minimum."""
        errors = []
        for name, minimum in FIELD_MINIMUMS.items():
            value = getattr(self, name)
            # bool is an int subclass; True is not a size.
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value < minimum:
                errors.append(f"{name} must be >= {minimum}, got {value}")
        return errors

    def fields_ok(self) -> bool:
        return not self.field_errors()

    def is_valid(self) -> bool:
        """Fields are in range and both axes independently produce a non-empty output."""
        if not self.fields_ok():
            return False
        return params_ok(
            self.input_height, self.weight_height, self.padding, self.dilation, self.stride_height
        ) and params_ok(
            self.input_width, self.weight_width, self.padding, self.dilation, self.stride_width
        )

    def in_padding(self, row: int, col: int) -> bool:
        """Whether a padded-input coordinate lies in the zero-padding border."""
        p = self.padding
        return row < p or row >= self.input_height + p or col < p or col >= self.input_width + p


# Axis -> its (input, weight, stride) field names, used by the bounds search.
AXIS_FIELDS = {
    "height": ("input_height", "weight_height", "stride_height"),
    "width": ("input_width", "weight_width", "stride_width"),
}


def _axis_ok(shape: ShapeParams, axis: str, **overrides: int) -> bool:
    input_field, weight_field, stride_field = AXIS_FIELDS[axis]
    values = {
        "input_size": getattr(shape, input_field),
        "weight_size": getattr(shape, weight_field),
        "padding": shape.padding,
        "dilation": shape.dilation,
        "stride": getattr(shape, stride_field),
    }
    values.update(overrides)
    return params_ok(**values)


def parameter_bounds(
    shape: ShapeParams,
    max_input_size: int = 16,
    search_limit: int = 100,
) -> dict[str, tuple[int, int]]:
    """Legal (lo, hi) range for every ShapeParams field, others held fixed.

    These are the numbers the slider widgets are bounded by. The ranges are
    found by scanning with `max_while`/`min_while`, which assumes validity
    flips only once across each range.
    """
    bounds: dict[str, tuple[int, int]] = {}

    for axis, (input_field, weight_field, stride_field) in AXIS_FIELDS.items():
        bounds[input_field] = (
            min_while(max_input_size, 1, lambda x, a=axis: _axis_ok(shape, a, input_size=x)),
            max_input_size,
        )
        bounds[weight_field] = (
            1,
            max_while(1, search_limit, lambda x, a=axis: _axis_ok(shape, a, weight_size=x)),
        )
        reach = shape.dilation * (getattr(shape, weight_field) - 1)
        bounds[stride_field] = (1, max(getattr(shape, input_field) - reach, 1))

    max_padding = shape.dilation * (max(shape.weight_height, shape.weight_width) - 1)
    bounds["padding"] = (
        min_while(
            max_padding,
            0,
            lambda x: _axis_ok(shape, "height", padding=x) and _axis_ok(shape, "width", padding=x),
        ),
        max_padding,
    )
    bounds["dilation"] = (
        1,
        max_while(
            1,
            search_limit,
            lambda x: _axis_ok(shape, "height", dilation=x) and _axis_ok(shape, "width", dilation=x),
        ),
    )
    return bounds
