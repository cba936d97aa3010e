"""Unit tests for focus resolution and the three colorizers."""

from __future__ import annotations

import itertools

import pytest

from conv_visualizer.core import highlight
from conv_visualizer.core.association import build_association_table
from conv_visualizer.core.colors import KernelPalette, darken, luminance, toward_white
from conv_visualizer.core.highlight import (
    NEUTRAL_COLOR,
    NO_FOCUS,
    PADDING_DARKEN,
    SHADOW_FRACTION,
    STENCIL_LIGHTEN_FRACTION,
    Focus,
    FocusKind,
    animated_cell,
    compute_colorizers,
    resolve_focus,
)
from conv_visualizer.core.shape_math import ShapeParams


def _all_cells(shape: tuple[int, int]) -> list[tuple[int, int]]:
    return list(itertools.product(range(shape[0]), range(shape[1])))


def test_animation_wraps_after_last_output_cell(basic_shape: ShapeParams) -> None:
    assert animated_cell(basic_shape, 0) == (0, 0)
    assert animated_cell(basic_shape, 4) == (1, 1)
    assert animated_cell(basic_shape, 8) == (2, 2)
    assert animated_cell(basic_shape, 9) == (0, 0)
    assert animated_cell(basic_shape, 10) == (0, 1)


def test_animation_is_row_major_for_non_square_outputs() -> None:
    shape = ShapeParams(3, 6, 1, 1, 0, 1, 1, 1)
    assert animated_cell(shape, 5) == (0, 5)
    assert animated_cell(shape, 6) == (1, 0)


def test_no_focus_follows_animated_cell(basic_shape: ShapeParams) -> None:
    assert resolve_focus(basic_shape, NO_FOCUS, 5) == Focus(FocusKind.OUTPUT, 1, 2)


def test_input_focus_snaps_to_receptive_field_corner() -> None:
    shape = ShapeParams(7, 8, 3, 2, 0, 1, 2, 3)
    for r, c in _all_cells((shape.padded_input_height, shape.padded_input_width)):
        resolved = resolve_focus(shape, Focus(FocusKind.INPUT, r, c), 0)
        expected = (
            min(r // shape.stride_height, shape.output_height - 1),
            min(c // shape.stride_width, shape.output_width - 1),
        )
        assert resolved == Focus(FocusKind.OUTPUT, *expected)


def test_weight_and_output_focus_are_not_remapped(basic_shape: ShapeParams) -> None:
    for focus in (Focus(FocusKind.WEIGHT, 2, 1), Focus(FocusKind.OUTPUT, 0, 2)):
        assert resolve_focus(basic_shape, focus, 7) == focus


def test_output_focus_colors(basic_shape: ShapeParams) -> None:
    table = build_association_table(basic_shape)
    palette = KernelPalette(3, 3)
    # Hover output (0,0) while the animation sits on (1,1).
    colorizers = compute_colorizers(basic_shape, table, Focus(FocusKind.OUTPUT, 0, 0), tick=4)

    assert colorizers.output(0, 0) == NEUTRAL_COLOR
    assert colorizers.output(1, 1) == toward_white(NEUTRAL_COLOR, SHADOW_FRACTION)
    assert colorizers.output(2, 2) is None

    # Hovered receptive field is rows/cols 0..2, animated one is 1..3.
    assert colorizers.input(0, 0) == palette.color(0, 0)
    assert colorizers.input(2, 2) == palette.color(2, 2)
    assert colorizers.input(3, 3) == toward_white(palette.color(2, 2), SHADOW_FRACTION)
    assert colorizers.input(0, 4) is None
    assert colorizers.input(4, 4) is None

    for r, c in _all_cells(colorizers.weight_shape):
        assert colorizers.weight(r, c) == palette.color(r, c)


def test_hovered_output_wins_over_animated_shadow(basic_shape: ShapeParams) -> None:
    table = build_association_table(basic_shape)
    colorizers = compute_colorizers(basic_shape, table, Focus(FocusKind.OUTPUT, 1, 1), tick=4)

    assert colorizers.output(1, 1) == NEUTRAL_COLOR
    assert colorizers.input(1, 1) == KernelPalette(3, 3).color(0, 0)


def test_weight_focus_colors(basic_shape: ShapeParams) -> None:
    table = build_association_table(basic_shape)
    palette = KernelPalette(3, 3)
    base = palette.color(1, 1)
    # Hover the centre weight while the animation sits on output (0,0).
    colorizers = compute_colorizers(basic_shape, table, Focus(FocusKind.WEIGHT, 1, 1), tick=0)

    assert colorizers.weight(1, 1) == base
    assert colorizers.weight(0, 0) is None

    # in(1,1) * w(1,1) is the animated output's term.
    assert colorizers.input(1, 1) == darken(base, 1.0)
    # Touched by the hovered weight and under the animated stencil via another weight.
    assert colorizers.input(2, 2) == toward_white(base, STENCIL_LIGHTEN_FRACTION)
    # Touched by the hovered weight, outside the stencil.
    assert colorizers.input(3, 3) == base
    # Only in the stencil: faint shadow of its own weight color.
    assert colorizers.input(0, 0) == toward_white(palette.color(0, 0), SHADOW_FRACTION)
    # Never touched by w(1,1): row 4 is beyond the last output's reach.
    assert colorizers.input(4, 4) is None

    assert colorizers.output(0, 0) == darken(base, 1.0)
    for r, c in _all_cells(colorizers.output_shape):
        if (r, c) != (0, 0):
            assert colorizers.output(r, c) == base


def test_colorizers_are_total_over_their_domains() -> None:
    shape = ShapeParams(6, 5, 2, 3, 1, 2, 2, 1)
    table = build_association_table(shape)
    focuses = [
        NO_FOCUS,
        Focus(FocusKind.INPUT, 3, 4),
        Focus(FocusKind.WEIGHT, 1, 2),
        Focus(FocusKind.OUTPUT, shape.output_height - 1, 0),
    ]
    for focus in focuses:
        for tick in range(shape.output_height * shape.output_width + 1):
            colorizers = compute_colorizers(shape, table, focus, tick)
            for fn, domain in (
                (colorizers.input, colorizers.input_shape),
                (colorizers.weight, colorizers.weight_shape),
                (colorizers.output, colorizers.output_shape),
            ):
                for r, c in _all_cells(domain):
                    color = fn(r, c)
                    assert color is None or (color.startswith("#") and len(color) == 7)


def test_colorizers_reject_out_of_domain_coordinates(basic_shape: ShapeParams) -> None:
    table = build_association_table(basic_shape)
    colorizers = compute_colorizers(basic_shape, table, NO_FOCUS, 0)

    with pytest.raises(IndexError):
        colorizers.input(5, 0)
    with pytest.raises(IndexError):
        colorizers.weight(0, 3)
    with pytest.raises(IndexError):
        colorizers.output(-1, 0)


def _raw_input_colorizer(shape: ShapeParams, focus: Focus, tick: int):
    """Input colorizer without the padding-border wrapper, for comparison."""
    table = build_association_table(shape)
    palette = KernelPalette(shape.weight_height, shape.weight_width)
    resolved = resolve_focus(shape, focus, tick)
    builder = highlight._weight_focused if resolved.kind is FocusKind.WEIGHT else highlight._output_focused
    input_fn, _weight_fn, _output_fn = builder(
        shape, table, palette, (resolved.row, resolved.col), animated_cell(shape, tick)
    )
    return input_fn


def test_padding_border_is_always_darker() -> None:
    shape = ShapeParams.square(input_size=3, weight_size=3, padding=1)
    table = build_association_table(shape)
    padded = (shape.padded_input_height, shape.padded_input_width)

    focuses = [NO_FOCUS]
    focuses += [Focus(FocusKind.INPUT, r, c) for r, c in _all_cells(padded)]
    focuses += [Focus(FocusKind.WEIGHT, r, c) for r, c in _all_cells((3, 3))]
    focuses += [Focus(FocusKind.OUTPUT, r, c) for r, c in _all_cells((3, 3))]

    for focus in focuses:
        for tick in (0, 4, 8):
            colorizers = compute_colorizers(shape, table, focus, tick)
            raw = _raw_input_colorizer(shape, focus, tick)
            for r, c in _all_cells(padded):
                base = raw(r, c)
                shown = colorizers.input(r, c)
                if shape.in_padding(r, c):
                    assert shown == darken(base or "#ffffff", PADDING_DARKEN)
                    assert luminance(shown) < luminance(base or "#ffffff")
                else:
                    assert shown == base
