"""Unit tests for the focus/tick state machine."""

from __future__ import annotations

import pytest

from conv_visualizer.core.association import InvalidShapeError
from conv_visualizer.core.colors import toward_white
from conv_visualizer.core.focus import FocusController
from conv_visualizer.core.highlight import NEUTRAL_COLOR, NO_FOCUS, SHADOW_FRACTION, Focus, FocusKind
from conv_visualizer.core.shape_math import ShapeParams


def test_controller_starts_unfocused_and_notifies_listener(basic_shape: ShapeParams) -> None:
    seen = []
    controller = FocusController(basic_shape, on_change=seen.append)

    assert controller.focus == NO_FOCUS
    assert controller.tick == 0
    # The initial colorizers are pushed once so the view can paint immediately.
    assert seen == [controller.colorizers]


def test_enter_and_leave_transitions(basic_shape: ShapeParams) -> None:
    controller = FocusController(basic_shape)

    controller.on_enter(FocusKind.WEIGHT, 2, 1)
    assert controller.focus == Focus(FocusKind.WEIGHT, 2, 1)

    # Plain strings are accepted for the matrix kind as well.
    controller.on_enter("output", 1, 0)
    assert controller.focus == Focus(FocusKind.OUTPUT, 1, 0)

    controller.on_leave()
    assert controller.focus == NO_FOCUS

    controller.on_enter(FocusKind.INPUT, 0, 0)
    controller.on_enter(FocusKind.NONE, 0, 0)
    assert controller.focus == NO_FOCUS


def test_every_event_recomputes_colorizers(basic_shape: ShapeParams) -> None:
    seen = []
    controller = FocusController(basic_shape, on_change=seen.append)

    controller.on_enter(FocusKind.OUTPUT, 2, 2)
    controller.on_tick()
    controller.on_leave()

    assert len(seen) == 4
    assert seen[-1] is controller.colorizers


def test_tick_updates_shadow_while_hovering(basic_shape: ShapeParams) -> None:
    controller = FocusController(basic_shape)
    controller.on_enter(FocusKind.OUTPUT, 2, 2)

    shadow = toward_white(NEUTRAL_COLOR, SHADOW_FRACTION)
    assert controller.colorizers.output(0, 0) == shadow

    controller.on_tick()
    assert controller.animated_cell == (0, 1)
    assert controller.colorizers.output(0, 0) is None
    assert controller.colorizers.output(0, 1) == shadow
    assert controller.colorizers.output(2, 2) == NEUTRAL_COLOR


def test_tick_counter_is_not_wrapped(basic_shape: ShapeParams) -> None:
    controller = FocusController(basic_shape)
    for _ in range(10):
        controller.on_tick()

    assert controller.tick == 10
    assert controller.animated_cell == (0, 1)


def test_set_shape_rebuilds_table_and_resets_focus(basic_shape: ShapeParams) -> None:
    controller = FocusController(basic_shape)
    controller.on_enter(FocusKind.OUTPUT, 2, 2)

    padded = ShapeParams.square(input_size=5, weight_size=3, padding=1)
    controller.set_shape(padded)

    assert controller.shape == padded
    assert controller.table.shape == padded
    assert controller.focus == NO_FOCUS
    assert controller.colorizers.output_shape == (5, 5)
    assert controller.colorizers.input_shape == (7, 7)


def test_set_shape_rejects_invalid_shape_without_changing_state(basic_shape: ShapeParams) -> None:
    controller = FocusController(basic_shape)
    before = controller.colorizers

    with pytest.raises(InvalidShapeError):
        controller.set_shape(ShapeParams.square(input_size=2, weight_size=3))

    assert controller.shape == basic_shape
    assert controller.colorizers is before
