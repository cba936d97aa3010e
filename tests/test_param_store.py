"""Unit tests for saving and restoring shape parameters."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import pytest

from conv_visualizer.core.shape_math import ShapeParams
from conv_visualizer.services.param_store import load_params, params_from_record, save_params


def test_save_then_load_restores_parameters(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "params.json"
    shape = ShapeParams(7, 6, 3, 2, 1, 2, 2, 1)

    save_params(shape, path)

    # Parent folders are created and the record is flat JSON.
    assert json.loads(path.read_text(encoding="utf-8")) == asdict(shape)
    assert load_params(path) == shape


def test_missing_file_means_no_saved_state(tmp_path: Path) -> None:
    assert load_params(tmp_path / "absent.json") is None


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        '{"input_height": 5}',
        json.dumps({**asdict(ShapeParams.square(5, 3)), "padding": -1}),
        json.dumps({**asdict(ShapeParams.square(5, 3)), "dilation": True}),
        json.dumps({**asdict(ShapeParams.square(5, 3)), "stride_width": "2"}),
        # Parses fine but leaves no output cells.
        json.dumps(asdict(ShapeParams.square(3, 5))),
    ],
)
def test_unusable_records_are_ignored(tmp_path: Path, content: str) -> None:
    path = tmp_path / "params.json"
    path.write_text(content, encoding="utf-8")

    assert load_params(path) is None


def test_legacy_square_record_expands_to_both_axes() -> None:
    record = {"input_size": 6, "weight_size": 3, "padding": 1, "dilation": 1, "stride": 2}
    assert params_from_record(record) == ShapeParams.square(6, 3, padding=1, stride=2)
