"""Unit tests for the command-line entrypoint."""

from __future__ import annotations

from pathlib import Path

import pytest

import conv_visualizer.__main__ as cli
from conv_visualizer.core.shape_math import ShapeParams
from conv_visualizer.services.param_store import save_params


def test_shape_from_args_is_none_without_overrides() -> None:
    args = cli.build_parser().parse_args([])
    assert cli.shape_from_args(args) is None


def test_shape_from_args_fills_missing_values_with_defaults() -> None:
    args = cli.build_parser().parse_args(["--input-size", "7", "--stride", "2"])
    assert cli.shape_from_args(args) == ShapeParams.square(7, 3, stride=2)


def test_describe_prints_every_receptive_field(tmp_path: Path, capsys) -> None:  # noqa: ANN001
    cli.main(["--describe", "--input-size", "4", "--params-file", str(tmp_path / "p.json")])
    out = capsys.readouterr().out

    assert "Output: 2 x 2" in out
    assert out.count("out[") == 4
    assert "  + w[2,2] * in[3,3]" in out


def test_describe_uses_saved_parameters(tmp_path: Path, capsys) -> None:  # noqa: ANN001
    path = tmp_path / "p.json"
    save_params(ShapeParams.square(6, 2), path)

    cli.main(["--describe", "--params-file", str(path)])

    assert "Output: 5 x 5" in capsys.readouterr().out


def test_invalid_shape_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--describe", "--input-size", "2"])
    assert excinfo.value.code == 2


def test_negative_padding_is_rejected() -> None:
    with pytest.raises(SystemExit):
        cli.main(["--describe", "--padding", "-1"])


def test_default_run_launches_ui(monkeypatch, tmp_path: Path) -> None:  # noqa: ANN001
    calls = []
    monkeypatch.setattr(cli, "ui_main", lambda **kwargs: calls.append(kwargs))

    cli.main(["--params-file", str(tmp_path / "p.json")])

    assert calls == [{"shape": None, "params_path": tmp_path / "p.json"}]
