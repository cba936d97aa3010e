"""Save and restore the last-used shape parameters.

The record is a flat JSON object with one key per ShapeParams field. Older
square-only records (`input_size`, `weight_size`, `padding`, `dilation`,
`stride`) are still accepted and expanded to both axes.
"""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from pathlib import Path

from conv_visualizer.core.shape_math import ShapeParams


PARAMS_PATH = Path.home() / ".conv_visualizer" / "params.json"

_SQUARE_KEYS = ("input_size", "weight_size", "padding", "dilation", "stride")


def params_from_record(record: dict) -> ShapeParams:
    """Build ShapeParams from a flat record. Raises KeyError/TypeError/ValueError.

    Fields below their minimum (or not integers) raise ValueError.
    """
    if not isinstance(record, dict):
        raise TypeError(f"expected a JSON object, got {type(record).__name__}")

    names = [f.name for f in fields(ShapeParams)]
    if all(name in record for name in names):
        values = {name: record[name] for name in names}
    else:
        square = {key: record[key] for key in _SQUARE_KEYS}
        return params_from_record(asdict(ShapeParams.square(**square)))

    shape = ShapeParams(**values)
    errors = shape.field_errors()
    if errors:
        raise ValueError("; ".join(errors))
    return shape


def load_params(path: Path = PARAMS_PATH) -> ShapeParams | None:
    """Return the saved parameters, or None if nothing usable is stored."""
    if not path.exists():
        return None
    try:
        shape = params_from_record(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError):
        return None
    if not shape.is_valid():
        return None
    return shape


def save_params(shape: ShapeParams, path: Path = PARAMS_PATH) -> None:
    """Write parameters as a flat JSON record, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(shape), indent=2), encoding="utf-8")
