"""Command entrypoint for the conv_visualizer package."""

from __future__ import annotations

import argparse
from pathlib import Path

from conv_visualizer.app import main as ui_main
from conv_visualizer.core.association import InvalidShapeError, build_association_table
from conv_visualizer.core.shape_math import ShapeParams
from conv_visualizer.services.param_store import PARAMS_PATH, load_params
from conv_visualizer.ui.constants import DEFAULT_PARAMS
from conv_visualizer.ui.render import format_receptive_field, format_shape_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convolution visualizer entrypoint")
    parser.add_argument("--input-size", type=int, help="Input height and width.")
    parser.add_argument("--weight-size", type=int, help="Kernel height and width.")
    parser.add_argument("--padding", type=int, help="Zero padding on every side.")
    parser.add_argument("--dilation", type=int, help="Spacing between kernel taps.")
    parser.add_argument("--stride", type=int, help="Step between output cells (both axes).")
    parser.add_argument(
        "--params-file",
        type=Path,
        default=PARAMS_PATH,
        help="Where the last-used parameters are saved and restored.",
    )
    parser.add_argument(
        "--no-restore",
        action="store_true",
        help="Start from defaults instead of the saved parameters.",
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the geometry and every receptive field instead of launching the UI.",
    )
    return parser


def shape_from_args(args: argparse.Namespace) -> ShapeParams | None:
    """ShapeParams from command-line overrides, or None if none were given."""
    overrides = {
        "input_size": args.input_size,
        "weight_size": args.weight_size,
        "padding": args.padding,
        "dilation": args.dilation,
        "stride": args.stride,
    }
    if all(value is None for value in overrides.values()) and not args.no_restore:
        return None
    square = {
        "input_size": DEFAULT_PARAMS["input_height"],
        "weight_size": DEFAULT_PARAMS["weight_height"],
        "padding": DEFAULT_PARAMS["padding"],
        "dilation": DEFAULT_PARAMS["dilation"],
        "stride": DEFAULT_PARAMS["stride_height"],
    }
    square.update({key: value for key, value in overrides.items() if value is not None})
    return ShapeParams.square(**square)


def describe(shape: ShapeParams) -> None:
    table = build_association_table(shape)
    print(format_shape_summary(shape))
    for out_row in range(shape.output_height):
        for out_col in range(shape.output_width):
            print()
            print(format_receptive_field(table, out_row, out_col))


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    shape = shape_from_args(args)

    if shape is not None and shape.field_errors():
        parser.error("; ".join(shape.field_errors()))
    if shape is not None and not shape.is_valid():
        parser.error(
            f"parameters give a {shape.output_height} x {shape.output_width} output; "
            "both dimensions must be at least 1"
        )

    if args.describe:
        try:
            describe(shape or load_params(args.params_file) or ShapeParams(**DEFAULT_PARAMS))
        except InvalidShapeError as exc:
            parser.error(str(exc))
        return
    ui_main(shape=shape, params_path=args.params_file)


if __name__ == "__main__":
    main()
