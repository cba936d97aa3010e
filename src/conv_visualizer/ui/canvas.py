"""Canvas helpers for drawing colored matrix grids."""

from __future__ import annotations

import tkinter as tk
from typing import Callable

from conv_visualizer.ui.constants import COLOR_CELL_EMPTY, COLOR_CELL_OUTLINE


def draw_color_grid(
    canvas: tk.Canvas,
    rows: int,
    cols: int,
    colorizer: Callable[[int, int], str | None],
    cell_size: int,
    margin: int,
) -> None:
    """Draw a rows x cols grid whose cell colors come from `colorizer`.

    Rectangle items are cached per geometry and only cells whose color
    changed since the last draw are reconfigured. Animation ticks usually
    touch a handful of cells, so full redraws would be wasted work.
    """
    key = (rows, cols, margin, cell_size)
    cache = getattr(canvas, "_color_grid_cache", None)

    if cache is None or cache.get("key") != key:
        canvas.delete("all")
        ids: list[list[int]] = []
        for r in range(rows):
            row_ids: list[int] = []
            for c in range(cols):
                x0 = margin + c * cell_size
                y0 = margin + r * cell_size
                item_id = canvas.create_rectangle(
                    x0,
                    y0,
                    x0 + cell_size,
                    y0 + cell_size,
                    fill=COLOR_CELL_EMPTY,
                    outline=COLOR_CELL_OUTLINE,
                )
                row_ids.append(item_id)
            ids.append(row_ids)

        cache = {
            "key": key,
            "ids": ids,
            "last_fill": [[COLOR_CELL_EMPTY] * cols for _ in range(rows)],
        }
        setattr(canvas, "_color_grid_cache", cache)

    ids = cache["ids"]
    last_fill = cache["last_fill"]
    for r in range(rows):
        for c in range(cols):
            fill = colorizer(r, c) or COLOR_CELL_EMPTY
            if fill != last_fill[r][c]:
                canvas.itemconfigure(ids[r][c], fill=fill)
                last_fill[r][c] = fill
