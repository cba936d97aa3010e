"""Layout, style, and key-binding helpers for the convolution visualizer UI."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from conv_visualizer.core.highlight import FocusKind
from conv_visualizer.ui.constants import (
    COLOR_BG,
    COLOR_CARD,
    COLOR_EDGE,
    COLOR_INK,
    COLOR_NEUTRAL_BTN,
    COLOR_NEUTRAL_BTN_HOVER,
    COLOR_NEUTRAL_BTN_PRESS,
    COLOR_STATUS_INFO_BG,
    COLOR_STATUS_INFO_FG,
    COLOR_SUB,
    PARAM_CONTROLS,
)
from conv_visualizer.ui.slider import ParamSlider


def configure_styles(root: tk.Tk) -> None:
    """Define ttk style rules so widgets share one visual language."""
    style = ttk.Style(root)
    style.theme_use("clam")

    style.configure("App.TFrame", background=COLOR_BG)
    style.configure("Card.TFrame", background=COLOR_CARD)

    style.configure(
        "Title.TLabel",
        background=COLOR_BG,
        foreground=COLOR_INK,
        font=("Avenir Next", 20, "bold"),
    )
    style.configure(
        "Subtitle.TLabel",
        background=COLOR_BG,
        foreground=COLOR_SUB,
        font=("Avenir Next", 11),
    )
    style.configure(
        "Section.TLabel",
        background=COLOR_CARD,
        foreground=COLOR_INK,
        font=("Avenir Next", 10, "bold"),
    )
    style.configure(
        "Body.TLabel",
        background=COLOR_CARD,
        foreground=COLOR_SUB,
        font=("Avenir Next", 10),
    )
    style.configure(
        "Card.TLabelframe",
        background=COLOR_CARD,
        foreground=COLOR_INK,
        borderwidth=1,
        relief="solid",
    )
    style.configure(
        "Card.TLabelframe.Label",
        background=COLOR_CARD,
        foreground=COLOR_INK,
        font=("Avenir Next", 10, "bold"),
    )
    style.configure("Card.TCheckbutton", background=COLOR_CARD, foreground=COLOR_INK)
    style.configure("Horizontal.TScale", background=COLOR_CARD)

    style.configure(
        "Neutral.TButton",
        background=COLOR_NEUTRAL_BTN,
        foreground="#1f2937",
        borderwidth=1,
        font=("Avenir Next", 10, "bold"),
        padding=(12, 6),
    )
    style.map(
        "Neutral.TButton",
        background=[("active", COLOR_NEUTRAL_BTN_HOVER), ("pressed", COLOR_NEUTRAL_BTN_PRESS)],
        foreground=[("disabled", "#9ca3af"), ("!disabled", "#111827")],
    )

    style.configure(
        "App.TSpinbox",
        fieldbackground="#f8fafc",
        foreground=COLOR_INK,
        padding=2,
    )


def bind_shortcuts(ui: object) -> None:
    """Register keyboard shortcuts for fast interaction."""
    ui.root.bind("<space>", lambda _e: ui.toggle_animation())
    ui.root.bind("r", lambda _e: ui.reset_params())
    ui.root.bind("R", lambda _e: ui.reset_params())
    ui.root.bind("<Escape>", lambda _e: ui.on_grid_leave())


def build_layout(ui: object) -> None:
    """Create top-level layout containers and major UI sections."""
    outer = ttk.Frame(ui.root, padding=14, style="App.TFrame")
    outer.pack(fill="both", expand=True)

    _build_header(outer)
    body = ttk.Frame(outer, style="App.TFrame")
    body.pack(fill="both", expand=True)
    _build_controls(ui, body)
    _build_matrices(ui, body)
    _build_status(ui, outer)


def _build_header(parent: ttk.Frame) -> None:
    header = ttk.Frame(parent, style="App.TFrame")
    header.pack(fill="x", pady=(0, 10))

    ttk.Label(header, text="Convolution Visualizer", style="Title.TLabel").pack(anchor="w")
    ttk.Label(
        header,
        text=(
            "Hover an input or output cell to see which cells it is computed from, "
            "or hover a weight to see every input it multiplies. Strictly speaking "
            "this is a correlation: the kernel is not flipped."
        ),
        style="Subtitle.TLabel",
    ).pack(anchor="w", pady=(2, 0))


def _build_controls(ui: object, parent: ttk.Frame) -> None:
    controls = ttk.LabelFrame(parent, text="Parameters", padding=12, style="Card.TLabelframe")
    controls.pack(side="left", fill="y", padx=(0, 10))
    controls.grid_columnconfigure(1, weight=1)

    ui.sliders = {}
    for row, (name, label) in enumerate(PARAM_CONTROLS):
        ui.sliders[name] = ParamSlider(
            controls,
            label,
            on_change=lambda value, n=name: ui.on_param_change(n, value),
            row=row,
        )

    next_row = len(PARAM_CONTROLS)
    ui.link_axes_var = tk.BooleanVar(value=False)
    ttk.Checkbutton(
        controls,
        text="Link height and width",
        variable=ui.link_axes_var,
        style="Card.TCheckbutton",
    ).grid(row=next_row, column=0, columnspan=3, pady=(8, 4), sticky="w")

    buttons = ttk.Frame(controls, style="Card.TFrame")
    buttons.grid(row=next_row + 1, column=0, columnspan=3, pady=(6, 0), sticky="w")
    ui.pause_button = ttk.Button(
        buttons,
        text="Pause",
        command=ui.toggle_animation,
        style="Neutral.TButton",
    )
    ui.pause_button.pack(side="left", padx=(0, 8))
    ttk.Button(
        buttons,
        text="Reset",
        command=ui.reset_params,
        style="Neutral.TButton",
    ).pack(side="left")

    ttk.Label(
        controls,
        text="Shortcuts: Space=pause/resume, R=reset, Esc=clear hover.",
        style="Body.TLabel",
    ).grid(row=next_row + 2, column=0, columnspan=3, pady=(10, 0), sticky="w")


def _build_matrices(ui: object, parent: ttk.Frame) -> None:
    area = ttk.Frame(parent, style="App.TFrame")
    area.pack(side="left", fill="both", expand=True)

    ui.grid_canvases = {}
    ui.grid_titles = {}
    for kind in (FocusKind.INPUT, FocusKind.WEIGHT, FocusKind.OUTPUT):
        title = tk.StringVar(value=kind.value.title())
        frame = ttk.LabelFrame(area, padding=8, style="Card.TLabelframe")
        frame.configure(labelwidget=ttk.Label(frame, textvariable=title, style="Section.TLabel"))
        frame.pack(side="left", anchor="n", padx=(0, 10))

        canvas = tk.Canvas(
            frame,
            width=1,
            height=1,
            bg=COLOR_CARD,
            highlightthickness=1,
            highlightbackground=COLOR_EDGE,
        )
        canvas.pack()
        canvas.bind("<Motion>", lambda e, k=kind: ui.on_grid_motion(k, e.x, e.y))
        canvas.bind("<Leave>", lambda _e: ui.on_grid_leave())

        ui.grid_canvases[kind] = canvas
        ui.grid_titles[kind] = title


def _build_status(ui: object, parent: ttk.Frame) -> None:
    status_frame = ttk.Frame(parent, style="App.TFrame")
    status_frame.pack(fill="x", pady=(8, 0))

    ui.status_label = tk.Label(
        status_frame,
        textvariable=ui.status_var,
        bg=COLOR_STATUS_INFO_BG,
        fg=COLOR_STATUS_INFO_FG,
        font=("Avenir Next", 10, "bold"),
        padx=10,
        pady=8,
        anchor="w",
        relief="flat",
    )
    ui.status_label.pack(fill="x", anchor="w")
