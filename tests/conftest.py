"""Test configuration shared across this project's pytest suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure tests can import modules from src/ without requiring editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def basic_shape():
    """The default 5x5 input / 3x3 kernel / 3x3 output setup."""
    from conv_visualizer.core.shape_math import ShapeParams

    return ShapeParams.square(input_size=5, weight_size=3)
