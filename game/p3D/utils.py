"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def point_in_box(x: float, y: float, left: float, right: float, top: float, bottom: float) -> bool:
    """Strict containment test; points on an edge are outside"""
    return left < x < right and top < y < bottom


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
