"""
Input mapping and HUD helpers, independent of the window toolkit
"""

from __future__ import annotations

import math
from typing import Optional, Set

from .config import GameConfig
from .entities import InputIntent

AUDIO_CUES = {
    "shot": ":resources:sounds/laser1.wav",
    "explosion": ":resources:sounds/explosion2.wav",
}


def format_score(score: float) -> str:
    return f"SCORE: {math.floor(score):06d}"


def health_is_low(health: float, threshold: int = GameConfig.low_health) -> bool:
    return health < threshold


class InputMapper:
    """
    Folds key and pointer state into an InputIntent.

    Keys are logical names ("left", "right", "fire"). Pointer positions are in
    canvas coordinates (y grows downward): a held pointer steers the car to its
    x, and fires while it is above the bottom ``fire_zone`` share of the canvas.
    """

    def __init__(self, height: float, fire_zone: float = 0.8):
        self.height = height
        self.fire_zone = fire_zone
        self.keys: Set[str] = set()
        self.pointer_x: Optional[float] = None
        self.pointer_fire = False

    def press(self, key: str):
        self.keys.add(key)

    def release(self, key: str):
        self.keys.discard(key)

    def pointer_down(self, x: float, y: float):
        self.pointer_x = x
        self.pointer_fire = y < self.height * self.fire_zone

    pointer_move = pointer_down

    def pointer_up(self):
        self.pointer_x = None
        self.pointer_fire = False

    def intent(self) -> InputIntent:
        return InputIntent(
            move_left="left" in self.keys,
            move_right="right" in self.keys,
            fire="fire" in self.keys or self.pointer_fire,
            target_x=self.pointer_x,
        )
