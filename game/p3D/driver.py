"""
Frame driver: advances the world exactly one step per rendered frame
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from . import collision, mover, progression, spawner
from .config import GameConfig
from .entities import InputIntent
from .world import RenderSnapshot, WorldState

logger = logging.getLogger(__name__)

AUDIO_EVENTS = ("shot", "explosion")

EventListener = Callable[[str, int], None]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class FrameDriver:
    """
    Owns the world and runs the update pipeline once per ``tick``.

    The clock is read once per tick; every gate in that tick compares against
    the same reading. Pass ``now`` explicitly to drive a simulated clock.
    """

    def __init__(
        self,
        world: Optional[WorldState] = None,
        config: Optional[GameConfig] = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        if world is not None and config is not None:
            raise ValueError("pass either a world or a config, not both")
        self.world = world or WorldState(config)
        self.clock = clock
        self._listeners: List[EventListener] = []
        self.tick_count = 0

    @property
    def config(self) -> GameConfig:
        return self.world.config

    def subscribe(self, listener: EventListener):
        """Register an audio-style listener called with (event, count) after each tick"""
        self._listeners.append(listener)

    def reset(self):
        self.world.reset()
        self.tick_count = 0
        logger.info("game reset")

    def tick(self, intent: Optional[InputIntent] = None, now: Optional[float] = None) -> RenderSnapshot:
        world = self.world
        intent = intent or InputIntent()
        now = self.clock() if now is None else now

        world.clear_events()
        mover.decay_shake(world)

        if not world.game_over:
            mover.steer(world, intent)
            progression.fire(world, intent.fire, now)
            mover.move(world)
            spawner.spawn(world, now)
            collision.resolve(world)
            progression.accrue_score(world)

        self.tick_count += 1
        self._notify()
        return world.snapshot()

    def _notify(self):
        for key in AUDIO_EVENTS:
            count = self.world.events.get(key, 0)
            if not count:
                continue
            for listener in self._listeners:
                listener(key, count)
