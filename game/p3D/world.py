"""
World state aggregate and its read-only render snapshot
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from .config import GameConfig
from .entities import Bullet, Building, Enemy, EnemyBullet, ExplosionParticle, Powerup

logger = logging.getLogger(__name__)

EVENT_KEYS = ("shot", "explosion", "hit", "kill", "pickup", "player_hit", "damage")


@dataclass
class Cooldown:
    """Named wall-clock gate: fires once the interval has elapsed since the last firing"""
    name: str
    interval: float  # ms
    last: Optional[float] = None  # None until the first firing

    def ready(self, now: float) -> bool:
        return self.last is None or now - self.last > self.interval

    def trigger(self, now: float):
        self.last = now

    def try_fire(self, now: float) -> bool:
        """Advance the gate only when it fires"""
        if not self.ready(now):
            return False
        self.trigger(now)
        return True

    def reset(self):
        self.last = None


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything a renderer, audio or UI collaborator may read after a tick"""
    width: int
    height: int
    player_x: float
    bullets: Tuple[Bullet, ...]
    enemies: Tuple[Enemy, ...]
    enemy_bullets: Tuple[EnemyBullet, ...]
    buildings: Tuple[Building, ...]
    powerups: Tuple[Powerup, ...]
    explosions: Tuple[ExplosionParticle, ...]
    grid_offset: float
    score: int
    health: int
    fire_level: int
    shake_intensity: float
    game_over: bool
    last_fire_time: Optional[float]
    last_enemy_time: Optional[float]
    last_building_time: Optional[float]
    events: Tuple[Tuple[str, int], ...] = ()

    def event(self, key: str) -> int:
        return dict(self.events).get(key, 0)


class WorldState:
    """
    Mutable aggregate of every entity collection and game scalar.

    Constructed once; ``reset`` reinitialises it in place. Components receive
    it by reference and are the only writers.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.speed = self.config.speed

        self.fire_cooldown = Cooldown("fire", self.config.fire_interval)
        self.enemy_cooldown = Cooldown("enemy", self.config.enemy_interval)
        self.building_cooldown = Cooldown("building", self.config.building_interval)

        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []
        self.enemy_bullets: List[EnemyBullet] = []
        self.buildings: List[Building] = []
        self.powerups: List[Powerup] = []
        self.explosions: List[ExplosionParticle] = []

        self.events: Dict[str, int] = {}
        self.reset()

    def reset(self):
        cfg = self.config
        self.player_x = cfg.center_x
        self.grid_offset = 0.0
        self.score = 0
        self.health = cfg.max_health
        self.fire_level = 1
        self.shake_intensity = 0.0
        self.game_over = False

        for cd in self.cooldowns:
            cd.reset()

        for collection in self.collections:
            collection.clear()

        self.clear_events()
        logger.debug("world reset")

    @property
    def cooldowns(self) -> Tuple[Cooldown, Cooldown, Cooldown]:
        return self.fire_cooldown, self.enemy_cooldown, self.building_cooldown

    @property
    def collections(self) -> Tuple[list, ...]:
        return (self.bullets, self.enemies, self.enemy_bullets,
                self.buildings, self.powerups, self.explosions)

    def clear_events(self):
        self.events = {key: 0 for key in EVENT_KEYS}

    def emit(self, key: str, count: int = 1):
        self.events[key] = self.events.get(key, 0) + count

    def compact(self):
        """Drop every entity marked dead during this pass"""
        self.bullets[:] = [b for b in self.bullets if b.alive]
        self.enemies[:] = [e for e in self.enemies if e.alive]
        self.enemy_bullets[:] = [eb for eb in self.enemy_bullets if eb.alive]
        self.buildings[:] = [b for b in self.buildings if b.alive]
        self.powerups[:] = [p for p in self.powerups if p.alive]
        self.explosions[:] = [p for p in self.explosions if p.alive]

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(
            width=self.config.width,
            height=self.config.height,
            player_x=self.player_x,
            bullets=tuple(replace(b) for b in self.bullets),
            enemies=tuple(replace(e) for e in self.enemies),
            enemy_bullets=tuple(replace(eb) for eb in self.enemy_bullets),
            buildings=tuple(replace(b) for b in self.buildings),
            powerups=tuple(replace(p) for p in self.powerups),
            explosions=tuple(replace(p) for p in self.explosions),
            grid_offset=self.grid_offset,
            score=self.score,
            health=self.health,
            fire_level=self.fire_level,
            shake_intensity=self.shake_intensity,
            game_over=self.game_over,
            last_fire_time=self.fire_cooldown.last,
            last_enemy_time=self.enemy_cooldown.last,
            last_building_time=self.building_cooldown.last,
            events=tuple(sorted(self.events.items())),
        )
