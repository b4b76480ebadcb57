"""
Game entity dataclasses
"""

from dataclasses import dataclass
from typing import Optional, Tuple

Color = Tuple[int, int, int]

SCOUT = "scout"
HEAVY = "heavy"

KILL_COLOR: Color = (255, 68, 0)
HIT_COLOR: Color = (255, 255, 255)


@dataclass
class Bullet:
    """Player bullet, already in screen space"""
    x: float
    y: float
    size: float = 6.0
    vx: float = 0.0  # lateral drift, diagonal shots only
    alive: bool = True


@dataclass
class Enemy:
    """Enemy car approaching along the road"""
    z: float
    x_offset: float
    type: str = SCOUT
    health: int = 1
    last_fire_time: float = 0.0  # ms
    alive: bool = True

    @property
    def is_heavy(self) -> bool:
        return self.type == HEAVY


@dataclass
class EnemyBullet:
    """Enemy projectile, grows as it approaches the player"""
    x: float
    y: float
    size: float
    damage: int = 20
    alive: bool = True


@dataclass
class Building:
    """Roadside scenery; never collides"""
    z: float
    side: int  # -1 left, +1 right
    w_mult: float = 1.0
    h_mult: float = 1.0
    window_seed: int = 0
    alive: bool = True


@dataclass
class Powerup:
    """Fire level pickup dropped by a destroyed enemy"""
    z: float
    x_offset: float
    alive: bool = True


@dataclass
class ExplosionParticle:
    """Single particle of an explosion burst"""
    x: float
    y: float
    vx: float
    vy: float
    life: float = 1.0
    color: Color = KILL_COLOR
    size: float = 2.0

    @property
    def alive(self) -> bool:
        return self.life > 0


@dataclass
class InputIntent:
    """Player intent for one tick, refreshed by the input collaborator"""
    move_left: bool = False
    move_right: bool = False
    fire: bool = False
    target_x: Optional[float] = None  # absolute touch position
