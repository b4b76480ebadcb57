"""
Player progression: fire level, health, score and the Playing -> GameOver transition.

GameOver is terminal; only an external ``WorldState.reset`` returns to Playing.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .entities import Bullet
from .world import WorldState

logger = logging.getLogger(__name__)

PLAYING = "playing"
GAME_OVER = "game_over"


def phase(world: WorldState) -> str:
    return GAME_OVER if world.game_over else PLAYING


def fire_pattern(fire_level: int, side: float, drift: float) -> List[Tuple[float, float]]:
    """(x offset, vx) of each bullet in a volley at the given fire level"""
    if fire_level <= 1:
        return [(0.0, 0.0)]
    if fire_level == 2:
        return [(-side, 0.0), (side, 0.0)]
    forward = [(0.0, 0.0), (-side, 0.0), (side, 0.0)]
    if fire_level == 3:
        return forward
    return forward + [(-side, -drift), (side, drift)]


def fire(world: WorldState, wants_fire: bool, now: float) -> int:
    """Spawn one volley if the fire gate allows it; returns bullets created"""
    if not wants_fire or not world.fire_cooldown.try_fire(now):
        return 0

    cfg = world.config
    y = cfg.height - cfg.muzzle_y_offset
    pattern = fire_pattern(world.fire_level, cfg.side_shot_offset, cfg.diagonal_vx)
    for dx, vx in pattern:
        world.bullets.append(Bullet(x=world.player_x + dx, y=y, size=cfg.bullet_size, vx=vx))
    world.emit("shot")
    return len(pattern)


def award_kill(world: WorldState):
    world.score += world.config.kill_score
    world.emit("kill")


def collect_powerup(world: WorldState):
    world.fire_level += 1
    world.score += world.config.pickup_score
    world.shake_intensity = world.config.pickup_shake
    world.emit("pickup")


def take_hit(world: WorldState, damage: int):
    """Damage the player; any hit drops the weapon back to level 1"""
    world.health = max(0, world.health - damage)
    world.shake_intensity = world.config.hit_shake
    world.fire_level = 1
    world.emit("player_hit")
    world.emit("damage", damage)


def check_game_over(world: WorldState) -> bool:
    if world.health <= 0 and not world.game_over:
        world.game_over = True
        logger.info("game over with score %d", world.score)
    return world.game_over


def accrue_score(world: WorldState):
    """Distance score, one point per tick while playing"""
    if not world.game_over:
        world.score += 1
