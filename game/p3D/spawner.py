"""
Time-gated creation of enemies, buildings, enemy fire, powerups and particles
"""

from __future__ import annotations

import logging
import random

from .entities import (
    HEAVY,
    SCOUT,
    Building,
    Color,
    Enemy,
    EnemyBullet,
    ExplosionParticle,
    Powerup,
)
from .projection import project
from .world import WorldState

logger = logging.getLogger(__name__)


def spawn(world: WorldState, now: float):
    """Run every spawn gate against one clock reading"""
    if world.enemy_cooldown.try_fire(now):
        spawn_enemy(world, now)
    if world.building_cooldown.try_fire(now):
        spawn_building(world)
    enemy_fire(world, now)


def spawn_enemy(world: WorldState, now: float) -> Enemy:
    cfg = world.config
    heavy = random.random() < cfg.heavy_chance
    enemy = Enemy(
        z=0.0,
        x_offset=random.uniform(-cfg.enemy_x_range, cfg.enemy_x_range),
        type=HEAVY if heavy else SCOUT,
        health=2 if heavy else 1,
        # Stagger the first volley so enemies spawned together don't fire together
        last_fire_time=now + random.random() * cfg.enemy_fire_jitter,
    )
    world.enemies.append(enemy)
    logger.debug("spawned %s enemy at x_offset=%.1f", enemy.type, enemy.x_offset)
    return enemy


def spawn_building(world: WorldState) -> Building:
    cfg = world.config
    building = Building(
        z=0.0,
        side=1 if random.random() > 0.5 else -1,
        w_mult=random.uniform(*cfg.building_w_range),
        h_mult=random.uniform(*cfg.building_h_range),
        window_seed=random.randrange(cfg.window_seeds),
    )
    world.buildings.append(building)
    return building


def enemy_fire(world: WorldState, now: float):
    """Living enemies inside the firing band shoot on their own fixed interval"""
    cfg = world.config
    for enemy in world.enemies:
        if not enemy.alive:
            continue
        if now - enemy.last_fire_time <= cfg.enemy_fire_interval:
            continue
        if not cfg.enemy_fire_min_z < enemy.z < cfg.enemy_fire_max_z:
            continue

        ex, ey = project(enemy.z, enemy.x_offset, cfg.width, cfg.height)
        if enemy.is_heavy:
            offset = 15 * enemy.z
            size = 8 * enemy.z
            world.enemy_bullets.append(EnemyBullet(ex - offset, ey, size, cfg.heavy_damage))
            world.enemy_bullets.append(EnemyBullet(ex + offset, ey, size, cfg.heavy_damage))
        else:
            world.enemy_bullets.append(EnemyBullet(ex, ey, 5 * enemy.z, cfg.scout_damage))
        enemy.last_fire_time = now


def drop_powerup(world: WorldState, enemy: Enemy):
    """Roll the drop chance at a destroyed enemy's position"""
    if random.random() < world.config.powerup_drop_chance:
        world.powerups.append(Powerup(z=enemy.z, x_offset=enemy.x_offset))
        logger.debug("powerup dropped at z=%.3f", enemy.z)


def explode(world: WorldState, x: float, y: float, color: Color):
    """Emit a burst of particles and an explosion event"""
    cfg = world.config
    spread = cfg.particle_speed
    for _ in range(cfg.burst_count):
        world.explosions.append(ExplosionParticle(
            x=x,
            y=y,
            vx=(random.random() - 0.5) * spread,
            vy=(random.random() - 0.5) * spread,
            life=1.0,
            color=color,
            size=random.random() * 4 + 2,
        ))
    world.emit("explosion")
