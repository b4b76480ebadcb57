"""
Per-tick motion and aging of every entity kind
"""

from __future__ import annotations

from .entities import InputIntent
from .utils import clamp
from .world import WorldState


def steer(world: WorldState, intent: InputIntent):
    """Apply touch positioning, then key steering (left before right)"""
    cfg = world.config
    lo = cfg.car_half_width
    hi = cfg.width - cfg.car_half_width

    if intent.target_x is not None:
        world.player_x = clamp(intent.target_x, lo, hi)
    if intent.move_left:
        world.player_x = clamp(world.player_x - cfg.steer_step, lo, hi)
    if intent.move_right:
        world.player_x = clamp(world.player_x + cfg.steer_step, lo, hi)


def move(world: WorldState):
    """Advance every collection one step and drop what expired"""
    cfg = world.config
    center_x = cfg.center_x
    horizon_y = cfg.horizon_y

    for b in world.bullets:
        b.y -= cfg.bullet_speed
        b.x += b.vx
        b.size *= cfg.bullet_shrink
        # Converge toward the vanishing point
        b.x += (center_x - b.x) * cfg.bullet_convergence
        if b.y < horizon_y or b.size < cfg.bullet_min_size:
            b.alive = False

    for eb in world.enemy_bullets:
        eb.y += cfg.enemy_bullet_speed
        eb.size *= cfg.enemy_bullet_growth
        if eb.y > cfg.height:
            eb.alive = False

    for e in world.enemies:
        e.z += world.speed / cfg.enemy_speed_div
        if e.z > cfg.depth_cutoff:
            e.alive = False

    for b in world.buildings:
        b.z += world.speed / cfg.building_speed_div
        if b.z > cfg.depth_cutoff:
            b.alive = False

    # Powerup cutoff waits until after the pickup test
    for p in world.powerups:
        p.z += world.speed / cfg.powerup_speed_div

    for p in world.explosions:
        p.x += p.vx
        p.y += p.vy
        p.life -= cfg.particle_decay

    world.grid_offset += world.speed
    if world.grid_offset > 1:
        world.grid_offset = 0.0

    world.compact()


def decay_shake(world: WorldState):
    cfg = world.config
    world.shake_intensity *= cfg.shake_decay
    if world.shake_intensity < cfg.shake_floor:
        world.shake_intensity = 0.0
