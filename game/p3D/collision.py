"""
Collision detection and resolution.

Passes run in a fixed order each tick: player bullets vs enemies, powerup
pickup, enemy bullets vs player, then the game-over check. Pickup runs before
the hit test so a hit in the same tick still resets the fire level.
"""

from __future__ import annotations

from .entities import HIT_COLOR, KILL_COLOR
from .progression import award_kill, check_game_over, collect_powerup, take_hit
from .projection import enemy_box, project
from .spawner import drop_powerup, explode
from .utils import point_in_box
from .world import WorldState


def resolve(world: WorldState):
    bullets_vs_enemies(world)
    pickup_powerups(world)
    enemy_bullets_vs_player(world)
    check_game_over(world)
    world.compact()


def bullets_vs_enemies(world: WorldState):
    cfg = world.config
    for bullet in world.bullets:
        if not bullet.alive:
            continue
        # Newest enemy first; a bullet hits at most one enemy
        for enemy in reversed(world.enemies):
            if not enemy.alive:
                continue
            left, right, top, bottom = enemy_box(
                enemy.z, enemy.x_offset, cfg.width, cfg.height,
                cfg.enemy_box_w, cfg.enemy_box_h,
            )
            if not point_in_box(bullet.x, bullet.y, left, right, top, bottom):
                continue

            bullet.alive = False
            enemy.health -= 1
            world.emit("hit")
            burst_x, burst_y = (left + right) / 2, (top + bottom) / 2
            if enemy.health <= 0:
                enemy.alive = False
                explode(world, burst_x, burst_y, KILL_COLOR)
                award_kill(world)
                drop_powerup(world, enemy)
            else:
                explode(world, burst_x, burst_y, HIT_COLOR)
            break


def pickup_powerups(world: WorldState):
    cfg = world.config
    for p in world.powerups:
        if not p.alive:
            continue
        px, py = project(p.z, p.x_offset, cfg.width, cfg.height)
        in_band = cfg.height - cfg.capture_band < py < cfg.height
        if in_band and abs(px - world.player_x) < cfg.capture_reach:
            p.alive = False
            collect_powerup(world)
        elif p.z > cfg.depth_cutoff:
            p.alive = False


def enemy_bullets_vs_player(world: WorldState):
    cfg = world.config
    left = world.player_x - cfg.car_half_width
    right = world.player_x + cfg.car_half_width
    top = cfg.height - cfg.hitbox_top
    bottom = cfg.height - cfg.hitbox_bottom
    for eb in world.enemy_bullets:
        if not eb.alive:
            continue
        if point_in_box(eb.x, eb.y, left, right, top, bottom):
            eb.alive = False
            take_hit(world, eb.damage)
