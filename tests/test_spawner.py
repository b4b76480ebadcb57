import pytest

from game.p3D import spawner
from game.p3D.entities import HEAVY, KILL_COLOR, SCOUT, Enemy
from game.p3D.world import Cooldown


def test_cooldown_fires_first_time_then_gates():
    cd = Cooldown("enemy", 2500)
    assert cd.try_fire(0.0)
    assert not cd.try_fire(2500.0)
    assert cd.try_fire(2500.1)
    assert cd.last == 2500.1


def test_stalled_frame_spawns_once(world):
    spawner.spawn(world, 0.0)
    assert len(world.enemies) == 1
    assert len(world.buildings) == 1

    # A long stall satisfies the gate many times over, but only fires once
    spawner.spawn(world, 60_000.0)
    assert len(world.enemies) == 2
    assert len(world.buildings) == 2

    spawner.spawn(world, 60_001.0)
    assert len(world.enemies) == 2
    assert world.enemy_cooldown.last == 60_000.0


def test_spawned_enemy_ranges(world):
    for _ in range(200):
        spawner.spawn_enemy(world, now=1000.0)
    for e in world.enemies:
        assert e.z == 0.0
        assert -300 <= e.x_offset <= 300
        assert e.type in (SCOUT, HEAVY)
        assert e.health == (2 if e.type == HEAVY else 1)
        assert 1000.0 <= e.last_fire_time <= 2000.0


def test_heavy_enemy_roll(world, fixed_random):
    fixed_random(0.1)
    enemy = spawner.spawn_enemy(world, now=500.0)
    assert enemy.type == HEAVY
    assert enemy.health == 2
    assert enemy.last_fire_time == 600.0

    fixed_random(0.5)
    assert spawner.spawn_enemy(world, now=500.0).type == SCOUT


def test_building_attributes_fixed_at_spawn(world):
    for _ in range(100):
        spawner.spawn_building(world)
    for b in world.buildings:
        assert b.side in (-1, 1)
        assert 0.7 <= b.w_mult <= 1.3
        assert 0.5 <= b.h_mult <= 2.0
        assert isinstance(b.window_seed, int)
        assert 0 <= b.window_seed < 10


def test_scout_fires_single_shot_on_fixed_interval(world):
    enemy = Enemy(z=0.5, x_offset=100.0, last_fire_time=0.0)
    world.enemies.append(enemy)

    spawner.enemy_fire(world, 2000.0)
    assert world.enemy_bullets == []

    spawner.enemy_fire(world, 2001.0)
    assert len(world.enemy_bullets) == 1
    shot = world.enemy_bullets[0]
    assert shot.damage == 20
    assert shot.size == 2.5
    assert enemy.last_fire_time == 2001.0

    spawner.enemy_fire(world, 3000.0)
    assert len(world.enemy_bullets) == 1
    spawner.enemy_fire(world, 4002.0)
    assert len(world.enemy_bullets) == 2


def test_heavy_fires_twin_shots(world):
    world.enemies.append(Enemy(z=0.4, x_offset=0.0, type=HEAVY, health=2, last_fire_time=-3000.0))
    spawner.enemy_fire(world, 0.0)

    left, right = world.enemy_bullets
    assert left.damage == right.damage == 40
    assert right.x - left.x == pytest.approx(2 * 15 * 0.4)
    assert left.size == 8 * 0.4


def test_enemy_only_fires_inside_depth_band(world):
    for z in (0.05, 0.1, 0.7, 0.9):
        world.enemies.append(Enemy(z=z, x_offset=0.0, last_fire_time=-3000.0))
    spawner.enemy_fire(world, 0.0)
    assert world.enemy_bullets == []


def test_dead_enemy_does_not_fire(world):
    world.enemies.append(Enemy(z=0.5, x_offset=0.0, last_fire_time=-3000.0, alive=False))
    spawner.enemy_fire(world, 0.0)
    assert world.enemy_bullets == []


def test_powerup_drop_inherits_enemy_position(world, fixed_random):
    enemy = Enemy(z=0.8, x_offset=-42.0)
    fixed_random(0.39)
    spawner.drop_powerup(world, enemy)
    fixed_random(0.4)
    spawner.drop_powerup(world, enemy)

    assert len(world.powerups) == 1
    assert world.powerups[0].z == 0.8
    assert world.powerups[0].x_offset == -42.0


def test_explosion_burst(world):
    spawner.explode(world, 100.0, 200.0, KILL_COLOR)
    assert len(world.explosions) == 15
    assert world.events["explosion"] == 1
    for p in world.explosions:
        assert (p.x, p.y) == (100.0, 200.0)
        assert p.life == 1.0
        assert p.color == KILL_COLOR
        assert -5 <= p.vx < 5
        assert 2 <= p.size < 6
