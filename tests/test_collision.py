import pytest

from game.p3D import collision
from game.p3D.entities import HEAVY, HIT_COLOR, KILL_COLOR, Bullet, Enemy, EnemyBullet, Powerup


def test_single_scout_kill(world, fixed_random):
    fixed_random(0.9)  # no powerup drop
    world.enemies.append(Enemy(z=0.5, x_offset=0.0))
    world.bullets.append(Bullet(x=400.0, y=370.0))

    collision.resolve(world)

    assert world.enemies == []
    assert world.bullets == []
    assert world.score == 500
    assert len(world.explosions) == 15
    assert all(p.color == KILL_COLOR for p in world.explosions)
    assert world.events["kill"] == 1
    assert world.powerups == []


def test_kill_can_drop_powerup(world, fixed_random):
    fixed_random(0.1)
    world.enemies.append(Enemy(z=0.5, x_offset=0.0))
    world.bullets.append(Bullet(x=400.0, y=370.0))

    collision.resolve(world)

    assert len(world.powerups) == 1
    assert world.powerups[0].z == 0.5


def test_heavy_takes_two_hits(world):
    heavy = Enemy(z=0.5, x_offset=0.0, type=HEAVY, health=2)
    world.enemies.append(heavy)
    world.bullets.append(Bullet(x=400.0, y=370.0))

    collision.resolve(world)

    assert world.enemies == [heavy]
    assert heavy.health == 1
    assert world.score == 0
    assert len(world.explosions) == 15
    assert all(p.color == HIT_COLOR for p in world.explosions)

    world.bullets.append(Bullet(x=400.0, y=370.0))
    collision.resolve(world)
    assert world.enemies == []
    assert world.score == 500


def test_bullet_outside_box_misses(world):
    world.enemies.append(Enemy(z=0.5, x_offset=0.0))
    # Box spans x (380, 420), y (360, 375); edges are outside
    for x, y in [(420.0, 370.0), (400.0, 375.0), (400.0, 359.0), (379.0, 365.0)]:
        world.bullets.append(Bullet(x=x, y=y))

    collision.resolve(world)

    assert len(world.enemies) == 1
    assert len(world.bullets) == 4
    assert world.score == 0


def test_bullet_hits_at_most_one_enemy(world, fixed_random):
    fixed_random(0.9)
    world.enemies.append(Enemy(z=0.5, x_offset=0.0))
    world.enemies.append(Enemy(z=0.5, x_offset=4.0))
    world.bullets.append(Bullet(x=402.0, y=370.0))

    collision.resolve(world)

    assert len(world.enemies) == 1
    assert world.score == 500


def test_two_bullets_kill_two_enemies(world, fixed_random):
    fixed_random(0.9)
    world.enemies.append(Enemy(z=0.5, x_offset=-100.0))
    world.enemies.append(Enemy(z=0.5, x_offset=100.0))
    world.bullets.append(Bullet(x=375.0, y=370.0))
    world.bullets.append(Bullet(x=425.0, y=370.0))

    collision.resolve(world)

    assert world.enemies == []
    assert world.bullets == []
    assert world.score == 1000
    assert len(world.explosions) == 30


def test_powerup_pickup(world):
    world.fire_level = 2
    world.powerups.append(Powerup(z=0.9, x_offset=0.0))

    collision.resolve(world)

    assert world.powerups == []
    assert world.fire_level == 3
    assert world.score == 1000
    assert world.shake_intensity == 5


def test_powerup_out_of_reach_stays(world):
    world.player_x = 460.0
    world.powerups.append(Powerup(z=0.9, x_offset=-10.0))
    collision.resolve(world)
    assert len(world.powerups) == 1
    assert world.fire_level == 1


def test_powerup_past_cutoff_removed(world):
    world.powerups.append(Powerup(z=1.51, x_offset=0.0))
    collision.resolve(world)
    assert world.powerups == []
    assert world.fire_level == 1


def test_player_hit_resets_fire_level(world):
    world.fire_level = 3
    world.enemy_bullets.append(EnemyBullet(x=world.player_x, y=555.0, size=5.0, damage=20))

    collision.resolve(world)

    assert world.health == 80
    assert world.fire_level == 1
    assert world.shake_intensity == 15
    assert world.enemy_bullets == []
    assert world.events["damage"] == 20


def test_hit_after_pickup_in_same_tick_wins(world):
    world.fire_level = 2
    world.powerups.append(Powerup(z=0.9, x_offset=0.0))
    world.enemy_bullets.append(EnemyBullet(x=world.player_x, y=555.0, size=5.0, damage=20))

    collision.resolve(world)

    assert world.fire_level == 1
    assert world.score == 1000
    assert world.shake_intensity == 15


@pytest.mark.parametrize("x,y", [(440.0, 555.0), (400.0, 530.0), (400.0, 560.0), (359.0, 545.0)])
def test_enemy_bullet_outside_hitbox_misses(world, x, y):
    world.enemy_bullets.append(EnemyBullet(x=x, y=y, size=5.0))
    collision.resolve(world)
    assert world.health == 100
    assert len(world.enemy_bullets) == 1


def test_health_clamped_and_game_over(world):
    world.health = 30
    world.enemy_bullets.append(EnemyBullet(x=400.0, y=545.0, size=5.0, damage=40))

    collision.resolve(world)

    assert world.health == 0
    assert world.game_over is True
