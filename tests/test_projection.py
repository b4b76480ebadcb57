import pytest

from game.p3D import spawner
from game.p3D.entities import Enemy
from game.p3D.projection import enemy_box, project, scale, screen_x, screen_y


def test_scale_is_quadratic():
    assert scale(0.0) == 0.0
    assert scale(0.5) == 0.25
    assert scale(1.2) == pytest.approx(1.44)


def test_screen_y_spans_horizon_to_floor():
    assert screen_y(0.0, 300, 600) == 300
    assert screen_y(1.0, 300, 600) == 600
    assert screen_y(0.5, 300, 600) == 375


def test_screen_x_offsets_from_center():
    assert screen_x(0.0, 250, 400) == 400
    assert screen_x(1.0, -250, 400) == 150


def test_enemy_box_is_anchored_at_projected_point():
    z, x_offset = 0.6, 120.0
    ex, ey = project(z, x_offset, 800, 600)
    left, right, top, bottom = enemy_box(z, x_offset, 800, 600)
    assert (left + right) / 2 == pytest.approx(ex)
    assert bottom == ey
    assert right - left == pytest.approx(80 * z)
    assert bottom - top == pytest.approx(30 * z)


@pytest.mark.parametrize("z,x_offset", [(0.15, -280.0), (0.4, 0.0), (0.65, 299.0)])
def test_enemy_fire_origin_matches_collision_projection(world, z, x_offset):
    world.enemies.append(Enemy(z=z, x_offset=x_offset, last_fire_time=-5000))
    spawner.enemy_fire(world, now=0.0)

    shot = world.enemy_bullets[0]
    left, right, _, bottom = enemy_box(z, x_offset, world.config.width, world.config.height)
    assert shot.x == pytest.approx((left + right) / 2)
    assert shot.y == pytest.approx(bottom)
