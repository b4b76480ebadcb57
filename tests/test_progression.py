import pytest

from game.p3D import progression


@pytest.mark.parametrize("level,expected", [
    (1, [(0.0, 0.0)]),
    (2, [(-30.0, 0.0), (30.0, 0.0)]),
    (3, [(0.0, 0.0), (-30.0, 0.0), (30.0, 0.0)]),
    (4, [(0.0, 0.0), (-30.0, 0.0), (30.0, 0.0), (-30.0, -3.0), (30.0, 3.0)]),
    (9, [(0.0, 0.0), (-30.0, 0.0), (30.0, 0.0), (-30.0, -3.0), (30.0, 3.0)]),
])
def test_fire_pattern(level, expected):
    assert progression.fire_pattern(level, 30.0, 3.0) == expected


def test_volley_spawns_at_muzzle(world):
    world.fire_level = 2
    world.player_x = 300.0
    assert progression.fire(world, True, 0.0) == 2
    assert [(b.x, b.y, b.size) for b in world.bullets] == [(270.0, 530.0, 6.0), (330.0, 530.0, 6.0)]
    assert world.events["shot"] == 1


def test_fire_rate_gating(world):
    assert progression.fire(world, True, 1000.0) == 1
    assert progression.fire(world, True, 1150.0) == 0
    assert progression.fire(world, True, 1200.0) == 0
    assert progression.fire(world, True, 1200.5) == 1
    assert len(world.bullets) == 2


def test_no_fire_intent_leaves_gate_untouched(world):
    progression.fire(world, False, 1000.0)
    assert world.fire_cooldown.last is None
    assert world.bullets == []


def test_pickup_and_hit_consequences(world):
    progression.collect_powerup(world)
    progression.collect_powerup(world)
    assert world.fire_level == 3
    assert world.score == 2000

    progression.take_hit(world, 40)
    assert world.fire_level == 1
    assert world.health == 60

    progression.take_hit(world, 400)
    assert world.health == 0


def test_game_over_is_terminal(world):
    assert progression.phase(world) == progression.PLAYING
    world.health = 0
    assert progression.check_game_over(world)
    assert progression.phase(world) == progression.GAME_OVER

    world.health = 50
    assert progression.check_game_over(world)


def test_score_accrues_only_while_playing(world):
    progression.accrue_score(world)
    assert world.score == 1
    world.game_over = True
    progression.accrue_score(world)
    assert world.score == 1
