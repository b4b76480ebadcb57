"""
Gameplay constants for the pseudo-3D runner.

Defaults give the standard arcade tuning. Times are in
milliseconds, distances in canvas pixels, depths are normalised.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    # Canvas
    width: int = 800
    height: int = 600

    # World scroll
    speed: float = 0.02
    depth_cutoff: float = 1.5
    enemy_speed_div: float = 8.0
    building_speed_div: float = 10.0
    powerup_speed_div: float = 10.0

    # Player
    max_health: int = 100
    low_health: int = 30
    car_half_width: float = 40.0
    steer_step: float = 5.0

    # Player fire
    fire_interval: float = 200.0
    muzzle_y_offset: float = 70.0
    side_shot_offset: float = 30.0
    diagonal_vx: float = 3.0
    bullet_size: float = 6.0
    bullet_speed: float = 8.0
    bullet_shrink: float = 0.98
    bullet_convergence: float = 0.02
    bullet_min_size: float = 1.0

    # Spawning
    enemy_interval: float = 2500.0
    enemy_x_range: float = 300.0
    heavy_chance: float = 0.2
    enemy_fire_jitter: float = 1000.0
    building_interval: float = 1200.0
    building_w_range: tuple = (0.7, 1.3)
    building_h_range: tuple = (0.5, 2.0)
    window_seeds: int = 10
    powerup_drop_chance: float = 0.4

    # Enemy return fire
    enemy_fire_interval: float = 2000.0
    enemy_fire_min_z: float = 0.1
    enemy_fire_max_z: float = 0.7
    scout_damage: int = 20
    heavy_damage: int = 40
    enemy_bullet_speed: float = 4.0
    enemy_bullet_growth: float = 1.01

    # Collision
    enemy_box_w: float = 80.0
    enemy_box_h: float = 30.0
    kill_score: int = 500
    pickup_score: int = 1000
    capture_band: float = 100.0
    capture_reach: float = 50.0
    hitbox_top: float = 70.0
    hitbox_bottom: float = 40.0

    # Effects
    burst_count: int = 15
    particle_speed: float = 10.0
    particle_decay: float = 0.03
    pickup_shake: float = 5.0
    hit_shake: float = 15.0
    shake_decay: float = 0.9
    shake_floor: float = 0.1

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas must be positive, got {self.width}x{self.height}")

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def horizon_y(self) -> float:
        return self.height / 2
