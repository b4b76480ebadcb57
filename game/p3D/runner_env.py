"""
RunnerEnv - gymnasium wrapper around the pseudo-3D runner core
--------------------------------------------------------------
- FrameDriver advances the world one frame per step
- Simulated millisecond clock, so episodes do not depend on wall time
- Discrete MultiDiscrete action space: [steer(3), fire(2)]
- Vector observation: player state + nearest enemies, enemy bullets, powerups
- Reward shaped from the tick's events (kills, pickups, damage, ...)

Quick test:
    python -m game.p3D.runner_env
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .driver import FrameDriver
from .entities import InputIntent
from .projection import project
from .utils import clamp, seed_everything

DEFAULT_REWARDS = {
    "R_KILL": 1.0,
    "R_HIT": 0.2,
    "R_PICKUP": 1.5,
    "R_DAMAGE": 0.05,  # per point of health lost
    "R_SHOT": 0.01,
    "R_TIME": 0.001,  # survival bonus per step
    "R_DEATH": 5.0,
}

MAX_FIRE_LEVEL_OBS = 5


class RunnerEnv(gym.Env):
    """Endless driving shooter environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        dt_ms: float = 1000 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 4,
        m_bullets: int = 4,
        p_powerups: int = 2,
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render mode: {render_mode}"
        self.render_mode = render_mode

        self.config = config or GameConfig()
        self.dt_ms = dt_ms
        self.max_steps = max_steps

        # Observation config
        self.k_enemies = k_enemies
        self.m_bullets = m_bullets
        self.p_powerups = p_powerups

        self.rewards = dict(DEFAULT_REWARDS)
        if rewards:
            self.rewards.update(rewards)

        # steer: 0 stay, 1 left, 2 right; fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player: x(1) health(1) fire level(1) fire cooldown(1)
        # Each enemy: dx, depth, heavy, health
        # Each enemy bullet: dx, dy
        # Each powerup: dx, depth
        obs_dim = 4 + (self.k_enemies * 4) + (self.m_bullets * 2) + (self.p_powerups * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.driver = FrameDriver(config=self.config)
        self._now = 0.0
        self._step_count = 0
        self._window = None

        # Per-episode counters for metrics callbacks
        self._kills = 0
        self._pickups = 0
        self._damage = 0

    @property
    def world(self):
        return self.driver.world

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self.driver.reset()
        self._now = 0.0
        self._step_count = 0
        self._kills = 0
        self._pickups = 0
        self._damage = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        steer, shoot = int(action[0]), int(action[1])
        intent = InputIntent(move_left=steer == 1, move_right=steer == 2, fire=shoot == 1)

        self._now += self.dt_ms
        self.driver.tick(intent, now=self._now)

        events = self.world.events
        self._kills += events.get("kill", 0)
        self._pickups += events.get("pickup", 0)
        self._damage += events.get("damage", 0)

        reward = self._compute_reward(events)

        terminated = self.world.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        w = self.world
        cfg = self.config
        width, height = cfg.width, cfg.height
        px = w.player_x
        py = height - (cfg.hitbox_top + cfg.hitbox_bottom) / 2

        cooldown = 0.0
        if w.fire_cooldown.last is not None:
            cooldown = clamp((self._now - w.fire_cooldown.last) / cfg.fire_interval, 0.0, 1.0)

        obs_parts: List[float] = [
            (px / width) * 2 - 1,
            (w.health / cfg.max_health) * 2 - 1,
            (min(w.fire_level, MAX_FIRE_LEVEL_OBS) / MAX_FIRE_LEVEL_OBS) * 2 - 1,
            cooldown * 2 - 1,
        ]

        # Enemies: closest (deepest) first
        enemies = sorted(w.enemies, key=lambda e: -e.z)
        for i in range(self.k_enemies):
            if i < len(enemies):
                e = enemies[i]
                ex, _ = project(e.z, e.x_offset, width, height)
                obs_parts += [
                    clamp((ex - px) / width, -1, 1),
                    clamp(e.z / cfg.depth_cutoff, 0, 1) * 2 - 1,
                    1.0 if e.is_heavy else -1.0,
                    clamp(e.health / 2, 0, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        # Enemy bullets: top-M nearest
        bullets = sorted(w.enemy_bullets, key=lambda b: (b.x - px) ** 2 + (b.y - py) ** 2)
        for i in range(self.m_bullets):
            if i < len(bullets):
                b = bullets[i]
                obs_parts += [clamp((b.x - px) / width, -1, 1), clamp((b.y - py) / height, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        powerups = sorted(w.powerups, key=lambda p: -p.z)
        for i in range(self.p_powerups):
            if i < len(powerups):
                p = powerups[i]
                ppx, _ = project(p.z, p.x_offset, width, height)
                obs_parts += [
                    clamp((ppx - px) / width, -1, 1),
                    clamp(p.z / cfg.depth_cutoff, 0, 1) * 2 - 1,
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, int]) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_KILL"] * events.get("kill", 0)
        reward += r["R_HIT"] * events.get("hit", 0)
        reward += r["R_PICKUP"] * events.get("pickup", 0)

        reward -= r["R_DAMAGE"] * events.get("damage", 0)
        reward -= r["R_SHOT"] * events.get("shot", 0)
        reward += r["R_TIME"]

        if self.world.game_over:
            reward -= r["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        w = self.world
        return {
            "score": w.score,
            "health": w.health,
            "fire_level": w.fire_level,
            "enemies_killed": self._kills,
            "powerups_collected": self._pickups,
            "damage_taken": self._damage,
            "num_enemies": len(w.enemies),
            "num_enemy_bullets": len(w.enemy_bullets),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import RunnerWindow
            self._window = RunnerWindow(self.world.config.width, self.world.config.height)

        self._window.snapshot = self.world.snapshot()
        self._window.on_draw()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = RunnerEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.flip()

    print(f"Random episode return: {total:.2f}  score: {info['score']}  steps: {info['step']}")
    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
