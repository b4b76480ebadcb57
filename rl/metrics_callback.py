"""
Per-episode task metrics for training runs: score, kills, pickups, damage.
"""

import os
import csv
from typing import Any, Dict, List, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback

# CSV column -> key in the env's final-step info
INFO_FIELDS = {
    "score": "score",
    "kills": "enemies_killed",
    "pickups": "powerups_collected",
    "damage": "damage_taken",
}
CSV_FIELDS = ["timestep", "episode", "reward", "length", *INFO_FIELDS, "survived"]


def finished_episodes(locals_: Dict[str, Any]):
    """Final-step infos of the episodes that ended this step (Monitor adds "episode")"""
    for info, done in zip(locals_.get("infos", []), locals_.get("dones", [])):
        if done and "episode" in info:
            yield info


class MetricsCallback(BaseCallback):
    """Appends one CSV row per finished episode to <log_dir>/<algo>_metrics.csv"""

    def __init__(self, log_dir: str, algo_name: str, verbose: int = 1, report_every: int = 10):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name
        self.report_every = report_every
        self.rows: List[Dict[str, float]] = []

        self.csv_path: Optional[str] = None
        self._file = None
        self._writer: Optional[csv.DictWriter] = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")
        self._file = open(self.csv_path, "w", newline="")
        self._writer = csv.DictWriter(self._file, fieldnames=CSV_FIELDS)
        self._writer.writeheader()
        self._file.flush()

    def _on_step(self) -> bool:
        for info in finished_episodes(self.locals):
            self.record_episode(info)
        return True

    def record_episode(self, info: Dict[str, Any]) -> Dict[str, float]:
        row = {
            "timestep": self.num_timesteps,
            "episode": len(self.rows) + 1,
            "reward": info["episode"]["r"],
            "length": info["episode"]["l"],
            "survived": int(info.get("health", 0) > 0),
        }
        for column, key in INFO_FIELDS.items():
            row[column] = info.get(key, 0)
        self.rows.append(row)

        if self._writer:
            self._writer.writerow(row)
            self._file.flush()

        if self.verbose > 0 and len(self.rows) % self.report_every == 0:
            recent = np.mean([r["reward"] for r in self.rows[-self.report_every:]])
            print(f"[{self.algo_name}] episode {len(self.rows)} @ {self.num_timesteps}: "
                  f"reward(last {self.report_every}) {recent:.2f}")
        return row

    def _on_training_end(self) -> None:
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None

    def get_summary(self) -> Dict[str, float]:
        if not self.rows:
            return {}
        def column(name):
            return np.array([r[name] for r in self.rows], dtype=float)

        rewards = column("reward")
        return {
            "episodes": len(self.rows),
            "reward": float(rewards.mean()),
            "reward_std": float(rewards.std()),
            "length": float(column("length").mean()),
            "score": float(column("score").mean()),
            "kills": float(column("kills").mean()),
            "pickups": float(column("pickups").mean()),
            "survival_rate": float(column("survived").mean()),
        }


class TensorboardMetricsCallback(BaseCallback):
    """Logs reward, score and final health of each finished episode"""

    def _on_step(self) -> bool:
        for info in finished_episodes(self.locals):
            self.logger.record("custom/episode_reward", info["episode"]["r"])
            self.logger.record("custom/score", info.get("score", 0))
            self.logger.record("custom/final_health", info.get("health", 0))
        return True
