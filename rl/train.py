"""
Train PPO or DQN agents on the runner environment with Stable-Baselines3.

PPO runs on several normalised environments; DQN needs a flat Discrete action
space and runs on one. Output goes under the TRAINING_CONFIG directories, one
subdirectory per algorithm.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.p3D import RunnerEnv
from rl.configs.runner_config import ENV_CONFIG, REWARD_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback
from rl.wrappers import MultiDiscreteToDiscreteWrapper

ALGORITHMS = {
    # name: (model class, hyperparameters, flatten actions, normalise)
    "ppo": (PPO, PPO_CONFIG, False, True),
    "dqn": (DQN, DQN_CONFIG, True, False),
}


def make_env(seed: Optional[int] = None, flatten_actions: bool = False):
    """Factory function to create the environment"""
    def _init():
        env = RunnerEnv(rewards=REWARD_CONFIG, **ENV_CONFIG)
        if flatten_actions:
            env = MultiDiscreteToDiscreteWrapper(env)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def run_dirs(algo: str):
    """(model, log, tensorboard) directories for one algorithm"""
    return tuple(
        os.path.join(TRAINING_CONFIG[key], algo)
        for key in ("model_dir", "log_dir", "tensorboard_log")
    )


def train(algo: str, total_timesteps: Optional[int] = None, n_envs: int = 4):
    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model_cls, hyperparams, flatten, normalise = ALGORITHMS[algo]
    total_timesteps = total_timesteps or TRAINING_CONFIG["total_timesteps"]
    n_envs = n_envs if normalise else 1

    model_dir, log_dir, tb_dir = run_dirs(algo)
    os.makedirs(model_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"[{algo}] {total_timesteps:,} timesteps on {n_envs} env(s) -> {model_dir}")

    env = DummyVecEnv([make_env(seed=i, flatten_actions=flatten) for i in range(n_envs)])
    eval_env = DummyVecEnv([make_env(seed=100, flatten_actions=flatten)])
    if normalise:
        env = VecNormalize(env, norm_obs=True, norm_reward=True)
        eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    metrics = MetricsCallback(log_dir=log_dir, algo_name=algo)
    callbacks = [
        CheckpointCallback(
            save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
            save_path=model_dir,
            name_prefix=f"{algo}_runner",
        ),
        EvalCallback(
            eval_env,
            best_model_save_path=model_dir,
            log_path=log_dir,
            eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
            deterministic=True,
        ),
        metrics,
        TensorboardMetricsCallback(),
    ]

    model = model_cls(env=env, tensorboard_log=tb_dir, **hyperparams)
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(model_dir, f"{algo}_runner_final")
    model.save(final_path)
    if normalise:
        env.save(os.path.join(model_dir, "vec_normalize.pkl"))

    summary = metrics.get_summary()
    print(f"[{algo}] saved {final_path}")
    if summary:
        print(f"[{algo}] {summary['episodes']} episodes, "
              f"reward {summary['reward']:.2f} ± {summary['reward_std']:.2f}, "
              f"score {summary['score']:.0f}")
    return model, metrics


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the runner environment")
    parser.add_argument("--algo", default="ppo", choices=[*ALGORITHMS, "all"])
    parser.add_argument("--timesteps", type=int, default=None,
                        help=f"default: {TRAINING_CONFIG['total_timesteps']}")
    parser.add_argument("--n-envs", type=int, default=4, help="parallel environments for PPO")
    args = parser.parse_args()

    for algo in (ALGORITHMS if args.algo == "all" else [args.algo]):
        train(algo, total_timesteps=args.timesteps, n_envs=args.n_envs)


if __name__ == "__main__":
    main()
