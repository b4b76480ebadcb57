"""
Evaluation script for trained RL agents
"""

import argparse
import time
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.p3D import RunnerEnv
from rl.configs.runner_config import ENV_CONFIG, REWARD_CONFIG
from rl.wrappers import MultiDiscreteToDiscreteWrapper


def _summarize(label: str, rewards, lengths, scores):
    print("\n" + "=" * 50)
    print(f"{label} ({len(rewards)} episodes):")
    print(f"Mean Reward: {np.mean(rewards):.2f} ± {np.std(rewards):.2f}")
    print(f"Mean Episode Length: {np.mean(lengths):.1f}")
    print(f"Mean Score: {np.mean(scores):.0f}  (best {np.max(scores)})")
    print("=" * 50)
    return {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "mean_score": float(np.mean(scores)),
        "episode_rewards": rewards,
        "episode_lengths": lengths,
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """
    if algo == "ppo":
        model = PPO.load(model_path)
    elif algo == "dqn":
        model = DQN.load(model_path)
    else:
        raise ValueError(f"Unknown algorithm: {algo}")

    base_env = RunnerEnv(render_mode="human" if render else None, rewards=REWARD_CONFIG, **ENV_CONFIG)
    env = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env
    env = DummyVecEnv([lambda: env])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards, episode_lengths, episode_scores = [], [], []

    for episode in range(n_episodes):
        obs = env.reset()
        total_reward = 0.0
        steps = 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += reward[0]
            steps += 1

            if render and base_env._window:
                base_env._window.dispatch_events()
                base_env._window.flip()
                time.sleep(1 / 60)

            if done[0]:
                break

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info[0].get("score", 0))
        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, Score = {episode_scores[-1]}")

    env.close()
    return _summarize("Evaluation Results", episode_rewards, episode_lengths, episode_scores)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = RunnerEnv(render_mode=None, rewards=REWARD_CONFIG, **ENV_CONFIG)

    episode_rewards, episode_lengths, episode_scores = [], [], []

    for episode in range(n_episodes):
        env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0
        info = {}

        while not (terminated or truncated):
            action = env.action_space.sample()
            _, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info.get("score", 0))

    env.close()
    return _summarize("Random Policy Results", episode_rewards, episode_lengths, episode_scores)


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument("--model", type=str, default=None, help="Path to the saved model")
    parser.add_argument("--algo", type=str, default="ppo", choices=["ppo", "dqn"])
    parser.add_argument("--episodes", type=int, default=10)
    parser.add_argument("--no-render", action="store_true")
    parser.add_argument("--vec-normalize", type=str, default=None)
    parser.add_argument("--random", action="store_true", help="Evaluate a random policy instead")
    parser.add_argument("--seed", type=int, default=None)

    args = parser.parse_args()

    if args.random or args.model is None:
        compare_with_random(n_episodes=args.episodes, seed=args.seed)
    else:
        evaluate_model(
            args.model,
            algo=args.algo,
            n_episodes=args.episodes,
            render=not args.no_render,
            vec_normalize_path=args.vec_normalize,
        )


if __name__ == "__main__":
    main()
