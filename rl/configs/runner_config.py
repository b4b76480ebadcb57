"""
Training configuration for the runner environment
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "dt_ms": 1000 / 60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 4,
    "m_bullets": 4,
    "p_powerups": 2,
}

# Reward shaping, merged over the environment defaults
REWARD_CONFIG = {
    "R_KILL": 1.0,       # Enemy destroyed
    "R_HIT": 0.2,        # Any bullet hit, lethal or not
    "R_PICKUP": 1.5,     # Powerup collected
    "R_DAMAGE": 0.05,    # Per health point lost
    "R_SHOT": 0.01,      # Per volley fired
    "R_TIME": 0.001,     # Survival bonus per step
    "R_DEATH": 5.0,      # Game over penalty
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
