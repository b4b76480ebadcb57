"""Pseudo-3D module - endless driving shooter core"""

from .config import GameConfig
from .driver import FrameDriver
from .entities import InputIntent
from .runner_env import RunnerEnv, run_random_episode
from .world import RenderSnapshot, WorldState

__all__ = [
    'GameConfig',
    'FrameDriver',
    'InputIntent',
    'RenderSnapshot',
    'RunnerEnv',
    'WorldState',
    'run_random_episode',
]
