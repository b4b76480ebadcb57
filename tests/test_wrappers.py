import numpy as np

from game.p3D import RunnerEnv
from rl.wrappers import MultiDiscreteToDiscreteWrapper


def test_flattened_actions_cover_every_combination():
    env = MultiDiscreteToDiscreteWrapper(RunnerEnv())
    assert env.action_space.n == 6
    decoded = {tuple(env.action(a)) for a in range(6)}
    assert decoded == {(s, f) for s in range(3) for f in range(2)}
    assert tuple(env.action(np.int64(5))) == (2, 1)
