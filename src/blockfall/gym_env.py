"""Gymnasium-compatible wrapper that plays the engine through its commands.

Observation is the ``(height, width)`` grid produced by
:func:`blockfall.utils.render_grid`, with ``0`` for empty cells and ``1..7``
for the piece kinds.

Action space is Discrete(6):
  0 no-op, 1 shift left, 2 shift right, 3 rotate, 4 soft drop, 5 hard drop.

After every action other than a drop the engine receives one gravity step, so
an agent cannot stall a piece forever.  The reward is the score gained during
the step.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
import random

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .engine import Direction, Engine
from .utils import KIND_VALUES, render_grid, render_text


NOOP, LEFT, RIGHT, ROTATE, SOFT_DROP, HARD_DROP = range(6)
NUM_ACTIONS = 6


class BlockfallEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 2,
    }

    def __init__(
        self,
        *,
        width: int = 10,
        height: int = 20,
        max_steps: Optional[int] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.render_mode = render_mode
        self.engine = Engine(width, height)
        self.action_space = spaces.Discrete(NUM_ACTIONS)
        self.observation_space = spaces.Box(
            low=0, high=max(KIND_VALUES.values()), shape=(height, width), dtype=np.uint8
        )
        self._steps = 0
        self._max_steps = max_steps

    # ----------------------- Env API -----------------------
    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict] = None
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Draw the piece generator from the env's seeded generator so plain
        # resets after a seeded one replay the same episodes.
        rng = random.Random(int(self.np_random.integers(2**63)))
        self.engine = Engine(self.engine.width, self.engine.height, rng=rng)
        self._steps = 0
        return render_grid(self.engine), self._info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}")
        before = self.engine.score
        self._apply(int(action))
        self._steps += 1
        reward = float(self.engine.score - before)
        terminated = self.engine.is_game_over()
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        return render_grid(self.engine), reward, terminated, truncated, self._info()

    def render(self):
        if self.render_mode == "ansi":
            return render_text(self.engine)
        return None

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _apply(self, action: int) -> None:
        engine = self.engine
        if action == LEFT:
            engine.shift(Direction.LEFT)
        elif action == RIGHT:
            engine.shift(Direction.RIGHT)
        elif action == ROTATE:
            engine.rotate()
        elif action == SOFT_DROP:
            engine.step()
            return
        elif action == HARD_DROP:
            engine.hard_drop()
            return
        engine.step()

    def _info(self) -> Dict[str, Any]:
        return {
            "score": self.engine.score,
            "settled": len(self.engine.settled),
        }
