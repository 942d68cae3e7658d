# island_tiler/runtime/ticker.py

"""
================================================================================
FIXED-STEP TICKER
================================================================================
This module provides a self-contained, data-only class that converts variable
frame times into a whole number of fixed steps. A driver regenerates the
island once per step, which keeps the regeneration cadence independent of the
frame rate while the generator itself knows nothing about time.

Data Contract:
---------------
- Inputs (on initialization):
    - step_s: Length of one fixed step in seconds.
    - max_steps_per_frame: Cap on steps reported for a single update.
- Public Methods:
    - update(real_delta_time): Accumulates time, returns the number of due steps.
    - pause() / resume() / reset().
- Side Effects: None.
- Invariants: Over many updates the total number of steps equals the total
  elapsed time divided by the step length (minus any capped overflow),
  whatever the frequency of updates.
================================================================================
"""
from .. import config as DEFAULTS


class FixedStepTicker:
    """Counts fixed steps elapsed in real time."""

    def __init__(self, step_s: float = DEFAULTS.FIXED_TIMESTEP_S,
                 max_steps_per_frame: int = DEFAULTS.MAX_STEPS_PER_FRAME):
        if step_s <= 0:
            raise ValueError(f"step_s must be positive, got {step_s}")
        self.step_s = step_s
        self.max_steps_per_frame = max_steps_per_frame
        self.paused = False
        self.total_steps = 0
        self._accumulator = 0.0

    def update(self, real_delta_time: float) -> int:
        """
        Advances the ticker by a given amount of real-world time.

        Args:
            real_delta_time (float): The time elapsed in the real world, in seconds.

        Returns:
            int: How many fixed steps are due now.
        """
        if self.paused or real_delta_time <= 0:
            return 0

        self._accumulator += real_delta_time
        steps = int(self._accumulator // self.step_s)
        self._accumulator -= steps * self.step_s

        if steps > self.max_steps_per_frame:
            # Drop the backlog rather than catching up.
            steps = self.max_steps_per_frame

        self.total_steps += steps
        return steps

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def reset(self):
        self._accumulator = 0.0
        self.total_steps = 0
