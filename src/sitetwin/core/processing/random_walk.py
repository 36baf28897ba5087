"""
Random-walk step used by the live sensor simulation.

Each step jitters the current value by a percentage proportional to 2% of the
sensor limit divided by the current value, then, with a small probability,
replaces it with a spike just above the limit so the alerting path is exercised.
"""
import math
import random
from dataclasses import dataclass

# Probability per sensor per tick of forcing an above-limit spike
SPIKE_PROBABILITY = 0.005
JITTER_FRACTION = 0.02
SPIKE_HEADROOM = 0.1


@dataclass(frozen=True)
class StepResult:
    value: float
    change: float


def jitter_percent(r: float, value: float, limit: float) -> float:
    """
    Percentage swing for a uniform draw r in [-0.5, 0.5).

    Scales with 1/value, so relative swings grow as value approaches 0.
    Returns 0.0 when value is 0 or the result is not finite.
    """
    if value <= 0:
        return 0.0
    change = r * (limit * JITTER_FRACTION) / value * 100
    if not math.isfinite(change):
        return 0.0
    return change


def step(value: float, limit: float, rng: random.Random,
         spike_probability: float = SPIKE_PROBABILITY) -> StepResult:
    """
    Compute the next value of a sensor.

    Draw order is fixed (jitter, spike test, spike magnitude) so a seeded
    rng reproduces the same sequence.
    """
    change = jitter_percent(rng.random() - 0.5, value, limit)
    candidate = max(0.0, value * (1 + change / 100))
    if not math.isfinite(candidate):
        candidate = max(0.0, value) if math.isfinite(value) else 0.0

    if rng.random() < spike_probability:
        candidate = limit * (1 + rng.random() * SPIKE_HEADROOM)

    return StepResult(value=candidate, change=change)
