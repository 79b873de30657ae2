from __future__ import annotations
from dataclasses import dataclass
from time import perf_counter, time
import math
from typing import Optional

import numpy as np

from tileclimb.domains.board import BLANK, Board


@dataclass(frozen=True)
class SimulatedAnnealParams:
    """Tuning parameters shared read-only by every annealing trial."""
    objective: Board
    temperature_min: float
    alpha: float
    iterations: int
    max_time: float  # seconds of wall clock per trial
    temperature_start: float = 1.0

    def __post_init__(self):
        if not 0.0 < self.alpha < 1.0:
            raise ValueError(f"alpha must be in (0, 1), got {self.alpha}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if self.temperature_min < 0:
            raise ValueError(f"temperature_min must be >= 0, got {self.temperature_min}")
        if self.temperature_start <= 0:
            raise ValueError(f"temperature_start must be > 0, got {self.temperature_start}")
        if self.max_time <= 0:
            raise ValueError(f"max_time must be > 0, got {self.max_time}")


def acceptance_probability(current: int, candidate: int, temp: float) -> float:
    """Metropolis criterion."""
    if candidate < current:
        return 1.0
    if temp == 0:
        return 0.0
    return math.exp(-(candidate - current) / temp)


def accept_candidate(current: int, candidate: int, temp: float,
                     rng: Optional[np.random.Generator] = None) -> bool:
    if candidate < current:
        return True
    if temp == 0:
        return False
    rng = rng if rng is not None else np.random.default_rng()
    return bool(rng.random() < acceptance_probability(current, candidate, temp))


def simulated_annealing(
    start: Board,
    params: SimulatedAnnealParams,
    rng: Optional[np.random.Generator] = None,
    blank: int = BLANK,
    deadline: Optional[float] = None,
):
    """
    Simulated annealing with geometric cooling.

    The run stops after the temperature level during which `max_time` has
    passed, or `deadline` (a `time.time()` timestamp) has been reached.

    `diff` in the result is where the search ended up; `best_diff` is the
    lowest diff seen along the way and is bookkeeping only.
    """
    rng = rng if rng is not None else np.random.default_rng()
    t0 = perf_counter()

    current = start
    current_diff = start.diff(params.objective)
    start_diff = current_diff
    best_diff = current_diff
    t = params.temperature_start
    levels = accepted = rejected = 0
    termination = "cooled"

    while t > params.temperature_min:
        for _ in range(params.iterations):
            cand = current.neighbor_random(blank, rng)
            if cand is None:
                break
            cand_diff = cand.diff(params.objective)
            if cand_diff < best_diff:
                best_diff = cand_diff

            if accept_candidate(current_diff, cand_diff, t, rng):
                current, current_diff = cand, cand_diff
                accepted += 1
            else:
                rejected += 1
        t *= params.alpha
        levels += 1

        if perf_counter() - t0 > params.max_time or (deadline is not None and time() >= deadline):
            termination = "timeout"
            break

    return {
        "algorithm": "SA",
        "diff": current_diff,
        "best_diff": best_diff,
        "start_diff": start_diff,
        "levels": levels,
        "accepted": accepted,
        "rejected": rejected,
        "temperature_final": t,
        "time": perf_counter() - t0,
        "termination": termination,
    }
