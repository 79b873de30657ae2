"""
Default experiment settings.
The CLI reads its argparse defaults from here.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class HillClimbConfig:
    """Hill-climbing experiment."""
    size: int = 3
    trials: int = 5_000_000


@dataclass
class AnnealConfig:
    """Simulated annealing experiment."""
    size: int = 3
    trials: int = 100

    # Geometric cooling from temperature_start down to temperature_min
    temperature_start: float = 1.0
    temperature_min: float = 1e-11
    alpha: float = 0.99
    iterations: int = 1000  # moves per temperature level

    max_time: float = 10.0  # seconds, per trial


@dataclass
class ParallelConfig:
    """Worker pool settings."""
    num_workers: Optional[int] = None  # None = auto (cpu_count)
    chunks_per_worker: int = 4
    progress_bar: bool = True


@dataclass
class ExperimentConfig:
    """Master configuration combining all sub-configs."""
    hc: HillClimbConfig = field(default_factory=HillClimbConfig)
    sa: AnnealConfig = field(default_factory=AnnealConfig)
    parallel: ParallelConfig = field(default_factory=ParallelConfig)


CONFIG = ExperimentConfig()
