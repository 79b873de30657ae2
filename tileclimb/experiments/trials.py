"""
Trial orchestrator.

Runs many independent randomized searches and tallies where each one ended.
Trials are batched into chunks and handed to a bounded worker pool; each
chunk returns a partial histogram and the parent merges them as they
complete, so every trial adds exactly one count.

Every trial draws from its own generator, derived from the experiment seed
and the trial index. Pinning `seed` reproduces a histogram no matter how
many workers run it or how the trials are chunked.
"""

from __future__ import annotations
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from multiprocessing import cpu_count
from time import perf_counter, time
from typing import Iterator, List, Optional, Tuple
import math

import numpy as np
from tqdm import tqdm

from tileclimb.config import CONFIG
from tileclimb.domains.board import Board
from tileclimb.search.hill_climb import hill_climb
from tileclimb.search.simulated_annealing import SimulatedAnnealParams, simulated_annealing

ALGORITHMS = {"hc": "Hill-climb", "sa": "Simulated annealing"}

Chunk = Tuple[int, int]  # [start, stop) trial indices


@dataclass
class TrialSummary:
    """Histogram of terminal diffs for one experiment."""
    algorithm: str
    size: int
    trials: int
    histogram: np.ndarray
    elapsed: float
    seed: int
    best_histogram: Optional[np.ndarray] = None  # annealing only: best diff seen per trial

    @property
    def max_diff(self) -> int:
        return self.size * self.size - 1

    def count(self, diff: int) -> int:
        return int(self.histogram[diff])

    def percent(self, diff: int) -> float:
        if self.trials == 0:
            return 0.0
        return self.count(diff) / self.trials * 100

    @property
    def global_min_rate(self) -> float:
        return self.percent(0)

    def rows(self) -> Iterator[Tuple[int, float, int]]:
        """(diff, percent, count) from the worst possible diff down to 0."""
        for d in range(self.max_diff, -1, -1):
            yield d, self.percent(d), self.count(d)


def trial_rng(seed: int, index: int) -> np.random.Generator:
    return np.random.default_rng(np.random.SeedSequence(seed, spawn_key=(index,)))


def run_trial(algorithm: str, size: int, index: int, seed: int,
              params: Optional[SimulatedAnnealParams] = None,
              target: Optional[Board] = None,
              deadline: Optional[float] = None):
    """One randomized trial; returns the search's result dict."""
    rng = trial_rng(seed, index)
    target = target if target is not None else Board.create(size)
    start = Board.create_random(size, rng)
    if algorithm == "hc":
        return hill_climb(start, target)
    return simulated_annealing(start, params, rng, deadline=deadline)


def _empty(algorithm: str, size: int):
    hist = np.zeros(size * size, dtype=np.int64)
    best = np.zeros(size * size, dtype=np.int64) if algorithm == "sa" else None
    return [hist, best]


def _merge(acc, part):
    acc[0] += part[0]
    if acc[1] is not None:
        acc[1] += part[1]


def run_chunk(algorithm: str, size: int, chunk: Chunk, seed: int,
              params: Optional[SimulatedAnnealParams] = None,
              deadline: Optional[float] = None):
    """Run trials [start, stop) and return (histogram, best_histogram)."""
    target = params.objective if params is not None else Board.create(size)
    hist, best = _empty(algorithm, size)
    for i in range(*chunk):
        res = run_trial(algorithm, size, i, seed, params=params, target=target,
                        deadline=deadline)
        hist[res["diff"]] += 1
        if best is not None:
            best[res["best_diff"]] += 1
    return hist, best


def split_trials(trials: int, chunk_size: int) -> List[Chunk]:
    return [(s, min(s + chunk_size, trials)) for s in range(0, trials, chunk_size)]


def _default_chunk_size(algorithm: str, trials: int, workers: int) -> int:
    # annealing trials run for seconds each; keep one per task
    if algorithm == "sa":
        return 1
    per = max(1, workers) * CONFIG.parallel.chunks_per_worker
    return max(1, math.ceil(trials / per))


def _run_pool(executor: Executor, algorithm, size, chunks, seed, params, deadline, progress, desc):
    acc = _empty(algorithm, size)
    with executor as exe:
        futures = [exe.submit(run_chunk, algorithm, size, ch, seed, params, deadline) for ch in chunks]
        with tqdm(total=len(futures), desc=desc, unit="chunk", disable=not progress) as pbar:
            for fut in as_completed(futures):
                _merge(acc, fut.result())
                pbar.update(1)
    return acc


def run_trials(
    algorithm: str,
    size: int,
    trials: int,
    params: Optional[SimulatedAnnealParams] = None,
    workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
    seed: Optional[int] = None,
    progress: bool = False,
) -> TrialSummary:
    """
    Run `trials` independent searches from random boards of side `size`
    against the canonical board and tally the terminal diffs.

    workers <= 1 runs everything in-process; otherwise a process pool is
    used, or a thread pool where processes are unavailable.

    Annealing trials share one deadline, `max_time` after the experiment
    starts, so the whole experiment fits the budget.
    """
    if algorithm not in ALGORITHMS:
        raise ValueError(f"unknown algorithm {algorithm!r}; expected one of {sorted(ALGORITHMS)}")
    if size <= 0:
        raise ValueError(f"board size must be positive, got {size}")
    if trials < 0:
        raise ValueError(f"trials must be >= 0, got {trials}")
    if algorithm == "sa":
        if params is None:
            raise ValueError("simulated annealing needs SimulatedAnnealParams")
        if params.objective.size != size:
            raise ValueError(
                f"objective board is {params.objective.size}x{params.objective.size}, "
                f"trials use size {size}"
            )
    else:
        params = None

    if seed is None:
        seed = int(np.random.SeedSequence().entropy)
    if workers is None:
        workers = CONFIG.parallel.num_workers or cpu_count()
    if chunk_size is None:
        chunk_size = _default_chunk_size(algorithm, trials, workers)
    chunks = split_trials(trials, chunk_size)
    desc = ALGORITHMS[algorithm]

    t0 = perf_counter()
    # one budget for the whole experiment, however many trials wait in the pool
    deadline = time() + params.max_time if params is not None else None
    if workers <= 1 or len(chunks) <= 1:
        acc = _empty(algorithm, size)
        for ch in tqdm(chunks, desc=desc, unit="chunk", disable=not progress):
            _merge(acc, run_chunk(algorithm, size, ch, seed, params, deadline))
        hist, best = acc
    else:
        try:
            hist, best = _run_pool(ProcessPoolExecutor(max_workers=workers),
                                   algorithm, size, chunks, seed, params, deadline, progress, desc)
        except OSError:
            print("process pool unavailable in current environment; fallback to thread pool")
            hist, best = _run_pool(ThreadPoolExecutor(max_workers=workers),
                                   algorithm, size, chunks, seed, params, deadline, progress, desc)
    elapsed = perf_counter() - t0

    return TrialSummary(
        algorithm=algorithm,
        size=size,
        trials=trials,
        histogram=hist,
        elapsed=elapsed,
        seed=seed,
        best_histogram=best,
    )
