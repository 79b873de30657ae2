from __future__ import annotations
import argparse
from pathlib import Path
from typing import List, Optional

from tileclimb.config import CONFIG
from tileclimb.domains.board import Board
from tileclimb.experiments.plot import plot_frame
from tileclimb.experiments.report import format_report, to_frame, write_csv
from tileclimb.experiments.trials import TrialSummary, run_trials
from tileclimb.search.simulated_annealing import SimulatedAnnealParams


def build_parser() -> argparse.ArgumentParser:
    hc, sa, par = CONFIG.hc, CONFIG.sa, CONFIG.parallel
    ap = argparse.ArgumentParser(description="Hill-climbing vs simulated annealing on the N-puzzle")
    ap.add_argument("--algo", choices=["hc", "sa", "both"], default="both",
                    help="'both' runs hill-climb then simulated annealing")
    ap.add_argument("--size", type=int, default=None,
                    help=f"Board side for both experiments (defaults: hc={hc.size}, sa={sa.size})")
    ap.add_argument("--hc_trials", type=int, default=hc.trials)
    ap.add_argument("--sa_trials", type=int, default=sa.trials)
    ap.add_argument("--iterations", type=int, default=sa.iterations, help="SA moves per temperature level")
    ap.add_argument("--alpha", type=float, default=sa.alpha, help="SA cooling factor in (0, 1)")
    ap.add_argument("--t_min", type=float, default=sa.temperature_min, help="SA stopping temperature")
    ap.add_argument("--max_time", type=float, default=sa.max_time, help="SA wall time per trial (seconds)")
    ap.add_argument("--workers", type=int, default=par.num_workers, help="Worker processes (default: cpu count)")
    ap.add_argument("--seed", type=int, default=None, help="Pin the experiment seed")
    ap.add_argument("--out", type=Path, default=None, help="Write histogram rows to this CSV")
    ap.add_argument("--plot", type=Path, default=None, help="Save histogram PNGs to this directory")
    ap.add_argument("--no_progress", action="store_true", default=not par.progress_bar,
                    help="Hide the progress bar")
    return ap


def _check(ap: argparse.ArgumentParser, args):
    if args.size is not None and args.size <= 0:
        ap.error("--size must be positive")
    if args.hc_trials < 0 or args.sa_trials < 0:
        ap.error("trial counts must be >= 0")
    if args.iterations < 1:
        ap.error("--iterations must be >= 1")
    if not 0.0 < args.alpha < 1.0:
        ap.error("--alpha must be in (0, 1)")
    if args.t_min < 0:
        ap.error("--t_min must be >= 0")
    if args.max_time <= 0:
        ap.error("--max_time must be > 0")


def run_hill_climb(args) -> TrialSummary:
    size = args.size or CONFIG.hc.size
    return run_trials("hc", size, args.hc_trials, workers=args.workers,
                      seed=args.seed, progress=not args.no_progress)


def run_sim_anneal(args) -> TrialSummary:
    size = args.size or CONFIG.sa.size
    params = SimulatedAnnealParams(
        objective=Board.create(size),
        temperature_min=args.t_min,
        alpha=args.alpha,
        iterations=args.iterations,
        max_time=args.max_time,
        temperature_start=CONFIG.sa.temperature_start,
    )
    return run_trials("sa", size, args.sa_trials, params=params, workers=args.workers,
                      seed=args.seed, progress=not args.no_progress)


def run(args) -> List[TrialSummary]:
    """Run the selected experiments, print their reports and write outputs."""
    summaries: List[TrialSummary] = []
    if args.algo == "both":
        print("Running hill-climb and simulated annealing optimizations...")
    if args.algo in ("hc", "both"):
        print("Running hill-climb...")
        summaries.append(run_hill_climb(args))
        print(format_report(summaries[-1]))
    if args.algo in ("sa", "both"):
        print("\nRunning simulated annealing...")
        summaries.append(run_sim_anneal(args))
        print(format_report(summaries[-1]))

    if args.out is not None:
        write_csv(summaries, args.out)
        print(f"Wrote {args.out} ({len(summaries)} experiments)")
    if args.plot is not None:
        plot_frame(to_frame(summaries), args.plot)
    return summaries


def main(argv: Optional[List[str]] = None):
    ap = build_parser()
    args = ap.parse_args(argv)
    _check(ap, args)
    run(args)


if __name__ == "__main__":
    main()
