#!/usr/bin/env python3
import argparse, os, sys
from pathlib import Path

import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from tileclimb.experiments.report import read_csv

LABELS = {"hc": "Hill-climb", "sa": "Simulated annealing"}


def plot_histogram(ax, df: pd.DataFrame, algorithm: str, size: int):
    """Bar chart of percent of trials per terminal diff."""
    sub = df.sort_values("diff")
    trials = int(sub["trials"].iloc[0])
    ax.bar(sub["diff"], sub["percent"], color="#1f77b4", label="final")
    best = sub["best_count"].dropna()
    if len(best):
        ax.step(sub.loc[best.index, "diff"], best.astype(float) / trials * 100,
                where="mid", color="#ff7f0e", label="best seen")
        ax.legend()
    ax.set_xticks(range(size * size))
    ax.set_xlabel("Diff (misplaced tiles)")
    ax.set_ylabel("% of trials")
    ax.set_title(f"{LABELS.get(algorithm, algorithm)} | {size}x{size} | {trials:,} trials")
    ax.grid(True, axis="y")


def save_fig(fig, outdir: Path, name: str):
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path


def plot_frame(df: pd.DataFrame, outdir: Path, base: str = "hist"):
    paths = []
    for (algorithm, size), sub in df.groupby(["algorithm", "size"], sort=True):
        fig, ax = plt.subplots(figsize=(8, 5))
        plot_histogram(ax, sub, algorithm, int(size))
        plt.tight_layout()
        paths.append(save_fig(fig, outdir, f"{base}_{algorithm}_{size}x{size}"))
        plt.close(fig)
    return paths


def main():
    ap = argparse.ArgumentParser(description="Plot diff histograms from result CSVs.")
    ap.add_argument("csv", nargs="+", help="One or more CSV result files")
    ap.add_argument("--save", default="results/plots", help="Directory to save plots")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args()

    df = pd.concat([read_csv(p) for p in args.csv], ignore_index=True)
    if df.empty:
        print("No rows to plot. Are your CSVs empty?")
        sys.exit(0)

    base = "combo" if len(args.csv) > 1 else Path(args.csv[0]).stem
    plot_frame(df, Path(args.save), base)

    if args.show:
        plt.show()


if __name__ == "__main__":
    main()
