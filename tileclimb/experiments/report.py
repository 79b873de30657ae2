from __future__ import annotations
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from tileclimb.experiments.trials import TrialSummary

COLUMNS = ["algorithm", "size", "trials", "diff", "count", "percent", "best_count"]


def format_report(summary: TrialSummary) -> str:
    """Human-readable block: header lines then a Min/Percent/Count table."""
    lines = [
        f"Board Size: {summary.size}",
        f"Iterations: {summary.trials:,}",
        f"Runtime: {summary.elapsed:.3f}s",
        "Min\tPercent\tCount",
    ]
    for d, per, count in summary.rows():
        lines.append(f"{d}\t{per:.3f}\t{count:,}")
    return "\n".join(lines)


def to_frame(summaries: Iterable[TrialSummary]) -> pd.DataFrame:
    """One row per (experiment, diff), worst diff first."""
    records: List[dict] = []
    for s in summaries:
        for d, per, count in s.rows():
            records.append({
                "algorithm": s.algorithm,
                "size": s.size,
                "trials": s.trials,
                "diff": d,
                "count": count,
                "percent": per,
                "best_count": int(s.best_histogram[d]) if s.best_histogram is not None else pd.NA,
            })
    df = pd.DataFrame.from_records(records, columns=COLUMNS)
    return df.astype({"best_count": "Int64"})


def write_csv(summaries: Iterable[TrialSummary], out: Path) -> Path:
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    to_frame(summaries).to_csv(out, index=False, float_format="%.6f")
    return out


def read_csv(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path)
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {missing}")
    return df.astype({"best_count": "Int64"})
