from __future__ import annotations
from time import perf_counter
from typing import Callable, List, Optional

from tileclimb.domains.board import BLANK, Board
from tileclimb.heuristics.misplaced import misplaced


def hill_climb(
    start: Board,
    target: Board,
    hfun: Callable[[Board, Board], int] = misplaced,
    blank: int = BLANK,
    return_path: bool = False,
):
    """
    Steepest-descent hill-climbing on the blank's neighbors.
    Stops at the first board none of whose neighbors scores strictly lower.
    """
    t0 = perf_counter()
    current = start
    current_h = hfun(current, target)
    start_h = current_h
    path: Optional[List[Board]] = [current] if return_path else None
    moves = 0
    generated = 0

    while True:
        best: Optional[Board] = None
        best_h = None
        for cand in current.neighbors(blank):
            h = hfun(cand, target)
            generated += 1
            # strict < keeps the first minimum in neighbor order
            if best_h is None or h < best_h:
                best, best_h = cand, h

        if best is None or best_h >= current_h:
            break

        current, current_h = best, best_h
        moves += 1
        if path is not None:
            path.append(current)

    return {
        "algorithm": "HC",
        "diff": current_h,
        "start_diff": start_h,
        "moves": moves,
        "generated": generated,
        "path": path,
        "time": perf_counter() - t0,
        "termination": "global_min" if current_h == 0 else "local_min",
    }
