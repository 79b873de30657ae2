from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

Cell = Tuple[int, int]

BLANK = 0

# Blank moves, in the order neighbors are generated: up, down, left, right.
# Hill-climbing breaks ties on this order.
_MOVES: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class BoardSizeMismatch(ValueError):
    """Raised when two boards of different sizes are compared."""


class Board:
    """N×N sliding-tile board (0 is the blank).

    The grid lives in a private numpy array; every board owns its own copy,
    so deriving a neighbor never touches the board it came from.
    """

    __slots__ = ("size", "state")

    def __init__(self, size: int, state: np.ndarray):
        if size <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        arr = np.array(state, dtype=np.int64, copy=True)
        if arr.shape != (size, size):
            raise ValueError(f"state must be {size}x{size}, got shape {arr.shape}")
        self.size = size
        self.state = arr

    # ---------- Construction ----------
    @classmethod
    def create(cls, size: int) -> "Board":
        """Canonical board: tile at (i, j) is i*size + j."""
        if size <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        return cls(size, np.arange(size * size).reshape(size, size))

    @classmethod
    def create_random(cls, size: int, rng: Optional[np.random.Generator] = None) -> "Board":
        """Uniformly random permutation of 0..size²-1."""
        if size <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        rng = rng if rng is not None else np.random.default_rng()
        return cls(size, rng.permutation(size * size).reshape(size, size))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from nested rows, checking it is a permutation."""
        size = len(rows)
        arr = np.array(rows, dtype=np.int64)
        if arr.shape != (size, size):
            raise ValueError("rows must form a square grid")
        if sorted(arr.ravel().tolist()) != list(range(size * size)):
            raise ValueError(f"rows must hold each of 0..{size * size - 1} exactly once")
        return cls(size, arr)

    def copy(self) -> "Board":
        return Board(self.size, self.state)

    # ---------- Scoring ----------
    def diff(self, target: "Board") -> int:
        """Number of tiles off their target cell (blank ignored)."""
        if self.size != target.size:
            raise BoardSizeMismatch(
                f"boards must be of the same size ({self.size} != {target.size})"
            )
        off = (self.state != target.state) & (self.state != BLANK)
        return int(np.count_nonzero(off))

    # ---------- Core dynamics ----------
    def locate(self, value: int) -> Optional[Cell]:
        hits = np.argwhere(self.state == value)
        if len(hits) == 0:
            return None
        r, c = hits[0]
        return int(r), int(c)

    def neighbors(self, value: int = BLANK) -> List["Board"]:
        """Boards reachable by swapping `value` with an adjacent tile."""
        cell = self.locate(value)
        if cell is None:
            return []
        i, j = cell
        out: List[Board] = []
        for di, dj in _MOVES:
            r, c = i + di, j + dj
            if 0 <= r < self.size and 0 <= c < self.size:
                nb = self.copy()
                nb.state[i, j], nb.state[r, c] = self.state[r, c], self.state[i, j]
                out.append(nb)
        return out

    def neighbor_random(self, value: int = BLANK,
                        rng: Optional[np.random.Generator] = None) -> Optional["Board"]:
        ns = self.neighbors(value)
        if not ns:
            return None
        rng = rng if rng is not None else np.random.default_rng()
        return ns[int(rng.integers(len(ns)))]

    # ---------- Helpers ----------
    def rows(self) -> List[List[int]]:
        return self.state.tolist()

    def tiles(self) -> Iterable[int]:
        return (int(v) for v in self.state.ravel())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.state, other.state))

    def __repr__(self) -> str:
        return f"Board({self.size}, {self.rows()!r})"

    def __str__(self) -> str:
        return "".join(
            "".join(f"{v:2d} " for v in row) + "\n" for row in self.rows()
        )
