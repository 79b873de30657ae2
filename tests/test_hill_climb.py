import unittest

import numpy as np

from tileclimb.domains.board import Board, BoardSizeMismatch
from tileclimb.search.hill_climb import hill_climb


class HillClimbTestCase(unittest.TestCase):
    def test_one_swap_from_goal_converges_in_one_move(self):
        target = Board.create(2)
        start = Board.from_rows([[1, 0], [2, 3]])

        result = hill_climb(start, target, return_path=True)

        self.assertEqual(0, result["diff"])
        self.assertEqual(1, result["moves"])
        self.assertEqual("global_min", result["termination"])
        self.assertEqual(target, result["path"][-1])

    def test_goal_board_stops_immediately(self):
        target = Board.create(3)
        result = hill_climb(target.copy(), target)
        self.assertEqual(0, result["diff"])
        self.assertEqual(0, result["moves"])

    def test_trajectory_strictly_decreases_and_is_bounded(self):
        target = Board.create(3)
        rng = np.random.default_rng(21)
        for _ in range(100):
            start = Board.create_random(3, rng)
            result = hill_climb(start, target, return_path=True)
            diffs = [b.diff(target) for b in result["path"]]
            for a, b in zip(diffs, diffs[1:]):
                self.assertLess(b, a)
            self.assertLessEqual(result["moves"], 9)
            self.assertEqual(diffs[-1], result["diff"])
            self.assertEqual(diffs[0], result["start_diff"])

    def test_terminal_board_is_a_local_minimum(self):
        target = Board.create(3)
        rng = np.random.default_rng(4)
        for _ in range(50):
            result = hill_climb(Board.create_random(3, rng), target, return_path=True)
            last = result["path"][-1]
            for nb in last.neighbors(0):
                self.assertGreaterEqual(nb.diff(target), result["diff"])

    def test_moves_to_lowest_scoring_neighbor(self):
        # blank at (0,1): down gives [[1,3],[2,0]] (diff 2), left gives the goal (diff 0)
        target = Board.create(2)
        start = Board.from_rows([[1, 0], [2, 3]])
        result = hill_climb(start, target, return_path=True)
        self.assertEqual(Board.from_rows([[0, 1], [2, 3]]), result["path"][1])

    def test_equal_scores_go_to_first_neighbor_in_order(self):
        # down (2,1) and right (1,2) both score 0; down comes first
        scores = {(1, 1): 5, (0, 1): 3, (1, 0): 3, (2, 1): 0, (1, 2): 0}

        def by_blank(board, target):
            return scores.get(board.locate(0), 4)

        start = Board.from_rows([[1, 2, 3], [4, 0, 5], [6, 7, 8]])
        result = hill_climb(start, Board.create(3), hfun=by_blank, return_path=True)

        self.assertEqual(1, result["moves"])
        self.assertEqual((2, 1), result["path"][1].locate(0))
        self.assertEqual(0, result["diff"])

    def test_path_omitted_by_default(self):
        result = hill_climb(Board.create(2), Board.create(2))
        self.assertIsNone(result["path"])
        self.assertEqual("HC", result["algorithm"])

    def test_size_mismatch_propagates(self):
        with self.assertRaises(BoardSizeMismatch):
            hill_climb(Board.create(2), Board.create(3))


if __name__ == "__main__":
    unittest.main()
