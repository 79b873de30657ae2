from tileclimb.domains.board import Board


def misplaced(board: Board, target: Board) -> int:
    """Count of numbered tiles not on their target cell."""
    return board.diff(target)
