"""Dense neighbour recount used to verify a board's incremental counts."""

import logging
from typing import Dict, List

import numpy as np
import torch
import torch.nn.functional as F

from .board import Board, Color, Index, NeighbourCounts

logger = logging.getLogger(__name__)

# One ring kernel per color channel (grouped convolution).
_KERNEL = (
    torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32)
    .unsqueeze(0)
    .unsqueeze(0)
    .repeat(2, 1, 1, 1)
)


class BoardConsistencyError(RuntimeError):
    """Raised when stored neighbour counts disagree with a fresh recount."""

    def __init__(self, mismatches: List[Index]) -> None:
        self.mismatches = mismatches
        super().__init__(f"{len(mismatches)} cells have stale neighbour counts, e.g. {mismatches[:5]}")


def count_neighbours(board: Board) -> Dict[Index, NeighbourCounts]:
    """Recount live neighbours from scratch using PyTorch convolution.

    The live cells are rasterised into a two-channel (white, black) tensor
    covering their bounding box grown by one cell, so every index that can
    have a live neighbour lies inside it.

    Args:
        board: Board to recount

    Returns:
        Mapping of every index with at least one live neighbour to its counts
    """
    live = board.live_cells()
    if not live:
        return {}

    xs = [x for x, _ in live]
    ys = [y for _, y in live]
    origin_x, origin_y = min(xs) - 1, min(ys) - 1
    width = max(xs) - origin_x + 2
    height = max(ys) - origin_y + 2

    # PyTorch expects (channels, height, width)
    dense = torch.zeros(1, 2, height, width, dtype=torch.float32)
    for (x, y), cell in live.items():
        channel = 0 if cell.color is Color.WHITE else 1
        dense[0, channel, y - origin_y, x - origin_x] = 1.0

    counts = F.conv2d(dense, _KERNEL, padding=1, groups=2)[0].numpy().astype(np.int16)
    white, black = counts[0], counts[1]

    result: Dict[Index, NeighbourCounts] = {}
    for row, col in zip(*np.nonzero(white + black)):
        index = (int(col) + origin_x, int(row) + origin_y)
        result[index] = NeighbourCounts(int(white[row, col]), int(black[row, col]))
    return result


def find_inconsistencies(board: Board) -> List[Index]:
    """List indices whose stored counts differ from a fresh recount.

    Untracked indices that should have a nonzero count are reported too.

    Args:
        board: Board to check

    Returns:
        Sorted list of offending indices (empty when consistent)
    """
    expected = count_neighbours(board)
    zero = NeighbourCounts(0, 0)
    candidates = set(expected) | set(board)
    return sorted(index for index in candidates if board.get(index).neighbours != expected.get(index, zero))


def is_consistent(board: Board) -> bool:
    """Check whether a board's stored counts match a fresh recount."""
    return not find_inconsistencies(board)


def check_consistency(board: Board) -> None:
    """Raise if a board's stored counts have drifted.

    Raises:
        BoardConsistencyError: If any index has a stale count
    """
    mismatches = find_inconsistencies(board)
    if mismatches:
        logger.warning(f"Neighbour counts out of sync at {len(mismatches)} indices")
        raise BoardConsistencyError(mismatches)
