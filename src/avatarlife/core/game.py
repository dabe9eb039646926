"""Generation driver for the two-color avatar board."""

import logging
from collections import deque
from typing import Deque, Dict, FrozenSet, Optional, Tuple

import numpy as np

from .board import Board, Cell, Index, evolve
from . import neighbours
from .patterns import Pattern

logger = logging.getLogger(__name__)

# Boards remembered for cycle detection; older ones are forgotten first.
MAX_SEEN_BOARDS = 1000

__all__ = ["AvatarLife", "evolve"]


class AvatarLife:
    """Drives a board one generation at a time.

    The board itself is an immutable value; this class only holds the
    current one and keeps track of generation count, population history
    and cycles.
    """

    def __init__(self, board: Optional[Board] = None, check_consistency: bool = False) -> None:
        """Initialize the driver.

        Args:
            board: Starting board (defaults to an empty board)
            check_consistency: Recount neighbours after every step and raise
                ``BoardConsistencyError`` on drift
        """
        self.board = board if board is not None else Board()
        self.check_consistency = check_consistency
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._seen_boards: Dict[FrozenSet[Tuple[Index, Cell]], int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of live cells."""
        return self.board.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        return self._cycle_start_generation

    @property
    def seen_boards(self) -> int:
        """Number of boards currently remembered for cycle detection."""
        return len(self._seen_boards)

    def seed(self, pattern: Pattern, offset_x: int = 0, offset_y: int = 0) -> None:
        """Spawn a pattern onto the current board.

        Args:
            pattern: Pattern to seed
            offset_x: Horizontal offset
            offset_y: Vertical offset
        """
        self.board = pattern.apply_to_board(self.board, offset_x, offset_y)
        self.clear_cycle_detection()
        self._update_population_history()

    def step(self) -> Board:
        """Advance the simulation by one generation.

        Returns:
            The new current board
        """
        self._check_for_cycles()

        self.board = evolve(self.board)
        if self.check_consistency:
            neighbours.check_consistency(self.board)

        self._generation += 1
        self._update_population_history()
        logger.debug(f"Generation {self._generation}: {self.population} live, {len(self.board)} tracked")
        return self.board

    def run(self, generations: int) -> Board:
        """Advance a fixed number of generations.

        Args:
            generations: Number of steps to take

        Returns:
            The final board
        """
        for _ in range(generations):
            self.step()
        return self.board

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Record the current board, flagging a cycle if it was seen before.

        Insertion order is age: once more than ``MAX_SEEN_BOARDS`` are held
        the oldest is evicted.
        """
        if self._cycle_detected:
            return

        fingerprint = self.board.fingerprint()
        first_seen = self._seen_boards.get(fingerprint)
        if first_seen is not None:
            self._cycle_detected = True
            self._cycle_length = self._generation - first_seen
            self._cycle_start_generation = first_seen
            logger.info(f"Cycle of length {self._cycle_length} from generation {first_seen}")
            return

        self._seen_boards[fingerprint] = self._generation
        if len(self._seen_boards) > MAX_SEEN_BOARDS:
            del self._seen_boards[next(iter(self._seen_boards))]

    def reset(self, clear_board: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_board: Whether to replace the board with an empty one as well
        """
        if clear_board:
            self.board = Board()

        self._generation = 0
        self._population_history.clear()
        self.clear_cycle_detection()

        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget seen boards, e.g. after seeding new cells."""
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_boards.clear()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()
            reason = self.stop_reason()
            if reason:
                return self._generation, reason

        return self._generation, "max_generations"

    def stop_reason(self) -> Optional[str]:
        """Why the run should stop now: 'cycle', 'extinction' or None."""
        if self._cycle_detected:
            return "cycle"
        if self.population == 0:
            return "extinction"
        return None

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent = np.asarray(self._population_history)[-window_size:]
        if recent.size < 2:
            return 0.0

        return float(np.diff(recent).mean())

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.board.get_bounding_box()
        white, black = self.board.color_populations()

        stats = {
            "generation": self._generation,
            "population": self.population,
            "white_population": white,
            "black_population": black,
            "tracked_cells": len(self.board),
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

        if bbox:
            stats["bounding_box"] = bbox
            stats["bounding_box_size"] = (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1)
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)

        return stats
