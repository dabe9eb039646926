"""Seed patterns for the two-color board."""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .board import Board, Index

logger = logging.getLogger(__name__)

GLIDER: List[Index] = [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]

# A round face: white outline, black eyes and smile.
AVATAR_WHITE: List[Index] = [
    (2, 0), (3, 0), (4, 0), (5, 0), (6, 0),
    (1, 1), (7, 1),
    (0, 2), (8, 2),
    (0, 3), (8, 3),
    (0, 4), (8, 4),
    (0, 5), (8, 5),
    (0, 6), (8, 6),
    (1, 7), (7, 7),
    (2, 8), (3, 8), (4, 8), (5, 8), (6, 8),
]

AVATAR_BLACK: List[Index] = [
    (3, 2), (5, 2),
    (3, 3), (5, 3),
    (2, 5), (6, 5),
    (3, 6), (4, 6), (5, 6),
]


class Pattern:
    """A named arrangement of white and black seed cells."""

    def __init__(
        self,
        name: str,
        white_cells: Sequence[Index],
        black_cells: Sequence[Index] = (),
        description: str = "",
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            white_cells: (x, y) coordinates seeded as white
            black_cells: (x, y) coordinates seeded as black
            description: Optional description
        """
        self.name = name
        self.white_cells = list(white_cells)
        self.black_cells = list(black_cells)
        self.description = description

    @property
    def cells(self) -> List[Index]:
        """All seeded coordinates, white first."""
        return self.white_cells + self.black_cells

    @property
    def population(self) -> int:
        return len(self.white_cells) + len(self.black_cells)

    def apply_to_board(self, board: Board, offset_x: int = 0, offset_y: int = 0) -> Board:
        """Seed this pattern onto a board.

        White cells are spawned first, then black cells. The input board is
        not modified.

        Args:
            board: Board to seed
            offset_x: Horizontal offset
            offset_y: Vertical offset

        Returns:
            New board with the pattern's cells Spawning
        """
        for x, y in self.white_cells:
            board = board.spawn_white((x + offset_x, y + offset_y))
        for x, y in self.black_cells:
            board = board.spawn_black((x + offset_x, y + offset_y))

        logger.debug(f"Seeded pattern '{self.name}' at ({offset_x}, {offset_y})")
        return board

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size.

        Returns:
            Tuple of (width, height)
        """
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates normalized to start at (0, 0)."""
        min_x, min_y, _, _ = self.get_bounding_box()
        return Pattern(
            self.name,
            [(x - min_x, y - min_y) for x, y in self.white_cells],
            [(x - min_x, y - min_y) for x, y in self.black_cells],
            self.description,
        )

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, white={len(self.white_cells)}, black={len(self.black_cells)})"


def glider(board: Board) -> Board:
    """Seed the white glider at its fixed coordinates."""
    return Pattern("Glider", GLIDER).apply_to_board(board)


def avatar(board: Board, offset: Tuple[int, int] = (0, 0)) -> Board:
    """Seed the two-color avatar face, translated by ``offset``."""
    return Pattern("Avatar", AVATAR_WHITE, AVATAR_BLACK).apply_to_board(board, offset[0], offset[1])


def random_soup(width: int, height: int, probability: float = 0.3, seed: Optional[int] = None) -> Pattern:
    """Build a random two-color pattern.

    Args:
        width: Number of columns
        height: Number of rows
        probability: Chance each position is seeded (0.0 to 1.0)
        seed: Optional random seed for reproducible soups

    Returns:
        Pattern with roughly equal numbers of white and black cells
    """
    rng = np.random.default_rng(seed)
    alive = rng.random((width, height)) < probability
    black = rng.random((width, height)) < 0.5

    white_cells = [(int(x), int(y)) for x, y in np.argwhere(alive & ~black)]
    black_cells = [(int(x), int(y)) for x, y in np.argwhere(alive & black)]
    return Pattern(
        "Random",
        white_cells,
        black_cells,
        f"{width}x{height} random soup ({probability:.0%})",
    )


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in patterns."""
        self.add_pattern(Pattern("Avatar", AVATAR_WHITE, AVATAR_BLACK, description="Two-color avatar face"))

        # Still life patterns
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], description="2x2 still life block"))
        self.add_pattern(
            Pattern(
                "Beehive",
                [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (2, 2)],
                description="Beehive still life",
            )
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(0, 1), (1, 1), (2, 1)], description="Period-2 oscillator"))
        self.add_pattern(
            Pattern(
                "Toad",
                [(1, 0), (2, 0), (3, 0), (0, 1), (1, 1), (2, 1)],
                description="Period-2 oscillator",
            )
        )

        # Spaceships
        self.add_pattern(Pattern("Glider", GLIDER, description="Smallest spaceship, period-4"))

        # Two-color contention
        self.add_pattern(
            Pattern(
                "Duel",
                [(0, 0), (1, 0), (2, 0)],
                [(0, 2), (1, 2), (2, 2)],
                description="Facing white and black blinkers",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library.

        Args:
            pattern: Pattern to add
        """
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Args:
            name: Pattern name

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        categories: Dict[str, List[str]] = {
            "Avatars": ["Avatar"],
            "Still Life": ["Block", "Beehive"],
            "Oscillators": ["Blinker", "Toad"],
            "Spaceships": ["Glider"],
            "Two-Color": ["Duel"],
            "Custom": [],
        }

        all_builtin = set()
        for cat_patterns in categories.values():
            all_builtin.update(cat_patterns)

        for name in self._patterns:
            if name not in all_builtin:
                categories["Custom"].append(name)

        # Remove empty categories
        return {cat: patterns for cat, patterns in categories.items() if patterns}
