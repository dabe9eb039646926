"""Sparse two-color board and the generation rules that evolve it."""

from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

Index = Tuple[int, int]

# King-move offsets, no wraparound.
NEIGHBOUR_OFFSETS: Tuple[Index, ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class State(Enum):
    """Lifecycle phase of a cell."""

    SPAWNING = "spawning"
    ALIVE = "alive"
    DYING = "dying"
    DEAD = "dead"


class Color(Enum):
    """Team a cell belongs to."""

    WHITE = "white"
    BLACK = "black"


class NeighbourCounts(NamedTuple):
    """Number of live white and black cells around an index.

    Also used as the signed delta applied to the neighbours of an index
    whose own live color changes.
    """

    white: int = 0
    black: int = 0

    @property
    def total(self) -> int:
        return self.white + self.black

    def __add__(self, other: Tuple[int, int]) -> "NeighbourCounts":
        return NeighbourCounts(self.white + other[0], self.black + other[1])

    def __sub__(self, other: Tuple[int, int]) -> "NeighbourCounts":
        return NeighbourCounts(self.white - other[0], self.black - other[1])

    def __neg__(self) -> "NeighbourCounts":
        return NeighbourCounts(-self.white, -self.black)


NO_DELTA = NeighbourCounts(0, 0)
WHITE_DELTA = NeighbourCounts(1, 0)
BLACK_DELTA = NeighbourCounts(0, 1)

_COLOR_DELTAS = {Color.WHITE: WHITE_DELTA, Color.BLACK: BLACK_DELTA}
_LIVE_STATES = (State.SPAWNING, State.ALIVE)


class Cell(NamedTuple):
    """Occupancy of one grid position."""

    state: State
    color: Color
    neighbours: NeighbourCounts = NO_DELTA

    @property
    def is_alive(self) -> bool:
        """Whether this cell counts towards its neighbours (Alive or Spawning)."""
        return self.state in _LIVE_STATES

    @property
    def total_neighbours(self) -> int:
        return self.neighbours.total

    @property
    def contribution(self) -> NeighbourCounts:
        """Delta this cell currently adds to each of its neighbours."""
        if self.is_alive:
            return _COLOR_DELTAS[self.color]
        return NO_DELTA


DEAD_CELL = Cell(State.DEAD, Color.WHITE, NO_DELTA)

# Integer codes used by Board.to_arrays()
STATE_CODES = {State.DEAD: 0, State.SPAWNING: 1, State.ALIVE: 2, State.DYING: 3}
COLOR_CODES = {Color.WHITE: 0, Color.BLACK: 1}

_GLYPHS = {
    (State.SPAWNING, Color.WHITE): "o",
    (State.ALIVE, Color.WHITE): "O",
    (State.SPAWNING, Color.BLACK): "x",
    (State.ALIVE, Color.BLACK): "X",
    (State.DYING, Color.WHITE): "-",
    (State.DYING, Color.BLACK): "-",
}


class Board:
    """Sparse, unbounded grid of two-color cells.

    A board behaves as an immutable value: every operation that changes
    cells returns a new board and leaves the receiver untouched. Indices
    missing from the mapping read as ``DEAD_CELL``.

    Each cell stores how many live white and black neighbours it has. The
    counts are kept up to date incrementally: whenever a cell's own live
    color changes, a signed delta is added to all 8 neighbours.
    """

    def __init__(self, cells: Optional[Dict[Index, Cell]] = None) -> None:
        """Initialize a board.

        Args:
            cells: Optional mapping of index to cell. It is copied, never
                shared with the new board.
        """
        self._cells: Dict[Index, Cell] = dict(cells) if cells else {}

    # Read accessors

    def get(self, index: Index) -> Cell:
        """Get the cell at an index.

        Args:
            index: (x, y) coordinate

        Returns:
            Stored cell, or ``DEAD_CELL`` if the index is not tracked
        """
        return self._cells.get(index, DEAD_CELL)

    def __getitem__(self, index: Index) -> Cell:
        return self.get(index)

    def __contains__(self, index: object) -> bool:
        return index in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Index]:
        return iter(self._cells)

    def items(self) -> Iterator[Tuple[Index, Cell]]:
        """Iterate over every tracked (index, cell) pair, live or not."""
        return iter(self._cells.items())

    def live_cells(self) -> Dict[Index, Cell]:
        """Get the cells that are Alive or Spawning."""
        return {index: cell for index, cell in self._cells.items() if cell.is_alive}

    @property
    def population(self) -> int:
        """Get the number of live (Alive or Spawning) cells."""
        return sum(1 for cell in self._cells.values() if cell.is_alive)

    def color_populations(self) -> Tuple[int, int]:
        """Get live cell counts per color.

        Returns:
            Tuple of (white, black)
        """
        white = black = 0
        for cell in self._cells.values():
            if cell.is_alive:
                if cell.color is Color.WHITE:
                    white += 1
                else:
                    black += 1
        return (white, black)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of visible cells (anything not Dead).

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if nothing is visible
        """
        visible = [index for index, cell in self._cells.items() if cell.state is not State.DEAD]
        if not visible:
            return None

        xs, ys = zip(*visible)
        return (min(xs), min(ys), max(xs), max(ys))

    def to_arrays(self) -> Tuple[Index, np.ndarray, np.ndarray]:
        """Convert the visible region into dense arrays for rendering.

        Arrays are indexed ``[x - origin_x, y - origin_y]``. States use
        ``STATE_CODES`` and colors use ``COLOR_CODES``.

        Returns:
            Tuple of (origin, states, colors); empty arrays for an empty board
        """
        bbox = self.get_bounding_box()
        if bbox is None:
            empty = np.zeros((0, 0), dtype=np.int8)
            return (0, 0), empty, empty.copy()

        min_x, min_y, max_x, max_y = bbox
        shape = (max_x - min_x + 1, max_y - min_y + 1)
        states = np.zeros(shape, dtype=np.int8)
        colors = np.zeros(shape, dtype=np.int8)
        for (x, y), cell in self._cells.items():
            if cell.state is State.DEAD:
                continue
            states[x - min_x, y - min_y] = STATE_CODES[cell.state]
            colors[x - min_x, y - min_y] = COLOR_CODES[cell.color]

        return (min_x, min_y), states, colors

    def fingerprint(self) -> FrozenSet[Tuple[Index, Cell]]:
        """Hashable snapshot of the board, used for cycle detection."""
        return frozenset(self._cells.items())

    # Mutation primitives, each returning a new board

    def change_cell(self, color: Color, state: State, delta: Tuple[int, int], index: Index) -> "Board":
        """Set the phase and color of a cell and shift its neighbours' counts.

        Args:
            color: New color of the cell
            state: New lifecycle phase of the cell
            delta: Signed (white, black) adjustment added to all 8 neighbours
            index: (x, y) coordinate of the cell

        Returns:
            New board
        """
        board = self.copy()
        board._change_cell(color, state, NeighbourCounts(*delta), index)
        return board

    def spawn_white(self, index: Index) -> "Board":
        """Return a new board with a Spawning white cell at ``index``."""
        board = self.copy()
        board._spawn(Color.WHITE, index)
        return board

    def spawn_black(self, index: Index) -> "Board":
        """Return a new board with a Spawning black cell at ``index``."""
        board = self.copy()
        board._spawn(Color.BLACK, index)
        return board

    def spawn_to_alive(self, index: Index) -> "Board":
        """Return a new board with the cell at ``index`` moved to Alive."""
        board = self.copy()
        board._spawn_to_alive(index)
        return board

    def die(self, index: Index) -> "Board":
        """Return a new board with the cell at ``index`` one phase closer to Dead.

        Live cells become Dying and stop counting for their neighbours;
        Dying (or Dead) cells become Dead.
        """
        board = self.copy()
        board._die(index)
        return board

    def compact(self) -> "Board":
        """Return a new board without quiescent dead cells."""
        board = self.copy()
        board._compact()
        return board

    def evolve(self) -> "Board":
        """Advance one generation.

        All four selections are taken from this board before anything is
        applied; the mutations are then folded in order: deaths, Spawning to
        Alive, white births, black births, compaction.

        Returns:
            New board for the next generation
        """
        dying: List[Index] = []
        maturing: List[Index] = []
        white_births: List[Index] = []
        black_births: List[Index] = []

        # Every index with a nonzero count is tracked, so the mapping covers
        # all birth candidates.
        for index, cell in self._cells.items():
            neighbours = cell.neighbours
            total = neighbours.total

            if cell.is_alive:
                if total < 2 or total > 3:
                    dying.append(index)
                elif cell.state is State.SPAWNING:
                    maturing.append(index)
                continue

            if cell.state is State.DYING:
                dying.append(index)

            if total == 3:
                # The minority color reproduces.
                if neighbours.white < 2:
                    white_births.append(index)
                if neighbours.black < 2:
                    black_births.append(index)

        board = self.copy()
        for index in dying:
            board._die(index)
        for index in maturing:
            board._spawn_to_alive(index)
        for index in white_births:
            board._spawn(Color.WHITE, index)
        for index in black_births:
            board._spawn(Color.BLACK, index)
        board._compact()
        return board

    def copy(self) -> "Board":
        """Create an independent copy of this board."""
        return Board(self._cells)

    # In-place helpers; only ever applied to a fresh copy

    def _change_cell(self, color: Color, state: State, delta: NeighbourCounts, index: Index) -> None:
        cells = self._cells
        if delta != NO_DELTA:
            x, y = index
            for dx, dy in NEIGHBOUR_OFFSETS:
                neighbour = (x + dx, y + dy)
                current = cells.get(neighbour, DEAD_CELL)
                cells[neighbour] = current._replace(neighbours=current.neighbours + delta)

        current = cells.get(index, DEAD_CELL)
        cells[index] = current._replace(state=state, color=color)

    def _spawn(self, color: Color, index: Index) -> None:
        # Withdraw whatever the index already contributed so re-seeding a
        # live cell keeps the counts exact.
        delta = _COLOR_DELTAS[color] - self.get(index).contribution
        self._change_cell(color, State.SPAWNING, delta, index)

    def _spawn_to_alive(self, index: Index) -> None:
        self._change_cell(self.get(index).color, State.ALIVE, NO_DELTA, index)

    def _die(self, index: Index) -> None:
        cell = self.get(index)
        if cell.is_alive:
            self._change_cell(cell.color, State.DYING, -cell.contribution, index)
        else:
            self._change_cell(cell.color, State.DEAD, NO_DELTA, index)

    def _compact(self) -> None:
        self._cells = {
            index: cell
            for index, cell in self._cells.items()
            if cell.state is not State.DEAD or cell.total_neighbours != 0
        }

    def __eq__(self, other: object) -> bool:
        """Check if two boards hold the same cells."""
        if not isinstance(other, Board):
            return False
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board(population={self.population}, tracked={len(self._cells)})"

    def __str__(self) -> str:
        """ASCII rendering of the visible region.

        ``O``/``o`` are alive/spawning white, ``X``/``x`` alive/spawning
        black, ``-`` dying and ``.`` empty.
        """
        bbox = self.get_bounding_box()
        if bbox is None:
            return ""

        min_x, min_y, max_x, max_y = bbox
        result = []
        for y in range(min_y, max_y + 1):
            row = []
            for x in range(min_x, max_x + 1):
                cell = self.get((x, y))
                row.append(_GLYPHS.get((cell.state, cell.color), "."))
            result.append("".join(row))
        return "\n".join(result)


def spawn_white(index: Index, board: Board) -> Board:
    """Seed a white cell; see ``Board.spawn_white``."""
    return board.spawn_white(index)


def spawn_black(index: Index, board: Board) -> Board:
    """Seed a black cell; see ``Board.spawn_black``."""
    return board.spawn_black(index)


def evolve(board: Board) -> Board:
    """Advance ``board`` by one generation without modifying it."""
    return board.evolve()
