"""Board, evolution rules and seed patterns."""

from .board import Board, Cell, Color, NeighbourCounts, State, evolve, spawn_black, spawn_white
from .game import AvatarLife
from .neighbours import BoardConsistencyError, count_neighbours, is_consistent
from .patterns import Pattern, PatternLibrary, avatar, glider, random_soup

__all__ = [
    "Board",
    "Cell",
    "Color",
    "NeighbourCounts",
    "State",
    "evolve",
    "spawn_black",
    "spawn_white",
    "AvatarLife",
    "BoardConsistencyError",
    "count_neighbours",
    "is_consistent",
    "Pattern",
    "PatternLibrary",
    "avatar",
    "glider",
    "random_soup",
]
