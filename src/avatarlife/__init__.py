"""Two-color Game of Life engine behind an animated avatar."""

__version__ = "0.1.0"

from .core.board import Board, Cell, Color, State, evolve
from .core.game import AvatarLife
from .core.patterns import Pattern, PatternLibrary, avatar, glider

__all__ = ["Board", "Cell", "Color", "State", "evolve", "AvatarLife", "Pattern", "PatternLibrary", "avatar", "glider"]
