"""Tests for the Pattern and PatternLibrary classes."""

from avatarlife.core.board import Board, Color, State
from avatarlife.core.patterns import (
    AVATAR_BLACK,
    AVATAR_WHITE,
    GLIDER,
    Pattern,
    PatternLibrary,
    avatar,
    glider,
    random_soup,
)


class TestPattern:
    """Test cases for the Pattern class."""

    def test_initialization(self):
        """Test pattern initialization."""
        pattern = Pattern("Duel", [(0, 0), (1, 0)], [(0, 2)], "Two colors")

        assert pattern.name == "Duel"
        assert pattern.white_cells == [(0, 0), (1, 0)]
        assert pattern.black_cells == [(0, 2)]
        assert pattern.cells == [(0, 0), (1, 0), (0, 2)]
        assert pattern.population == 3
        assert pattern.description == "Two colors"

    def test_apply_to_board(self):
        """Test applying a pattern spawns both colors."""
        pattern = Pattern("Duel", [(0, 0), (1, 0)], [(0, 2)])
        board = pattern.apply_to_board(Board())

        assert board.get((0, 0)).state is State.SPAWNING
        assert board.get((0, 0)).color is Color.WHITE
        assert board.get((0, 2)).color is Color.BLACK
        assert board.population == 3

    def test_apply_to_board_with_offset(self):
        """Test applying a pattern with an offset."""
        board = Pattern("Blinker", [(0, 0), (1, 0), (2, 0)]).apply_to_board(Board(), offset_x=5, offset_y=-3)

        assert set(board.live_cells()) == {(5, -3), (6, -3), (7, -3)}

    def test_apply_does_not_modify_board(self):
        """Test the input board is left untouched."""
        board = Board()
        Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)]).apply_to_board(board)
        assert len(board) == 0

    def test_bounding_box_and_size(self):
        """Test bounding box and size."""
        pattern = Pattern("Test", [(1, 2), (4, 3)], [(2, 6)])

        assert pattern.get_bounding_box() == (1, 2, 4, 6)
        assert pattern.get_size() == (4, 5)

    def test_empty_pattern(self):
        """Test an empty pattern."""
        pattern = Pattern("Empty", [])

        assert pattern.get_bounding_box() == (0, 0, 0, 0)
        assert pattern.apply_to_board(Board()) == Board()

    def test_normalize(self):
        """Test normalizing moves the pattern to the origin."""
        normalized = Pattern("Test", [(5, 7)], [(6, 9)]).normalize()

        assert normalized.white_cells == [(0, 0)]
        assert normalized.black_cells == [(1, 2)]
        assert normalized.name == "Test"


class TestSeedHelpers:
    """Test cases for glider, avatar and random_soup."""

    def test_glider(self):
        """Test the glider seeds five white cells."""
        board = glider(Board())

        assert set(board.live_cells()) == set(GLIDER)
        assert board.color_populations() == (5, 0)

    def test_avatar(self):
        """Test the avatar seeds both color lists."""
        board = avatar(Board())

        assert board.color_populations() == (len(AVATAR_WHITE), len(AVATAR_BLACK))
        assert board.get((2, 0)).color is Color.WHITE
        assert board.get((3, 2)).color is Color.BLACK

    def test_avatar_offset(self):
        """Test the avatar can be translated."""
        board = avatar(Board(), (10, 20))

        assert board.get((12, 20)).color is Color.WHITE
        assert board.get((13, 22)).color is Color.BLACK
        assert board.get((2, 0)).state is State.DEAD

    def test_avatar_lists_disjoint(self):
        """Test no coordinate is seeded in both colors."""
        assert not set(AVATAR_WHITE) & set(AVATAR_BLACK)

    def test_random_soup_reproducible(self):
        """Test the same seed gives the same soup."""
        first = random_soup(20, 10, 0.3, seed=42)
        second = random_soup(20, 10, 0.3, seed=42)

        assert first.white_cells == second.white_cells
        assert first.black_cells == second.black_cells

    def test_random_soup_bounds(self):
        """Test soup cells lie inside the requested area and do not overlap."""
        soup = random_soup(8, 5, 0.5, seed=1)

        assert not set(soup.white_cells) & set(soup.black_cells)
        for x, y in soup.cells:
            assert 0 <= x < 8
            assert 0 <= y < 5

    def test_random_soup_extremes(self):
        """Test zero and full fill rates."""
        assert random_soup(6, 6, 0.0, seed=0).population == 0
        assert random_soup(6, 6, 1.0, seed=0).population == 36


class TestPatternLibrary:
    """Test cases for the PatternLibrary class."""

    def test_builtin_patterns(self):
        """Test built-in patterns are available."""
        library = PatternLibrary()
        patterns = library.list_patterns()

        for name in ["Avatar", "Block", "Beehive", "Blinker", "Toad", "Glider", "Duel"]:
            assert name in patterns

    def test_get_pattern(self):
        """Test getting patterns by name."""
        library = PatternLibrary()

        glider_pattern = library.get_pattern("Glider")
        assert glider_pattern is not None
        assert glider_pattern.white_cells == GLIDER
        assert library.get_pattern("Missing") is None

    def test_add_pattern(self):
        """Test adding a custom pattern."""
        library = PatternLibrary()
        library.add_pattern(Pattern("Custom", [(0, 0)]))

        assert library.get_pattern("Custom") is not None
        assert library.get_patterns_by_category()["Custom"] == ["Custom"]

    def test_categories(self):
        """Test patterns are organized by category."""
        categories = PatternLibrary().get_patterns_by_category()

        assert categories["Avatars"] == ["Avatar"]
        assert "Glider" in categories["Spaceships"]
        assert "Custom" not in categories

    def test_builtins_seed_expected_colors(self):
        """Test every built-in seeds its own cells with the right colors."""
        library = PatternLibrary()
        single_color = ["Block", "Beehive", "Blinker", "Toad", "Glider"]

        for name in library.list_patterns():
            pattern = library.get_pattern(name)
            board = pattern.apply_to_board(Board())

            assert board.population == pattern.population
            assert board.color_populations() == (len(pattern.white_cells), len(pattern.black_cells))
            assert pattern.description

        for name in single_color:
            pattern = library.get_pattern(name)
            assert pattern.black_cells == []
            white, black = pattern.apply_to_board(Board()).color_populations()
            assert (white, black) == (pattern.population, 0)
