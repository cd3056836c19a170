"""Grid helpers: drop slots, gravity collapse, adjacency and rendering."""

from typing import Iterable, List, Optional, Sequence

from .constants import COLUMNS, ROWS, BOTTOM_ROW, LETTER_VALUES, POINTS_PER_DELETE_CREDIT
from .models import Cell, Coord


def empty_grid() -> List[List[Cell]]:
    """Create an empty grid, one list per column."""
    return [[None] * ROWS for _ in range(COLUMNS)]


def in_bounds(col: int, row: int) -> bool:
    """Check that a coordinate lies on the grid."""
    return 0 <= col < COLUMNS and 0 <= row < ROWS


def check_column(col: int) -> None:
    """Raise ValueError if `col` is not a grid column."""
    if not 0 <= col < COLUMNS:
        raise ValueError(f"Column {col} out of range (0-{COLUMNS - 1})")


def check_coord(col: int, row: int) -> None:
    """Raise ValueError if (col, row) is not on the grid."""
    if not in_bounds(col, row):
        raise ValueError(f"Cell ({col}, {row}) is off the {COLUMNS}x{ROWS} grid")


def lowest_empty_row(column: Sequence[Cell]) -> Optional[int]:
    """Find the lowest empty slot in a column, scanning up from the bottom row."""
    row = BOTTOM_ROW
    while row >= 0 and column[row] is not None:
        row -= 1
    return row if row >= 0 else None


def is_full(grid: Sequence[Sequence[Cell]]) -> bool:
    """The grid is full when every column has a letter in its top row."""
    return all(column[0] is not None for column in grid)


def is_adjacent(a: Coord, b: Coord) -> bool:
    """True if two cells touch, diagonals included."""
    return max(abs(a.col - b.col), abs(a.row - b.row)) <= 1


def is_settled(column: Sequence[Cell]) -> bool:
    """True if no letter in the column sits above an empty cell."""
    seen_letter = False
    for cell in column:
        if cell is not None:
            seen_letter = True
        elif seen_letter:
            return False
    return True


def collapse(grid: Sequence[Sequence[Cell]], coords: Iterable[Coord]) -> List[List[Cell]]:
    """
    Remove the given cells and let each affected column fall.

    Returns a new grid. Remaining letters in a column keep their relative
    order and settle at the bottom; emptied slots are padded at the top.
    """
    removed: dict[int, set[int]] = {}
    for coord in coords:
        removed.setdefault(coord.col, set()).add(coord.row)

    new_grid = [list(column) for column in grid]
    for col, rows in removed.items():
        remaining = [
            cell for row, cell in enumerate(new_grid[col])
            if row not in rows and cell is not None
        ]
        new_grid[col] = [None] * (ROWS - len(remaining)) + remaining

    return new_grid


def letters_at(grid: Sequence[Sequence[Cell]], path: Iterable[Coord]) -> List[str]:
    """Letters along a path, skipping empty cells."""
    letters = []
    for coord in path:
        cell = grid[coord.col][coord.row]
        if cell is not None:
            letters.append(cell)
    return letters


def word_score(letters: Iterable[str]) -> int:
    """Sum the letter values of a word."""
    return sum(LETTER_VALUES[letter.upper()] for letter in letters)


def credits_earned(old_score: int, new_score: int) -> int:
    """Delete credits granted when the score moves from old_score to new_score."""
    return new_score // POINTS_PER_DELETE_CREDIT - old_score // POINTS_PER_DELETE_CREDIT


def render_grid(grid: Sequence[Sequence[Cell]], path: Iterable[Coord] = ()) -> str:
    """
    Render the grid to a string, top row first.

    Empty cells are shown as '.', selected cells in lowercase.
    """
    selected = set(path)
    lines = [' '.join(str(col) for col in range(COLUMNS))]

    for row in range(ROWS):
        cells = []
        for col in range(COLUMNS):
            cell = grid[col][row]
            if cell is None:
                cells.append('.')
            elif Coord(col, row) in selected:
                cells.append(cell.lower())
            else:
                cells.append(cell)
        lines.append(' '.join(cells))

    return '\n'.join(lines)
