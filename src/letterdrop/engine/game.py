from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .constants import COLUMNS, DEFAULT_CURSOR, MIN_WORD_LENGTH
from .grid import (
    empty_grid,
    check_column,
    check_coord,
    lowest_empty_row,
    is_full,
    is_adjacent,
    collapse,
    letters_at,
    word_score,
    credits_earned,
    render_grid,
)
from .letters import LetterSource
from .models import (
    Coord,
    GameState,
    DropResult,
    SelectionResult,
    WordOutcome,
    DeleteResult,
)
from ..lexicon import WordValidator, default_word_list


class LetterDropGame(BaseModel):
    """
    The letter-drop game engine.

    Letters are dropped into columns, adjacent letters are selected into a
    path and submitted as a word. Valid words score points, remove their
    letters (the columns above fall down) and earn delete credits every ten
    points. The game is over once every column reaches the top row.

    All state lives in a private GameState and changes only through the
    command methods; `snapshot()` hands out copies.

    Attributes:
        validator: Dictionary used to check submitted words
        letters: Source of new letters
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    validator: WordValidator
    letters: LetterSource = Field(default_factory=LetterSource)
    _state: GameState = None

    def model_post_init(self, __context) -> None:
        """Start a fresh game after model creation."""
        self.reset()

    @classmethod
    def create(
        cls,
        validator: Optional[WordValidator] = None,
        seed: Optional[int] = None,
    ) -> "LetterDropGame":
        """
        Factory method to create a game with the standard letter distribution.

        Args:
            validator: Dictionary to check words against (bundled list if None)
            seed: Optional random seed for reproducible letters

        Returns:
            A new game ready to play
        """
        if validator is None:
            validator = default_word_list()
        return cls(validator=validator, letters=LetterSource(seed=seed))

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    def snapshot(self) -> GameState:
        """A deep copy of the current state."""
        return self._state.model_copy(deep=True)

    @property
    def grid(self) -> List[List[Optional[str]]]:
        return [list(column) for column in self._state.grid]

    @property
    def active_letter(self) -> str:
        return self._state.active_letter

    @property
    def next_letter(self) -> str:
        return self._state.next_letter

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def delete_credits(self) -> int:
        return self._state.delete_credits

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def path(self) -> List[Coord]:
        return list(self._state.path)

    @property
    def selecting(self) -> bool:
        return self._state.selecting

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @property
    def last_outcome(self) -> Optional[WordOutcome]:
        return self._state.last_outcome

    @property
    def validator_ready(self) -> bool:
        """Whether the dictionary has loaded and words can be submitted."""
        return self.validator.ready()

    @property
    def selected_word(self) -> str:
        """The lowercase word spelled by the current path."""
        return ''.join(letters_at(self._state.grid, self._state.path)).lower()

    def cell(self, col: int, row: int) -> Optional[str]:
        check_coord(col, row)
        return self._state.grid[col][row]

    def render(self) -> str:
        """Text rendering of the grid with the current selection in lowercase."""
        return render_grid(self._state.grid, self._state.path)

    # ------------------------------------------------------------------
    # Dropping letters
    # ------------------------------------------------------------------

    def drop(self, column: int) -> DropResult:
        """
        Drop the active letter into a column.

        The letter lands in the lowest empty slot. The next letter becomes
        active and a new next letter is drawn.

        Raises:
            ValueError: If the column is off the grid
        """
        check_column(column)
        state = self._state

        if state.game_over:
            return DropResult(ok=False, code="GAME_OVER", message="Game is over", column=column)

        row = lowest_empty_row(state.grid[column])
        if row is None:
            return DropResult(
                ok=False,
                code="COLUMN_FULL",
                message=f"Column {column} is full",
                column=column,
            )

        letter = state.active_letter
        state.grid[column][row] = letter
        state.active_letter = state.next_letter
        state.next_letter = self.letters.draw()
        state.game_over = is_full(state.grid)

        return DropResult(ok=True, code="DROPPED", column=column, row=row, letter=letter)

    def move_cursor(self, step: int) -> int:
        """Move the drop cursor left (negative) or right, clamped to the grid."""
        self._state.cursor = min(COLUMNS - 1, max(0, self._state.cursor + step))
        return self._state.cursor

    def drop_at_cursor(self) -> DropResult:
        """Drop the active letter into the column under the cursor."""
        return self.drop(self._state.cursor)

    # ------------------------------------------------------------------
    # Selecting a word
    # ------------------------------------------------------------------

    def begin_selection(self, col: int, row: int) -> SelectionResult:
        """Start a new path at a letter."""
        check_coord(col, row)
        state = self._state

        if state.grid[col][row] is None:
            return SelectionResult(
                ok=False,
                code="EMPTY_CELL",
                message=f"No letter at ({col}, {row})",
                path=list(state.path),
            )

        state.path = [Coord(col, row)]
        state.selecting = True
        return SelectionResult(ok=True, code="SELECTED", path=list(state.path))

    def extend_selection(self, col: int, row: int) -> SelectionResult:
        """
        Add a letter to the path.

        Ignored unless a selection is in progress and the cell holds a
        letter, is not already in the path and touches the last cell of
        the path (diagonals count).
        """
        check_coord(col, row)
        state = self._state
        target = Coord(col, row)

        reason = None
        if not state.selecting or not state.path:
            reason = "No selection in progress"
        elif state.grid[col][row] is None:
            reason = f"No letter at ({col}, {row})"
        elif target in state.path:
            reason = f"({col}, {row}) is already selected"
        elif not is_adjacent(state.path[-1], target):
            reason = f"({col}, {row}) is not adjacent to the last selected letter"

        if reason:
            return SelectionResult(ok=False, code="IGNORED", message=reason, path=list(state.path))

        state.path.append(target)
        return SelectionResult(ok=True, code="EXTENDED", path=list(state.path))

    def end_selection(self) -> SelectionResult:
        """Stop extending; the path is kept for submission."""
        self._state.selecting = False
        return SelectionResult(ok=True, code="ENDED", path=list(self._state.path))

    def clear_selection(self) -> SelectionResult:
        self._state.path = []
        self._state.selecting = False
        return SelectionResult(ok=True, code="CLEARED")

    # ------------------------------------------------------------------
    # Submitting words and spending credits
    # ------------------------------------------------------------------

    def submit(self) -> WordOutcome:
        """
        Submit the selected path as a word.

        Refused without touching the selection while the dictionary is
        loading or failed to load, and once the game is over. Otherwise a
        word shorter than three letters or missing from the dictionary is
        invalid; a valid word scores the sum of its letter values, earns
        delete credits and removes its letters. The selection is cleared
        either way.
        """
        state = self._state

        # Background word lists expose the exception their load failed with
        load_error = getattr(self.validator, "error", None)
        if load_error is not None:
            return WordOutcome(
                valid=False,
                code="VALIDATOR_FAILED",
                message=f"Dictionary failed to load: {load_error}",
                word=self.selected_word,
            )

        if not self.validator.ready():
            return WordOutcome(
                valid=False,
                code="VALIDATOR_NOT_READY",
                message="Dictionary is still loading",
                word=self.selected_word,
            )

        if state.game_over:
            return WordOutcome(
                valid=False,
                code="GAME_OVER",
                message="Game is over",
                word=self.selected_word,
            )

        word = self.selected_word
        path = list(state.path)

        if len(path) < MIN_WORD_LENGTH:
            outcome = WordOutcome(
                valid=False,
                code="SELECTION_TOO_SHORT",
                message=f"Words need at least {MIN_WORD_LENGTH} letters",
                word=word,
                status="invalid",
            )
        elif not self.validator.is_valid(word):
            outcome = WordOutcome(
                valid=False,
                code="WORD_NOT_FOUND",
                message=f"'{word}' is not in the dictionary",
                word=word,
                status="invalid",
            )
        else:
            points = word_score(letters_at(state.grid, path))
            old_score = state.score
            state.score = old_score + points
            awarded = credits_earned(old_score, state.score)
            state.delete_credits += awarded
            state.grid = collapse(state.grid, path)
            outcome = WordOutcome(
                valid=True,
                code="VALID_WORD",
                word=word,
                word_score=points,
                credits_awarded=awarded,
                status="valid",
            )

        state.path = []
        state.selecting = False
        state.last_outcome = outcome
        return outcome

    def use_delete_credit(self) -> DeleteResult:
        """Spend a delete credit to remove the single selected letter."""
        state = self._state

        if state.game_over:
            return DeleteResult(ok=False, code="GAME_OVER", message="Game is over")

        if state.delete_credits <= 0:
            return DeleteResult(
                ok=False,
                code="NO_DELETE_CREDITS",
                message="No delete credits left",
            )

        if len(state.path) != 1:
            return DeleteResult(
                ok=False,
                code="INVALID_SELECTION_FOR_DELETE",
                message=f"Select exactly one letter to delete (selected {len(state.path)})",
            )

        coord = state.path[0]
        letter = state.grid[coord.col][coord.row]
        if letter is None:
            return DeleteResult(
                ok=False,
                code="INVALID_SELECTION_FOR_DELETE",
                message=f"No letter at ({coord.col}, {coord.row})",
                coord=coord,
            )

        state.grid = collapse(state.grid, [coord])
        state.delete_credits -= 1
        state.path = []
        state.selecting = False
        return DeleteResult(ok=True, code="DELETED", coord=coord, letter=letter)

    def reset(self) -> None:
        """Start a new game: empty grid, zero score and credits, two fresh letters."""
        self._state = GameState(
            grid=empty_grid(),
            active_letter=self.letters.draw(),
            next_letter=self.letters.draw(),
            cursor=DEFAULT_CURSOR,
        )
