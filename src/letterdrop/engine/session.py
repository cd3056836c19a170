import json
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .commands import Command, parse_command
from .game import LetterDropGame
from .letters import LetterSource
from .models import GameConfig, MoveRecord, SessionResult
from ..lexicon import (
    AsyncWordList,
    WordValidator,
    default_word_list,
    load_word_list,
    load_word_list_async,
)


def build_validator(config: GameConfig) -> WordValidator:
    """Load the word list named by the config, in the background if requested."""
    if config.async_load:
        return load_word_list_async(config.word_list)
    if config.word_list:
        return load_word_list(config.word_list)
    return default_word_list()


class GameSession(BaseModel):
    """
    Drives a game from text commands.

    Parses each command, applies it to the game, and keeps a history of
    moves that can be saved as a JSON result.

    Attributes:
        game: The game being played
        config: Session configuration
        moves: History of applied commands
        end_reason: Why the session stopped
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    game: LetterDropGame
    config: GameConfig = Field(default_factory=GameConfig)
    moves: List[MoveRecord] = Field(default_factory=list)
    end_reason: str = ""
    started_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        validator: Optional[WordValidator] = None,
    ) -> "GameSession":
        """
        Factory method to create a session with a configured game.

        Args:
            config: Session configuration (defaults if None)
            validator: Word validator to use instead of the configured word list

        Returns:
            GameSession ready to accept commands
        """
        if config is None:
            config = GameConfig()
        if validator is None:
            validator = build_validator(config)

        game = LetterDropGame(validator=validator, letters=LetterSource(seed=config.seed))
        return cls(game=game, config=config, started_at=datetime.now())

    def wait_for_lexicon(self, timeout: Optional[float] = None) -> None:
        """Block until a background word list has loaded (no-op otherwise)."""
        if isinstance(self.game.validator, AsyncWordList):
            self.game.validator.wait(timeout=timeout)

    def _record(
        self,
        command: str,
        action: str,
        ok: bool,
        code: str,
        message: str = "",
        word: Optional[str] = None,
    ) -> MoveRecord:
        record = MoveRecord(
            move_number=len(self.moves) + 1,
            command=command,
            action=action,
            ok=ok,
            code=code,
            message=message,
            word=word,
            score=self.game.score,
            delete_credits=self.game.delete_credits,
            game_over=self.game.game_over,
        )
        self.moves.append(record)
        return record

    def _trace(self, command: Command) -> MoveRecord:
        """Select a whole path in one move: begin, extend through the cells, end."""
        first, rest = command.cells[0], command.cells[1:]
        result = self.game.begin_selection(first.col, first.row)
        if not result.ok:
            return self._record(command.raw, "trace", False, result.code, result.message)

        for cell in rest:
            step = self.game.extend_selection(cell.col, cell.row)
            if not step.ok:
                # A broken trace selects nothing
                self.game.clear_selection()
                return self._record(command.raw, "trace", False, step.code, step.message)
        self.game.end_selection()

        return self._record(command.raw, "trace", True, "SELECTED", word=self.game.selected_word)

    def apply(self, command: Command) -> MoveRecord:
        """Apply a parsed command to the game and record the outcome."""
        game = self.game
        name = command.name

        if name == "drop":
            if command.column is None:
                result = game.drop_at_cursor()
            else:
                result = game.drop(command.column)
            return self._record(command.raw, name, result.ok, result.code, result.message)

        if name in ("left", "right"):
            column = game.move_cursor(-1 if name == "left" else 1)
            return self._record(command.raw, name, True, "CURSOR_MOVED", f"Cursor at column {column}")

        if name == "select":
            result = game.begin_selection(command.column, command.row)
            return self._record(command.raw, name, result.ok, result.code, result.message)

        if name == "extend":
            result = game.extend_selection(command.column, command.row)
            return self._record(command.raw, name, result.ok, result.code, result.message)

        if name == "trace":
            return self._trace(command)

        if name == "end":
            result = game.end_selection()
            return self._record(command.raw, name, result.ok, result.code, word=game.selected_word)

        if name == "clear":
            result = game.clear_selection()
            return self._record(command.raw, name, result.ok, result.code)

        if name == "submit":
            outcome = game.submit()
            return self._record(
                command.raw, name, outcome.valid, outcome.code, outcome.message, word=outcome.word
            )

        if name == "delete":
            result = game.use_delete_credit()
            return self._record(command.raw, name, result.ok, result.code, result.message)

        if name == "reset":
            game.reset()
            self.end_reason = ""
            return self._record(command.raw, name, True, "RESET")

        raise ValueError(f"Unknown command: {name}")

    def execute(self, line: str) -> MoveRecord:
        """Parse and apply one line of input."""
        command, error = parse_command(line)
        if error:
            return self._record(line.strip(), "invalid", False, error.code, error.message)
        return self.apply(command)

    def run(
        self,
        lines: Optional[Iterable[str]] = None,
        on_move: Optional[Callable[[MoveRecord], None]] = None,
        verbose: bool = False,
    ) -> SessionResult:
        """
        Apply a sequence of command lines.

        Args:
            lines: Commands to run (the configured commands if None)
            on_move: Optional callback called after each move
            verbose: If True, print progress to stdout

        Returns:
            SessionResult for the session so far
        """
        if lines is None:
            lines = self.config.commands
        if self.started_at is None:
            self.started_at = datetime.now()

        if verbose:
            print(f"Active: {self.game.active_letter}  Next: {self.game.next_letter}")
            print(self.game.render())
            print("-" * 40)

        for line in lines:
            if not line.strip() or line.strip().startswith('#'):
                continue

            record = self.execute(line)

            if verbose:
                self.print_move(record)

            if on_move:
                on_move(record)

        if self.game.game_over:
            self.end_reason = "Game over: every column reached the top"
        elif not self.end_reason:
            self.end_reason = "Commands finished"

        if verbose:
            print("-" * 40)
            print(f"Session complete: {self.end_reason}")
            print(f"Score: {self.game.score}  Delete credits: {self.game.delete_credits}")

        return self.get_result()

    def print_move(self, record: MoveRecord) -> None:
        """Print one move, with the grid after moves that change it."""
        mark = "✓" if record.ok else "✗"
        line = f"{record.move_number:>3}. {record.command:<20} {mark} {record.code}"
        if record.word:
            line += f" '{record.word}'"
        print(line)
        if record.message and not record.ok:
            print(f"     {record.message}")

        if record.ok and record.action in ("drop", "submit", "delete", "reset"):
            print(f"     Score: {record.score}  Delete credits: {record.delete_credits}  "
                  f"Active: {self.game.active_letter}  Next: {self.game.next_letter}")
            print(self.game.render())
        if record.game_over and record.action == "drop" and record.ok:
            print("\n*** GAME OVER ***")

    def get_result(self) -> SessionResult:
        """
        Get the session result.

        Returns:
            SessionResult containing the full move history and final state
        """
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0

        words_found = [
            move.word for move in self.moves
            if move.action == "submit" and move.ok and move.word
        ]

        return SessionResult(
            config=self.config,
            total_moves=len(self.moves),
            end_reason=self.end_reason,
            words_found=words_found,
            moves=self.moves,
            final_state=self.game.snapshot(),
            grid=self.game.render(),
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the session result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(), f, indent=2, default=str)
