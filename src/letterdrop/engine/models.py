"""
Pydantic models for the game engine and session layer.

This module contains the data models (state snapshots, command outcomes,
session records, configuration) used throughout the engine. The logic lives
in game.py, grid.py and session.py.
"""

from typing import Annotated, List, Optional, Literal, NamedTuple
from pydantic import BaseModel, Field

from .constants import DEFAULT_CURSOR, STATUS_DURATION_MS


# Type aliases
Letter = Annotated[str, Field(pattern=r'^[A-Z]$')]
Cell = Optional[str]  # None is an empty cell, otherwise one uppercase letter
Status = Literal["valid", "invalid"]

DropCode = Literal["DROPPED", "COLUMN_FULL", "GAME_OVER"]
SelectionCode = Literal["SELECTED", "EXTENDED", "ENDED", "CLEARED", "EMPTY_CELL", "IGNORED"]
WordCode = Literal[
    "VALID_WORD",
    "SELECTION_TOO_SHORT",
    "WORD_NOT_FOUND",
    "VALIDATOR_NOT_READY",
    "VALIDATOR_FAILED",
    "GAME_OVER",
]
DeleteCode = Literal["DELETED", "NO_DELETE_CREDITS", "INVALID_SELECTION_FOR_DELETE", "GAME_OVER"]


class Coord(NamedTuple):
    """A grid coordinate; row 0 is the top of the column."""
    col: int
    row: int


class DropResult(BaseModel):
    """Result of dropping the active letter into a column."""
    ok: bool
    code: DropCode
    message: str = ""
    column: int
    row: Optional[int] = None
    letter: Optional[str] = None


class SelectionResult(BaseModel):
    """Result of a selection command."""
    ok: bool
    code: SelectionCode
    message: str = ""
    path: List[Coord] = Field(default_factory=list)


class WordOutcome(BaseModel):
    """
    Outcome of submitting the selected path as a word.

    `status` is the transient valid/invalid flash for the presentation layer,
    which should clear it after `status_duration_ms`. Refused submissions
    (validator not ready, game over) carry no status.
    """
    valid: bool
    code: WordCode
    message: str = ""
    word: str = ""
    word_score: int = 0
    credits_awarded: int = 0
    status: Optional[Status] = None
    status_duration_ms: int = STATUS_DURATION_MS


class DeleteResult(BaseModel):
    """Result of spending a delete credit."""
    ok: bool
    code: DeleteCode
    message: str = ""
    coord: Optional[Coord] = None
    letter: Optional[str] = None


class GameState(BaseModel):
    """Complete state of one game, stored column-major as grid[col][row]."""
    grid: List[List[Cell]]
    active_letter: Letter
    next_letter: Letter
    score: int = Field(default=0, ge=0)
    delete_credits: int = Field(default=0, ge=0)
    game_over: bool = False
    path: List[Coord] = Field(default_factory=list)
    selecting: bool = False
    cursor: int = DEFAULT_CURSOR
    last_outcome: Optional[WordOutcome] = None


class GameConfig(BaseModel):
    """Configuration for a game session."""
    seed: Optional[int] = None
    word_list: Optional[str] = None  # Path to a word list; bundled list if unset
    async_load: bool = False
    commands: List[str] = Field(default_factory=list)
    output: Optional[str] = None


class MoveRecord(BaseModel):
    """One command applied during a session."""
    move_number: int
    command: str
    action: str
    ok: bool
    code: str
    message: str = ""
    word: Optional[str] = None
    score: int = 0
    delete_credits: int = 0
    game_over: bool = False


class SessionResult(BaseModel):
    """Result of a complete session."""
    config: GameConfig
    total_moves: int = 0
    end_reason: str = ""
    words_found: List[str] = Field(default_factory=list)
    moves: List[MoveRecord] = Field(default_factory=list)
    final_state: Optional[GameState] = None
    grid: str = ""
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
