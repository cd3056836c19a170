"""Letter-drop game engine."""

from .constants import (
    COLUMNS,
    ROWS,
    DEFAULT_CURSOR,
    MIN_WORD_LENGTH,
    POINTS_PER_DELETE_CREDIT,
    STATUS_DURATION_MS,
    LETTER_FREQUENCIES,
    LETTER_VALUES,
)
from .models import (
    Coord,
    Cell,
    GameState,
    DropResult,
    SelectionResult,
    WordOutcome,
    DeleteResult,
    GameConfig,
    MoveRecord,
    SessionResult,
)
from .letters import LetterSource
from .grid import collapse, render_grid, is_adjacent, is_settled
from .game import LetterDropGame
from .commands import Command, CommandError, parse_command, parse_script
from .session import GameSession, build_validator

__all__ = [
    # Rules
    "COLUMNS",
    "ROWS",
    "DEFAULT_CURSOR",
    "MIN_WORD_LENGTH",
    "POINTS_PER_DELETE_CREDIT",
    "STATUS_DURATION_MS",
    "LETTER_FREQUENCIES",
    "LETTER_VALUES",
    # Models
    "Coord",
    "Cell",
    "GameState",
    "DropResult",
    "SelectionResult",
    "WordOutcome",
    "DeleteResult",
    "GameConfig",
    "MoveRecord",
    "SessionResult",
    # Engine
    "LetterSource",
    "LetterDropGame",
    "collapse",
    "render_grid",
    "is_adjacent",
    "is_settled",
    # Sessions
    "Command",
    "CommandError",
    "parse_command",
    "parse_script",
    "GameSession",
    "build_validator",
]
