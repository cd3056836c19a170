"""Command parsing for scripted and interactive play."""

import re
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, Field

from .constants import COLUMNS, ROWS
from .grid import in_bounds
from .models import Coord


CommandName = Literal[
    "drop", "left", "right", "select", "extend", "end",
    "clear", "submit", "delete", "reset", "trace",
]

_SIMPLE = r'^(left|right|end|clear|submit|delete|reset)$'
_DROP = r'^drop(?:\s+(\d+))?$'
_CELL = r'^(select|extend)\s+(\d+)\s*[,\s]\s*(\d+)$'
_TRACE = r'^trace((?:\s+\d+\s*,\s*\d+)+)$'


class Command(BaseModel):
    """A single parsed command."""
    name: CommandName
    column: Optional[int] = Field(None, ge=0)
    row: Optional[int] = Field(None, ge=0)
    cells: List[Coord] = Field(default_factory=list)  # Only for trace
    raw: str = ""


class CommandError(BaseModel):
    """A line that could not be parsed."""
    code: str
    message: str
    line: Optional[int] = None


def _off_grid(cells: List[Coord], raw: str, line: Optional[int]) -> Optional[CommandError]:
    for cell in cells:
        if not in_bounds(cell.col, cell.row):
            return CommandError(
                code="OFF_GRID",
                message=f"Cell ({cell.col}, {cell.row}) is off the {COLUMNS}x{ROWS} grid: '{raw}'",
                line=line,
            )
    return None


def parse_command(
    text: str,
    line: Optional[int] = None,
) -> Tuple[Optional[Command], Optional[CommandError]]:
    """
    Parse one command line.

    Returns a tuple of (command, error); exactly one of them is set.
    """
    raw = text.strip()
    lowered = ' '.join(raw.lower().split())

    if not lowered:
        return None, CommandError(code="EMPTY_COMMAND", message="Command is empty", line=line)

    match = re.match(_SIMPLE, lowered)
    if match:
        return Command(name=match.group(1), raw=raw), None

    match = re.match(_DROP, lowered)
    if match:
        if match.group(1) is None:
            return Command(name="drop", raw=raw), None
        column = int(match.group(1))
        if column >= COLUMNS:
            return None, CommandError(
                code="OFF_GRID",
                message=f"Column {column} out of range (0-{COLUMNS - 1}): '{raw}'",
                line=line,
            )
        return Command(name="drop", column=column, raw=raw), None

    match = re.match(_CELL, lowered)
    if match:
        cell = Coord(int(match.group(2)), int(match.group(3)))
        error = _off_grid([cell], raw, line)
        if error:
            return None, error
        return Command(name=match.group(1), column=cell.col, row=cell.row, raw=raw), None

    match = re.match(_TRACE, lowered)
    if match:
        cells = [
            Coord(int(col), int(row))
            for col, row in re.findall(r'(\d+)\s*,\s*(\d+)', match.group(1))
        ]
        error = _off_grid(cells, raw, line)
        if error:
            return None, error
        return Command(name="trace", cells=cells, raw=raw), None

    return None, CommandError(
        code="INVALID_COMMAND",
        message=f"Invalid command: '{raw}'",
        line=line,
    )


def parse_script(text: str) -> Tuple[List[Command], List[CommandError]]:
    """
    Parse a script of commands, one per line.

    Blank lines and lines starting with '#' are skipped.
    Returns a tuple of (commands, errors).
    """
    commands: List[Command] = []
    errors: List[CommandError] = []

    for i, line in enumerate(text.split('\n'), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue

        command, error = parse_command(stripped, line=i)
        if error:
            errors.append(error)
        else:
            commands.append(command)

    return commands, errors
