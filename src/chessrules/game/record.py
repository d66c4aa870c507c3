"""Game history: the start position and every (move, resulting position)."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from chessrules.core.move import Move
from chessrules.core.position import Position


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    position: Position
    was_capture: bool = False
    was_check: bool = False

    @classmethod
    def build(cls, before: Position, move: Move, after: Position) -> MoveRecord:
        return cls(
            move=move,
            position=after,
            was_capture=move.is_en_passant or not before.board.is_empty(move.to_sq),
            was_check=after.is_in_check(),
        )


@dataclass
class GameRecord:
    """Ordered history of a game, append-only during play."""

    start: Position = field(default_factory=Position.initial)
    entries: list[MoveRecord] = field(default_factory=list)

    def append(self, record: MoveRecord) -> None:
        self.entries.append(record)

    def pop(self) -> MoveRecord:
        return self.entries.pop()

    @property
    def current(self) -> Position:
        """Position after the last recorded move."""
        return self.entries[-1].position if self.entries else self.start

    def moves(self) -> list[Move]:
        return [entry.move for entry in self.entries]

    def uci_moves(self) -> list[str]:
        """Coordinate text of each move, e.g. ``["e2e4", "e7e5"]``."""
        return [entry.move.uci for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[MoveRecord]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> MoveRecord:
        return self.entries[index]
