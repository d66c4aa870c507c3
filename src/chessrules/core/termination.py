"""Termination status of a game."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, TerminationKind

_DRAWS = frozenset(
    {
        TerminationKind.STALEMATE,
        TerminationKind.DRAW_BY_FIFTY_MOVE,
        TerminationKind.DRAW_BY_INSUFFICIENT_MATERIAL,
    }
)


@dataclass(frozen=True, slots=True)
class Termination:
    """Why the game stands where it does.

    ``color`` is the winner for checkmate and the resigning side for
    resignation; it is ``None`` for every other kind.
    """

    kind: TerminationKind = TerminationKind.IN_PROGRESS
    color: Color | None = None

    def __post_init__(self) -> None:
        needs_color = self.kind in (TerminationKind.CHECKMATE, TerminationKind.RESIGNED)
        if needs_color != (self.color is not None):
            raise ValueError(f"{self.kind} termination with color={self.color}")

    # ── Constructors ─────────────────────────────────────────────────────

    @classmethod
    def in_progress(cls) -> Termination:
        return cls()

    @classmethod
    def checkmate(cls, winner: Color) -> Termination:
        return cls(TerminationKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> Termination:
        return cls(TerminationKind.STALEMATE)

    @classmethod
    def draw_by_fifty_move(cls) -> Termination:
        return cls(TerminationKind.DRAW_BY_FIFTY_MOVE)

    @classmethod
    def draw_by_insufficient_material(cls) -> Termination:
        return cls(TerminationKind.DRAW_BY_INSUFFICIENT_MATERIAL)

    @classmethod
    def resigned(cls, by: Color) -> Termination:
        return cls(TerminationKind.RESIGNED, by)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_over(self) -> bool:
        return self.kind != TerminationKind.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.kind in _DRAWS

    @property
    def winner(self) -> Color | None:
        if self.kind == TerminationKind.CHECKMATE:
            return self.color
        if self.kind == TerminationKind.RESIGNED:
            assert self.color is not None
            return self.color.opposite
        return None

    def __str__(self) -> str:
        if self.kind == TerminationKind.CHECKMATE:
            return f"checkmate, {self.color} wins"
        if self.kind == TerminationKind.RESIGNED:
            return f"{self.color} resigned"
        return str(self.kind).replace("_", " ")
