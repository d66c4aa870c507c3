"""Abstract interfaces and state enums for the game layer.

The :class:`~chessrules.game.state.GameState` machine depends on
:class:`IPlayer`, not on concrete human or policy players.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessrules.core.enums import Color

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.core.position import Position


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """SETUP -> IN_PROGRESS -> FINISHED; ``reset`` returns to SETUP."""

    SETUP = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()

    def __str__(self) -> str:
        return self.name.lower()


class GameMode(IntEnum):
    HUMAN_VS_HUMAN = auto()
    HUMAN_VS_POLICY = auto()

    def __str__(self) -> str:
        return self.name.lower()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """A game participant (human or policy)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def choose_move(self, position: Position) -> Move | None:
        """Pick a move in *position*.

        Humans return ``None``: their moves arrive through
        ``GameState.submit_move``. Policy players answer synchronously.
        """
