"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color
from chessrules.game.interfaces import IPlayer
from chessrules.policy.random_policy import RandomPolicy

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.core.position import Position
    from chessrules.policy.base import OpponentPolicy


class HumanPlayer(IPlayer):
    """A human participant; moves come from the UI or a remote peer."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def choose_move(self, position: Position) -> Move | None:
        return None


class PolicyPlayer(IPlayer):
    """A computer participant that delegates to an :class:`OpponentPolicy`.

    Args:
        color: Side the policy plays.
        policy: Move-selection strategy; a fresh :class:`RandomPolicy` if
            omitted.
        name: Display name.
    """

    __slots__ = ("_color", "_name", "_policy")

    def __init__(
        self,
        color: Color,
        policy: OpponentPolicy | None = None,
        name: str = "Computer",
    ) -> None:
        self._color = color
        self._policy: OpponentPolicy = policy if policy is not None else RandomPolicy()
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def policy(self) -> OpponentPolicy:
        return self._policy

    def choose_move(self, position: Position) -> Move:
        return self._policy.select_move(position)
