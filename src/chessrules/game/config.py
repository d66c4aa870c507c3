"""Game configuration held while a game is in setup."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color
from chessrules.game.interfaces import GameMode, IPlayer
from chessrules.game.player import HumanPlayer, PolicyPlayer
from chessrules.policy.random_policy import RandomPolicy


@dataclass(slots=True, frozen=True)
class GameConfig:
    """Who plays which side.

    Args:
        mode: Human against human, or human against a policy.
        human_color: The human's side in a policy game; ignored otherwise.
        seed: Seed of the random policy, for reproducible games.
        white_name: Display name for white ("" picks a default).
        black_name: Display name for black.
    """

    mode: GameMode = GameMode.HUMAN_VS_HUMAN
    human_color: Color = Color.WHITE
    seed: int | None = None
    white_name: str = ""
    black_name: str = ""

    # Common presets
    @classmethod
    def human_vs_human(cls) -> GameConfig:
        return cls(GameMode.HUMAN_VS_HUMAN)

    @classmethod
    def human_vs_policy(
        cls, human_color: Color = Color.WHITE, seed: int | None = None
    ) -> GameConfig:
        return cls(GameMode.HUMAN_VS_POLICY, human_color=human_color, seed=seed)

    def build_players(self) -> tuple[IPlayer, IPlayer]:
        """(white, black) players for this configuration."""
        names = {Color.WHITE: self.white_name, Color.BLACK: self.black_name}
        players: dict[Color, IPlayer] = {}
        for color in Color:
            if self.mode == GameMode.HUMAN_VS_POLICY and color != self.human_color:
                players[color] = PolicyPlayer(
                    color, RandomPolicy(self.seed), names[color] or "Computer"
                )
            else:
                players[color] = HumanPlayer(color, names[color])
        return players[Color.WHITE], players[Color.BLACK]
