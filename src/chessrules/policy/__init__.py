"""Opponent policies and their Qt worker bridge."""

from chessrules.policy.base import OpponentPolicy
from chessrules.policy.random_policy import RandomPolicy

__all__ = [
    "OpponentPolicy",
    "RandomPolicy",
]
