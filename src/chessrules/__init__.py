"""Standard chess rules engine: positions, legal moves, game state."""

__version__ = "0.1.0"
