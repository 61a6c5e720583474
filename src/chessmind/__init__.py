"""chessmind: chess rules engine with a minimax computer opponent."""

__version__ = "0.1.0"
