"""Non-interactive players."""

from .random_agent import RandomPlayer
from .scripted import ScriptedPlayer

__all__ = ["RandomPlayer", "ScriptedPlayer"]
