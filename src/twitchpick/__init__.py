"""
twitchpick - Pick a live Twitch stream from the terminal and watch it.

This package queries the Twitch API for top games, a game's streams or the
channels you follow, lets you choose one from an aligned table, and starts
streamlink on it.
"""

__version__ = "0.1.0"

from .api import TwitchClient
from .launcher import Launcher
from .player import StreamPlayer
from .selector import choose, render_table
from .types import Game, Listable, Stream

__all__ = [
    "Game",
    "Launcher",
    "Listable",
    "Stream",
    "StreamPlayer",
    "TwitchClient",
    "choose",
    "render_table",
]
