"""Compose API queries, selection and playback into the four watch flows."""

import logging
import subprocess
import sys
from typing import TextIO

from .api import TwitchClient
from .errors import InfoOnly, NoResults, NotFound
from .normalizer import (
    normalize_games,
    normalize_single_stream,
    normalize_streams,
    normalize_user_id,
)
from .player import StreamPlayer
from .selector import choose, print_table
from .types import DEFAULT_LIMIT, Game, Stream

logger = logging.getLogger(__name__)


class Launcher:
    """
    Runs one watch flow per invocation.

    Every flow returns the started player process or raises the first failure
    it meets. Nothing is retried and nothing is cached between flows.

    Attributes:
        client: API client used for all lookups.
        player: Player used to start the chosen stream.
        limit: Maximum number of entries requested per listing.
    """

    def __init__(
        self,
        client: TwitchClient,
        player: StreamPlayer,
        limit: int = DEFAULT_LIMIT,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.client = client
        self.player = player
        self.limit = limit
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def open_stream(self, stream: Stream) -> subprocess.Popen:
        print(f"Watching {stream.channel}", file=self.stdout, flush=True)
        return self.player.launch(stream)

    def resolve_game(self, name: str) -> Game:
        """
        Look a game up by name.

        Raises:
            NotFound: If no game has that name.
        """
        try:
            games = normalize_games(self.client.fetch_game_by_name(name), legacy_key="games")
        except NoResults:
            raise NotFound(name) from None
        logger.debug("Resolved '%s' to game id %s", name, games[0].id)
        return games[0]

    def watch_streams(self, game: Game, info: bool) -> subprocess.Popen:
        """Pick one of a game's live streams and play it."""
        streams = normalize_streams(self.client.fetch_streams_for_game(game.id, self.limit))
        stream = choose(streams, info, self.stdin, self.stdout)
        return self.open_stream(stream)

    def watch_game(self, name: str, info: bool) -> subprocess.Popen:
        """Find a game by name, then pick one of its streams and play it."""
        return self.watch_streams(self.resolve_game(name), info)

    def watch_channel(self, name: str, info: bool) -> subprocess.Popen:
        """
        Play a channel directly.

        Without info no request is made. With info the channel is looked up
        and shown if it is live.
        """
        if not info:
            return self.open_stream(Stream.placeholder(name))

        stream = normalize_single_stream(self.client.fetch_channel(name), channel=name)
        print_table([stream], self.stdout)
        raise InfoOnly

    def watch_followed(self, info: bool) -> subprocess.Popen:
        """Pick one of the followed live streams and play it."""
        user_id = normalize_user_id(self.client.fetch_current_user())
        streams = normalize_streams(self.client.fetch_streams_followed(user_id, self.limit))
        stream = choose(streams, info, self.stdin, self.stdout)
        return self.open_stream(stream)

    def watch_top_games(self, info: bool) -> subprocess.Popen:
        """
        Pick one of the top games, then one of its streams.

        Info only applies to the games listing; the streams of the chosen game
        are always offered for selection.
        """
        games = normalize_games(self.client.fetch_top_games(self.limit))
        game = choose(games, info, self.stdin, self.stdout)
        return self.watch_streams(game, False)

    def run(
        self,
        game: str | None = None,
        channel: str | None = None,
        follow: bool = False,
        info: bool = False,
    ) -> subprocess.Popen:
        """Dispatch to a flow: game, then channel, then followed, then top games."""
        if game:
            return self.watch_game(game, info)
        if channel:
            return self.watch_channel(channel, info)
        if follow:
            return self.watch_followed(info)
        return self.watch_top_games(info)
