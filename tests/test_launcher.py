"""Tests for the watch flows."""

import io
from unittest.mock import Mock

import pytest

from twitchpick.api import TwitchClient
from twitchpick.errors import (
    InfoOnly,
    MalformedEntity,
    NoResults,
    NotFound,
    StreamOffline,
    UserDeclined,
)
from twitchpick.launcher import Launcher
from twitchpick.player import StreamPlayer
from twitchpick.types import Game, Stream

STREAMS = {
    "data": [
        {"user_name": "Alice", "user_login": "alice", "game_name": "Chess", "viewer_count": 40},
        {"user_name": "Bob", "user_login": "bob", "game_name": "Chess", "viewer_count": 12},
    ]
}


def make_launcher(answers: str = "") -> tuple[Launcher, Mock, Mock, io.StringIO]:
    client = Mock(spec=TwitchClient)
    player = Mock(spec=StreamPlayer)
    stdout = io.StringIO()
    launcher = Launcher(client, player, limit=10, stdin=io.StringIO(answers), stdout=stdout)
    return launcher, client, player, stdout


class TestWatchGame:
    """Test the game flow."""

    def test_resolves_and_launches(self):
        """The game is resolved by name and the chosen stream launched."""
        launcher, client, player, stdout = make_launcher("2\n")
        client.fetch_game_by_name.return_value = {"data": [{"id": "743", "name": "Chess"}]}
        client.fetch_streams_for_game.return_value = STREAMS

        result = launcher.watch_game("Chess", False)

        client.fetch_game_by_name.assert_called_once_with("Chess")
        client.fetch_streams_for_game.assert_called_once_with("743", 10)
        launched = player.launch.call_args.args[0]
        assert launched.channel == "Bob"
        assert result is player.launch.return_value
        assert "Watching Bob" in stdout.getvalue()

    def test_unknown_game(self):
        """An empty name search is NotFound."""
        launcher, client, player, _ = make_launcher()
        client.fetch_game_by_name.return_value = {"data": []}

        with pytest.raises(NotFound, match="Chess"):
            launcher.watch_game("Chess", False)

        client.fetch_streams_for_game.assert_not_called()
        player.launch.assert_not_called()

    def test_no_streams(self):
        """A game with no live streams is NoResults."""
        launcher, client, _, _ = make_launcher()
        client.fetch_game_by_name.return_value = {"data": [{"id": "1", "name": "Pong"}]}
        client.fetch_streams_for_game.return_value = {"data": []}

        with pytest.raises(NoResults):
            launcher.watch_game("Pong", False)

    def test_info(self):
        """Info lists the streams without launching."""
        launcher, client, player, stdout = make_launcher()
        client.fetch_game_by_name.return_value = {"data": [{"id": "743", "name": "Chess"}]}
        client.fetch_streams_for_game.return_value = STREAMS

        with pytest.raises(InfoOnly):
            launcher.watch_game("Chess", True)

        player.launch.assert_not_called()
        assert "Alice" in stdout.getvalue()


class TestWatchChannel:
    """Test the channel flow."""

    def test_launches_without_lookup(self):
        """A named channel is launched directly."""
        launcher, client, player, _ = make_launcher()

        launcher.watch_channel("alice", False)

        player.launch.assert_called_once_with(Stream(channel="alice", game="", viewers=0))
        client.fetch_channel.assert_not_called()

    def test_info_live(self):
        """Info looks the channel up and shows it."""
        launcher, client, player, stdout = make_launcher()
        client.fetch_channel.return_value = {"data": STREAMS["data"][:1]}

        with pytest.raises(InfoOnly):
            launcher.watch_channel("alice", True)

        client.fetch_channel.assert_called_once_with("alice")
        player.launch.assert_not_called()
        assert "Alice" in stdout.getvalue()

    def test_info_offline(self):
        """Info on an offline channel says so."""
        launcher, client, _, _ = make_launcher()
        client.fetch_channel.return_value = {"data": []}

        with pytest.raises(StreamOffline):
            launcher.watch_channel("alice", True)


class TestWatchFollowed:
    """Test the followed flow."""

    def test_launches(self):
        """The current user's followed streams are offered."""
        launcher, client, player, _ = make_launcher("1\n")
        client.fetch_current_user.return_value = {"data": [{"id": "99", "login": "me"}]}
        client.fetch_streams_followed.return_value = STREAMS

        launcher.watch_followed(False)

        client.fetch_streams_followed.assert_called_once_with("99", 10)
        assert player.launch.call_args.args[0].login == "alice"

    def test_single_stream_declined(self):
        """Declining the only followed stream launches nothing."""
        launcher, client, player, _ = make_launcher("N\n")
        client.fetch_current_user.return_value = {"data": [{"id": "99"}]}
        client.fetch_streams_followed.return_value = {"data": STREAMS["data"][:1]}

        with pytest.raises(UserDeclined):
            launcher.watch_followed(False)

        player.launch.assert_not_called()

    def test_malformed_stream(self):
        """A followed stream without a name is malformed."""
        launcher, client, _, _ = make_launcher("1\n")
        client.fetch_current_user.return_value = {"data": [{"id": "99"}]}
        client.fetch_streams_followed.return_value = {
            "data": [{"game_name": "Chess", "viewer_count": 1}]
        }

        with pytest.raises(MalformedEntity):
            launcher.watch_followed(False)


class TestWatchTopGames:
    """Test the top games flow."""

    def test_info_lists_games_only(self):
        """Info prints the games and never asks for streams."""
        launcher, client, player, stdout = make_launcher()
        client.fetch_top_games.return_value = {"data": [{"id": "1", "name": "Chess"}]}

        with pytest.raises(InfoOnly):
            launcher.watch_top_games(True)

        lines = stdout.getvalue().splitlines()
        assert lines == ["   Name", "1) Chess"]
        client.fetch_streams_for_game.assert_not_called()
        player.launch.assert_not_called()

    def test_drills_into_game(self):
        """The chosen game's streams are offered next."""
        launcher, client, player, _ = make_launcher("2\n1\n")
        client.fetch_top_games.return_value = {
            "data": [{"id": "1", "name": "Chess"}, {"id": "2", "name": "Go"}]
        }
        client.fetch_streams_for_game.return_value = STREAMS

        launcher.watch_top_games(False)

        client.fetch_top_games.assert_called_once_with(10)
        client.fetch_streams_for_game.assert_called_once_with("2", 10)
        client.fetch_game_by_name.assert_not_called()
        assert player.launch.call_args.args[0].channel == "Alice"

    def test_legacy_payloads(self):
        """Legacy top and streams payloads work end to end."""
        launcher, client, player, stdout = make_launcher("y\ny\n")
        client.fetch_top_games.return_value = {
            "top": [{"game": {"name": "Chess", "_id": 743}, "viewers": 900}]
        }
        client.fetch_streams_for_game.return_value = {
            "streams": [{"game": "Chess", "viewers": 900, "channel": {"name": "alice"}}]
        }

        launcher.watch_top_games(False)

        client.fetch_streams_for_game.assert_called_once_with("743", 10)
        assert player.launch.call_args.args[0].channel == "alice"
        assert "Watch Chess? [y/N]" in stdout.getvalue()


class TestRun:
    """Test flow precedence."""

    @pytest.mark.parametrize(
        ("kwargs", "flow"),
        [
            ({"game": "Chess", "channel": "alice", "follow": True}, "watch_game"),
            ({"channel": "alice", "follow": True}, "watch_channel"),
            ({"follow": True}, "watch_followed"),
            ({}, "watch_top_games"),
        ],
    )
    def test_precedence(self, kwargs, flow, monkeypatch):
        launcher, _, _, _ = make_launcher()
        calls = []
        for name in ("watch_game", "watch_channel", "watch_followed", "watch_top_games"):
            monkeypatch.setattr(launcher, name, lambda *args, name=name: calls.append(name))

        launcher.run(info=False, **kwargs)

        assert calls == [flow]


def test_resolve_game_returns_first_match() -> None:
    """The first search result wins."""
    launcher, client, _, _ = make_launcher()
    client.fetch_game_by_name.return_value = {
        "data": [{"id": "1", "name": "Chess"}, {"id": "2", "name": "Chess"}]
    }

    assert launcher.resolve_game("Chess") == Game(id="1", name="Chess")
