"""Turn decoded Twitch API payloads into :mod:`twitchpick.types` entities.

Both the current Helix shape (a top-level ``data`` list) and the legacy
Kraken shape (``top``, ``streams``, ``stream``) are accepted. Entries are
located by probing candidate keys in order, so no API version flag is needed.
"""

import dataclasses
import logging
from collections.abc import Sequence
from typing import Any

from .errors import MalformedEntity, NoResults, StreamOffline
from .types import MAX_VIEWERS, Game, Stream

logger = logging.getLogger(__name__)

CURRENT_KEY = "data"


def find_entries(raw: Any, legacy_key: str) -> list[Any]:
    """
    Locate the list of entries in a payload.

    Args:
        raw: Decoded JSON document.
        legacy_key: Key holding the entries in the legacy payload shape.

    Returns:
        The (non-empty) list of entries.

    Raises:
        MalformedEntity: If neither key holds a list.
        NoResults: If the list is empty.
    """
    if not isinstance(raw, dict):
        raise MalformedEntity(raw, "expected a JSON object")

    for key in (CURRENT_KEY, legacy_key):
        entries = raw.get(key)
        if isinstance(entries, list):
            logger.debug("Found %d entries under '%s'", len(entries), key)
            if not entries:
                raise NoResults
            return entries

    raise MalformedEntity(raw, f"no '{CURRENT_KEY}' or '{legacy_key}' list")


def _required_str(entry: dict, key: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise MalformedEntity(entry, f"missing '{key}'")
    return value


def _optional_str(entry: dict, key: str) -> str | None:
    value = entry.get(key)
    return value if isinstance(value, str) else None


def parse_viewers(entry: dict, key: str) -> int:
    """
    Read a viewer count as an unsigned 64-bit integer.

    Raises:
        MalformedEntity: If the value is absent, not an integer, or out of range.
    """
    value = entry.get(key)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedEntity(entry, f"'{key}' is not an unsigned integer")
    if not 0 <= value < MAX_VIEWERS:
        raise MalformedEntity(entry, f"'{key}' is out of range")
    return value


def _game_id(source: dict, entry: dict) -> str:
    # Helix ids are strings, legacy "_id" values are numbers
    game_id = source.get("id", source.get("_id"))
    if isinstance(game_id, bool) or not isinstance(game_id, str | int):
        raise MalformedEntity(entry, "missing game id")
    return str(game_id)


def parse_game(entry: Any) -> Game:
    """Parse one element of a top-games or game-search payload."""
    if not isinstance(entry, dict):
        raise MalformedEntity(entry, "expected a JSON object")

    nested = entry.get("game")
    if isinstance(nested, dict):
        # Legacy top: {"game": {"name": ..., "_id": ...}, "viewers": ...}
        name = _required_str(nested, "name")
        viewers = parse_viewers(entry, "viewers") if "viewers" in entry else None
        return Game(id=_game_id(nested, entry), name=name, viewers=viewers)

    # Helix {"id", "name"} or legacy search {"_id", "name"}
    return Game(id=_game_id(entry, entry), name=_required_str(entry, "name"))


def parse_stream(entry: Any) -> Stream:
    """Parse one element of a streams or followed-streams payload."""
    if not isinstance(entry, dict):
        raise MalformedEntity(entry, "expected a JSON object")

    channel = entry.get("channel")
    if isinstance(channel, dict):
        # Legacy: {"channel": {"name", "display_name", "status"}, "game", "viewers"}
        login = _optional_str(channel, "name")
        display_name = _optional_str(channel, "display_name") or login
        if display_name is None:
            raise MalformedEntity(entry, "missing channel name")
        return Stream(
            channel=display_name,
            game=_required_str(entry, "game"),
            viewers=parse_viewers(entry, "viewers"),
            status=_optional_str(channel, "status"),
            login=login,
        )

    return Stream(
        channel=_required_str(entry, "user_name"),
        game=_required_str(entry, "game_name"),
        viewers=parse_viewers(entry, "viewer_count"),
        status=_optional_str(entry, "title"),
        login=_optional_str(entry, "user_login"),
    )


def _uniform_games(games: list[Game]) -> list[Game]:
    if any(game.viewers is None for game in games):
        return [dataclasses.replace(game, viewers=None) for game in games]
    return games


def _uniform_streams(streams: list[Stream]) -> list[Stream]:
    if any(stream.status is None for stream in streams):
        return [dataclasses.replace(stream, status=None) for stream in streams]
    return streams


def normalize_games(raw: Any, legacy_key: str = "top") -> Sequence[Game]:
    """
    Convert a top-games or game-search payload into games.

    Args:
        raw: Decoded JSON document.
        legacy_key: Key holding the list in the legacy shape ("top" for the
            top-games listing, "games" for name searches).

    Returns:
        One Game per element, in payload order. The optional viewers column
        is kept only when every element carries it.

    Raises:
        MalformedEntity: If the payload or any element is malformed.
        NoResults: If the list is empty.
    """
    games = [parse_game(entry) for entry in find_entries(raw, legacy_key)]
    return _uniform_games(games)


def normalize_streams(raw: Any, legacy_key: str = "streams") -> Sequence[Stream]:
    """
    Convert a streams or followed-streams payload into streams.

    The optional status column is kept only when every element carries it.

    Raises:
        MalformedEntity: If the payload or any element is malformed.
        NoResults: If the list is empty.
    """
    streams = [parse_stream(entry) for entry in find_entries(raw, legacy_key)]
    return _uniform_streams(streams)


def normalize_single_stream(raw: Any, channel: str = "") -> Stream:
    """
    Convert a single-channel lookup into a stream.

    Args:
        raw: Decoded JSON document.
        channel: The name that was looked up, used in the offline message.

    Raises:
        StreamOffline: If the channel is not live.
        MalformedEntity: If the payload is malformed.
    """
    if isinstance(raw, dict) and "stream" in raw and CURRENT_KEY not in raw:
        # Legacy: {"stream": {...}} or {"stream": null} when offline
        if raw["stream"] is None:
            raise StreamOffline(channel)
        return parse_stream(raw["stream"])

    try:
        entries = find_entries(raw, "streams")
    except NoResults:
        raise StreamOffline(channel) from None
    return parse_stream(entries[0])


def normalize_user_id(raw: Any) -> str:
    """
    Extract the id of the authenticated user from a users payload.

    Raises:
        MalformedEntity: If the payload has no usable user entry.
    """
    try:
        entries = find_entries(raw, "users")
    except NoResults:
        raise MalformedEntity(raw, "no user for these credentials") from None

    entry = entries[0]
    if not isinstance(entry, dict):
        raise MalformedEntity(entry, "expected a JSON object")
    user_id = entry.get("id", entry.get("_id"))
    if isinstance(user_id, bool) or not isinstance(user_id, str | int):
        raise MalformedEntity(entry, "missing 'id'")
    return str(user_id)
