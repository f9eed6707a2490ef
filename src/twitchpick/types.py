"""Type definitions for twitchpick."""

from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable

# Common type aliases
URL: TypeAlias = str
Field: TypeAlias = tuple[str, str]

# Twitch constants
API_BASE_URL = "https://api.twitch.tv/helix"
WATCH_BASE_URL = "https://www.twitch.tv"
ACCEPT_HEADER = "application/vnd.twitchtv.v3+json"

# Defaults, overridable from the config file
DEFAULT_PLAYER = "streamlink"
DEFAULT_QUALITY = "best,720p60"
DEFAULT_LIMIT = 10
DEFAULT_TIMEOUT_SECONDS = 10.0
MAX_LIMIT = 100

# Viewer counts are unsigned 64-bit
MAX_VIEWERS = 2**64


@runtime_checkable
class Listable(Protocol):
    """Anything the selector can render as one row of the choice table."""

    @property
    def name(self) -> str:
        """Primary display name, used by the confirmation prompt."""
        ...

    def fields(self) -> list[Field]:
        """Ordered ``(value, label)`` pairs making up one table row."""
        ...


@dataclass(frozen=True)
class Game:
    """A game category.

    Attributes:
        id: Twitch category id, used to query its streams.
        name: Category name as shown to the user.
        viewers: Aggregate viewer count, only present in legacy payloads.
    """

    id: str
    name: str
    viewers: int | None = None

    def fields(self) -> list[Field]:
        fields = [(self.name, "Name")]
        if self.viewers is not None:
            fields.append((str(self.viewers), "Viewers"))
        return fields


@dataclass(frozen=True)
class Stream:
    """A live broadcast.

    Attributes:
        channel: Broadcaster display name.
        game: Name of the game being played (empty for placeholders).
        viewers: Current viewer count.
        status: Free-text stream title, when the payload carries one.
        login: URL-safe login name, when the payload carries one.
    """

    channel: str
    game: str = ""
    viewers: int = 0
    status: str | None = None
    login: str | None = None

    @classmethod
    def placeholder(cls, channel: str) -> "Stream":
        """Build a stream for a channel requested by name, without a lookup."""
        return cls(channel=channel)

    @property
    def name(self) -> str:
        return self.channel

    def fields(self) -> list[Field]:
        fields = [
            (self.channel, "Name"),
            (self.game, "Game"),
            (str(self.viewers), "Viewers"),
        ]
        if self.status is not None:
            fields.append((self.status, "Status"))
        return fields
