"""Exceptions raised across :mod:`twitchpick`.

Every failure derives from :class:`TwitchPickError`. Components raise and
never recover; the CLI decides how each one is reported.
"""

import json
from typing import Any


class TwitchPickError(Exception):
    """Base class for all twitchpick failures.

    Attributes:
        user_intent: True for terminations the user asked for, which are not
            reported as errors.
    """

    user_intent = False


class ConfigError(TwitchPickError):
    """Missing credentials or an invalid configuration file."""


class TransportFailure(TwitchPickError):
    """The HTTP request never produced a response."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Internet error occurred. Are you connected? Error:\n{cause}")


class Unauthorized(TwitchPickError):
    """The API rejected the credentials."""

    def __init__(self) -> None:
        super().__init__(
            "Looks like no authorization string was supplied or it doesn't have required scope"
        )


class UnknownChannel(TwitchPickError):
    """The API reported that a channel does not exist."""

    def __init__(self, channel: str) -> None:
        self.channel = channel
        super().__init__(f"The channel {channel} does not exist")


class RequestRejected(TwitchPickError):
    """The API answered with an unexpected error status."""

    def __init__(self, url: str, status: int) -> None:
        self.url = url
        self.status = status
        super().__init__(f"Request URL failed.\nURL: '{url}' Status Code: {status}")


class ResponseDecodeFailure(TwitchPickError):
    """A successful response carried a body that is not JSON."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Could not decode the response from '{url}': {cause}")


class MalformedEntity(TwitchPickError):
    """A payload element lacks a required field or has a bad value."""

    def __init__(self, fragment: Any, reason: str = "") -> None:
        self.fragment = fragment
        self.reason = reason
        pretty = json.dumps(fragment, indent=2, ensure_ascii=False, default=str)
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Error parsing the following json{detail}:\n{pretty}")


class NoResults(TwitchPickError):
    """The API returned an empty list."""

    def __init__(self, message: str = "No streams available") -> None:
        super().__init__(message)


class StreamOffline(NoResults):
    """A channel looked up by name is not live."""

    def __init__(self, channel: str) -> None:
        self.channel = channel
        super().__init__(f"{channel} is offline")


class NotFound(TwitchPickError):
    """A name search matched nothing."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No game named '{name}' was found")


class UserDeclined(TwitchPickError):
    """The user answered no to the confirmation prompt."""

    user_intent = True

    def __init__(self) -> None:
        super().__init__("")


class InfoOnly(TwitchPickError):
    """The table was printed in info-only mode; nothing is launched."""

    user_intent = True

    def __init__(self) -> None:
        super().__init__("")


class ReadFailure(TwitchPickError):
    """Standard input was closed or could not be read."""

    def __init__(self, cause: Exception | None = None) -> None:
        self.cause = cause
        message = "Reading input failed" if cause is None else f"Reading input failed\n Error: {cause}"
        super().__init__(message)


class ParseFailure(TwitchPickError):
    """A line typed at the chooser is not a valid option number."""

    def __init__(self, text: str, count: int) -> None:
        self.text = text
        self.count = count
        super().__init__(f"'{text}' is not a number between 1 and {count}")


class PlayerLaunchFailed(TwitchPickError):
    """The external player could not be started."""

    def __init__(self, command: str, cause: Exception) -> None:
        self.command = command
        self.cause = cause
        super().__init__(
            f"{command} has failed to execute. Is it properly installed and in your path?"
        )
