"""Thin synchronous client for the Twitch REST API."""

import logging
from typing import Any

import requests

from .errors import (
    RequestRejected,
    ResponseDecodeFailure,
    TransportFailure,
    Unauthorized,
    UnknownChannel,
)
from .types import ACCEPT_HEADER, API_BASE_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

# HTTP status code constants
HTTP_CLIENT_ERROR = 400
HTTP_UNAUTHORIZED = 401
HTTP_NOT_FOUND = 404


def unknown_channel_name(message: str) -> str | None:
    """
    Pull the channel name out of a 404 message like "Channel foo does not exist".

    The name is the second whitespace-separated token. This depends on the
    wording of the upstream message.

    Returns:
        The channel name, or None if the message does not mention a channel.
    """
    if "Channel" not in message:
        return None
    tokens = message.split()
    if len(tokens) < 2:
        return None
    return tokens[1]


class TwitchClient:
    """
    Issues one authenticated GET per logical query.

    Attributes:
        base_url: API root that endpoints are appended to.
        timeout: Per-request timeout in seconds.
        session: The requests session carrying the auth headers.
    """

    def __init__(
        self,
        token: str,
        client_id: str,
        base_url: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: OAuth bearer token.
            client_id: Application client id.
            base_url: API root (default: Helix).
            timeout: Per-request timeout in seconds (default: 10).
            session: Session to use, mainly for tests (default: a new one).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": ACCEPT_HEADER,
                "Authorization": f"Bearer {token}",
                "Client-ID": client_id,
            }
        )

    def _raise_for_status(self, response: requests.Response) -> None:
        status = response.status_code
        if status < HTTP_CLIENT_ERROR:
            return

        url = response.url
        try:
            envelope = response.json()
        except ValueError:
            logger.debug("Undecodable error body from %s: %r", url, response.text)
            raise RequestRejected(url, status) from None

        if status == HTTP_UNAUTHORIZED:
            raise Unauthorized

        if status == HTTP_NOT_FOUND and isinstance(envelope, dict):
            message = envelope.get("message")
            if isinstance(message, str):
                channel = unknown_channel_name(message)
                if channel is not None:
                    raise UnknownChannel(channel)

        raise RequestRejected(url, status)

    def request(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET an endpoint and return its decoded JSON body.

        Args:
            endpoint: Path relative to the base URL, e.g. "games/top".
            params: Query parameters.

        Returns:
            The decoded JSON document.

        Raises:
            TransportFailure: If no response was received.
            Unauthorized: On 401.
            UnknownChannel: On a 404 naming a channel.
            RequestRejected: On any other error status.
            ResponseDecodeFailure: If a successful body is not JSON.
        """
        url = f"{self.base_url}/{endpoint}"
        logger.debug("GET %s %s", url, params or {})
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportFailure(e) from e

        logger.debug("%s answered %d", response.url, response.status_code)
        self._raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeFailure(response.url, e) from e

    def fetch_top_games(self, limit: int) -> Any:
        """Most watched game categories."""
        return self.request("games/top", {"limit": limit})

    def fetch_streams_for_game(self, game_id: str, limit: int) -> Any:
        """Live streams in one game category."""
        return self.request("streams", {"game_id": game_id, "limit": limit})

    def fetch_streams_followed(self, user_id: str, limit: int) -> Any:
        """Live streams from channels the user follows."""
        return self.request("streams/followed", {"user_id": user_id, "limit": limit})

    def fetch_current_user(self) -> Any:
        """The user owning the bearer token."""
        return self.request("users")

    def fetch_game_by_name(self, name: str) -> Any:
        """Games whose name matches exactly."""
        return self.request("games", {"name": name})

    def fetch_channel(self, name: str) -> Any:
        """The live stream of a single channel, if any."""
        return self.request("streams", {"user_login": name})
