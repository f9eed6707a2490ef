"""Launch an external player on a Twitch channel."""

import logging
import subprocess

from .errors import PlayerLaunchFailed
from .types import DEFAULT_PLAYER, DEFAULT_QUALITY, URL, WATCH_BASE_URL, Stream

logger = logging.getLogger(__name__)


class StreamPlayer:
    """
    Starts the playback helper (streamlink by default) for a stream.

    The child process is detached: its output is discarded and it is never
    waited on, so twitchpick can exit while the stream keeps playing.

    Attributes:
        player_cmd: Executable to run.
        quality: Quality preference passed as the second argument.
        process: The most recently launched process.
    """

    def __init__(
        self,
        player_cmd: str = DEFAULT_PLAYER,
        quality: str = DEFAULT_QUALITY,
    ) -> None:
        """
        Initialize the stream player.

        Args:
            player_cmd: Player executable or path (default: 'streamlink').
            quality: Quality selector string (default: 'best,720p60').
        """
        self.player_cmd = player_cmd
        self.quality = quality
        self.process: subprocess.Popen | None = None

    @staticmethod
    def build_watch_url(stream: Stream) -> URL:
        """Canonical channel page URL, preferring the login name."""
        return f"{WATCH_BASE_URL}/{stream.login or stream.channel}"

    def build_command(self, url: URL) -> list[str]:
        """
        Build the command line for the player.

        Args:
            url: Channel URL to open.

        Returns:
            List of command arguments.
        """
        return [self.player_cmd, url, self.quality]

    def launch(self, stream: Stream) -> subprocess.Popen:
        """
        Start playing a stream.

        Args:
            stream: Stream to watch.

        Returns:
            The handle of the started process.

        Raises:
            PlayerLaunchFailed: If the player could not be executed.
        """
        cmd = self.build_command(self.build_watch_url(stream))
        logger.info("Launching %s", " ".join(cmd))
        try:
            self.process = subprocess.Popen(cmd, stdout=subprocess.DEVNULL)
        except OSError as e:
            raise PlayerLaunchFailed(self.player_cmd, e) from e
        logger.debug("Player started with pid %d", self.process.pid)
        return self.process
